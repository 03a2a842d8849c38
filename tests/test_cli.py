"""Tests for the TradeLens command line.

**Feature: trade-insights**
"""

import json
from datetime import datetime, timedelta

import pytest
from click.testing import CliRunner

from tradelens.cli.main import LAZY_SUBCOMMANDS, LazyGroup, cli


def _journal(pnls: list[float]) -> list[dict]:
    start = datetime.now() - timedelta(days=5)
    return [
        {
            "id": str(i),
            "date": (start + timedelta(hours=i)).isoformat(),
            "instrument": "ES",
            "direction": "long",
            "entry_price": 100.0,
            "exit_price": 100.0 + pnl / 10,
            "stop_loss": 95.0,
            "pnl": pnl,
            "setup_name": "Breakout",
            "executed_rules": ["r1"] if pnl > 0 else [],
            "playbook_strategy_id": "orb",
        }
        for i, pnl in enumerate(pnls)
    ]


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def journal(tmp_path):
    path = tmp_path / "trades.json"
    path.write_text(json.dumps(_journal([50, -20, 30, -10, -40, -30, -20])))
    return path


@pytest.fixture
def playbook(tmp_path):
    path = tmp_path / "playbook.json"
    path.write_text(json.dumps([
        {
            "id": "orb",
            "name": "Opening Range",
            "win_rate": 55,
            "trades_count": 7,
            "rules": [{"id": "r1", "text": "Wait for range"}, {"id": "r2", "text": "Volume confirms"}],
        }
    ]))
    return path


@pytest.fixture
def config_file(tmp_path):
    return tmp_path / "config.toml"


def _invoke(runner, config_file, *args):
    return runner.invoke(cli, ["--config", str(config_file), *args])


class TestCommandRegistry:
    """Every lazy subcommand resolves to a click command."""

    @pytest.mark.parametrize("name", sorted(LAZY_SUBCOMMANDS))
    def test_help(self, runner, name):
        result = runner.invoke(cli, [name, "--help"])
        assert result.exit_code == 0, result.output

    def test_unknown_command(self, runner):
        result = runner.invoke(cli, ["nope"])
        assert result.exit_code != 0

    def test_reference_without_command(self, runner):
        group = LazyGroup(name="broken", lazy_subcommands={"ghost": "tradelens.cli.report:ghost"})
        result = runner.invoke(group, ["ghost"])

        assert result.exit_code == 1
        assert "does not name a click command" in result.output


class TestInsightsCommand:
    """Insights from a journal file."""

    def test_losing_streak(self, runner, config_file, journal):
        result = _invoke(runner, config_file, "insights", "--trades", str(journal))

        assert result.exit_code == 0, result.output
        assert "Losing Streak" in result.output

    def test_no_insights(self, runner, config_file, tmp_path):
        path = tmp_path / "trades.json"
        path.write_text(json.dumps(_journal([10, 20])))
        result = _invoke(runner, config_file, "insights", "--trades", str(path))

        assert result.exit_code == 0
        assert "No insights yet" in result.output

    def test_missing_trades_option(self, runner, config_file):
        result = _invoke(runner, config_file, "insights")

        assert result.exit_code == 1
        assert "No trade journal given" in result.output

    def test_missing_file(self, runner, config_file, tmp_path):
        result = _invoke(runner, config_file, "insights", "--trades", str(tmp_path / "nope.json"))

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_trades_file_from_config(self, runner, config_file, journal):
        config_file.write_text(f'[data]\ntrades_file = "{journal.as_posix()}"\n')
        result = _invoke(runner, config_file, "insights")

        assert result.exit_code == 0, result.output
        assert "Losing Streak" in result.output


class TestReportCommands:
    """Report, risk, psychology and compliance output."""

    def test_report(self, runner, config_file, journal):
        result = _invoke(runner, config_file, "report", "--trades", str(journal))

        assert result.exit_code == 0, result.output
        assert "Trading Report" in result.output
        assert "Currently in drawdown" in result.output
        assert "Setup Edge" in result.output
        assert "Top Winning Patterns" in result.output

    def test_report_json(self, runner, config_file, journal):
        result = _invoke(runner, config_file, "report", "--trades", str(journal), "--json")

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["performance"]["total_trades"] == 7
        assert data["risk_metrics"]["stop_loss_usage"] == 100
        assert data["setup_analysis"]["personal_edge"]["name"] == "Breakout"
        assert data["pattern_recognition"]["top_winning"][0]["trades"] >= 2

    def test_risk(self, runner, config_file, journal):
        result = _invoke(runner, config_file, "risk", "--trades", str(journal))

        assert result.exit_code == 0, result.output
        assert "Risk Score" in result.output
        assert "Position Sizing" in result.output

    def test_psychology(self, runner, config_file, journal):
        result = _invoke(runner, config_file, "psychology", "--trades", str(journal))

        assert result.exit_code == 0, result.output
        assert "Start tagging" in result.output or "Only 0 trades" in result.output

    def test_compliance(self, runner, config_file, journal, playbook):
        result = _invoke(
            runner, config_file, "compliance", "--trades", str(journal), "--strategies", str(playbook)
        )

        assert result.exit_code == 0, result.output
        assert "Rule Compliance" in result.output
        assert "Volume confirms" in result.output

    def test_compliance_needs_strategies(self, runner, config_file, journal):
        result = _invoke(runner, config_file, "compliance", "--trades", str(journal))

        assert result.exit_code == 1
        assert "No playbook strategies" in result.output


class TestConfigCommand:
    """Showing and creating the config file."""

    def test_init(self, runner, config_file):
        result = _invoke(runner, config_file, "config", "--init")

        assert result.exit_code == 0, result.output
        assert config_file.exists()

    def test_init_does_not_overwrite(self, runner, config_file):
        config_file.write_text("[display]\ncurrency = \"€\"\n")
        result = _invoke(runner, config_file, "config", "--init")

        assert result.exit_code == 0
        assert "already exists" in result.output
        assert "€" in config_file.read_text()

    def test_show(self, runner, config_file):
        result = _invoke(runner, config_file, "config")

        assert result.exit_code == 0, result.output
        assert "recent_days" in result.output
