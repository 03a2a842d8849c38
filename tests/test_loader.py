"""Tests for journal loading and trade validation.

**Feature: trade-insights**
"""

import json
import logging
from datetime import datetime, time, timezone

import pytest
from pydantic import ValidationError

from tradelens.loader import TradeLoadError, load_strategies, load_trades
from tradelens.models import Trade


def _record(**overrides) -> dict:
    record = {
        "id": "t1",
        "date": "2024-06-03T10:30:00",
        "instrument": "ES",
        "direction": "long",
        "entry_price": 5300.0,
        "exit_price": 5310.0,
        "stop_loss": 5295.0,
        "outcome": "win",
        "pnl": 500.0,
    }
    record.update(overrides)
    return record


class TestTradeModel:
    """Boundary validation of a single trade."""

    def test_valid(self):
        trade = Trade.model_validate(_record())
        assert trade.date == datetime(2024, 6, 3, 10, 30)
        assert trade.has_stop_loss
        assert trade.outcome_matches_pnl

    def test_unparseable_date_becomes_none(self):
        assert Trade.model_validate(_record(date="next tuesday")).date is None

    def test_aware_date_is_made_naive(self):
        trade = Trade.model_validate(_record(date=datetime(2024, 6, 3, 14, 30, tzinfo=timezone.utc)))
        assert trade.date.tzinfo is None

    def test_zulu_suffix(self):
        assert Trade.model_validate(_record(date="2024-06-03T14:30:00Z")).date is not None

    def test_outcome_derived_from_pnl(self):
        record = _record(pnl=-25.0)
        del record["outcome"]
        assert Trade.model_validate(record).outcome == "loss"

    def test_case_insensitive_enums(self):
        trade = Trade.model_validate(_record(direction="Short", outcome="WIN"))
        assert trade.direction == "short"
        assert trade.outcome == "win"

    def test_aliases(self):
        record = _record(symbol="NQ", playbook_strategy_id="orb", trade_session="London")
        del record["instrument"]
        trade = Trade.model_validate(record)

        assert trade.instrument == "NQ"
        assert trade.strategy_id == "orb"
        assert trade.session == "London"

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("09:30", time(9, 30)),
            ("9:30", time(9, 30)),
            ("2024-06-03T14:05:00", time(14, 5)),
            ("after lunch", None),
            ("", None),
        ],
    )
    def test_entry_time(self, value, expected):
        assert Trade.model_validate(_record(entry_time=value)).entry_time == expected

    def test_entry_time_alias(self):
        trade = Trade.model_validate(_record(trade_start_time="15:45"))
        assert trade.entry_time == time(15, 45)

    def test_mismatch_tolerated(self):
        trade = Trade.model_validate(_record(outcome="win", pnl=-10))
        assert not trade.outcome_matches_pnl

    def test_numeric_id(self):
        assert Trade.model_validate(_record(id=42)).id == "42"

    @pytest.mark.parametrize(
        "field,value",
        [
            ("direction", "sideways"),
            ("entry_price", -1),
            ("pnl", float("nan")),
            ("pnl", float("inf")),
        ],
    )
    def test_invalid(self, field, value):
        with pytest.raises(ValidationError):
            Trade.model_validate(_record(**{field: value}))

    def test_frozen(self):
        trade = Trade.model_validate(_record())
        with pytest.raises(ValidationError):
            trade.pnl = 0


class TestLoadTrades:
    """JSON and CSV journals."""

    def test_json_list(self, tmp_path):
        path = tmp_path / "trades.json"
        path.write_text(json.dumps([_record(), _record(id="t2", pnl=-5, outcome="loss")]))

        trades = load_trades(path)
        assert [t.id for t in trades] == ["t1", "t2"]

    def test_json_wrapped(self, tmp_path):
        path = tmp_path / "trades.json"
        path.write_text(json.dumps({"trades": [_record()]}))
        assert len(load_trades(path)) == 1

    def test_csv(self, tmp_path):
        path = tmp_path / "trades.csv"
        path.write_text(
            "id,date,instrument,direction,entry_price,exit_price,stop_loss,pnl,bad_habits\n"
            "1,2024-06-03T10:30:00,ES,long,5300,5310,5295,500,bad_fomo;bad_tired\n"
            "2,2024-06-04T11:00:00,NQ,short,18000,18020,,-400,\n"
        )
        trades = load_trades(path)

        assert [t.id for t in trades] == ["1", "2"]
        assert trades[0].bad_habits == frozenset({"bad_fomo", "bad_tired"})
        assert trades[0].outcome == "win"
        assert trades[1].stop_loss is None
        assert trades[1].bad_habits == frozenset()
        assert trades[1].outcome == "loss"

    def test_csv_numeric_text_columns(self, tmp_path):
        path = tmp_path / "trades.csv"
        path.write_text(
            "id,date,instrument,direction,entry_price,exit_price,pnl,setup_name,session\n"
            "0700,2024-06-03T10:30:00,7203,long,2500,2510,10,2,1\n"
        )
        trade = load_trades(path)[0]

        assert trade.id == "0700"
        assert trade.instrument == "7203"
        assert trade.setup_name == "2"
        assert trade.session == "1"
        assert trade.pnl == 10
        assert trade.entry_price == 2500

    def test_invalid_row_names_row(self, tmp_path):
        path = tmp_path / "trades.json"
        path.write_text(json.dumps([_record(), _record(direction="sideways")]))

        with pytest.raises(TradeLoadError, match="Row 2") as excinfo:
            load_trades(path)
        assert excinfo.value.row == 2

    def test_skip_invalid(self, tmp_path, caplog):
        path = tmp_path / "trades.json"
        path.write_text(json.dumps([_record(), _record(direction="sideways"), "junk"]))

        with caplog.at_level(logging.WARNING, logger="tradelens.loader"):
            trades = load_trades(path, skip_invalid=True)

        assert len(trades) == 1
        assert "Skipping row 2" in caplog.text

    def test_mismatch_warning(self, tmp_path, caplog):
        path = tmp_path / "trades.json"
        path.write_text(json.dumps([_record(outcome="loss", pnl=25)]))

        with caplog.at_level(logging.WARNING, logger="tradelens.loader"):
            load_trades(path)

        assert "1 trades have an outcome" in caplog.text

    def test_missing_file(self, tmp_path):
        with pytest.raises(TradeLoadError, match="File not found"):
            load_trades(tmp_path / "nope.json")

    def test_bad_json(self, tmp_path):
        path = tmp_path / "trades.json"
        path.write_text("{not json")
        with pytest.raises(TradeLoadError, match="not valid JSON"):
            load_trades(path)

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "trades.xlsx"
        path.write_text("")
        with pytest.raises(TradeLoadError, match="Unsupported file type"):
            load_trades(path)


class TestLoadStrategies:
    """Playbook strategies from JSON."""

    def test_load(self, tmp_path):
        path = tmp_path / "playbook.json"
        path.write_text(json.dumps({
            "strategies": [
                {
                    "id": "orb",
                    "name": "Opening Range",
                    "win_rate": 62.5,
                    "trades_count": 16,
                    "rules": [{"id": "r1", "text": "Wait for the range to form"}],
                }
            ]
        }))
        strategies = load_strategies(path)

        assert strategies[0].name == "Opening Range"
        assert strategies[0].rules[0].phase == "entry"

    def test_invalid(self, tmp_path):
        path = tmp_path / "playbook.json"
        path.write_text(json.dumps([{"name": "Bad", "win_rate": 140}]))
        with pytest.raises(TradeLoadError, match="Row 1"):
            load_strategies(path)

    def test_requires_json(self, tmp_path):
        with pytest.raises(TradeLoadError, match=".json"):
            load_strategies(tmp_path / "playbook.csv")
