"""Command line entry point for TradeLens.

Subcommand modules pull in pandas and the analytics package, so they are
registered by import path and imported on first use.
"""

import importlib
import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler


class LazyGroup(click.Group):
    """Click group whose subcommands are ``"module:attribute"`` references.

    ``--help`` lists every registered name without importing anything; a
    command's module is imported only when that command is resolved.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = dict(lazy_subcommands or {})

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted({*super().list_commands(ctx), *self._lazy_subcommands})

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        command = super().get_command(ctx, cmd_name)
        if command is None and cmd_name in self._lazy_subcommands:
            command = self._resolve(cmd_name)
            self.add_command(command, cmd_name)
        return command

    def _resolve(self, cmd_name: str) -> click.Command:
        module_path, _, attr_name = self._lazy_subcommands[cmd_name].partition(":")
        command = getattr(importlib.import_module(module_path), attr_name or cmd_name, None)
        if not isinstance(command, click.Command):
            raise click.ClickException(
                f"{self._lazy_subcommands[cmd_name]} does not name a click command"
            )
        return command


LAZY_SUBCOMMANDS = {
    "insights": "tradelens.cli.insights:insights",
    "report": "tradelens.cli.report:report",
    "risk": "tradelens.cli.report:risk",
    "psychology": "tradelens.cli.habits:psychology",
    "compliance": "tradelens.cli.habits:compliance",
    "config": "tradelens.cli.settings:config",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def setup_logging(verbose: bool) -> None:
    """Route log records through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[
            RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_time=False, show_path=False)
        ],
    )


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="tradelens")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ~/.config/tradelens/config.toml).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool) -> None:
    """TradeLens - performance analytics for your trading journal.

    Reads closed trades from a JSON or CSV journal and turns them into
    metrics, risk guidance and prioritized coaching insights.

    \b
    Quick Start:
      tradelens config --init               # Create a config file
      tradelens insights --trades t.json    # Ranked insights
      tradelens report --trades t.json      # Full performance report
    """
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
