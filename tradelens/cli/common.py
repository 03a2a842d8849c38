"""Shared helpers for TradeLens commands."""

from pathlib import Path
from typing import Callable, NoReturn, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from tradelens.config import Settings, load_settings
from tradelens.loader import TradeLoadError, load_strategies, load_trades
from tradelens.models import PlaybookStrategy, Trade

console = Console()


def error_exit(message: str) -> NoReturn:
    """Print a red error panel and exit with status 1."""
    console.print(Panel(
        message,
        title="[bold red]Error[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


def get_settings(ctx: click.Context) -> Settings:
    """Settings for this invocation, loaded once per context."""
    obj = ctx.ensure_object(dict)
    if "settings" not in obj:
        obj["settings"] = load_settings(obj.get("config_path"))
    return obj["settings"]


def journal_options(func: Callable) -> Callable:
    """Add the --trades/--strategies/--skip-invalid options to a command."""
    func = click.option(
        "--skip-invalid",
        is_flag=True,
        default=False,
        help="Skip invalid journal rows instead of failing.",
    )(func)
    func = click.option(
        "--strategies",
        "strategies_path",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Playbook strategies JSON file.",
    )(func)
    func = click.option(
        "--trades",
        "trades_path",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Trade journal (JSON or CSV). Defaults to data.trades_file from the config.",
    )(func)
    return func


def load_journal(
    settings: Settings,
    trades_path: Optional[Path],
    strategies_path: Optional[Path],
    skip_invalid: bool = False,
) -> tuple[list[Trade], list[PlaybookStrategy]]:
    """Load trades and strategies, exiting with an error panel on failure."""
    trades_file = trades_path or settings.data.trades_file
    strategies_file = strategies_path or settings.data.strategies_file

    if trades_file is None:
        error_exit(
            "[red]No trade journal given.[/red]\n\n"
            "Pass [cyan]--trades FILE[/cyan] or set [cyan]data.trades_file[/cyan] "
            "in the config ([cyan]tradelens config --init[/cyan])."
        )

    try:
        trades = load_trades(trades_file, skip_invalid=skip_invalid)
        strategies = load_strategies(strategies_file) if strategies_file else []
    except TradeLoadError as e:
        error_exit(f"[red]Failed to load journal:[/red]\n\n{escape(str(e))}")

    return trades, strategies


def money(value: float, currency: str = "$") -> str:
    """Signed, colored currency markup."""
    color = "green" if value >= 0 else "red"
    sign = "+" if value >= 0 else "-"
    return f"[{color}]{sign}{currency}{abs(value):,.2f}[/{color}]"
