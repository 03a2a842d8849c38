"""Insight command for TradeLens CLI."""

from pathlib import Path
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradelens.cli.common import console, get_settings, journal_options, load_journal

SEVERITY_STYLES = {
    "critical": "bold red",
    "warning": "yellow",
    "positive": "green",
    "neutral": "dim",
}


@click.command()
@journal_options
@click.option(
    "--days",
    type=click.IntRange(min=1),
    default=None,
    help="Only consider trades from the last N days (default: analytics.recent_days).",
)
@click.pass_context
def insights(
    ctx: click.Context,
    trades_path: Optional[Path],
    strategies_path: Optional[Path],
    skip_invalid: bool,
    days: Optional[int],
) -> None:
    """Show prioritized coaching insights from recent trades.

    Runs every detector over the recent part of the journal and lists
    what it found, most urgent first.

    \b
    Examples:
      tradelens insights --trades trades.json
      tradelens insights --trades trades.csv --days 14
      tradelens insights --trades trades.json --strategies playbook.json
    """
    from tradelens.analytics.insights import generate_insights

    settings = get_settings(ctx)
    trades, strategies = load_journal(settings, trades_path, strategies_path, skip_invalid)
    window = days or settings.analytics.recent_days

    results = generate_insights(trades, strategies, recent_days=window)

    if not results:
        console.print(Panel(
            f"[dim]No insights yet for the last {window} days.[/dim]\n\n"
            "Insights appear once enough trades are logged for each pattern.",
            title="[bold]Insights[/bold]",
            border_style="dim",
        ))
        return

    table = Table(
        title=f"Insights (last {window} days)",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Severity")
    table.add_column("Category")
    table.add_column("Insight", ratio=1)
    table.add_column("Conf.", justify="right")

    for insight in results:
        style = SEVERITY_STYLES[insight.severity]
        table.add_row(
            f"[{style}]{insight.severity.upper()}[/{style}]",
            insight.category,
            f"[bold]{insight.title}[/bold]\n{insight.message}",
            f"{insight.confidence}%",
        )

    console.print(table)
