"""Psychology and rule compliance commands for TradeLens CLI.

Both commands relate what the trader did (habits, playbook rules)
to how the trades turned out.
"""

from pathlib import Path
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradelens.cli.common import console, error_exit, get_settings, journal_options, load_journal, money


@click.command()
@journal_options
@click.pass_context
def psychology(
    ctx: click.Context,
    trades_path: Optional[Path],
    strategies_path: Optional[Path],
    skip_invalid: bool,
) -> None:
    """Correlate habit and emotion tags with trade outcomes.

    \b
    Examples:
      tradelens psychology --trades trades.json
    """
    from tradelens.analytics.psychology import correlate_psychology

    settings = get_settings(ctx)
    currency = settings.display.currency
    trades, _ = load_journal(settings, trades_path, strategies_path, skip_invalid)

    correlation = correlate_psychology(trades)

    if correlation.factors:
        table = Table(
            title="Psychology Factors",
            show_header=True,
            header_style="bold cyan",
        )
        table.add_column("Factor", style="bold")
        table.add_column("Type", justify="center")
        table.add_column("Trades", justify="right")
        table.add_column("Win Rate", justify="right")
        table.add_column("Avg P&L", justify="right")
        table.add_column("Total P&L", justify="right")

        for factor in correlation.factors:
            type_color = "green" if factor.type == "good" else "red"
            table.add_row(
                factor.label,
                f"[{type_color}]{factor.type}[/{type_color}]",
                str(factor.trades),
                f"{factor.win_rate:.1f}%",
                money(factor.avg_pnl, currency),
                money(factor.total_pnl, currency),
            )

        console.print(table)

    summary_text = (
        f"Tagged trades:   {correlation.trades_with_factors} "
        f"({correlation.with_factors_win_rate:.1f}% win rate)\n"
        f"Untagged trades: {correlation.trades_without_factors} "
        f"({correlation.without_factors_win_rate:.1f}% win rate)\n\n"
        f"{correlation.recommendation}"
    )

    console.print(Panel(
        summary_text,
        title="[bold cyan]Mindset vs Performance[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@journal_options
@click.pass_context
def compliance(
    ctx: click.Context,
    trades_path: Optional[Path],
    strategies_path: Optional[Path],
    skip_invalid: bool,
) -> None:
    """Measure how following playbook rules relates to results.

    Requires a strategies file whose rules are referenced by the trades'
    executed_rules.

    \b
    Examples:
      tradelens compliance --trades trades.json --strategies playbook.json
    """
    from tradelens.analytics.compliance import HIGH_COMPLIANCE_SCORE, analyze_rule_compliance

    settings = get_settings(ctx)
    currency = settings.display.currency
    trades, strategies = load_journal(settings, trades_path, strategies_path, skip_invalid)

    if not strategies:
        error_exit(
            "[red]No playbook strategies loaded.[/red]\n\n"
            "Pass [cyan]--strategies FILE[/cyan] or set [cyan]data.strategies_file[/cyan] in the config."
        )

    analysis = analyze_rule_compliance(trades, strategies)

    if not analysis.trade_scores:
        console.print(Panel(
            f"[dim]{analysis.recommendation}[/dim]",
            title="[bold]Rule Compliance[/bold]",
            border_style="dim",
        ))
        return

    threshold = f"{HIGH_COMPLIANCE_SCORE:.0%}"
    high = analysis.high_compliance
    low = analysis.low_compliance

    compliance_text = (
        f"[bold]Overall Compliance:[/bold] {analysis.overall_score:.0%} "
        f"across {len(analysis.trade_scores)} trades\n\n"
        f"Following {threshold}+ of rules: {high.trades} trades, "
        f"{high.win_rate:.1f}% win rate, avg {money(high.avg_pnl, currency)}\n"
        f"Following less:          {low.trades} trades, "
        f"{low.win_rate:.1f}% win rate, avg {money(low.avg_pnl, currency)}\n\n"
        f"{analysis.recommendation}"
    )

    console.print(Panel(
        compliance_text,
        title="[bold cyan]Rule Compliance[/bold cyan]",
        border_style="cyan",
    ))

    if analysis.most_missed_rules:
        table = Table(
            title="Most Missed Rules",
            show_header=True,
            header_style="bold",
        )
        table.add_column("Rule", max_width=50)
        table.add_column("Missed", justify="right")
        table.add_column("Miss Rate", justify="right")

        for rule in analysis.most_missed_rules:
            table.add_row(
                rule.text,
                f"{rule.miss_count}/{rule.total_trades}",
                f"{rule.miss_ratio:.0%}",
            )

        console.print(table)
