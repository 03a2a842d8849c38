"""Performance report and risk commands for TradeLens CLI."""

import json
from pathlib import Path
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradelens.cli.common import console, get_settings, journal_options, load_journal, money
from tradelens.models import HeatmapCell, SegmentStats, SetupAnalysis

RECOMMENDATION_MARKERS = {
    "strength": "[green]+[/green]",
    "warning": "[yellow]![/yellow]",
    "tip": "[cyan]>[/cyan]",
}


def _segment_table(title: str, segments: list[SegmentStats], currency: str) -> Table:
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Name", style="bold")
    table.add_column("Trades", justify="right")
    table.add_column("Win Rate", justify="right")
    table.add_column("Avg P&L", justify="right")
    table.add_column("Total P&L", justify="right")

    for segment in segments:
        table.add_row(
            segment.name,
            str(segment.trades),
            f"{segment.win_rate:.1f}%",
            money(segment.avg_pnl, currency),
            money(segment.total_pnl, currency),
        )
    return table


def _setup_table(analysis: SetupAnalysis, currency: str) -> Table:
    edge = analysis.personal_edge
    table = Table(
        title=f"Setup Edge (personal edge: {edge.name})" if edge else "Setup Edge",
        show_header=True,
        header_style="bold",
    )
    table.add_column("Setup", style="bold")
    table.add_column("Trades", justify="right")
    table.add_column("Win Rate", justify="right")
    table.add_column("Total P&L", justify="right")
    table.add_column("Profit Factor", justify="right")
    table.add_column("R:R", justify="right")
    table.add_column("Target R:R", justify="right")
    table.add_column("Consistency", justify="right")

    for setup in analysis.top_setups:
        table.add_row(
            setup.name,
            str(setup.trades),
            f"{setup.win_rate:.1f}%",
            money(setup.total_pnl, currency),
            f"{setup.profit_factor:.2f}",
            f"{setup.risk_reward_ratio:.2f}",
            f"1:{setup.optimal_rrr:.1f}",
            f"{setup.consistency:.0f}",
        )
    return table


def _heatmap_table(cells: list[HeatmapCell]) -> Table:
    hours = sorted({cell.hour for cell in cells})
    days = list(dict.fromkeys(cell.day for cell in cells))
    lookup = {(cell.day, cell.hour): cell for cell in cells}

    table = Table(title="Win Rate by Weekday and Entry Hour", show_header=True, header_style="bold")
    table.add_column("Day", style="bold")
    for hour in hours:
        table.add_column(f"{hour:02d}h", justify="right")

    for day in days:
        row = []
        for hour in hours:
            cell = lookup.get((day, hour))
            if cell is None:
                row.append("[dim]-[/dim]")
                continue
            color = "green" if cell.win_rate >= 50 else "red"
            row.append(f"[{color}]{cell.win_rate:.0f}%[/{color}] ({cell.trades})")
        table.add_row(day, *row)
    return table


@click.command()
@journal_options
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the report as JSON.")
@click.pass_context
def report(
    ctx: click.Context,
    trades_path: Optional[Path],
    strategies_path: Optional[Path],
    skip_invalid: bool,
    as_json: bool,
) -> None:
    """Full performance report over the whole journal.

    Shows headline metrics, setup and instrument breakdowns, recent
    trend, and the strengths, weaknesses and recommendations derived
    from them.

    \b
    Examples:
      tradelens report --trades trades.json
      tradelens report --trades trades.csv --json
    """
    from tradelens.analytics.breakdowns import analyze_patterns
    from tradelens.analytics.context import build_trading_context
    from tradelens.analytics.setups import analyze_setups

    settings = get_settings(ctx)
    currency = settings.display.currency
    trades, strategies = load_journal(settings, trades_path, strategies_path, skip_invalid)

    context = build_trading_context(trades, strategies)
    setups = analyze_setups(trades)
    patterns_found = analyze_patterns(trades)

    if as_json:
        payload = context.model_dump(mode="json")
        payload["setup_analysis"] = setups.model_dump(mode="json")
        payload["pattern_recognition"] = patterns_found.model_dump(mode="json")
        click.echo(json.dumps(payload, indent=2))
        return

    perf = context.performance
    recent = context.recent_trends

    summary_text = (
        f"[bold]Performance Summary[/bold]\n\n"
        f"Total P&L:      {money(perf.total_pnl, currency)}\n"
        f"Total Trades:   {perf.total_trades}\n"
        f"Wins / Losses:  [green]{perf.wins}[/green] / [red]{perf.losses}[/red]"
        f" / [dim]{perf.breakeven}[/dim]\n"
        f"Win Rate:       {perf.win_rate:.1f}%\n"
        f"{'─' * 30}\n"
        f"Avg Win:        [green]{currency}{perf.avg_win:,.2f}[/green]\n"
        f"Avg Loss:       [red]{currency}{perf.avg_loss:,.2f}[/red]\n"
        f"Profit Factor:  {perf.profit_factor:.2f}\n"
        f"Expectancy:     {money(perf.expectancy, currency)}\n"
        f"Max Drawdown:   [red]{currency}{perf.max_drawdown:,.2f}[/red]\n"
        f"Sharpe Ratio:   {perf.sharpe_ratio:.2f}\n"
        f"{'─' * 30}\n"
        f"[dim]Last {recent.last_10_trades.trades} trades: "
        f"{recent.last_10_trades.win_rate:.1f}% win rate, trend {recent.last_10_trades.trend} | "
        f"Last 30 days: {recent.last_30_days.trades} trades "
        f"({recent.last_30_days.trade_frequency:.2f}/day)[/dim]"
    )

    console.print(Panel(
        summary_text,
        title="[bold cyan]Trading Report[/bold cyan]",
        border_style="cyan",
    ))

    patterns = context.patterns
    if patterns.best_setups:
        console.print(_segment_table("Best Setups", patterns.best_setups, currency))
    if patterns.worst_setups:
        console.print(_segment_table("Worst Setups", patterns.worst_setups, currency))
    if patterns.instrument_performance:
        console.print(_segment_table("Instruments", patterns.instrument_performance, currency))
    if patterns.time_patterns:
        console.print(_segment_table("Sessions", patterns.time_patterns, currency))
    if setups.setups:
        console.print(_setup_table(setups, currency))
    if patterns_found.top_winning:
        console.print(_segment_table("Top Winning Patterns", patterns_found.top_winning, currency))
        console.print(_segment_table("Top Losing Patterns", patterns_found.top_losing, currency))
    if patterns_found.heatmap:
        console.print(_heatmap_table(patterns_found.heatmap))

    lines = []
    for strength in context.strengths:
        lines.append(f"[green]+[/green] {strength}")
    for weakness in context.weaknesses:
        lines.append(f"[red]-[/red] {weakness}")
    if lines:
        lines.append("")
    for recommendation in context.recommendations:
        lines.append(f"[cyan]>[/cyan] {recommendation}")
    for recommendation in setups.recommendations:
        lines.append(f"[cyan]>[/cyan] {recommendation}")
    for note in patterns_found.recommendations:
        lines.append(f"{RECOMMENDATION_MARKERS[note.kind]} [bold]{note.title}:[/bold] {note.body}")

    console.print(Panel(
        "\n".join(lines),
        title="[bold]Strengths, Weaknesses & Recommendations[/bold]",
        border_style="blue",
    ))


@click.command()
@journal_options
@click.pass_context
def risk(
    ctx: click.Context,
    trades_path: Optional[Path],
    strategies_path: Optional[Path],
    skip_invalid: bool,
) -> None:
    """Risk review with Kelly position sizing.

    Shows stop-loss discipline, risk-reward, streaks, the composite
    risk score, drawdown state and suggested risk per trade.

    \b
    Examples:
      tradelens risk --trades trades.json
    """
    from tradelens.analytics.risk import analyze_risk, calculate_risk_metrics

    settings = get_settings(ctx)
    currency = settings.display.currency
    trades, _ = load_journal(settings, trades_path, strategies_path, skip_invalid)

    if not trades:
        console.print(Panel(
            "[dim]No trades in the journal.[/dim]\n\n"
            "Log some closed trades to get a risk review.",
            title="[bold]Risk[/bold]",
            border_style="dim",
        ))
        return

    metrics = calculate_risk_metrics(trades)
    analysis = analyze_risk(trades)
    score_color = "green" if metrics.risk_score >= 70 else "yellow" if metrics.risk_score >= 40 else "red"

    risk_text = (
        f"[bold]Risk Profile[/bold]\n\n"
        f"Risk Score:         [{score_color}]{metrics.risk_score:.0f}/100[/{score_color}]\n"
        f"Stop Loss Usage:    {metrics.stop_loss_usage:.1f}%\n"
        f"Avg Risk / Trade:   {metrics.avg_risk_per_trade:.2%}\n"
        f"Risk:Reward:        {metrics.risk_reward_ratio:.2f}\n"
        f"Max Losing Streak:  {metrics.max_consecutive_losses}\n"
        f"Max Winning Streak: {metrics.max_consecutive_wins}\n"
        f"{'─' * 30}\n"
        f"Payoff Ratio:       {analysis.payoff_ratio:.2f}\n"
        f"Expectancy:         {money(analysis.expectancy, currency)}\n"
        f"Max Drawdown:       {analysis.drawdown.max_drawdown_percent:.1f}%\n"
        f"Current Drawdown:   {analysis.drawdown.current_drawdown_percent:.1f}%"
    )
    if analysis.drawdown.recovery_trades:
        risk_text += f"\n[dim]In drawdown for {analysis.drawdown.recovery_trades} trades[/dim]"

    console.print(Panel(
        risk_text,
        title="[bold cyan]Risk[/bold cyan]",
        border_style="cyan",
    ))

    kelly = analysis.kelly
    table = Table(
        title=f"Position Sizing (risk {kelly.recommended_risk_percent:.1f}% per trade)",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Account", justify="right")
    table.add_column("Risk Amount", justify="right")
    table.add_column("Position Size", justify="right")

    for guide in kelly.position_size_guide:
        table.add_row(
            f"{currency}{guide.account_size:,.0f}",
            f"{currency}{guide.risk_amount:,.2f}",
            f"{currency}{guide.suggested_position_size:,.2f}",
        )

    console.print(table)
    console.print(f"\n[bold]Kelly:[/bold] {kelly.advice}")

    if analysis.recommendations:
        console.print("\n[bold]Recommendations[/bold]")
        for recommendation in analysis.recommendations:
            console.print(f"  [cyan]>[/cyan] {recommendation}")
