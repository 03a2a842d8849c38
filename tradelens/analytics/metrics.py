"""Aggregate performance metrics over closed trades.

Every ratio in this module returns 0 instead of NaN or infinity when its
denominator is zero, so callers can display results without guarding.
Order-sensitive metrics sort the trades chronologically themselves.
"""

import statistics
from datetime import datetime
from typing import Iterable, Sequence

from tradelens.models import DrawdownMetrics, PerformanceMetrics, Trade


def sort_chronologically(trades: Iterable[Trade]) -> list[Trade]:
    """Return trades ordered oldest to newest.

    Undated trades are placed before all dated trades, keeping their
    relative input order.
    """
    return sorted(
        trades,
        key=lambda t: (t.date is not None, t.date or datetime.min),
    )


def win_rate(trades: Sequence[Trade]) -> float:
    """Percentage of trades whose outcome is a win.

    Args:
        trades: Trades to evaluate.

    Returns:
        Win rate between 0 and 100, 0 for an empty list.
    """
    if not trades:
        return 0.0
    wins = sum(1 for t in trades if t.outcome == "win")
    return wins / len(trades) * 100


def total_pnl(trades: Iterable[Trade]) -> float:
    return sum(t.pnl for t in trades)


def avg_pnl(trades: Sequence[Trade]) -> float:
    """Mean P&L per trade, 0 for an empty list."""
    if not trades:
        return 0.0
    return total_pnl(trades) / len(trades)


def gross_profit(trades: Iterable[Trade]) -> float:
    return sum(t.pnl for t in trades if t.pnl > 0)


def gross_loss(trades: Iterable[Trade]) -> float:
    """Magnitude of the summed negative P&L."""
    return abs(sum(t.pnl for t in trades if t.pnl < 0))


def profit_factor(trades: Sequence[Trade]) -> float:
    """Gross profit divided by gross loss.

    Returns 0 when there is no gross loss, including the all-winners case.
    """
    loss = gross_loss(trades)
    if loss == 0:
        return 0.0
    return gross_profit(trades) / loss


def equity_curve(trades: Iterable[Trade]) -> list[tuple[float, float]]:
    """Cumulative P&L and running peak after each trade, oldest first.

    The peak starts at zero and never decreases.
    """
    curve = []
    running = 0.0
    peak = 0.0
    for trade in sort_chronologically(trades):
        running += trade.pnl
        peak = max(peak, running)
        curve.append((running, peak))
    return curve


def max_drawdown(trades: Iterable[Trade]) -> float:
    """Largest peak-to-trough decline of cumulative P&L.

    The peak starts at zero, so an account that loses from the first trade
    is already in drawdown.

    Args:
        trades: Trades in any order; they are sorted chronologically first.

    Returns:
        Max drawdown in P&L units (always >= 0).
    """
    return max((peak - running for running, peak in equity_curve(trades)), default=0.0)


def sharpe_ratio(trades: Sequence[Trade]) -> float:
    """Simplified Sharpe ratio: mean P&L over population standard deviation."""
    if not trades:
        return 0.0
    returns = [t.pnl for t in trades]
    std_dev = statistics.pstdev(returns)
    if std_dev == 0:
        return 0.0
    return statistics.fmean(returns) / std_dev


def average_win_loss(trades: Sequence[Trade]) -> tuple[float, float]:
    """Average winning P&L and average losing P&L magnitude, by outcome."""
    wins = [t.pnl for t in trades if t.outcome == "win"]
    losses = [abs(t.pnl) for t in trades if t.outcome == "loss"]
    avg_win = sum(wins) / len(wins) if wins else 0.0
    avg_loss = sum(losses) / len(losses) if losses else 0.0
    return avg_win, avg_loss


def expectancy(trades: Sequence[Trade]) -> float:
    """Expected P&L per trade: win rate x avg win - loss rate x avg loss."""
    if not trades:
        return 0.0
    avg_win, avg_loss = average_win_loss(trades)
    wins = sum(1 for t in trades if t.outcome == "win")
    losses = sum(1 for t in trades if t.outcome == "loss")
    return (wins / len(trades)) * avg_win - (losses / len(trades)) * avg_loss


def drawdown_metrics(trades: Iterable[Trade]) -> DrawdownMetrics:
    """Drawdown depth as a share of the running peak, plus recovery length.

    Percentages are measured against ``max(1, peak)`` so a flat or losing
    start does not divide by zero. ``recovery_trades`` counts the trades
    since the current drawdown began and is 0 as soon as equity is back at
    its peak, even when it only returns to the old high. It never reports
    the length of a drawdown that has already been recovered.
    """
    deepest = 0.0
    max_percent = 0.0
    current_percent = 0.0
    recovery_trades = 0

    for running, peak in equity_curve(trades):
        deepest = max(deepest, peak - running)
        current_percent = (peak - running) / max(1.0, peak) * 100
        max_percent = max(max_percent, current_percent)
        recovery_trades = recovery_trades + 1 if current_percent > 0 else 0

    return DrawdownMetrics(
        max_drawdown=deepest,
        max_drawdown_percent=round(max_percent, 1),
        current_drawdown_percent=round(current_percent, 1),
        recovery_trades=recovery_trades,
    )


def calculate_performance(trades: Sequence[Trade]) -> PerformanceMetrics:
    """Compute the full set of aggregate performance metrics.

    Args:
        trades: Closed trades in any order.

    Returns:
        PerformanceMetrics; every field is zero for an empty list.
    """
    if not trades:
        return PerformanceMetrics()

    avg_win, avg_loss = average_win_loss(trades)
    total = total_pnl(trades)

    return PerformanceMetrics(
        total_trades=len(trades),
        wins=sum(1 for t in trades if t.outcome == "win"),
        losses=sum(1 for t in trades if t.outcome == "loss"),
        breakeven=sum(1 for t in trades if t.outcome == "breakeven"),
        win_rate=win_rate(trades),
        total_pnl=total,
        avg_pnl_per_trade=total / len(trades),
        gross_profit=gross_profit(trades),
        gross_loss=gross_loss(trades),
        avg_win=avg_win,
        avg_loss=avg_loss,
        profit_factor=profit_factor(trades),
        max_drawdown=max_drawdown(trades),
        sharpe_ratio=sharpe_ratio(trades),
        expectancy=expectancy(trades),
    )
