"""Per-setup edge analysis: payoff, consistency and the trader's personal edge."""

import statistics
from typing import Optional, Sequence

from tradelens.analytics.metrics import average_win_loss, profit_factor
from tradelens.analytics.patterns import (
    SETUP_MIN_TRADES,
    SETUP_RANK_SIZE,
    UNKNOWN_SEGMENT,
    build_segment,
    group_trades,
)
from tradelens.models import SetupAnalysis, SetupPerformance, Trade

DEFAULT_OPTIMAL_RRR = 2.0
MIN_OPTIMAL_RRR = 1.0
MAX_OPTIMAL_RRR = 10.0
WEAK_SETUP_WIN_RATE = 40.0


def optimal_risk_reward(win_rate: float, avg_win: float, avg_loss: float) -> float:
    """Reward:risk target implied by win rate and payoff.

    (p * avg_win) / ((1 - p) * avg_loss), rounded to one decimal and kept
    within 1-10. Without losses or wins the default target of 2 is used.

    Args:
        win_rate: Win probability as a fraction (0-1).
        avg_win: Average winning P&L.
        avg_loss: Average losing P&L magnitude.
    """
    denominator = (1 - win_rate) * avg_loss
    if win_rate == 0 or denominator == 0:
        return DEFAULT_OPTIMAL_RRR
    ratio = round(win_rate * avg_win / denominator, 1)
    return max(MIN_OPTIMAL_RRR, min(MAX_OPTIMAL_RRR, ratio))


def consistency_score(trades: Sequence[Trade]) -> float:
    """100 minus the coefficient of variation of P&L, floored at 0.

    Fewer than two trades score 0. A zero mean scores 100 only when every
    P&L is identical.
    """
    if len(trades) < 2:
        return 0.0
    pnls = [t.pnl for t in trades]
    mean = statistics.fmean(pnls)
    std_dev = statistics.pstdev(pnls)
    if mean == 0:
        return 100.0 if std_dev == 0 else 0.0
    return max(0.0, 100 - std_dev / abs(mean) * 100)


def setup_stats(name: str, trades: Sequence[Trade]) -> SetupPerformance:
    """Full statistics for the trades of one setup."""
    segment = build_segment(name, trades)
    avg_win, avg_loss = average_win_loss(trades)

    return SetupPerformance(
        **segment.model_dump(),
        losses=sum(1 for t in trades if t.outcome == "loss"),
        breakeven=sum(1 for t in trades if t.outcome == "breakeven"),
        avg_win=avg_win,
        avg_loss=avg_loss,
        profit_factor=profit_factor(trades),
        risk_reward_ratio=max(0.0, avg_win / avg_loss) if avg_loss > 0 else 0.0,
        optimal_rrr=optimal_risk_reward(segment.win_rate / 100, avg_win, avg_loss),
        consistency=consistency_score(trades),
    )


def setup_recommendations(
    setups: list[SetupPerformance], edge: Optional[SetupPerformance]
) -> list[str]:
    recommendations = []

    if edge is not None:
        recommendations.append(
            f'Your strongest setup is "{edge.name}" with {edge.win_rate:.1f}% win rate '
            f"and {edge.profit_factor:.2f}x profit factor."
        )
        recommendations.append(
            f'Focus on optimal risk-reward of 1:{edge.optimal_rrr:.1f} for "{edge.name}" trades.'
        )

    weak = [s for s in setups if s.trades >= SETUP_MIN_TRADES and s.win_rate < WEAK_SETUP_WIN_RATE]
    if weak:
        listed = ", ".join(f'"{s.name}" ({s.win_rate:.0f}%)' for s in weak)
        recommendations.append(f"Consider avoiding or refining: {listed}")

    undertested = [s for s in setups if s.trades < SETUP_MIN_TRADES]
    if undertested:
        listed = ", ".join(f'"{s.name}" ({s.trades} trades)' for s in undertested)
        recommendations.append(f"Collect more data on: {listed}")

    return recommendations


def analyze_setups(trades: Sequence[Trade]) -> SetupAnalysis:
    """Rank every setup by win rate, then profit factor.

    Unlike the context's setup rankings this keeps setups of any size, and
    names the undertested ones in the recommendations instead.

    Args:
        trades: Closed trades in any order.

    Returns:
        SetupAnalysis whose personal edge is the top-ranked setup; empty for
        an empty list.
    """
    if not trades:
        return SetupAnalysis()

    groups = group_trades(trades, lambda t: t.setup_name or UNKNOWN_SEGMENT)
    setups = [setup_stats(name, group) for name, group in groups.items()]

    top = sorted(setups, key=lambda s: (-s.win_rate, -s.profit_factor))[:SETUP_RANK_SIZE]
    bottom = sorted(setups, key=lambda s: (s.win_rate, s.profit_factor))[:SETUP_RANK_SIZE]
    edge = top[0] if top else None

    return SetupAnalysis(
        setups=setups,
        top_setups=top,
        bottom_setups=bottom,
        personal_edge=edge,
        recommendations=setup_recommendations(setups, edge),
    )
