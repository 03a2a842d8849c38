"""Build the consolidated TradingContext read model."""

from datetime import datetime
from typing import Optional, Sequence

from tradelens.analytics.metrics import calculate_performance
from tradelens.analytics.patterns import instrument_performance, setup_performance, time_patterns
from tradelens.analytics.risk import calculate_risk_metrics
from tradelens.analytics.trends import recent_trends
from tradelens.models import (
    PatternSummary,
    PerformanceMetrics,
    PlaybookStrategy,
    RecentTrends,
    RiskMetrics,
    Trade,
    TradingContext,
)

FIRST_TRADE_RECOMMENDATION = "Start by logging your first trade to begin analysis"


def identify_strengths_and_weaknesses(
    performance: PerformanceMetrics,
    patterns: PatternSummary,
    risk: RiskMetrics,
    trends: RecentTrends,
) -> tuple[list[str], list[str], list[str]]:
    """Derive qualitative strengths, weaknesses and recommendations.

    Returns:
        Tuple of (strengths, weaknesses, recommendations).
    """
    strengths: list[str] = []
    weaknesses: list[str] = []
    recommendations: list[str] = []

    if performance.win_rate >= 60:
        strengths.append(f"Excellent win rate of {performance.win_rate:.1f}%")
    elif performance.win_rate < 45:
        weaknesses.append(f"Low win rate of {performance.win_rate:.1f}%")
        recommendations.append("Focus on improving trade selection and entry timing")

    if performance.profit_factor >= 1.5:
        strengths.append(f"Strong profit factor of {performance.profit_factor:.2f}")
    elif performance.profit_factor < 1.2:
        weaknesses.append(f"Low profit factor of {performance.profit_factor:.2f}")
        recommendations.append("Work on letting winners run longer and cutting losses shorter")

    if performance.total_pnl > 0:
        strengths.append("Overall profitable trading")
    else:
        weaknesses.append("Currently in drawdown")
        recommendations.append("Review and refine your trading strategy")

    if risk.stop_loss_usage >= 80:
        strengths.append("Consistent use of stop losses")
    elif risk.stop_loss_usage < 60:
        weaknesses.append("Inconsistent stop loss usage")
        recommendations.append("Always set stop losses before entering trades")

    if risk.risk_reward_ratio >= 2:
        strengths.append("Excellent risk-reward ratios")
    elif risk.risk_reward_ratio < 1:
        weaknesses.append("Poor risk-reward ratios")
        recommendations.append("Target higher reward relative to risk on each trade")

    if risk.max_consecutive_losses > 7:
        weaknesses.append("Long losing streaks")
        recommendations.append("Consider reducing position size during losing streaks")

    trend = trends.last_10_trades.trend
    if trend == "improving":
        strengths.append("Recent performance is improving")
    elif trend == "declining":
        weaknesses.append("Recent performance is declining")
        recommendations.append("Take a break and review recent trades for patterns")

    frequency = trends.last_30_days.trade_frequency
    if frequency > 5:
        weaknesses.append("Very high trading frequency")
        recommendations.append("Consider reducing trade frequency and focusing on quality setups")
    elif frequency < 0.5:
        recommendations.append("Consider increasing trading activity if opportunities are available")

    if patterns.best_setups:
        best = patterns.best_setups[0]
        strengths.append(f"Strong performance with {best.name} setup")
        recommendations.append(
            f"Focus more on your {best.name} setup which has {best.win_rate:.1f}% win rate"
        )

    if patterns.worst_setups and patterns.worst_setups[0].avg_pnl < 0:
        worst = patterns.worst_setups[0]
        weaknesses.append(f"Poor performance with {worst.name} setup")
        recommendations.append(f"Avoid or refine your {worst.name} setup")

    return strengths, weaknesses, recommendations


def build_trading_context(
    trades: Sequence[Trade],
    strategies: Sequence[PlaybookStrategy] = (),
    now: Optional[datetime] = None,
) -> TradingContext:
    """Run every analyzer over the full trade history.

    Args:
        trades: All closed trades, unfiltered and in any order.
        strategies: Playbook strategies. Accepted for callers that pass the
            whole journal; the context itself is derived from trades.
        now: Reference time for the 30-day window.

    Returns:
        TradingContext. With no trades, every metric is zero and the only
        recommendation is to log a first trade.
    """
    if not trades:
        return TradingContext(recommendations=[FIRST_TRADE_RECOMMENDATION])

    performance = calculate_performance(trades)
    best, worst = setup_performance(trades)
    patterns = PatternSummary(
        best_setups=best,
        worst_setups=worst,
        instrument_performance=instrument_performance(trades),
        time_patterns=time_patterns(trades),
    )
    risk = calculate_risk_metrics(trades)
    trends = recent_trends(trades, now)

    strengths, weaknesses, recommendations = identify_strengths_and_weaknesses(
        performance, patterns, risk, trends
    )

    return TradingContext(
        performance=performance,
        patterns=patterns,
        risk_metrics=risk,
        recent_trends=trends,
        strengths=strengths,
        weaknesses=weaknesses,
        recommendations=recommendations,
    )
