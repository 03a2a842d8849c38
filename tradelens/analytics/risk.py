"""Risk discipline metrics and Kelly criterion position sizing."""

from typing import Optional, Sequence

from tradelens.analytics.metrics import (
    average_win_loss,
    drawdown_metrics,
    expectancy,
    sort_chronologically,
)
from tradelens.models import (
    DrawdownMetrics,
    KellyCriterion,
    PositionSizeGuide,
    RiskAnalysis,
    RiskMetrics,
    Trade,
)

STOP_LOSS_WEIGHT = 0.4
RISK_REWARD_WEIGHT = 30.0
STREAK_WEIGHT = 30.0
STREAK_TOLERANCE = 5
STREAK_PENALTY = 5.0

KELLY_CAP = 0.25
MIN_RECOMMENDED_RISK = 0.5
MAX_RECOMMENDED_RISK = 5.0
DEFAULT_RISK_PERCENT = 1.0
ACCOUNT_SIZES = (1000, 5000, 10000, 25000, 50000, 100000)


def _with_stop_loss(trades: Sequence[Trade]) -> list[Trade]:
    return [t for t in trades if t.has_stop_loss]


def stop_loss_usage(trades: Sequence[Trade]) -> float:
    """Percentage of trades that had a nonzero stop loss."""
    if not trades:
        return 0.0
    return len(_with_stop_loss(trades)) / len(trades) * 100


def avg_risk_per_trade(trades: Sequence[Trade]) -> float:
    """Mean stop distance as a fraction of the entry price.

    Only trades with a stop loss count; a zero entry price contributes 0.
    """
    stopped = _with_stop_loss(trades)
    if not stopped:
        return 0.0
    risks = [
        abs(t.entry_price - t.stop_loss) / t.entry_price if t.entry_price else 0.0
        for t in stopped
    ]
    return sum(risks) / len(risks)


def risk_reward_ratio(trades: Sequence[Trade]) -> float:
    """Mean realized reward over planned risk for trades with a stop loss."""
    stopped = _with_stop_loss(trades)
    if not stopped:
        return 0.0
    ratios = []
    for t in stopped:
        risk = abs(t.entry_price - t.stop_loss)
        reward = abs(t.exit_price - t.entry_price)
        ratios.append(reward / risk if risk > 0 else 0.0)
    return sum(ratios) / len(ratios)


def _max_consecutive(trades: Sequence[Trade], outcome: str) -> int:
    longest = 0
    current = 0
    for trade in sort_chronologically(trades):
        if trade.outcome == outcome:
            current += 1
            longest = max(longest, current)
        else:
            current = 0
    return longest


def max_consecutive_losses(trades: Sequence[Trade]) -> int:
    """Longest run of losses in chronological order."""
    return _max_consecutive(trades, "loss")


def max_consecutive_wins(trades: Sequence[Trade]) -> int:
    """Longest run of wins in chronological order."""
    return _max_consecutive(trades, "win")


def risk_score(stop_usage: float, rr_ratio: float, max_losses: int) -> float:
    """Composite 0-100 score of stop discipline, reward/risk and streak control.

    Args:
        stop_usage: Stop-loss usage percentage (0-100), worth up to 40 points.
        rr_ratio: Average reward/risk, worth up to 30 points at 1:1 or better.
        max_losses: Longest losing streak; full 30 points below five losses,
            minus five points for every loss beyond that.
    """
    if max_losses < STREAK_TOLERANCE:
        streak_term = STREAK_WEIGHT
    else:
        streak_term = max(0.0, STREAK_WEIGHT - (max_losses - STREAK_TOLERANCE) * STREAK_PENALTY)
    score = stop_usage * STOP_LOSS_WEIGHT + min(rr_ratio, 1.0) * RISK_REWARD_WEIGHT + streak_term
    return max(0.0, min(100.0, score))


def calculate_risk_metrics(trades: Sequence[Trade]) -> RiskMetrics:
    """Compute risk discipline metrics; all zero for an empty list."""
    if not trades:
        return RiskMetrics()

    usage = stop_loss_usage(trades)
    rr_ratio = risk_reward_ratio(trades)
    losses = max_consecutive_losses(trades)

    return RiskMetrics(
        stop_loss_usage=usage,
        avg_risk_per_trade=avg_risk_per_trade(trades),
        risk_reward_ratio=rr_ratio,
        max_consecutive_losses=losses,
        max_consecutive_wins=max_consecutive_wins(trades),
        risk_score=risk_score(usage, rr_ratio, losses),
    )


def _kelly_advice(kelly: float, recommended: float, win_rate: float) -> str:
    if win_rate < 0.4:
        return (
            f"With a {win_rate * 100:.1f}% win rate, use conservative 1% risk per trade "
            f"until consistency improves."
        )
    if kelly > 0.5:
        return (
            f"Your Kelly Criterion is {kelly * 100:.1f}%, but use {recommended:.1f}% "
            f"(half-Kelly) for safety."
        )
    return f"Risk {recommended:.1f}% per trade based on your {win_rate * 100:.1f}% win rate."


def kelly_criterion(win_rate: float, avg_win: float, avg_loss: float) -> KellyCriterion:
    """Kelly criterion sizing from win rate and payoff ratio.

    kelly = p - (1 - p) / b with b = avg_win / avg_loss. The recommendation
    is half of the Kelly fraction capped at 25%, bounded to 0.5%-5% risk.

    Args:
        win_rate: Win probability as a fraction (0-1).
        avg_win: Average winning P&L.
        avg_loss: Average losing P&L magnitude.

    Returns:
        KellyCriterion with percentages rounded to one decimal. Missing data
        yields the conservative 1% default.
    """
    if avg_win <= 0 or avg_loss <= 0 or win_rate <= 0:
        return KellyCriterion(
            kelly_percent=0.0,
            half_kelly_percent=0.5,
            recommended_risk_percent=DEFAULT_RISK_PERCENT,
            advice="Insufficient data for Kelly Criterion calculation. Use 1-2% risk per trade.",
        )

    payoff = avg_win / avg_loss
    kelly = win_rate - (1 - win_rate) / payoff
    half_kelly = max(0.0, min(kelly, KELLY_CAP)) / 2
    recommended = max(MIN_RECOMMENDED_RISK, min(half_kelly * 100, MAX_RECOMMENDED_RISK))

    guide = [
        PositionSizeGuide(
            account_size=size,
            risk_percent=recommended,
            risk_amount=size * recommended / 100,
            suggested_position_size=size * recommended / 100 / avg_loss * avg_win,
        )
        for size in ACCOUNT_SIZES
    ]

    return KellyCriterion(
        kelly_percent=round(kelly * 100, 1),
        half_kelly_percent=round(half_kelly * 100, 1),
        recommended_risk_percent=round(recommended, 1),
        position_size_guide=guide,
        advice=_kelly_advice(kelly, recommended, win_rate),
    )


def risk_recommendations(
    win_rate: float, payoff: Optional[float], drawdown: DrawdownMetrics
) -> list[str]:
    """Templated advice from win rate (fraction), payoff ratio and drawdown state.

    The "profit factor" advice is judged on the payoff ratio (average win over
    average loss), not on gross profit over gross loss. A payoff of None means
    there were no losing trades to measure against.
    """
    recommendations = []

    if win_rate < 0.4:
        recommendations.append(
            "Your win rate is below 40%. Focus on improving setup selection before "
            "increasing position size."
        )
    elif win_rate > 0.6:
        recommendations.append(
            "Your win rate exceeds 60%. You can safely use the recommended Kelly "
            "Criterion position sizing."
        )

    if payoff is not None and payoff < 1.5:
        recommendations.append(
            "Your profit factor is low. Consider tightening stop losses or improving "
            "entry accuracy."
        )
    elif payoff is not None and payoff > 3:
        recommendations.append(
            "Exceptional profit factor. Maintain current risk management and avoid "
            "over-leveraging."
        )

    if drawdown.current_drawdown_percent > 0 and (
        drawdown.current_drawdown_percent > drawdown.max_drawdown_percent * 0.8
    ):
        recommendations.append(
            f"You're in a significant drawdown ({drawdown.current_drawdown_percent:.1f}%). "
            f"Consider reducing position size temporarily."
        )

    if drawdown.recovery_trades > 20:
        recommendations.append(
            f"Recovery is taking {drawdown.recovery_trades} trades. This is normal, so "
            f"maintain discipline and avoid revenge trading."
        )

    return recommendations


def analyze_risk(trades: Sequence[Trade]) -> RiskAnalysis:
    """Full risk review: payoff, expectancy, Kelly sizing and drawdown state."""
    if not trades:
        return RiskAnalysis(kelly=kelly_criterion(0.0, 0.0, 0.0))

    wins = sum(1 for t in trades if t.outcome == "win")
    rate = wins / len(trades)
    avg_win, avg_loss = average_win_loss(trades)
    drawdown = drawdown_metrics(trades)
    payoff = avg_win / avg_loss if avg_loss > 0 else None

    return RiskAnalysis(
        win_rate=rate,
        avg_win=avg_win,
        avg_loss=avg_loss,
        payoff_ratio=payoff or 0.0,
        expectancy=expectancy(trades),
        kelly=kelly_criterion(rate, avg_win, avg_loss),
        drawdown=drawdown,
        recommendations=risk_recommendations(rate, payoff, drawdown),
    )
