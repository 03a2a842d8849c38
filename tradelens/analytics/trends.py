"""Recent-window trend classification and streak detection."""

from datetime import datetime, timedelta
from typing import Optional, Sequence

from tradelens.analytics.metrics import sort_chronologically, total_pnl, win_rate
from tradelens.models import (
    AIInsight,
    LastTradesSummary,
    RecentDaysSummary,
    RecentTrends,
    Trade,
)
from tradelens.models.context import TrendDirection

LAST_TRADES_WINDOW = 10
TREND_MIN_TRADES = 5
IMPROVING_FACTOR = 1.2
DECLINING_FACTOR = 0.8
RECENT_DAYS = 30

STREAK_MIN_TRADES = 5
STREAK_LOOKBACK = 10
HOT_STREAK_MIN = 4
LOSING_STREAK_MIN = 3


def within_days(trade: Trade, now: datetime, days: int) -> bool:
    """Whether the trade falls inside the last ``days`` days before ``now``.

    Undated trades are kept rather than silently dropped.
    """
    if trade.date is None:
        return True
    return trade.date >= now - timedelta(days=days)


def classify_trend(window: Sequence[Trade]) -> TrendDirection:
    """Compare the average P&L of the older and newer halves of a window.

    The window must already be in chronological order. Fewer than
    TREND_MIN_TRADES trades are always "stable".
    """
    if len(window) < TREND_MIN_TRADES:
        return "stable"

    middle = len(window) // 2
    first_avg = total_pnl(window[:middle]) / middle
    second_avg = total_pnl(window[middle:]) / (len(window) - middle)

    if second_avg > first_avg * IMPROVING_FACTOR:
        return "improving"
    if second_avg < first_avg * DECLINING_FACTOR:
        return "declining"
    return "stable"


def last_trades_summary(trades: Sequence[Trade], count: int = LAST_TRADES_WINDOW) -> LastTradesSummary:
    """Win rate, P&L and trend of the most recent ``count`` trades."""
    window = sort_chronologically(trades)[-count:] if count > 0 else []
    return LastTradesSummary(
        trades=len(window),
        win_rate=win_rate(window),
        total_pnl=total_pnl(window),
        trend=classify_trend(window),
    )


def recent_days_summary(
    trades: Sequence[Trade], now: Optional[datetime] = None, days: int = RECENT_DAYS
) -> RecentDaysSummary:
    """Win rate, P&L and trades-per-day over the last ``days`` days."""
    now = now or datetime.now()
    window = [t for t in trades if within_days(t, now, days)]
    return RecentDaysSummary(
        trades=len(window),
        win_rate=win_rate(window),
        total_pnl=total_pnl(window),
        trade_frequency=len(window) / days if days > 0 else 0.0,
    )


def recent_trends(trades: Sequence[Trade], now: Optional[datetime] = None) -> RecentTrends:
    """Last-10-trades and last-30-days windows."""
    return RecentTrends(
        last_10_trades=last_trades_summary(trades),
        last_30_days=recent_days_summary(trades, now),
    )


def current_streak(trades: Sequence[Trade], outcome: str) -> list[Trade]:
    """Trades of the run of ``outcome`` ending at the most recent trade.

    Only the STREAK_LOOKBACK most recent trades are inspected.

    Returns:
        Streak trades, most recent first. Empty when the latest trade has
        a different outcome.
    """
    newest_first = list(reversed(sort_chronologically(trades)))[:STREAK_LOOKBACK]
    streak = []
    for trade in newest_first:
        if trade.outcome != outcome:
            break
        streak.append(trade)
    return streak


def streak_insight(trades: Sequence[Trade]) -> Optional[AIInsight]:
    """Celebrate a hot streak or warn about a losing streak in progress."""
    if len(trades) < STREAK_MIN_TRADES:
        return None

    wins = current_streak(trades, "win")
    if len(wins) >= HOT_STREAK_MIN:
        return AIInsight(
            id="winning-streak",
            category="trend",
            title="Hot Streak Active!",
            message=(
                f"You're on a {len(wins)}-trade winning streak with +${total_pnl(wins):.2f}. "
                f"Your discipline is working, keep it up!"
            ),
            severity="positive",
            confidence=95,
            actionable=False,
        )

    losses = current_streak(trades, "loss")
    if len(losses) >= LOSING_STREAK_MIN:
        return AIInsight(
            id="losing-streak",
            category="trend",
            title="Warning: Losing Streak",
            message=(
                f"{len(losses)} consecutive losses detected. Take a break, review your edge, "
                f"and reset mentally before continuing."
            ),
            severity="warning",
            confidence=90,
            actionable=True,
        )

    return None
