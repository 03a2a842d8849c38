"""Segmented pattern analysis: direction, session, instrument, strategy, setup.

Each detector compares segments only when they carry enough trades. Every
detector has its own threshold constants; the setup rankings used by the
trading context accept smaller samples than the strategy detector.
"""

from collections import defaultdict
from typing import Callable, Hashable, Iterable, Optional, Sequence

from tradelens.analytics.metrics import avg_pnl, total_pnl, win_rate
from tradelens.models import AIInsight, PlaybookStrategy, SegmentStats, Trade

# Direction
DIRECTION_MIN_TRADES = 5
DIRECTION_MIN_SPREAD = 15.0

# Session
SESSION_MIN_TOTAL_TRADES = 15
SESSION_MIN_TRADES = 5
SESSION_MIN_SPREAD = 15.0
SESSIONS: dict[str, tuple[int, int]] = {
    "morning": (9, 12),
    "afternoon": (12, 16),
    "evening": (16, 21),
}
DEFAULT_HOUR = 12

# Instrument
INSTRUMENT_MIN_TOTAL_TRADES = 15
INSTRUMENT_MIN_TRADES = 5
INSTRUMENT_MIN_SPREAD = 20.0

# Strategy
STRATEGY_MIN_TRADES = 10
STRATEGY_MIN_STRATEGY_TRADES = 5
STRATEGY_STRONG_WIN_RATE = 70.0
STRATEGY_WEAK_WIN_RATE = 40.0

# Setup rankings for the trading context
SETUP_MIN_TRADES = 3
SETUP_RANK_SIZE = 3
UNKNOWN_SEGMENT = "Unknown"


def build_segment(name: str, trades: Sequence[Trade]) -> SegmentStats:
    """Build win rate and P&L statistics for one segment."""
    return SegmentStats(
        name=name,
        trades=len(trades),
        wins=sum(1 for t in trades if t.outcome == "win"),
        win_rate=win_rate(trades),
        avg_pnl=avg_pnl(trades),
        total_pnl=total_pnl(trades),
    )


def group_trades(
    trades: Iterable[Trade], key: Callable[[Trade], Optional[Hashable]]
) -> dict[Hashable, list[Trade]]:
    """Group trades by key, dropping trades whose key is None."""
    groups: dict[Hashable, list[Trade]] = defaultdict(list)
    for trade in trades:
        name = key(trade)
        if name is not None:
            groups[name].append(trade)
    return dict(groups)


def segment_stats(
    trades: Iterable[Trade], key: Callable[[Trade], Optional[str]]
) -> list[SegmentStats]:
    """Segment statistics for every group, in first-seen order."""
    return [build_segment(name, group) for name, group in group_trades(trades, key).items()]


def trade_hour(trade: Trade) -> int:
    """Hour of day of the trade, noon when the date is unknown."""
    if trade.entry_time is not None:
        return trade.entry_time.hour
    if trade.date is None:
        return DEFAULT_HOUR
    return trade.date.hour


def session_for_hour(hour: int) -> Optional[str]:
    """Map an hour of day to its session bucket, None outside all sessions."""
    for name, (start, end) in SESSIONS.items():
        if start <= hour < end:
            return name
    return None


def _best_and_worst(
    segments: list[SegmentStats],
) -> tuple[SegmentStats, SegmentStats]:
    best = max(segments, key=lambda s: s.win_rate)
    worst = min(segments, key=lambda s: s.win_rate)
    return best, worst


def direction_insight(trades: Sequence[Trade]) -> Optional[AIInsight]:
    """Compare long and short win rates.

    Both sides need at least DIRECTION_MIN_TRADES trades and the win rates
    must differ by more than DIRECTION_MIN_SPREAD percentage points.
    """
    longs = [t for t in trades if t.direction == "long"]
    shorts = [t for t in trades if t.direction == "short"]

    if len(longs) < DIRECTION_MIN_TRADES or len(shorts) < DIRECTION_MIN_TRADES:
        return None

    long_rate = win_rate(longs)
    short_rate = win_rate(shorts)
    if abs(long_rate - short_rate) <= DIRECTION_MIN_SPREAD:
        return None

    better, worse = ("Long", "Short") if long_rate > short_rate else ("Short", "Long")
    better_rate = max(long_rate, short_rate)
    worse_rate = min(long_rate, short_rate)

    return AIInsight(
        id="direction-preference",
        category="direction",
        title="Direction Edge Detected",
        message=(
            f"Your {better} trades show a {better_rate:.0f}% win rate vs "
            f"{worse_rate:.0f}% for {worse}. Focus on {better} setups for better results."
        ),
        severity="positive",
        confidence=85,
        actionable=True,
    )


def session_insight(trades: Sequence[Trade]) -> Optional[AIInsight]:
    """Find the strongest time-of-day session.

    Trades are bucketed by hour into morning, afternoon and evening.
    Undated trades count as noon trades.
    """
    if len(trades) < SESSION_MIN_TOTAL_TRADES:
        return None

    sessions = [
        s
        for s in segment_stats(trades, lambda t: session_for_hour(trade_hour(t)))
        if s.trades >= SESSION_MIN_TRADES
    ]
    if len(sessions) < 2:
        return None

    best, worst = _best_and_worst(sessions)
    spread = best.win_rate - worst.win_rate
    if spread <= SESSION_MIN_SPREAD:
        return None

    return AIInsight(
        id="session-preference",
        category="direction",
        title="Optimal Trading Window",
        message=(
            f"You perform {spread:.0f}% better in {best.name} sessions "
            f"({best.win_rate:.0f}% win rate vs {worst.win_rate:.0f}%). "
            f"Consider focusing your trading then."
        ),
        severity="positive",
        confidence=78,
        actionable=True,
    )


def instrument_insight(trades: Sequence[Trade]) -> Optional[AIInsight]:
    """Compare instruments with enough trades and report a specialization edge."""
    if len(trades) < INSTRUMENT_MIN_TOTAL_TRADES:
        return None

    instruments = [
        s for s in segment_stats(trades, lambda t: t.instrument)
        if s.trades >= INSTRUMENT_MIN_TRADES
    ]
    if len(instruments) < 2:
        return None

    best, worst = _best_and_worst(instruments)
    if best.win_rate - worst.win_rate <= INSTRUMENT_MIN_SPREAD:
        return None

    return AIInsight(
        id="instrument-preference",
        category="instrument",
        title="Instrument Edge Found",
        message=(
            f"Your {best.name} trades show {best.win_rate:.0f}% win rate vs "
            f"{worst.win_rate:.0f}% on {worst.name}. Consider specializing in {best.name}."
        ),
        severity="positive",
        confidence=80,
        actionable=True,
    )


def strategy_insight(
    trades: Sequence[Trade], strategies: Sequence[PlaybookStrategy]
) -> Optional[AIInsight]:
    """Flag the strongest or weakest playbook strategy.

    A strong strategy (win rate above 70%) takes precedence over a weak one.
    """
    if not strategies or len(trades) < STRATEGY_MIN_TRADES:
        return None

    ranked = sorted(
        (s for s in strategies if s.trades_count >= STRATEGY_MIN_STRATEGY_TRADES),
        key=lambda s: s.win_rate,
        reverse=True,
    )
    if not ranked:
        return None

    best = ranked[0]
    if best.win_rate > STRATEGY_STRONG_WIN_RATE:
        return AIInsight(
            id="strategy-strength",
            category="strategy",
            title="High-Performance Strategy",
            message=(
                f'Your "{best.name}" strategy has a {best.win_rate:.0f}% win rate over '
                f"{best.trades_count} trades. Keep prioritizing it!"
            ),
            severity="positive",
            confidence=90,
            actionable=True,
        )

    worst = ranked[-1]
    if worst.win_rate < STRATEGY_WEAK_WIN_RATE:
        return AIInsight(
            id="strategy-weakness",
            category="strategy",
            title="Strategy Needs Review",
            message=(
                f'Your "{worst.name}" strategy is underperforming at {worst.win_rate:.0f}% '
                f"win rate. Review your execution or adjust the rules."
            ),
            severity="warning",
            confidence=85,
            actionable=True,
        )

    return None


def setup_performance(trades: Sequence[Trade]) -> tuple[list[SegmentStats], list[SegmentStats]]:
    """Rank setups by average P&L.

    Only setups with at least SETUP_MIN_TRADES trades are ranked. The two
    lists overlap when fewer than six setups qualify.

    Returns:
        Tuple of (best three, worst three with the worst first).
    """
    ranked = sorted(
        (
            s for s in segment_stats(trades, lambda t: t.setup_name or UNKNOWN_SEGMENT)
            if s.trades >= SETUP_MIN_TRADES
        ),
        key=lambda s: s.avg_pnl,
        reverse=True,
    )
    best = ranked[:SETUP_RANK_SIZE]
    worst = list(reversed(ranked[-SETUP_RANK_SIZE:]))
    return best, worst


def instrument_performance(trades: Sequence[Trade]) -> list[SegmentStats]:
    """Every instrument's statistics, best average P&L first."""
    return sorted(segment_stats(trades, lambda t: t.instrument), key=lambda s: s.avg_pnl, reverse=True)


def time_patterns(trades: Sequence[Trade]) -> list[SegmentStats]:
    """Statistics per journaled session tag, best average P&L first."""
    return sorted(
        segment_stats(trades, lambda t: t.session or UNKNOWN_SEGMENT),
        key=lambda s: s.avg_pnl,
        reverse=True,
    )
