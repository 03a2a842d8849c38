"""Pattern recognition across every journal dimension.

Trades are segmented by instrument, direction, entry hour, day of week,
session tag and setup. Segments with at least two trades compete for the
top winning and top losing patterns, which feed a short list of typed
recommendations. Entry hour and weekday also form a heatmap.
"""

from collections import defaultdict
from datetime import time
from typing import Optional, Sequence

from tradelens.analytics.metrics import win_rate
from tradelens.analytics.patterns import build_segment, group_trades, segment_stats
from tradelens.models import (
    HeatmapCell,
    PatternGroup,
    PatternRecognition,
    SegmentStats,
    SmartRecommendation,
    Trade,
)

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

PATTERN_MIN_TRADES = 2
TOP_PATTERNS = 5
AVOID_WIN_RATE = 35.0
DIRECTION_BIAS_SPREAD = 15.0
SMALL_SAMPLE_TRADES = 20


def entry_hour(trade: Trade) -> Optional[int]:
    """Hour the trade was entered, None when unknown.

    The explicit entry time wins. Otherwise the date's time is used, unless
    it is exactly midnight, which is how date-only journal values parse.
    """
    if trade.entry_time is not None:
        return trade.entry_time.hour
    if trade.date is None or trade.date.time() == time():
        return None
    return trade.date.hour


def weekday(trade: Trade) -> Optional[str]:
    if trade.date is None:
        return None
    return WEEKDAYS[trade.date.weekday()]


def format_hour(hour: int) -> str:
    """12-hour clock label, e.g. 9 -> '9:00 AM', 13 -> '1:00 PM'."""
    suffix = "PM" if hour >= 12 else "AM"
    display = hour % 12 or 12
    return f"{display}:00 {suffix}"


def _by_trade_count(segments: list[SegmentStats]) -> list[SegmentStats]:
    return sorted(segments, key=lambda s: s.trades, reverse=True)


def pattern_groups(trades: Sequence[Trade]) -> list[PatternGroup]:
    """Segment trades along every dimension; empty dimensions are left out."""
    hours = group_trades(trades, entry_hour)
    days = segment_stats(trades, weekday)

    candidates = [
        ("Instrument", _by_trade_count(segment_stats(trades, lambda t: t.instrument))),
        ("Direction", segment_stats(trades, lambda t: t.direction.capitalize())),
        ("Entry Hour", [build_segment(format_hour(h), hours[h]) for h in sorted(hours)]),
        ("Day of Week", sorted(days, key=lambda s: WEEKDAYS.index(s.name))),
        ("Session", segment_stats(trades, lambda t: t.session)),
        ("Setup", _by_trade_count(segment_stats(trades, lambda t: t.setup_name))),
    ]
    return [PatternGroup(category=name, patterns=segments) for name, segments in candidates if segments]


def weekly_heatmap(trades: Sequence[Trade]) -> list[HeatmapCell]:
    """Win rate per (weekday, entry hour), Monday first then by hour."""
    cells: dict[tuple[int, int], list[Trade]] = defaultdict(list)
    for trade in trades:
        hour = entry_hour(trade)
        if trade.date is None or hour is None:
            continue
        cells[(trade.date.weekday(), hour)].append(trade)

    return [
        HeatmapCell(day=WEEKDAYS[day], hour=hour, win_rate=win_rate(group), trades=len(group))
        for (day, hour), group in sorted(cells.items())
    ]


def _find_group(groups: list[PatternGroup], category: str) -> Optional[PatternGroup]:
    return next((g for g in groups if g.category == category), None)


def pattern_recommendations(
    groups: list[PatternGroup],
    top_winning: list[SegmentStats],
    top_losing: list[SegmentStats],
    total_trades: int,
) -> list[SmartRecommendation]:
    """Strengths, warnings and tips drawn from the pattern groups."""
    recommendations = []

    if top_winning:
        best = top_winning[0]
        recommendations.append(SmartRecommendation(
            kind="strength",
            title=f"{best.name} is your edge",
            body=(
                f"{best.win_rate:.0f}% win rate across {best.trades} trades with "
                f"${best.total_pnl:.0f} total P&L. Double down on this pattern."
            ),
        ))

    if top_losing and top_losing[0].win_rate < AVOID_WIN_RATE:
        worst = top_losing[0]
        recommendations.append(SmartRecommendation(
            kind="warning",
            title=f"Avoid {worst.name}",
            body=(
                f"Only {worst.win_rate:.0f}% win rate across {worst.trades} trades. Consider "
                f"removing this from your playbook or refining the setup criteria."
            ),
        ))

    direction = _find_group(groups, "Direction")
    if direction and len(direction.patterns) == 2:
        better, worse = sorted(direction.patterns, key=lambda s: s.win_rate, reverse=True)
        if better.win_rate - worse.win_rate > DIRECTION_BIAS_SPREAD:
            recommendations.append(SmartRecommendation(
                kind="tip",
                title=f"{better.name} bias detected",
                body=(
                    f"Your {better.name} trades win {better.win_rate:.0f}% vs "
                    f"{worse.win_rate:.0f}% for {worse.name}. Consider sizing down on "
                    f"{worse.name} entries."
                ),
            ))

    hours = _find_group(groups, "Entry Hour")
    qualified = [p for p in hours.patterns if p.trades >= PATTERN_MIN_TRADES] if hours else []
    if qualified:
        best_hour = max(qualified, key=lambda s: s.win_rate)
        worst_hour = min(qualified, key=lambda s: s.win_rate)
        if best_hour.name != worst_hour.name:
            recommendations.append(SmartRecommendation(
                kind="tip",
                title=f"Best window: {best_hour.name}",
                body=(
                    f"Your entries at {best_hour.name} win {best_hour.win_rate:.0f}% of the time. "
                    f"Entries at {worst_hour.name} only win {worst_hour.win_rate:.0f}%. "
                    f"Consider restricting trading to your peak hours."
                ),
            ))

    if total_trades < SMALL_SAMPLE_TRADES:
        recommendations.append(SmartRecommendation(
            kind="warning",
            title="Small sample size",
            body=(
                f"You have {total_trades} trades logged. Patterns become more reliable "
                f"after 30+ trades. Keep logging consistently."
            ),
        ))

    return recommendations


def analyze_patterns(trades: Sequence[Trade]) -> PatternRecognition:
    """Run pattern recognition over the whole journal.

    Args:
        trades: Closed trades in any order.

    Returns:
        PatternRecognition; empty for an empty list. Top pattern names are
        prefixed with their dimension, e.g. "Instrument: ES".
    """
    if not trades:
        return PatternRecognition()

    groups = pattern_groups(trades)
    candidates = [
        pattern.model_copy(update={"name": f"{group.category}: {pattern.name}"})
        for group in groups
        for pattern in group.patterns
        if pattern.trades >= PATTERN_MIN_TRADES
    ]
    top_winning = sorted(candidates, key=lambda s: (-s.win_rate, -s.total_pnl))[:TOP_PATTERNS]
    top_losing = sorted(candidates, key=lambda s: (s.win_rate, s.total_pnl))[:TOP_PATTERNS]

    return PatternRecognition(
        groups=groups,
        top_winning=top_winning,
        top_losing=top_losing,
        recommendations=pattern_recommendations(groups, top_winning, top_losing, len(trades)),
        heatmap=weekly_heatmap(trades),
    )
