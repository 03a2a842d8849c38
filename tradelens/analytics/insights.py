"""Insight generation: run every detector over recent trades and rank the results.

Detectors are plain functions taking ``(trades, strategies)`` and returning
one AIInsight or None. They run in registry order, once each, on the trades
inside the recency window.
"""

import logging
from datetime import datetime
from typing import Callable, Iterable, Optional, Sequence

from tradelens.analytics.patterns import (
    direction_insight,
    instrument_insight,
    session_insight,
    strategy_insight,
)
from tradelens.analytics.psychology import psychology_insight
from tradelens.analytics.trends import RECENT_DAYS, streak_insight, within_days
from tradelens.models import AIInsight, PlaybookStrategy, Trade

logger = logging.getLogger(__name__)

Detector = Callable[[Sequence[Trade], Sequence[PlaybookStrategy]], Optional[AIInsight]]

DETECTORS: tuple[tuple[str, Detector], ...] = (
    ("direction", lambda trades, strategies: direction_insight(trades)),
    ("session", lambda trades, strategies: session_insight(trades)),
    ("strategy", strategy_insight),
    ("psychology", lambda trades, strategies: psychology_insight(trades)),
    ("trend", lambda trades, strategies: streak_insight(trades)),
    ("instrument", lambda trades, strategies: instrument_insight(trades)),
)


def filter_recent(
    trades: Iterable[Trade], now: Optional[datetime] = None, days: int = RECENT_DAYS
) -> list[Trade]:
    """Trades dated within the last ``days`` days; undated trades are kept."""
    now = now or datetime.now()
    return [t for t in trades if within_days(t, now, days)]


def prioritize_insights(insights: Iterable[AIInsight]) -> list[AIInsight]:
    """Order insights by severity, then confidence, then actionable first.

    critical < warning < positive < neutral; higher confidence first. The
    sort is stable, so otherwise-equal insights keep detector order.
    """
    return sorted(
        insights,
        key=lambda i: (i.severity_rank, -i.confidence, not i.actionable),
    )


def generate_insights(
    trades: Sequence[Trade],
    strategies: Sequence[PlaybookStrategy] = (),
    recent_days: int = RECENT_DAYS,
    now: Optional[datetime] = None,
) -> list[AIInsight]:
    """Generate prioritized insights from the recent part of a trade history.

    Args:
        trades: Closed trades in any order.
        strategies: Playbook strategy summaries for the strategy detector.
        recent_days: Size of the recency window in days.
        now: Reference time for the window, defaults to the current time.

    Returns:
        Insights sorted by priority; empty when no trade falls in the window.
    """
    if not trades:
        return []

    recent = filter_recent(trades, now, recent_days)
    logger.debug("%d of %d trades inside the %d-day window", len(recent), len(trades), recent_days)
    if not recent:
        return []

    insights = []
    for name, detector in DETECTORS:
        insight = detector(recent, strategies)
        logger.debug("Detector %s -> %s", name, insight.id if insight else None)
        if insight is not None:
            insights.append(insight)

    return prioritize_insights(insights)
