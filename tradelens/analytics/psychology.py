"""Correlation between journaled habits/emotions and trade outcomes."""

from dataclasses import dataclass
from typing import Optional, Sequence

from tradelens.models import AIInsight, HabitStat, PsychologyCorrelation, Trade

GOOD_HABIT_MIN_TRADES = 5
BAD_HABIT_MIN_TRADES = 3
PSYCHOLOGY_MIN_TRADES = 10
DESTRUCTIVE_WIN_RATE = 30.0
MENTAL_EDGE_WIN_RATE = 75.0
TOP_FACTORS = 5
TAGGED_TRADES_FOR_RECOMMENDATION = 5

BAD_HABITS: dict[str, str] = {
    "bad_distracted": "Distracted",
    "bad_emotional": "Emotional/Impulsive",
    "bad_revenge": "Revenge Trading",
    "bad_fomo": "FOMO (Fear of Missing Out)",
    "bad_overtrading": "Overtrading",
    "bad_ignored_plan": "Ignored Trading Plan",
    "bad_moved_sl": "Moved Stop Loss",
    "bad_oversized": "Position Too Large",
    "bad_tired": "Fatigued/Tired",
    "bad_stressed": "Stressed/Anxious",
}

GOOD_HABITS: dict[str, str] = {
    "good_well_rested": "Well Rested",
    "good_focused": "Focused & Alert",
    "good_followed_plan": "Followed Trading Plan",
    "good_patient": "Patient Entry",
    "good_disciplined": "Disciplined Risk Management",
    "good_calm": "Calm & Composed",
    "good_proper_sizing": "Proper Position Sizing",
    "good_stuck_to_sl": "Stuck to Stop Loss",
    "good_took_profit": "Took Profit at Target",
    "good_pre_market": "Did Pre-Market Analysis",
    "good_journal_review": "Reviewed Journal Before Trade",
    "good_no_distractions": "Eliminated Distractions",
}


@dataclass
class HabitCounter:
    """Accumulator for one habit tag."""

    wins: int = 0
    total: int = 0

    @property
    def win_rate(self) -> float:
        return self.wins / self.total * 100 if self.total else 0.0


def habit_label(habit_id: str) -> str:
    """Display name of a habit tag, the tag itself when it is not catalogued."""
    return GOOD_HABITS.get(habit_id) or BAD_HABITS.get(habit_id) or habit_id


def habit_frequencies(
    trades: Sequence[Trade],
) -> tuple[dict[str, HabitCounter], dict[str, HabitCounter]]:
    """Count wins and occurrences per good-habit tag and per bad-habit tag."""
    good: dict[str, HabitCounter] = {}
    bad: dict[str, HabitCounter] = {}

    for trade in trades:
        is_win = trade.outcome == "win"
        # Sorted so that ties between tags resolve the same way on every run.
        for tags, counters in ((trade.good_habits, good), (trade.bad_habits, bad)):
            for tag in sorted(tags):
                counter = counters.setdefault(tag, HabitCounter())
                counter.total += 1
                counter.wins += int(is_win)

    return good, bad


def best_good_habit(counters: dict[str, HabitCounter]) -> Optional[tuple[str, HabitCounter]]:
    """Qualifying good habit with the highest win rate."""
    qualifying = [(tag, c) for tag, c in counters.items() if c.total >= GOOD_HABIT_MIN_TRADES]
    if not qualifying:
        return None
    return max(qualifying, key=lambda item: item[1].win_rate)


def worst_bad_habit(counters: dict[str, HabitCounter]) -> Optional[tuple[str, HabitCounter]]:
    """Qualifying bad habit with the lowest win rate."""
    qualifying = [(tag, c) for tag, c in counters.items() if c.total >= BAD_HABIT_MIN_TRADES]
    if not qualifying:
        return None
    return min(qualifying, key=lambda item: item[1].win_rate)


def psychology_insight(trades: Sequence[Trade]) -> Optional[AIInsight]:
    """Report the most destructive bad habit, or failing that the strongest good habit.

    Bad-habit findings win: the mental edge insight is only produced when
    no bad habit falls under the destructive threshold.
    """
    if len(trades) < PSYCHOLOGY_MIN_TRADES:
        return None

    good, bad = habit_frequencies(trades)

    worst = worst_bad_habit(bad)
    if worst is not None and worst[1].win_rate < DESTRUCTIVE_WIN_RATE:
        tag, stats = worst
        return AIInsight(
            id="psychology-warning",
            category="psychology",
            title="Destructive Pattern Found",
            message=(
                f'When experiencing "{habit_label(tag)}", you only win {stats.win_rate:.0f}% '
                f"of trades ({stats.total} instances). Implement safeguards against this."
            ),
            severity="critical",
            confidence=90,
            actionable=True,
        )

    best = best_good_habit(good)
    if best is not None and best[1].win_rate > MENTAL_EDGE_WIN_RATE:
        tag, stats = best
        return AIInsight(
            id="psychology-strength",
            category="psychology",
            title="Mental Edge Identified",
            message=(
                f'Trades when you\'re "{habit_label(tag)}" win {stats.win_rate:.0f}% of the '
                f"time ({stats.total} trades). Prioritize this mental state."
            ),
            severity="positive",
            confidence=85,
            actionable=True,
        )

    return None


def _habit_stat(habit_id: str, habit_type: str, trades: list[Trade]) -> HabitStat:
    wins = sum(1 for t in trades if t.outcome == "win")
    losses = sum(1 for t in trades if t.outcome == "loss")
    total = sum(t.pnl for t in trades)
    return HabitStat(
        id=habit_id,
        label=habit_label(habit_id),
        type=habit_type,
        trades=len(trades),
        wins=wins,
        losses=losses,
        win_rate=wins / len(trades) * 100,
        avg_pnl=total / len(trades),
        total_pnl=total,
    )


def correlate_psychology(trades: Sequence[Trade]) -> PsychologyCorrelation:
    """Per-tag outcome table with the strongest positive and negative factors.

    Args:
        trades: Closed trades in any order.

    Returns:
        PsychologyCorrelation. Factors are ordered by how often they occur;
        top lists hold at most five entries each.
    """
    if not trades:
        return PsychologyCorrelation(
            recommendation=(
                "Start tagging psychology factors on your trades to discover "
                "correlations between mindset and performance."
            ),
        )

    tagged: dict[tuple[str, str], list[Trade]] = {}
    with_factors: list[Trade] = []
    without_factors: list[Trade] = []

    for trade in trades:
        if trade.good_habits or trade.bad_habits:
            with_factors.append(trade)
        else:
            without_factors.append(trade)
        for tag in sorted(trade.good_habits):
            tagged.setdefault((tag, "good"), []).append(trade)
        for tag in sorted(trade.bad_habits):
            tagged.setdefault((tag, "bad"), []).append(trade)

    factors = sorted(
        (_habit_stat(tag, kind, group) for (tag, kind), group in tagged.items()),
        key=lambda f: f.trades,
        reverse=True,
    )
    top_positive = sorted(
        (f for f in factors if f.type == "good"),
        key=lambda f: (-f.win_rate, -f.total_pnl),
    )[:TOP_FACTORS]
    top_negative = sorted(
        (f for f in factors if f.type == "bad"),
        key=lambda f: (f.win_rate, f.total_pnl),
    )[:TOP_FACTORS]

    def _rate(group: list[Trade]) -> float:
        if not group:
            return 0.0
        return sum(1 for t in group if t.outcome == "win") / len(group) * 100

    if len(with_factors) < TAGGED_TRADES_FOR_RECOMMENDATION:
        recommendation = (
            f"Only {len(with_factors)} trades have psychology factors tagged. Tag more "
            f"trades for reliable mindset-performance correlations."
        )
    elif top_positive and top_negative:
        recommendation = (
            f'"{top_positive[0].label}" correlates with {top_positive[0].win_rate:.0f}% win '
            f'rate, while "{top_negative[0].label}" drops to {top_negative[0].win_rate:.0f}%. '
            f"Prioritize positive mental states before entering trades."
        )
    elif top_positive:
        recommendation = (
            f'When you\'re "{top_positive[0].label}", your win rate is '
            f"{top_positive[0].win_rate:.0f}%. Maintain these conditions for best results."
        )
    else:
        recommendation = (
            "Continue tagging psychology factors to build a reliable dataset for mindset analysis."
        )

    return PsychologyCorrelation(
        factors=factors,
        top_positive=top_positive,
        top_negative=top_negative,
        trades_with_factors=len(with_factors),
        trades_without_factors=len(without_factors),
        with_factors_win_rate=_rate(with_factors),
        without_factors_win_rate=_rate(without_factors),
        recommendation=recommendation,
    )
