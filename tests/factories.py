"""Shared trade builders and hypothesis strategies for the test suite."""

from datetime import datetime, timedelta
from itertools import count

from hypothesis import strategies as st

from tradelens.models import PlaybookStrategy, StrategyRule, Trade

NOW = datetime(2024, 6, 28, 17, 0)

_ids = count(1)


def make_trade(
    pnl: float = 10.0,
    *,
    date: datetime | None = None,
    days_ago: float | None = 1,
    direction: str = "long",
    instrument: str = "ES",
    outcome: str | None = None,
    entry_price: float = 100.0,
    exit_price: float | None = None,
    stop_loss: float | None = 95.0,
    **fields,
) -> Trade:
    """Build a valid trade; the outcome follows the P&L sign unless given."""
    if date is None and days_ago is not None:
        date = NOW - timedelta(days=days_ago)
    if exit_price is None:
        exit_price = max(0.0, entry_price + (pnl if direction == "long" else -pnl) / 10)
    data = {
        "id": fields.pop("id", f"t{next(_ids)}"),
        "date": date,
        "instrument": instrument,
        "direction": direction,
        "entry_price": entry_price,
        "exit_price": exit_price,
        "stop_loss": stop_loss,
        "pnl": pnl,
        **fields,
    }
    if outcome is not None:
        data["outcome"] = outcome
    return Trade(**data)


def make_series(pnls: list[float], start_days_ago: int = 20, **fields) -> list[Trade]:
    """Trades one hour apart in the given chronological order."""
    start = NOW - timedelta(days=start_days_ago)
    return [
        make_trade(pnl, date=start + timedelta(hours=i), **fields)
        for i, pnl in enumerate(pnls)
    ]


def make_strategy(name: str, win_rate: float, trades_count: int, **fields) -> PlaybookStrategy:
    return PlaybookStrategy(name=name, win_rate=win_rate, trades_count=trades_count, **fields)


def make_rules(*ids: str) -> list[StrategyRule]:
    return [StrategyRule(id=rule_id, text=f"Rule {rule_id}") for rule_id in ids]


pnl_values = st.floats(min_value=-10000.0, max_value=10000.0, allow_nan=False, allow_infinity=False)


def trade_strategy():
    """Generate valid Trade objects, dated or not, in any order."""
    return st.builds(
        Trade,
        id=st.text(alphabet="abcdef0123456789", min_size=1, max_size=8),
        date=st.one_of(
            st.none(),
            st.datetimes(min_value=datetime(2023, 1, 1), max_value=datetime(2024, 6, 28)),
        ),
        instrument=st.sampled_from(["ES", "NQ", "CL", "GC"]),
        direction=st.sampled_from(["long", "short"]),
        entry_price=st.floats(min_value=1.0, max_value=5000.0, allow_nan=False, allow_infinity=False),
        exit_price=st.floats(min_value=1.0, max_value=5000.0, allow_nan=False, allow_infinity=False),
        stop_loss=st.one_of(
            st.none(),
            st.floats(min_value=0.0, max_value=5000.0, allow_nan=False, allow_infinity=False),
        ),
        outcome=st.sampled_from(["win", "loss", "breakeven"]),
        pnl=pnl_values,
        setup_name=st.one_of(st.none(), st.sampled_from(["Breakout", "Pullback", "Reversal"])),
        bad_habits=st.frozensets(st.sampled_from(["bad_fomo", "bad_revenge", "bad_tired"]), max_size=2),
        good_habits=st.frozensets(st.sampled_from(["good_focused", "good_patient"]), max_size=2),
        session=st.one_of(st.none(), st.sampled_from(["London", "New York", "Asia"])),
    )
