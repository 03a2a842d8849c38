"""Load trade journals and playbook strategies from disk.

Trades are read from JSON (a list of objects, or ``{"trades": [...]}``) or
CSV. Every record is validated into a frozen ``Trade`` once, here, so the
analytics never see raw journal data.
"""

import json
import logging
from pathlib import Path
from typing import Any, Union

from pydantic import ValidationError

from tradelens.models import PlaybookStrategy, Trade

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class TradeLoadError(ValueError):
    """Raised when a journal file cannot be read or a record is invalid."""

    def __init__(self, message: str, row: int | None = None):
        self.row = row
        if row is not None:
            message = f"Row {row}: {message}"
        super().__init__(message)


def _read_json(path: Path, key: str) -> list[dict[str, Any]]:
    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise TradeLoadError(f"{path} is not valid JSON: {e}") from e

    if isinstance(data, dict):
        data = data.get(key, [])
    if not isinstance(data, list):
        raise TradeLoadError(f"{path} must contain a list of {key} or a '{key}' key")
    return data


def _read_csv(path: Path) -> list[dict[str, Any]]:
    import pandas as pd

    # Read every cell as text so numeric tickers, setup names and ids keep
    # their exact spelling; the Trade model coerces prices and P&L.
    try:
        df = pd.read_csv(path, dtype=str)
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise TradeLoadError(f"{path} is not a readable CSV file: {e}") from e

    # Empty cells come back as NaN; the models expect missing values.
    df = df.astype(object).where(df.notna(), None)
    return [
        {k: v for k, v in record.items() if v is not None}
        for record in df.to_dict(orient="records")
    ]


def _read_records(path: PathLike, key: str) -> list[dict[str, Any]]:
    path = Path(path)
    if not path.exists():
        raise TradeLoadError(f"File not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".json":
        return _read_json(path, key)
    if suffix == ".csv":
        return _read_csv(path)
    raise TradeLoadError(f"Unsupported file type '{path.suffix}' (expected .json or .csv)")


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(p) for p in first["loc"]) or "record"
    return f"{field}: {first['msg']}"


def load_trades(path: PathLike, skip_invalid: bool = False) -> list[Trade]:
    """Load and validate closed trades.

    Args:
        path: JSON or CSV journal file.
        skip_invalid: Log and skip invalid rows instead of failing.

    Returns:
        Validated trades, in file order.

    Raises:
        TradeLoadError: If the file is unreadable, or a row is invalid and
            ``skip_invalid`` is False.
    """
    records = _read_records(path, "trades")

    trades: list[Trade] = []
    skipped = 0
    for row, record in enumerate(records, start=1):
        if not isinstance(record, dict):
            error = TradeLoadError("expected an object", row=row)
            if not skip_invalid:
                raise error
            logger.warning("Skipping %s", error)
            skipped += 1
            continue
        try:
            trades.append(Trade.model_validate(record))
        except ValidationError as e:
            if not skip_invalid:
                raise TradeLoadError(_describe(e), row=row) from e
            logger.warning("Skipping row %d: %s", row, _describe(e))
            skipped += 1

    mismatched = sum(1 for t in trades if not t.outcome_matches_pnl)
    if mismatched:
        logger.warning("%d trades have an outcome that disagrees with the sign of their P&L", mismatched)
    logger.debug("Loaded %d trades from %s (%d skipped)", len(trades), path, skipped)
    return trades


def load_strategies(path: PathLike) -> list[PlaybookStrategy]:
    """Load playbook strategies from JSON.

    Raises:
        TradeLoadError: If the file is unreadable or a strategy is invalid.
    """
    if Path(path).suffix.lower() != ".json":
        raise TradeLoadError(f"Strategies must be a .json file: {path}")

    strategies = []
    for row, record in enumerate(_read_records(path, "strategies"), start=1):
        try:
            strategies.append(PlaybookStrategy.model_validate(record))
        except ValidationError as e:
            raise TradeLoadError(_describe(e), row=row) from e
    return strategies
