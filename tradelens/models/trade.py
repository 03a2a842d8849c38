"""Trade data model."""

import logging
import re
from datetime import date as date_type
from datetime import datetime, time
from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

Direction = Literal["long", "short"]
Outcome = Literal["win", "loss", "breakeven"]

_TAG_SEPARATORS = re.compile(r"[,;|]")


def parse_trade_date(value) -> Optional[datetime]:
    """Parse a journal date into a naive local datetime.

    Returns None instead of raising when the value cannot be parsed.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date_type):
        parsed = datetime.combine(value, time())
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            logger.debug("Unparseable trade date %r", value)
            return None
    else:
        logger.debug("Unsupported trade date type %s", type(value).__name__)
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def parse_entry_time(value) -> Optional[time]:
    """Parse an entry time of day ('09:30', '9:30' or a full timestamp).

    Returns None instead of raising when the value cannot be parsed.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, time):
        return value.replace(tzinfo=None)
    if isinstance(value, str):
        text = value.strip()
        try:
            return time.fromisoformat(text).replace(tzinfo=None)
        except ValueError:
            pass
        parsed = parse_trade_date(text)
        if parsed is not None:
            return parsed.time()
        parts = text.split(":")
        if len(parts) >= 2 and parts[0].isdigit() and parts[1][:2].isdigit():
            hour, minute = int(parts[0]), int(parts[1][:2])
            if hour <= 23 and minute <= 59:
                return time(hour, minute)
    logger.debug("Unparseable entry time %r", value)
    return None


def _parse_tags(value) -> frozenset[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        parts = _TAG_SEPARATORS.split(value)
    else:
        parts = list(value)
    return frozenset(str(p).strip() for p in parts if str(p).strip())


class Trade(BaseModel):
    """Represents a closed trade from the journal."""

    id: str = Field(..., min_length=1, description="Journal trade ID")
    date: Optional[datetime] = Field(default=None, description="Trade date and time")
    entry_time: Optional[time] = Field(
        default=None,
        validation_alias=AliasChoices("entry_time", "trade_start_time"),
        description="Entry time of day",
    )
    instrument: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("instrument", "symbol"),
        description="Instrument symbol",
    )
    direction: Direction = Field(..., description="Trade direction (long/short)")
    entry_price: float = Field(..., ge=0, description="Entry price")
    exit_price: float = Field(..., ge=0, description="Exit price")
    stop_loss: Optional[float] = Field(default=None, ge=0, description="Stop loss price")
    take_profit: Optional[float] = Field(default=None, ge=0, description="Take profit price")
    size: float = Field(default=1.0, ge=0, description="Position size")
    outcome: Outcome = Field(..., description="Trade outcome (win/loss/breakeven)")
    pnl: float = Field(default=0.0, description="Realized P&L")
    setup_name: Optional[str] = Field(default=None, description="Setup name")
    bad_habits: frozenset[str] = Field(
        default_factory=frozenset,
        validation_alias=AliasChoices("bad_habits", "psychology_factors"),
        description="Bad habit / emotion tags",
    )
    good_habits: frozenset[str] = Field(default_factory=frozenset, description="Good habit tags")
    strategy_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("strategy_id", "playbook_strategy_id"),
        description="Linked playbook strategy ID",
    )
    executed_rules: frozenset[str] = Field(
        default_factory=frozenset, description="IDs of playbook rules followed"
    )
    session: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("session", "trade_session"),
        description="Session tag",
    )

    model_config = {"frozen": True, "allow_inf_nan": False}

    @model_validator(mode="before")
    @classmethod
    def _derive_outcome(cls, data):
        # Journals may omit the outcome; fall back to the sign of the P&L.
        if isinstance(data, dict) and not data.get("outcome"):
            try:
                pnl = float(data.get("pnl") or 0)
            except (TypeError, ValueError):
                # Left for the pnl field to reject.
                return data
            data = dict(data)
            data["outcome"] = "win" if pnl > 0 else "loss" if pnl < 0 else "breakeven"
        return data

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value):
        return parse_trade_date(value)

    @field_validator("entry_time", mode="before")
    @classmethod
    def _parse_entry_time(cls, value):
        return parse_entry_time(value)

    @field_validator("bad_habits", "good_habits", "executed_rules", mode="before")
    @classmethod
    def _parse_tag_set(cls, value):
        return _parse_tags(value)

    @field_validator("direction", "outcome", mode="before")
    @classmethod
    def _lowercase(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(int(value)) if float(value).is_integer() else str(value)
        return value

    @property
    def has_stop_loss(self) -> bool:
        """True when a nonzero stop loss was set."""
        return bool(self.stop_loss)

    @property
    def outcome_matches_pnl(self) -> bool:
        """Whether the sign of the P&L agrees with the recorded outcome."""
        if self.outcome == "win":
            return self.pnl > 0
        if self.outcome == "loss":
            return self.pnl < 0
        return True
