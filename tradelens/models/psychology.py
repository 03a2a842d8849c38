"""Psychology correlation models."""

from typing import Literal

from pydantic import BaseModel, Field


class HabitStat(BaseModel):
    """Outcome statistics for one habit or emotion tag."""

    id: str = Field(..., description="Habit tag ID")
    label: str = Field(..., description="Display name")
    type: Literal["good", "bad"] = Field(..., description="Habit polarity")
    trades: int = Field(..., ge=0, description="Trades carrying the tag")
    wins: int = Field(default=0, ge=0, description="Winning trades")
    losses: int = Field(default=0, ge=0, description="Losing trades")
    win_rate: float = Field(default=0.0, ge=0, le=100, description="Win rate percentage")
    avg_pnl: float = Field(default=0.0, description="Average P&L")
    total_pnl: float = Field(default=0.0, description="Total P&L")

    model_config = {"frozen": True}


class PsychologyCorrelation(BaseModel):
    """Mindset vs. performance summary."""

    factors: list[HabitStat] = Field(default_factory=list)
    top_positive: list[HabitStat] = Field(default_factory=list)
    top_negative: list[HabitStat] = Field(default_factory=list)
    trades_with_factors: int = Field(default=0, ge=0)
    trades_without_factors: int = Field(default=0, ge=0)
    with_factors_win_rate: float = Field(default=0.0, ge=0, le=100)
    without_factors_win_rate: float = Field(default=0.0, ge=0, le=100)
    recommendation: str = Field(default="")

    model_config = {"frozen": True}
