"""Playbook strategy data model."""

from typing import Optional

from pydantic import BaseModel, Field


class StrategyRule(BaseModel):
    """A single checklist rule of a playbook strategy."""

    id: str = Field(..., min_length=1, description="Rule ID")
    text: str = Field(..., description="Rule text")
    phase: str = Field(default="entry", description="Trade phase the rule applies to")
    required: bool = Field(default=True, description="Whether the rule is mandatory")

    model_config = {"frozen": True}


class PlaybookStrategy(BaseModel):
    """Aggregate statistics of a named playbook strategy."""

    id: Optional[str] = Field(default=None, description="Strategy ID")
    name: str = Field(..., min_length=1, description="Strategy name")
    win_rate: float = Field(default=0.0, ge=0, le=100, description="Win rate percentage")
    trades_count: int = Field(default=0, ge=0, description="Number of trades")
    pnl: float = Field(default=0.0, description="Total P&L")
    profit_factor: Optional[float] = Field(default=None, ge=0, description="Profit factor")
    rules: list[StrategyRule] = Field(default_factory=list, description="Checklist rules")

    model_config = {"frozen": True}
