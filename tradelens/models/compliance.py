"""Playbook rule compliance models."""

from typing import Optional

from pydantic import BaseModel, Field

from tradelens.models.trade import Outcome


class TradeCompliance(BaseModel):
    """How closely one trade followed its strategy's rules."""

    trade_id: str
    strategy_name: str
    instrument: str
    total_rules: int = Field(..., ge=0)
    followed_rules: int = Field(..., ge=0)
    score: float = Field(..., ge=0, le=1, description="Followed / total rules")
    missed_rules: list[str] = Field(default_factory=list)
    pnl: float = 0.0
    outcome: Optional[Outcome] = None

    model_config = {"frozen": True}


class ComplianceGroup(BaseModel):
    """Outcome statistics for a compliance band."""

    trades: int = Field(default=0, ge=0)
    win_rate: float = Field(default=0.0, ge=0, le=100)
    avg_pnl: float = 0.0

    model_config = {"frozen": True}


class MissedRule(BaseModel):
    """A rule and how often it was skipped."""

    text: str
    miss_count: int = Field(..., ge=0)
    total_trades: int = Field(..., ge=1)

    model_config = {"frozen": True}

    @property
    def miss_ratio(self) -> float:
        return self.miss_count / self.total_trades


class ComplianceAnalysis(BaseModel):
    """Rule compliance across all linked trades."""

    overall_score: float = Field(default=0.0, ge=0, le=1)
    trade_scores: list[TradeCompliance] = Field(default_factory=list)
    high_compliance: ComplianceGroup = Field(default_factory=ComplianceGroup)
    low_compliance: ComplianceGroup = Field(default_factory=ComplianceGroup)
    most_missed_rules: list[MissedRule] = Field(default_factory=list)
    recommendation: str = ""

    model_config = {"frozen": True}
