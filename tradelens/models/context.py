"""TradingContext read model."""

from typing import Literal

from pydantic import BaseModel, Field

from tradelens.models.metrics import PerformanceMetrics, SegmentStats
from tradelens.models.risk import RiskMetrics

TrendDirection = Literal["improving", "declining", "stable"]


class PatternSummary(BaseModel):
    """Setup, instrument and session breakdowns."""

    best_setups: list[SegmentStats] = Field(default_factory=list)
    worst_setups: list[SegmentStats] = Field(default_factory=list)
    instrument_performance: list[SegmentStats] = Field(default_factory=list)
    time_patterns: list[SegmentStats] = Field(default_factory=list)

    model_config = {"frozen": True}


class LastTradesSummary(BaseModel):
    """Performance over the most recent N trades."""

    trades: int = Field(default=0, ge=0)
    win_rate: float = Field(default=0.0, ge=0, le=100)
    total_pnl: float = 0.0
    trend: TrendDirection = "stable"

    model_config = {"frozen": True}


class RecentDaysSummary(BaseModel):
    """Performance over the last N calendar days."""

    trades: int = Field(default=0, ge=0)
    win_rate: float = Field(default=0.0, ge=0, le=100)
    total_pnl: float = 0.0
    trade_frequency: float = Field(default=0.0, ge=0, description="Trades per day")

    model_config = {"frozen": True}


class RecentTrends(BaseModel):
    """Short-term performance windows."""

    last_10_trades: LastTradesSummary = Field(default_factory=LastTradesSummary)
    last_30_days: RecentDaysSummary = Field(default_factory=RecentDaysSummary)

    model_config = {"frozen": True}


class TradingContext(BaseModel):
    """Consolidated analytics read model consumed by reports and the assistant."""

    performance: PerformanceMetrics = Field(default_factory=PerformanceMetrics)
    patterns: PatternSummary = Field(default_factory=PatternSummary)
    risk_metrics: RiskMetrics = Field(default_factory=RiskMetrics)
    recent_trends: RecentTrends = Field(default_factory=RecentTrends)
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}
