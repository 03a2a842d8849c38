"""Pattern recognition and setup analysis models."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from tradelens.models.metrics import SegmentStats

RecommendationKind = Literal["strength", "warning", "tip"]


class PatternGroup(BaseModel):
    """Segments of one dimension (instrument, entry hour, day of week...)."""

    category: str = Field(..., description="Dimension name, e.g. 'Entry Hour'")
    patterns: list[SegmentStats] = Field(default_factory=list)

    model_config = {"frozen": True}


class SmartRecommendation(BaseModel):
    """A typed coaching note derived from the pattern groups."""

    kind: RecommendationKind = Field(..., description="strength, warning or tip")
    title: str = Field(..., description="Short headline")
    body: str = Field(..., description="Recommendation text")

    model_config = {"frozen": True}


class HeatmapCell(BaseModel):
    """Win rate of the trades entered on one weekday at one hour."""

    day: str = Field(..., description="Weekday name")
    hour: int = Field(..., ge=0, le=23, description="Entry hour")
    win_rate: float = Field(default=0.0, ge=0, le=100, description="Win rate percentage")
    trades: int = Field(default=0, ge=0, description="Trades in the cell")

    model_config = {"frozen": True}


class PatternRecognition(BaseModel):
    """Every pattern group, the extremes across them, and a weekday/hour heatmap."""

    groups: list[PatternGroup] = Field(default_factory=list)
    top_winning: list[SegmentStats] = Field(default_factory=list)
    top_losing: list[SegmentStats] = Field(default_factory=list)
    recommendations: list[SmartRecommendation] = Field(default_factory=list)
    heatmap: list[HeatmapCell] = Field(default_factory=list)

    model_config = {"frozen": True}


class SetupPerformance(SegmentStats):
    """Full statistics of one setup, including payoff and consistency."""

    losses: int = Field(default=0, ge=0, description="Losing trades")
    breakeven: int = Field(default=0, ge=0, description="Breakeven trades")
    avg_win: float = Field(default=0.0, description="Average winning P&L")
    avg_loss: float = Field(default=0.0, ge=0, description="Average losing P&L magnitude")
    profit_factor: float = Field(default=0.0, ge=0, description="Gross profit / gross loss")
    risk_reward_ratio: float = Field(default=0.0, ge=0, description="Average win / average loss")
    optimal_rrr: float = Field(default=2.0, ge=1, le=10, description="Suggested reward:risk target")
    consistency: float = Field(default=0.0, ge=0, le=100, description="100 minus P&L variation %")


class SetupAnalysis(BaseModel):
    """Per-setup statistics ranked by win rate, with the trader's personal edge."""

    setups: list[SetupPerformance] = Field(default_factory=list)
    top_setups: list[SetupPerformance] = Field(default_factory=list)
    bottom_setups: list[SetupPerformance] = Field(default_factory=list)
    personal_edge: Optional[SetupPerformance] = None
    recommendations: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}
