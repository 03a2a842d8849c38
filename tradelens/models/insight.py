"""AIInsight data model."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

InsightCategory = Literal["direction", "strategy", "psychology", "trend", "instrument"]
InsightSeverity = Literal["critical", "warning", "positive", "neutral"]

SEVERITY_RANK: dict[str, int] = {
    "critical": 0,
    "warning": 1,
    "positive": 2,
    "neutral": 3,
}


class AIInsight(BaseModel):
    """A templated insight produced by one of the detectors."""

    id: str = Field(..., description="Detector-specific insight ID")
    category: InsightCategory = Field(..., description="Insight category")
    title: str = Field(..., description="Short headline")
    message: str = Field(..., description="Templated message")
    severity: InsightSeverity = Field(..., description="Severity level")
    confidence: int = Field(..., ge=0, le=100, description="Confidence score (0-100)")
    actionable: bool = Field(default=True, description="Whether the trader can act on it")
    generated_at: datetime = Field(default_factory=datetime.now, description="Generation timestamp")

    model_config = {"frozen": True}

    @property
    def severity_rank(self) -> int:
        """Sort rank of the severity, lower is more urgent."""
        return SEVERITY_RANK[self.severity]
