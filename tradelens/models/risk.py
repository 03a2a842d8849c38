"""Risk metric models."""

from pydantic import BaseModel, Field

from tradelens.models.metrics import DrawdownMetrics


class RiskMetrics(BaseModel):
    """Risk discipline summary used by the trading context."""

    stop_loss_usage: float = Field(default=0.0, ge=0, le=100, description="% of trades with a stop loss")
    avg_risk_per_trade: float = Field(default=0.0, ge=0, description="Mean stop distance / entry")
    risk_reward_ratio: float = Field(default=0.0, ge=0, description="Mean realized reward / risk")
    max_consecutive_losses: int = Field(default=0, ge=0, description="Longest losing streak")
    max_consecutive_wins: int = Field(default=0, ge=0, description="Longest winning streak")
    risk_score: float = Field(default=0.0, ge=0, le=100, description="Composite risk score (0-100)")

    model_config = {"frozen": True}


class PositionSizeGuide(BaseModel):
    """Suggested risk for one account size."""

    account_size: float = Field(..., gt=0, description="Account size")
    risk_percent: float = Field(..., ge=0, description="Risk per trade percentage")
    risk_amount: float = Field(..., ge=0, description="Amount at risk per trade")
    suggested_position_size: float = Field(..., ge=0, description="Suggested position value")

    model_config = {"frozen": True}


class KellyCriterion(BaseModel):
    """Kelly criterion position sizing result. Percentages are 0-100."""

    kelly_percent: float = Field(default=0.0, description="Full Kelly fraction in percent")
    half_kelly_percent: float = Field(default=0.5, ge=0, description="Half of the clamped Kelly")
    recommended_risk_percent: float = Field(default=1.0, ge=0, description="Recommended risk per trade")
    position_size_guide: list[PositionSizeGuide] = Field(default_factory=list)
    advice: str = Field(default="", description="Templated sizing advice")

    model_config = {"frozen": True}


class RiskAnalysis(BaseModel):
    """Full risk review of a trade history."""

    win_rate: float = Field(default=0.0, ge=0, le=1, description="Win rate as a fraction")
    avg_win: float = Field(default=0.0, description="Average winning P&L")
    avg_loss: float = Field(default=0.0, ge=0, description="Average losing P&L magnitude")
    payoff_ratio: float = Field(default=0.0, ge=0, description="Average win / average loss")
    expectancy: float = Field(default=0.0, description="Expected P&L per trade")
    kelly: KellyCriterion = Field(default_factory=KellyCriterion)
    drawdown: DrawdownMetrics = Field(default_factory=DrawdownMetrics)
    recommendations: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}
