"""Performance metric models."""

from pydantic import BaseModel, Field


class PerformanceMetrics(BaseModel):
    """Aggregate performance over a set of trades."""

    total_trades: int = Field(default=0, ge=0, description="Number of trades")
    wins: int = Field(default=0, ge=0, description="Winning trades")
    losses: int = Field(default=0, ge=0, description="Losing trades")
    breakeven: int = Field(default=0, ge=0, description="Breakeven trades")
    win_rate: float = Field(default=0.0, ge=0, le=100, description="Win rate percentage")
    total_pnl: float = Field(default=0.0, description="Total P&L")
    avg_pnl_per_trade: float = Field(default=0.0, description="Average P&L per trade")
    gross_profit: float = Field(default=0.0, ge=0, description="Sum of positive P&L")
    gross_loss: float = Field(default=0.0, ge=0, description="Magnitude of negative P&L")
    avg_win: float = Field(default=0.0, description="Average winning trade P&L")
    avg_loss: float = Field(default=0.0, ge=0, description="Average losing trade P&L magnitude")
    profit_factor: float = Field(default=0.0, ge=0, description="Gross profit / gross loss")
    max_drawdown: float = Field(default=0.0, ge=0, description="Max peak-to-trough P&L decline")
    sharpe_ratio: float = Field(default=0.0, description="Mean P&L / P&L standard deviation")
    expectancy: float = Field(default=0.0, description="Expected P&L per trade")

    model_config = {"frozen": True}


class DrawdownMetrics(BaseModel):
    """Drawdown depth and recovery state of the equity curve."""

    max_drawdown: float = Field(default=0.0, ge=0, description="Max drawdown in P&L units")
    max_drawdown_percent: float = Field(default=0.0, ge=0, description="Max drawdown % of peak")
    current_drawdown_percent: float = Field(default=0.0, ge=0, description="Current drawdown % of peak")
    recovery_trades: int = Field(default=0, ge=0, description="Trades since the drawdown began")

    model_config = {"frozen": True}


class SegmentStats(BaseModel):
    """Win rate and P&L of one segment (direction, session, instrument, setup)."""

    name: str = Field(..., description="Segment name")
    trades: int = Field(..., ge=0, description="Trades in the segment")
    wins: int = Field(default=0, ge=0, description="Winning trades in the segment")
    win_rate: float = Field(default=0.0, ge=0, le=100, description="Win rate percentage")
    avg_pnl: float = Field(default=0.0, description="Average P&L")
    total_pnl: float = Field(default=0.0, description="Total P&L")

    model_config = {"frozen": True}
