"""Trading performance analytics and insight engine."""

from tradelens.analytics.breakdowns import analyze_patterns
from tradelens.analytics.compliance import analyze_rule_compliance
from tradelens.analytics.context import build_trading_context
from tradelens.analytics.insights import DETECTORS, filter_recent, generate_insights, prioritize_insights
from tradelens.analytics.metrics import (
    calculate_performance,
    drawdown_metrics,
    equity_curve,
    max_drawdown,
    profit_factor,
    sharpe_ratio,
    sort_chronologically,
    win_rate,
)
from tradelens.analytics.patterns import (
    direction_insight,
    instrument_insight,
    session_insight,
    setup_performance,
    strategy_insight,
)
from tradelens.analytics.psychology import correlate_psychology, psychology_insight
from tradelens.analytics.risk import analyze_risk, calculate_risk_metrics, kelly_criterion
from tradelens.analytics.setups import analyze_setups
from tradelens.analytics.trends import recent_trends, streak_insight

__all__ = [
    "analyze_patterns",
    "analyze_rule_compliance",
    "build_trading_context",
    "DETECTORS",
    "filter_recent",
    "generate_insights",
    "prioritize_insights",
    "calculate_performance",
    "drawdown_metrics",
    "equity_curve",
    "max_drawdown",
    "profit_factor",
    "sharpe_ratio",
    "sort_chronologically",
    "win_rate",
    "direction_insight",
    "instrument_insight",
    "session_insight",
    "setup_performance",
    "strategy_insight",
    "correlate_psychology",
    "psychology_insight",
    "analyze_risk",
    "calculate_risk_metrics",
    "kelly_criterion",
    "analyze_setups",
    "recent_trends",
    "streak_insight",
]
