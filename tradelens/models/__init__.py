"""Data models for TradeLens."""

from tradelens.models.trade import Trade
from tradelens.models.strategy import PlaybookStrategy, StrategyRule
from tradelens.models.insight import AIInsight
from tradelens.models.metrics import DrawdownMetrics, PerformanceMetrics, SegmentStats
from tradelens.models.risk import KellyCriterion, PositionSizeGuide, RiskAnalysis, RiskMetrics
from tradelens.models.psychology import HabitStat, PsychologyCorrelation
from tradelens.models.compliance import ComplianceAnalysis, TradeCompliance
from tradelens.models.patterns import (
    HeatmapCell,
    PatternGroup,
    PatternRecognition,
    SetupAnalysis,
    SetupPerformance,
    SmartRecommendation,
)
from tradelens.models.context import (
    LastTradesSummary,
    PatternSummary,
    RecentDaysSummary,
    RecentTrends,
    TradingContext,
)

__all__ = [
    "Trade",
    "PlaybookStrategy",
    "StrategyRule",
    "AIInsight",
    "PerformanceMetrics",
    "DrawdownMetrics",
    "SegmentStats",
    "RiskMetrics",
    "KellyCriterion",
    "PositionSizeGuide",
    "RiskAnalysis",
    "HabitStat",
    "PsychologyCorrelation",
    "ComplianceAnalysis",
    "TradeCompliance",
    "HeatmapCell",
    "PatternGroup",
    "PatternRecognition",
    "SetupAnalysis",
    "SetupPerformance",
    "SmartRecommendation",
    "LastTradesSummary",
    "PatternSummary",
    "RecentDaysSummary",
    "RecentTrends",
    "TradingContext",
]
