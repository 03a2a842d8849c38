"""Tests for the consolidated trading context.

**Feature: trade-insights**
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from factories import NOW, make_series, make_trade, trade_strategy
from tradelens.analytics.context import build_trading_context, identify_strengths_and_weaknesses
from tradelens.models import (
    LastTradesSummary,
    PatternSummary,
    PerformanceMetrics,
    RecentDaysSummary,
    RecentTrends,
    RiskMetrics,
    SegmentStats,
    Trade,
    TradingContext,
)


class TestEmptyContext:
    """An empty journal gets zero metrics and a single getting-started hint."""

    def test_empty(self):
        context = build_trading_context([], now=NOW)

        assert context.performance == PerformanceMetrics()
        assert context.strengths == []
        assert context.weaknesses == []
        assert context.recommendations == ["Start by logging your first trade to begin analysis"]


class TestSingleTrade:
    """A single winner without a stop loss."""

    def test_single_winner(self):
        context = build_trading_context([make_trade(100, stop_loss=None)], now=NOW)

        assert context.performance.win_rate == 100
        assert context.performance.profit_factor == 0
        assert context.risk_metrics.stop_loss_usage == 0
        assert "Excellent win rate of 100.0%" in context.strengths
        assert "Overall profitable trading" in context.strengths
        assert "Low profit factor of 0.00" in context.weaknesses
        assert "Inconsistent stop loss usage" in context.weaknesses


class TestContextTotality:
    """
    **Feature: trade-insights, Property 13: Context Totality**

    *For any* trade list, the context builds without error and its
    aggregates agree with the input.
    """

    @given(trades=st.lists(trade_strategy(), max_size=40))
    @settings(max_examples=50)
    def test_builds_for_any_trades(self, trades: list[Trade]):
        context = build_trading_context(trades, now=NOW)

        assert context.performance.total_trades == len(trades)
        assert context.recent_trends.last_10_trades.trades == min(10, len(trades))
        assert len(context.patterns.best_setups) <= 3
        assert len(context.patterns.worst_setups) <= 3


class TestStrengthsAndWeaknesses:
    """Threshold rules for qualitative feedback."""

    def _run(self, performance=None, patterns=None, risk=None, trends=None):
        return identify_strengths_and_weaknesses(
            performance or PerformanceMetrics(win_rate=50, profit_factor=1.3, total_pnl=10),
            patterns or PatternSummary(),
            risk or RiskMetrics(stop_loss_usage=70, risk_reward_ratio=1.5),
            trends or RecentTrends(last_30_days=RecentDaysSummary(trade_frequency=1)),
        )

    def test_neutral_middle_band(self):
        assert self._run() == (["Overall profitable trading"], [], [])

    def test_losing_journal(self):
        strengths, weaknesses, recommendations = self._run(
            performance=PerformanceMetrics(win_rate=40, profit_factor=0.8, total_pnl=-200),
        )
        assert strengths == []
        assert weaknesses == [
            "Low win rate of 40.0%",
            "Low profit factor of 0.80",
            "Currently in drawdown",
        ]
        assert recommendations == [
            "Focus on improving trade selection and entry timing",
            "Work on letting winners run longer and cutting losses shorter",
            "Review and refine your trading strategy",
        ]

    def test_risk_rules(self):
        strengths, weaknesses, recommendations = self._run(
            risk=RiskMetrics(stop_loss_usage=90, risk_reward_ratio=0.5, max_consecutive_losses=8),
        )
        assert "Consistent use of stop losses" in strengths
        assert "Poor risk-reward ratios" in weaknesses
        assert "Long losing streaks" in weaknesses
        assert "Consider reducing position size during losing streaks" in recommendations

    def test_trend_and_frequency(self):
        trends = RecentTrends(
            last_10_trades=LastTradesSummary(trades=10, trend="declining"),
            last_30_days=RecentDaysSummary(trades=180, trade_frequency=6),
        )
        _, weaknesses, recommendations = self._run(trends=trends)
        assert weaknesses == ["Recent performance is declining", "Very high trading frequency"]
        assert recommendations == [
            "Take a break and review recent trades for patterns",
            "Consider reducing trade frequency and focusing on quality setups",
        ]

    def test_low_frequency(self):
        trends = RecentTrends(last_30_days=RecentDaysSummary(trades=3, trade_frequency=0.1))
        _, _, recommendations = self._run(trends=trends)
        assert recommendations == ["Consider increasing trading activity if opportunities are available"]

    def test_setups(self):
        patterns = PatternSummary(
            best_setups=[SegmentStats(name="Breakout", trades=5, win_rate=80, avg_pnl=40)],
            worst_setups=[SegmentStats(name="Fade", trades=4, win_rate=25, avg_pnl=-20)],
        )
        strengths, weaknesses, recommendations = self._run(patterns=patterns)
        assert "Strong performance with Breakout setup" in strengths
        assert "Poor performance with Fade setup" in weaknesses
        assert "Focus more on your Breakout setup which has 80.0% win rate" in recommendations
        assert "Avoid or refine your Fade setup" in recommendations

    def test_profitable_worst_setup_is_not_a_weakness(self):
        patterns = PatternSummary(
            worst_setups=[SegmentStats(name="Pullback", trades=4, win_rate=50, avg_pnl=5)],
        )
        _, weaknesses, _ = self._run(patterns=patterns)
        assert weaknesses == []


class TestFullContext:
    """A realistic journal flows through every analyzer."""

    def test_context(self):
        trades = make_series(
            [120, -50, 80, 90, -40, 150, 60, -30, 70, 110],
            setup_name="Breakout",
            session="New York",
        )
        context = build_trading_context(trades, now=NOW)

        assert isinstance(context, TradingContext)
        assert context.performance.total_trades == 10
        assert context.patterns.best_setups[0].name == "Breakout"
        assert context.patterns.time_patterns[0].name == "New York"
        assert context.recent_trends.last_30_days.trades == 10
        assert "Excellent win rate of 70.0%" in context.strengths
        assert "Strong profit factor of 5.67" in context.strengths
