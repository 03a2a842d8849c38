"""Property-based tests for risk metrics and Kelly sizing.

**Feature: trade-insights**
"""

import math

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from factories import make_series, make_trade, trade_strategy
from tradelens.analytics.risk import (
    analyze_risk,
    avg_risk_per_trade,
    calculate_risk_metrics,
    kelly_criterion,
    max_consecutive_losses,
    max_consecutive_wins,
    risk_reward_ratio,
    risk_score,
    stop_loss_usage,
)
from tradelens.models import RiskMetrics, Trade


class TestRiskScoreBounds:
    """
    **Feature: trade-insights, Property 8: Risk Score Bounds**

    *For any* inputs, the risk score stays within 0 and 100.
    """

    @given(
        stop_usage=st.floats(min_value=0, max_value=100),
        rr_ratio=st.floats(min_value=0, max_value=1000),
        max_losses=st.integers(min_value=0, max_value=1000),
    )
    @settings(max_examples=200)
    def test_score_bounds(self, stop_usage: float, rr_ratio: float, max_losses: int):
        assert 0 <= risk_score(stop_usage, rr_ratio, max_losses) <= 100

    @given(trades=st.lists(trade_strategy(), max_size=40))
    @settings(max_examples=100)
    def test_metrics_bounds(self, trades: list[Trade]):
        metrics = calculate_risk_metrics(trades)
        assert 0 <= metrics.risk_score <= 100
        assert 0 <= metrics.stop_loss_usage <= 100
        assert math.isfinite(metrics.risk_reward_ratio)

    def test_perfect_score(self):
        assert risk_score(100, 2.0, 2) == 100

    def test_streak_penalty(self):
        # 40 + 30 + (30 - 3 * 5)
        assert risk_score(100, 1.0, 8) == 85
        assert risk_score(0, 0, 20) == 0


class TestStopLossDiscipline:
    """Stop-loss usage, risk per trade and realized reward to risk."""

    def test_zero_stop_does_not_count(self):
        trades = [make_trade(10, stop_loss=95), make_trade(10, stop_loss=0), make_trade(10, stop_loss=None)]
        assert math.isclose(stop_loss_usage(trades), 100 / 3)

    def test_avg_risk_per_trade(self):
        trades = [
            make_trade(10, entry_price=100, stop_loss=98),
            make_trade(10, entry_price=200, stop_loss=192),
            make_trade(10, stop_loss=None),
        ]
        assert math.isclose(avg_risk_per_trade(trades), 0.03)

    def test_risk_reward(self):
        trades = [
            make_trade(10, entry_price=100, exit_price=110, stop_loss=95),
            make_trade(-5, entry_price=100, exit_price=99, stop_loss=99),
        ]
        # (10 / 5 + 1 / 1) / 2
        assert math.isclose(risk_reward_ratio(trades), 1.5)

    def test_no_stops(self):
        trades = [make_trade(100, stop_loss=None)]
        assert stop_loss_usage(trades) == 0
        assert risk_reward_ratio(trades) == 0
        assert avg_risk_per_trade(trades) == 0


class TestStreaks:
    """Consecutive runs are counted in chronological order."""

    def test_consecutive_runs(self):
        trades = make_series([10, -5, -5, -5, 10, 10, -5])
        assert max_consecutive_losses(trades) == 3
        assert max_consecutive_wins(trades) == 2

    def test_input_order_ignored(self):
        trades = make_series([-5, -5, 10, -5, -5, -5])
        assert max_consecutive_losses(list(reversed(trades))) == 3

    def test_empty(self):
        assert calculate_risk_metrics([]) == RiskMetrics()


class TestKellyCriterion:
    """
    **Feature: trade-insights, Property 9: Kelly Bounds**

    *For any* win rate and payoff, the recommended risk per trade stays
    between 0.5% and 5%.
    """

    @given(
        win_rate=st.floats(min_value=0.01, max_value=1.0),
        avg_win=st.floats(min_value=0.01, max_value=10000),
        avg_loss=st.floats(min_value=0.01, max_value=10000),
    )
    @settings(max_examples=200)
    def test_recommended_bounds(self, win_rate: float, avg_win: float, avg_loss: float):
        kelly = kelly_criterion(win_rate, avg_win, avg_loss)
        assert 0.5 <= kelly.recommended_risk_percent <= 5.0
        assert 0 <= kelly.half_kelly_percent <= 12.5
        assert len(kelly.position_size_guide) == 6

    def test_insufficient_data(self):
        kelly = kelly_criterion(0.6, 100, 0)
        assert kelly.kelly_percent == 0
        assert kelly.half_kelly_percent == 0.5
        assert kelly.recommended_risk_percent == 1.0
        assert kelly.position_size_guide == []
        assert "Insufficient data" in kelly.advice

    def test_half_kelly(self):
        # kelly = 0.6 - 0.4 / 2 = 0.4, capped at 0.25, halved
        kelly = kelly_criterion(0.6, 200, 100)
        assert kelly.kelly_percent == 40.0
        assert kelly.half_kelly_percent == 12.5
        assert kelly.recommended_risk_percent == 5.0
        assert kelly.advice == "Risk 5.0% per trade based on your 60.0% win rate."

    def test_negative_edge_floors_at_half_percent(self):
        kelly = kelly_criterion(0.3, 50, 100)
        assert kelly.kelly_percent < 0
        assert kelly.recommended_risk_percent == 0.5
        assert "conservative 1% risk" in kelly.advice

    def test_position_size_guide(self):
        kelly = kelly_criterion(0.5, 150, 100)
        guide = kelly.position_size_guide[2]
        # kelly = 0.5 - 0.5 / 1.5 = 1/6, half = 1/12 -> 8.33% clamped to 5%
        assert guide.account_size == 10000
        assert guide.risk_amount == pytest.approx(500)
        assert guide.suggested_position_size == pytest.approx(750)


class TestAnalyzeRisk:
    """Combined risk analysis."""

    def test_empty(self):
        analysis = analyze_risk([])
        assert analysis.win_rate == 0
        assert analysis.kelly.recommended_risk_percent == 1.0
        assert analysis.recommendations == []

    def test_drawdown_recommendation(self):
        analysis = analyze_risk(make_series([100, 100, -40, -60, -50]))

        assert analysis.win_rate == pytest.approx(0.4)
        assert analysis.payoff_ratio == pytest.approx(2.0)
        assert analysis.drawdown.current_drawdown_percent == 75.0
        assert analysis.drawdown.recovery_trades == 3
        assert any("significant drawdown (75.0%)" in r for r in analysis.recommendations)
        # Payoff of 2.0 sits between the low and exceptional thresholds.
        assert not any("profit factor" in r for r in analysis.recommendations)

    def test_no_losses_skips_profit_factor_advice(self):
        analysis = analyze_risk(make_series([100, 50, 80]))
        assert analysis.win_rate == 1.0
        assert not any("profit factor" in r.lower() for r in analysis.recommendations)
        assert analysis.recommendations[0].startswith("Your win rate exceeds 60%")

    def test_profit_factor_advice_uses_payoff_ratio(self):
        # Gross profit factor is 90 / 60 = 1.5, payoff is 30 / 60 = 0.5.
        analysis = analyze_risk(make_series([30, 30, 30, -60]))

        assert analysis.payoff_ratio == pytest.approx(0.5)
        assert any("profit factor is low" in r for r in analysis.recommendations)

    def test_exceptional_payoff(self):
        analysis = analyze_risk(make_series([400, -100]))

        assert analysis.payoff_ratio == pytest.approx(4.0)
        assert any(r.startswith("Exceptional profit factor") for r in analysis.recommendations)
