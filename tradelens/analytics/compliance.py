"""Playbook rule compliance versus trade outcome."""

from collections import Counter
from typing import Sequence

from tradelens.models import ComplianceAnalysis, PlaybookStrategy, Trade, TradeCompliance
from tradelens.models.compliance import ComplianceGroup, MissedRule

HIGH_COMPLIANCE_SCORE = 0.7
MIN_SCORED_TRADES = 10
TOP_MISSED_RULES = 5


def _group_stats(scores: list[TradeCompliance]) -> ComplianceGroup:
    if not scores:
        return ComplianceGroup()
    wins = sum(1 for s in scores if s.outcome == "win")
    return ComplianceGroup(
        trades=len(scores),
        win_rate=wins / len(scores) * 100,
        avg_pnl=sum(s.pnl for s in scores) / len(scores),
    )


def score_trade(trade: Trade, strategy: PlaybookStrategy) -> TradeCompliance:
    """Score one trade against its strategy's rule checklist."""
    followed = [r for r in strategy.rules if r.id in trade.executed_rules]
    missed = [r.text for r in strategy.rules if r.id not in trade.executed_rules]
    total = len(strategy.rules)
    return TradeCompliance(
        trade_id=trade.id,
        strategy_name=strategy.name,
        instrument=trade.instrument,
        total_rules=total,
        followed_rules=len(followed),
        score=len(followed) / total if total else 0.0,
        missed_rules=missed,
        pnl=trade.pnl,
        outcome=trade.outcome,
    )


def analyze_rule_compliance(
    trades: Sequence[Trade], strategies: Sequence[PlaybookStrategy]
) -> ComplianceAnalysis:
    """Measure how rule-following relates to results.

    Only trades linked to a strategy that has rules are scored. Trades
    following at least 70% of their rules form the high-compliance group.

    Args:
        trades: Closed trades.
        strategies: Playbook strategies; matched to trades by ``id``.

    Returns:
        ComplianceAnalysis, empty with guidance text when nothing is linked.
    """
    empty = ComplianceAnalysis(
        recommendation=(
            "Link trades to playbook strategies and check off rules during execution "
            "for compliance tracking."
        ),
    )
    by_id = {s.id: s for s in strategies if s.id and s.rules}
    if not trades or not by_id:
        return empty

    scores: list[TradeCompliance] = []
    rule_text: dict[str, str] = {}
    applied: Counter = Counter()
    skipped: Counter = Counter()

    for trade in trades:
        strategy = by_id.get(trade.strategy_id) if trade.strategy_id else None
        if strategy is None:
            continue
        scores.append(score_trade(trade, strategy))
        for rule in strategy.rules:
            rule_text[rule.id] = rule.text
            applied[rule.id] += 1
            if rule.id not in trade.executed_rules:
                skipped[rule.id] += 1

    if not scores:
        return empty

    high = _group_stats([s for s in scores if s.score >= HIGH_COMPLIANCE_SCORE])
    low = _group_stats([s for s in scores if s.score < HIGH_COMPLIANCE_SCORE])

    most_missed = sorted(
        (
            MissedRule(text=rule_text[rule_id], miss_count=skipped[rule_id], total_trades=count)
            for rule_id, count in applied.items()
        ),
        key=lambda r: r.miss_ratio,
        reverse=True,
    )[:TOP_MISSED_RULES]

    if high.trades and low.trades:
        if high.win_rate > low.win_rate:
            recommendation = (
                f"When you follow 70%+ of your rules, you win {high.win_rate:.0f}% of trades "
                f"vs {low.win_rate:.0f}% when you don't. Discipline pays."
            )
        else:
            recommendation = (
                "Your compliance score doesn't yet correlate with better outcomes. Review "
                "whether your rules accurately reflect your edge, or collect more data."
            )
    elif len(scores) < MIN_SCORED_TRADES:
        recommendation = (
            f"You have {len(scores)} scored trades. Log at least {MIN_SCORED_TRADES} linked "
            f"trades for reliable compliance analysis."
        )
    else:
        recommendation = (
            "Link more trades to strategies and check off executed rules for deeper "
            "compliance insights."
        )

    return ComplianceAnalysis(
        overall_score=sum(s.score for s in scores) / len(scores),
        trade_scores=scores,
        high_compliance=high,
        low_compliance=low,
        most_missed_rules=most_missed,
        recommendation=recommendation,
    )
