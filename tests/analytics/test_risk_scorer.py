import pytest

from src.welfare_tracker.welfare_tracker.analytics.risk.base import RiskInput, RiskRule
from src.welfare_tracker.welfare_tracker.analytics.risk.rules import BaselineRule, DaysSinceLastRule, NoActivityRule
from src.welfare_tracker.welfare_tracker.analytics.risk.scorer import RiskScorer, level_for_score
from src.welfare_tracker.welfare_tracker.core.enums import RiskLevel
from src.welfare_tracker.welfare_tracker.core.exceptions import InvalidDerivationInput


def _input(total=4, completed=4, overdue=0, days=3):
    return RiskInput(total_activities=total, completed_count=completed, overdue_count=overdue, days_since_last=days)


def test_no_activity_always_scores_eight():
    result = RiskScorer().assess(_input(total=0, completed=0, overdue=0, days=None))

    assert result.score == 8.0
    assert result.level == RiskLevel.CRITICAL
    assert result.recommendation == "Immediate check required"
    assert result.rule == "no_activity"


@pytest.mark.parametrize(
    "risk_input, score, level",
    [
        (_input(days=22), 9.0, RiskLevel.CRITICAL),
        (_input(days=21), 7.0, RiskLevel.HIGH),
        (_input(days=15), 7.0, RiskLevel.HIGH),
        (_input(days=14, total=10, completed=6, overdue=4), 6.0, RiskLevel.HIGH),
        (_input(total=10, completed=7, overdue=0), 5.0, RiskLevel.MEDIUM),
        (_input(total=10, completed=8, overdue=2), 2.0, RiskLevel.LOW),
    ],
)
def test_cascade_first_matching_rule_wins(risk_input, score, level):
    result = RiskScorer().assess(risk_input)

    assert result.score == score
    assert result.level == level


def test_long_gap_beats_overdue_history():
    result = RiskScorer().assess(_input(days=30, total=10, completed=2, overdue=8))
    assert result.score == 9.0


def test_score_rises_as_gap_grows():
    scorer = RiskScorer()
    scores = [scorer.assess(_input(days=d)).score for d in (3, 15, 22)]
    assert scores == sorted(scores)
    assert len(set(scores)) == 3


def test_levels_and_recommendations():
    assert level_for_score(8.0) == RiskLevel.CRITICAL
    assert level_for_score(6.0) == RiskLevel.HIGH
    assert level_for_score(4.0) == RiskLevel.MEDIUM
    assert level_for_score(3.9) == RiskLevel.LOW
    scorer = RiskScorer()
    assert scorer.assess(_input(days=22)).recommendation == "Immediate check required"
    assert scorer.assess(_input(days=15)).recommendation == "Schedule within 48 hours"
    assert scorer.assess(_input(total=10, completed=7)).recommendation == "Monitor, verify due date"
    assert scorer.assess(_input()).recommendation == "Continue regular schedule"


def test_invalid_input_is_rejected():
    with pytest.raises(InvalidDerivationInput):
        _input(total=2, completed=3)
    with pytest.raises(InvalidDerivationInput):
        _input(days=-1)


def test_custom_rules_can_be_supplied():
    scorer = RiskScorer(rules=[NoActivityRule(score=10.0), DaysSinceLastRule(7, 6.5), BaselineRule(1.0)])

    assert scorer.assess(_input(days=8)).score == 6.5
    assert scorer.assess(_input(days=2)).level == RiskLevel.LOW


class _Broken(RiskRule):
    name = "broken"

    def evaluate(self, risk_input):
        return 11.0


def test_out_of_range_rule_score_is_rejected():
    with pytest.raises(InvalidDerivationInput):
        RiskScorer(rules=[_Broken()]).assess(_input())


def test_cascade_without_catch_all_fails_loudly():
    with pytest.raises(InvalidDerivationInput):
        RiskScorer(rules=[NoActivityRule()]).assess(_input())


class OverdueFlagRule(RiskRule):
    name = "overdue_flag"

    def evaluate(self, risk_input):
        return 6.0 if risk_input.is_overdue else None


def test_custom_rule_can_read_overdue_flag():
    scorer = RiskScorer(rules=[OverdueFlagRule(), BaselineRule()])

    flagged = scorer.assess(RiskInput(total_activities=4, completed_count=4, overdue_count=0, days_since_last=3, is_overdue=True))
    assert (flagged.score, flagged.level, flagged.rule) == (6.0, RiskLevel.HIGH, "overdue_flag")

    # the default cascade ignores the flag
    assert RiskScorer().assess(
        RiskInput(total_activities=4, completed_count=4, overdue_count=0, days_since_last=3, is_overdue=True)
    ).level == RiskLevel.LOW
