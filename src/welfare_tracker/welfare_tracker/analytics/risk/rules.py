from __future__ import annotations

from typing import Optional

from ...core import constants
from .base import RiskInput, RiskRule


class NoActivityRule(RiskRule):
    """No welfare check ever recorded."""

    name = "no_activity"

    def __init__(self, score: float = constants.RISK_SCORE_NO_ACTIVITY):
        self.score = score

    def evaluate(self, risk_input: RiskInput) -> Optional[float]:
        if not risk_input.has_activity:
            return self.score
        return None


class DaysSinceLastRule(RiskRule):
    """Last check is more than ``threshold_days`` old."""

    def __init__(self, threshold_days: int, score: float):
        self.threshold_days = threshold_days
        self.score = score
        self.name = f"days_since_last_over_{threshold_days}"

    def evaluate(self, risk_input: RiskInput) -> Optional[float]:
        if risk_input.days_since_last is not None and risk_input.days_since_last > self.threshold_days:
            return self.score
        return None


class OverdueHistoryRule(RiskRule):
    """Too many activities that ended up overdue."""

    name = "overdue_history"

    def __init__(
        self,
        limit: int = constants.RISK_OVERDUE_HISTORY_LIMIT,
        score: float = constants.RISK_SCORE_OVERDUE_HISTORY,
    ):
        self.limit = limit
        self.score = score

    def evaluate(self, risk_input: RiskInput) -> Optional[float]:
        if risk_input.overdue_count > self.limit:
            return self.score
        return None


class CompletionRatioRule(RiskRule):
    name = "low_completion"

    def __init__(
        self,
        min_ratio: float = constants.RISK_MIN_COMPLETION_RATIO,
        score: float = constants.RISK_SCORE_LOW_COMPLETION,
    ):
        self.min_ratio = min_ratio
        self.score = score

    def evaluate(self, risk_input: RiskInput) -> Optional[float]:
        ratio = risk_input.completion_ratio
        if ratio is not None and ratio < self.min_ratio:
            return self.score
        return None


class BaselineRule(RiskRule):
    """Always applies; keep it last."""

    name = "baseline"

    def __init__(self, score: float = constants.RISK_SCORE_BASELINE):
        self.score = score

    def evaluate(self, risk_input: RiskInput) -> Optional[float]:
        return self.score


def default_rules() -> list[RiskRule]:
    """The cascade in priority order. The rules overlap, so order matters."""
    return [
        NoActivityRule(),
        DaysSinceLastRule(constants.RISK_SEVERE_GAP_DAYS, constants.RISK_SCORE_SEVERE_GAP),
        DaysSinceLastRule(constants.RISK_GAP_DAYS, constants.RISK_SCORE_GAP),
        OverdueHistoryRule(),
        CompletionRatioRule(),
        BaselineRule(),
    ]
