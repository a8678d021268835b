from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import RiskLevel
from ...core.exceptions import InvalidDerivationInput


@dataclass(frozen=True)
class RiskInput:
    """What the rules look at for one employee.

    ``is_overdue`` is not read by the default cascade; it is carried for
    custom rules passed to RiskScorer.
    """

    total_activities: int
    completed_count: int
    overdue_count: int
    days_since_last: Optional[int]
    is_overdue: bool = False

    def __post_init__(self):
        if min(self.total_activities, self.completed_count, self.overdue_count) < 0:
            raise InvalidDerivationInput("activity counts must not be negative")
        if self.completed_count > self.total_activities:
            raise InvalidDerivationInput("completed activities exceed total activities")
        if self.days_since_last is not None and self.days_since_last < 0:
            raise InvalidDerivationInput("days since last activity must not be negative")

    @property
    def has_activity(self) -> bool:
        return self.total_activities > 0 and self.days_since_last is not None

    @property
    def completion_ratio(self) -> Optional[float]:
        if self.total_activities == 0:
            return None
        return self.completed_count / self.total_activities


@dataclass(frozen=True)
class RiskAssessment:
    score: float
    level: RiskLevel
    recommendation: str
    rule: str


class RiskRule(ABC):
    """Strategy Pattern: one rule of the ordered risk cascade.

    ``evaluate`` returns a score when the rule applies, otherwise None so the
    scorer moves on to the next rule.
    """

    name: str = "rule"

    @abstractmethod
    def evaluate(self, risk_input: RiskInput) -> Optional[float]:
        raise NotImplementedError
