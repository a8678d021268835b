from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from ...core import constants
from ...core.enums import RiskLevel
from ...core.exceptions import InvalidDerivationInput
from .base import RiskAssessment, RiskInput, RiskRule
from .rules import default_rules

RECOMMENDATIONS = {
    RiskLevel.CRITICAL: "Immediate check required",
    RiskLevel.HIGH: "Schedule within 48 hours",
    RiskLevel.MEDIUM: "Monitor, verify due date",
    RiskLevel.LOW: "Continue regular schedule",
}


def level_for_score(score: float) -> RiskLevel:
    if score >= constants.RISK_CRITICAL_THRESHOLD:
        return RiskLevel.CRITICAL
    if score >= constants.RISK_HIGH_THRESHOLD:
        return RiskLevel.HIGH
    if score >= constants.RISK_MEDIUM_THRESHOLD:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


@dataclass
class RiskScorer:
    """Evaluates the rule cascade; the first rule that returns a score wins.

    This is a heuristic, not a statistical model: the rules are explicit and
    each one can be tested on its own.
    """

    rules: Sequence[RiskRule] = field(default_factory=default_rules)

    def __post_init__(self):
        if not self.rules:
            raise ValueError("RiskScorer needs at least one rule")

    def assess(self, risk_input: RiskInput) -> RiskAssessment:
        for rule in self.rules:
            score: Optional[float] = rule.evaluate(risk_input)
            if score is None:
                continue
            if not 0.0 <= score <= 10.0:
                raise InvalidDerivationInput(f"rule {rule.name} produced out-of-range score {score}")
            level = level_for_score(score)
            return RiskAssessment(
                score=float(score),
                level=level,
                recommendation=RECOMMENDATIONS[level],
                rule=rule.name,
            )

        raise InvalidDerivationInput("no risk rule matched; the cascade must end with a catch-all rule")
