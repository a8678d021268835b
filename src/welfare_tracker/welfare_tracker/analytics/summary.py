from __future__ import annotations

from typing import Optional, Sequence

from ..core import constants
from ..core.enums import AlertType, RiskLevel, Trend
from .metrics import percent
from .model import Alert, EmployeeRiskScore, ExecutiveSummary, KeyMetrics, OverallHealth, PerformanceMetrics


def determine_trend(
    completion_rate: int,
    baseline_rate: Optional[int],
    tolerance: float = constants.TREND_TOLERANCE_POINTS,
) -> Trend:
    """Compare the completion rate with a baseline; ``stable`` when there is none."""
    if baseline_rate is None:
        return Trend.STABLE
    delta = completion_rate - baseline_rate
    if delta > tolerance:
        return Trend.IMPROVING
    if delta < -tolerance:
        return Trend.DECLINING
    return Trend.STABLE


class ExecutiveSummaryBuilder:
    """Folds risk scores and performance metrics into the executive summary.

    Pure: everything it needs is passed in, nothing is read from the store.
    """

    def __init__(
        self,
        *,
        max_critical_alerts: int = constants.MAX_CRITICAL_ALERTS,
        overdue_alert_threshold: int = constants.OVERDUE_ALERT_THRESHOLD,
        target_completion_rate: int = constants.TARGET_COMPLETION_RATE,
        trend_tolerance: float = constants.TREND_TOLERANCE_POINTS,
    ):
        self.max_critical_alerts = max_critical_alerts
        self.overdue_alert_threshold = overdue_alert_threshold
        self.target_completion_rate = target_completion_rate
        self.trend_tolerance = trend_tolerance

    def build(
        self,
        risk_scores: Sequence[EmployeeRiskScore],
        performance: PerformanceMetrics,
        *,
        baseline_completion_rate: Optional[int] = None,
    ) -> ExecutiveSummary:
        total = len(risk_scores)
        critical = [r for r in risk_scores if r.risk_level == RiskLevel.CRITICAL]
        high = [r for r in risk_scores if r.risk_level == RiskLevel.HIGH]
        overdue_employees = sum(1 for r in risk_scores if r.is_overdue)
        engaged = sum(1 for r in risk_scores if r.total_activities > 0)
        completion_rate = performance.summary.completion_rate

        health = OverallHealth(
            total_employees=total,
            high_risk_employees=len(critical) + len(high),
            completion_rate=completion_rate,
            trend=determine_trend(completion_rate, baseline_completion_rate, self.trend_tolerance),
        )
        metrics = KeyMetrics(
            activities_in_period=performance.summary.total_activities,
            overdue_employees=overdue_employees,
            average_completion_days=performance.summary.average_completion_days,
            employee_engagement=percent(engaged, total),
        )

        return ExecutiveSummary(
            overall_health=health,
            key_metrics=metrics,
            alerts=self._alerts(critical, overdue_employees),
            recommendations=self._recommendations(
                critical=len(critical),
                high=len(high),
                overdue=overdue_employees,
                completion_rate=completion_rate,
                has_activity=performance.summary.total_activities > 0,
            ),
        )

    def _alerts(self, critical: Sequence[EmployeeRiskScore], overdue_employees: int) -> list[Alert]:
        # Highest score first, then the longest gap; never-checked employees sort after known gaps.
        ranked = sorted(
            critical,
            key=lambda r: (-r.risk_score, -(r.days_since_last if r.days_since_last is not None else -1), r.name),
        )
        alerts = [
            Alert(
                type=AlertType.CRITICAL,
                message=f"{r.name} requires immediate welfare attention",
                action="Schedule welfare check",
                employee_id=r.employee_id,
            )
            for r in ranked[: self.max_critical_alerts]
        ]
        if overdue_employees > self.overdue_alert_threshold:
            alerts.append(
                Alert(
                    type=AlertType.WARNING,
                    message=f"{overdue_employees} employees are overdue for a welfare check",
                    action="Review overdue list",
                )
            )
        return alerts

    def _recommendations(
        self,
        *,
        critical: int,
        high: int,
        overdue: int,
        completion_rate: int,
        has_activity: bool,
    ) -> list[str]:
        out: list[str] = []
        if critical:
            out.append(f"Arrange immediate checks for {critical} critical-risk employees")
        if high:
            out.append(f"Focus on {high} high-risk employees")
        if overdue > self.overdue_alert_threshold:
            out.append(f"Clear the backlog of {overdue} overdue welfare checks")
        if has_activity and completion_rate < self.target_completion_rate:
            out.append(
                f"Completion rate {completion_rate}% is below the {self.target_completion_rate}% target"
            )
        if not out:
            out.append("Maintain current welfare schedule")
        out.append("Continue monitoring employee welfare patterns")
        return out
