from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import AlertType, RiskLevel, Trend


@dataclass(frozen=True)
class EmployeeRiskScore:
    employee_id: str
    name: str
    next_due: date
    is_overdue: bool
    total_activities: int
    completed_count: int
    overdue_count: int
    last_activity_date: Optional[date]
    days_since_last: Optional[int]
    risk_score: float
    risk_level: RiskLevel
    recommendation: str


@dataclass(frozen=True)
class PerformanceSummary:
    total_activities: int
    completed_activities: int
    overdue_activities: int
    employees_with_activity: int
    average_completion_days: float
    completion_rate: int


@dataclass(frozen=True)
class ActivityPatterns:
    weekday_activities: int
    weekend_activities: int
    weekday_percentage: int


@dataclass(frozen=True)
class PerformanceMetrics:
    start: date
    end: date
    summary: PerformanceSummary
    patterns: ActivityPatterns
    grade: str
    insights: list[str] = field(default_factory=list)
    recommended_actions: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class WelfareTrend:
    """Activity totals for one calendar month."""

    month: date
    total_activities: int
    completed_activities: int
    overdue_activities: int
    active_employees: int
    average_interval_days: float
    completion_rate: int
    completion_growth: int
    activity_growth: int


@dataclass(frozen=True)
class OverallHealth:
    total_employees: int
    high_risk_employees: int
    completion_rate: int
    trend: Trend


@dataclass(frozen=True)
class KeyMetrics:
    activities_in_period: int
    overdue_employees: int
    average_completion_days: float
    employee_engagement: int


@dataclass(frozen=True)
class Alert:
    type: AlertType
    message: str
    action: Optional[str] = None
    employee_id: Optional[str] = None


@dataclass(frozen=True)
class ExecutiveSummary:
    overall_health: OverallHealth
    key_metrics: KeyMetrics
    alerts: list[Alert] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
