from __future__ import annotations

from datetime import date
from typing import Iterable

from ..activities.model import WelfareActivity
from ..core.enums import ActivityStatus
from ..core.exceptions import ValidationError
from .metrics import percent
from .model import ActivityPatterns, PerformanceMetrics, PerformanceSummary

GRADE_THRESHOLDS = ((90, "A"), (80, "B"), (70, "C"), (60, "D"))


def grade_for(completion_rate: int) -> str:
    for threshold, grade in GRADE_THRESHOLDS:
        if completion_rate >= threshold:
            return grade
    return "F"


def _completion_days(activity: WelfareActivity) -> int:
    return abs((activity.activity_date - activity.created_at.date()).days)


def build_performance_metrics(
    activities: Iterable[WelfareActivity],
    *,
    start: date,
    end: date,
) -> PerformanceMetrics:
    """Fold the activities dated within [start, end] into team metrics.

    Activities outside the range are ignored, so callers may pass a wider
    list than the window.
    """

    if start > end:
        raise ValidationError("start date must not be after end date")

    in_range = [a for a in activities if start <= a.activity_date <= end]
    completed = [a for a in in_range if a.status == ActivityStatus.COMPLETED]
    overdue = sum(1 for a in in_range if a.status == ActivityStatus.OVERDUE)
    weekend = sum(1 for a in in_range if a.activity_date.weekday() >= 5)
    weekday = len(in_range) - weekend

    avg_days = 0.0
    if completed:
        avg_days = round(sum(_completion_days(a) for a in completed) / len(completed), 1)

    summary = PerformanceSummary(
        total_activities=len(in_range),
        completed_activities=len(completed),
        overdue_activities=overdue,
        employees_with_activity=len({a.employee_id for a in in_range}),
        average_completion_days=avg_days,
        completion_rate=percent(len(completed), len(in_range)),
    )
    patterns = ActivityPatterns(
        weekday_activities=weekday,
        weekend_activities=weekend,
        weekday_percentage=percent(weekday, len(in_range)),
    )

    if in_range:
        insights = [
            f"Performance data calculated from {start.isoformat()} to {end.isoformat()}",
            f"{summary.completed_activities} activities completed successfully",
            f"Average completion time: {round(avg_days)} days",
        ]
    else:
        insights = ["No welfare activity recorded in this period"]

    actions = [
        "Focus on reducing overdue activities"
        if overdue > 5
        else "Maintain current activity completion rate",
        "Consider weekend coverage optimization"
        if weekend > weekday * 0.4
        else "Good work-life balance maintained",
        "Improve response time to welfare needs"
        if avg_days > 3
        else "Excellent response time performance",
    ]

    return PerformanceMetrics(
        start=start,
        end=end,
        summary=summary,
        patterns=patterns,
        grade=grade_for(summary.completion_rate),
        insights=insights,
        recommended_actions=actions,
    )
