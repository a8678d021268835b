from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Iterable

from ..activities.model import WelfareActivity
from ..common.datetime_utils import month_start, shift_months
from ..core.constants import DEFAULT_CYCLE_LENGTH_DAYS, MAX_TREND_MONTHS, MIN_TREND_MONTHS
from ..core.enums import ActivityStatus
from ..core.exceptions import ValidationError
from .metrics import growth, percent
from .model import WelfareTrend


def validate_months(months) -> int:
    try:
        value = int(months)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"months must be an integer, got {months!r}") from exc
    if not MIN_TREND_MONTHS <= value <= MAX_TREND_MONTHS:
        raise ValidationError(f"months must be between {MIN_TREND_MONTHS} and {MAX_TREND_MONTHS}")
    return value


def trend_window_start(today: date, months: int) -> date:
    """First day of the oldest month covered by a ``months`` long window."""
    return shift_months(month_start(today), -(months - 1))


def build_monthly_trends(
    activities: Iterable[WelfareActivity],
    *,
    months: int,
    today: date,
    cycle_length_days: int = DEFAULT_CYCLE_LENGTH_DAYS,
) -> list[WelfareTrend]:
    """One entry per calendar month in the window, most recent month first.

    Months without activity are included with zero counts. Growth figures
    compare each month with the one before it; the oldest month has none.
    ``average_interval_days`` falls back to the cycle length when no
    interval snapshot exists for the month.
    """

    months = validate_months(months)
    first = trend_window_start(today, months)

    by_month: dict[date, list[WelfareActivity]] = defaultdict(list)
    for activity in activities:
        if first <= activity.activity_date <= today:
            by_month[month_start(activity.activity_date)].append(activity)

    chronological: list[WelfareTrend] = []
    previous = None
    for offset in range(months):
        month = shift_months(first, offset)
        rows = by_month.get(month, [])
        completed = sum(1 for a in rows if a.status == ActivityStatus.COMPLETED)
        intervals = [a.days_since_last for a in rows if a.days_since_last is not None]
        rate = percent(completed, len(rows))

        trend = WelfareTrend(
            month=month,
            total_activities=len(rows),
            completed_activities=completed,
            overdue_activities=sum(1 for a in rows if a.status == ActivityStatus.OVERDUE),
            active_employees=len({a.employee_id for a in rows}),
            average_interval_days=(
                round(sum(intervals) / len(intervals), 1) if intervals else float(cycle_length_days)
            ),
            completion_rate=rate,
            completion_growth=rate - previous.completion_rate if previous else 0,
            activity_growth=growth(len(rows), previous.total_activities) if previous else 0,
        )
        chronological.append(trend)
        previous = trend

    chronological.reverse()
    return chronological
