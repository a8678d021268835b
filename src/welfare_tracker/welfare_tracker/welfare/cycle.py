"""Welfare cycle calculator.

Pure functions deriving due dates and overdue status from an employee's
activity history. Nothing here touches the database or the cache.

Due dates are calendar dates: an employee whose next check is due today is
not overdue until tomorrow.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

from ..common.datetime_utils import as_date, as_datetime
from ..core.exceptions import InvalidDerivationInput


def _require_cycle_length(cycle_length_days: int) -> int:
    if isinstance(cycle_length_days, bool) or not isinstance(cycle_length_days, int):
        raise InvalidDerivationInput(f"cycle length must be an integer, got {cycle_length_days!r}")
    if cycle_length_days < 0:
        raise InvalidDerivationInput(f"cycle length must not be negative, got {cycle_length_days}")
    return cycle_length_days


def derive_next_due(
    created_at: date | datetime,
    last_activity_date: Optional[date | datetime],
    cycle_length_days: int,
) -> date:
    """Last activity + cycle length, or creation date + cycle length without history."""
    cycle_length_days = _require_cycle_length(cycle_length_days)
    anchor = last_activity_date if last_activity_date is not None else created_at
    return as_date(anchor) + timedelta(days=cycle_length_days)


def is_overdue(next_due: date | datetime, now: date | datetime, is_active: bool) -> bool:
    return bool(is_active) and as_date(next_due) < as_date(now)


def days_since(value: Optional[date | datetime], now: date | datetime) -> Optional[int]:
    """Whole days elapsed from ``value`` to ``now`` (floored); None without a value."""
    if value is None:
        return None

    if type(value) is date or type(now) is date:
        delta = as_date(now) - as_date(value)
    else:
        delta = as_datetime(now) - as_datetime(value)

    if delta < timedelta(0):
        raise InvalidDerivationInput(f"{value!r} is later than {now!r}")
    return delta.days


def next_cycle_number(prior_cycle_number: Optional[int]) -> int:
    """Cycle number for a new activity.

    Informational only: two concurrent inserts for one employee can read the
    same prior number. Callers that need strict ordering serialize writes
    per employee themselves.
    """

    if prior_cycle_number is None:
        return 1
    if prior_cycle_number < 1:
        raise InvalidDerivationInput(f"cycle number must be >= 1, got {prior_cycle_number}")
    return prior_cycle_number + 1


def days_between_activities(previous_date: Optional[date], new_date: date) -> Optional[int]:
    """Snapshot of the gap since the previous activity, stored on insert.

    Backdated activities that predate the latest one get no snapshot.
    """

    if previous_date is None or new_date < previous_date:
        return None
    return (new_date - previous_date).days
