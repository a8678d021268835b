from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..common.validators import (
    row_date,
    row_datetime,
    row_int,
    row_optional_date,
    row_optional_datetime,
    row_optional_int,
    row_optional_text,
    row_text,
)
from ..core.enums import ActivityStatus, WelfareType
from ..core.exceptions import MalformedRecordError
from ..employees.model import Employee


def _row_enum(enum_cls, row: Mapping[str, Any], column: str):
    raw = row_text(row, column)
    try:
        return enum_cls(raw)
    except ValueError as exc:
        raise MalformedRecordError(f"column {column!r} has unknown value {raw!r}") from exc


@dataclass(frozen=True)
class WelfareActivity:
    """Domain entity: one welfare check recorded for an employee."""

    activity_id: str
    employee_id: str
    welfare_type: WelfareType
    activity_date: date
    status: ActivityStatus
    cycle_number: int
    created_at: datetime
    notes: Optional[str] = None
    conducted_by: Optional[str] = None
    days_since_last: Optional[int] = None
    updated_at: Optional[datetime] = None
    employee_name: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "WelfareActivity":
        cycle_number = row_int(row, "cycle_number")
        if cycle_number < 1:
            raise MalformedRecordError(f"cycle_number must be >= 1, got {cycle_number}")
        return cls(
            activity_id=row_text(row, "id"),
            employee_id=row_text(row, "employee_id"),
            welfare_type=_row_enum(WelfareType, row, "welfare_type"),
            activity_date=row_date(row, "activity_date"),
            status=_row_enum(ActivityStatus, row, "status"),
            cycle_number=cycle_number,
            created_at=row_datetime(row, "created_at"),
            notes=row_optional_text(row, "notes"),
            conducted_by=row_optional_text(row, "conducted_by"),
            days_since_last=row_optional_int(row, "days_since_last"),
            updated_at=row_optional_datetime(row, "updated_at"),
            employee_name=row_optional_text(row, "employee_name"),
        )


@dataclass(frozen=True)
class EmployeeActivityStats:
    """Read-model: one active employee plus aggregate counts over their history.

    This is the validated record handed from the data store to the cycle
    calculator and risk scorer.
    """

    employee: Employee
    total_activities: int
    completed_count: int
    overdue_count: int
    last_activity_date: Optional[date] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "EmployeeActivityStats":
        total = row_int(row, "total_activities", default=0)
        completed = row_int(row, "completed_count", default=0)
        overdue = row_int(row, "overdue_count", default=0)
        if completed > total or overdue > total:
            raise MalformedRecordError(
                f"activity counts exceed total ({completed} completed, {overdue} overdue, {total} total)"
            )
        last_activity_date = row_optional_date(row, "last_activity_date")
        if total and last_activity_date is None:
            raise MalformedRecordError("last_activity_date missing for employee with activities")
        return cls(
            employee=Employee.from_row(row),
            total_activities=total,
            completed_count=completed,
            overdue_count=overdue,
            last_activity_date=last_activity_date,
        )


@dataclass(frozen=True)
class ActivityPage:
    page: int
    limit: int
    activities: list[WelfareActivity]
