from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..activities.model import WelfareActivity


@dataclass(frozen=True)
class DerivedEmployeeState:
    """Computed on read, never persisted."""

    next_due: date
    is_overdue: bool
    last_activity_date: Optional[date] = None
    days_since_last: Optional[int] = None


@dataclass(frozen=True)
class EmployeeWithWelfare:
    employee_id: str
    name: str
    phone_number: Optional[str]
    active: bool
    created_at: datetime
    next_due: date
    is_overdue: bool
    total_activities: int
    completed_count: int
    overdue_count: int
    last_activity_date: Optional[date] = None
    days_since_last: Optional[int] = None


@dataclass(frozen=True)
class EmployeeHistory:
    employee_id: str
    name: str
    active: bool
    next_due: date
    is_overdue: bool
    days_since_last: Optional[int]
    activities: list[WelfareActivity] = field(default_factory=list)


@dataclass(frozen=True)
class DashboardStats:
    total_employees: int
    active_employees: int
    overdue_count: int
    due_today_count: int
    completed_this_week: int
