from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import ActivityStatus, WelfareType
from .model import EmployeeActivityStats, WelfareActivity


class ActivityRepository(Protocol):
    """Repository interface for welfare activities.

    Listing methods return the most recent activity first.
    """

    def get_by_id(self, activity_id: str) -> Optional[WelfareActivity]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str, limit: int) -> Sequence[WelfareActivity]:
        raise NotImplementedError

    def get_latest_for_employee(self, employee_id: str) -> Optional[WelfareActivity]:
        raise NotImplementedError

    def list_recent(self, *, limit: int, offset: int = 0) -> Sequence[WelfareActivity]:
        raise NotImplementedError

    def list_between(self, *, start_date: date, end_date: date) -> Sequence[WelfareActivity]:
        raise NotImplementedError

    def get_active_employee_stats(self) -> Sequence[EmployeeActivityStats]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: str,
        welfare_type: WelfareType,
        activity_date: date,
        status: ActivityStatus,
        cycle_number: int,
        days_since_last: Optional[int] = None,
        notes: Optional[str] = None,
        conducted_by: Optional[str] = None,
    ) -> str:
        raise NotImplementedError

    def update(
        self,
        activity_id: str,
        *,
        status: ActivityStatus,
        notes: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError
