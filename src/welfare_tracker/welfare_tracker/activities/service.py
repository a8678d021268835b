from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..cache.invalidation import CacheInvalidationCoordinator
from ..cache.keys import CacheKeys, CacheTTLConfig
from ..cache.store import CacheStore
from ..common.datetime_utils import now_local
from ..common.validators import optional_text
from ..core.constants import DEFAULT_ACTIVITY_PAGE_SIZE
from ..core.enums import ActivityStatus, CacheEvent, WelfareType
from ..core.exceptions import InvalidDerivationInput, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..welfare.cycle import days_between_activities, next_cycle_number
from .model import ActivityPage, WelfareActivity
from .repository import ActivityRepository

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 200


def parse_welfare_type(value: WelfareType | str) -> WelfareType:
    try:
        return WelfareType(value)
    except ValueError as exc:
        allowed = ", ".join(t.value for t in WelfareType)
        raise ValidationError(f"Unknown welfare type {value!r} (expected one of: {allowed})") from exc


def parse_status(value: ActivityStatus | str) -> ActivityStatus:
    try:
        return ActivityStatus(value)
    except ValueError as exc:
        raise ValidationError(f"Unknown activity status {value!r}") from exc


class WelfareActivityService:
    """Use case: record welfare checks and browse the activity log.

    Cycle numbers are read-then-written without a lock. Two concurrent
    recordings for the same employee may share a cycle number; it is kept
    for information only.
    """

    def __init__(
        self,
        activities: ActivityRepository,
        employees: EmployeeRepository,
        cache: CacheStore,
        invalidator: CacheInvalidationCoordinator,
        *,
        ttls: Optional[CacheTTLConfig] = None,
    ):
        self._activities = activities
        self._employees = employees
        self._cache = cache
        self._invalidator = invalidator
        self._ttls = ttls or CacheTTLConfig()

    def get_activity(self, activity_id: str) -> WelfareActivity:
        activity = self._activities.get_by_id(str(activity_id))
        if not activity:
            raise NotFoundError(f"Welfare activity {activity_id} not found")
        return activity

    def record_activity(
        self,
        *,
        employee_id: str,
        welfare_type: WelfareType | str,
        activity_date: Optional[date] = None,
        status: ActivityStatus | str = ActivityStatus.COMPLETED,
        notes: Optional[str] = None,
        conducted_by: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> WelfareActivity:
        now = now or now_local()
        employee_id = str(employee_id)
        welfare_type = parse_welfare_type(welfare_type)
        status = parse_status(status)
        activity_date = activity_date or now.date()
        if activity_date > now.date():
            raise InvalidDerivationInput(f"Activity date {activity_date} is in the future")

        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")
        if not employee.active:
            raise ValidationError(f"Employee {employee_id} is inactive")

        latest = self._activities.get_latest_for_employee(employee_id)
        cycle_number = next_cycle_number(latest.cycle_number if latest else None)
        days_since_last = days_between_activities(latest.activity_date if latest else None, activity_date)

        try:
            activity_id = self._activities.create(
                employee_id=employee_id,
                welfare_type=welfare_type,
                activity_date=activity_date,
                status=status,
                cycle_number=cycle_number,
                days_since_last=days_since_last,
                notes=optional_text(notes),
                conducted_by=optional_text(conducted_by),
            )
        finally:
            self._invalidator.handle(CacheEvent.ACTIVITY_RECORDED, employee_id)

        logger.info(
            "recorded %s for employee %s (cycle %d)", welfare_type.value, employee_id, cycle_number
        )
        return self.get_activity(activity_id)

    def update_activity(
        self,
        activity_id: str,
        *,
        status: ActivityStatus | str,
        notes: Optional[str] = None,
    ) -> WelfareActivity:
        current = self.get_activity(activity_id)
        status = parse_status(status)

        try:
            self._activities.update(current.activity_id, status=status, notes=optional_text(notes))
        finally:
            self._invalidator.handle(CacheEvent.ACTIVITY_UPDATED, current.employee_id)

        return self.get_activity(activity_id)

    def list_activities(self, *, page: int = 1, limit: int = DEFAULT_ACTIVITY_PAGE_SIZE) -> ActivityPage:
        page, limit = int(page), int(limit)
        if page < 1:
            raise ValidationError("page must be at least 1")
        if not 1 <= limit <= MAX_PAGE_SIZE:
            raise ValidationError(f"limit must be between 1 and {MAX_PAGE_SIZE}")

        def load() -> ActivityPage:
            rows = self._activities.list_recent(limit=limit, offset=(page - 1) * limit)
            return ActivityPage(page=page, limit=limit, activities=list(rows))

        return self._cache.get_or_set(CacheKeys.activities(page, limit), load, self._ttls.activities)
