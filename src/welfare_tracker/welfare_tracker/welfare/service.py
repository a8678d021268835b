from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..activities.model import EmployeeActivityStats
from ..activities.repository import ActivityRepository
from ..cache.keys import CacheKeys, CacheTTLConfig
from ..cache.store import CacheStore
from ..common.datetime_utils import now_local
from ..core.constants import DASHBOARD_WEEK_DAYS, DEFAULT_CYCLE_LENGTH_DAYS, DEFAULT_HISTORY_LIMIT
from ..core.enums import ActivityStatus
from ..core.exceptions import InvalidDerivationInput, NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .cycle import days_since, derive_next_due, is_overdue
from .model import DashboardStats, DerivedEmployeeState, EmployeeHistory, EmployeeWithWelfare

logger = logging.getLogger(__name__)


def derive_employee_state(
    employee: Employee,
    last_activity_date: Optional[date],
    *,
    now: datetime,
    cycle_length_days: int = DEFAULT_CYCLE_LENGTH_DAYS,
) -> DerivedEmployeeState:
    """Due date, overdue flag and days since last activity for one employee.

    Raises InvalidDerivationInput when the last activity lies in the future.
    """

    if last_activity_date is not None and last_activity_date > now.date():
        raise InvalidDerivationInput(
            f"employee {employee.employee_id} has an activity dated in the future ({last_activity_date})"
        )

    next_due = derive_next_due(employee.created_at, last_activity_date, cycle_length_days)
    return DerivedEmployeeState(
        next_due=next_due,
        is_overdue=is_overdue(next_due, now, employee.active),
        last_activity_date=last_activity_date,
        days_since_last=days_since(last_activity_date, now),
    )


class WelfareService:
    """Use case: per-employee welfare status and the dashboard counters.

    Results are cached; writes elsewhere invalidate them through
    CacheInvalidationCoordinator.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        activities: ActivityRepository,
        cache: CacheStore,
        *,
        ttls: Optional[CacheTTLConfig] = None,
        cycle_length_days: int = DEFAULT_CYCLE_LENGTH_DAYS,
        strict: bool = False,
    ):
        if cycle_length_days < 0:
            raise InvalidDerivationInput(f"cycle length must not be negative, got {cycle_length_days}")
        self._employees = employees
        self._activities = activities
        self._cache = cache
        self._ttls = ttls or CacheTTLConfig()
        self._cycle_length_days = int(cycle_length_days)
        self._strict = bool(strict)

    @property
    def cycle_length_days(self) -> int:
        return self._cycle_length_days

    def derive_states(
        self, *, now: datetime
    ) -> list[tuple[EmployeeActivityStats, DerivedEmployeeState]]:
        """Derive state for every active employee.

        An employee whose data cannot be derived is skipped with a warning,
        unless the service is strict. Store failures always propagate.
        """

        out: list[tuple[EmployeeActivityStats, DerivedEmployeeState]] = []
        for stats in self._activities.get_active_employee_stats():
            try:
                state = derive_employee_state(
                    stats.employee,
                    stats.last_activity_date,
                    now=now,
                    cycle_length_days=self._cycle_length_days,
                )
            except InvalidDerivationInput as exc:
                if self._strict:
                    raise
                logger.warning("skipping employee %s: %s", stats.employee.employee_id, exc)
                continue
            out.append((stats, state))
        return out

    def get_employees_with_welfare(self, *, now: Optional[datetime] = None) -> list[EmployeeWithWelfare]:
        now = now or now_local()
        return self._cache.get_or_set(
            CacheKeys.employees(),
            lambda: self._build_employees_with_welfare(now),
            self._ttls.employees,
        )

    def _build_employees_with_welfare(self, now: datetime) -> list[EmployeeWithWelfare]:
        logger.info("recomputing employees with welfare status")
        rows = [
            EmployeeWithWelfare(
                employee_id=stats.employee.employee_id,
                name=stats.employee.name,
                phone_number=stats.employee.phone_number,
                active=stats.employee.active,
                created_at=stats.employee.created_at,
                next_due=state.next_due,
                is_overdue=state.is_overdue,
                total_activities=stats.total_activities,
                completed_count=stats.completed_count,
                overdue_count=stats.overdue_count,
                last_activity_date=state.last_activity_date,
                days_since_last=state.days_since_last,
            )
            for stats, state in self.derive_states(now=now)
        ]
        rows.sort(key=lambda r: (r.next_due, r.name))
        return rows

    def get_dashboard_stats(self, *, now: Optional[datetime] = None) -> DashboardStats:
        now = now or now_local()
        return self._cache.get_or_set(
            CacheKeys.dashboard_stats(),
            lambda: self._build_dashboard_stats(now),
            self._ttls.dashboard_stats,
        )

    def _build_dashboard_stats(self, now: datetime) -> DashboardStats:
        logger.info("recomputing dashboard stats")
        today = now.date()
        all_employees = self._employees.list_all()
        states = [state for _, state in self.derive_states(now=now)]
        recent = self._activities.list_between(
            start_date=today - timedelta(days=DASHBOARD_WEEK_DAYS), end_date=today
        )

        return DashboardStats(
            total_employees=len(all_employees),
            active_employees=sum(1 for e in all_employees if e.active),
            overdue_count=sum(1 for s in states if s.is_overdue),
            due_today_count=sum(1 for s in states if s.next_due == today),
            completed_this_week=sum(1 for a in recent if a.status == ActivityStatus.COMPLETED),
        )

    def get_employee_history(
        self,
        employee_id: str,
        *,
        limit: int = DEFAULT_HISTORY_LIMIT,
        now: Optional[datetime] = None,
    ) -> EmployeeHistory:
        if int(limit) < 1:
            raise ValidationError("limit must be at least 1")
        now = now or now_local()
        employee_id = str(employee_id)
        return self._cache.get_or_set(
            CacheKeys.employee_history(employee_id, int(limit)),
            lambda: self._build_history(employee_id, int(limit), now),
            self._ttls.employee_history,
        )

    def _build_history(self, employee_id: str, limit: int, now: datetime) -> EmployeeHistory:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")

        activities: Sequence = self._activities.list_for_employee(employee_id, limit)
        last_activity_date = activities[0].activity_date if activities else None
        state = derive_employee_state(
            employee, last_activity_date, now=now, cycle_length_days=self._cycle_length_days
        )
        return EmployeeHistory(
            employee_id=employee.employee_id,
            name=employee.name,
            active=employee.active,
            next_due=state.next_due,
            is_overdue=state.is_overdue,
            days_since_last=state.days_since_last,
            activities=list(activities),
        )
