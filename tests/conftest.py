from __future__ import annotations

from datetime import date, datetime
from typing import Optional

import pytest

from src.welfare_tracker.welfare_tracker.activities.model import EmployeeActivityStats, WelfareActivity
from src.welfare_tracker.welfare_tracker.cache.store import CacheStore
from src.welfare_tracker.welfare_tracker.container import wire_container
from src.welfare_tracker.welfare_tracker.core.enums import ActivityStatus, WelfareType
from src.welfare_tracker.welfare_tracker.core.exceptions import DataUnavailableError
from src.welfare_tracker.welfare_tracker.employees.model import Employee

NOW = datetime(2025, 3, 20, 9, 0, 0)


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class InMemoryEmployees:
    def __init__(self):
        self.by_id: dict[str, Employee] = {}
        self._next_id = 1
        self.fail = False

    def add(self, employee_id: str, name: str, created_at: datetime, *, active: bool = True, phone_number=None):
        self.by_id[employee_id] = Employee(
            employee_id=employee_id,
            name=name,
            created_at=created_at,
            phone_number=phone_number,
            active=active,
        )
        return self.by_id[employee_id]

    def _check(self):
        if self.fail:
            raise DataUnavailableError("employees store offline")

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        self._check()
        return self.by_id.get(str(employee_id))

    def list_all(self):
        self._check()
        return sorted(self.by_id.values(), key=lambda e: e.name)

    def create(self, *, name, phone_number=None) -> str:
        self._check()
        employee_id = f"emp-{self._next_id}"
        self._next_id += 1
        self.add(employee_id, name, NOW, phone_number=phone_number)
        return employee_id

    def update(self, employee_id, *, name, phone_number=None) -> bool:
        self._check()
        current = self.by_id.get(employee_id)
        if not current:
            return False
        self.by_id[employee_id] = Employee(
            employee_id=current.employee_id,
            name=name,
            created_at=current.created_at,
            phone_number=phone_number,
            active=current.active,
            updated_at=NOW,
        )
        return True

    def set_active(self, employee_id, *, active) -> bool:
        self._check()
        current = self.by_id.get(employee_id)
        if not current:
            return False
        self.by_id[employee_id] = Employee(
            employee_id=current.employee_id,
            name=current.name,
            created_at=current.created_at,
            phone_number=current.phone_number,
            active=bool(active),
            updated_at=NOW,
        )
        return True


class InMemoryActivities:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self.by_id: dict[str, WelfareActivity] = {}
        self._next_id = 1
        self.fail = False
        self.fail_on_create = False

    def _check(self):
        if self.fail:
            raise DataUnavailableError("activities store offline")

    def add(
        self,
        employee_id: str,
        activity_date: date,
        *,
        status: ActivityStatus = ActivityStatus.COMPLETED,
        welfare_type: WelfareType = WelfareType.CALL,
        cycle_number: Optional[int] = None,
        days_since_last: Optional[int] = None,
        created_at: Optional[datetime] = None,
        notes: Optional[str] = None,
        conducted_by: Optional[str] = None,
    ) -> WelfareActivity:
        activity_id = f"act-{self._next_id}"
        self._next_id += 1
        if cycle_number is None:
            cycle_number = 1 + sum(1 for a in self.by_id.values() if a.employee_id == employee_id)
        self.by_id[activity_id] = WelfareActivity(
            activity_id=activity_id,
            employee_id=employee_id,
            welfare_type=welfare_type,
            activity_date=activity_date,
            status=status,
            cycle_number=cycle_number,
            created_at=created_at or datetime.combine(activity_date, datetime.min.time()),
            days_since_last=days_since_last,
            notes=notes,
            conducted_by=conducted_by,
        )
        return self.by_id[activity_id]

    def _sorted(self, items):
        return sorted(items, key=lambda a: (a.activity_date, a.created_at, a.activity_id), reverse=True)

    def get_by_id(self, activity_id):
        self._check()
        return self.by_id.get(str(activity_id))

    def list_for_employee(self, employee_id, limit):
        self._check()
        return self._sorted(a for a in self.by_id.values() if a.employee_id == employee_id)[:limit]

    def get_latest_for_employee(self, employee_id):
        rows = self.list_for_employee(employee_id, 1)
        return rows[0] if rows else None

    def list_recent(self, *, limit, offset=0):
        self._check()
        return self._sorted(self.by_id.values())[offset : offset + limit]

    def list_between(self, *, start_date, end_date):
        self._check()
        return self._sorted(a for a in self.by_id.values() if start_date <= a.activity_date <= end_date)

    def get_active_employee_stats(self):
        self._check()
        out = []
        for employee in self._employees.list_all():
            if not employee.active:
                continue
            rows = [a for a in self.by_id.values() if a.employee_id == employee.employee_id]
            out.append(
                EmployeeActivityStats(
                    employee=employee,
                    total_activities=len(rows),
                    completed_count=sum(1 for a in rows if a.status == ActivityStatus.COMPLETED),
                    overdue_count=sum(1 for a in rows if a.status == ActivityStatus.OVERDUE),
                    last_activity_date=max((a.activity_date for a in rows), default=None),
                )
            )
        return out

    def create(
        self,
        *,
        employee_id,
        welfare_type,
        activity_date,
        status,
        cycle_number,
        days_since_last=None,
        notes=None,
        conducted_by=None,
    ) -> str:
        self._check()
        if self.fail_on_create:
            raise DataUnavailableError("insert failed")
        activity = self.add(
            employee_id,
            activity_date,
            status=status,
            welfare_type=welfare_type,
            cycle_number=cycle_number,
            days_since_last=days_since_last,
            created_at=NOW,
            notes=notes,
            conducted_by=conducted_by,
        )
        return activity.activity_id

    def update(self, activity_id, *, status, notes=None) -> bool:
        self._check()
        current = self.by_id.get(activity_id)
        if not current:
            return False
        self.by_id[activity_id] = WelfareActivity(
            activity_id=current.activity_id,
            employee_id=current.employee_id,
            welfare_type=current.welfare_type,
            activity_date=current.activity_date,
            status=status,
            cycle_number=current.cycle_number,
            created_at=current.created_at,
            notes=notes,
            days_since_last=current.days_since_last,
            updated_at=NOW,
        )
        return True


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn

    def execute(self, sql, params=None):
        self._conn.executed.append(sql)

    def fetchone(self):
        return {"health": 1}

    def fetchall(self):
        return []

    def close(self):
        pass


class FakeConnection:
    def __init__(self):
        self.executed: list[str] = []
        self.committed = False

    def cursor(self, dictionary=True):
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        pass

    def close(self):
        pass


class FakeConnFactory:
    def connect(self, *, database=None):
        return FakeConnection()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return CacheStore(default_ttl=300, clock=clock)


@pytest.fixture
def employees():
    return InMemoryEmployees()


@pytest.fixture
def activities(employees):
    return InMemoryActivities(employees)


@pytest.fixture
def container(employees, activities, cache):
    return wire_container(
        conn=FakeConnFactory(),
        employees_repo=employees,
        activities_repo=activities,
        cache=cache,
    )
