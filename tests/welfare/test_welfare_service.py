from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from src.welfare_tracker.welfare_tracker.core.enums import ActivityStatus
from src.welfare_tracker.welfare_tracker.core.exceptions import (
    DataUnavailableError,
    InvalidDerivationInput,
    NotFoundError,
    ValidationError,
)
from src.welfare_tracker.welfare_tracker.welfare.service import WelfareService, derive_employee_state

DAY0 = datetime(2025, 1, 1, 9, 0)


def _service(employees, activities, cache, **kwargs):
    return WelfareService(employees, activities, cache, **kwargs)


def test_employee_without_activity_becomes_overdue_after_one_cycle(employees):
    emp = employees.add("e1", "Ana", DAY0)

    state = derive_employee_state(emp, None, now=DAY0 + timedelta(days=15))

    assert state.next_due == date(2025, 1, 15)
    assert state.is_overdue is True
    assert state.days_since_last is None


def test_recent_activity_is_not_overdue(employees):
    emp = employees.add("e1", "Ana", DAY0 - timedelta(days=60))

    state = derive_employee_state(emp, DAY0.date(), now=DAY0 + timedelta(days=10))

    assert state.is_overdue is False
    assert state.days_since_last == 10


def test_future_activity_is_rejected(employees):
    emp = employees.add("e1", "Ana", DAY0)

    with pytest.raises(InvalidDerivationInput):
        derive_employee_state(emp, date(2025, 2, 1), now=DAY0)


def test_negative_cycle_length_is_rejected(employees, activities, cache):
    with pytest.raises(InvalidDerivationInput):
        _service(employees, activities, cache, cycle_length_days=-1)


def test_employees_with_welfare_sorted_by_due_date(employees, activities, cache):
    employees.add("e1", "Ana", DAY0)
    employees.add("e2", "Ben", DAY0)
    employees.add("e3", "Cy", DAY0, active=False)
    activities.add("e1", date(2025, 1, 10))

    rows = _service(employees, activities, cache).get_employees_with_welfare(now=DAY0 + timedelta(days=16))

    assert [r.employee_id for r in rows] == ["e2", "e1"]
    assert rows[0].is_overdue is True
    assert rows[1].next_due == date(2025, 1, 24)
    assert rows[1].total_activities == 1


def test_employees_with_welfare_is_cached(employees, activities, cache):
    employees.add("e1", "Ana", DAY0)
    service = _service(employees, activities, cache)

    first = service.get_employees_with_welfare(now=DAY0)
    employees.add("e2", "Ben", DAY0)
    second = service.get_employees_with_welfare(now=DAY0)

    assert second is first
    assert cache.stats().hits == 1


def test_bad_employee_is_skipped_unless_strict(employees, activities, cache):
    employees.add("e1", "Ana", DAY0)
    employees.add("e2", "Ben", DAY0)
    activities.add("e2", date(2025, 3, 1))

    rows = _service(employees, activities, cache).get_employees_with_welfare(now=DAY0)
    assert [r.employee_id for r in rows] == ["e1"]

    cache.clear()
    with pytest.raises(InvalidDerivationInput):
        _service(employees, activities, cache, strict=True).get_employees_with_welfare(now=DAY0)


def test_store_failure_propagates_and_is_not_cached(employees, activities, cache):
    employees.add("e1", "Ana", DAY0)
    activities.fail = True

    with pytest.raises(DataUnavailableError):
        _service(employees, activities, cache).get_dashboard_stats(now=DAY0)

    assert cache.size() == 0


def test_dashboard_stats(employees, activities, cache):
    now = datetime(2025, 1, 20, 12, 0)
    employees.add("e1", "Ana", DAY0)
    employees.add("e2", "Ben", DAY0)
    employees.add("e3", "Cy", DAY0, active=False)
    employees.add("e4", "Dee", datetime(2025, 1, 6))
    activities.add("e1", date(2025, 1, 18))
    activities.add("e1", date(2025, 1, 17), status=ActivityStatus.PENDING)

    stats = _service(employees, activities, cache).get_dashboard_stats(now=now)

    assert stats.total_employees == 4
    assert stats.active_employees == 3
    assert stats.overdue_count == 1
    assert stats.due_today_count == 1
    assert stats.completed_this_week == 1


def test_employee_history(employees, activities, cache):
    employees.add("e1", "Ana", DAY0)
    for day in (2, 9, 16):
        activities.add("e1", date(2025, 1, day))

    history = _service(employees, activities, cache).get_employee_history(
        "e1", limit=2, now=datetime(2025, 1, 20)
    )

    assert [a.activity_date.day for a in history.activities] == [16, 9]
    assert history.next_due == date(2025, 1, 30)
    assert history.days_since_last == 4
    assert cache.get("employee:e1:history:2") is history


def test_employee_history_errors(employees, activities, cache):
    service = _service(employees, activities, cache)

    with pytest.raises(NotFoundError):
        service.get_employee_history("missing", now=DAY0)
    with pytest.raises(ValidationError):
        service.get_employee_history("missing", limit=0, now=DAY0)
