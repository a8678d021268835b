from __future__ import annotations

from datetime import date, datetime

import pytest

from src.welfare_tracker.welfare_tracker.core.enums import ActivityStatus, WelfareType
from src.welfare_tracker.welfare_tracker.core.exceptions import (
    DataUnavailableError,
    InvalidDerivationInput,
    NotFoundError,
    ValidationError,
)

NOW = datetime(2025, 3, 20, 9, 0)


def test_record_first_activity(container, employees):
    employees.add("e1", "Ana", datetime(2025, 1, 1))

    activity = container.activity_service.record_activity(
        employee_id="e1", welfare_type="Welfare Call", notes="  all good  ", now=NOW
    )

    assert activity.cycle_number == 1
    assert activity.days_since_last is None
    assert activity.activity_date == NOW.date()
    assert activity.welfare_type == WelfareType.CALL
    assert activity.status == ActivityStatus.COMPLETED
    assert activity.notes == "all good"


def test_record_next_activity_snapshots_gap(container, employees, activities):
    employees.add("e1", "Ana", datetime(2025, 1, 1))
    activities.add("e1", date(2025, 3, 1), cycle_number=3)

    activity = container.activity_service.record_activity(
        employee_id="e1", welfare_type=WelfareType.VISIT, activity_date=date(2025, 3, 15), now=NOW
    )

    assert activity.cycle_number == 4
    assert activity.days_since_last == 14


def test_record_rejects_bad_input(container, employees):
    employees.add("e1", "Ana", datetime(2025, 1, 1))
    employees.add("e2", "Ben", datetime(2025, 1, 1), active=False)
    service = container.activity_service

    with pytest.raises(InvalidDerivationInput):
        service.record_activity(employee_id="e1", welfare_type="Welfare Call", activity_date=date(2025, 3, 21), now=NOW)
    with pytest.raises(ValidationError):
        service.record_activity(employee_id="e1", welfare_type="Coffee", now=NOW)
    with pytest.raises(ValidationError):
        service.record_activity(employee_id="e1", welfare_type="Welfare Call", status="done", now=NOW)
    with pytest.raises(ValidationError):
        service.record_activity(employee_id="e2", welfare_type="Welfare Call", now=NOW)
    with pytest.raises(NotFoundError):
        service.record_activity(employee_id="nobody", welfare_type="Welfare Call", now=NOW)


def test_recording_evicts_dashboard_and_employee_history(container, employees, activities, cache):
    employees.add("e1", "Ana", datetime(2025, 1, 1))
    employees.add("e2", "Ben", datetime(2025, 1, 1))
    welfare = container.welfare_service

    welfare.get_dashboard_stats(now=NOW)
    welfare.get_employee_history("e1", now=NOW)
    welfare.get_employee_history("e2", now=NOW)
    hits = cache.stats().hits
    welfare.get_dashboard_stats(now=NOW)
    welfare.get_employee_history("e1", now=NOW)
    assert cache.stats().hits == hits + 2

    container.activity_service.record_activity(employee_id="e1", welfare_type="Welfare Call", now=NOW)

    assert cache.get("dashboard:stats") is None
    assert cache.get("employee:e1:history:10") is None
    assert cache.get("employee:e2:history:10") is not None
    assert welfare.get_dashboard_stats(now=NOW).completed_this_week == 1


def test_failed_insert_still_invalidates(container, employees, activities, cache):
    employees.add("e1", "Ana", datetime(2025, 1, 1))
    container.welfare_service.get_dashboard_stats(now=NOW)
    activities.fail_on_create = True

    with pytest.raises(DataUnavailableError):
        container.activity_service.record_activity(employee_id="e1", welfare_type="Welfare Call", now=NOW)

    assert cache.get("dashboard:stats") is None


def test_update_activity(container, employees, activities, cache):
    employees.add("e1", "Ana", datetime(2025, 1, 1))
    recorded = activities.add("e1", date(2025, 3, 1), status=ActivityStatus.PENDING)
    cache.set("activities:1:50", "stale")

    updated = container.activity_service.update_activity(recorded.activity_id, status="completed", notes="done")

    assert updated.status == ActivityStatus.COMPLETED
    assert updated.notes == "done"
    assert cache.get("activities:1:50") is None

    with pytest.raises(NotFoundError):
        container.activity_service.update_activity("missing", status="completed")


def test_list_activities_pages_and_caches(container, employees, activities):
    employees.add("e1", "Ana", datetime(2025, 1, 1))
    for day in range(1, 6):
        activities.add("e1", date(2025, 3, day))

    page = container.activity_service.list_activities(page=2, limit=2)

    assert [a.activity_date.day for a in page.activities] == [3, 2]
    assert container.activity_service.list_activities(page=2, limit=2) is page

    with pytest.raises(ValidationError):
        container.activity_service.list_activities(page=0)
    with pytest.raises(ValidationError):
        container.activity_service.list_activities(limit=500)
