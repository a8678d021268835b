from __future__ import annotations

from datetime import datetime

import pytest

from src.welfare_tracker.welfare_tracker.core.exceptions import NotFoundError, ValidationError

NOW = datetime(2025, 3, 20, 9, 0)


def test_create_employee_evicts_roster(container, cache):
    container.welfare_service.get_employees_with_welfare(now=NOW)
    cache.set("analytics:trends:6months", "keep")

    employee = container.employee_service.create_employee(name="  Ana  ", phone_number="")

    assert employee.name == "Ana"
    assert employee.phone_number is None
    assert cache.get("employees:welfare") is None
    assert cache.get("analytics:trends:6months") == "keep"


def test_create_employee_requires_name(container):
    with pytest.raises(ValidationError):
        container.employee_service.create_employee(name="   ")


def test_update_employee(container, employees):
    employees.add("e1", "Ana", NOW)

    updated = container.employee_service.update_employee("e1", name="Ana Lee", phone_number="0400 000 000")

    assert updated.name == "Ana Lee"
    assert updated.phone_number == "0400 000 000"

    with pytest.raises(NotFoundError):
        container.employee_service.update_employee("missing", name="X")


def test_update_employee_refreshes_cached_history(container, employees, cache):
    employees.add("e1", "Ana", NOW)
    employees.add("e2", "Ben", NOW)
    assert container.welfare_service.get_employee_history("e1", now=NOW).name == "Ana"
    container.welfare_service.get_employee_history("e2", now=NOW)

    container.employee_service.update_employee("e1", name="Ana Lee")

    assert cache.get("employee:e2:history:10") is not None
    assert container.welfare_service.get_employee_history("e1", now=NOW).name == "Ana Lee"


def test_deactivate_employee_clears_cache_but_keeps_counters(container, employees, cache):
    employees.add("e1", "Ana", NOW)
    container.welfare_service.get_employees_with_welfare(now=NOW)
    container.welfare_service.get_employees_with_welfare(now=NOW)

    container.employee_service.deactivate_employee("e1")

    assert employees.get_by_id("e1").active is False
    assert cache.size() == 0
    assert cache.stats().hits == 1
    assert container.welfare_service.get_employees_with_welfare(now=NOW) == []
