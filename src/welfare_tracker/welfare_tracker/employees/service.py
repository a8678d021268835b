from __future__ import annotations

import logging
from typing import Optional

from ..cache.invalidation import CacheInvalidationCoordinator
from ..common.validators import optional_text, require_max_length, require_non_empty
from ..core.enums import CacheEvent
from ..core.exceptions import NotFoundError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use case: manage the employees that welfare checks are owed to.

    Every write invalidates the affected cache entries before returning, also
    when the write itself raises.
    """

    def __init__(self, employees: EmployeeRepository, invalidator: CacheInvalidationCoordinator):
        self._employees = employees
        self._invalidator = invalidator

    def get_employee(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(str(employee_id))
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")
        return employee

    def create_employee(self, *, name: str, phone_number: Optional[str] = None) -> Employee:
        name = require_max_length(require_non_empty(name, "Name"), "Name", 255)
        phone_number = optional_text(phone_number)

        employee_id = None
        try:
            employee_id = self._employees.create(name=name, phone_number=phone_number)
        finally:
            self._invalidator.handle(CacheEvent.EMPLOYEE_CREATED, employee_id)

        logger.info("created employee %s", employee_id)
        return self.get_employee(employee_id)

    def update_employee(self, employee_id: str, *, name: str, phone_number: Optional[str] = None) -> Employee:
        name = require_max_length(require_non_empty(name, "Name"), "Name", 255)
        phone_number = optional_text(phone_number)
        self.get_employee(employee_id)

        try:
            self._employees.update(str(employee_id), name=name, phone_number=phone_number)
        finally:
            self._invalidator.handle(CacheEvent.EMPLOYEE_UPDATED, str(employee_id))

        return self.get_employee(employee_id)

    def deactivate_employee(self, employee_id: str) -> None:
        """Logical delete: the employee stays on record for activity history."""
        self.get_employee(employee_id)

        try:
            self._employees.set_active(str(employee_id), active=False)
        finally:
            self._invalidator.handle(CacheEvent.EMPLOYEE_DELETED, str(employee_id))

        logger.info("deactivated employee %s", employee_id)
