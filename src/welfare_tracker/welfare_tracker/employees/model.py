from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.validators import (
    row_bool,
    row_datetime,
    row_optional_datetime,
    row_optional_text,
    row_text,
)


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee owed periodic welfare checks.

    Note: Plain data object, no database access. Employees are never hard
    deleted while activities reference them; deletion clears ``active``.
    """

    employee_id: str
    name: str
    created_at: datetime
    phone_number: Optional[str] = None
    active: bool = True
    updated_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Employee":
        return cls(
            employee_id=row_text(row, "id"),
            name=row_text(row, "name"),
            phone_number=row_optional_text(row, "phone_number"),
            active=row_bool(row, "active"),
            created_at=row_datetime(row, "created_at"),
            updated_at=row_optional_datetime(row, "updated_at"),
        )
