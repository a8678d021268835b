from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "id, name, phone_number, active, created_at, updated_at"


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE id=%s", (employee_id,))
            row = fetchone(cur)
            if not row:
                return None
            return Employee.from_row(row)

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY name ASC")
            return [Employee.from_row(r) for r in fetchall(cur)]

    def create(self, *, name: str, phone_number: Optional[str] = None) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(name, phone_number, active)
                VALUES(%s,%s,1)
                """,
                (name, phone_number),
            )
            return str(cur.lastrowid)

    def update(self, employee_id: str, *, name: str, phone_number: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET name=%s, phone_number=%s
                WHERE id=%s
                """,
                (name, phone_number, employee_id),
            )
            return cur.rowcount > 0

    def set_active(self, employee_id: str, *, active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE employees SET active=%s WHERE id=%s", (1 if active else 0, employee_id))
            return cur.rowcount > 0
