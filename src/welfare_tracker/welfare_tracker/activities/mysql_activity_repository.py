from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import ActivityStatus, WelfareType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import EmployeeActivityStats, WelfareActivity
from .repository import ActivityRepository

_COLUMNS = """
    wa.id, wa.employee_id, wa.welfare_type, wa.activity_date, wa.status, wa.notes,
    wa.cycle_number, wa.days_since_last, wa.conducted_by, wa.created_at, wa.updated_at,
    e.name AS employee_name
"""


class MySQLActivityRepository(ActivityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, activity_id: str) -> Optional[WelfareActivity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM welfare_activities wa
                JOIN employees e ON e.id = wa.employee_id
                WHERE wa.id=%s
                """,
                (activity_id,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return WelfareActivity.from_row(row)

    def list_for_employee(self, employee_id: str, limit: int) -> Sequence[WelfareActivity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM welfare_activities wa
                JOIN employees e ON e.id = wa.employee_id
                WHERE wa.employee_id=%s
                ORDER BY wa.activity_date DESC, wa.created_at DESC
                LIMIT %s
                """,
                (employee_id, int(limit)),
            )
            return [WelfareActivity.from_row(r) for r in fetchall(cur)]

    def get_latest_for_employee(self, employee_id: str) -> Optional[WelfareActivity]:
        rows = self.list_for_employee(employee_id, 1)
        return rows[0] if rows else None

    def list_recent(self, *, limit: int, offset: int = 0) -> Sequence[WelfareActivity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM welfare_activities wa
                JOIN employees e ON e.id = wa.employee_id
                ORDER BY wa.activity_date DESC, wa.created_at DESC
                LIMIT %s OFFSET %s
                """,
                (int(limit), int(offset)),
            )
            return [WelfareActivity.from_row(r) for r in fetchall(cur)]

    def list_between(self, *, start_date: date, end_date: date) -> Sequence[WelfareActivity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM welfare_activities wa
                JOIN employees e ON e.id = wa.employee_id
                WHERE wa.activity_date BETWEEN %s AND %s
                ORDER BY wa.activity_date DESC, wa.created_at DESC
                """,
                (start_date, end_date),
            )
            return [WelfareActivity.from_row(r) for r in fetchall(cur)]

    def get_active_employee_stats(self) -> Sequence[EmployeeActivityStats]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    e.id, e.name, e.phone_number, e.active, e.created_at, e.updated_at,
                    COUNT(wa.id) AS total_activities,
                    COALESCE(SUM(wa.status = 'completed'), 0) AS completed_count,
                    COALESCE(SUM(wa.status = 'overdue'), 0) AS overdue_count,
                    MAX(wa.activity_date) AS last_activity_date
                FROM employees e
                LEFT JOIN welfare_activities wa ON wa.employee_id = e.id
                WHERE e.active = 1
                GROUP BY e.id, e.name, e.phone_number, e.active, e.created_at, e.updated_at
                ORDER BY e.name ASC
                """
            )
            return [EmployeeActivityStats.from_row(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO welfare_activities(
                    employee_id, welfare_type, activity_date, status, notes,
                    conducted_by, cycle_number, days_since_last
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    employee_id,
                    welfare_type.value,
                    activity_date,
                    status.value,
                    notes,
                    conducted_by,
                    int(cycle_number),
                    days_since_last,
                ),
            )
            return str(cur.lastrowid)

    def update(self, activity_id: str, *, status: ActivityStatus, notes: Optional[str] = None) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE welfare_activities
                SET status=%s, notes=%s
                WHERE id=%s
                """,
                (status.value, notes, activity_id),
            )
            return cur.rowcount > 0
