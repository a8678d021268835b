from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import DataUnavailableError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)`` for one unit of work.

    Commits on success, rolls back on error. Driver errors surface as
    DataUnavailableError so callers never mistake an outage for empty data.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        logger.error("database connection failed: %s", exc)
        raise DataUnavailableError("Could not connect to the welfare database") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        conn.rollback()
        logger.error("database query failed: %s", exc)
        raise DataUnavailableError("Welfare database query failed") from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def ping(conn_factory: DatabaseConnection) -> bool:
    """Health check used by the /api/health route."""
    with db_cursor(conn_factory) as (_, cur):
        cur.execute("SELECT 1 AS health")
        row = fetchone(cur)
        return bool(row) and int(row["health"]) == 1
