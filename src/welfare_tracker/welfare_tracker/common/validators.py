from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..core.exceptions import MalformedRecordError, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def require_max_length(value: str, field_name: str, max_len: int) -> str:
    if len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return value


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


# Row validation used at the boundary between the data store and the
# derivation code. Anything that does not look right is rejected instead of
# leaking loosely typed values further in.


def row_text(row: Mapping[str, Any], column: str) -> str:
    value = row.get(column)
    if value is None or str(value).strip() == "":
        raise MalformedRecordError(f"column {column!r} is missing")
    return str(value)


def row_optional_text(row: Mapping[str, Any], column: str) -> Optional[str]:
    value = row.get(column)
    if value is None:
        return None
    return str(value)


def row_int(row: Mapping[str, Any], column: str, *, default: Optional[int] = None) -> int:
    value = row.get(column)
    if value is None:
        if default is None:
            raise MalformedRecordError(f"column {column!r} is missing")
        return default
    if isinstance(value, bool):
        raise MalformedRecordError(f"column {column!r} is not an integer: {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise MalformedRecordError(f"column {column!r} is not an integer: {value!r}") from exc
    if number < 0:
        raise MalformedRecordError(f"column {column!r} is negative: {number}")
    return number


def row_optional_int(row: Mapping[str, Any], column: str) -> Optional[int]:
    if row.get(column) is None:
        return None
    return row_int(row, column)


def row_datetime(row: Mapping[str, Any], column: str) -> datetime:
    value = row.get(column)
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError as exc:
            raise MalformedRecordError(f"column {column!r} is not a timestamp: {value!r}") from exc
    raise MalformedRecordError(f"column {column!r} is not a timestamp: {value!r}")


def row_optional_datetime(row: Mapping[str, Any], column: str) -> Optional[datetime]:
    if row.get(column) is None:
        return None
    return row_datetime(row, column)


def row_date(row: Mapping[str, Any], column: str) -> date:
    value = row.get(column)
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError as exc:
            raise MalformedRecordError(f"column {column!r} is not a date: {value!r}") from exc
    raise MalformedRecordError(f"column {column!r} is not a date: {value!r}")


def row_optional_date(row: Mapping[str, Any], column: str) -> Optional[date]:
    if row.get(column) is None:
        return None
    return row_date(row, column)


def row_bool(row: Mapping[str, Any], column: str, *, default: bool = True) -> bool:
    value = row.get(column)
    if value is None:
        return default
    if isinstance(value, (bool, int)):
        return bool(value)
    raise MalformedRecordError(f"column {column!r} is not a boolean: {value!r}")
