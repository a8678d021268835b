from __future__ import annotations

from enum import Enum


class WelfareType(str, Enum):
    """Kinds of welfare check that can be recorded against an employee."""

    CALL = "Welfare Call"
    VISIT = "Welfare Visit"
    DOG_HANDLER = "Dog Handler Welfare"
    MENTAL_HEALTH = "Mental Health Check"
    GENERAL = "General Welfare"


class ActivityStatus(str, Enum):
    """Lifecycle status of a welfare activity as stored in the database."""

    COMPLETED = "completed"
    PENDING = "pending"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class AlertType(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class Trend(str, Enum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class CacheEvent(str, Enum):
    """Write events that make cached reads stale."""

    EMPLOYEE_CREATED = "employee_created"
    EMPLOYEE_UPDATED = "employee_updated"
    EMPLOYEE_DELETED = "employee_deleted"
    ACTIVITY_RECORDED = "activity_recorded"
    ACTIVITY_UPDATED = "activity_updated"
    HARD_CLEAR = "hard_clear"


class InvalidationScope(str, Enum):
    EMPLOYEE = "employee"
    ACTIVITY = "activity"
    ANALYTICS = "analytics"
    ALL = "all"
