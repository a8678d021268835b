from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .activities.mysql_activity_repository import MySQLActivityRepository
from .activities.repository import ActivityRepository
from .activities.service import WelfareActivityService
from .analytics.service import AnalyticsService
from .cache.invalidation import CacheInvalidationCoordinator
from .cache.keys import CacheTTLConfig
from .cache.store import CacheStore
from .core.constants import (
    DEFAULT_CACHE_TTL_SECONDS,
    DEFAULT_CYCLE_LENGTH_DAYS,
    SLOW_REQUEST_THRESHOLD_MS,
)
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .monitoring.request_monitor import RequestMonitor
from .welfare.service import WelfareService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: EmployeeRepository
    activities_repo: ActivityRepository

    cache: CacheStore
    ttls: CacheTTLConfig
    invalidator: CacheInvalidationCoordinator
    monitor: RequestMonitor

    employee_service: EmployeeService
    activity_service: WelfareActivityService
    welfare_service: WelfareService
    analytics_service: AnalyticsService


def wire_container(
    *,
    conn,
    employees_repo: EmployeeRepository,
    activities_repo: ActivityRepository,
    cache: Optional[CacheStore] = None,
    ttls: Optional[CacheTTLConfig] = None,
    cycle_length_days: int = DEFAULT_CYCLE_LENGTH_DAYS,
    strict: bool = False,
    monitor: Optional[RequestMonitor] = None,
) -> Container:
    """Build the services on top of already constructed repositories.

    Tests call this directly with in-memory repositories.
    """

    cache = cache or CacheStore(default_ttl=DEFAULT_CACHE_TTL_SECONDS)
    ttls = ttls or CacheTTLConfig()
    invalidator = CacheInvalidationCoordinator(cache)
    monitor = monitor or RequestMonitor()

    employee_service = EmployeeService(employees_repo, invalidator)
    activity_service = WelfareActivityService(
        activities_repo, employees_repo, cache, invalidator, ttls=ttls
    )
    welfare_service = WelfareService(
        employees_repo,
        activities_repo,
        cache,
        ttls=ttls,
        cycle_length_days=cycle_length_days,
        strict=strict,
    )
    analytics_service = AnalyticsService(
        welfare_service, activities_repo, cache, invalidator, ttls=ttls, strict=strict
    )

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        activities_repo=activities_repo,
        cache=cache,
        ttls=ttls,
        invalidator=invalidator,
        monitor=monitor,
        employee_service=employee_service,
        activity_service=activity_service,
        welfare_service=welfare_service,
        analytics_service=analytics_service,
    )


def build_container(
    *,
    db_config: Mapping,
    cycle_length_days: int = DEFAULT_CYCLE_LENGTH_DAYS,
    default_cache_ttl: float = DEFAULT_CACHE_TTL_SECONDS,
    cache_ttl_overrides: Optional[Mapping[str, float]] = None,
    strict: bool = False,
    slow_request_ms: float = SLOW_REQUEST_THRESHOLD_MS,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_settings(db_config))

    return wire_container(
        conn=conn,
        employees_repo=MySQLEmployeeRepository(conn),
        activities_repo=MySQLActivityRepository(conn),
        cache=CacheStore(default_ttl=default_cache_ttl),
        ttls=CacheTTLConfig.from_settings(cache_ttl_overrides),
        cycle_length_days=cycle_length_days,
        strict=strict,
        monitor=RequestMonitor(slow_threshold_ms=slow_request_ms),
    )
