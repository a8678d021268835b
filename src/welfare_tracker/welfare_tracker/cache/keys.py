from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Mapping, Optional

from ..core import constants


class CacheKeys:
    """Builders for every cache key the services use.

    Invalidation patterns in ``cache.invalidation`` rely on these prefixes.
    """

    @staticmethod
    def employees() -> str:
        return "employees:welfare"

    @staticmethod
    def dashboard_stats() -> str:
        return "dashboard:stats"

    @staticmethod
    def activities(page: int, limit: int) -> str:
        return f"activities:{page}:{limit}"

    @staticmethod
    def employee_history(employee_id: str, limit: int) -> str:
        return f"employee:{employee_id}:history:{limit}"

    @staticmethod
    def trends(months: int) -> str:
        return f"analytics:trends:{months}months"

    @staticmethod
    def risk_scores() -> str:
        return "analytics:risk-scores"

    @staticmethod
    def performance(start: Optional[date] = None, end: Optional[date] = None) -> str:
        start_s = start.isoformat() if start else "default"
        end_s = end.isoformat() if end else "default"
        return f"analytics:performance:{start_s}:{end_s}"

    @staticmethod
    def executive_summary() -> str:
        return "analytics:executive-summary"


@dataclass(frozen=True)
class CacheTTLConfig:
    """TTL in seconds per data category, tuned by how often each changes."""

    employees: float = constants.EMPLOYEES_TTL_SECONDS
    dashboard_stats: float = constants.DASHBOARD_STATS_TTL_SECONDS
    activities: float = constants.ACTIVITIES_TTL_SECONDS
    employee_history: float = constants.EMPLOYEE_HISTORY_TTL_SECONDS
    trends: float = constants.TRENDS_TTL_SECONDS
    risk_scores: float = constants.RISK_SCORES_TTL_SECONDS
    performance: float = constants.PERFORMANCE_TTL_SECONDS
    executive_summary: float = constants.EXECUTIVE_SUMMARY_TTL_SECONDS

    @classmethod
    def from_settings(cls, overrides: Optional[Mapping[str, float]] = None) -> "CacheTTLConfig":
        config = cls()
        if not overrides:
            return config
        unknown = set(overrides) - set(config.__dataclass_fields__)
        if unknown:
            raise ValueError(f"Unknown cache TTL categories: {sorted(unknown)}")
        return replace(config, **{k: float(v) for k, v in overrides.items()})
