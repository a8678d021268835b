from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Optional

from ..activities.repository import ActivityRepository
from ..cache.invalidation import CacheInvalidationCoordinator
from ..cache.keys import CacheKeys, CacheTTLConfig
from ..cache.store import CacheStore
from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_TREND_MONTHS, PERFORMANCE_WINDOW_DAYS
from ..core.enums import InvalidationScope
from ..core.exceptions import InvalidDerivationInput, ValidationError
from ..welfare.service import WelfareService
from .model import EmployeeRiskScore, ExecutiveSummary, PerformanceMetrics, WelfareTrend
from .performance import build_performance_metrics
from .risk.base import RiskInput
from .risk.scorer import RiskScorer
from .summary import ExecutiveSummaryBuilder
from .trends import build_monthly_trends, trend_window_start, validate_months

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Use case: risk scores, performance metrics, trends and the executive summary.

    Every result is cached under an ``analytics:`` key; recording an activity
    evicts all of them.
    """

    def __init__(
        self,
        welfare: WelfareService,
        activities: ActivityRepository,
        cache: CacheStore,
        invalidator: CacheInvalidationCoordinator,
        *,
        ttls: Optional[CacheTTLConfig] = None,
        scorer: Optional[RiskScorer] = None,
        summary_builder: Optional[ExecutiveSummaryBuilder] = None,
        strict: bool = False,
    ):
        self._welfare = welfare
        self._activities = activities
        self._cache = cache
        self._invalidator = invalidator
        self._ttls = ttls or CacheTTLConfig()
        self._scorer = scorer or RiskScorer()
        self._summary_builder = summary_builder or ExecutiveSummaryBuilder()
        self._strict = bool(strict)

    def get_employee_risk_scores(self, *, now: Optional[datetime] = None) -> list[EmployeeRiskScore]:
        now = now or now_local()
        return self._cache.get_or_set(
            CacheKeys.risk_scores(),
            lambda: self._build_risk_scores(now),
            self._ttls.risk_scores,
        )

    def _build_risk_scores(self, now: datetime) -> list[EmployeeRiskScore]:
        logger.info("recomputing employee risk scores")
        out: list[EmployeeRiskScore] = []
        for stats, state in self._welfare.derive_states(now=now):
            try:
                assessment = self._scorer.assess(
                    RiskInput(
                        total_activities=stats.total_activities,
                        completed_count=stats.completed_count,
                        overdue_count=stats.overdue_count,
                        days_since_last=state.days_since_last,
                        is_overdue=state.is_overdue,
                    )
                )
            except InvalidDerivationInput as exc:
                if self._strict:
                    raise
                logger.warning("skipping risk score for employee %s: %s", stats.employee.employee_id, exc)
                continue

            out.append(
                EmployeeRiskScore(
                    employee_id=stats.employee.employee_id,
                    name=stats.employee.name,
                    next_due=state.next_due,
                    is_overdue=state.is_overdue,
                    total_activities=stats.total_activities,
                    completed_count=stats.completed_count,
                    overdue_count=stats.overdue_count,
                    last_activity_date=state.last_activity_date,
                    days_since_last=state.days_since_last,
                    risk_score=assessment.score,
                    risk_level=assessment.level,
                    recommendation=assessment.recommendation,
                )
            )

        out.sort(key=lambda r: (-r.risk_score, r.name))
        return out

    def get_performance_metrics(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> PerformanceMetrics:
        """Metrics for [start, end]; defaults to the trailing 30 days."""

        now = now or now_local()
        end = end or now.date()
        start = start or end - timedelta(days=PERFORMANCE_WINDOW_DAYS)
        if start > end:
            raise ValidationError("start date must not be after end date")
        return self._cache.get_or_set(
            CacheKeys.performance(start, end),
            lambda: self._build_performance(start, end),
            self._ttls.performance,
        )

    def _build_performance(self, start: date, end: date) -> PerformanceMetrics:
        logger.info("recomputing performance metrics %s..%s", start, end)
        rows = self._activities.list_between(start_date=start, end_date=end)
        return build_performance_metrics(rows, start=start, end=end)

    def get_welfare_trends(
        self, months: int = DEFAULT_TREND_MONTHS, *, now: Optional[datetime] = None
    ) -> list[WelfareTrend]:
        months = validate_months(months)
        today = (now or now_local()).date()
        return self._cache.get_or_set(
            CacheKeys.trends(months),
            lambda: self._build_trends(months, today),
            self._ttls.trends,
        )

    def _build_trends(self, months: int, today: date) -> list[WelfareTrend]:
        logger.info("recomputing welfare trends for %d months", months)
        rows = self._activities.list_between(start_date=trend_window_start(today, months), end_date=today)
        return build_monthly_trends(
            rows, months=months, today=today, cycle_length_days=self._welfare.cycle_length_days
        )

    def get_executive_summary(self, *, now: Optional[datetime] = None) -> ExecutiveSummary:
        now = now or now_local()
        return self._cache.get_or_set(
            CacheKeys.executive_summary(),
            lambda: self._build_summary(now),
            self._ttls.executive_summary,
        )

    def _build_summary(self, now: datetime) -> ExecutiveSummary:
        logger.info("building executive summary")
        risk_scores = self.get_employee_risk_scores(now=now)
        performance = self.get_performance_metrics(now=now)
        return self._summary_builder.build(
            risk_scores,
            performance,
            baseline_completion_rate=self._baseline_completion_rate(performance),
        )

    def _baseline_completion_rate(self, current: PerformanceMetrics) -> Optional[int]:
        """Completion rate of the equally long window just before ``current``.

        None when that window holds no activity, which keeps the trend stable.
        """
        length = current.end - current.start
        end = current.start - timedelta(days=1)
        previous = build_performance_metrics(
            self._activities.list_between(start_date=end - length, end_date=end),
            start=end - length,
            end=end,
        )
        if previous.summary.total_activities == 0:
            return None
        return previous.summary.completion_rate

    def invalidate_caches(self, scope: InvalidationScope | str) -> int:
        return self._invalidator.invalidate_caches(scope)
