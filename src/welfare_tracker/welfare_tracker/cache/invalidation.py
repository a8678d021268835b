from __future__ import annotations

import logging
import re
from typing import Optional

from ..core.enums import CacheEvent, InvalidationScope
from ..core.exceptions import ValidationError
from .store import CacheStore

logger = logging.getLogger(__name__)

EMPLOYEE_PATTERNS = (
    r"^employees:",
    r"^dashboard:",
    r"^analytics:risk-scores$",
    r"^analytics:executive-summary$",
)

ACTIVITY_PATTERNS = (
    r"^activities:",
    r"^dashboard:",
    r"^analytics:",
)

ANALYTICS_PATTERNS = (r"^analytics:",)

ALL_HISTORY_PATTERN = r"^employee:.*:history(:|$)"


def history_pattern(employee_id: Optional[str]) -> str:
    if employee_id is None:
        return ALL_HISTORY_PATTERN
    return rf"^employee:{re.escape(str(employee_id))}:history(:|$)"


class CacheInvalidationCoordinator:
    """Maps write events onto the cache key patterns they make stale.

    Services call this synchronously right after a write, before returning,
    so a cached read is never stale for longer than one TTL after the write.
    """

    def __init__(self, cache: CacheStore):
        self._cache = cache

    def patterns_for(self, event: CacheEvent, employee_id: Optional[str] = None) -> tuple[str, ...]:
        """Patterns evicted for ``event``; empty for events that clear everything."""
        if event == CacheEvent.EMPLOYEE_CREATED:
            return EMPLOYEE_PATTERNS
        if event == CacheEvent.EMPLOYEE_UPDATED:
            # History entries embed the employee name.
            return EMPLOYEE_PATTERNS + (history_pattern(employee_id),)
        if event in (CacheEvent.ACTIVITY_RECORDED, CacheEvent.ACTIVITY_UPDATED):
            return ACTIVITY_PATTERNS + (history_pattern(employee_id),)
        return ()

    def handle(self, event: CacheEvent, employee_id: Optional[str] = None) -> int:
        """Evict what ``event`` invalidates. Returns the number of entries removed."""
        if event == CacheEvent.HARD_CLEAR:
            removed = self._cache.size()
            self._cache.clear()
        elif event == CacheEvent.EMPLOYEE_DELETED:
            # Deletion changes cardinality everywhere; drop every entry but keep counters.
            removed = self._cache.invalidate(r".*")
        else:
            removed = sum(self._cache.invalidate(p) for p in self.patterns_for(event, employee_id))

        logger.info("cache invalidation %s (employee=%s): %d entries", event.value, employee_id, removed)
        return removed

    def invalidate_caches(self, scope: InvalidationScope | str) -> int:
        try:
            scope = InvalidationScope(scope)
        except ValueError as exc:
            raise ValidationError(f"Unknown cache scope: {scope!r}") from exc

        if scope == InvalidationScope.EMPLOYEE:
            return self.handle(CacheEvent.EMPLOYEE_UPDATED)
        if scope == InvalidationScope.ACTIVITY:
            return self.handle(CacheEvent.ACTIVITY_RECORDED)
        if scope == InvalidationScope.ANALYTICS:
            return sum(self._cache.invalidate(p) for p in ANALYTICS_PATTERNS)
        return self.handle(CacheEvent.HARD_CLEAR)
