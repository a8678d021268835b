from __future__ import annotations

import logging
import math
import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Optional

from ..core.constants import MAX_TIMING_SAMPLES, SLOW_REQUEST_THRESHOLD_MS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EndpointTiming:
    endpoint: str
    count: int
    avg_ms: float
    min_ms: float
    max_ms: float
    p50_ms: float
    p95_ms: float
    p99_ms: float


def _percentile(ordered: list[float], fraction: float) -> float:
    index = min(len(ordered) - 1, int(math.floor(len(ordered) * fraction)))
    return ordered[index]


class RequestMonitor:
    """Response times per endpoint, keeping the most recent samples only.

    In-process like the cache: each worker process reports its own numbers.
    """

    def __init__(
        self,
        *,
        max_samples: int = MAX_TIMING_SAMPLES,
        slow_threshold_ms: float = SLOW_REQUEST_THRESHOLD_MS,
        clock: Callable[[], float] = time.perf_counter,
    ):
        if max_samples < 1:
            raise ValueError("max_samples must be at least 1")
        self._max_samples = int(max_samples)
        self._slow_threshold_ms = float(slow_threshold_ms)
        self._clock = clock
        self._samples: dict[str, deque[float]] = {}
        self._lock = threading.Lock()

    @property
    def slow_threshold_ms(self) -> float:
        return self._slow_threshold_ms

    def start(self) -> float:
        return self._clock()

    def track(self, endpoint: str, started: float) -> float:
        """Record the time elapsed since ``started``; returns it in milliseconds."""
        duration_ms = round((self._clock() - started) * 1000.0, 3)
        with self._lock:
            samples = self._samples.get(endpoint)
            if samples is None:
                samples = self._samples[endpoint] = deque(maxlen=self._max_samples)
            samples.append(duration_ms)

        if duration_ms > self._slow_threshold_ms:
            logger.warning("slow request: %s took %.0fms", endpoint, duration_ms)
        return duration_ms

    def stats(self, endpoint: Optional[str] = None) -> list[EndpointTiming]:
        """Timings sorted by endpoint, or just ``endpoint`` when given."""
        with self._lock:
            snapshot = {
                name: list(samples)
                for name, samples in self._samples.items()
                if endpoint is None or name == endpoint
            }

        out = []
        for name in sorted(snapshot):
            samples = snapshot[name]
            ordered = sorted(samples)
            out.append(
                EndpointTiming(
                    endpoint=name,
                    count=len(samples),
                    avg_ms=round(sum(samples) / len(samples), 1),
                    min_ms=ordered[0],
                    max_ms=ordered[-1],
                    p50_ms=_percentile(ordered, 0.5),
                    p95_ms=_percentile(ordered, 0.95),
                    p99_ms=_percentile(ordered, 0.99),
                )
            )
        return out

    def reset(self) -> None:
        with self._lock:
            self._samples.clear()
