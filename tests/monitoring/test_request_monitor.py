from __future__ import annotations

import logging

import pytest

from src.welfare_tracker.welfare_tracker.monitoring.request_monitor import RequestMonitor


def _slow_warnings(caplog):
    return [r for r in caplog.records if r.name.endswith("request_monitor") and r.levelno == logging.WARNING]


def _timed(monitor, clock, endpoint, ms):
    started = monitor.start()
    clock.advance(ms / 1000.0)
    return monitor.track(endpoint, started)


def test_stats_per_endpoint(clock):
    monitor = RequestMonitor(clock=clock)
    for ms in (10, 30, 20):
        _timed(monitor, clock, "GET /api/employees", ms)
    _timed(monitor, clock, "GET /api/analytics/risk-scores", 5)

    timings = monitor.stats()

    assert [t.endpoint for t in timings] == ["GET /api/analytics/risk-scores", "GET /api/employees"]
    employees = timings[1]
    assert employees.count == 3
    assert employees.avg_ms == pytest.approx(20.0)
    assert employees.min_ms == pytest.approx(10.0)
    assert employees.max_ms == pytest.approx(30.0)
    assert employees.p50_ms == pytest.approx(20.0)
    assert monitor.stats("GET /api/analytics/risk-scores")[0].count == 1
    assert monitor.stats("GET /nowhere") == []


def test_only_the_latest_samples_are_kept(clock):
    monitor = RequestMonitor(clock=clock)
    _timed(monitor, clock, "GET /api/employees", 500)
    for _ in range(100):
        _timed(monitor, clock, "GET /api/employees", 2)

    timing = monitor.stats()[0]

    assert timing.count == 100
    assert timing.max_ms == pytest.approx(2.0)


def test_slow_requests_are_logged(clock, caplog):
    monitor = RequestMonitor(clock=clock)

    with caplog.at_level(logging.WARNING):
        _timed(monitor, clock, "GET /api/employees", 999)
        assert _slow_warnings(caplog) == []
        _timed(monitor, clock, "GET /api/analytics/trends", 1500)

    warnings = _slow_warnings(caplog)
    assert len(warnings) == 1
    assert "GET /api/analytics/trends" in warnings[0].getMessage()


def test_threshold_is_configurable_and_reset_clears(clock, caplog):
    monitor = RequestMonitor(clock=clock, slow_threshold_ms=50)

    with caplog.at_level(logging.WARNING):
        _timed(monitor, clock, "POST /api/activities", 60)
    assert len(_slow_warnings(caplog)) == 1

    monitor.reset()
    assert monitor.stats() == []

    with pytest.raises(ValueError):
        RequestMonitor(max_samples=0)
