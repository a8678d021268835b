from __future__ import annotations

from flask import Flask, g, request

from ..common.datetime_utils import now_local
from ..common.http import json_ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    monitor = container.monitor

    @app.before_request
    def _start_request_timer():
        g.request_started = monitor.start()

    @app.after_request
    def _track_request_time(response):
        started = g.pop("request_started", None)
        if started is not None:
            rule = request.url_rule.rule if request.url_rule else request.path
            monitor.track(f"{request.method} {rule}", started)
        return response

    @app.route("/api/performance", methods=["GET"], endpoint="performance_report")
    def performance_report():
        cache_stats = container.cache.stats()
        return json_ok(
            {
                "generated_at": now_local(),
                "requests": monitor.stats(),
                "slow_request_threshold_ms": monitor.slow_threshold_ms,
                "cache": {
                    "entries": cache_stats.size,
                    "hit_rate_percent": int(round(cache_stats.hit_rate * 100)),
                    "hits": cache_stats.hits,
                    "misses": cache_stats.misses,
                },
            }
        )
