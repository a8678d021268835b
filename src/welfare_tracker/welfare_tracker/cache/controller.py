from __future__ import annotations

from flask import Flask, request

from ..common.http import json_error, json_ok
from ..core.enums import InvalidationScope
from ..core.exceptions import DataUnavailableError
from ..database.mysql_base import ping
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/cache/status", methods=["GET"], endpoint="cache_status")
    def cache_status():
        return json_ok(container.cache.stats(), ttls=container.ttls)

    @app.route("/api/cache/refresh", methods=["POST"], endpoint="cache_refresh")
    def cache_refresh():
        scope = request.args.get("scope") or InvalidationScope.ANALYTICS.value
        removed = container.analytics_service.invalidate_caches(scope)
        return json_ok({"scope": scope, "removed": removed})

    @app.route("/api/cache/clear", methods=["POST", "DELETE"], endpoint="cache_clear")
    def cache_clear():
        removed = container.analytics_service.invalidate_caches(InvalidationScope.ALL)
        return json_ok({"scope": InvalidationScope.ALL.value, "removed": removed})

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        try:
            ping(container.conn)
        except DataUnavailableError:
            return json_error("database unreachable", 503)
        return json_ok({"status": "ok", "cache_entries": container.cache.size()})
