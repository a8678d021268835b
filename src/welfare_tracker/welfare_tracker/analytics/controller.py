from __future__ import annotations

from flask import Flask

from ..common.http import date_arg, int_arg, json_ok
from ..core.constants import DEFAULT_TREND_MONTHS
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/analytics/risk-scores", methods=["GET"], endpoint="risk_scores")
    def risk_scores():
        scores = container.analytics_service.get_employee_risk_scores()
        return json_ok(scores, count=len(scores))

    @app.route("/api/analytics/summary", methods=["GET"], endpoint="executive_summary")
    def executive_summary():
        return json_ok(container.analytics_service.get_executive_summary())

    @app.route("/api/analytics/trends", methods=["GET"], endpoint="welfare_trends")
    def welfare_trends():
        months = int_arg("months", DEFAULT_TREND_MONTHS)
        trends = container.analytics_service.get_welfare_trends(months)
        return json_ok(trends, months=months)

    @app.route("/api/analytics/performance", methods=["GET"], endpoint="performance_metrics")
    def performance_metrics():
        metrics = container.analytics_service.get_performance_metrics(
            start=date_arg("start_date"),
            end=date_arg("end_date"),
        )
        return json_ok(metrics)
