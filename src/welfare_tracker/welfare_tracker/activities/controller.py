from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import parse_iso_date
from ..common.http import int_arg, json_body, json_ok
from ..core.constants import DEFAULT_ACTIVITY_PAGE_SIZE
from ..core.enums import ActivityStatus
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _parse_date(value):
        if not value:
            return None
        try:
            return parse_iso_date(str(value))
        except ValueError as exc:
            raise ValidationError("activity_date must use the YYYY-MM-DD format") from exc

    @app.route("/api/welfare-activities", methods=["GET"], endpoint="list_activities")
    def list_activities():
        page = container.activity_service.list_activities(
            page=int_arg("page", 1),
            limit=int_arg("limit", DEFAULT_ACTIVITY_PAGE_SIZE),
        )
        return json_ok(page)

    @app.route("/api/welfare-activities", methods=["POST"], endpoint="record_activity")
    def record_activity():
        data = json_body()
        if not data.get("employee_id"):
            raise ValidationError("employee_id is required")
        if not data.get("welfare_type"):
            raise ValidationError("welfare_type is required")

        activity = container.activity_service.record_activity(
            employee_id=str(data["employee_id"]),
            welfare_type=data["welfare_type"],
            activity_date=_parse_date(data.get("activity_date")),
            status=data.get("status") or ActivityStatus.COMPLETED,
            notes=data.get("notes"),
            conducted_by=data.get("conducted_by"),
        )
        return json_ok(activity, 201)

    @app.route("/api/welfare-activities/<activity_id>", methods=["PUT"], endpoint="update_activity")
    def update_activity(activity_id: str):
        data = json_body()
        if not data.get("status"):
            raise ValidationError("status is required")
        activity = container.activity_service.update_activity(
            activity_id, status=data["status"], notes=data.get("notes")
        )
        return json_ok(activity)
