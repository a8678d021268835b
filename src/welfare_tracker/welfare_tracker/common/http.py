from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

from flask import Flask, jsonify, request

from ..core.exceptions import DataUnavailableError, DomainError, NotFoundError, ValidationError
from .datetime_utils import parse_iso_date
from .serialization import to_json_dict

logger = logging.getLogger(__name__)


def json_ok(data: Any, status: int = 200, **extra):
    payload = {"success": True, "data": to_json_dict(data)}
    payload.update(to_json_dict(extra))
    return jsonify(payload), status


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def int_arg(name: str, default: int) -> int:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValidationError(f"{name} must be an integer") from exc


def date_arg(name: str) -> Optional[date]:
    raw = request.args.get(name)
    if not raw:
        return None
    try:
        return parse_iso_date(raw)
    except ValueError as exc:
        raise ValidationError(f"{name} must use the YYYY-MM-DD format") from exc


def register_error_handlers(app: Flask) -> None:
    """Map domain errors to HTTP status codes for every JSON route."""

    @app.errorhandler(ValidationError)
    def _validation_error(exc: ValidationError):
        return json_error(str(exc), 400)

    @app.errorhandler(NotFoundError)
    def _not_found(exc: NotFoundError):
        return json_error(str(exc), 404)

    @app.errorhandler(DataUnavailableError)
    def _data_unavailable(exc: DataUnavailableError):
        logger.error("data store unavailable on %s %s: %s", request.method, request.path, exc)
        return json_error("Welfare data is temporarily unavailable", 503)

    @app.errorhandler(DomainError)
    def _domain_error(exc: DomainError):
        return json_error(str(exc), 400)
