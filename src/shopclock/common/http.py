from __future__ import annotations

import logging
from datetime import date, datetime
from functools import wraps
from typing import Optional

from flask import Flask, jsonify, request, session

from ..core.enums import RoundingMode
from ..core.exceptions import AuthenticationError, NotFoundError, StoreError, ValidationError
from .datetime_utils import parse_iso_date, parse_month, to_local_naive

logger = logging.getLogger(__name__)

OWNER_SESSION_FLAG = "owner_ok"


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(AuthenticationError)
    def _auth(e):
        return jsonify({"error": str(e)}), 401

    @app.errorhandler(NotFoundError)
    def _not_found(e):
        return jsonify({"error": str(e)}), 404

    @app.errorhandler(StoreError)
    def _store(e):
        logger.error("Storage backend failed", exc_info=e)
        return jsonify({"error": "Storage is unavailable, try again later"}), 503


def owner_required(owner_auth):
    """Gate a view behind the owner password once one has been set."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if owner_auth.has_password() and not session.get(OWNER_SESSION_FLAG):
                return jsonify({"error": "Owner password required"}), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def month_arg() -> datetime:
    raw = request.args.get("month")
    if not raw:
        return datetime.now()
    try:
        return datetime.combine(parse_month(raw), datetime.min.time())
    except ValueError:
        raise ValidationError("month must be YYYY-MM")


def rounding_arg() -> RoundingMode:
    try:
        return RoundingMode(request.args.get("rounding", RoundingMode.MINUTE1.value))
    except ValueError:
        raise ValidationError("rounding must be minute1 or quarter15")


def day_value(raw: str) -> date:
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise ValidationError("date must be YYYY-MM-DD")


def optional_instant(data: dict, name: str) -> Optional[datetime]:
    raw = data.get(name)
    if raw in (None, ""):
        return None
    try:
        value = datetime.fromisoformat(str(raw))
    except ValueError:
        raise ValidationError(f"{name} must be an ISO datetime")
    return to_local_naive(value)
