"""Helpers shared by the Flask controllers."""

from __future__ import annotations

import logging
from datetime import datetime
from functools import wraps
from typing import Any, Optional

from flask import current_app, jsonify, request, session

from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from ..users.model import SessionUser

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
)


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def current_user() -> Optional[SessionUser]:
    if "employee_id" not in session:
        return None
    return SessionUser(
        employee_id=int(session["employee_id"]),
        name=session.get("name", ""),
        role=session.get("role", ""),
        outlet_id=session.get("outlet_id"),
    )


def api_view(view):
    """Translate domain errors into JSON responses; log anything unexpected."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except tuple(cls for cls, _ in _STATUS_BY_ERROR) as e:
            status = next(code for cls, code in _STATUS_BY_ERROR if isinstance(e, cls))
            return json_error(str(e), status)
        except Exception as e:
            logger.exception("Unhandled error in %s", request.path)
            if current_app.config.get("DEBUG"):
                return json_error(f"System error: {e}", 500)
            return json_error("System error", 500)

    return wrapper


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_user() is None:
            return json_error("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def request_json() -> dict[str, Any]:
    return request.get_json(silent=True) or {}


def parse_optional_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"Invalid date/time: {value!r}")


def parse_int(value: Any, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def parse_amount(value: Any, field_name: str) -> float:
    if value in (None, ""):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
