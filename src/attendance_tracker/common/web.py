"""Flask glue shared by the controllers: session user, permission gates, error mapping."""

from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Optional

from flask import Flask, jsonify, request, session

from ..core.enums import Permission
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    ImportFormatError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from ..users.service import SessionUser
from .datetime_utils import now_local, parse_iso_date

logger = logging.getLogger(__name__)

SESSION_KEY = "user"


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def current_user() -> Optional[SessionUser]:
    data = session.get(SESSION_KEY)
    return SessionUser.from_session(data) if data else None


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_user() is None:
            return json_error("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def permission_required(permission: Permission):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = current_user()
            if user is None:
                return json_error("Please log in to continue", 401)
            if not user.can(permission):
                return json_error("You do not have permission to perform this action", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    @app.errorhandler(ImportFormatError)
    def _bad_request(e: DomainError):
        return json_error(str(e), 400)

    @app.errorhandler(AuthenticationError)
    def _unauthenticated(e: AuthenticationError):
        return json_error(str(e), 401)

    @app.errorhandler(AuthorizationError)
    def _forbidden(e: AuthorizationError):
        return json_error(str(e), 403)

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return json_error(str(e), 404)

    @app.errorhandler(StoreError)
    def _store_failure(e: StoreError):
        logger.error("Store failure on %s %s: %s", request.method, request.path, e)
        return json_error("The database request failed. Please try again.", 500)

    @app.errorhandler(DomainError)
    def _domain_error(e: DomainError):
        return json_error(str(e), 400)


# Request parsing

def int_arg(name: str, default: int) -> int:
    raw = request.args.get(name)
    if raw in (None, ""):
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be a number")


def year_month_args() -> tuple[int, int]:
    today = now_local().date()
    return int_arg("year", today.year), int_arg("month", today.month)


def date_value(raw: Optional[str], name: str) -> date:
    if not raw:
        raise ValidationError(f"{name} is required")
    try:
        return parse_iso_date(str(raw))
    except ValueError:
        raise ValidationError(f"{name} must be YYYY-MM-DD")


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Expected a JSON object body")
    return data


def uploaded_text() -> str:
    """Text of an uploaded file ('file' field), or the raw request body."""
    upload = request.files.get("file")
    if upload is not None:
        try:
            return upload.read().decode("utf-8-sig")
        except UnicodeDecodeError:
            raise ValidationError("Uploaded file must be UTF-8 text")
    data = request.get_json(silent=True)
    if isinstance(data, dict) and isinstance(data.get("data"), str):
        return data["data"]
    return request.get_data(as_text=True)
