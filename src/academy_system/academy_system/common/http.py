from __future__ import annotations

from functools import wraps
from typing import Any, Iterable, Optional

from flask import jsonify, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)

_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (AuthorizationError, 403),
    (AuthenticationError, 401),
    (ValidationError, 400),
)


def success(data: Any = None, *, message: Optional[str] = None, code: int = 200, **extra):
    body: dict = {"status": "success"}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    body.update(extra)
    return jsonify(body), code


def error(message: str, code: int):
    return jsonify({"status": "error", "message": message}), code


def domain_error(exc: DomainError):
    """Translate a service-layer exception into a JSON error response."""

    for exc_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, exc_type):
            return error(str(exc), code)
    return error("Internal server error", 500)


def current_role() -> Optional[Role]:
    try:
        return Role(session.get("role"))
    except ValueError:
        return None


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error("Authentication required", 401)
        return view(*args, **kwargs)

    return wrapper


def roles_required(roles: Iterable[Role]):
    allowed = frozenset(roles)

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return error("Authentication required", 401)
            if current_role() not in allowed:
                return error("You do not have permission to perform this action", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator
