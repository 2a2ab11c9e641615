from __future__ import annotations

from functools import wraps

from flask import session

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError
from .responses import error_response


def current_role() -> Role:
    return Role(session.get("role"))


def current_user_id() -> int:
    return int(session["user_id"])


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response(AuthenticationError("Please log in to continue"))
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    """Allow only the given roles. Implies login_required."""

    allowed = frozenset(roles)

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return error_response(AuthenticationError("Please log in to continue"))
            if session.get("role") not in {r.value for r in allowed}:
                return error_response(AuthorizationError("You do not have permission"))
            return view(*args, **kwargs)

        return wrapper

    return decorator


def require_self_or_staff(student_id: int) -> None:
    """Students may only see their own data; staff may see anyone's."""
    if current_role() == Role.STUDENT and current_user_id() != int(student_id):
        raise AuthorizationError("Access denied")
