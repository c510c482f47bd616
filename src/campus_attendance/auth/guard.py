"""Per-request authorization.

The caller is resolved from the Flask session once per request and cached on
``flask.g``; routes declare the roles they accept with ``require_roles``.
"""
from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import g, session

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError
from .model import AuthContext


def login_user(*, user_id: int, role: Role, name: str) -> None:
    session.clear()
    session["user_id"] = int(user_id)
    session["role"] = role.value
    session["name"] = name


def logout_user() -> None:
    session.clear()
    g.pop("auth", None)


def current_context() -> AuthContext:
    ctx: Optional[AuthContext] = g.get("auth")
    if ctx is not None:
        return ctx

    if "user_id" not in session:
        raise AuthenticationError("Unauthorized")

    try:
        ctx = AuthContext(user_id=int(session["user_id"]), role=Role(session.get("role")))
    except (TypeError, ValueError):
        session.clear()
        raise AuthenticationError("Unauthorized")

    g.auth = ctx
    return ctx


def require_roles(*roles: Role):
    """Reject the request with 401/403 unless the caller has one of ``roles``.

    With no roles any logged-in user is accepted.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            ctx = current_context()
            if not ctx.allows(*roles):
                raise AuthorizationError("Forbidden")
            return view(*args, **kwargs)

        return wrapper

    return decorator


login_required = require_roles()
