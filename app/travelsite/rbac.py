from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import g

from app.travelsite.errors import AuthenticationError


def current_user() -> dict[str, Any] | None:
    return getattr(g, "current_user", None)


def require_admin(fn: Callable[..., Any]) -> Callable[..., Any]:
    """
    Single privilege tier: any signed-in user is an admin.
    """

    @wraps(fn)
    def wrapped(*args: Any, **kwargs: Any):
        if not current_user():
            raise AuthenticationError()
        return fn(*args, **kwargs)

    return wrapped
