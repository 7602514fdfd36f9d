from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import current_app, g, session

from ..core.enums import UserRole
from ..core.exceptions import AuthenticationError, AuthorizationError
from ..users.model import User

EXTENSION_KEY = "personnel_tracking"
SESSION_USER_KEY = "user_id"

LOGIN_REQUIRED = "Oturum açmanız gerekiyor"
FORBIDDEN = "Bu işlem için yetkiniz bulunmamaktadır"


def current_user() -> Optional[User]:
    """User behind the request's session, resolved once per request."""
    if "current_user" not in g:
        container = current_app.extensions[EXTENSION_KEY]
        g.current_user = container.auth_service.get_active_user(session.get(SESSION_USER_KEY))
    return g.current_user


def establish_session(user: User) -> None:
    # New id on every sign-in; the pre-login id (if any) is discarded.
    regenerate = getattr(session, "regenerate", None)
    session.clear()
    if regenerate is not None:
        regenerate()
    session[SESSION_USER_KEY] = user.id
    g.current_user = user


def end_session() -> None:
    session.clear()
    g.current_user = None


def _require_user() -> User:
    user = current_user()
    if user is None:
        raise AuthenticationError(LOGIN_REQUIRED)
    return user


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        _require_user()
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if _require_user().role == UserRole.BRANCH_ADMIN:
            raise AuthorizationError(FORBIDDEN)
        return view(*args, **kwargs)

    return wrapper


def super_admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if _require_user().role != UserRole.SUPER_ADMIN:
            raise AuthorizationError(FORBIDDEN)
        return view(*args, **kwargs)

    return wrapper
