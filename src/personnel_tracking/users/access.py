from __future__ import annotations

from typing import Optional

from ..core.enums import UserRole
from ..core.exceptions import AuthorizationError
from .model import User


def scoped_branch_id(user: Optional[User]) -> Optional[str]:
    """Branch a listing defaults to: a branch admin's own branch, else no filter."""
    if user is not None and user.role == UserRole.BRANCH_ADMIN and user.branch_id:
        return user.branch_id
    return None


def ensure_branch_access(user: Optional[User], branch_id: Optional[str], message: str) -> None:
    """Branch admins may only touch records of their own branch."""
    if user is not None and user.role == UserRole.BRANCH_ADMIN and user.branch_id != branch_id:
        raise AuthorizationError(message)
