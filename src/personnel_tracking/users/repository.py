from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from ..core.enums import UserRole
from .model import User


class UserRepository(Protocol):
    """Persistence port for operator accounts, including the pending 2FA code."""

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_phone(self, phone: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        phone: str,
        password_hash: str,
        name: str,
        role: UserRole,
        branch_id: Optional[str],
    ) -> User:
        raise NotImplementedError

    def set_two_factor(self, user_id: str, *, code: str, expiry: datetime) -> None:
        """Store a new pending code, replacing any earlier one."""
        raise NotImplementedError

    def consume_two_factor(self, user_id: str, *, code: str) -> bool:
        """Clear the pending code only if it still equals `code`."""
        raise NotImplementedError
