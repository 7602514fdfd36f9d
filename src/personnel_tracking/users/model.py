from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import UserRole


@dataclass(frozen=True)
class User:
    """An operator account (not a tracked employee).

    `two_factor_code` / `two_factor_expiry` hold the pending login, if any.
    """

    id: str
    phone: str
    password_hash: str
    name: str
    role: UserRole
    branch_id: Optional[str] = None
    is_active: bool = True
    two_factor_code: Optional[str] = None
    two_factor_expiry: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def public_json(self) -> dict:
        return {
            "id": self.id,
            "phone": self.phone,
            "name": self.name,
            "role": self.role.value,
            "branchId": self.branch_id,
        }
