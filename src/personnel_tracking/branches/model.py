from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Branch:
    id: str
    name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    parent_branch_id: Optional[str] = None
    manager_id: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
