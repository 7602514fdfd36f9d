from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ShiftType


@dataclass(frozen=True)
class Shift:
    """Named working window of a branch; times are "HH:MM" strings."""

    id: str
    name: str
    type: ShiftType
    start_time: str
    end_time: str
    branch_id: str
    is_active: bool = True
    created_at: Optional[datetime] = None
