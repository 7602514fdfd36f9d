from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.serialization import to_json
from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    id: str
    personnel_id: str
    type: LeaveType
    start_date: date
    end_date: date
    status: LeaveStatus
    reason: Optional[str] = None
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def days(self) -> int:
        """Calendar days covered, both ends included."""
        return (self.end_date - self.start_date).days + 1

    def to_json(self) -> dict:
        out = to_json(self)
        out["days"] = self.days
        return out
