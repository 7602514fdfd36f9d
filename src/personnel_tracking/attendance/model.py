from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ScanAction


@dataclass(frozen=True)
class AttendanceRecord:
    """One day of presence for one employee. Times are business-local wall clock."""

    id: str
    personnel_id: str
    date: date
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    location: Optional[str] = None
    qr_code: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class ScanResult:
    message: str
    action: ScanAction
    at: datetime

    def to_json(self) -> dict:
        return {
            "message": self.message,
            "action": self.action.value,
            "time": self.at.strftime("%H:%M:%S"),
        }


@dataclass(frozen=True)
class DailySummary:
    total: int
    present: int
    completed: int
    late: int

    def to_json(self) -> dict:
        return {
            "total": self.total,
            "present": self.present,
            "completed": self.completed,
            "late": self.late,
        }
