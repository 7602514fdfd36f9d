from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_personnel(
        self,
        personnel_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_date(self, day: date) -> Sequence[AttendanceRecord]:
        """Records of `day`, latest check-in first."""
        raise NotImplementedError

    def get_for_personnel_and_date(self, personnel_id: str, day: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        personnel_id: str,
        day: date,
        check_in: Optional[datetime],
        check_out: Optional[datetime],
        location: Optional[str],
        qr_code: Optional[str],
        notes: Optional[str],
    ) -> AttendanceRecord:
        raise NotImplementedError

    def set_check_out(self, attendance_id: str, check_out: datetime) -> bool:
        """Record the check-out only if none is set yet."""
        raise NotImplementedError

    def count_for_date(self, day: date) -> int:
        raise NotImplementedError
