from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import local_now
from ..core.constants import DEFAULT_TIMEZONE
from ..leave.repository import LeaveRequestRepository
from ..personnel.repository import PersonnelRepository
from ..shifts.repository import ShiftRepository


@dataclass(frozen=True)
class DashboardStats:
    total_personnel: int
    today_attendance: int
    on_leave: int
    active_shifts: int

    def to_json(self) -> dict:
        return {
            "totalPersonnel": self.total_personnel,
            "todayAttendance": self.today_attendance,
            "onLeave": self.on_leave,
            "activeShifts": self.active_shifts,
        }


class StatsService:
    """Read-only counters for the dashboard."""

    def __init__(
        self,
        personnel: PersonnelRepository,
        attendance: AttendanceRepository,
        leave_requests: LeaveRequestRepository,
        shifts: ShiftRepository,
        *,
        tz_name: str = DEFAULT_TIMEZONE,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._personnel = personnel
        self._attendance = attendance
        self._leave_requests = leave_requests
        self._shifts = shifts
        self._clock = clock or (lambda: local_now(tz_name))

    def dashboard(self, day: Optional[date] = None) -> DashboardStats:
        day = day or self._clock().date()
        return DashboardStats(
            total_personnel=self._personnel.count_active(),
            today_attendance=self._attendance.count_for_date(day),
            on_leave=self._leave_requests.count_approved_on(day),
            active_shifts=self._shifts.count_active(),
        )
