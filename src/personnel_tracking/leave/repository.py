from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveRequest


class LeaveRequestRepository(Protocol):
    def list_requests(self, *, personnel_id: Optional[str] = None) -> Sequence[LeaveRequest]:
        """Newest first."""
        raise NotImplementedError

    def get_by_id(self, request_id: str) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def create(
        self,
        *,
        personnel_id: str,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: Optional[str],
    ) -> LeaveRequest:
        raise NotImplementedError

    def set_status(
        self,
        request_id: str,
        *,
        status: LeaveStatus,
        approved_by: Optional[str],
        approved_at: Optional[datetime],
    ) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def count_approved_on(self, day: date) -> int:
        raise NotImplementedError
