from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Optional, Sequence

from ..common.datetime_utils import utc_now
from ..common.validators import optional_str, require_date, require_enum, require_json_object, require_non_empty
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import NotFoundError, ValidationError
from ..users.model import User
from .model import LeaveRequest
from .repository import LeaveRequestRepository

logger = logging.getLogger(__name__)


class LeaveRequestService:
    def __init__(self, leave_requests: LeaveRequestRepository, *, clock: Callable[[], datetime] = utc_now):
        self._leave_requests = leave_requests
        self._clock = clock

    def list_requests(self, *, personnel_id: Optional[str] = None) -> Sequence[LeaveRequest]:
        return self._leave_requests.list_requests(personnel_id=optional_str(personnel_id))

    def create_request(self, payload: Any) -> LeaveRequest:
        data = require_json_object(payload)
        personnel_id = require_non_empty(data.get("personnelId"), "Personel")
        leave_type = require_enum(require_non_empty(data.get("type"), "İzin türü"), LeaveType, "İzin türü")
        start_date = require_date(data.get("startDate"), "Başlangıç tarihi")
        end_date = require_date(data.get("endDate"), "Bitiş tarihi")
        if end_date < start_date:
            raise ValidationError("Bitiş tarihi başlangıç tarihinden önce olamaz")

        leave = self._leave_requests.create(
            personnel_id=personnel_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=optional_str(data.get("reason")),
        )
        logger.info("Leave request created (id=%s, personnel=%s, days=%s)", leave.id, personnel_id, leave.days)
        return leave

    def update_status(self, request_id: str, payload: Any, *, user: User) -> LeaveRequest:
        data = require_json_object(payload)
        status = require_enum(require_non_empty(data.get("status"), "Durum"), LeaveStatus, "Durum")

        # Approving or rejecting records who decided and when; back to pending clears it.
        if status == LeaveStatus.PENDING:
            approved_by, approved_at = None, None
        else:
            approved_by, approved_at = user.id, self._clock()

        leave = self._leave_requests.set_status(
            request_id, status=status, approved_by=approved_by, approved_at=approved_at
        )
        if leave is None:
            raise NotFoundError("İzin talebi bulunamadı")

        logger.info("Leave request %s (id=%s, by=%s)", status.value, request_id, user.id)
        return leave
