from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.validators import (
    optional_bool,
    optional_str,
    require_enum,
    require_hhmm,
    require_json_object,
    require_non_empty,
)
from ..core.enums import ShiftType
from ..users.access import ensure_branch_access, scoped_branch_id
from ..users.model import User
from .model import Shift
from .repository import ShiftRepository

logger = logging.getLogger(__name__)


class ShiftService:
    def __init__(self, shifts: ShiftRepository):
        self._shifts = shifts

    def list_shifts(self, *, user: User, branch_id: Optional[str] = None) -> Sequence[Shift]:
        branch_id = optional_str(branch_id) or scoped_branch_id(user)
        return self._shifts.list_active(branch_id=branch_id)

    def create_shift(self, payload: Any, *, user: User) -> Shift:
        data = require_json_object(payload)
        name = require_non_empty(data.get("name"), "Vardiya adı")
        shift_type = require_enum(require_non_empty(data.get("type"), "Vardiya tipi"), ShiftType, "Vardiya tipi")
        start_time = require_hhmm(data.get("startTime"), "Başlangıç saati")
        end_time = require_hhmm(data.get("endTime"), "Bitiş saati")
        branch_id = require_non_empty(data.get("branchId"), "Şube")
        is_active = optional_bool(data.get("isActive"), "isActive")

        ensure_branch_access(user, branch_id, "Başka şubeye vardiya ekleyemezsiniz")

        shift = self._shifts.create(
            name=name,
            shift_type=shift_type,
            start_time=start_time,
            end_time=end_time,
            branch_id=branch_id,
            is_active=True if is_active is None else is_active,
        )
        logger.info("Shift created (id=%s, branch=%s)", shift.id, shift.branch_id)
        return shift
