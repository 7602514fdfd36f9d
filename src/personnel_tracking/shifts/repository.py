from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ShiftType
from .model import Shift


class ShiftRepository(Protocol):
    def list_active(self, *, branch_id: Optional[str] = None) -> Sequence[Shift]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        shift_type: ShiftType,
        start_time: str,
        end_time: str,
        branch_id: str,
        is_active: bool,
    ) -> Shift:
        raise NotImplementedError

    def count_active(self) -> int:
        raise NotImplementedError
