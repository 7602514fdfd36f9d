from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from ..core.constants import QR_SCAN_NOTE
from ..core.enums import ScanAction
from ..core.exceptions import ValidationError
from ..personnel.model import Personnel
from .model import AttendanceRecord, ScanResult
from .repository import AttendanceRepository

ALREADY_COMPLETED = "Personel zaten giriş ve çıkış kaydı tamamlamış"


class ScanStep(ABC):
    """What a QR scan does, given the employee's record for today."""

    @abstractmethod
    def apply(self, *, attendance: AttendanceRepository, person: Personnel, now: datetime) -> ScanResult:
        raise NotImplementedError


class CheckInStep(ScanStep):
    def apply(self, *, attendance: AttendanceRepository, person: Personnel, now: datetime) -> ScanResult:
        attendance.create(
            personnel_id=person.id,
            day=now.date(),
            check_in=now,
            check_out=None,
            location=None,
            qr_code=person.id,
            notes=QR_SCAN_NOTE,
        )
        return ScanResult(message=f"{person.full_name} başarıyla giriş yaptı", action=ScanAction.CHECK_IN, at=now)


class CheckOutStep(ScanStep):
    def __init__(self, record: AttendanceRecord):
        self._record = record

    def apply(self, *, attendance: AttendanceRepository, person: Personnel, now: datetime) -> ScanResult:
        # A concurrent scan may have closed the record first.
        if not attendance.set_check_out(self._record.id, now):
            raise ValidationError(ALREADY_COMPLETED)
        return ScanResult(message=f"{person.full_name} başarıyla çıkış yaptı", action=ScanAction.CHECK_OUT, at=now)


def choose_scan_step(record: Optional[AttendanceRecord]) -> ScanStep:
    if record is None:
        return CheckInStep()
    if record.check_in and not record.check_out:
        return CheckOutStep(record)
    raise ValidationError(ALREADY_COMPLETED)
