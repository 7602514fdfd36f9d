from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Any, Callable, Optional, Sequence

from ..common.datetime_utils import local_now
from ..common.validators import optional_date, optional_datetime, optional_str, require_json_object
from ..core.constants import DEFAULT_TIMEZONE
from ..core.exceptions import NotFoundError, ValidationError
from ..personnel.repository import PersonnelRepository
from ..system_settings.service import SystemSettingsService
from ..users.access import ensure_branch_access
from ..users.model import User
from .model import AttendanceRecord, DailySummary, ScanResult
from .repository import AttendanceRepository
from .scan_steps import choose_scan_step

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        personnel: PersonnelRepository,
        settings: SystemSettingsService,
        *,
        tz_name: str = DEFAULT_TIMEZONE,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._attendance = attendance
        self._personnel = personnel
        self._settings = settings
        self._tz_name = tz_name
        self._clock = clock or (lambda: local_now(tz_name))

    def today(self) -> date:
        return self._clock().date()

    def list_attendance(
        self,
        *,
        personnel_id: Optional[str] = None,
        start_date: Any = None,
        end_date: Any = None,
    ) -> Sequence[AttendanceRecord]:
        personnel_id = optional_str(personnel_id)
        if not personnel_id:
            return self._attendance.list_for_date(self.today())
        return self._attendance.list_for_personnel(
            personnel_id,
            start_date=optional_date(start_date, "Başlangıç tarihi"),
            end_date=optional_date(end_date, "Bitiş tarihi"),
        )

    def list_today(self) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_date(self.today())

    def summary(self, day: Any = None) -> DailySummary:
        day = optional_date(day, "Tarih") or self.today()
        records = self._attendance.list_for_date(day)

        work_start, grace_minutes = self._settings.lateness_policy()
        late_after = datetime.combine(day, work_start) + timedelta(minutes=grace_minutes)

        return DailySummary(
            total=len(records),
            present=sum(1 for r in records if r.check_in and not r.check_out),
            completed=sum(1 for r in records if r.check_in and r.check_out),
            late=sum(1 for r in records if r.check_in and r.check_in > late_after),
        )

    def record_attendance(self, payload: Any, *, user: User) -> AttendanceRecord:
        data = require_json_object(payload)
        personnel_id = optional_str(data.get("personnelId"))
        if not personnel_id:
            raise ValidationError("Personel alanı zorunludur")

        person = self._personnel.get_by_id(personnel_id)
        if not person:
            raise NotFoundError("Personel bulunamadı")
        ensure_branch_access(user, person.branch_id, "Bu personel için kayıt oluşturma yetkiniz bulunmamaktadır")

        check_in = optional_datetime(data.get("checkIn"), "Giriş zamanı", self._tz_name)
        check_out = optional_datetime(data.get("checkOut"), "Çıkış zamanı", self._tz_name)
        if check_in and check_out and check_out < check_in:
            raise ValidationError("Çıkış zamanı giriş zamanından önce olamaz")

        record = self._attendance.create(
            personnel_id=person.id,
            day=self.today(),
            check_in=check_in,
            check_out=check_out,
            location=optional_str(data.get("location")),
            qr_code=optional_str(data.get("qrCode")),
            notes=optional_str(data.get("notes")),
        )
        logger.info("Attendance recorded manually (id=%s, personnel=%s, by=%s)", record.id, person.id, user.id)
        return record

    def scan_qr(self, qr_code: Any, *, user: User) -> ScanResult:
        """Toggle today's attendance for the employee whose badge was scanned."""
        personnel_id = optional_str(qr_code)
        if not personnel_id:
            raise ValidationError("QR kod gerekli")

        person = self._personnel.get_by_id(personnel_id)
        if not person:
            raise NotFoundError("Geçersiz QR kod - Personel bulunamadı")
        ensure_branch_access(user, person.branch_id, "Bu personel için işlem yetkiniz bulunmamaktadır")

        now = self._clock().replace(microsecond=0)
        record = self._attendance.get_for_personnel_and_date(person.id, now.date())
        result = choose_scan_step(record).apply(attendance=self._attendance, person=person, now=now)

        logger.info("QR scan %s (personnel=%s, by=%s)", result.action.value, person.id, user.id)
        return result
