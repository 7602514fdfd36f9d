from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from types import ModuleType
from typing import Callable

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .auth.service import AuthService
from .branches.mysql_branch_repository import MySQLBranchRepository
from .branches.service import BranchService
from .common.datetime_utils import utc_now
from .core.constants import DEFAULT_SESSION_LIFETIME_HOURS, DEFAULT_TIMEZONE, DEFAULT_TWO_FACTOR_TTL_MINUTES
from .database.connection import DatabaseConnection, DBConfig
from .leave.mysql_leave_repository import MySQLLeaveRequestRepository
from .leave.service import LeaveRequestService
from .personnel.mysql_personnel_repository import MySQLPersonnelRepository
from .personnel.service import PersonnelService
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.service import ShiftService
from .sms.gateway import ConsoleSmsGateway, SmsGateway
from .sms.netgsm import DEFAULT_NETGSM_URL, NetgsmGateway
from .stats.service import StatsService
from .system_settings.mysql_settings_repository import MySQLSettingsRepository
from .system_settings.service import SystemSettingsService
from .users.mysql_user_repository import MySQLUserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    """Everything a request handler needs, built once at start-up."""

    sessions_repo: SessionRepository
    sms_gateway: SmsGateway
    session_lifetime: timedelta
    clock: Callable[[], datetime]

    auth_service: AuthService
    branch_service: BranchService
    personnel_service: PersonnelService
    shift_service: ShiftService
    attendance_service: AttendanceService
    leave_service: LeaveRequestService
    stats_service: StatsService
    settings_service: SystemSettingsService

    def close(self) -> None:
        self.sms_gateway.close()


def build_sms_gateway(settings: ModuleType) -> SmsGateway:
    backend = str(getattr(settings, "SMS_BACKEND", "console")).lower()
    if backend == "netgsm":
        return NetgsmGateway(
            username=getattr(settings, "NETGSM_USERNAME", ""),
            password=getattr(settings, "NETGSM_PASSWORD", ""),
            title=getattr(settings, "NETGSM_TITLE", "PTS"),
            url=getattr(settings, "NETGSM_URL", DEFAULT_NETGSM_URL),
            timeout=float(getattr(settings, "NETGSM_TIMEOUT", 10.0)),
        )
    if backend != "console":
        logger.warning("Unknown SMS_BACKEND '%s'; using console backend", backend)
    return ConsoleSmsGateway()


def build_container(settings: ModuleType, *, conn: DatabaseConnection | None = None) -> Container:
    conn = conn or DatabaseConnection(DBConfig.from_mapping(getattr(settings, "DB_CONFIG")))
    tz_name = getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE)

    users_repo = MySQLUserRepository(conn)
    sessions_repo = MySQLSessionRepository(conn)
    branches_repo = MySQLBranchRepository(conn)
    personnel_repo = MySQLPersonnelRepository(conn)
    shifts_repo = MySQLShiftRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    leave_repo = MySQLLeaveRequestRepository(conn)
    settings_repo = MySQLSettingsRepository(conn)

    sms_gateway = build_sms_gateway(settings)
    settings_service = SystemSettingsService(settings_repo)

    auth_service = AuthService(
        users_repo,
        sms_gateway,
        code_ttl=timedelta(minutes=int(getattr(settings, "TWO_FACTOR_TTL_MINUTES", DEFAULT_TWO_FACTOR_TTL_MINUTES))),
        sms_strict=bool(getattr(settings, "SMS_STRICT", False)),
        clock=utc_now,
    )

    return Container(
        sessions_repo=sessions_repo,
        sms_gateway=sms_gateway,
        session_lifetime=timedelta(
            hours=int(getattr(settings, "SESSION_LIFETIME_HOURS", DEFAULT_SESSION_LIFETIME_HOURS))
        ),
        clock=utc_now,
        auth_service=auth_service,
        branch_service=BranchService(branches_repo),
        personnel_service=PersonnelService(personnel_repo),
        shift_service=ShiftService(shifts_repo),
        attendance_service=AttendanceService(attendance_repo, personnel_repo, settings_service, tz_name=tz_name),
        leave_service=LeaveRequestService(leave_repo),
        stats_service=StatsService(personnel_repo, attendance_repo, leave_repo, shifts_repo, tz_name=tz_name),
        settings_service=settings_service,
    )
