from __future__ import annotations

from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from personnel_tracking.attendance.service import AttendanceService
from personnel_tracking.auth.service import AuthService
from personnel_tracking.branches.service import BranchService
from personnel_tracking.container import Container
from personnel_tracking.core.enums import UserRole
from personnel_tracking.leave.service import LeaveRequestService
from personnel_tracking.main import create_app
from personnel_tracking.personnel.service import PersonnelService
from personnel_tracking.shifts.service import ShiftService
from personnel_tracking.stats.service import StatsService
from personnel_tracking.system_settings.service import SystemSettingsService
from personnel_tracking.users.passwords import hash_password
from tests.fakes import (
    FakeClock,
    InMemoryAttendance,
    InMemoryBranches,
    InMemoryLeaveRequests,
    InMemoryPersonnel,
    InMemorySessions,
    InMemorySettings,
    InMemoryShifts,
    InMemoryUsers,
    RecordingSms,
    make_user,
)

TEST_SETTINGS = "personnel_tracking.config.testing"
PASSWORD = "Gizli-Sifre-1"


@pytest.fixture
def clock():
    # UTC; 09:00 in Istanbul
    return FakeClock(datetime(2030, 3, 4, 6, 0, 0))


@pytest.fixture
def local_clock():
    return FakeClock(datetime(2030, 3, 4, 9, 0, 0))


@pytest.fixture
def sms():
    return RecordingSms()


@pytest.fixture
def repos():
    return SimpleNamespace(
        users=InMemoryUsers(),
        sessions=InMemorySessions(),
        branches=InMemoryBranches(),
        personnel=InMemoryPersonnel(),
        shifts=InMemoryShifts(),
        attendance=InMemoryAttendance(),
        leave=InMemoryLeaveRequests(),
        settings=InMemorySettings(),
    )


@pytest.fixture
def container(repos, sms, clock, local_clock) -> Container:
    settings_service = SystemSettingsService(repos.settings)
    return Container(
        sessions_repo=repos.sessions,
        sms_gateway=sms,
        session_lifetime=timedelta(hours=24),
        clock=clock,
        auth_service=AuthService(repos.users, sms, clock=clock),
        branch_service=BranchService(repos.branches),
        personnel_service=PersonnelService(repos.personnel),
        shift_service=ShiftService(repos.shifts),
        attendance_service=AttendanceService(
            repos.attendance, repos.personnel, settings_service, clock=local_clock
        ),
        leave_service=LeaveRequestService(repos.leave, clock=clock),
        stats_service=StatsService(
            repos.personnel, repos.attendance, repos.leave, repos.shifts, clock=local_clock
        ),
        settings_service=settings_service,
    )


@pytest.fixture
def app(container):
    return create_app(TEST_SETTINGS, container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sign_in(client, repos, sms):
    """Create an account and walk it through password + SMS code; returns the user."""

    def _sign_in(role: UserRole = UserRole.SUPER_ADMIN, branch_id=None, phone=None):
        user = repos.users.add(
            make_user(
                phone=phone or f"0555{len(repos.users.users):07d}",
                password_hash=hash_password(PASSWORD),
                role=role,
                branch_id=branch_id,
            )
        )
        resp = client.post("/api/login", json={"phone": user.phone, "password": PASSWORD})
        assert resp.status_code == 200
        resp = client.post("/api/verify-2fa", json={"userId": user.id, "code": sms.last_code()})
        assert resp.status_code == 200
        return user

    return _sign_in
