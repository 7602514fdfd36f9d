from datetime import date, datetime

import pytest

from personnel_tracking.attendance.scan_steps import ALREADY_COMPLETED, CheckInStep, CheckOutStep, choose_scan_step
from personnel_tracking.attendance.service import AttendanceService
from personnel_tracking.core.enums import ScanAction, UserRole
from personnel_tracking.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from personnel_tracking.system_settings.service import SystemSettingsService
from tests.fakes import InMemoryAttendance, InMemoryPersonnel, InMemorySettings, make_person, make_user

TODAY = date(2030, 3, 4)


@pytest.fixture
def attendance():
    return InMemoryAttendance()


@pytest.fixture
def people():
    return InMemoryPersonnel()


@pytest.fixture
def settings():
    return SystemSettingsService(InMemorySettings())


@pytest.fixture
def service(attendance, people, settings, local_clock):
    return AttendanceService(attendance, people, settings, clock=local_clock)


@pytest.fixture
def person(people):
    p = make_person(branch_id="branch-a", first_name="Zeynep", last_name="Demir")
    people.people[p.id] = p
    return p


@pytest.fixture
def admin():
    return make_user(role=UserRole.ADMIN)


def _add(attendance, person, check_in, check_out=None, day=TODAY):
    return attendance.create(
        personnel_id=person.id,
        day=day,
        check_in=check_in,
        check_out=check_out,
        location=None,
        qr_code=None,
        notes=None,
    )


def test_first_scan_checks_in_second_checks_out(service, person, admin, attendance, local_clock):
    first = service.scan_qr(person.id, user=admin)
    assert first.action == ScanAction.CHECK_IN
    assert first.to_json() == {
        "message": "Zeynep Demir başarıyla giriş yaptı",
        "action": "check-in",
        "time": "09:00:00",
    }

    local_clock.advance(hours=8, minutes=30)
    second = service.scan_qr(person.id, user=admin)
    assert second.action == ScanAction.CHECK_OUT
    assert second.to_json()["time"] == "17:30:00"

    (record,) = attendance.records.values()
    assert record.check_in == datetime(2030, 3, 4, 9, 0)
    assert record.check_out == datetime(2030, 3, 4, 17, 30)
    assert record.qr_code == person.id


def test_third_scan_is_rejected(service, person, admin):
    service.scan_qr(person.id, user=admin)
    service.scan_qr(person.id, user=admin)
    with pytest.raises(ValidationError, match=ALREADY_COMPLETED):
        service.scan_qr(person.id, user=admin)


def test_scan_next_day_starts_a_new_record(service, person, admin, local_clock, attendance):
    service.scan_qr(person.id, user=admin)
    local_clock.advance(days=1)
    assert service.scan_qr(person.id, user=admin).action == ScanAction.CHECK_IN
    assert len(attendance.records) == 2


def test_scan_unknown_code(service, admin):
    with pytest.raises(NotFoundError):
        service.scan_qr("not-a-person", user=admin)
    with pytest.raises(ValidationError):
        service.scan_qr("  ", user=admin)


def test_branch_admin_cannot_scan_other_branch(service, person):
    other = make_user(role=UserRole.BRANCH_ADMIN, branch_id="branch-b")
    with pytest.raises(AuthorizationError):
        service.scan_qr(person.id, user=other)

    own = make_user(role=UserRole.BRANCH_ADMIN, branch_id="branch-a")
    assert service.scan_qr(person.id, user=own).action == ScanAction.CHECK_IN


def test_lost_checkout_race_reports_completed(attendance, person):
    record = _add(attendance, person, datetime(2030, 3, 4, 9, 0))
    step = choose_scan_step(record)
    assert isinstance(step, CheckOutStep)

    attendance.set_check_out(record.id, datetime(2030, 3, 4, 17, 0))
    with pytest.raises(ValidationError, match=ALREADY_COMPLETED):
        step.apply(attendance=attendance, person=person, now=datetime(2030, 3, 4, 17, 1))


def test_choose_scan_step_without_record():
    assert isinstance(choose_scan_step(None), CheckInStep)


def test_summary_counts_present_completed_and_late(service, people, attendance):
    names = ["A", "B", "C", "D"]
    staff = []
    for name in names:
        p = make_person(first_name=name)
        people.people[p.id] = p
        staff.append(p)

    _add(attendance, staff[0], datetime(2030, 3, 4, 8, 55))
    _add(attendance, staff[1], datetime(2030, 3, 4, 9, 15), datetime(2030, 3, 4, 18, 0))
    _add(attendance, staff[2], datetime(2030, 3, 4, 9, 16))
    _add(attendance, staff[3], datetime(2030, 3, 3, 10, 0), day=date(2030, 3, 3))

    summary = service.summary()
    assert summary.to_json() == {"total": 3, "present": 2, "completed": 1, "late": 1}
    assert service.summary("2030-03-03").late == 1


def test_summary_follows_configured_work_start(service, settings, person, attendance):
    settings.update_settings({"workHours": {"start": "08:00"}, "attendance": {"graceMinutes": 0}}, updated_by="u")
    _add(attendance, person, datetime(2030, 3, 4, 8, 1))
    assert service.summary().late == 1


def test_manual_record_parses_times_in_business_timezone(service, person, admin):
    record = service.record_attendance(
        {
            "personnelId": person.id,
            "checkIn": "2030-03-04T05:30:00Z",
            "checkOut": "2030-03-04T17:45:00",
            "location": "Merkez",
        },
        user=admin,
    )
    assert record.date == TODAY
    assert record.check_in == datetime(2030, 3, 4, 8, 30)
    assert record.check_out == datetime(2030, 3, 4, 17, 45)
    assert record.location == "Merkez"


def test_manual_record_validation(service, person, admin):
    with pytest.raises(ValidationError):
        service.record_attendance({}, user=admin)
    with pytest.raises(NotFoundError):
        service.record_attendance({"personnelId": "ghost"}, user=admin)
    with pytest.raises(ValidationError):
        service.record_attendance(
            {"personnelId": person.id, "checkIn": "2030-03-04T10:00:00", "checkOut": "2030-03-04T09:00:00"},
            user=admin,
        )
    with pytest.raises(ValidationError):
        service.record_attendance({"personnelId": person.id, "checkIn": "dün"}, user=admin)


def test_listing_by_person_and_range(service, person, attendance):
    _add(attendance, person, datetime(2030, 3, 1, 9, 0), day=date(2030, 3, 1))
    _add(attendance, person, datetime(2030, 3, 2, 9, 0), day=date(2030, 3, 2))
    _add(attendance, person, datetime(2030, 3, 4, 9, 0))

    days = [r.date for r in service.list_attendance(personnel_id=person.id, start_date="2030-03-02")]
    assert days == [date(2030, 3, 4), date(2030, 3, 2)]
    assert [r.date for r in service.list_attendance()] == [TODAY]
    assert len(service.list_today()) == 1
