from datetime import date

import pytest

from personnel_tracking.core.enums import UserRole
from personnel_tracking.core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from personnel_tracking.personnel.qr import render_qr_png
from personnel_tracking.personnel.service import PersonnelService
from tests.fakes import InMemoryPersonnel, make_user


@pytest.fixture
def repo():
    return InMemoryPersonnel()


@pytest.fixture
def service(repo):
    return PersonnelService(repo)


@pytest.fixture
def admin():
    return make_user(role=UserRole.ADMIN)


def _payload(**overrides):
    data = {
        "employeeNumber": "P-001",
        "firstName": "Elif",
        "lastName": "Şahin",
        "phone": "05321234567",
        "nationalId": "12345678901",
        "position": "Mağaza Müdürü",
        "branchId": "branch-a",
        "startDate": "2024-02-01",
    }
    data.update(overrides)
    return data


def test_create_parses_and_defaults(service, admin):
    person = service.create_personnel(_payload(salary="42000", birthDate="1990-05-17"), user=admin)
    assert person.full_name == "Elif Şahin"
    assert person.start_date == date(2024, 2, 1)
    assert person.birth_date == date(1990, 5, 17)
    assert person.salary == 42000
    assert person.is_active is True
    assert person.email is None


@pytest.mark.parametrize("key", ["employeeNumber", "firstName", "nationalId", "branchId", "startDate"])
def test_create_requires_fields(service, admin, key):
    data = _payload()
    del data[key]
    with pytest.raises(ValidationError):
        service.create_personnel(data, user=admin)


@pytest.mark.parametrize("national_id", ["123", "1234567890A", "123456789012"])
def test_national_id_must_be_eleven_digits(service, admin, national_id):
    with pytest.raises(ValidationError):
        service.create_personnel(_payload(nationalId=national_id), user=admin)


def test_duplicates_are_conflicts(service, admin):
    service.create_personnel(_payload(), user=admin)
    with pytest.raises(ConflictError, match="sicil"):
        service.create_personnel(_payload(nationalId="99999999999"), user=admin)


def test_branch_admin_is_limited_to_own_branch(service, admin):
    manager = make_user(role=UserRole.BRANCH_ADMIN, branch_id="branch-a")
    with pytest.raises(AuthorizationError):
        service.create_personnel(_payload(branchId="branch-b"), user=manager)

    mine = service.create_personnel(_payload(), user=manager)
    theirs = service.create_personnel(
        _payload(employeeNumber="P-002", nationalId="10987654321", branchId="branch-b"), user=admin
    )

    assert [p.id for p in service.list_personnel(user=manager)] == [mine.id]
    assert {p.id for p in service.list_personnel(user=admin)} == {mine.id, theirs.id}
    with pytest.raises(AuthorizationError):
        service.get_personnel(theirs.id, user=manager)
    with pytest.raises(AuthorizationError):
        service.update_personnel(mine.id, {"branchId": "branch-b"}, user=manager)


def test_search_matches_full_name_case_insensitively(service, admin):
    service.create_personnel(_payload(), user=admin)
    service.create_personnel(
        _payload(employeeNumber="P-002", nationalId="10987654321", firstName="Can", lastName="Yücel"), user=admin
    )
    assert [p.first_name for p in service.list_personnel(user=admin, search="CAN y")] == ["Can"]


def test_update_is_partial(service, admin):
    person = service.create_personnel(_payload(), user=admin)
    updated = service.update_personnel(person.id, {"position": "Kasiyer", "isActive": False}, user=admin)
    assert updated.position == "Kasiyer"
    assert updated.is_active is False
    assert updated.first_name == "Elif"

    with pytest.raises(NotFoundError):
        service.update_personnel("missing", {"position": "x"}, user=admin)
    with pytest.raises(ValidationError):
        service.update_personnel(person.id, {"isActive": "evet"}, user=admin)


def test_get_missing_person(service, admin):
    with pytest.raises(NotFoundError):
        service.get_personnel("missing", user=admin)


def test_qr_badge_is_png():
    data = render_qr_png("person-42").getvalue()
    assert data.startswith(b"\x89PNG")
