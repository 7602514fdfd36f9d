from datetime import date, datetime, time

import pytest

from personnel_tracking.common.datetime_utils import parse_iso_date, parse_iso_datetime
from personnel_tracking.common.serialization import camel_case, to_json
from personnel_tracking.common.validators import (
    optional_bool,
    optional_int,
    require_date,
    require_enum,
    require_hhmm,
    require_non_empty,
)
from personnel_tracking.core.enums import LeaveType
from personnel_tracking.core.exceptions import ValidationError
from personnel_tracking.system_settings.model import DEFAULT_SETTINGS, deep_merge
from personnel_tracking.system_settings.service import SystemSettingsService
from tests.fakes import InMemorySettings, make_person


@pytest.fixture
def settings():
    return SystemSettingsService(InMemorySettings())


def test_defaults_until_something_is_saved(settings):
    assert settings.get_settings() == DEFAULT_SETTINGS
    assert settings.lateness_policy() == (time(9, 0), 15)


def test_update_merges_nested_sections(settings):
    doc = settings.update_settings(
        {"companyName": "Acme", "workHours": {"start": "08:30"}, "backup": {"retentionDays": 7}},
        updated_by="user-1",
    )
    assert doc["companyName"] == "Acme"
    assert doc["workHours"] == {"start": "08:30", "end": "18:00", "lunchBreak": 60}
    assert doc["backup"]["autoBackup"] is True
    assert doc["backup"]["retentionDays"] == 7
    assert settings.get_settings() == doc
    assert settings.lateness_policy() == (time(8, 30), 15)


def test_update_requires_object(settings):
    with pytest.raises(ValidationError):
        settings.update_settings(None, updated_by="user-1")


def test_bad_stored_policy_falls_back(settings):
    settings.update_settings({"workHours": {"start": "sabah"}, "attendance": {"graceMinutes": "çok"}}, updated_by="u")
    assert settings.lateness_policy() == (time(9, 0), 15)


def test_deep_merge_does_not_mutate_inputs():
    base = {"a": {"b": 1, "c": 2}}
    merged = deep_merge(base, {"a": {"b": 5}, "d": [1]})
    assert merged == {"a": {"b": 5, "c": 2}, "d": [1]}
    assert base == {"a": {"b": 1, "c": 2}}


def test_date_parsing():
    assert parse_iso_date("2030-03-04") == date(2030, 3, 4)
    assert parse_iso_date("2030-03-04T22:30:00Z") == date(2030, 3, 4)
    assert parse_iso_datetime("2030-03-04T21:30:00Z", "Europe/Istanbul") == datetime(2030, 3, 5, 0, 30)
    assert parse_iso_datetime("2030-03-04T21:30:00+03:00") == datetime(2030, 3, 4, 18, 30)
    assert require_date("2030-03-04", "Tarih") == date(2030, 3, 4)
    with pytest.raises(ValidationError):
        require_date("04/03/2030", "Tarih")


def test_scalar_validators():
    assert require_non_empty("  x ", "Ad") == "x"
    with pytest.raises(ValidationError, match="Ad alanı zorunludur"):
        require_non_empty("   ", "Ad")
    assert require_enum("hastalik", LeaveType, "Tür") == LeaveType.HASTALIK
    assert require_hhmm("7:05", "Saat") == "07:05"
    assert optional_int("", "Maaş") is None
    with pytest.raises(ValidationError):
        optional_int(True, "Maaş")
    with pytest.raises(ValidationError):
        optional_bool("true", "Aktif")


def test_entities_serialize_with_camel_case_keys():
    assert camel_case("parent_branch_id") == "parentBranchId"
    person = make_person(first_name="Ece")
    body = to_json(person)
    assert body["firstName"] == "Ece"
    assert body["startDate"] == "2024-01-15"
    assert body["isActive"] is True
