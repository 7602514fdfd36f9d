from __future__ import annotations

from datetime import date, datetime, time
from enum import Enum
from typing import Any, Mapping, Optional, Type, TypeVar

from ..core.exceptions import ValidationError
from .datetime_utils import parse_hhmm, parse_iso_date, parse_iso_datetime

E = TypeVar("E", bound=Enum)


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} alanı zorunludur")
    return str(value).strip()


def optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def require_json_object(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValidationError("Geçersiz istek gövdesi")
    return payload


def require_enum(value: Any, enum_cls: Type[E], field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"{field_name} geçersiz: {value}")


def require_date(value: Any, field_name: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = require_non_empty(value, field_name)
    try:
        return parse_iso_date(text)
    except ValueError:
        raise ValidationError(f"{field_name} geçerli bir tarih değil")


def optional_date(value: Any, field_name: str) -> Optional[date]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return require_date(value, field_name)


def optional_datetime(value: Any, field_name: str, tz_name: Optional[str] = None) -> Optional[datetime]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, datetime):
        return value
    try:
        return parse_iso_datetime(str(value), tz_name)
    except ValueError:
        raise ValidationError(f"{field_name} geçerli bir zaman değil")


def require_hhmm(value: Any, field_name: str) -> str:
    text = require_non_empty(value, field_name)
    try:
        t: time = parse_hhmm(text)
    except ValueError:
        raise ValidationError(f"{field_name} SS:DD biçiminde olmalıdır")
    return t.strftime("%H:%M")


def optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} sayı olmalıdır")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} sayı olmalıdır")


def optional_bool(value: Any, field_name: str) -> Optional[bool]:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    raise ValidationError(f"{field_name} true/false olmalıdır")
