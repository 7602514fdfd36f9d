from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Optional

import pytz

from ..core.constants import DEFAULT_TIMEZONE


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD (or a full ISO timestamp) into a date."""
    value = value.strip()
    if len(value) > 10:
        return parse_iso_datetime(value).date()
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: str, tz_name: Optional[str] = None) -> datetime:
    """Parse an ISO-8601 timestamp as sent by browsers.

    Aware values are converted to `tz_name` (UTC when omitted) and returned naive,
    which is how DATETIME columns are stored.
    """
    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        target = pytz.timezone(tz_name) if tz_name else timezone.utc
        parsed = parsed.astimezone(target).replace(tzinfo=None)
    return parsed


def parse_hhmm(value: str) -> time:
    return datetime.strptime(value.strip(), "%H:%M").time()


def local_now(tz_name: str = DEFAULT_TIMEZONE) -> datetime:
    """Naive wall-clock time in the business timezone.

    Note: Wrapped so tests can patch/mock it easier.
    """
    return datetime.now(pytz.timezone(tz_name)).replace(tzinfo=None)


def utc_now() -> datetime:
    """Naive UTC now, matching MySQL DATETIME columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
