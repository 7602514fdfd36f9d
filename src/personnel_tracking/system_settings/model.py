from __future__ import annotations

import copy
from typing import Any, Dict, Mapping

SETTINGS_KEY = "system"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "companyName": "",
    "companyAddress": "",
    "companyPhone": "",
    "companyEmail": "",
    "workHours": {
        "start": "09:00",
        "end": "18:00",
        "lunchBreak": 60,
    },
    "notifications": {
        "emailEnabled": True,
        "smsEnabled": True,
        "lateArrivalAlert": True,
        "absenceAlert": True,
    },
    "attendance": {
        "graceMinutes": 15,
        "autoClockOut": False,
        "requireLocationCheck": False,
    },
    "backup": {
        "autoBackup": True,
        "backupFrequency": "daily",
        "retentionDays": 30,
    },
}


def default_settings() -> Dict[str, Any]:
    return copy.deepcopy(DEFAULT_SETTINGS)


def deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively merge `overrides` into a copy of `base`; nested objects merge, everything else replaces."""
    merged: Dict[str, Any] = copy.deepcopy(dict(base))
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged
