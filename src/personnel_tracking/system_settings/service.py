from __future__ import annotations

import logging
from datetime import time
from typing import Any, Dict, Tuple

from ..common.datetime_utils import parse_hhmm
from ..common.validators import require_json_object
from .model import SETTINGS_KEY, DEFAULT_SETTINGS, deep_merge, default_settings
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


class SystemSettingsService:
    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def get_settings(self) -> Dict[str, Any]:
        stored = self._settings.get(SETTINGS_KEY)
        return stored if stored is not None else default_settings()

    def update_settings(self, payload: Any, *, updated_by: str) -> Dict[str, Any]:
        changes = require_json_object(payload)
        document = deep_merge(self.get_settings(), changes)
        self._settings.save(SETTINGS_KEY, document)
        logger.info("System settings updated (by=%s, keys=%s)", updated_by, sorted(changes.keys()))
        return document

    def lateness_policy(self) -> Tuple[time, int]:
        """(work start, grace minutes) used to flag late check-ins."""
        settings = deep_merge(DEFAULT_SETTINGS, self.get_settings())
        try:
            start = parse_hhmm(str(settings["workHours"]["start"]))
        except (TypeError, ValueError, KeyError):
            logger.warning("Invalid workHours.start in settings; falling back to default")
            start = parse_hhmm(DEFAULT_SETTINGS["workHours"]["start"])
        try:
            grace = int(settings["attendance"]["graceMinutes"])
        except (TypeError, ValueError, KeyError):
            grace = int(DEFAULT_SETTINGS["attendance"]["graceMinutes"])
        return start, max(grace, 0)
