import logging
from datetime import datetime

import pytz

from .core.constants import DEFAULT_TIMEZONE


class LocalTimeFormatter(logging.Formatter):
    def __init__(self, *args, tz_name: str = DEFAULT_TIMEZONE, **kwargs):
        super().__init__(*args, **kwargs)
        self._tz = pytz.timezone(tz_name)

    def formatTime(self, record, datefmt=None):
        # Render the timestamp in the business timezone (Turkey), not server time
        record_time = datetime.fromtimestamp(record.created, self._tz)
        return record_time.strftime(datefmt) if datefmt else record_time.isoformat()


def setup_logging(level: str = "INFO", tz_name: str = DEFAULT_TIMEZONE) -> logging.Logger:
    logger = logging.getLogger()
    if not logger.handlers:
        formatter = LocalTimeFormatter(
            fmt="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            tz_name=tz_name,
        )

        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    return logger
