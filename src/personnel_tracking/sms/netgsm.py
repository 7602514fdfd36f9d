from __future__ import annotations

import logging
import re
from typing import Optional

import requests

from .gateway import mask_phone, two_factor_message

logger = logging.getLogger(__name__)

DEFAULT_NETGSM_URL = "https://api.netgsm.com.tr/sms/send/get"

# Netgsm answers with a plain-text status; "00"/"01" (followed by a job id) mean queued.
_SUCCESS_PREFIXES = ("00", "01")


class NetgsmGateway:
    """Sends SMS through the Netgsm HTTP GET API."""

    def __init__(
        self,
        *,
        username: str,
        password: str,
        title: str = "PTS",
        url: str = DEFAULT_NETGSM_URL,
        timeout: float = 10.0,
        http: Optional[requests.Session] = None,
    ):
        self._username = username
        self._password = password
        self._title = title
        self._url = url
        self._timeout = timeout
        self._http = http or requests.Session()

    def send_sms(self, phone: str, message: str) -> bool:
        if not self._username or not self._password:
            logger.warning("Netgsm credentials are not configured; SMS to %s not sent", mask_phone(phone))
            return False

        params = {
            "usercode": self._username,
            "password": self._password,
            "gsmno": re.sub(r"\D", "", str(phone)),
            "message": message,
            "msgheader": self._title,
        }

        try:
            response = self._http.get(self._url, params=params, timeout=self._timeout)
            response.raise_for_status()
        except requests.Timeout:
            logger.error("Netgsm request timed out after %ss (to=%s)", self._timeout, mask_phone(phone))
            return False
        except requests.RequestException as exc:
            logger.error("Netgsm request failed (to=%s): %s", mask_phone(phone), exc)
            return False

        result = response.text.strip()
        if result.startswith(_SUCCESS_PREFIXES):
            logger.info("SMS queued by Netgsm (to=%s)", mask_phone(phone))
            return True

        logger.error("Netgsm rejected SMS (to=%s, code=%s)", mask_phone(phone), result[:20])
        return False

    def send_two_factor(self, phone: str, code: str) -> bool:
        return self.send_sms(phone, two_factor_message(code))

    def close(self) -> None:
        self._http.close()
