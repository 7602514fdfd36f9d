from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


def two_factor_message(code: str) -> str:
    return f"PTS giriş doğrulama kodunuz: {code}. Bu kodu kimseyle paylaşmayın."


def mask_phone(phone: str) -> str:
    digits = "".join(ch for ch in str(phone) if ch.isdigit())
    if len(digits) <= 4:
        return "*" * len(digits)
    return "*" * (len(digits) - 4) + digits[-4:]


class SmsGateway(Protocol):
    """Outbound SMS port. Implementations report failure by returning False, never by raising."""

    def send_sms(self, phone: str, message: str) -> bool:
        raise NotImplementedError

    def send_two_factor(self, phone: str, code: str) -> bool:
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError


class ConsoleSmsGateway:
    """Development backend: writes the message to the log instead of sending it."""

    def send_sms(self, phone: str, message: str) -> bool:
        logger.info("[console-sms] to=%s message=%s", phone, message)
        return True

    def send_two_factor(self, phone: str, code: str) -> bool:
        return self.send_sms(phone, two_factor_message(code))

    def close(self) -> None:
        pass
