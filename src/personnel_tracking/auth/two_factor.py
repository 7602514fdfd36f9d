from __future__ import annotations

import hmac
import secrets

from ..core.constants import TWO_FACTOR_CODE_MAX, TWO_FACTOR_CODE_MIN


def generate_two_factor_code() -> str:
    """Six-digit code, uniform over 100000..999999, from the OS CSPRNG."""
    span = TWO_FACTOR_CODE_MAX - TWO_FACTOR_CODE_MIN + 1
    return f"{TWO_FACTOR_CODE_MIN + secrets.randbelow(span):06d}"


def codes_match(expected: str, submitted: str) -> bool:
    return hmac.compare_digest(expected.encode("utf-8"), submitted.encode("utf-8"))
