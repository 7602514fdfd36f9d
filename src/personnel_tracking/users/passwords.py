"""Password hashing.

Stored format is ``<hash>.<salt>``: a 64-byte scrypt digest and a 16-byte random
salt, both hex-encoded. The hex salt string itself is the scrypt salt, so hashes
created by the previous Node.js deployment verify unchanged.
"""
from __future__ import annotations

import hashlib
import hmac
import secrets

from ..core.constants import PASSWORD_SALT_BYTES, SCRYPT_KEY_LEN, SCRYPT_N, SCRYPT_P, SCRYPT_R


def _derive(password: str, salt: str) -> bytes:
    return hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt.encode("utf-8"),
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
        dklen=SCRYPT_KEY_LEN,
    )


def hash_password(password: str) -> str:
    salt = secrets.token_hex(PASSWORD_SALT_BYTES)
    return f"{_derive(password, salt).hex()}.{salt}"


def verify_password(password: str, stored: str) -> bool:
    try:
        hashed, salt = stored.split(".", 1)
        expected = bytes.fromhex(hashed)
    except (AttributeError, ValueError):
        # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
        return False

    if not salt or len(expected) != SCRYPT_KEY_LEN:
        return False

    return hmac.compare_digest(expected, _derive(password, salt))
