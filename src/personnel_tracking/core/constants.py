"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

TWO_FACTOR_CODE_MIN = 100000
TWO_FACTOR_CODE_MAX = 999999
DEFAULT_TWO_FACTOR_TTL_MINUTES = 5

DEFAULT_SESSION_LIFETIME_HOURS = 24

SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1
SCRYPT_KEY_LEN = 64
PASSWORD_SALT_BYTES = 16

DEFAULT_TIMEZONE = "Europe/Istanbul"
QR_SCAN_NOTE = "QR kod ile giriş"
