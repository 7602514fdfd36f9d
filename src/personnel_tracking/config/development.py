import os

from . import env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "personnel_tracking"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
TIMEZONE = os.getenv("TIMEZONE", "Europe/Istanbul")

SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "pts.sid")
SESSION_COOKIE_SECURE = False
SESSION_LIFETIME_HOURS = int(os.getenv("SESSION_LIFETIME_HOURS", "24"))

# Without Netgsm credentials the code is written to the log instead of being sent.
SMS_BACKEND = os.getenv("SMS_BACKEND", "console")
NETGSM_USERNAME = os.getenv("NETGSM_USERNAME", "")
NETGSM_PASSWORD = os.getenv("NETGSM_PASSWORD", "")
NETGSM_TITLE = os.getenv("NETGSM_TITLE", "PTS")
NETGSM_URL = os.getenv("NETGSM_URL", "https://api.netgsm.com.tr/sms/send/get")
NETGSM_TIMEOUT = float(os.getenv("NETGSM_TIMEOUT", "10"))
SMS_STRICT = env_flag("SMS_STRICT", "0")

TWO_FACTOR_TTL_MINUTES = int(os.getenv("TWO_FACTOR_TTL_MINUTES", "5"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
# Optional: also create the seed super admin on startup
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")

SEED_ADMIN_PHONE = os.getenv("SEED_ADMIN_PHONE", "05550000000")
SEED_ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "admin123")
SEED_ADMIN_NAME = os.getenv("SEED_ADMIN_NAME", "Sistem Yöneticisi")
