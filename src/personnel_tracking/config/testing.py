import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "personnel_tracking_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
TIMEZONE = "Europe/Istanbul"

SESSION_COOKIE_NAME = "pts.sid"
SESSION_COOKIE_SECURE = False
SESSION_LIFETIME_HOURS = 24

SMS_BACKEND = "console"
NETGSM_USERNAME = ""
NETGSM_PASSWORD = ""
NETGSM_TITLE = "PTS"
NETGSM_URL = "https://api.netgsm.com.tr/sms/send/get"
NETGSM_TIMEOUT = 10.0
SMS_STRICT = False

TWO_FACTOR_TTL_MINUTES = 5

AUTO_INIT_DB = False
AUTO_SEED_DB = False

SEED_ADMIN_PHONE = ""
SEED_ADMIN_PASSWORD = ""
SEED_ADMIN_NAME = ""
