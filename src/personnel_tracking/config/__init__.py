import os


def get_settings_module() -> str:
    # APP_ENV chooses the settings module, default is development
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "personnel_tracking.config.production"

    if env in {"test", "testing"}:
        return "personnel_tracking.config.testing"

    return "personnel_tracking.config.development"


def env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}
