import os

def get_settings_module() -> str:
    # APP_ENV selects the settings module, development by default
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "college_attendance.config.production"

    if env in {"test", "testing"}:
        return "college_attendance.config.testing"

    return "college_attendance.config.development"


def parse_email_list(value: str) -> frozenset[str]:
    return frozenset(e.strip().lower() for e in (value or "").split(",") if e.strip())
