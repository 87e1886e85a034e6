import os


def get_settings_module() -> str:
    # APP_ENV selects the settings module; anything unknown falls back to development.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "cafe_backoffice.config.production"

    if env in {"test", "testing"}:
        return "cafe_backoffice.config.testing"

    return "cafe_backoffice.config.development"
