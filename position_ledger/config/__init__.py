"""Runtime settings for the API, import worker and migrations."""

from .settings import (
    AppSettings,
    DatabaseUrlSettings,
    SettingsLoadError,
    config_load_database_url,
    config_load_settings,
)

__all__ = [
    "AppSettings",
    "DatabaseUrlSettings",
    "SettingsLoadError",
    "config_load_database_url",
    "config_load_settings",
]
