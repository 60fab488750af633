"""Tests for typed runtime settings loading."""

from __future__ import annotations

import pytest

from position_ledger.config import SettingsLoadError, config_load_database_url, config_load_settings


def test_config_load_settings_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Map uppercase environment variables to settings fields."""

    monkeypatch.setenv("ENVIRONMENT_NAME", "staging")
    monkeypatch.setenv("BLOB_ROOT_PATH", " /srv/imports ")
    monkeypatch.setenv("CODEC_STRICT_TYPES", "false")
    monkeypatch.setenv("IMPORT_WORKER_BATCH_SIZE", "25")
    monkeypatch.setenv("IMPORT_WORKER_CLAIM_TIMEOUT_SECONDS", "60")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = config_load_settings()

    assert settings.environment_name == "staging"
    assert settings.blob_root_path == "/srv/imports"
    assert settings.codec_strict_types is False
    assert settings.import_worker_batch_size == 25
    assert settings.import_worker_claim_timeout_seconds == 60
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    ("variable_name", "value"),
    [
        ("IMPORT_WORKER_BATCH_SIZE", "0"),
        ("IMPORT_WORKER_CLAIM_TIMEOUT_SECONDS", "0"),
        ("APPLICATION_PORT", "70000"),
        ("LOG_LEVEL", "chatty"),
        ("DATABASE_URL", "   "),
    ],
)
def test_config_load_settings_wraps_validation_errors(
    monkeypatch: pytest.MonkeyPatch,
    variable_name: str,
    value: str,
) -> None:
    """Raise SettingsLoadError for invalid values."""

    monkeypatch.setenv(variable_name, value)

    with pytest.raises(SettingsLoadError):
        config_load_settings()


def test_config_load_database_url_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Return the migration DSN from the environment."""

    monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg://ledger@db:5432/ledger")

    assert config_load_database_url() == "postgresql+psycopg://ledger@db:5432/ledger"
