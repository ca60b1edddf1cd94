"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from src.services.config import Settings, get_settings, reset_settings


class TestSettings:
    """Environment-driven settings."""

    def test_defaults(self, monkeypatch):
        for name in ("LOCALE", "LOG_LEVEL", "LOG_FILE", "PORT", "RECENT_RECEIPTS_LIMIT"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.locale == "en_KE"
        assert settings.log_level == "INFO"
        assert settings.log_file == "logs/server.log"
        assert settings.port == 8000
        assert settings.recent_receipts_limit == 5

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("LOCALE", "ru_RU")
        monkeypatch.setenv("PORT", "9100")

        settings = Settings(_env_file=None)

        assert settings.locale == "ru_RU"
        assert settings.port == 9100

    def test_log_level_normalized(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")

        assert Settings(_env_file=None).log_level == "WARNING"

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_negative_recent_limit_rejected(self, monkeypatch):
        monkeypatch.setenv("RECENT_RECEIPTS_LIMIT", "-1")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)


class TestSettingsCache:
    """Lazy singleton behavior."""

    def test_cached_until_reset(self, monkeypatch):
        first = get_settings()
        assert get_settings() is first

        monkeypatch.setenv("LOCALE", "ru_RU")
        assert get_settings().locale == first.locale

        reset_settings()
        assert get_settings().locale == "ru_RU"
