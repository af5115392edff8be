"""Tests for configuration loading."""

import pytest

from expense_tracker.config import (
    AppSettings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)
from expense_tracker.models.expense import Granularity


class TestSettings:
    """Tests for pydantic-settings configuration."""

    def test_defaults(self):
        settings = get_settings()
        assert settings.storage.path.endswith("expenses.json")
        assert settings.storage.key == "expenses"
        assert settings.app.log_level == "INFO"
        assert settings.app.default_granularity == Granularity.DAY
        assert settings.app.audit_history_size == 200

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("EXPENSES_STORAGE_KEY", "household")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("DEFAULT_GRANULARITY", "month")

        assert StorageSettings().key == "household"
        app = AppSettings()
        assert app.log_level == "DEBUG"
        assert app.default_granularity == Granularity.MONTH

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("AUDIT_HISTORY_SIZE=25\n")
        assert AppSettings().audit_history_size == 25

    def test_storage_dotenv_file(self, tmp_path):
        """Storage location and key can come from .env as well."""
        (tmp_path / ".env").write_text(
            f"EXPENSES_STORAGE_PATH={tmp_path / 'from_dotenv.json'}\n"
            "EXPENSES_STORAGE_KEY=household\n"
        )
        storage = StorageSettings()
        assert storage.path == str(tmp_path / "from_dotenv.json")
        assert storage.key == "household"

    def test_environment_beats_dotenv(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("EXPENSES_STORAGE_KEY=household\n")
        monkeypatch.setenv("EXPENSES_STORAGE_KEY", "override")
        assert StorageSettings().key == "override"

    def test_path_expands_user(self, monkeypatch):
        monkeypatch.setenv("EXPENSES_STORAGE_PATH", "~/tracker.json")
        assert not StorageSettings().path.startswith("~")

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        with pytest.raises(ValueError, match="Unknown log level"):
            AppSettings()

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_validate_all_settings(self, monkeypatch):
        assert validate_all_settings() == {"storage": True, "app": True}

        monkeypatch.setenv("AUDIT_HISTORY_SIZE", "0")
        results = validate_all_settings()
        assert results["app"] is False
        assert "app_error" in results
