"""Tests for environment-driven settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from iexpense.config import (
    LoggingSettings,
    StorageFormat,
    StorageSettings,
    get_settings,
    validate_all_settings,
)
from iexpense.config.settings import DEFAULT_DATA_DIR


class TestStorageSettings:
    """Tests for StorageSettings."""

    def test_defaults(self, clean_env):
        settings = StorageSettings()
        assert settings.data_dir == DEFAULT_DATA_DIR
        assert settings.storage_key == "Items"
        assert settings.storage_format == StorageFormat.JSON

    def test_from_environment(self, clean_env, tmp_path):
        clean_env.setenv("IEXPENSE_DATA_DIR", str(tmp_path))
        clean_env.setenv("IEXPENSE_STORAGE_KEY", "Expenses")
        clean_env.setenv("IEXPENSE_STORAGE_FORMAT", "plist")

        settings = StorageSettings()
        assert settings.data_dir == tmp_path
        assert settings.storage_key == "Expenses"
        assert settings.storage_format == StorageFormat.PLIST

    def test_data_dir_expands_user(self, clean_env):
        clean_env.setenv("IEXPENSE_DATA_DIR", "~/expenses")
        assert StorageSettings().data_dir == Path.home() / "expenses"

    @pytest.mark.parametrize("key", ["a/b", "..", "a\\b"])
    def test_rejects_path_like_key(self, clean_env, key):
        clean_env.setenv("IEXPENSE_STORAGE_KEY", key)
        with pytest.raises(ValidationError):
            StorageSettings()

    def test_rejects_unknown_format(self, clean_env):
        clean_env.setenv("IEXPENSE_STORAGE_FORMAT", "yaml")
        with pytest.raises(ValidationError):
            StorageSettings()


class TestLoggingSettings:
    """Tests for LoggingSettings."""

    def test_defaults(self, clean_env):
        settings = LoggingSettings()
        assert settings.level == "INFO"
        assert settings.format == "json"

    def test_level_is_normalised(self, clean_env):
        clean_env.setenv("IEXPENSE_LOG_LEVEL", "debug")
        assert LoggingSettings().level == "DEBUG"

    def test_rejects_unknown_level(self, clean_env):
        clean_env.setenv("IEXPENSE_LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError):
            LoggingSettings()

    def test_console_format(self, clean_env):
        clean_env.setenv("IEXPENSE_LOG_FORMAT", "console")
        assert LoggingSettings().format == "console"


class TestRootSettings:
    """Tests for the settings container."""

    def test_get_settings_is_cached(self, clean_env):
        assert get_settings() is get_settings()

    def test_validate_all_settings_ok(self, clean_env):
        assert validate_all_settings() == {"storage": True, "logging": True}

    def test_validate_all_settings_reports_errors(self, clean_env):
        clean_env.setenv("IEXPENSE_STORAGE_FORMAT", "yaml")
        results = validate_all_settings()
        assert results["storage"] is False
        assert "storage_error" in results
        assert results["logging"] is True
