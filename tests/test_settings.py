"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

from finance_tracker.config import AppSettings, StorageSettings, get_settings


class TestStorageSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("FINANCE_TRACKER_STORAGE_BACKEND", raising=False)
        settings = StorageSettings(_env_file=None)
        assert settings.backend == "file"
        assert settings.state_key == "financeData"
        assert settings.data_dir == Path(".finance_tracker")

    def test_reads_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("FINANCE_TRACKER_STORAGE_BACKEND", "memory")
        monkeypatch.setenv("FINANCE_TRACKER_STORAGE_DATA_DIR", str(tmp_path))
        settings = StorageSettings(_env_file=None)
        assert settings.backend == "memory"
        assert settings.data_dir == tmp_path

    def test_rejects_unknown_backend(self):
        with pytest.raises(PydanticValidationError):
            StorageSettings(_env_file=None, backend="sheets")

    @pytest.mark.parametrize("key", ["a/b", "..", "x\\y"])
    def test_rejects_path_like_state_key(self, key):
        with pytest.raises(PydanticValidationError, match="Invalid state key"):
            StorageSettings(_env_file=None, state_key=key)


class TestAppSettings:
    def test_log_level_must_be_known(self):
        with pytest.raises(PydanticValidationError):
            AppSettings(_env_file=None, log_level="LOUD")


class TestGetSettings:
    def test_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        assert isinstance(get_settings().storage, StorageSettings)
