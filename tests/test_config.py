"""Tests for settings and cache configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from herdfeed.core.config import Settings, get_cache_dir, settings
from herdfeed.feeding.classify import FeedingPolicy


class TestGetCacheDir:
    """Tests for the get_cache_dir function."""

    def test_returns_path_object(self):
        """Verify get_cache_dir returns a Path object."""
        result = get_cache_dir()
        assert isinstance(result, Path)

    def test_returns_cache_dir_in_project_root(self):
        """Verify cache dir is in project root (where pyproject.toml is)."""
        result = get_cache_dir()
        assert result.name == ".cache"
        parent = result.parent
        assert (parent / ".git").exists() or (parent / "pyproject.toml").exists()

    def test_cache_dir_exists_after_call(self):
        """Verify the cache directory is created if it doesn't exist."""
        result = get_cache_dir()
        assert result.exists()
        assert result.is_dir()

    def test_returns_same_path_on_multiple_calls(self):
        """Verify function returns consistent path (cached)."""
        assert get_cache_dir() == get_cache_dir()

    def test_modules_use_same_cache_dir(self):
        """Verify the package re-export is the same function."""
        from herdfeed.core import get_cache_dir as core_get_cache_dir

        assert core_get_cache_dir() == get_cache_dir()


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("HERDFEED_OK_RATIO", raising=False)
        monkeypatch.delenv("HERDFEED_DISPLAY_UNITS", raising=False)
        fresh = Settings(_env_file=None)
        assert fresh.ok_ratio == 0.85
        assert fresh.display_units == "metric"
        assert fresh.alert_webhook_url is None

    def test_reads_prefixed_env(self, monkeypatch):
        monkeypatch.setenv("HERDFEED_OK_RATIO", "0.9")
        monkeypatch.setenv("HERDFEED_ADMIN_EMAIL", "vet@farm.test")
        fresh = Settings(_env_file=None)
        assert fresh.ok_ratio == 0.9
        assert fresh.admin_email == "vet@farm.test"

    def test_rejects_non_positive_ratio(self, monkeypatch):
        monkeypatch.setenv("HERDFEED_OK_RATIO", "0")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_data_file_defaults_to_cache(self, monkeypatch):
        monkeypatch.setattr(settings, "data_file", None)
        assert settings.resolved_data_file() == get_cache_dir() / "herd.json"

    def test_data_file_override(self, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "data_file", tmp_path / "farm.json")
        assert settings.resolved_data_file() == tmp_path / "farm.json"

    def test_policy_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "ok_ratio", 0.8)
        assert FeedingPolicy.from_settings().ok_ratio == 0.8
