"""Tests for configuration and one-time backend selection."""

import logging

import httpx
import pytest

from gym_tracker.config import Settings, is_placeholder
from gym_tracker.db import LocalFallbackStore, RemoteStore, create_backend
from gym_tracker.errors import BackendInitError


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self):
        settings = Settings(env={})

        assert settings.db_path.name == "gym_tracker.db"
        assert settings.firebase_database_id == "(default)"
        assert settings.firestore_base_url == "https://firestore.googleapis.com/v1"
        assert settings.http_timeout == 10.0
        assert settings.log_level == "INFO"
        assert not settings.force_local
        assert not settings.has_remote_config()

    def test_overrides(self, tmp_path):
        settings = Settings(
            env={
                "GYM_TRACKER_DATA_DIR": str(tmp_path),
                "GYM_TRACKER_LOG_LEVEL": "debug",
                "GYM_TRACKER_USER": "u1",
                "GYM_TRACKER_FORCE_LOCAL": "true",
                "FIRESTORE_BASE_URL": "http://localhost:8080/v1/",
            }
        )

        assert settings.db_path == tmp_path / "gym_tracker.db"
        assert settings.log_level == "DEBUG"
        assert settings.default_user == "u1"
        assert settings.force_local
        assert settings.firestore_base_url == "http://localhost:8080/v1"

    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, True),
            ("", True),
            ("   ", True),
            ("YOUR_API_KEY", True),
            ("YOUR_PROJECT_ID", True),
            ("AIzaSyRealLookingKey", False),
        ],
    )
    def test_is_placeholder(self, value, expected):
        assert is_placeholder(value) is expected

    def test_warns_about_missing_optional_keys(self, remote_settings, caplog):
        with caplog.at_level(logging.WARNING):
            remote_settings.warn_missing()

        assert "FIREBASE_AUTH_DOMAIN" in caplog.text


class TestCreateBackend:
    """Tests for create_backend selection policy."""

    def test_unconfigured_selects_local(self, local_settings):
        backend = create_backend(local_settings)

        assert isinstance(backend, LocalFallbackStore)
        assert backend.is_local_fallback()
        assert backend.db_path == local_settings.db_path

    def test_placeholder_selects_local(self, temp_db_path):
        settings = Settings(
            env={
                "GYM_TRACKER_DATA_DIR": str(temp_db_path.parent),
                "FIREBASE_API_KEY": "YOUR_API_KEY",
                "FIREBASE_PROJECT_ID": "my-project",
            }
        )

        assert create_backend(settings).is_local_fallback()

    async def test_configured_selects_remote(self, remote_settings, fake_firestore):
        backend = create_backend(
            remote_settings, transport=httpx.MockTransport(fake_firestore.handler)
        )

        assert isinstance(backend, RemoteStore)
        assert not backend.is_local_fallback()
        await backend.aclose()

    def test_force_local(self, remote_settings):
        remote_settings.force_local = True

        assert create_backend(remote_settings).is_local_fallback()

    def test_init_failure_falls_back(self, remote_settings, monkeypatch, caplog):
        def broken(settings, transport=None):
            raise BackendInitError("boom")

        monkeypatch.setattr(RemoteStore, "from_settings", broken)
        with caplog.at_level(logging.ERROR):
            backend = create_backend(remote_settings)

        assert backend.is_local_fallback()
        assert "falling back" in caplog.text
