"""Tests for environment driven settings and the error envelope helpers."""

import pytest

from user_store_api.app.core.config import Settings
from user_store_api.app.core.errors import NotFound, StoreError, error_envelope
from user_store_api.app.main import create_app

ENV_VARS = (
    "PROJECT_NAME", "API_VERSION", "DEBUG", "LOG_LEVEL", "LOG_FILE", "ACCESS_LOG", "STORE_PATH",
    "INIT_STORE", "STORE_LOCKING", "REQUEST_TIMEOUT", "HOST", "PORT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    def test_defaults(self):
        s = Settings()
        assert s.store_path == "users.json"
        assert s.init_store is True
        assert s.store_locking is True
        assert s.request_timeout == 60
        assert s.port == 3333
        assert s.log_file == ""
        assert s.debug is False
        assert s.access_log is True

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("STORE_PATH", "/data/users.json")
        monkeypatch.setenv("STORE_LOCKING", "false")
        monkeypatch.setenv("INIT_STORE", "0")
        monkeypatch.setenv("REQUEST_TIMEOUT", "2.5")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("DEBUG", "yes")
        monkeypatch.setenv("ACCESS_LOG", "no")

        s = Settings()
        assert s.store_path == "/data/users.json"
        assert s.store_locking is False
        assert s.init_store is False
        assert s.request_timeout == 2.5
        assert s.port == 8080
        assert s.debug is True
        assert s.access_log is False

    def test_explicit_values_override_environment(self, monkeypatch):
        monkeypatch.setenv("STORE_PATH", "/data/users.json")
        assert Settings(store_path="other.json").store_path == "other.json"

    def test_store_locking_reaches_record_store(self, tmp_path):
        path = str(tmp_path / "users.json")
        assert create_app(Settings(store_path=path)).state.store.locking is True
        assert create_app(Settings(store_path=path, store_locking=False)).state.store.locking is False


class TestErrorEnvelope:
    def test_carries_message(self):
        assert error_envelope("boom") == {"status": "Invalid request.", "error": "boom"}

    def test_empty_message_is_omitted(self):
        assert error_envelope("") == {"status": "Invalid request."}

    def test_not_found_default_message(self):
        err = NotFound()
        assert isinstance(err, StoreError)
        assert str(err) == "user_not_found"
