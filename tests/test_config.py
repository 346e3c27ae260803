# =============================================================================
# tests/test_config.py - Settings Tests
# =============================================================================

import pytest
from pydantic import ValidationError

from app.config import DEFAULT_PORT, Settings, resolve_port


class TestResolvePort:
    """Tests for the permissive PORT fallback."""

    @pytest.mark.parametrize("value,expected", [
        ("8080", 8080),
        ("1", 1),
        (5000, 5000),
        (None, DEFAULT_PORT),
        ("", DEFAULT_PORT),
        ("not-a-port", DEFAULT_PORT),
        ("80.5", DEFAULT_PORT),
    ])
    def test_resolve_port(self, value, expected):
        assert resolve_port(value) == expected

    def test_unparseable_port_logs_warning(self, caplog):
        with caplog.at_level("WARNING", logger="app.config"):
            resolve_port("http")
        assert "Ignoring unparseable PORT" in caplog.text


class TestSettings:
    """Tests for environment loading."""

    def test_default_port(self, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        assert Settings(_env_file=None).PORT == 3000

    def test_port_from_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "8123")
        assert Settings(_env_file=None).PORT == 8123

    def test_body_limit(self, monkeypatch):
        monkeypatch.delenv("MAX_BODY_BYTES", raising=False)
        assert Settings(_env_file=None).MAX_BODY_BYTES == 102400

        monkeypatch.setenv("MAX_BODY_BYTES", "2048")
        assert Settings(_env_file=None).MAX_BODY_BYTES == 2048

    def test_bad_port_does_not_raise(self, monkeypatch):
        monkeypatch.setenv("PORT", "eighty")
        assert Settings(_env_file=None).PORT == 3000

    def test_binds_all_interfaces_by_default(self, monkeypatch):
        monkeypatch.delenv("HOST", raising=False)
        assert Settings(_env_file=None).HOST == "0.0.0.0"

    def test_cors_origins_list(self):
        settings = Settings(_env_file=None, CORS_ORIGINS="http://a.test, http://b.test,")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_settings_are_immutable(self):
        settings = Settings(_env_file=None)
        with pytest.raises(ValidationError):
            settings.PORT = 1
