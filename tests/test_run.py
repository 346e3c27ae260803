# =============================================================================
# tests/test_run.py - HTTP Listener Tests
# =============================================================================
# uvicorn is never started: Server.run and Server.startup are patched so
# only the bind address and the startup log line are checked.
# =============================================================================

from unittest.mock import AsyncMock, patch

import pytest
import uvicorn
from fastapi import FastAPI

from app.config import get_settings
from app.run import TutorialsServer, main


@pytest.fixture
def fresh_settings(monkeypatch):
    """Make main() read the environment set up by each test."""
    monkeypatch.delenv("PORT", raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


@pytest.fixture
def serve():
    """Run main() with uvicorn patched out; returns the Config mock."""
    with patch("app.run.uvicorn.Config") as config_cls, \
            patch.object(TutorialsServer, "run") as run, \
            patch("app.run.configure_logging"):
        def call():
            main()
            run.assert_called_once_with()
            return config_cls
        yield call


class TestMain:
    """Tests for the listener entry point."""

    def test_listens_on_all_interfaces_at_default_port(self, fresh_settings, serve):
        config_cls = serve()

        kwargs = config_cls.call_args.kwargs
        assert config_cls.call_args.args == ("app.main:app",)
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["port"] == 3000

    def test_port_comes_from_environment(self, fresh_settings, serve):
        fresh_settings.setenv("PORT", "8081")

        config_cls = serve()

        assert config_cls.call_args.kwargs["port"] == 8081
        assert config_cls.call_args.kwargs["host"] == "0.0.0.0"

    def test_unparseable_port_falls_back(self, fresh_settings, serve):
        fresh_settings.setenv("PORT", "http")

        config_cls = serve()

        assert config_cls.call_args.kwargs["port"] == 3000


class TestStartupLog:
    """The bind log line is written only once the socket is bound."""

    @pytest.fixture
    def server(self):
        return TutorialsServer(uvicorn.Config(FastAPI(), port=4321, log_config=None))

    @pytest.mark.asyncio
    async def test_logs_after_successful_bind(self, server, caplog):
        with patch.object(uvicorn.Server, "startup", new=AsyncMock()) as startup:
            server.started = True
            with caplog.at_level("INFO", logger="app.run"):
                await server.startup()

        startup.assert_awaited_once_with(sockets=None)
        assert "Server is running on port 4321." in caplog.text

    @pytest.mark.asyncio
    async def test_silent_when_bind_failed(self, server, caplog):
        with patch.object(uvicorn.Server, "startup", new=AsyncMock()):
            server.started = False
            with caplog.at_level("INFO", logger="app.run"):
                await server.startup()

        assert "Server is running on port" not in caplog.text
