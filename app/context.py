# =============================================================================
# app/context.py - Application Context
# =============================================================================
# Everything a request handler may need, built once at startup:
# - settings: resolved configuration
# - database: the single MongoDB handle
# - registrars: route registrars mounted after the welcome route
#
# The context is attached to `app.state.context` by create_app() and reached
# from handlers through the dependencies in app/dependencies.py.
# =============================================================================

from dataclasses import dataclass, field
from typing import Protocol

from fastapi import FastAPI

from app.config import Settings
from lib.database import Database


class RouteRegistrar(Protocol):
    """Anything that can attach its routes to the application."""

    def register(self, app: FastAPI) -> None:
        ...


@dataclass
class AppContext:
    """Process-wide state shared by all handlers."""

    settings: Settings
    database: Database
    registrars: list[RouteRegistrar] = field(default_factory=list)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        registrars: list[RouteRegistrar] | None = None,
    ) -> "AppContext":
        """Build a context with a fresh (not yet connected) database handle."""
        database = Database(
            settings.MONGODB_URL,
            default_database=settings.MONGODB_DATABASE,
            server_selection_timeout_ms=settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
        )
        return cls(settings=settings, database=database, registrars=list(registrars or []))
