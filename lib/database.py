# =============================================================================
# lib/database.py - MongoDB Connection Handle
# =============================================================================
# This module owns the single connection to the document database.
#
# The connect attempt runs in the background: `connect()` schedules it and
# returns at once, so the HTTP listener never waits on the database. The
# outcome is only logged and recorded in `state`; nothing is retried.
#
# Usage:
#   database = Database(settings.MONGODB_URL, settings.MONGODB_DATABASE)
#   database.connect()
#   tutorials = database.collection("tutorials")
# =============================================================================

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase

from app.exceptions import DatabaseUnavailableError

# Set up logging for this module
logger = logging.getLogger(__name__)


class ConnectionState(str, Enum):
    """
    Lifecycle of the database connection.

    Flow: disconnected -> connecting -> connected | failed
    """
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    FAILED = "failed"


class Database:
    """
    Process-wide MongoDB handle.

    Wraps one AsyncMongoClient. The client itself is lazy; `connect()` pings
    the server once so that success or failure is reported early.

    Example:
        database = Database("mongodb://localhost:27017/tutorials_db")
        task = database.connect()      # returns immediately
        ...
        await database.close()
    """

    def __init__(
        self,
        url: str,
        default_database: str = "tutorials_db",
        server_selection_timeout_ms: int = 5000,
    ):
        self.url = url
        self.default_database = default_database
        self.server_selection_timeout_ms = server_selection_timeout_ms
        self.state = ConnectionState.DISCONNECTED
        self.last_error: str | None = None
        self._client: AsyncMongoClient | None = None
        self._connect_task: asyncio.Task | None = None

    @property
    def client(self) -> AsyncMongoClient:
        """Get or create the underlying client (no I/O happens here)."""
        if self._client is None:
            self._client = AsyncMongoClient(
                self.url,
                serverSelectionTimeoutMS=self.server_selection_timeout_ms,
                tz_aware=True,
            )
        return self._client

    @property
    def db(self) -> AsyncDatabase:
        """The database named in the URL, or `default_database`."""
        return self.client.get_default_database(default=self.default_database)

    def collection(self, name: str) -> AsyncCollection:
        """Get a collection from the default database."""
        return self.db[name]

    # -------------------------------------------------------------------------
    # Connection Lifecycle
    # -------------------------------------------------------------------------

    def connect(self) -> asyncio.Task:
        """
        Start the connection attempt in the background.

        Must be called from a running event loop. Only one attempt is ever
        made per handle: later calls return the same task.

        Returns:
            The task running the attempt. It never raises; the outcome is
            recorded in `state`.
        """
        if self._connect_task is None:
            self.state = ConnectionState.CONNECTING
            self._connect_task = asyncio.create_task(self._connect())
        return self._connect_task

    async def _connect(self) -> None:
        try:
            await self.client.admin.command("ping")
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self.state = ConnectionState.FAILED
            self.last_error = str(e)
            logger.error(f"Cannot connect to the database! {e}")
            return

        self.state = ConnectionState.CONNECTED
        logger.info("Connected to the database!")

    async def close(self) -> None:
        """Cancel a pending attempt and close the client."""
        if self._connect_task is not None and not self._connect_task.done():
            self._connect_task.cancel()
            try:
                await self._connect_task
            except asyncio.CancelledError:
                pass

        if self._client is not None:
            await self._client.close()
            self._client = None
        self.state = ConnectionState.DISCONNECTED

    def ensure_available(self) -> None:
        """
        Fail fast when the connection attempt is known to have failed.

        Raises:
            DatabaseUnavailableError: If the handle is in the failed state
        """
        if self.state == ConnectionState.FAILED:
            raise DatabaseUnavailableError(self.last_error)

    def status(self) -> dict[str, Any]:
        """Connection summary for health checks."""
        result: dict[str, Any] = {"state": self.state.value}
        if self.last_error:
            result["error"] = self.last_error[:200]
        return result
