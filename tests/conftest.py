# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Provides an in-memory stand-in for the tutorials collection
# - Provides an application + TestClient wired to that collection
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# app.main builds an application at import time from get_settings()

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("MONGODB_URL", "mongodb://db.invalid:27017/tutorials_test")
os.environ.setdefault("MONGODB_SERVER_SELECTION_TIMEOUT_MS", "50")

import re
from types import SimpleNamespace
from typing import Any

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from app.config import Settings
from app.context import AppContext
from app.dependencies import get_tutorial_service
from app.main import create_app
from app.routers import default_registrars
from core.services import TutorialService


# =============================================================================
# In-memory collection
# =============================================================================

class FakeCursor:
    """Result of FakeCollection.find()."""

    def __init__(self, documents: list[dict[str, Any]]):
        self._documents = documents

    async def to_list(self, length: int | None = None) -> list[dict[str, Any]]:
        documents = [dict(d) for d in self._documents]
        return documents if length is None else documents[:length]


class FakeCollection:
    """
    Supports the subset of the async collection API TutorialService uses:
    equality filters and {"$regex", "$options"} on string fields.
    """

    def __init__(self):
        self.documents: list[dict[str, Any]] = []

    @staticmethod
    def _matches(document: dict[str, Any], query: dict[str, Any]) -> bool:
        for key, condition in query.items():
            value = document.get(key)
            if isinstance(condition, dict) and "$regex" in condition:
                flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
                if not isinstance(value, str) or not re.search(condition["$regex"], value, flags):
                    return False
            elif value != condition:
                return False
        return True

    def _first(self, query: dict[str, Any]) -> dict[str, Any] | None:
        return next((d for d in self.documents if self._matches(d, query)), None)

    async def insert_one(self, document: dict[str, Any]):
        stored = dict(document)
        stored["_id"] = ObjectId()
        self.documents.append(stored)
        return SimpleNamespace(inserted_id=stored["_id"])

    def find(self, query: dict[str, Any] | None = None) -> FakeCursor:
        return FakeCursor([d for d in self.documents if self._matches(d, query or {})])

    async def find_one(self, query: dict[str, Any]):
        document = self._first(query)
        return dict(document) if document else None

    async def find_one_and_update(self, query: dict[str, Any], update: dict[str, Any], **kwargs):
        document = self._first(query)
        if document is None:
            return None
        document.update(update["$set"])
        return dict(document)

    async def delete_one(self, query: dict[str, Any]):
        document = self._first(query)
        if document is None:
            return SimpleNamespace(deleted_count=0)
        self.documents.remove(document)
        return SimpleNamespace(deleted_count=1)

    async def delete_many(self, query: dict[str, Any]):
        matching = [d for d in self.documents if self._matches(d, query)]
        for document in matching:
            self.documents.remove(document)
        return SimpleNamespace(deleted_count=len(matching))


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def settings():
    """Settings that ignore any local .env file."""
    return Settings(
        _env_file=None,
        MONGODB_URL="mongodb://db.invalid:27017/tutorials_test",
        MONGODB_SERVER_SELECTION_TIMEOUT_MS=50,
    )


@pytest.fixture
def context(settings):
    """Application context with the production registrars."""
    return AppContext.from_settings(settings, default_registrars())


@pytest.fixture
def fake_collection():
    """Empty in-memory tutorials collection."""
    return FakeCollection()


@pytest.fixture
def app(context, fake_collection):
    """Application whose tutorial routes use the in-memory collection."""
    application = create_app(context)
    application.dependency_overrides[get_tutorial_service] = lambda: TutorialService(fake_collection)
    return application


@pytest.fixture
def client(app):
    """
    TestClient without lifespan: no connection attempt is started.

    Use `with TestClient(app)` in a test to exercise startup/shutdown.
    """
    return TestClient(app)


@pytest.fixture
def sample_tutorial_data():
    """Sample tutorial body."""
    return {
        "title": "FastAPI basics",
        "description": "Routing, dependencies and middleware",
        "published": False,
    }
