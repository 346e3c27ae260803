# =============================================================================
# core/services/tutorial_service.py - Tutorial Business Logic
# =============================================================================
# Handles tutorial CRUD operations against the `tutorials` collection.
# Separates HTTP concerns from database/business logic.
# =============================================================================

import logging
import re
from contextlib import contextmanager
from typing import Any, Iterator

from pydantic import BaseModel, ValidationError
from pymongo import ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import ConnectionFailure

from app.exceptions import (
    DatabaseUnavailableError,
    EmptyContentError,
    EmptyUpdateError,
    TutorialNotFoundError,
    TutorialValidationError,
)
from core.models.tutorial import TutorialCreate, TutorialUpdate
from lib.utils import parse_object_id, utcnow

logger = logging.getLogger(__name__)

COLLECTION_NAME = "tutorials"


@contextmanager
def _driver_errors(operation: str) -> Iterator[None]:
    """Turn lost-connection errors from the driver into a 503."""
    try:
        yield
    except ConnectionFailure as e:
        logger.error(f"Database unavailable during {operation}: {e}")
        raise DatabaseUnavailableError(str(e)) from e


def _validate(model: type[BaseModel], data: dict[str, Any]) -> Any:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise TutorialValidationError(
            [{"field": ".".join(str(p) for p in err["loc"]), "msg": err["msg"]} for err in e.errors()]
        ) from e


class TutorialService:
    """
    Service for tutorial operations.

    Provides a clean interface between API routes and the database.
    Documents are returned as raw dicts; routes turn them into
    TutorialResponse models.
    """

    def __init__(self, collection: AsyncCollection):
        self.collection = collection

    async def create(self, data: dict[str, Any] | None) -> dict[str, Any]:
        """
        Create a new tutorial.

        Args:
            data: Parsed request body

        Returns:
            The stored document, including `_id`

        Raises:
            EmptyContentError: If the body has no usable title
            TutorialValidationError: If a field has the wrong type
        """
        if not data or not isinstance(data, dict) or not str(data.get("title") or "").strip():
            raise EmptyContentError()

        tutorial = _validate(TutorialCreate, data)
        now = utcnow()
        document = {
            **tutorial.model_dump(),
            "created_at": now,
            "updated_at": now,
        }

        with _driver_errors("create"):
            result = await self.collection.insert_one(document)

        document["_id"] = result.inserted_id
        logger.info(f"Created tutorial: {result.inserted_id}")
        return document

    async def find_all(self, title: str | None = None) -> list[dict[str, Any]]:
        """
        List tutorials, optionally filtered by a case-insensitive title match.
        """
        query: dict[str, Any] = {}
        if title:
            query["title"] = {"$regex": re.escape(title), "$options": "i"}

        with _driver_errors("find_all"):
            return await self.collection.find(query).to_list()

    async def find_published(self) -> list[dict[str, Any]]:
        """List tutorials marked as published."""
        with _driver_errors("find_published"):
            return await self.collection.find({"published": True}).to_list()

    async def find_one(self, tutorial_id: str) -> dict[str, Any]:
        """
        Get a tutorial by ID.

        Raises:
            TutorialNotFoundError: If the id is malformed or unknown
        """
        object_id = parse_object_id(tutorial_id)
        if object_id is None:
            raise TutorialNotFoundError(tutorial_id)

        with _driver_errors("find_one"):
            document = await self.collection.find_one({"_id": object_id})

        if document is None:
            raise TutorialNotFoundError(tutorial_id)
        return document

    async def update(self, tutorial_id: str, data: dict[str, Any] | None) -> dict[str, Any]:
        """
        Update the fields present in `data`.

        Args:
            tutorial_id: Tutorial id (hex string)
            data: Parsed request body

        Returns:
            The updated document

        Raises:
            EmptyUpdateError: If the body is missing or carries no fields
            TutorialNotFoundError: If the id is malformed or unknown
        """
        if not data or not isinstance(data, dict):
            raise EmptyUpdateError()

        changes = _validate(TutorialUpdate, data).changes()
        if not changes:
            raise EmptyUpdateError()

        object_id = parse_object_id(tutorial_id)
        if object_id is None:
            raise TutorialNotFoundError(tutorial_id)

        changes["updated_at"] = utcnow()
        with _driver_errors("update"):
            document = await self.collection.find_one_and_update(
                {"_id": object_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )

        if document is None:
            raise TutorialNotFoundError(tutorial_id)

        logger.info(f"Updated tutorial: {tutorial_id}")
        return document

    async def delete(self, tutorial_id: str) -> None:
        """
        Delete a tutorial by ID.

        Raises:
            TutorialNotFoundError: If the id is malformed or unknown
        """
        object_id = parse_object_id(tutorial_id)
        if object_id is None:
            raise TutorialNotFoundError(tutorial_id)

        with _driver_errors("delete"):
            result = await self.collection.delete_one({"_id": object_id})

        if result.deleted_count == 0:
            raise TutorialNotFoundError(tutorial_id)
        logger.info(f"Deleted tutorial: {tutorial_id}")

    async def delete_all(self) -> int:
        """Delete every tutorial. Returns how many were removed."""
        with _driver_errors("delete_all"):
            result = await self.collection.delete_many({})

        logger.info(f"Deleted {result.deleted_count} tutorials")
        return result.deleted_count
