# =============================================================================
# core/models/tutorial.py - Tutorial Schemas
# =============================================================================
# These models define the API contract for tutorial operations:
# - TutorialCreate: Input for creating a tutorial
# - TutorialUpdate: Partial input for updating a tutorial
# - TutorialResponse: Output when returning tutorials to clients
#
# Tutorials are stored in the `tutorials` collection with snake_case
# timestamps; the wire format uses camelCase (createdAt/updatedAt).
# =============================================================================

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TutorialCreate(BaseModel):
    """
    Schema for creating a tutorial.

    Example:
        {
            "title": "FastAPI basics",
            "description": "Routing and dependencies",
            "published": false
        }
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    title: str = Field(
        ...,
        min_length=1,
        description="Tutorial title"
    )

    description: str | None = Field(
        default=None,
        description="Free-form description"
    )

    published: bool = Field(
        default=False,
        description="Whether the tutorial is published"
    )


class TutorialUpdate(BaseModel):
    """
    Schema for updating a tutorial.

    Every field is optional; only the fields sent are changed.
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    published: bool | None = None

    def changes(self) -> dict[str, Any]:
        """Fields explicitly set by the client."""
        return self.model_dump(exclude_unset=True)


class TutorialResponse(BaseModel):
    """
    Schema for returning a tutorial to clients.

    Example:
        {
            "id": "65a1f0c2e4b0a1b2c3d4e5f6",
            "title": "FastAPI basics",
            "description": "Routing and dependencies",
            "published": false,
            "createdAt": "2024-01-15T10:30:00Z",
            "updatedAt": "2024-01-15T10:30:00Z"
        }
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Hex ObjectId of the tutorial")
    title: str
    description: str | None = None
    published: bool = False
    created_at: datetime | None = Field(default=None, serialization_alias="createdAt")
    updated_at: datetime | None = Field(default=None, serialization_alias="updatedAt")

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "TutorialResponse":
        """Build a response from a raw MongoDB document."""
        return cls(
            id=str(document["_id"]),
            title=document.get("title", ""),
            description=document.get("description"),
            published=bool(document.get("published", False)),
            created_at=document.get("created_at"),
            updated_at=document.get("updated_at"),
        )


class MessageResponse(BaseModel):
    """Plain acknowledgement returned by update and delete endpoints."""
    message: str
