# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - tutorial.py: Tutorial CRUD schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .tutorial import (
    MessageResponse,
    TutorialCreate,
    TutorialResponse,
    TutorialUpdate,
)

__all__ = [
    "MessageResponse",
    "TutorialCreate",
    "TutorialResponse",
    "TutorialUpdate",
]
