# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .tutorial_service import COLLECTION_NAME, TutorialService

__all__ = [
    "COLLECTION_NAME",
    "TutorialService",
]
