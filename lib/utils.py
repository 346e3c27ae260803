# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import datetime, timezone

from bson import ObjectId


# =============================================================================
# ObjectId Utilities
# =============================================================================

def parse_object_id(value: str | ObjectId) -> ObjectId | None:
    """
    Parse a document id from a path parameter.

    Handles both strings and ObjectId instances.

    Args:
        value: 24-character hex string or ObjectId

    Returns:
        The ObjectId, or None if the value is not a valid id

    Example:
        parse_object_id("65a1f0c2e4b0a1b2c3d4e5f6")  # ObjectId(...)
        parse_object_id("not-an-id")  # None
    """
    if isinstance(value, ObjectId):
        return value
    if not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


# =============================================================================
# Time Utilities
# =============================================================================

def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)
