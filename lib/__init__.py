# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - database.py: MongoDB handle with a background connection attempt
# - urlencoded.py: Nested URL-encoded body parser
# - utils.py: Shared utilities (ObjectId parsing, UTC timestamps)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.database import ConnectionState, Database
from lib.urlencoded import parse_urlencoded
from lib.utils import parse_object_id, utcnow

__all__ = [
    # Database
    "ConnectionState",
    "Database",
    # Parsing
    "parse_urlencoded",
    # Utils
    "parse_object_id",
    "utcnow",
]
