# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - tutorials.py: Tutorial CRUD endpoints
# - health.py: Health check endpoints
#
# Each module exposes a route registrar that create_app() mounts in order.
# =============================================================================

from .health import HealthRoutes
from .tutorials import TutorialRoutes


def default_registrars() -> list:
    """Registrars mounted by the production application, in order."""
    return [TutorialRoutes(), HealthRoutes()]


__all__ = [
    "HealthRoutes",
    "TutorialRoutes",
    "default_registrars",
]
