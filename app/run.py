# =============================================================================
# app/run.py - HTTP Listener Entry Point
# =============================================================================
# Starts uvicorn on HOST:PORT (0.0.0.0:3000 by default).
#
# Usage:
#   python -m app.run
#   tutorials-api                 (via pyproject.toml [project.scripts])
#
# A bind failure (e.g. port already in use) is not handled here: uvicorn
# logs it and exits the process with status 1.
# =============================================================================

import logging

import uvicorn

from app.config import get_settings
from app.main import configure_logging

logger = logging.getLogger(__name__)


class TutorialsServer(uvicorn.Server):
    """uvicorn server that logs once its socket is bound."""

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if self.started:
            logger.info(f"Server is running on port {self.config.port}.")


def main() -> None:
    """Resolve settings and serve until the process is stopped."""
    settings = get_settings()
    configure_logging(settings)

    config = uvicorn.Config(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level="debug" if settings.DEBUG else "info",
    )
    TutorialsServer(config).run()


if __name__ == "__main__":
    main()
