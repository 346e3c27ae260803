# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated, Any

from fastapi import Depends, Request

from app.context import AppContext
from core.services import COLLECTION_NAME, TutorialService


def get_context(request: Request) -> AppContext:
    """
    Get the application context built at startup.
    """
    return request.app.state.context


def get_request_body(request: Request) -> Any:
    """
    Get the body parsed by the body-parsing middleware.

    Returns None when the request had no JSON or URL-encoded body.
    """
    return getattr(request.state, "body", None)


def get_tutorial_service(
    context: Annotated[AppContext, Depends(get_context)],
) -> TutorialService:
    """
    Get a tutorial service bound to the tutorials collection.

    Fails fast with 503 when the database connection attempt has failed.
    """
    context.database.ensure_available()
    return TutorialService(context.database.collection(COLLECTION_NAME))


# Type aliases for dependency injection
ContextDep = Annotated[AppContext, Depends(get_context)]
RequestBodyDep = Annotated[Any, Depends(get_request_body)]
TutorialServiceDep = Annotated[TutorialService, Depends(get_tutorial_service)]
