# =============================================================================
# app/routers/tutorials.py - Tutorial CRUD Endpoints
# =============================================================================
# Handles creating, listing, updating and deleting tutorials.
# Request bodies come from the body-parsing middleware, so both JSON and
# URL-encoded submissions are accepted.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, FastAPI, Path, Query

from app.dependencies import RequestBodyDep, TutorialServiceDep
from core.models.tutorial import MessageResponse, TutorialResponse

router = APIRouter()


# =============================================================================
# Endpoints
# =============================================================================

@router.post("", response_model=TutorialResponse)
async def create_tutorial(service: TutorialServiceDep, body: RequestBodyDep):
    """
    Create a new tutorial.

    `title` is required; `description` and `published` are optional.
    """
    document = await service.create(body)
    return TutorialResponse.from_document(document)


@router.get("", response_model=list[TutorialResponse])
async def list_tutorials(
    service: TutorialServiceDep,
    title: Annotated[str | None, Query(description="Case-insensitive title filter")] = None,
):
    """
    List all tutorials, or those whose title contains `title`.
    """
    documents = await service.find_all(title)
    return [TutorialResponse.from_document(d) for d in documents]


@router.get("/published", response_model=list[TutorialResponse])
async def list_published_tutorials(service: TutorialServiceDep):
    """List published tutorials."""
    documents = await service.find_published()
    return [TutorialResponse.from_document(d) for d in documents]


@router.get("/{tutorial_id}", response_model=TutorialResponse)
async def get_tutorial(
    tutorial_id: Annotated[str, Path(description="Tutorial id")],
    service: TutorialServiceDep,
):
    """Get a single tutorial."""
    document = await service.find_one(tutorial_id)
    return TutorialResponse.from_document(document)


@router.put("/{tutorial_id}", response_model=MessageResponse)
async def update_tutorial(
    tutorial_id: Annotated[str, Path(description="Tutorial id")],
    service: TutorialServiceDep,
    body: RequestBodyDep,
):
    """
    Update a tutorial.

    Only the fields present in the body are changed.
    """
    await service.update(tutorial_id, body)
    return MessageResponse(message="Tutorial was updated successfully.")


@router.delete("/{tutorial_id}", response_model=MessageResponse)
async def delete_tutorial(
    tutorial_id: Annotated[str, Path(description="Tutorial id")],
    service: TutorialServiceDep,
):
    """Delete a tutorial."""
    await service.delete(tutorial_id)
    return MessageResponse(message="Tutorial was deleted successfully!")


@router.delete("", response_model=MessageResponse)
async def delete_all_tutorials(service: TutorialServiceDep):
    """Delete every tutorial."""
    deleted = await service.delete_all()
    return MessageResponse(message=f"{deleted} Tutorials were deleted successfully!")


# =============================================================================
# Registrar
# =============================================================================

class TutorialRoutes:
    """Mounts the tutorial endpoints under `prefix`."""

    def __init__(self, prefix: str = "/api/tutorials"):
        self.prefix = prefix

    def register(self, app: FastAPI) -> None:
        app.include_router(router, prefix=self.prefix, tags=["Tutorials"])
