"""Health check endpoints."""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.dependencies import get_bookmark_store
from services.bookmark_store import BookmarkStore

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    bookmarks: int


@router.get("/health", response_model=HealthResponse)
async def health_check(
    store: BookmarkStore = Depends(get_bookmark_store),
) -> HealthResponse:
    """Report that the service is up and how many bookmarks it holds."""
    return HealthResponse(status="healthy", bookmarks=len(store))
