"""Bookmark CRUD endpoints."""
from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse

from api.dependencies import enforce_rate_limit, get_app_settings, get_bookmark_store
from core.config import Settings
from schemas.bookmark import Bookmark
from schemas.responses import (
    INVALID_METADATA_URL_MESSAGE,
    NOT_FOUND_MESSAGE,
    ErrorResponse,
    MetadataResponse,
    SuccessResponse,
    error_response,
    success_response,
)
from schemas.validators import is_valid_url
from services.bookmark_store import BookmarkStore
from services.results import NotFound, Ok, ValidationFailed
from services.url_scraper import fetch_page_title

router = APIRouter(
    prefix="/bookmarks",
    tags=["bookmarks"],
    dependencies=[Depends(enforce_rate_limit)],
)


def _result_response(
    result: Ok | ValidationFailed | NotFound,
    success_status: int = 200,
) -> JSONResponse:
    """Map a store result to its response."""
    if isinstance(result, ValidationFailed):
        return error_response(result.message, 400)
    if isinstance(result, NotFound):
        return error_response(NOT_FOUND_MESSAGE, 404)
    return success_response(result.bookmark.to_json(), success_status)


@router.get("", response_model=SuccessResponse[list[Bookmark]])
async def list_bookmarks(
    tag: str | None = Query(default=None, description="Only return bookmarks with this tag"),
    store: BookmarkStore = Depends(get_bookmark_store),
) -> JSONResponse:
    """
    List all bookmarks in creation order.

    - **tag**: Filter by a single tag (matched case-insensitively against lowercase tags)
    """
    bookmarks = store.list_bookmarks(tag)
    return success_response([b.to_json() for b in bookmarks])


@router.get(
    "/metadata",
    response_model=SuccessResponse[MetadataResponse],
    responses={400: {"model": ErrorResponse}},
)
async def get_metadata(
    url: str | None = Query(default=None, description="Page to read the title from"),
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    """
    Fetch the title of a page to pre-fill the bookmark form.

    Best-effort: unreachable pages, timeouts and pages without a title all
    return `title: null` rather than an error.
    """
    if not url or not is_valid_url(url):
        return error_response(INVALID_METADATA_URL_MESSAGE, 400)
    title = await fetch_page_title(url, timeout=settings.metadata_fetch_timeout)
    return success_response(MetadataResponse(title=title).model_dump())


@router.post(
    "",
    response_model=SuccessResponse[Bookmark],
    status_code=201,
    responses={400: {"model": ErrorResponse}},
)
async def create_bookmark(
    payload: dict[str, Any] | None = Body(default=None),
    store: BookmarkStore = Depends(get_bookmark_store),
) -> JSONResponse:
    """Create a new bookmark."""
    return _result_response(store.create(payload or {}), success_status=201)


@router.put(
    "/{bookmark_id}",
    response_model=SuccessResponse[Bookmark],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_bookmark(
    bookmark_id: str,
    payload: dict[str, Any] | None = Body(default=None),
    store: BookmarkStore = Depends(get_bookmark_store),
) -> JSONResponse:
    """Update only the supplied fields of a bookmark."""
    return _result_response(store.update(bookmark_id, payload or {}))


@router.delete(
    "/{bookmark_id}",
    response_model=SuccessResponse[Bookmark],
    responses={404: {"model": ErrorResponse}},
)
async def delete_bookmark(
    bookmark_id: str,
    store: BookmarkStore = Depends(get_bookmark_store),
) -> JSONResponse:
    """Delete a bookmark and return the removed record."""
    return _result_response(store.delete(bookmark_id))
