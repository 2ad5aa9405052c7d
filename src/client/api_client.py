"""HTTP client for the Bookmarks API used by the client state controller."""
import os
from typing import Any

import httpx

from schemas.bookmark import Bookmark


def get_api_base_url() -> str:
    """Get the API base URL from environment."""
    return os.getenv("BOOKMARKS_API_URL", "http://localhost:3000")


def get_default_timeout() -> float:
    """Get the default request timeout."""
    return float(os.getenv("BOOKMARKS_API_TIMEOUT", "10.0"))


class ApiError(Exception):
    """The API answered with `success: false` (or an unreadable error body)."""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _unwrap(response: httpx.Response) -> Any:
    """Return the `data` of a success envelope or raise ApiError."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        if body.get("success") is True:
            return body.get("data")
        error = body.get("error")
        if isinstance(error, str) and error:
            raise ApiError(error, response.status_code)

    raise ApiError(f"API error {response.status_code}", response.status_code)


class BookmarksApiClient:
    """
    Thin wrapper over `httpx.AsyncClient` speaking the bookmark envelope format.

    Transport failures (`httpx.HTTPError`) propagate unchanged; API-level
    failures raise ApiError carrying the server's message.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    @classmethod
    def from_env(cls) -> "BookmarksApiClient":
        """Create a client for the API configured in the environment."""
        return cls(
            httpx.AsyncClient(base_url=get_api_base_url(), timeout=get_default_timeout()),
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def list_bookmarks(self, tag: str | None = None) -> list[Bookmark]:
        """GET /bookmarks, optionally filtered by tag."""
        params = {"tag": tag} if tag else None
        response = await self._client.get("/bookmarks", params=params)
        return [Bookmark.model_validate(item) for item in _unwrap(response)]

    async def create_bookmark(self, payload: dict[str, Any]) -> Bookmark:
        """POST /bookmarks."""
        response = await self._client.post("/bookmarks", json=payload)
        return Bookmark.model_validate(_unwrap(response))

    async def update_bookmark(self, bookmark_id: str, changes: dict[str, Any]) -> Bookmark:
        """PUT /bookmarks/{id} with only the fields to change."""
        response = await self._client.put(f"/bookmarks/{bookmark_id}", json=changes)
        return Bookmark.model_validate(_unwrap(response))

    async def delete_bookmark(self, bookmark_id: str) -> Bookmark:
        """DELETE /bookmarks/{id}; returns the removed bookmark."""
        response = await self._client.delete(f"/bookmarks/{bookmark_id}")
        return Bookmark.model_validate(_unwrap(response))

    async def fetch_title(self, url: str) -> str | None:
        """GET /bookmarks/metadata; returns the page title or None."""
        response = await self._client.get("/bookmarks/metadata", params={"url": url})
        data = _unwrap(response)
        return data.get("title") if isinstance(data, dict) else None
