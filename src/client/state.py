"""
Client-side view state for the bookmark grid.

Mirrors server state for rendering: a cached copy of the collection plus the
search string, tag filter, page window, dark-mode flag and the current error.
The cache is only changed after the API confirms a mutation.
"""
import logging
import math
from collections.abc import Awaitable
from typing import Any, TypeVar

import httpx

from client.api_client import ApiError, BookmarksApiClient
from client.preferences import Preferences
from core.config import Settings
from schemas.bookmark import Bookmark
from schemas.validators import is_valid_url, join_errors, parse_tags, validate_bookmark

logger = logging.getLogger(__name__)

T = TypeVar("T")

# 3x3 grid
DEFAULT_PAGE_SIZE = 9


class BookmarkStateController:
    """
    Holds the client's cached bookmarks and derived view.

    Every remote call that fails replaces `error` with its message; every
    successful call clears it. Responses are applied in the order they
    complete.
    """

    def __init__(
        self,
        api: BookmarksApiClient,
        preferences: Preferences | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        settings: Settings | None = None,
    ) -> None:
        self.api = api
        self.preferences = preferences or Preferences()
        self.page_size = page_size
        self._settings = settings
        self.bookmarks: list[Bookmark] = []
        self.active_tag: str | None = None
        self.search = ""
        self.current_page = 1
        self.error: str | None = None
        self.dark_mode = self.preferences.dark_mode

    async def _call(self, request: Awaitable[T], failure_message: str) -> T | None:
        """Await an API call, recording its outcome in `error`."""
        try:
            result = await request
        except ApiError as e:
            self.error = e.message
            return None
        except (httpx.HTTPError, ValueError):
            logger.warning("api_call_failed", extra={"message": failure_message}, exc_info=True)
            self.error = failure_message
            return None
        self.error = None
        return result

    # -- remote operations ---------------------------------------------------

    async def fetch(self, tag: str | None = None) -> bool:
        """Replace the cache with the server's list, optionally filtered by tag."""
        bookmarks = await self._call(self.api.list_bookmarks(tag), "Failed to fetch bookmarks")
        if bookmarks is None:
            return False
        self.bookmarks = bookmarks
        self.active_tag = tag or None
        self.current_page = 1
        return True

    async def filter_by_tag(self, tag: str) -> bool:
        """Show only bookmarks carrying `tag`."""
        return await self.fetch(tag)

    async def clear_tag_filter(self) -> bool:
        """Drop the tag filter and reload everything."""
        return await self.fetch()

    async def create(
        self,
        url: str,
        title: str,
        description: str = "",
        tags: str | list[str] | None = None,
    ) -> bool:
        """
        Validate locally, then create the bookmark on the server.

        `tags` may be a comma-separated string as typed into the form.
        On success the new bookmark is shown first and the view returns to page 1.
        """
        payload: dict[str, Any] = {"url": url, "title": title}
        if description:
            payload["description"] = description
        if tags is not None:
            payload["tags"] = parse_tags(tags) if isinstance(tags, str) else tags

        errors = validate_bookmark(payload, settings=self._settings)
        if errors:
            self.error = join_errors(errors)
            return False

        created = await self._call(self.api.create_bookmark(payload), "Failed to add bookmark")
        if created is None:
            return False
        self.bookmarks = [created, *self.bookmarks]
        self.current_page = 1
        return True

    async def update(self, bookmark_id: str, changes: dict[str, Any]) -> bool:
        """Validate the changed fields locally, then update on the server."""
        if isinstance(changes.get("tags"), str):
            changes = {**changes, "tags": parse_tags(changes["tags"])}

        errors = validate_bookmark(changes, partial=True, settings=self._settings)
        if errors:
            self.error = join_errors(errors)
            return False

        updated = await self._call(
            self.api.update_bookmark(bookmark_id, changes), "Failed to update bookmark",
        )
        if updated is None:
            return False
        self.bookmarks = [updated if b.id == bookmark_id else b for b in self.bookmarks]
        return True

    async def delete(self, bookmark_id: str) -> bool:
        """Delete on the server, then drop it from the cache."""
        removed = await self._call(
            self.api.delete_bookmark(bookmark_id), "Failed to delete bookmark",
        )
        if removed is None:
            return False
        self.bookmarks = [b for b in self.bookmarks if b.id != bookmark_id]
        total = self.total_pages
        if total and self.current_page > total:
            self.current_page = total
        return True

    async def suggest_title(self, url: str) -> str | None:
        """Best-effort title for `url`; None on an invalid URL or any failure."""
        if not is_valid_url(url):
            return None
        try:
            return await self.api.fetch_title(url)
        except (ApiError, httpx.HTTPError, ValueError):
            logger.info("title_suggestion_unavailable", extra={"url": url})
            return None

    # -- local view state ----------------------------------------------------

    def set_search(self, text: str) -> None:
        """Change the search string and go back to the first page."""
        self.search = text
        self.current_page = 1

    def set_page(self, page: int) -> None:
        """Move to `page`, clamped to the available pages."""
        self.current_page = max(1, min(page, max(self.total_pages, 1)))

    def toggle_dark_mode(self) -> bool:
        """Flip dark mode and persist the choice."""
        self.dark_mode = not self.dark_mode
        self.preferences.dark_mode = self.dark_mode
        return self.dark_mode

    @property
    def filtered(self) -> list[Bookmark]:
        """Cached bookmarks whose title or url contains the search string."""
        if not self.search:
            return list(self.bookmarks)
        needle = self.search.lower()
        return [
            b for b in self.bookmarks
            if needle in b.title.lower() or needle in b.url.lower()
        ]

    @property
    def total_pages(self) -> int:
        return math.ceil(len(self.filtered) / self.page_size)

    @property
    def visible(self) -> list[Bookmark]:
        """The page of filtered bookmarks currently on screen."""
        start = (self.current_page - 1) * self.page_size
        return self.filtered[start:start + self.page_size]

    @property
    def showing_range(self) -> tuple[int, int, int] | None:
        """(first, last, total) for the "Showing a-b of n" caption; None when empty."""
        total = len(self.filtered)
        if not total:
            return None
        first = (self.current_page - 1) * self.page_size + 1
        last = min(self.current_page * self.page_size, total)
        return first, last, total
