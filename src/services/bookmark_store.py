"""In-memory bookmark store with validated write paths."""
import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from uuid6 import uuid7

from core.config import Settings, get_settings
from schemas.bookmark import Bookmark, BookmarkCreate, BookmarkUpdate
from schemas.validators import validate_bookmark
from services.results import (
    CreateResult,
    DeleteResult,
    NotFound,
    Ok,
    UpdateResult,
    ValidationFailed,
)

logger = logging.getLogger(__name__)


class BookmarkStore:
    """
    Owns the canonical bookmark collection for the lifetime of the process.

    Insertion order is recency order; nothing is sorted. There is no locking:
    the server runs a single process and the last write wins.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._bookmarks: list[Bookmark] = []

    def __len__(self) -> int:
        return len(self._bookmarks)

    def _index_of(self, bookmark_id: str) -> int | None:
        for index, bookmark in enumerate(self._bookmarks):
            if bookmark.id == bookmark_id:
                return index
        return None

    def list_bookmarks(self, tag: str | None = None) -> list[Bookmark]:
        """
        Return bookmarks in collection order, optionally only those carrying `tag`.

        Stored tags are always lowercase, so the filter is lowercased and matched exactly.
        """
        if not tag:
            return list(self._bookmarks)
        wanted = tag.lower()
        return [b for b in self._bookmarks if b.tags and wanted in b.tags]

    def create(self, payload: Mapping[str, Any]) -> CreateResult:
        """Validate a full payload and append a new bookmark."""
        errors = validate_bookmark(payload, settings=self._settings)
        if errors:
            return ValidationFailed(errors)

        data = BookmarkCreate.model_validate(payload)
        bookmark = Bookmark(
            id=str(uuid7()),
            url=data.url,
            title=data.title,
            description=data.description or None,
            tags=list(data.tags) if data.tags is not None else None,
            created_at=datetime.now(UTC),
        )
        self._bookmarks.append(bookmark)
        logger.info("bookmark_created", extra={"bookmark_id": bookmark.id})
        return Ok(bookmark)

    def update(self, bookmark_id: str, payload: Mapping[str, Any]) -> UpdateResult:
        """
        Apply the supplied fields to an existing bookmark.

        Unsupplied fields keep their values; `id` and `created_at` never change.
        Supplying null (or an empty description) clears an optional field.
        """
        index = self._index_of(bookmark_id)
        if index is None:
            return NotFound(bookmark_id)

        errors = validate_bookmark(payload, partial=True, settings=self._settings)
        if errors:
            return ValidationFailed(errors)

        changes = BookmarkUpdate.model_validate(payload).model_dump(exclude_unset=True)
        if "description" in changes:
            changes["description"] = changes["description"] or None
        if changes.get("tags") is not None:
            changes["tags"] = list(changes["tags"])

        updated = self._bookmarks[index].model_copy(update=changes)
        self._bookmarks[index] = updated
        logger.info(
            "bookmark_updated",
            extra={"bookmark_id": bookmark_id, "fields": sorted(changes)},
        )
        return Ok(updated)

    def delete(self, bookmark_id: str) -> DeleteResult:
        """Remove a bookmark and return it."""
        index = self._index_of(bookmark_id)
        if index is None:
            return NotFound(bookmark_id)
        removed = self._bookmarks.pop(index)
        logger.info("bookmark_deleted", extra={"bookmark_id": bookmark_id})
        return Ok(removed)
