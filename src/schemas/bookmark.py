"""Pydantic schemas for bookmark records and payloads."""
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Bookmark(BaseModel):
    """
    A stored bookmark.

    Serialized with camelCase `createdAt` and with absent optional fields omitted
    (use `to_json()`), matching the wire shape the browser client expects.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    url: str
    title: str
    description: str | None = None
    tags: list[str] | None = None
    created_at: datetime = Field(alias="createdAt")

    def to_json(self) -> dict[str, Any]:
        """Serialize to a JSON-ready dict without null optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class BookmarkCreate(BaseModel):
    """Fields accepted when creating a bookmark (after validation)."""

    model_config = ConfigDict(extra="ignore")

    url: str
    title: str
    description: str | None = None
    tags: list[str] | None = None


class BookmarkUpdate(BaseModel):
    """
    Fields accepted when updating a bookmark (after validation).

    Only explicitly supplied fields are applied; use `model_dump(exclude_unset=True)`.
    """

    model_config = ConfigDict(extra="ignore")

    url: str | None = None
    title: str | None = None
    description: str | None = None
    tags: list[str] | None = None
