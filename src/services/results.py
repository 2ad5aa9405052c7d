"""
Outcomes returned by store operations.

Store methods return one of these variants instead of raising, and the API
layer maps each variant to a response.
"""
from dataclasses import dataclass

from schemas.bookmark import Bookmark
from schemas.validators import join_errors


@dataclass(frozen=True)
class Ok:
    """The operation succeeded; `bookmark` is the stored (or removed) record."""

    bookmark: Bookmark


@dataclass(frozen=True)
class ValidationFailed:
    """One or more field rules were violated; nothing was changed."""

    errors: list[str]

    @property
    def message(self) -> str:
        """All messages joined into one."""
        return join_errors(self.errors)


@dataclass(frozen=True)
class NotFound:
    """No bookmark exists with the referenced id."""

    bookmark_id: str


CreateResult = Ok | ValidationFailed
UpdateResult = Ok | ValidationFailed | NotFound
DeleteResult = Ok | NotFound
