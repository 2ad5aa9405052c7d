"""
Field validation rules for bookmark payloads.

The same rules run on the server before any store mutation and in the client
state controller before a request is sent, so both report identical messages.
Messages are produced in a fixed order (url, title, description, tags) and are
collected across fields rather than stopping at the first failure.
"""
from collections.abc import Mapping
from typing import Any

from pydantic import AnyUrl, TypeAdapter, ValidationError

from core.config import Settings, get_settings

_url_adapter = TypeAdapter(AnyUrl)

ERROR_SEPARATOR = ", "


def is_valid_url(value: Any) -> bool:
    """Return True if value is a string that parses as an absolute URL."""
    if not isinstance(value, str) or not value:
        return False
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def _validate_url(payload: Mapping[str, Any], partial: bool) -> list[str]:
    if "url" not in payload and partial:
        return []
    url = payload.get("url")
    if url is None or url == "":
        return ["URL is required"]
    if not is_valid_url(url):
        return ["URL must be valid"]
    return []


def _validate_title(
    payload: Mapping[str, Any], partial: bool, settings: Settings,
) -> list[str]:
    if "title" not in payload and partial:
        return []
    title = payload.get("title")
    if title is None or title == "":
        return ["Title is required"]
    if not isinstance(title, str):
        return ["Title must be a string"]
    if len(title) > settings.max_title_length:
        return [f"Title must be max {settings.max_title_length} characters"]
    return []


def _validate_description(payload: Mapping[str, Any], settings: Settings) -> list[str]:
    description = payload.get("description")
    if description is None or description == "":
        return []
    if not isinstance(description, str):
        return ["Description must be a string"]
    if len(description) > settings.max_description_length:
        return [f"Description must be max {settings.max_description_length} characters"]
    return []


def _validate_tags(payload: Mapping[str, Any], settings: Settings) -> list[str]:
    tags = payload.get("tags")
    if tags is None:
        return []
    # Only the first failing tag rule is reported
    if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
        return ["Tags must be an array"]
    if len(tags) > settings.max_tags:
        return [f"Maximum {settings.max_tags} tags allowed"]
    if any(tag != tag.lower() for tag in tags):
        return ["Tags must be lowercase"]
    return []


def validate_bookmark(
    payload: Mapping[str, Any],
    *,
    partial: bool = False,
    settings: Settings | None = None,
) -> list[str]:
    """
    Validate a bookmark payload and return error messages in rule order.

    Args:
        payload:
            Candidate fields (url, title, description, tags). Unknown keys are ignored.
        partial:
            False for create (url and title are required), True for update (only the
            keys present in the payload are checked).
        settings:
            Field limits to apply. Defaults to the application settings.

    Returns:
        List of human-readable messages. Empty when the payload is acceptable.
    """
    settings = settings or get_settings()
    errors: list[str] = []
    errors.extend(_validate_url(payload, partial))
    errors.extend(_validate_title(payload, partial, settings))
    errors.extend(_validate_description(payload, settings))
    errors.extend(_validate_tags(payload, settings))
    return errors


def join_errors(errors: list[str]) -> str:
    """Combine validation messages into the single message returned to callers."""
    return ERROR_SEPARATOR.join(errors)


def parse_tags(text: str) -> list[str]:
    """Split a comma-separated tag field into trimmed, non-empty tags."""
    return [tag.strip() for tag in text.split(",") if tag.strip()]
