"""FastAPI dependencies for injection."""
from fastapi import Request

from core.config import Settings
from core.rate_limiter import enforce_rate_limit
from services.bookmark_store import BookmarkStore


def get_bookmark_store(request: Request) -> BookmarkStore:
    """Get the store owned by the running application."""
    return request.app.state.bookmark_store


def get_app_settings(request: Request) -> Settings:
    """Get the settings the running application was built with."""
    return request.app.state.settings


__all__ = [
    "enforce_rate_limit",
    "get_app_settings",
    "get_bookmark_store",
]
