"""Pytest fixtures for testing."""
from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from api.main import create_app
from core.config import Settings
from services.bookmark_store import BookmarkStore


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local .env, with an empty store on startup."""
    return Settings(
        _env_file=None,
        seed_sample_data=False,
        rate_limit_enabled=True,
        rate_limit_max_requests=100,
        rate_limit_window_seconds=900,
    )


@pytest.fixture
def store(settings: Settings) -> BookmarkStore:
    """A fresh, empty bookmark store."""
    return BookmarkStore(settings)


@pytest.fixture
def app(settings: Settings, store: BookmarkStore) -> FastAPI:
    """An application serving the test store."""
    return create_app(settings, store)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create a test client bound to the test application."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client
