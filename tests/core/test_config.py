"""Tests for application settings."""
import pytest

from core.config import Settings


def test__settings__defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Defaults match the documented values."""
    for name in ("PORT", "HOST", "CORS_ORIGINS", "MAX_TAGS", "RATE_LIMIT_MAX_REQUESTS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.host == "127.0.0.1"
    assert settings.port == 3000
    assert settings.max_title_length == 200
    assert settings.max_description_length == 500
    assert settings.max_tags == 5
    assert settings.metadata_fetch_timeout == 5.0
    assert settings.rate_limit_max_requests == 100
    assert settings.rate_limit_window_seconds == 900
    assert settings.cors_origins == ["http://localhost:5173"]


def test__settings__from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Environment variables override defaults."""
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("SEED_SAMPLE_DATA", "false")
    monkeypatch.setenv("RATE_LIMIT_ENABLED", "false")

    settings = Settings(_env_file=None)

    assert settings.port == 8080
    assert settings.seed_sample_data is False
    assert settings.rate_limit_enabled is False


def test__settings__from_env_file(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Values are read from a .env file."""
    monkeypatch.delenv("MAX_TAGS", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("MAX_TAGS=3\n")

    settings = Settings(_env_file=env_file)

    assert settings.max_tags == 3


def test__cors_origins__comma_separated(monkeypatch: pytest.MonkeyPatch) -> None:
    """Multiple origins are split and trimmed."""
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test ,")

    settings = Settings(_env_file=None)

    assert settings.cors_origins == ["http://a.test", "http://b.test"]


def test__cors_origins__empty(monkeypatch: pytest.MonkeyPatch) -> None:
    """An empty value allows no origins."""
    monkeypatch.setenv("CORS_ORIGINS", "")

    assert Settings(_env_file=None).cors_origins == []


def test__settings__field_names_accepted() -> None:
    """Settings can be constructed by field name in code."""
    settings = Settings(_env_file=None, port=9000, cors_origins_str="http://x.test")

    assert settings.port == 9000
    assert settings.cors_origins == ["http://x.test"]
