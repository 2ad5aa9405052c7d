"""Tests for the in-process fixed-window rate limiter."""
import pytest

from core.rate_limit_config import RateLimitConfig
from core.rate_limiter import RateLimiter


class FakeClock:
    """Controllable time source."""

    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def limiter(clock: FakeClock) -> RateLimiter:
    return RateLimiter(RateLimitConfig(max_requests=2, window_seconds=60), clock=clock)


def test__check__allows_up_to_limit(limiter: RateLimiter) -> None:
    """Requests within the limit are allowed with a shrinking budget."""
    first = limiter.check("1.2.3.4")
    second = limiter.check("1.2.3.4")

    assert first.allowed is True
    assert first.remaining == 1
    assert second.allowed is True
    assert second.remaining == 0
    assert first.limit == 2
    assert first.reset == 1_060
    assert first.retry_after == 0


def test__check__blocks_over_limit(limiter: RateLimiter, clock: FakeClock) -> None:
    """The request after the limit is denied until the window ends."""
    limiter.check("1.2.3.4")
    limiter.check("1.2.3.4")
    clock.now = 1_045.0

    result = limiter.check("1.2.3.4")

    assert result.allowed is False
    assert result.remaining == 0
    assert result.retry_after == 15


def test__check__window_resets(limiter: RateLimiter, clock: FakeClock) -> None:
    """A new window starts once the old one expires."""
    limiter.check("1.2.3.4")
    limiter.check("1.2.3.4")
    clock.now = 1_060.0

    result = limiter.check("1.2.3.4")

    assert result.allowed is True
    assert result.remaining == 1
    assert result.reset == 1_120


def test__check__keys_are_independent(limiter: RateLimiter) -> None:
    """Each client has its own budget."""
    limiter.check("1.1.1.1")
    limiter.check("1.1.1.1")

    assert limiter.check("2.2.2.2").allowed is True
    assert limiter.check("1.1.1.1").allowed is False


def test__check__denied_requests_do_not_extend_window(
    limiter: RateLimiter, clock: FakeClock,
) -> None:
    """Blocked requests are not counted toward the next window."""
    for _ in range(5):
        limiter.check("1.2.3.4")
    clock.now = 1_061.0

    assert limiter.check("1.2.3.4").remaining == 1


def test__check__evicts_expired_clients(limiter: RateLimiter, clock: FakeClock) -> None:
    """Clients whose window ended are dropped from the table."""
    for i in range(1_000):
        limiter.check(f"10.0.{i // 256}.{i % 256}")
    assert len(limiter._windows) == 1_000

    clock.now = 10_000.0
    limiter.check("1.2.3.4")

    assert list(limiter._windows) == ["1.2.3.4"]


def test__check__keeps_active_clients_when_sweeping(
    limiter: RateLimiter, clock: FakeClock,
) -> None:
    """Only ended windows are evicted; live counts survive a sweep."""
    limiter.check("old")
    clock.now = 1_050.0
    limiter.check("recent")
    limiter.check("recent")
    clock.now = 1_070.0

    assert limiter.check("recent").allowed is False
    assert set(limiter._windows) == {"recent"}
