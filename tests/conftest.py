"""Shared fixtures."""

import pytest

from reachable_from.adapters.api_rate_limiter import ApiRateLimiter


@pytest.fixture(autouse=True)
def reset_rate_limiters() -> None:
    """Shared rate limiters must not leak between tests (or event loops)."""
    ApiRateLimiter._instances.clear()
    ApiRateLimiter._registry_lock = None
