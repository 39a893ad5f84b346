"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- In-memory repositories
- Domain services wired to those repositories
- Fresh in-memory rate limit counters per test
"""

from collections.abc import Generator

import pytest

from src.adapters.repository.memory import (
    InMemoryIdentityRepository,
    InMemorySafeHouseRepository,
)
from src.api.limiter import LocalRateLimiter, configure_rate_limiter, reset_rate_limiter
from src.domain.entities import Administrator, User
from src.domain.services import (
    IdentityService,
    SafeHouseService,
    administrator_service,
    user_service,
)


@pytest.fixture
def admin_repository() -> InMemoryIdentityRepository[Administrator]:
    return InMemoryIdentityRepository()


@pytest.fixture
def user_repository() -> InMemoryIdentityRepository[User]:
    return InMemoryIdentityRepository()


@pytest.fixture
def safe_house_repository() -> InMemorySafeHouseRepository:
    return InMemorySafeHouseRepository()


@pytest.fixture
def admin_service(
    admin_repository: InMemoryIdentityRepository[Administrator],
) -> IdentityService[Administrator]:
    return administrator_service(admin_repository)


@pytest.fixture
def users(user_repository: InMemoryIdentityRepository[User]) -> IdentityService[User]:
    return user_service(user_repository)


@pytest.fixture
def safe_houses(safe_house_repository: InMemorySafeHouseRepository) -> SafeHouseService:
    return SafeHouseService(repository=safe_house_repository)


@pytest.fixture(autouse=True)
def fresh_rate_limits() -> Generator[None, None, None]:
    """Start every test with empty in-memory rate limit counters."""
    configure_rate_limiter(LocalRateLimiter)
    yield
    reset_rate_limiter()
