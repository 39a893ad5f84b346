"""
Shared fixtures for adversarial tests.

Provides a repository wrapper that holds every caller at the email
pre-check until all of them have reached it, forcing the check-then-act
window open for race condition tests.
"""

import threading
from collections.abc import Callable
from typing import Optional

import pytest

from src.adapters.repository.memory import InMemoryIdentityRepository
from src.domain.entities import Administrator

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


class BarrierAtEmailCheck:
    """Delegates to a repository, synchronizing callers inside get_by_email()."""

    def __init__(self, repository: InMemoryIdentityRepository, parties: int) -> None:
        self._repository = repository
        self._barrier = threading.Barrier(parties, timeout=5)

    def __getattr__(self, name: str) -> object:
        return getattr(self._repository, name)

    def get_by_email(self, email: str) -> Optional[Administrator]:
        found = self._repository.get_by_email(email)
        self._barrier.wait()
        return found


@pytest.fixture
def shared_repository() -> InMemoryIdentityRepository[Administrator]:
    return InMemoryIdentityRepository()


@pytest.fixture
def racing_repository(
    shared_repository: InMemoryIdentityRepository[Administrator],
) -> Callable[[int], BarrierAtEmailCheck]:
    """Factory wrapping the shared repository for a given number of racers."""
    return lambda parties: BarrierAtEmailCheck(shared_repository, parties)
