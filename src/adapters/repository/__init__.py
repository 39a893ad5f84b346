"""Repository adapters - Database and in-memory implementations."""

from .memory import InMemoryIdentityRepository, InMemorySafeHouseRepository
from .postgres import (
    PostgresIdentityRepository,
    PostgresSafeHouseRepository,
    administrator_repository,
    run_migrations,
    user_repository,
)

__all__ = [
    "InMemoryIdentityRepository",
    "InMemorySafeHouseRepository",
    "PostgresIdentityRepository",
    "PostgresSafeHouseRepository",
    "administrator_repository",
    "run_migrations",
    "user_repository",
]
