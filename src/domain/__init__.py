"""
Domain layer - Pure business logic with zero framework imports.

This package contains the entities, password credentials and
orchestrators of the safe house registry. It defines its own port
interfaces for infrastructure abstraction, keeping the hexagonal
architecture decoupled from FastAPI and psycopg.
"""

from .entities import Administrator, SafeHouse, User
from .exceptions import (
    AuthenticationError,
    ConflictError,
    DuplicateRecordError,
    NotFoundError,
    RegistryError,
    ValidationError,
)
from .ports import IdentityRecord, IdentityRepository, SafeHouseRepository, SeverityPredictor
from .services import (
    AlertPredictionService,
    IdentityService,
    SafeHouseService,
    administrator_service,
    user_service,
)

__all__ = [
    "Administrator",
    "AlertPredictionService",
    "AuthenticationError",
    "ConflictError",
    "DuplicateRecordError",
    "IdentityRecord",
    "IdentityRepository",
    "IdentityService",
    "NotFoundError",
    "RegistryError",
    "SafeHouse",
    "SafeHouseRepository",
    "SafeHouseService",
    "SeverityPredictor",
    "User",
    "ValidationError",
    "administrator_service",
    "user_service",
]
