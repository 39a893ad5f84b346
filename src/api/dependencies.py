"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from functools import lru_cache

from fastapi import Request
from psycopg_pool import ConnectionPool

from src.adapters.ml.linear import LinearSeverityPredictor
from src.adapters.repository.postgres import (
    PostgresSafeHouseRepository,
    administrator_repository,
    user_repository,
)
from src.config.settings import get_settings
from src.domain.entities import Administrator, User
from src.domain.services import (
    AlertPredictionService,
    IdentityService,
    SafeHouseService,
    administrator_service,
    user_service,
)


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_administrator_service(request: Request) -> IdentityService[Administrator]:
    """Create administrator service over the PostgreSQL repository."""
    return administrator_service(administrator_repository(get_pool(request)))


def get_user_service(request: Request) -> IdentityService[User]:
    """Create user service over the PostgreSQL repository."""
    return user_service(user_repository(get_pool(request)))


def get_safe_house_service(request: Request) -> SafeHouseService:
    """Create safe house service over the PostgreSQL repository."""
    return SafeHouseService(repository=PostgresSafeHouseRepository(get_pool(request)))


@lru_cache
def get_alert_prediction_service() -> AlertPredictionService:
    """Get alert prediction service (singleton, model coefficients from settings)."""
    settings = get_settings()
    predictor = LinearSeverityPredictor(settings.severity_weights, settings.severity_bias)
    return AlertPredictionService(predictor=predictor)
