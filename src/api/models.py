"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Response models are built from domain entities with ``from_entity`` and
carry only boundary-safe fields: password hashes never leave the service.
"""

import uuid
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from src.domain.entities import MIN_PASSWORD_LENGTH, SafeHouse
from src.domain.ports import IdentityRecord


class IdentityCreateRequest(BaseModel):
    """Request model for creating an administrator or user."""

    name: str = Field(..., min_length=1, description="Display name")
    email: EmailStr
    password: str = Field(
        ...,
        min_length=MIN_PASSWORD_LENGTH,
        description=f"Password (min {MIN_PASSWORD_LENGTH} characters)",
    )


class IdentityUpdateRequest(IdentityCreateRequest):
    """Request model for replacing an administrator or user."""

    id: uuid.UUID = Field(..., description="Must match the id in the path")


class LoginRequest(BaseModel):
    """
    Request model for checking an email and password.

    Fields are plain strings: the domain normalizes the email and any
    mismatch, malformed email included, fails with the same 401.
    """

    email: str = Field(..., description="Account email")
    password: str = Field(..., description="Plaintext password")


class IdentityResponse(BaseModel):

    """Administrator or user as exposed by the API."""

    id: uuid.UUID
    name: str
    email: str

    @classmethod
    def from_entity(cls, entity: IdentityRecord) -> "IdentityResponse":
        return cls(id=entity.id, name=entity.name, email=entity.email)


class SafeHouseCreateRequest(BaseModel):
    """Request model for creating a safe house."""

    postal_code: str = Field(..., min_length=1)
    number: str = Field(..., min_length=1)
    complement: Optional[str] = None


class SafeHouseUpdateRequest(SafeHouseCreateRequest):
    """Request model for replacing a safe house."""

    id: uuid.UUID = Field(..., description="Must match the id in the path")


class SafeHouseResponse(BaseModel):
    """Safe house as exposed by the API."""

    id: uuid.UUID
    postal_code: str
    number: str
    complement: str

    @classmethod
    def from_entity(cls, entity: SafeHouse) -> "SafeHouseResponse":
        return cls(
            id=entity.id,
            postal_code=entity.postal_code,
            number=entity.number,
            complement=entity.complement,
        )


class AlertPredictionRequest(BaseModel):
    """Request model for alert severity prediction."""

    feature1: float
    feature2: float
    feature3: float


class AlertPredictionResponse(BaseModel):
    """Predicted alert severity."""

    severity: float


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
