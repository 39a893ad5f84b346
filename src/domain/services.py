"""
Registry domain services - Orchestration around persistence.

One orchestrator per record kind. Each sequences repository calls to
enforce the business rules (email uniqueness, record existence) before
mutating state. Orchestrators hold no state of their own.

Email uniqueness is checked up front for a friendly ConflictError, but
the check and the insert are two separate repository calls. Two
concurrent creates with the same email can both pass the check; the
store's unique index then rejects the second insert, and the adapter's
DuplicateRecordError is translated into the same ConflictError.
"""

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, Optional

from .entities import Administrator, SafeHouse, User, normalize_email
from .exceptions import AuthenticationError, ConflictError, DuplicateRecordError, NotFoundError
from .ports import IdentityRepository, IdentityT, SafeHouseRepository, SeverityPredictor

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "duplicate email"
INVALID_CREDENTIALS_MESSAGE = "invalid email or password"


@dataclass
class IdentityService(Generic[IdentityT]):
    """
    Orchestrator for an identity kind (administrators or users).

    Parameterized by the entity factory and a label used in messages,
    so both roles share one implementation without sharing a base class.
    """

    repository: IdentityRepository[IdentityT]
    factory: Callable[[str, str, str], IdentityT]
    label: str

    def get_all(self) -> list[IdentityT]:
        return self.repository.get_all()

    def get_by_id(self, id: uuid.UUID) -> IdentityT:
        """
        Raises:
            NotFoundError: If no record has this id
        """
        entity = self.repository.get_by_id(id)
        if entity is None:
            raise NotFoundError(f"{self.label} not found")
        return entity

    def create(self, name: str, email: str, password: str) -> IdentityT:
        """
        Create and persist a new record.

        Args:
            name: Display name
            email: Email address (will be normalized)
            password: Raw password (will be hashed by the entity)

        Returns:
            The persisted entity

        Raises:
            ConflictError: If the normalized email is already registered
            ValidationError: If any field violates an entity invariant
        """
        normalized_email = normalize_email(email)
        if self.repository.get_by_email(normalized_email) is not None:
            logger.info("%s create rejected: email already registered", self.label)
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

        entity = self.factory(name, email, password)
        try:
            self.repository.add(entity)
        except DuplicateRecordError as exc:
            logger.info("%s create lost race on unique email index", self.label)
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE) from exc
        logger.info("%s created: %s", self.label, entity.id)
        return entity

    def update(self, id: uuid.UUID, name: str, email: str, password: str) -> None:
        """
        Replace every field of an existing record.

        Setters run on the fetched instance before anything is written,
        so a ValidationError leaves the stored record untouched.

        Raises:
            NotFoundError: If no record has this id
            ValidationError: If any field violates an entity invariant
            ConflictError: If the new email belongs to another record
        """
        entity = self.get_by_id(id)
        entity.set_name(name)
        entity.set_email(email)
        entity.set_password(password)
        try:
            self.repository.update(entity)
        except DuplicateRecordError as exc:
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE) from exc

    def delete(self, id: uuid.UUID) -> None:
        """
        Raises:
            NotFoundError: If no record has this id
        """
        if not self.repository.exists(id):
            raise NotFoundError(f"{self.label} not found")
        self.repository.delete(id)
        logger.info("%s deleted: %s", self.label, id)

    def authenticate(self, email: str, password: str) -> IdentityT:
        """
        Return the record whose email and password match.

        Unknown email and wrong password raise the same error with the
        same message, so callers cannot tell which part was wrong.

        Raises:
            AuthenticationError: If the credentials do not verify
        """
        entity = self.repository.get_by_email(normalize_email(email))
        if entity is None or not entity.verify_password(password):
            logger.info("%s authentication failed", self.label)
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)
        return entity


def administrator_service(
    repository: IdentityRepository[Administrator],
) -> IdentityService[Administrator]:
    """Build the orchestrator for administrators."""
    return IdentityService(repository=repository, factory=Administrator, label="Administrator")


def user_service(repository: IdentityRepository[User]) -> IdentityService[User]:
    """Build the orchestrator for ordinary users."""
    return IdentityService(repository=repository, factory=User, label="User")


@dataclass
class SafeHouseService:
    """Orchestrator for safe houses. No uniqueness rule applies."""

    repository: SafeHouseRepository

    def get_all(self) -> list[SafeHouse]:
        return self.repository.get_all()

    def get_by_id(self, id: uuid.UUID) -> SafeHouse:
        entity = self.repository.get_by_id(id)
        if entity is None:
            raise NotFoundError("SafeHouse not found")
        return entity

    def create(self, postal_code: str, number: str, complement: Optional[str] = None) -> SafeHouse:
        entity = SafeHouse(postal_code, number, complement)
        self.repository.add(entity)
        logger.info("SafeHouse created: %s", entity.id)
        return entity

    def update(
        self, id: uuid.UUID, postal_code: str, number: str, complement: Optional[str] = None
    ) -> None:
        entity = self.get_by_id(id)
        entity.set_postal_code(postal_code)
        entity.set_number(number)
        entity.set_complement(complement)
        self.repository.update(entity)

    def delete(self, id: uuid.UUID) -> None:
        if not self.repository.exists(id):
            raise NotFoundError("SafeHouse not found")
        self.repository.delete(id)
        logger.info("SafeHouse deleted: %s", id)


@dataclass
class AlertPredictionService:
    """Passthrough to the severity model."""

    predictor: SeverityPredictor

    def predict_severity(self, feature1: float, feature2: float, feature3: float) -> float:
        return self.predictor.predict_severity(feature1, feature2, feature3)
