"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols via structural
subtyping; nothing inherits from them.
"""

import uuid
from typing import Optional, Protocol, TypeVar

from .entities import SafeHouse


class IdentityRecord(Protocol):
    """
    Capability shared by Administrator and User.

    Anything with an id, a name, a normalized email and a password
    check can be managed by IdentityService.
    """

    @property
    def id(self) -> uuid.UUID: ...

    @property
    def name(self) -> str: ...

    @property
    def email(self) -> str: ...

    def set_name(self, name: str) -> None: ...

    def set_email(self, email: str) -> None: ...

    def set_password(self, password: str) -> None: ...

    def verify_password(self, candidate: Optional[str]) -> bool: ...


IdentityT = TypeVar("IdentityT", bound=IdentityRecord)


class IdentityRepository(Protocol[IdentityT]):
    """
    Port interface for administrator and user persistence.

    get_all() returns a snapshot in no particular order. update() and
    delete() are no-ops for unknown ids; callers check existence first.
    add() and update() raise DuplicateRecordError when the store's
    unique email index rejects the write.
    """

    def get_by_id(self, id: uuid.UUID) -> Optional[IdentityT]: ...

    def get_all(self) -> list[IdentityT]: ...

    def add(self, entity: IdentityT) -> None: ...

    def update(self, entity: IdentityT) -> None: ...

    def delete(self, id: uuid.UUID) -> None: ...

    def exists(self, id: uuid.UUID) -> bool: ...

    def get_by_email(self, email: str) -> Optional[IdentityT]:
        """
        Look up a record by email.

        Args:
            email: Normalized email address (lowercase, stripped)
        """
        ...


class SafeHouseRepository(Protocol):
    """Port interface for safe house persistence."""

    def get_by_id(self, id: uuid.UUID) -> Optional[SafeHouse]: ...

    def get_all(self) -> list[SafeHouse]: ...

    def add(self, entity: SafeHouse) -> None: ...

    def update(self, entity: SafeHouse) -> None: ...

    def delete(self, id: uuid.UUID) -> None: ...

    def exists(self, id: uuid.UUID) -> bool: ...


class SeverityPredictor(Protocol):
    """Port interface for the alert severity model."""

    def predict_severity(self, feature1: float, feature2: float, feature3: float) -> float:
        """
        Score an alert from its three features.

        The model is opaque to the domain: no retries, no fallback.
        """
        ...
