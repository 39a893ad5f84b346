"""
In-memory repository adapters - For tests and local development.

Records live in a dict guarded by a lock. Identity repositories enforce
email uniqueness inside add() and update(), playing the part of the
database's unique index, so services observe the same
DuplicateRecordError they would get from PostgreSQL.

Stored entities are copied in and out; callers never share an instance
with the store, just as with a real database.
"""

import copy
import threading
import uuid
from typing import Generic, Optional, TypeVar

from src.domain.entities import SafeHouse
from src.domain.exceptions import DuplicateRecordError
from src.domain.ports import IdentityT

EntityT = TypeVar("EntityT")


class _Store(Generic[EntityT]):
    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.records: dict[uuid.UUID, EntityT] = {}


class InMemoryIdentityRepository(Generic[IdentityT]):
    """Implements IdentityRepository protocol over a dict."""

    def __init__(self) -> None:
        self._store: _Store[IdentityT] = _Store()

    def _email_taken(self, email: str, owner: uuid.UUID) -> bool:
        return any(
            record.email == email and record.id != owner
            for record in self._store.records.values()
        )

    def get_by_id(self, id: uuid.UUID) -> Optional[IdentityT]:
        with self._store.lock:
            record = self._store.records.get(id)
            return copy.deepcopy(record) if record is not None else None

    def get_by_email(self, email: str) -> Optional[IdentityT]:
        with self._store.lock:
            for record in self._store.records.values():
                if record.email == email:
                    return copy.deepcopy(record)
        return None

    def get_all(self) -> list[IdentityT]:
        with self._store.lock:
            return [copy.deepcopy(record) for record in self._store.records.values()]

    def add(self, entity: IdentityT) -> None:
        with self._store.lock:
            if self._email_taken(entity.email, entity.id):
                raise DuplicateRecordError(entity.email)
            self._store.records[entity.id] = copy.deepcopy(entity)

    def update(self, entity: IdentityT) -> None:
        with self._store.lock:
            if entity.id not in self._store.records:
                return
            if self._email_taken(entity.email, entity.id):
                raise DuplicateRecordError(entity.email)
            self._store.records[entity.id] = copy.deepcopy(entity)

    def delete(self, id: uuid.UUID) -> None:
        with self._store.lock:
            self._store.records.pop(id, None)

    def exists(self, id: uuid.UUID) -> bool:
        with self._store.lock:
            return id in self._store.records


class InMemorySafeHouseRepository:
    """Implements SafeHouseRepository protocol over a dict."""

    def __init__(self) -> None:
        self._store: _Store[SafeHouse] = _Store()

    def get_by_id(self, id: uuid.UUID) -> Optional[SafeHouse]:
        with self._store.lock:
            record = self._store.records.get(id)
            return copy.deepcopy(record) if record is not None else None

    def get_all(self) -> list[SafeHouse]:
        with self._store.lock:
            return [copy.deepcopy(record) for record in self._store.records.values()]

    def add(self, entity: SafeHouse) -> None:
        with self._store.lock:
            self._store.records[entity.id] = copy.deepcopy(entity)

    def update(self, entity: SafeHouse) -> None:
        with self._store.lock:
            if entity.id in self._store.records:
                self._store.records[entity.id] = copy.deepcopy(entity)

    def delete(self, id: uuid.UUID) -> None:
        with self._store.lock:
            self._store.records.pop(id, None)

    def exists(self, id: uuid.UUID) -> bool:
        with self._store.lock:
            return id in self._store.records
