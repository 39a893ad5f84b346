"""
Domain entities - Administrator, User and SafeHouse records.

Every live instance satisfies its invariants: construction runs each
field setter in order and the first invalid field raises ValidationError,
so no partially built object ever escapes. Fields change only through
the set_* methods, which re-validate.

Administrator and User are distinct roles with the same behaviour.
They share the module-level validation helpers below and both satisfy
the IdentityRecord protocol in ports; neither inherits from the other.

Repository adapters rebuild stored rows through the ``_restore``
classmethods, which skip validation and hashing. Application code
always goes through the constructors.
"""

import uuid
from typing import Optional

from .credentials import hash_password, verify_password
from .exceptions import ValidationError

MIN_PASSWORD_LENGTH = 6


def normalize_email(email: Optional[str]) -> str:
    """
    Normalize email address for consistent storage and lookup.

    Applies: strip whitespace + lowercase. None normalizes to "".
    """
    return (email or "").strip().lower()


def _require_text(value: Optional[str], field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{field} is required")
    return value.strip()


def _require_email(value: Optional[str]) -> str:
    return normalize_email(_require_text(value, "email"))


def _hash_new_password(raw: Optional[str]) -> str:
    if raw is None or len(raw.strip()) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"password must have at least {MIN_PASSWORD_LENGTH} characters"
        )
    return hash_password(raw)


def _matches(candidate: Optional[str], digest: str) -> bool:
    if not candidate:
        return False
    return verify_password(candidate, digest)


class Administrator:
    """Administrator account with a normalized unique email."""

    def __init__(self, name: str, email: str, password: str) -> None:
        self._id = uuid.uuid4()
        self.set_name(name)
        self.set_email(email)
        self.set_password(password)

    @classmethod
    def _restore(
        cls, id: uuid.UUID, name: str, email: str, password_hash: str
    ) -> "Administrator":
        entity = cls.__new__(cls)
        entity._id = id
        entity._name = name
        entity._email = email
        entity._password_hash = password_hash
        return entity

    @property
    def id(self) -> uuid.UUID:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def email(self) -> str:
        return self._email

    @property
    def password_hash(self) -> str:
        return self._password_hash

    def set_name(self, name: str) -> None:
        self._name = _require_text(name, "name")

    def set_email(self, email: str) -> None:
        self._email = _require_email(email)

    def set_password(self, password: str) -> None:
        self._password_hash = _hash_new_password(password)

    def verify_password(self, candidate: Optional[str]) -> bool:
        """Return True when candidate hashes to the stored digest."""
        return _matches(candidate, self._password_hash)

    def __repr__(self) -> str:
        return f"Administrator(id={self._id!s}, email={self._email!r})"


class User:
    """Ordinary user account with a normalized unique email."""

    def __init__(self, name: str, email: str, password: str) -> None:
        self._id = uuid.uuid4()
        self.set_name(name)
        self.set_email(email)
        self.set_password(password)

    @classmethod
    def _restore(
        cls, id: uuid.UUID, name: str, email: str, password_hash: str
    ) -> "User":
        entity = cls.__new__(cls)
        entity._id = id
        entity._name = name
        entity._email = email
        entity._password_hash = password_hash
        return entity

    @property
    def id(self) -> uuid.UUID:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def email(self) -> str:
        return self._email

    @property
    def password_hash(self) -> str:
        return self._password_hash

    def set_name(self, name: str) -> None:
        self._name = _require_text(name, "name")

    def set_email(self, email: str) -> None:
        self._email = _require_email(email)

    def set_password(self, password: str) -> None:
        self._password_hash = _hash_new_password(password)

    def verify_password(self, candidate: Optional[str]) -> bool:
        """Return True when candidate hashes to the stored digest."""
        return _matches(candidate, self._password_hash)

    def __repr__(self) -> str:
        return f"User(id={self._id!s}, email={self._email!r})"


class SafeHouse:
    """
    Physical safe house location.

    complement is optional and never None: missing input is stored
    as an empty string.
    """

    def __init__(
        self, postal_code: str, number: str, complement: Optional[str] = None
    ) -> None:
        self._id = uuid.uuid4()
        self.set_postal_code(postal_code)
        self.set_number(number)
        self.set_complement(complement)

    @classmethod
    def _restore(
        cls, id: uuid.UUID, postal_code: str, number: str, complement: str
    ) -> "SafeHouse":
        entity = cls.__new__(cls)
        entity._id = id
        entity._postal_code = postal_code
        entity._number = number
        entity._complement = complement or ""
        return entity

    @property
    def id(self) -> uuid.UUID:
        return self._id

    @property
    def postal_code(self) -> str:
        return self._postal_code

    @property
    def number(self) -> str:
        return self._number

    @property
    def complement(self) -> str:
        return self._complement

    def set_postal_code(self, postal_code: str) -> None:
        self._postal_code = _require_text(postal_code, "postal_code")

    def set_number(self, number: str) -> None:
        self._number = _require_text(number, "number")

    def set_complement(self, complement: Optional[str]) -> None:
        self._complement = complement.strip() if complement is not None else ""

    def __repr__(self) -> str:
        return f"SafeHouse(id={self._id!s}, postal_code={self._postal_code!r})"
