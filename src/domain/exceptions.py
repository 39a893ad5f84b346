"""
Domain exceptions - Semantic error types for the registry.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
The API layer maps each kind to a distinct HTTP status.
"""


class RegistryError(Exception):
    """Base class for registry domain errors."""

    pass


class ValidationError(RegistryError):
    """An entity invariant was violated (blank field, short password)."""

    pass


class NotFoundError(RegistryError):
    """No record exists for the requested identifier."""

    pass


class ConflictError(RegistryError):
    """A record with the same normalized email already exists."""

    pass


class AuthenticationError(RegistryError):
    """Email/password pair does not verify."""

    pass


class DuplicateRecordError(RegistryError):
    """
    Raised by repository adapters when the store rejects a write
    on a unique index.

    Services translate it into ConflictError so callers see one
    failure mode whether the pre-check or the store caught the duplicate.
    """

    pass
