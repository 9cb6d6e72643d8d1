"""
Exceptions raised by the preferences subsystem.

Concurrency conflicts are reported by SQLAlchemy itself; StaleDataError is
re-exported here so callers can catch it without importing the ORM.
"""

from sqlalchemy.orm.exc import StaleDataError


class PreferenceError(Exception):
    """Base exception for preference errors."""
    pass


class InvalidPreferenceError(PreferenceError, ValueError):
    """A preference was constructed with a blank owner or key."""
    pass


class WrongClassTypeError(PreferenceError, TypeError):
    """The requested class is not a known preference type."""
    pass


class TransactionRequiredError(PreferenceError, RuntimeError):
    """A write was attempted without an active transaction."""
    pass


class PreferenceExistsError(PreferenceError):
    """persist() was called for an entity that is already persistent."""
    pass


__all__ = [
    "PreferenceError",
    "InvalidPreferenceError",
    "WrongClassTypeError",
    "TransactionRequiredError",
    "PreferenceExistsError",
    "StaleDataError",
]
