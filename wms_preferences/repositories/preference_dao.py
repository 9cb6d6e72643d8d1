"""
Data access contract for preferences.

PreferenceDao is the read side; PreferenceWriter adds the write operations.
Writers require a transaction that the caller has already begun.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Type, TypeVar

from wms_preferences.models.preference import AbstractPreference


T = TypeVar("T", bound=AbstractPreference)

# Default for find_by_type: no owner filter. An explicit None filters on a missing owner.
ANY_OWNER: Any = object()


class PreferenceDao(ABC):
    """Read operations on preferences."""

    @abstractmethod
    def find_by_key(self, id: int) -> Optional[AbstractPreference]:
        """
        Find a preference by its surrogate id.

        Returns:
            The preference, or None if no row has this id
        """

    @abstractmethod
    def find_by_type(self, clazz: Type[T], owner: Optional[str] = ANY_OWNER) -> List[T]:
        """
        Find all preferences of a concrete class.

        Args:
            clazz: One of the known preference classes
            owner: If passed, only preferences of this owner are returned.
                   Passing None matches preferences without an owner, which
                   no owned scope stores, so the result is empty.

        Returns:
            List of preferences, empty if none match

        Raises:
            WrongClassTypeError: clazz is not a known preference class
        """

    @abstractmethod
    def find_all(self) -> List[AbstractPreference]:
        """Return all preferences of all scopes, never None."""


class PreferenceWriter(PreferenceDao):
    """Read and write operations on preferences."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """
        Insert a new entity or merge changes of an existing one.

        Returns:
            The instance attached to the current session, with id and
            version as stored
        """

    @abstractmethod
    def persist(self, entity: AbstractPreference) -> None:
        """Insert a new entity."""

    @abstractmethod
    def remove(self, entity: AbstractPreference) -> None:
        """Delete an entity, attaching it to the session first if needed."""
