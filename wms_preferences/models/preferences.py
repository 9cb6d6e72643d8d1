"""
In-memory collection of preferences.

Used by the binding layer to hold a set of preferences of mixed scopes.
TYPES is the registry of known preference classes.
"""

from typing import Iterable, Iterator, List, Optional, Type, TypeVar

from wms_preferences.exceptions import WrongClassTypeError
from wms_preferences.models.preference import (
    AbstractPreference,
    ApplicationPreference,
    ModulePreference,
    RolePreference,
    UserPreference,
)
from wms_preferences.models.scope import PropertyScope


T = TypeVar("T", bound=AbstractPreference)


class Preferences:
    """Container of preferences of all scopes."""

    TYPES = (
        ApplicationPreference,
        ModulePreference,
        RolePreference,
        UserPreference,
    )

    BY_SCOPE = {
        PropertyScope.APPLICATION: ApplicationPreference,
        PropertyScope.MODULE: ModulePreference,
        PropertyScope.ROLE: RolePreference,
        PropertyScope.USER: UserPreference,
    }

    def __init__(self, preferences: Optional[Iterable[AbstractPreference]] = None):
        self._preferences: List[AbstractPreference] = list(preferences or [])

    @classmethod
    def is_known_type(cls, clazz: type) -> bool:
        return clazz in cls.TYPES

    def add(self, preference: AbstractPreference) -> None:
        self._preferences.append(preference)

    def get_all(self) -> List[AbstractPreference]:
        """Return all preferences, in insertion order."""
        return list(self._preferences)

    def of_type(self, clazz: Type[T]) -> List[T]:
        """
        Return the preferences of one concrete class.

        Raises:
            WrongClassTypeError: clazz is not one of TYPES
        """
        if not self.is_known_type(clazz):
            raise WrongClassTypeError(f"Type {clazz} not a valid Preferences type")
        return [p for p in self._preferences if type(p) is clazz]

    def get_applications(self) -> List[ApplicationPreference]:
        return self.of_type(ApplicationPreference)

    def get_modules(self) -> List[ModulePreference]:
        return self.of_type(ModulePreference)

    def get_roles(self) -> List[RolePreference]:
        return self.of_type(RolePreference)

    def get_users(self) -> List[UserPreference]:
        return self.of_type(UserPreference)

    def __len__(self) -> int:
        return len(self._preferences)

    def __iter__(self) -> Iterator[AbstractPreference]:
        return iter(self._preferences)

    def __repr__(self) -> str:
        return f"<Preferences(count={len(self._preferences)})>"
