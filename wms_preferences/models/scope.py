"""
Preference scopes and the logical preference key.
"""

from dataclasses import dataclass
from enum import Enum as PyEnum
from typing import Optional


class PropertyScope(PyEnum):
    """Context a preference applies to."""
    APPLICATION = "APPLICATION"
    MODULE = "MODULE"
    ROLE = "ROLE"
    USER = "USER"


@dataclass(frozen=True)
class PreferenceKey:
    """
    Logical identity of a preference within its scope.

    Attributes:
        scope: Scope of the preference
        owner: Module name, role name or username; None for application preferences
        key: Key of the preference
    """
    scope: PropertyScope
    owner: Optional[str]
    key: str
