"""
SQLAlchemy models for the preferences subsystem.

All database models inherit from the Base declarative base.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


# Import all models
from wms_preferences.models.scope import PreferenceKey, PropertyScope
from wms_preferences.models.preference import (
    AbstractPreference,
    ApplicationPreference,
    ModulePreference,
    RolePreference,
    UserPreference,
)
from wms_preferences.models.preferences import Preferences
from wms_preferences.models.factory import PreferenceFactory

__all__ = [
    "Base",
    "PreferenceKey",
    "PropertyScope",
    "AbstractPreference",
    "ApplicationPreference",
    "ModulePreference",
    "RolePreference",
    "UserPreference",
    "Preferences",
    "PreferenceFactory",
]
