"""
Data access layer for preferences.
"""

from wms_preferences.repositories.preference_dao import PreferenceDao, PreferenceWriter
from wms_preferences.repositories.preference_repo import PreferenceRepository

__all__ = [
    "PreferenceDao",
    "PreferenceWriter",
    "PreferenceRepository",
]
