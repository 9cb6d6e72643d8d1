"""
Factory for preference instances.

The create_* methods return empty binding instances, as needed by the
binding layer when it fills fields one by one. build_user_preference()
is the runtime form with a validated owner and key.
"""

from typing import Optional

from wms_preferences.models.preference import (
    ApplicationPreference,
    ModulePreference,
    RolePreference,
    UserPreference,
)
from wms_preferences.models.preferences import Preferences


class PreferenceFactory:
    """Creates new, transient preference instances."""

    def create_application_preference(self) -> ApplicationPreference:
        return ApplicationPreference()

    def create_module_preference(self) -> ModulePreference:
        return ModulePreference()

    def create_role_preference(self) -> RolePreference:
        return RolePreference()

    def create_user_preference(self) -> UserPreference:
        return UserPreference()

    def create_preferences(self) -> Preferences:
        return Preferences()

    @staticmethod
    def build_user_preference(owner: str, key: str, description: Optional[str] = None) -> UserPreference:
        """
        Create a UserPreference with owner, key and description set.

        Args:
            owner: Username of the owning user
            key: Key of the preference
            description: Description text

        Returns:
            New transient UserPreference

        Raises:
            InvalidPreferenceError: owner or key is None or blank
        """
        preference = UserPreference(owner, key)
        preference.description = description
        return preference
