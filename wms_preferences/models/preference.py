"""
Preference entities.

AbstractPreference is mapped to COR_PREFERENCE and each concrete scope to its
own joined table. The version column is an optimistic lock: SQLAlchemy adds
it to the WHERE clause of every UPDATE and raises StaleDataError on mismatch.
"""

from enum import Enum as PyEnum
from typing import Any, Optional

from sqlalchemy import (
    Boolean,
    Enum,
    Float,
    ForeignKey,
    Integer,
    LargeBinary,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from wms_preferences.exceptions import InvalidPreferenceError
from wms_preferences.models import Base
from wms_preferences.models.scope import PreferenceKey, PropertyScope


_UNSET: Any = object()


def _next_version(version: Optional[int]) -> int:
    """First insert stores 0, every update adds one."""
    return 0 if version is None else version + 1


def _require_text(value: Any, message: str) -> str:
    """Return value if it is a non-blank string, raise otherwise."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidPreferenceError(message)
    return value


def _render(value: Any) -> str:
    if value is None:
        return "<null>"
    if isinstance(value, PyEnum):
        return value.name
    return str(value)


def _scope_column() -> Any:
    return Enum(PropertyScope, native_enum=False, length=20)


class AbstractPreference(Base):
    """
    Base of all preferences.

    Holds the value fields shared by every scope. Concrete subclasses add
    the identity fields (owner and/or key) and define get_type(),
    _get_fields() and get_pref_key().

    Attributes:
        id: Surrogate key, None until the entity is persisted
        value: Primary textual value
        bin_value: Optional binary payload
        float_value: Numeric value
        description: Human-readable text
        minimum: Lower bound (not enforced against maximum)
        maximum: Upper bound
        from_file: True if the value was seeded from a configuration file
        version: Optimistic lock counter, None while transient
    """

    __tablename__ = "COR_PREFERENCE"

    FIND_ALL = ".findAll"
    FIND_BY_OWNER = ".findByOwner"
    NQ_FIND_ALL = "AbstractPreference" + FIND_ALL

    id: Mapped[int] = mapped_column("C_ID", Integer, primary_key=True, autoincrement=True)
    dtype: Mapped[str] = mapped_column("C_DTYPE", String(31), nullable=False)

    value: Mapped[Optional[str]] = mapped_column("C_VALUE", String(255), nullable=True)
    bin_value: Mapped[Optional[bytes]] = mapped_column("C_BINVALUE", LargeBinary, nullable=True)
    float_value: Mapped[Optional[float]] = mapped_column("C_FLOAT_VALUE", Float, nullable=True)
    description: Mapped[Optional[str]] = mapped_column("C_DESCRIPTION", Text, nullable=True)
    minimum: Mapped[int] = mapped_column("C_MINIMUM", Integer, nullable=False, default=0)
    maximum: Mapped[int] = mapped_column("C_MAXIMUM", Integer, nullable=False, default=0)
    from_file: Mapped[bool] = mapped_column("C_FROM_FILE", Boolean, nullable=False, default=True)
    version: Mapped[int] = mapped_column("C_VERSION", Integer, nullable=False)

    __mapper_args__ = {
        "polymorphic_on": dtype,
        "polymorphic_abstract": True,
        "with_polymorphic": "*",
        "version_id_col": version,
        "version_id_generator": _next_version,
    }

    def __init__(self, **kwargs):
        """
        Initialize with Python-level defaults.

        Defaults are applied to transient instances too, not only on insert.
        """
        kwargs.setdefault("minimum", 0)
        kwargs.setdefault("maximum", 0)
        kwargs.setdefault("from_file", True)
        super().__init__(**kwargs)

    def is_new(self) -> bool:
        """True as long as the store has not assigned an id."""
        return self.id is None

    def get_type(self) -> PropertyScope:
        """Return the fixed scope of the concrete preference class."""
        raise NotImplementedError

    def _get_fields(self) -> tuple:
        """Return the identity fields of the preference."""
        raise NotImplementedError

    def get_pref_key(self) -> PreferenceKey:
        """Return the PreferenceKey of this preference."""
        raise NotImplementedError

    def get_properties_as_string(self) -> str:
        """
        Return identity, value, description, float value and bounds as one string.

        Meant for logging only, e.g. "{USER,bob,theme},dark,<null>,<null>,0,0".
        """
        fields = "{" + ",".join(_render(field) for field in self._get_fields()) + "}"
        values = (self.value, self.description, self.float_value, self.minimum, self.maximum)
        return ",".join([fields] + [_render(v) for v in values])

    def _value_fields(self) -> tuple:
        return (
            self.bin_value,
            self.description,
            self.float_value,
            self.from_file,
            self.maximum,
            self.minimum,
            self.value,
            self.version,
        )

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, AbstractPreference):
            return NotImplemented
        if type(self) is not type(other):
            return False
        return self._value_fields() == other._value_fields()

    def __hash__(self) -> int:
        return hash(self._value_fields())

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id}, {self.get_properties_as_string()})>"


class _KeyedPreference:
    """
    Identity equality for concrete preferences.

    Two preferences are equal when their PreferenceKeys are equal; value
    fields and the surrogate id are ignored.
    """

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, AbstractPreference):
            return NotImplemented
        if type(self) is not type(other):
            return False
        return self.get_pref_key() == other.get_pref_key()

    def __hash__(self) -> int:
        return hash(self.get_pref_key())


class ApplicationPreference(_KeyedPreference, AbstractPreference):
    """
    Preference valid for the whole application.

    Identified by its key only.
    """

    __tablename__ = "COR_APP_PREFERENCE"
    __table_args__ = (
        UniqueConstraint("C_TYPE", "C_KEY", name="UQ_APP_PREFERENCE"),
    )
    __mapper_args__ = {"polymorphic_identity": "ApplicationPreference"}

    NQ_FIND_ALL = "ApplicationPreference" + AbstractPreference.FIND_ALL

    id: Mapped[int] = mapped_column("C_ID", ForeignKey("COR_PREFERENCE.C_ID", ondelete="CASCADE"), primary_key=True)
    type: Mapped[PropertyScope] = mapped_column("C_TYPE", _scope_column(), nullable=False)
    key: Mapped[str] = mapped_column("C_KEY", String(255), nullable=False)

    def __init__(self, key: str = _UNSET, **kwargs):
        """
        Create an ApplicationPreference.

        Args:
            key: Key of the preference; omit it only for an empty binding instance

        Raises:
            InvalidPreferenceError: key is None or blank
        """
        if key is not _UNSET:
            kwargs["key"] = _require_text(key, "Not allowed to create an ApplicationPreference with an empty key")
        kwargs["type"] = PropertyScope.APPLICATION
        super().__init__(**kwargs)

    def get_type(self) -> PropertyScope:
        return PropertyScope.APPLICATION

    def _get_fields(self) -> tuple:
        return (self.get_type(), self.key)

    def get_pref_key(self) -> PreferenceKey:
        return PreferenceKey(self.get_type(), None, self.key)


class _OwnedPreference(_KeyedPreference):
    """Shared constructor for preferences identified by owner and key."""

    def __init__(self, owner: str = _UNSET, key: str = _UNSET, **kwargs):
        if owner is not _UNSET or key is not _UNSET:
            name = type(self).__name__
            kwargs["owner"] = _require_text(owner, f"Not allowed to create an {name} with an empty owner")
            kwargs["key"] = _require_text(key, f"Not allowed to create an {name} with an empty key")
        kwargs["type"] = self.get_type()
        super().__init__(**kwargs)

    def _get_fields(self) -> tuple:
        return (self.get_type(), self.owner, self.key)

    def get_pref_key(self) -> PreferenceKey:
        return PreferenceKey(self.get_type(), self.owner, self.key)


class ModulePreference(_OwnedPreference, AbstractPreference):
    """Preference of a single application module, owned by the module name."""

    __tablename__ = "COR_MODULE_PREFERENCE"
    __table_args__ = (
        UniqueConstraint("C_TYPE", "C_OWNER", "C_KEY", name="UQ_MODULE_PREFERENCE"),
    )
    __mapper_args__ = {"polymorphic_identity": "ModulePreference"}

    NQ_FIND_ALL = "ModulePreference" + AbstractPreference.FIND_ALL
    NQ_FIND_BY_OWNER = "ModulePreference" + AbstractPreference.FIND_BY_OWNER

    id: Mapped[int] = mapped_column("C_ID", ForeignKey("COR_PREFERENCE.C_ID", ondelete="CASCADE"), primary_key=True)
    type: Mapped[PropertyScope] = mapped_column("C_TYPE", _scope_column(), nullable=False)
    owner: Mapped[str] = mapped_column("C_OWNER", String(255), nullable=False)
    key: Mapped[str] = mapped_column("C_KEY", String(255), nullable=False)

    def get_type(self) -> PropertyScope:
        return PropertyScope.MODULE


class RolePreference(_OwnedPreference, AbstractPreference):
    """Preference assigned to a role, owned by the role name."""

    __tablename__ = "COR_ROLE_PREFERENCE"
    __table_args__ = (
        UniqueConstraint("C_TYPE", "C_OWNER", "C_KEY", name="UQ_ROLE_PREFERENCE"),
    )
    __mapper_args__ = {"polymorphic_identity": "RolePreference"}

    NQ_FIND_ALL = "RolePreference" + AbstractPreference.FIND_ALL
    NQ_FIND_BY_OWNER = "RolePreference" + AbstractPreference.FIND_BY_OWNER

    id: Mapped[int] = mapped_column("C_ID", ForeignKey("COR_PREFERENCE.C_ID", ondelete="CASCADE"), primary_key=True)
    type: Mapped[PropertyScope] = mapped_column("C_TYPE", _scope_column(), nullable=False)
    owner: Mapped[str] = mapped_column("C_OWNER", String(255), nullable=False)
    key: Mapped[str] = mapped_column("C_KEY", String(255), nullable=False)

    def get_type(self) -> PropertyScope:
        return PropertyScope.ROLE


class UserPreference(_OwnedPreference, AbstractPreference):
    """
    Preference of a single user.

    The owner is the username. (type, owner, key) is unique across all
    user preferences.
    """

    __tablename__ = "COR_USER_PREFERENCE"
    __table_args__ = (
        UniqueConstraint("C_TYPE", "C_OWNER", "C_KEY", name="UQ_USER_PREFERENCE"),
    )
    __mapper_args__ = {"polymorphic_identity": "UserPreference"}

    NQ_FIND_ALL = "UserPreference" + AbstractPreference.FIND_ALL
    NQ_FIND_BY_OWNER = "UserPreference" + AbstractPreference.FIND_BY_OWNER

    id: Mapped[int] = mapped_column("C_ID", ForeignKey("COR_PREFERENCE.C_ID", ondelete="CASCADE"), primary_key=True)
    type: Mapped[PropertyScope] = mapped_column("C_TYPE", _scope_column(), nullable=False)
    owner: Mapped[str] = mapped_column("C_OWNER", String(255), nullable=False)
    key: Mapped[str] = mapped_column("C_KEY", String(255), nullable=False)

    def get_type(self) -> PropertyScope:
        return PropertyScope.USER
