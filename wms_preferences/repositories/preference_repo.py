"""
Preference repository.

SQLAlchemy implementation of PreferenceWriter. Lookups are resolved through
a fixed table of named queries, "<ClassName>.findAll" and
"<ClassName>.findByOwner", built with select().
"""

from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.orm import Session, SessionTransactionOrigin

from wms_preferences.exceptions import (
    PreferenceExistsError,
    TransactionRequiredError,
    WrongClassTypeError,
)
from wms_preferences.models.preference import (
    AbstractPreference,
    ApplicationPreference,
    ModulePreference,
    RolePreference,
    UserPreference,
)
from wms_preferences.models.preferences import Preferences
from wms_preferences.repositories.preference_dao import ANY_OWNER, PreferenceWriter
from wms_preferences.utils.logger import logger


T = TypeVar("T", bound=AbstractPreference)


def _find_all(clazz: Type[AbstractPreference]) -> Callable[[], Select]:
    return lambda: select(clazz).order_by(clazz.id)


def _find_by_owner(clazz: Type[AbstractPreference]) -> Callable[..., Select]:
    return lambda owner: select(clazz).where(clazz.owner == owner).order_by(clazz.id)


# ApplicationPreference has no owner and therefore no findByOwner query
NAMED_QUERIES: Dict[str, Callable[..., Select]] = {
    AbstractPreference.NQ_FIND_ALL: _find_all(AbstractPreference),
    ApplicationPreference.NQ_FIND_ALL: _find_all(ApplicationPreference),
    ModulePreference.NQ_FIND_ALL: _find_all(ModulePreference),
    ModulePreference.NQ_FIND_BY_OWNER: _find_by_owner(ModulePreference),
    RolePreference.NQ_FIND_ALL: _find_all(RolePreference),
    RolePreference.NQ_FIND_BY_OWNER: _find_by_owner(RolePreference),
    UserPreference.NQ_FIND_ALL: _find_all(UserPreference),
    UserPreference.NQ_FIND_BY_OWNER: _find_by_owner(UserPreference),
}


class PreferenceRepository(PreferenceWriter):
    """
    Repository for preference-related database operations.

    The session and its transaction belong to the caller. Write operations
    fail with TransactionRequiredError unless the caller began a transaction
    with Session.begin(); a transaction autobegun by a read does not count.
    Writes never commit or roll back themselves.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_key(self, id: int) -> Optional[AbstractPreference]:
        return self.db.get(AbstractPreference, id)

    def find_by_type(self, clazz: Type[T], owner: Optional[str] = ANY_OWNER) -> List[T]:
        if owner is ANY_OWNER:
            return self._run(self._query_name(clazz) + AbstractPreference.FIND_ALL)
        return self._run(self._query_name(clazz) + AbstractPreference.FIND_BY_OWNER, owner=owner)

    def find_all(self) -> List[AbstractPreference]:
        return self._run(AbstractPreference.NQ_FIND_ALL)

    def save(self, entity: T) -> T:
        """
        Save a preference.

        New entities are inserted first and then merged, existing ones are
        only merged. The session is flushed so the returned instance carries
        the stored id and version.

        Raises:
            TransactionRequiredError: No active transaction
            StaleDataError: The entity's version is older than the stored one
        """
        self._require_transaction("save")
        if entity.is_new():
            self.db.add(entity)
            self.db.flush()
        merged = self.db.merge(entity)
        self.db.flush()
        logger.debug(f"Saved preference {merged!r}")
        return merged

    def persist(self, entity: AbstractPreference) -> None:
        """
        Insert a new preference.

        Raises:
            TransactionRequiredError: No active transaction
            PreferenceExistsError: The entity already has an id
        """
        self._require_transaction("persist")
        if not entity.is_new():
            raise PreferenceExistsError(f"Preference with id {entity.id} is already persistent")
        self.db.add(entity)
        self.db.flush()
        logger.debug(f"Persisted preference {entity!r}")

    def remove(self, entity: AbstractPreference) -> None:
        """
        Delete a preference.

        An entity that is not attached to this session is merged first, so
        detached instances can be removed as well.

        Raises:
            TransactionRequiredError: No active transaction
        """
        self._require_transaction("remove")
        if entity in self.db:
            self.db.delete(entity)
        else:
            self.db.delete(self.db.merge(entity))
        self.db.flush()
        logger.debug(f"Removed preference with id {entity.id}")

    def _require_transaction(self, operation: str) -> None:
        # An autobegun transaction comes from an earlier read, not from the caller
        transaction = self.db.get_transaction()
        if transaction is None or transaction.origin is SessionTransactionOrigin.AUTOBEGIN:
            raise TransactionRequiredError(f"{operation}() requires an active transaction")

    def _query_name(self, clazz: type) -> str:
        if not Preferences.is_known_type(clazz):
            raise WrongClassTypeError(f"Type {clazz} not a valid Preferences type")
        return clazz.__name__

    def _run(self, query_name: str, **params: Any) -> list:
        try:
            builder = NAMED_QUERIES[query_name]
        except KeyError:
            raise WrongClassTypeError(f"No query named {query_name}") from None
        return list(self.db.scalars(builder(**params)).all())
