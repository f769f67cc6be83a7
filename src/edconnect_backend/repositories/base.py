"""
Entity store primitives shared by every repository.

Repositories offer keyed CRUD and foreign-key listings over a SQLAlchemy
session and hold no authorization logic. They flush but never commit: the
caller owns the transaction, so several repository calls succeed or fail
together.
"""

from abc import ABC
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

T = TypeVar('T')


class RepositoryError(Exception):
    """Base class for entity store failures."""
    pass


class NotFoundError(RepositoryError):
    """An id lookup found nothing."""

    def __init__(self, entity_type: str, entity_id: Any):
        super().__init__(f"No {entity_type} with id {entity_id}")
        self.entity_type = entity_type
        self.entity_id = entity_id


class DuplicateError(RepositoryError):
    """A unique key is already taken."""

    def __init__(self, entity_type: str, criteria: Dict[str, Any]):
        super().__init__(f"{entity_type} {criteria} is already taken")
        self.entity_type = entity_type
        self.criteria = criteria


class ConstraintViolationError(RepositoryError):
    """A foreign key or entity invariant does not hold."""
    pass


class BaseRepository(ABC, Generic[T]):
    """Keyed access to one model class within the caller's session."""

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model

    def _query(self, **criteria) -> Query:
        query = self.db.query(self.model)
        for column, value in criteria.items():
            query = query.filter(getattr(self.model, column) == value)
        return query

    def get_by_id(self, entity_id: Any) -> T:
        """
        Raises:
            NotFoundError: If no row has ``entity_id``
        """
        entity = self.get_by_id_optional(entity_id)
        if entity is None:
            raise NotFoundError(self.model.__name__, entity_id)
        return entity

    def get_by_id_optional(self, entity_id: Any) -> Optional[T]:
        if entity_id is None:
            return None
        return self.db.get(self.model, entity_id)

    def get_for_update(self, entity_id: Any) -> T:
        """
        Load a row for a read-modify-write, locking it until the transaction
        ends where the database supports row locks.

        Raises:
            NotFoundError: If no row has ``entity_id``
        """
        entity = (
            self._query(id=entity_id)
            .with_for_update()
            .populate_existing()
            .first()
        )
        if entity is None:
            raise NotFoundError(self.model.__name__, entity_id)
        return entity

    def list(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        order_by: Any = None,
        **filters
    ) -> List[T]:
        """
        Rows matching ``filters`` (column equality).

        Args:
            limit: Maximum number of rows
            offset: Number of rows to skip
            order_by: Column or list of columns to order by
        """
        query = self._query(**filters)
        if order_by is not None:
            query = query.order_by(*(order_by if isinstance(order_by, (list, tuple)) else [order_by]))
        if offset is not None:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def find_one_by(self, **criteria) -> Optional[T]:
        return self._query(**criteria).first()

    def count(self, **criteria) -> int:
        return self._query(**criteria).count()

    def exists(self, entity_id: Any) -> bool:
        return self.get_by_id_optional(entity_id) is not None

    def create(self, entity: T) -> T:
        """
        Insert ``entity`` and flush so generated ids are available.

        Raises:
            DuplicateError: If the row collides with a unique key

        After either error the session needs a rollback.
        """
        self.db.add(entity)
        try:
            self.db.flush()
        except IntegrityError as e:
            raise DuplicateError(self.model.__name__, {"id": getattr(entity, "id", None)}) from e
        except SQLAlchemyError as e:
            raise RepositoryError(f"Could not insert {self.model.__name__}: {e}") from e
        return entity

    def update(self, entity_id: Any, updates: Dict[str, Any]) -> T:
        """
        Apply ``updates`` to the locked row and flush.

        Raises:
            NotFoundError: If no row has ``entity_id``
        """
        entity = self.get_for_update(entity_id)
        for column, value in updates.items():
            setattr(entity, column, value)
        try:
            self.db.flush()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Could not update {self.model.__name__} {entity_id}: {e}") from e
        return entity

    def delete(self, entity_id: Any) -> None:
        """
        Delete a row, including the children its relationships cascade to.

        Raises:
            NotFoundError: If no row has ``entity_id``
        """
        self.db.delete(self.get_by_id(entity_id))
        try:
            self.db.flush()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Could not delete {self.model.__name__} {entity_id}: {e}") from e

    def require_reference(self, model: Type[Any], entity_id: Any, **expected) -> Any:
        """
        Resolve a foreign key to an existing row of ``model`` whose attributes
        equal ``expected``.

        Raises:
            ConstraintViolationError: If the key is dangling or points at a
                row of the wrong kind
        """
        referenced = self.db.get(model, entity_id) if entity_id is not None else None
        if referenced is None:
            raise ConstraintViolationError(
                f"{self.model.__name__} references missing {model.__name__} {entity_id}"
            )
        for attribute, value in expected.items():
            actual = getattr(referenced, attribute)
            if actual != value:
                raise ConstraintViolationError(
                    f"{self.model.__name__} references {model.__name__} {entity_id} "
                    f"with {attribute}={actual!s}, expected {value!s}"
                )
        return referenced

    def flush(self) -> None:
        self.db.flush()
