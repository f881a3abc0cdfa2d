"""
Base repository pattern implementation.

Repositories are the entity store boundary: every read and write the
query engine performs against the relational database goes through
one of these classes.
"""

from typing import TypeVar, Generic, List, Optional, Dict, Any, Type, Iterable
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy import inspect

# Type variable for generic entity type
T = TypeVar('T')


class RepositoryError(Exception):
    """Base exception for repository operations."""
    pass


class NotFoundError(RepositoryError):
    """Exception raised when entity is not found."""

    def __init__(self, entity_type: str, entity_id: Any):
        super().__init__(f"{entity_type} with id {entity_id} not found")
        self.entity_type = entity_type
        self.entity_id = entity_id


class DuplicateError(RepositoryError):
    """Exception raised when attempting to create duplicate entity."""

    def __init__(self, entity_type: str, criteria: Dict[str, Any]):
        super().__init__(f"{entity_type} already exists with criteria: {criteria}")
        self.entity_type = entity_type
        self.criteria = criteria


class ConstraintError(RepositoryError):
    """Integrity violation other than a duplicate: NOT NULL, foreign key, check."""
    pass


def is_unique_violation(error: IntegrityError) -> bool:
    orig = getattr(error, "orig", None)
    if type(orig).__name__ == "UniqueViolation":
        return True
    return "unique constraint" in str(orig if orig is not None else error).lower()


def integrity_message(error: IntegrityError) -> str:
    """First line of the driver message, plus the DETAIL line when Postgres sends one."""
    error_msg = str(error.orig) if getattr(error, "orig", None) is not None else str(error)
    main_error = error_msg.split("\n")[0]
    if "DETAIL:" in error_msg:
        detail_part = error_msg.split("DETAIL:")[1].split("\n")[0].strip()
        return f"{main_error}. {detail_part}"
    return main_error


class BaseRepository(Generic[T]):
    """
    Base repository providing common database operations.

    Subclasses name the relationships that make up the "eager" variant
    of a fetch in ``eager_relationships``.
    """

    eager_relationships: tuple = ()

    def __init__(self, db: Session, model: Type[T]):
        """
        Initialize repository with database session and model class.

        Args:
            db: SQLAlchemy database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    def _eager_options(self) -> list:
        return [selectinload(getattr(self.model, name)) for name in self.eager_relationships]

    def _query(self, with_relationships: bool = False):
        query = self.db.query(self.model)
        if with_relationships and self.eager_relationships:
            query = query.options(*self._eager_options())
        return query

    def get_by_id(self, entity_id: Any) -> T:
        """
        Get entity by ID.

        Raises:
            NotFoundError: If entity not found
        """
        entity = self.get_by_id_optional(entity_id)
        if entity is None:
            raise NotFoundError(self.model.__name__, entity_id)
        return entity

    def get_by_id_optional(self, entity_id: Any) -> Optional[T]:
        """Get entity by ID, returning None if not found."""
        return self._query().filter(self.model.id == entity_id).first()

    def get_with_relationships(self, entity_id: Any) -> Optional[T]:
        """Get entity by ID with its relationships loaded, or None."""
        return self._query(with_relationships=True).filter(self.model.id == entity_id).first()

    def list(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        with_relationships: bool = False,
    ) -> List[T]:
        """
        List entities with optional pagination.

        Args:
            limit: Maximum number of results
            offset: Number of results to skip
            with_relationships: Eager-load ``eager_relationships``

        Returns:
            List of entities ordered by id
        """
        query = self._query(with_relationships).order_by(self.model.id)
        return self._paginate(query, limit, offset).all()

    def list_with_relationships(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[T]:
        return self.list(limit=limit, offset=offset, with_relationships=True)

    def search(self, field: str, text: str) -> List[T]:
        """
        Substring match on a text column.

        The text is always sent as a bound parameter
        (``LIKE '%' || :param || '%'``).
        """
        column = getattr(self.model, field)
        return (
            self._query()
            .filter(column.contains(text))
            .order_by(self.model.id)
            .all()
        )

    def assign(self, entity: T, values: Dict[str, Any]) -> T:
        """Copy ``values`` onto mapped attributes of ``entity``."""
        for key, value in values.items():
            if hasattr(entity, key):
                setattr(entity, key, value)
        return entity

    def create(self, values: Dict[str, Any]) -> T:
        """
        Create a new entity from a dictionary of column values.

        Returns:
            Created entity with updated fields (e.g., ID)

        Raises:
            DuplicateError: If entity violates unique constraints
            RepositoryError: If database operation fails
        """
        entity = self.assign(self.model(), values)
        try:
            self.db.add(entity)
            self.db.commit()
            self.db.refresh(entity)
            return entity
        except IntegrityError as e:
            self.db.rollback()
            if not is_unique_violation(e):
                raise ConstraintError(integrity_message(e))
            raise DuplicateError(
                self.model.__name__,
                self._extract_entity_dict(entity)
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Failed to create {self.model.__name__}: {str(e)}")

    def update(self, entity_id: Any, updates: Dict[str, Any]) -> T:
        """
        Update an existing entity.

        Raises:
            NotFoundError: If entity not found
            RepositoryError: If update fails
        """
        entity = self.get_by_id(entity_id)

        try:
            self.assign(entity, updates)
            self.db.commit()
            self.db.refresh(entity)
            return entity
        except IntegrityError as e:
            self.db.rollback()
            if not is_unique_violation(e):
                raise ConstraintError(integrity_message(e))
            raise DuplicateError(self.model.__name__, updates)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Failed to update {self.model.__name__}: {str(e)}")

    def delete(self, entity_id: Any) -> bool:
        """
        Delete an entity by ID.

        Raises:
            NotFoundError: If entity not found
            RepositoryError: If deletion fails
        """
        entity = self.get_by_id(entity_id)

        try:
            self.db.delete(entity)
            self.db.commit()
            return True
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Failed to delete {self.model.__name__}: {str(e)}")

    def count(self) -> int:
        return self._query().count()

    @staticmethod
    def _paginate(query, limit: Optional[int], offset: Optional[int]):
        if offset is not None:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return query

    def _extract_entity_dict(self, entity: T) -> Dict[str, Any]:
        mapper = inspect(type(entity))
        return {
            column.key: getattr(entity, column.key, None)
            for column in mapper.column_attrs
        }


def ids_or_empty(values: Optional[Iterable[Any]]) -> List[Any]:
    return list(values) if values else []
