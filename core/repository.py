"""Repository pattern base class for database operations.

Provides the row-level operations shared by every SmartDiet table so the
per-entity repositories only add their own queries and the mapping between
ORM rows and domain entities.
"""

from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy import delete
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

T = TypeVar('T')


class BaseRepository(Generic[T]):
    """Generic repository bound to one ORM model and one session.

    Repositories never commit; the caller owns the transaction (see
    `database.database.session_scope`).

    Attributes:
        model: SQLAlchemy model class to operate on.
        session: Database session for executing queries.
    """

    def __init__(self, model: Type[T], session: Session):
        """Initialize repository with model and session.

        Args:
            model: SQLAlchemy model class.
            session: Database session.
        """
        self.model = model
        self.session = session

    def add(self, obj: T) -> T:
        """Stage a new row and flush it so constraint errors surface here.

        Args:
            obj: Model instance to persist.

        Returns:
            The same instance, now attached to the session.
        """
        self.session.add(obj)
        self.session.flush()
        return obj

    def get_by_id(self, id: Any) -> Optional[T]:
        """Retrieve a row by its primary key.

        Args:
            id: Primary key value.

        Returns:
            Model instance or None if not found.
        """
        return self.session.get(self.model, id)

    def delete_where(self, *where: ColumnElement) -> int:
        """Delete every row matching all ``where`` clauses.

        Returns:
            Number of rows removed.
        """
        result = self.session.execute(delete(self.model).where(*where))
        return result.rowcount
