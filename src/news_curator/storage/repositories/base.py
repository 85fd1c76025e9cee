"""
Generic repository with common CRUD operations.
"""

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel
from sqlalchemy import asc, desc
from sqlalchemy.orm import Session

ModelType = TypeVar("ModelType")
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class BaseRepository(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """Common data access for a single ORM model.

    Subclasses add model-specific queries and override ``create``/``update``
    when their schemas need transformation before persistence.
    """

    def __init__(self, session: Session, model: type[ModelType]) -> None:
        """Initialize repository with a database session.

        Args:
            session: SQLAlchemy Session instance
            model: ORM model class managed by this repository
        """
        self.session = session
        self.model = model

    def get_by_id(self, id: int) -> Optional[ModelType]:
        """Get a record by primary key."""
        return self.session.get(self.model, id)

    def list(
        self,
        limit: int = 100,
        offset: int = 0,
        order_by: str = "created_at",
        order_desc: bool = True,
        **filters: Any,
    ) -> list[ModelType]:
        """List records with equality filters and ordering.

        Args:
            limit: Maximum number of results
            offset: Number of results to skip
            order_by: Column to order by
            order_desc: Sort in descending order
            **filters: Column equality filters

        Returns:
            List of model instances
        """
        query = self.session.query(self.model).filter_by(**filters)

        column = getattr(self.model, order_by, None)
        if column is not None:
            direction = desc if order_desc else asc
            # id as secondary key keeps equal timestamps in a stable order
            query = query.order_by(direction(column), direction(self.model.id))

        return query.offset(offset).limit(limit).all()

    def count(self, **filters: Any) -> int:
        """Count records matching equality filters."""
        return self.session.query(self.model).filter_by(**filters).count()

    def delete(self, instance: ModelType) -> None:
        """Delete a record."""
        self.session.delete(instance)
        self.session.flush()
