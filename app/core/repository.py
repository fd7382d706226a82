"""Base repository pattern implementation.

This module provides a generic repository pattern that is used
as a base for domain-specific repositories.
"""

from typing import Generic, TypeVar, cast
from uuid import UUID

from sqlalchemy.orm import Session

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType]):
    """Generic repository with common CRUD operations.

    Domain-specific repositories inherit from this class and add their own
    queries, e.g. ``UserRepository.find_by_email``.
    """

    def __init__(self, db: Session, model: type[ModelType]):
        """Initialize repository with database session and model class.

        Args:
            db: SQLAlchemy session.
            model: The model class this repository operates on.
        """
        self.db = db
        self.model = model

    def get_by_id(self, entity_id: UUID) -> ModelType | None:
        """Get a single entity by ID.

        Args:
            entity_id: The UUID of the entity.

        Returns:
            The entity if found, None otherwise.
        """
        return cast(ModelType | None, self.db.get(self.model, entity_id))

    def add(self, instance: ModelType) -> ModelType:
        """Persist a new entity and reload its server-side defaults."""
        self.db.add(instance)
        self.db.commit()
        self.db.refresh(instance)
        return instance

    def update(self, instance: ModelType, **kwargs: object) -> ModelType:
        """Update the given attributes of an existing entity.

        Args:
            instance: The entity to update.
            **kwargs: Attributes to update. Unknown attributes are ignored.

        Returns:
            The updated entity.
        """
        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)
        self.db.commit()
        self.db.refresh(instance)
        return instance

    def delete(self, instance: ModelType) -> None:
        """Delete an entity.

        Args:
            instance: The entity to delete.
        """
        self.db.delete(instance)
        self.db.commit()
