"""
Base repository with standardized CRUD operations and storage error translation.

Repositories never commit: the owning service decides the transaction
boundary. Every SQLAlchemy failure leaves a repository as a StorageError
(or DuplicateEntryError for unique-constraint violations).
"""

from contextlib import contextmanager
from typing import Any, Generic, Iterator, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hotel_backoffice.core.exceptions import handle_database_exception
from hotel_backoffice.core.logging import get_logger
from hotel_backoffice.models.base import Base

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository over one mapped model.
    """

    def __init__(self, model: Type[ModelType], session: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Database session
        """
        self.model = model
        self.session = session

    @contextmanager
    def storage_errors(self, operation: str) -> Iterator[None]:
        """Translate store failures raised inside the block."""
        try:
            yield
        except SQLAlchemyError as e:
            logger.error(
                f"{self.model.__name__} {operation} failed: {e}",
                extra={"model": self.model.__name__, "operation": operation},
            )
            raise handle_database_exception(e, operation=operation) from e

    # ==================== Read Operations ====================

    def get_by_id(self, entity_id: Any) -> Optional[ModelType]:
        with self.storage_errors("get_by_id"):
            return self.session.get(self.model, entity_id)

    def get_for_update(self, entity_id: Any) -> Optional[ModelType]:
        """
        Load the row with a row-level write lock held until the transaction ends.

        The row is re-read from the store even if it is already in the
        session, so callers see the latest committed state.
        """
        with self.storage_errors("get_for_update"):
            return self.session.get(
                self.model,
                entity_id,
                with_for_update=True,
                populate_existing=True,
            )

    # ==================== Write Operations ====================

    def add(self, entity: ModelType) -> ModelType:
        """Stage a new entity and flush it so defaults and ids are populated."""
        with self.storage_errors("create"):
            self.session.add(entity)
            self.session.flush()
        logger.debug(f"Created {self.model.__name__} with id: {entity.id}")
        return entity

    def update(self, entity: ModelType, **changes: Any) -> ModelType:
        with self.storage_errors("update"):
            for field, value in changes.items():
                setattr(entity, field, value)
            self.session.flush()
        return entity

    def delete(self, entity: ModelType) -> None:
        with self.storage_errors("delete"):
            self.session.delete(entity)
            self.session.flush()
