"""
Base service class providing common functionality for all services.
"""

import time
from abc import ABC
from contextlib import contextmanager
from functools import wraps
from typing import Generic, Iterator, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hotel_backoffice.core.exceptions import BaseAppException, handle_database_exception
from hotel_backoffice.core.logging import get_logger
from hotel_backoffice.repositories.base_repository import BaseRepository

TRepo = TypeVar("TRepo", bound=BaseRepository)

logger = get_logger(__name__)


def track_performance(operation_name: str):
    """Decorator to track operation performance."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except BaseAppException as e:
                duration = time.perf_counter() - start_time
                logger.info(
                    f"Operation '{operation_name}' rejected after {duration:.3f}s: {e.message}",
                    extra={
                        "operation": operation_name,
                        "duration_seconds": duration,
                        "error_code": e.error_code.value,
                    },
                )
                raise
            except Exception as e:
                duration = time.perf_counter() - start_time
                logger.error(
                    f"Operation '{operation_name}' failed after {duration:.3f}s: {str(e)}",
                    extra={
                        "operation": operation_name,
                        "duration_seconds": duration,
                        "error": str(e),
                    },
                    exc_info=True,
                )
                raise
            duration = time.perf_counter() - start_time
            logger.info(
                f"Operation '{operation_name}' completed in {duration:.3f}s",
                extra={"operation": operation_name, "duration_seconds": duration},
            )
            return result
        return wrapper
    return decorator


class BaseService(ABC, Generic[TRepo]):
    """
    Base service with common behaviors:
    - Shared logger and db session
    - Transaction management utilities

    Failures are raised as application exceptions; a failed transaction is
    always rolled back before the exception leaves the service.
    """

    def __init__(self, repository: TRepo, db_session: Session):
        """
        Initialize base service.

        Args:
            repository: Primary repository for data access
            db_session: SQLAlchemy database session
        """
        self.repository: TRepo = repository
        self.db: Session = db_session
        self._logger = get_logger(
            f"services.{self.__class__.__name__}", service=self.__class__.__name__
        )

    # -------------------------------------------------------------------------
    # Transaction Management
    # -------------------------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Context manager for database transactions with automatic rollback.

        Example:
            with self.transaction():
                self.repository.add(entity)
                # commit on success, rollback on exception
        """
        try:
            yield self.db
            self._commit()
        except BaseAppException:
            self._rollback()
            raise
        except SQLAlchemyError as e:
            self._rollback()
            self._logger.error(f"Transaction failed: {e}", exc_info=True)
            raise handle_database_exception(e, operation="commit") from e
        except Exception as e:
            self._rollback()
            self._logger.error(f"Transaction failed: {e}", exc_info=True)
            raise

    def _commit(self) -> None:
        self.db.commit()
        self._logger.debug("Transaction committed successfully")

    def _rollback(self) -> None:
        """Rollback the current transaction, suppressing rollback errors."""
        try:
            self.db.rollback()
            self._logger.debug("Transaction rolled back")
        except SQLAlchemyError as e:
            # Log but don't raise - rollback errors should not mask original error
            self._logger.warning(f"Rollback failed: {e}")
