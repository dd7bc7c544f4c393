# hotel_backoffice/db/init_db.py
"""Database initialization utilities."""
from typing import Optional

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from hotel_backoffice.core.logging import get_logger
from hotel_backoffice.db.base import Base, import_models

logger = get_logger(__name__)


def _resolve_engine(bind: Optional[Engine]) -> Engine:
    if bind is not None:
        return bind
    from hotel_backoffice.db.session import engine
    return engine


def init_db(bind: Optional[Engine] = None) -> None:
    """
    Create all tables that do not exist yet.

    Note: This is suitable for development/testing only.
    For production, manage the schema with migrations instead.
    """
    engine = _resolve_engine(bind)
    import_models()

    existing_tables = set(inspect(engine).get_table_names())
    Base.metadata.create_all(bind=engine)
    created = sorted(set(Base.metadata.tables) - existing_tables)

    if created:
        logger.info("Database tables created", extra={"tables": created})
    else:
        logger.info(f"Database already initialized with {len(existing_tables)} tables")


def drop_db(bind: Optional[Engine] = None) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data! Only for development/testing purposes.
    """
    import_models()
    Base.metadata.drop_all(bind=_resolve_engine(bind))
    logger.warning("All database tables dropped")
