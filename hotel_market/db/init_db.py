# hotel_market/db/init_db.py
"""Database initialization utilities."""
from typing import Optional

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from hotel_market.core.logging import get_logger
from hotel_market.db.base import Base, import_models

logger = get_logger(__name__)


def init_db(bind: Optional[Engine] = None) -> None:
    """
    Create all listing tables that do not exist yet.

    Note: suitable for development and tests; schema migrations are
    out of scope.
    """
    if bind is None:
        from hotel_market.db.session import engine as bind

    import_models()

    existing_tables = set(inspect(bind).get_table_names())
    missing = [t for t in Base.metadata.sorted_tables if t.name not in existing_tables]

    if not missing:
        logger.info(f"Database already initialized with {len(existing_tables)} tables")
        return

    Base.metadata.create_all(bind=bind, tables=missing)
    logger.info(f"Created tables: {', '.join(t.name for t in missing)}")

