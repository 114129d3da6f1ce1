"""Database session management."""
from typing import Any, Dict, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from hotel_market.config.settings import Settings, settings


def build_engine(config: Optional[Settings] = None, **overrides: Any) -> Engine:
    """
    Create an engine from settings.

    Pool sizing only applies to server databases; SQLite gets foreign
    key enforcement switched on so cascades behave as on PostgreSQL.
    """
    config = config or settings
    url = config.get_database_url()

    options: Dict[str, Any] = {
        "pool_pre_ping": True,
        "echo": config.DB_ECHO,
    }
    if config.is_sqlite():
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_size"] = config.DB_POOL_SIZE
        options["max_overflow"] = config.DB_POOL_OVERFLOW
    options.update(overrides)

    engine = create_engine(url, **options)

    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    return engine


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(bind=bind, autocommit=False, autoflush=False)


engine = build_engine()

# Create SessionLocal class
SessionLocal = build_session_factory(engine)

