"""
Database engine, session factory and schema initialization.
"""

from hotel_market.db.base import Base, import_models
from hotel_market.db.init_db import init_db
from hotel_market.db.session import SessionLocal, build_engine, build_session_factory, engine

__all__ = [
    "Base",
    "import_models",
    "init_db",
    "SessionLocal",
    "build_engine",
    "build_session_factory",
    "engine",
]
