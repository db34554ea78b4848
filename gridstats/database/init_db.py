"""Database initialization helpers.

Database Lifecycle Operations:
- create_database(): Initialize schema from SQLAlchemy models
- missing_tables(): Which of the expected tables are absent

Each function takes an optional engine so tests and the API's "test" report can
point them at a different database than the configured one.

Idempotent Operations: create_all() safely handles existing tables.
"""

import logging  # For operation tracking and error reporting
from pathlib import Path

from sqlalchemy import inspect
from sqlalchemy.engine import Engine, make_url

from .connection import engine as default_engine  # Pre-configured database engine
from .models import Base  # Base class containing all model metadata

logger = logging.getLogger(__name__)

REQUIRED_TABLES = ("games", "players")


def _ensure_sqlite_directory(engine: Engine) -> None:
    """Create the parent directory of a file-based SQLite database."""
    url = make_url(str(engine.url))
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)


def create_database(engine: Engine | None = None):
    """Create database schema and all tables from SQLAlchemy models.

    This function:
    1. Ensures the database directory exists (for SQLite)
    2. Creates all tables defined in models.py
    3. Is idempotent - safe to run multiple times

    Exception Handling: We catch all exceptions, log them with full
    stack traces, then re-raise so the caller knows something failed.
    """
    engine = engine or default_engine
    try:
        _ensure_sqlite_directory(engine)
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully")
    except Exception:
        logger.exception("Failed to create database")
        raise


def missing_tables(engine: Engine | None = None) -> list[str]:
    """Return the required tables that do not exist yet."""
    engine = engine or default_engine
    existing = set(inspect(engine).get_table_names())
    return [table for table in REQUIRED_TABLES if table not in existing]


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_database()
