"""Database connection and session management using SQLAlchemy.

This module implements the core database connectivity patterns for the application.
It handles:
1. Database engine creation
2. Session factory configuration for ORM operations
3. Multiple session management patterns for different use cases
4. Foreign key enforcement for SQLite connections

Key Concepts for Beginners:

Database Engine: The core interface to the database. Think of it as the
"connection factory" that manages the actual database connections.

Session: A workspace for ORM operations. All database operations (queries,
inserts, updates) happen within a session context.

Context Managers: Python's "with" statement pattern that ensures proper
resource cleanup even if errors occur.

Session Patterns Provided:
1. get_session_context(): Context manager for with statements (CLI)
2. get_db(): FastAPI dependency injection pattern
"""

import sqlite3
from collections.abc import Generator  # Type hint for generator functions
from contextlib import contextmanager  # Decorator for context manager functions

from sqlalchemy import create_engine, event  # Database engine factory and hooks
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker  # ORM session management

from ..config.settings import settings  # Application configuration


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """Turn on foreign key enforcement for every new SQLite connection.

    SQLite ships with foreign keys disabled, which would silently break the
    ON DELETE CASCADE from games to player rows.
    """
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(database_url: str, echo: bool = False, **kwargs) -> Engine:
    """Create an engine for the given URL.

    SQLite connections are shared between FastAPI's worker threads, so the
    same-thread check is disabled for them.
    """
    connect_args = kwargs.pop("connect_args", {})
    if database_url.startswith("sqlite"):
        connect_args.setdefault("check_same_thread", False)
    return create_engine(
        database_url,
        echo=echo,  # Log all SQL queries (useful for debugging)
        pool_pre_ping=True,  # Test connections before use (handles disconnects)
        connect_args=connect_args,
        **kwargs,
    )


# Create the database engine - the core interface to our database
# This is created once at module load time and reused throughout the application
engine = build_engine(settings.database_url, echo=settings.database_echo)

# Create session factory - a class that produces database sessions
SessionLocal = sessionmaker(
    autocommit=False,  # Require explicit session.commit() for transactions
    autoflush=False,  # Don't automatically flush changes before queries
    bind=engine,  # Associate with our database engine
)


@contextmanager
def get_session_context() -> Generator[Session, None, None]:
    """Context manager wrapper for database sessions.

    Usage:
        with get_session_context() as session:
            session.add(new_game)
            # Automatically committed and closed when exiting 'with' block
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency for database sessions.

    Unlike get_session_context(), this does NOT commit automatically; the service
    functions commit or roll back their own transactions. It only ensures the
    session is closed after the request completes.

    Usage in FastAPI routes:
        @router.get("/api")
        def handle(db: Session = Depends(get_db)):
            ...
    """
    session = SessionLocal()  # Create session for this request
    try:
        yield session  # Provide session to FastAPI route handler
    finally:
        session.close()  # Cleanup session after request completes
