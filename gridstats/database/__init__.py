"""Database package initialization."""

from .connection import SessionLocal, build_engine, engine, get_db, get_session_context
from .models import Base, Game, PlayerGameStat

__all__ = [
    "Base",
    "Game",
    "PlayerGameStat",
    "SessionLocal",
    "build_engine",
    "engine",
    "get_db",
    "get_session_context",
]
