"""Connectivity and schema report for GET ?table=test."""

import logging
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from ..database.init_db import missing_tables
from ..database.models import Game, PlayerGameStat
from .results import Ok, Result, service_boundary

logger = logging.getLogger(__name__)


@service_boundary("Database report")
def database_report(session: Session) -> Result[dict[str, Any]]:
    """Describe whether the store is reachable, its tables exist, and how full it is.

    An unreachable store is reported as data rather than as an error, so the
    dashboard can show it next to its other status information.
    """
    try:
        missing = missing_tables(session.get_bind())
    except OperationalError as e:
        logger.warning(f"Database connection check failed: {e}")
        return Ok(
            {
                "db_status": "connection_failed",
                "message": "Could not connect to the database.",
                "note": "The dashboard can still attempt to seed data once it is reachable.",
            }
        )

    status: dict[str, Any] = {"database_connection": "Connected successfully"}
    if missing:
        status["tables"] = "Missing tables: " + ", ".join(missing)
        status["solution"] = "Create the required tables or run the initialization."
        return Ok(status)

    status["tables"] = "All required tables exist"
    status["records"] = {
        "games": session.scalar(select(func.count()).select_from(Game)),
        "players": session.scalar(select(func.count()).select_from(PlayerGameStat)),
    }
    return Ok(status)
