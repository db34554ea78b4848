"""Populate the record store from the seed data generator.

Two entry points:
- populate_initial_data(): seed only when the games table is empty (idempotent)
- regenerate_database(): wipe both tables and seed again (destructive)

Both run as a single transaction: either every game and player row lands, or
nothing changes. In particular a failed fetch during regeneration leaves the
existing data in place.

Descriptor Mapping:
- Games: game_date (ISO or M/D/YYYY; rows without a usable date are skipped),
  opponent (default ""), venue (default "Home"), niners_score / home_score and
  opponent_score (integers, default 0, negatives clamped to 0)
- Players: player_name (rows without one are skipped), touchdowns, yards,
  tackles (integers, default 0, negatives clamped to 0)

Roster Mode:
"shared" fetches one player batch and inserts it for every game; "per_game"
fetches a new batch for each game. The mode comes from settings.roster_mode
unless passed explicitly.
"""

import logging
from datetime import date, datetime
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from ..config.settings import settings
from ..database.init_db import create_database
from ..database.models import Game, PlayerGameStat
from ..ranking.rows import coerce_int
from ..services.results import Ok, Result, service_boundary
from .mockaroo_client import MockarooClient

logger = logging.getLogger(__name__)

DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%Y/%m/%d")


def parse_game_date(value: Any) -> date | None:
    """Parse the generator's date field, returning None when it is unusable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        return None
    text = str(value).strip()
    # Drop any time-of-day part ("2024-09-09T13:05:00", "2024-09-09 13:05")
    for separator in ("T", " "):
        if separator in text:
            text = text.split(separator, 1)[0]
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def _count(value: Any) -> int:
    return max(coerce_int(value), 0)


def map_game(descriptor: dict[str, Any]) -> dict[str, Any] | None:
    """Map a game descriptor to Game column values, or None to skip it."""
    game_date = parse_game_date(descriptor.get("game_date"))
    if game_date is None:
        logger.warning(f"Skipping game without a usable date: {descriptor!r}")
        return None
    home_score = descriptor.get("niners_score", descriptor.get("home_score"))
    return {
        "game_date": game_date,
        "opponent": str(descriptor.get("opponent") or "")[:100],
        "venue": str(descriptor.get("venue") or "Home")[:100],
        "home_score": _count(home_score),
        "opponent_score": _count(descriptor.get("opponent_score")),
    }


def map_player(descriptor: dict[str, Any]) -> dict[str, Any] | None:
    """Map a player descriptor to PlayerGameStat column values, or None to skip it."""
    name = descriptor.get("player_name")
    if not name:
        return None
    return {
        "player_name": str(name)[:100],
        "touchdowns": _count(descriptor.get("touchdowns")),
        "yards": _count(descriptor.get("yards")),
        "tackles": _count(descriptor.get("tackles")),
    }


def import_games(
    session: Session,
    client: MockarooClient,
    game_descriptors: list[dict[str, Any]],
    roster_mode: str | None = None,
) -> int:
    """Add games and their player rows to the session. Returns games added.

    Nothing is committed here; the caller owns the transaction.
    """
    roster_mode = roster_mode or settings.roster_mode
    shared_batch = client.fetch_players() if roster_mode == "shared" else None

    added = 0
    for descriptor in game_descriptors:
        values = map_game(descriptor)
        if values is None:
            continue
        game = Game(**values)
        batch = shared_batch if shared_batch is not None else client.fetch_players()
        for player_descriptor in batch:
            player_values = map_player(player_descriptor)
            if player_values is not None:
                game.player_stats.append(PlayerGameStat(**player_values))
        session.add(game)
        added += 1
        logger.debug(
            f"Seeded game vs {values['opponent']} "
            f"({values['home_score']}-{values['opponent_score']}) "
            f"with {len(game.player_stats)} player rows"
        )
    session.flush()
    return added


@service_boundary("Populate initial data")
def populate_initial_data(
    session: Session, client: MockarooClient, roster_mode: str | None = None
) -> Result[dict[str, Any]]:
    """Seed the store if, and only if, it holds no games yet."""
    create_database(session.get_bind())

    existing = session.scalar(select(func.count()).select_from(Game))
    if existing:
        return Ok(
            {
                "message": "Database already has data. Skipping initialization.",
                "count": existing,
            }
        )

    games = client.fetch_games()
    logger.info(f"Seeding database with {len(games)} game descriptors")
    added = import_games(session, client, games, roster_mode)
    session.commit()
    return Ok(
        {
            "success": True,
            "message": "Database initialized with seed data",
            "games_added": added,
        }
    )


@service_boundary("Regenerate database")
def regenerate_database(
    session: Session, client: MockarooClient, roster_mode: str | None = None
) -> Result[dict[str, Any]]:
    """Replace every game and player row with a fresh seed batch.

    The game batch is fetched before anything is deleted. Player rows are
    removed before games so the foreign key is never violated mid-wipe.
    """
    create_database(session.get_bind())
    games = client.fetch_games()

    session.execute(delete(PlayerGameStat))
    session.execute(delete(Game))
    logger.info("Tables cleared for regeneration")

    added = import_games(session, client, games, roster_mode)
    session.commit()
    return Ok(
        {
            "success": True,
            "message": "Database regenerated with seed data",
            "games_added": added,
        }
    )
