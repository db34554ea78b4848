"""Create/read/update/delete operations for games and player stat rows.

Every public function takes a Session as its first argument and returns a
Result (see results.py). Exceptions raised inside are converted at the
boundary by the ``service_boundary`` decorator, which also rolls the session
back, so a failure never leaves a transaction half-applied.

Database Patterns:
- SQLAlchemy 2.0 select()/delete() statements
- GROUP BY aggregation for season totals
- Explicit commit per write operation

Season Aggregation:
The players listing groups stat rows by player name, sums touchdowns, yards
and tackles, and counts distinct games. It is the only place data is
pre-aggregated before the dashboard ranks it.
"""

import logging

from sqlalchemy import delete, distinct, func, select
from sqlalchemy.orm import Session

from ..api.schemas import (
    AggregatedPlayerOut,
    GameIn,
    GameOut,
    GamePlayerOut,
    PlayerStatIn,
    PlayerStatOut,
)
from ..core.exceptions import NoChangesError, RecordNotFoundError
from ..database.models import Game, PlayerGameStat
from ..ranking import PlayerRow, assign_generic_position, assign_ranks
from .results import Ok, Result, service_boundary

logger = logging.getLogger(__name__)

GAME_FIELDS = ("game_date", "opponent", "venue", "home_score", "opponent_score")
PLAYER_FIELDS = ("game_id", "player_name", "touchdowns", "yards", "tackles")


def _get_or_raise(session: Session, model, record_id: int, label: str):
    record = session.get(model, record_id)
    if record is None:
        raise RecordNotFoundError(f"{label} not found")
    return record


def _apply_changes(record, data, field_names: tuple[str, ...], label: str) -> None:
    """Copy fields onto the record, raising NoChangesError when nothing differs."""
    changed = False
    for name in field_names:
        value = getattr(data, name)
        if getattr(record, name) != value:
            setattr(record, name, value)
            changed = True
    if not changed:
        raise NoChangesError(f"No changes made to {label.lower()}")


# ========== GAMES ==========


@service_boundary("Create game")
def create_game(session: Session, data: GameIn) -> Result[int]:
    game = Game(**data.model_dump(include=set(GAME_FIELDS)))
    session.add(game)
    session.commit()
    logger.info(f"Created game {game.id} vs {game.opponent}")
    return Ok(game.id)


@service_boundary("List games")
def list_games(session: Session) -> Result[list[GameOut]]:
    """All games, newest first."""
    games = session.scalars(select(Game).order_by(Game.game_date.desc(), Game.id.desc())).all()
    return Ok([GameOut.model_validate(game) for game in games])


@service_boundary("Get game")
def get_game(session: Session, game_id: int) -> Result[GameOut]:
    return Ok(GameOut.model_validate(_get_or_raise(session, Game, game_id, "Game")))


@service_boundary("Update game")
def update_game(session: Session, game_id: int, data: GameIn) -> Result[None]:
    game = _get_or_raise(session, Game, game_id, "Game")
    _apply_changes(game, data, GAME_FIELDS, "Game")
    session.commit()
    return Ok(None)


@service_boundary("Delete game")
def delete_game(session: Session, game_id: int) -> Result[int]:
    """Delete a game and its player rows in one transaction.

    Player rows go first, then the game. If the game delete fails, the
    rollback restores the player rows as well. Returns the number of player
    rows removed.
    """
    _get_or_raise(session, Game, game_id, "Game")
    removed = session.execute(
        delete(PlayerGameStat).where(PlayerGameStat.game_id == game_id)
    ).rowcount
    session.execute(delete(Game).where(Game.id == game_id))
    session.commit()
    logger.info(f"Deleted game {game_id} with {removed} player rows")
    return Ok(removed)


# ========== PLAYER STAT ROWS ==========


def _aggregate_query():
    return select(
        func.min(PlayerGameStat.id).label("id"),
        PlayerGameStat.player_name,
        func.coalesce(func.sum(PlayerGameStat.touchdowns), 0).label("touchdowns"),
        func.coalesce(func.sum(PlayerGameStat.yards), 0).label("yards"),
        func.coalesce(func.sum(PlayerGameStat.tackles), 0).label("tackles"),
        func.count(distinct(PlayerGameStat.game_id)).label("games_played"),
    ).group_by(PlayerGameStat.player_name)


@service_boundary("Create player")
def create_player(session: Session, data: PlayerStatIn) -> Result[int]:
    _get_or_raise(session, Game, data.game_id, "Game")
    player = PlayerGameStat(**data.model_dump(include=set(PLAYER_FIELDS)))
    session.add(player)
    session.commit()
    return Ok(player.id)


@service_boundary("List players")
def list_players(session: Session) -> Result[list[AggregatedPlayerOut]]:
    """Season totals per player name, in order of first appearance."""
    rows = session.execute(_aggregate_query().order_by(func.min(PlayerGameStat.id))).all()
    return Ok([AggregatedPlayerOut.model_validate(dict(row._mapping)) for row in rows])


@service_boundary("Get player")
def get_player(session: Session, player_id: int) -> Result[AggregatedPlayerOut]:
    """Season totals for the player who owns stat row ``player_id``."""
    stat = _get_or_raise(session, PlayerGameStat, player_id, "Player")
    row = session.execute(
        _aggregate_query().where(PlayerGameStat.player_name == stat.player_name)
    ).one()
    return Ok(AggregatedPlayerOut.model_validate(dict(row._mapping)))


@service_boundary("Update player")
def update_player(session: Session, player_id: int, data: PlayerStatIn) -> Result[None]:
    player = _get_or_raise(session, PlayerGameStat, player_id, "Player")
    if data.game_id != player.game_id:
        _get_or_raise(session, Game, data.game_id, "Game")
    _apply_changes(player, data, PLAYER_FIELDS, "Player")
    session.commit()
    return Ok(None)


@service_boundary("Delete player")
def delete_player(session: Session, player_id: int) -> Result[None]:
    player = _get_or_raise(session, PlayerGameStat, player_id, "Player")
    session.delete(player)
    session.commit()
    return Ok(None)


@service_boundary("List player stats")
def list_player_stats(session: Session, game_id: int | None = None) -> Result[list[PlayerStatOut]]:
    """Raw stat rows, optionally limited to one game."""
    query = select(PlayerGameStat).order_by(PlayerGameStat.id)
    if game_id is not None:
        query = query.where(PlayerGameStat.game_id == game_id)
    return Ok([PlayerStatOut.model_validate(row) for row in session.scalars(query)])


@service_boundary("Get player stat")
def get_player_stat(session: Session, stat_id: int) -> Result[PlayerStatOut]:
    return Ok(PlayerStatOut.model_validate(_get_or_raise(session, PlayerGameStat, stat_id, "Player")))


@service_boundary("List game players")
def list_game_players(session: Session, game_id: int) -> Result[list[GamePlayerOut]]:
    """Per-game player lines with a coarse position and ranks within the game.

    An unknown game, or a game without player rows, gives an empty list.
    """
    stats = session.scalars(
        select(PlayerGameStat).where(PlayerGameStat.game_id == game_id).order_by(PlayerGameStat.id)
    ).all()
    rows = [
        PlayerRow(
            id=stat.id,
            player_name=stat.player_name,
            position=assign_generic_position(stat.touchdowns, stat.yards, stat.tackles),
            touchdowns=stat.touchdowns,
            yards=stat.yards,
            tackles=stat.tackles,
            games_played=1,
        )
        for stat in stats
    ]
    return Ok(
        [
            GamePlayerOut(
                id=row.id,
                player_name=row.player_name,
                position=row.position,
                touchdowns=row.touchdowns,
                yards=row.yards,
                tackles=row.tackles,
                games_played=row.games_played,
                season_rank=row.season_rank,
                game_rank=row.game_rank,
            )
            for row in assign_ranks(rows)
        ]
    )
