"""Season and game rank assignment.

Two independent orderings are computed over a whole player collection:

Season rank - descending by a weighted composite score:
    score = touchdowns * 6 + yards * 0.1 + tackles * 0.5

Game rank - descending by touchdowns, ties broken by yards.

Ranks are 1-based positions in the sorted sequence, so equal scores still get
distinct consecutive ranks. Both sorts are stable: rows that tie keep the order
they had in the input, and no further tie-break key is applied.

Example:
    A: 10 TD, 100 YD, 5 TKL -> 60 + 10 + 2.5 = 72.5
    B:  5 TD, 900 YD, 2 TKL -> 30 + 90 + 1   = 121
    season: B=1, A=2     game: A=1, B=2
"""

import logging
from collections.abc import Iterable

from .rows import PlayerRow, dedupe_players

logger = logging.getLogger(__name__)

TOUCHDOWN_WEIGHT = 6
YARD_WEIGHT = 0.1
TACKLE_WEIGHT = 0.5


def composite_score(player: PlayerRow) -> float:
    """Weighted season score used for season ranking."""
    return (
        player.touchdowns * TOUCHDOWN_WEIGHT
        + player.yards * YARD_WEIGHT
        + player.tackles * TACKLE_WEIGHT
    )


def game_score(player: PlayerRow) -> tuple[int, int]:
    """Sort key for game ranking: touchdowns first, then yards."""
    return player.touchdowns, player.yards


def _positions(ordered: list[PlayerRow]) -> dict[int, int]:
    return {player.id: index + 1 for index, player in enumerate(ordered)}


def assign_ranks(players: Iterable[PlayerRow]) -> list[PlayerRow]:
    """Compute both ranks for every row, replacing any ranks already present.

    The input is deduplicated first; the returned list keeps the input order.
    """
    unique = dedupe_players(players)
    season_order = sorted(unique, key=composite_score, reverse=True)
    game_order = sorted(unique, key=game_score, reverse=True)

    season_ranks = _positions(season_order)
    game_ranks = _positions(game_order)
    return [
        player.with_ranks(season_ranks[player.id], game_ranks[player.id]) for player in unique
    ]


def ensure_ranks(players: Iterable[PlayerRow]) -> list[PlayerRow]:
    """Make sure every row carries a season and game rank.

    Partial assignment is never attempted: if any row lacks either rank the
    whole collection is re-ranked, otherwise the existing ranks are kept.
    """
    unique = dedupe_players(players)
    if all(player.has_ranks for player in unique):
        return unique

    logger.debug(f"Calculating ranks for {len(unique)} players")
    return assign_ranks(unique)
