"""Display rows with densely renumbered ranks.

Stored ranks are computed over the full, unfiltered collection, so after
filtering the visible rank column could read 2, 5, 9. The display rank maps
the visible set onto 1..N, ordered by each row's stored rank, while the stored
rank itself is left alone for sorting.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from .positions import get_realistic_position
from .rows import PlayerRow, dedupe_by_display_name, player_display_name, split_display_name
from .sorting import MISSING_RANK


@dataclass(frozen=True)
class DisplayRow:
    player: PlayerRow
    display_season_rank: int
    display_game_rank: int
    name: str
    first_name: str
    last_name: str
    position: str


def dense_ranks(players: list[PlayerRow], attribute: str) -> list[int]:
    """1..N for each row (aligned with ``players``), ordered by the stored rank."""
    order = sorted(
        range(len(players)), key=lambda i: getattr(players[i], attribute) or MISSING_RANK
    )
    ranks = [0] * len(players)
    for rank, position in enumerate(order, start=1):
        ranks[position] = rank
    return ranks


def build_display_rows(sorted_players: Iterable[PlayerRow]) -> list[DisplayRow]:
    """Turn sorted rows into display rows, one per display name.

    The input order is kept; only the first row for each name is shown.
    """
    visible = dedupe_by_display_name(sorted_players)
    season = dense_ranks(visible, "season_rank")
    game = dense_ranks(visible, "game_rank")

    rows = []
    for index, player in enumerate(visible):
        first, last = split_display_name(player, index)
        rows.append(
            DisplayRow(
                player=player,
                display_season_rank=season[index],
                display_game_rank=game[index],
                name=player_display_name(player, index),
                first_name=first,
                last_name=last,
                position=get_realistic_position(player),
            )
        )
    return rows
