"""Sort-for-display and sort toggling.

sort_players re-orders an already filtered collection by one field. All sorts
are stable, in both directions, so rows with equal keys keep their input order.

Sortable fields:
- player_name: display name, case- and accent-insensitive
- lastName: text after the first space of the display name
- position: inferred position
- seasonRank / gameRank: stored rank, missing ranks sort as 999
- efficiency: touchdowns per game played (games played of 0 counts as 1)
- anything else: the named counter parsed as an integer (0 when unparseable)
"""

import unicodedata
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Literal

from .positions import get_realistic_position
from .rows import PlayerRow, coerce_int, dedupe_players, player_display_name

Direction = Literal["asc", "desc"]

RANK_FIELDS = frozenset({"seasonRank", "gameRank"})
MISSING_RANK = 999

# Field names the leaderboard exposes as sortable columns
SORTABLE_FIELDS = (
    "seasonRank",
    "gameRank",
    "player_name",
    "lastName",
    "position",
    "touchdowns",
    "yards",
    "tackles",
    "games_played",
    "efficiency",
)

_ATTRIBUTE_ALIASES = {"seasonRank": "season_rank", "gameRank": "game_rank"}


def _collate(text: str) -> tuple[str, str]:
    """Sort key that puts "Émile" next to "Emile", as localeCompare does.

    Accents only break ties between otherwise equal names.
    """
    folded = unicodedata.normalize("NFKD", text.casefold())
    base = "".join(char for char in folded if not unicodedata.combining(char))
    return base, folded


def _last_name(player: PlayerRow) -> str:
    _, _, last = player_display_name(player).partition(" ")
    return last


def efficiency(player: PlayerRow) -> float:
    return player.touchdowns / (player.games_played or 1)


def sort_key(field: str) -> Callable[[PlayerRow], Any]:
    """Key function for one sortable field."""
    if field == "player_name":
        return lambda p: _collate(player_display_name(p))
    if field == "lastName":
        return lambda p: _collate(_last_name(p))
    if field == "position":
        return get_realistic_position
    if field in RANK_FIELDS:
        attribute = _ATTRIBUTE_ALIASES[field]
        return lambda p: getattr(p, attribute) or MISSING_RANK
    if field == "efficiency":
        return efficiency
    return lambda p: coerce_int(getattr(p, field, 0))


def sort_players(
    players: Iterable[PlayerRow], field: str = "seasonRank", direction: Direction = "asc"
) -> list[PlayerRow]:
    """Deduplicate and sort rows by ``field`` in the given direction."""
    return sorted(dedupe_players(players), key=sort_key(field), reverse=direction == "desc")


@dataclass(frozen=True)
class SortState:
    """Current leaderboard sort column and direction."""

    field: str = "seasonRank"
    direction: Direction = "asc"

    def toggle(self, field: str) -> "SortState":
        """Clicking the current column flips direction; a new column starts
        ascending for ranks and descending for everything else."""
        if field == self.field:
            return SortState(field, "desc" if self.direction == "asc" else "asc")
        return SortState(field, "asc" if field in RANK_FIELDS else "desc")

    def apply(self, players: Iterable[PlayerRow]) -> list[PlayerRow]:
        return sort_players(players, self.field, self.direction)
