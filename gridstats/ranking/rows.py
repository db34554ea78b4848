"""Player rows as seen by the ranking engine.

Rows arrive from the API as loosely typed JSON objects: counters may be strings,
missing, or junk, and names may be placeholders left behind by the seed data
generator. PlayerRow is the one place where that input is normalised, so the
rest of the engine can work with plain integers.

Coercion Rules:
- Numbers are read the way an integer parse with a fallback reads them:
  "12abc" -> 12, "abc" -> 0, None -> 0, 7.9 -> 7
- Ranks are optional; a missing or non-positive rank is None
"""

import math
import re
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass, replace
from typing import Any

PLACEHOLDER_POSITION = "N/A"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def coerce_int(value: Any, default: int = 0) -> int:
    """Parse a loosely typed counter into an int, falling back to ``default``."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else default


def _optional_rank(value: Any) -> int | None:
    rank = coerce_int(value)
    return rank if rank > 0 else None


@dataclass(frozen=True)
class PlayerRow:
    """One aggregated (season) or per-game player line.

    Rows are immutable; rank assignment returns new rows via ``with_ranks``.
    """

    id: int | None
    player_name: str = ""
    position: str = PLACEHOLDER_POSITION
    touchdowns: int = 0
    yards: int = 0
    tackles: int = 0
    games_played: int = 0
    season_rank: int | None = None
    game_rank: int | None = None
    game_id: int | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PlayerRow":
        """Build a row from an API payload, tolerating missing and malformed fields."""
        raw_id = data.get("id")
        season_rank = data.get("seasonRank", data.get("season_rank"))
        game_rank = data.get("gameRank", data.get("game_rank"))
        raw_game_id = data.get("game_id")
        return cls(
            id=coerce_int(raw_id) if raw_id is not None else None,
            player_name=str(data.get("player_name") or ""),
            position=str(data.get("position") or PLACEHOLDER_POSITION),
            touchdowns=coerce_int(data.get("touchdowns")),
            yards=coerce_int(data.get("yards")),
            tackles=coerce_int(data.get("tackles")),
            games_played=coerce_int(data.get("games_played")),
            season_rank=_optional_rank(season_rank),
            game_rank=_optional_rank(game_rank),
            game_id=coerce_int(raw_game_id) if raw_game_id is not None else None,
        )

    @property
    def has_ranks(self) -> bool:
        return self.season_rank is not None and self.game_rank is not None

    def with_ranks(self, season_rank: int, game_rank: int) -> "PlayerRow":
        return replace(self, season_rank=season_rank, game_rank=game_rank)

    def to_dict(self) -> dict[str, Any]:
        """Serialise with the camelCase rank keys the dashboard protocol uses."""
        data = asdict(self)
        data["seasonRank"] = data.pop("season_rank")
        data["gameRank"] = data.pop("game_rank")
        if data["game_id"] is None:
            data.pop("game_id")
        return data


def rows_from_payload(payload: Iterable[Mapping[str, Any]]) -> list[PlayerRow]:
    """Convert an API list payload to rows, ignoring entries that are not objects."""
    return [PlayerRow.from_mapping(item) for item in payload if isinstance(item, Mapping)]


def player_display_name(player: PlayerRow, index: int = 0) -> str:
    """Name shown for a row.

    Names the generator failed to produce come through as empty strings or as
    text containing "error:"; those rows are labelled "Player <id>" instead.
    """
    name = player.player_name
    if name and "error:" not in name:
        return name
    return f"Player {player.id or index + 1}"


def split_display_name(player: PlayerRow, index: int = 0) -> tuple[str, str]:
    """Split the display name on the first space into (first, last)."""
    first, _, last = player_display_name(player, index).partition(" ")
    return first, last


def dedupe_players(players: Iterable[PlayerRow]) -> list[PlayerRow]:
    """Keep the first row for each id, preserving first-seen order.

    Rows without an id cannot be told apart and are dropped.
    """
    seen: set[int] = set()
    unique: list[PlayerRow] = []
    for player in players:
        if not player.id or player.id in seen:
            continue
        seen.add(player.id)
        unique.append(player)
    return unique


def dedupe_by_display_name(players: Iterable[PlayerRow]) -> list[PlayerRow]:
    """Keep the first row for each display name, preserving order."""
    seen: set[str] = set()
    unique: list[PlayerRow] = []
    for player in players:
        name = player_display_name(player)
        if name in seen:
            continue
        seen.add(name)
        unique.append(player)
    return unique
