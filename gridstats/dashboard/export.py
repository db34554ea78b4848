"""CSV export of the players currently shown on the leaderboard.

File Format:
    ID,Name,Position,Touchdowns,Yards,Tackles,Games Played,Season Rank,Game Rank

One row per visible player, first row per display name wins. Position is the
inferred position the table shows; ranks are the stored (not display) ranks,
left empty when a row has none.

File Name:
    {prefix}[-{opponent-slug}][-filtered]-{YYYY-MM-DD}.csv
    e.g. 49ers-stats-seattle-seahawks-filtered-2024-09-09.csv
"""

import logging
import re
from collections.abc import Iterable
from datetime import date
from pathlib import Path
from typing import Any

import pandas as pd

from ..config.settings import settings
from ..core.exceptions import ValidationError
from ..ranking import PlayerRow, dedupe_by_display_name, get_realistic_position, player_display_name

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "ID",
    "Name",
    "Position",
    "Touchdowns",
    "Yards",
    "Tackles",
    "Games Played",
    "Season Rank",
    "Game Rank",
]


def opponent_slug(opponent: str) -> str:
    return re.sub(r"\s+", "-", opponent.strip().lower())


def export_filename(
    selected_game: dict[str, Any] | None = None,
    filtered: bool = False,
    today: date | None = None,
    prefix: str | None = None,
) -> str:
    name = prefix if prefix is not None else settings.export_filename_prefix
    if selected_game and selected_game.get("opponent"):
        name += f"-{opponent_slug(str(selected_game['opponent']))}"
    if filtered:
        name += "-filtered"
    return f"{name}-{(today or date.today()).isoformat()}.csv"


def export_frame(players: Iterable[PlayerRow]) -> pd.DataFrame:
    """Build the export table, one row per display name."""
    records = [
        [
            player.id,
            player_display_name(player, index),
            get_realistic_position(player),
            player.touchdowns,
            player.yards,
            player.tackles,
            player.games_played,
            player.season_rank,
            player.game_rank,
        ]
        for index, player in enumerate(dedupe_by_display_name(players))
    ]
    # object dtype keeps missing ranks empty instead of turning the column into floats
    return pd.DataFrame(records, columns=EXPORT_COLUMNS, dtype=object)


def export_players(
    players: Iterable[PlayerRow],
    output_dir: Path,
    selected_game: dict[str, Any] | None = None,
    filtered: bool = False,
    today: date | None = None,
) -> Path:
    """Write the CSV into ``output_dir`` and return its path.

    Raises:
        ValidationError: when there are no players to export
    """
    df = export_frame(players)
    if df.empty:
        raise ValidationError("No players to export.")

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / export_filename(selected_game, filtered, today)
    df.to_csv(path, index=False, lineterminator="\n")

    logger.info(f"Exported {len(df)} players to {path}")
    return path
