"""Ranking and filtering engine for leaderboard rows.

Everything in this package is pure: functions take rows and return new rows.
The only side effect is apply_filters writing its summary to a status sink
when one is passed in.
"""

from .display import DisplayRow, build_display_rows
from .filters import FilterState, StatusSink, apply_filters, describe_filters
from .positions import (
    FALLBACK_POSITIONS,
    FILTER_POSITIONS,
    assign_generic_position,
    get_realistic_position,
)
from .ranks import assign_ranks, composite_score, ensure_ranks
from .rows import (
    PLACEHOLDER_POSITION,
    PlayerRow,
    coerce_int,
    dedupe_by_display_name,
    dedupe_players,
    player_display_name,
    rows_from_payload,
)
from .sorting import RANK_FIELDS, SORTABLE_FIELDS, SortState, sort_players

__all__ = [
    "DisplayRow",
    "FALLBACK_POSITIONS",
    "FILTER_POSITIONS",
    "FilterState",
    "PLACEHOLDER_POSITION",
    "PlayerRow",
    "RANK_FIELDS",
    "SORTABLE_FIELDS",
    "SortState",
    "StatusSink",
    "apply_filters",
    "assign_generic_position",
    "assign_ranks",
    "build_display_rows",
    "coerce_int",
    "composite_score",
    "dedupe_by_display_name",
    "dedupe_players",
    "describe_filters",
    "ensure_ranks",
    "get_realistic_position",
    "player_display_name",
    "rows_from_payload",
    "sort_players",
]
