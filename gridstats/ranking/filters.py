"""Composable filter predicate for the leaderboard.

A FilterState is a record of optional criteria. A criterion that is empty
(position, search name) or zero (the minimums) is inactive and never removes a
row, so the default FilterState is the identity filter.

Active criteria are AND-ed together:
- position: inferred position equals the filter value
- min_touchdowns / min_yards / min_tackles: counter >= minimum
- search_name: case-insensitive substring of the display name

Filtering never touches rank fields; rows keep whatever ranks they already had.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, fields, replace
from typing import Any, Protocol

from .positions import get_realistic_position
from .rows import PlayerRow, coerce_int, player_display_name

SEPARATOR = " • "


class StatusSink(Protocol):
    """Anything with a writable ``text`` attribute (a status line, a label)."""

    text: str


@dataclass(frozen=True)
class FilterState:
    """Filter criteria selected in the dashboard."""

    position: str = ""
    min_touchdowns: int = 0
    min_yards: int = 0
    min_tackles: int = 0
    search_name: str = ""

    def __post_init__(self):
        # A negative minimum filters nothing, same as 0
        for name in ("min_touchdowns", "min_yards", "min_tackles"):
            if getattr(self, name) < 0:
                object.__setattr__(self, name, 0)

    @property
    def is_active(self) -> bool:
        return any(getattr(self, f.name) != f.default for f in fields(self))

    def updated(self, name: str, value: Any) -> "FilterState":
        """Return a copy with one criterion changed.

        Minimums are parsed like form input: junk and negatives become 0.
        """
        if name not in {f.name for f in fields(self)}:
            raise KeyError(f"Unknown filter: {name}")
        if name.startswith("min_"):
            value = max(coerce_int(value), 0)
        else:
            value = "" if value is None else str(value)
        return replace(self, **{name: value})


def _predicates(filters: FilterState) -> list[Callable[[PlayerRow], bool]]:
    checks: list[Callable[[PlayerRow], bool]] = []
    if filters.position:
        checks.append(lambda p: get_realistic_position(p) == filters.position)
    if filters.min_touchdowns > 0:
        checks.append(lambda p: p.touchdowns >= filters.min_touchdowns)
    if filters.min_yards > 0:
        checks.append(lambda p: p.yards >= filters.min_yards)
    if filters.min_tackles > 0:
        checks.append(lambda p: p.tackles >= filters.min_tackles)
    if filters.search_name:
        term = filters.search_name.lower()
        checks.append(lambda p: term in player_display_name(p).lower())
    return checks


def describe_filters(filters: FilterState, result_count: int) -> str:
    """Human readable summary of active criteria, or "" when none are active.

    Example: 'Position: QB • Min TD: 6 (3 players)'
    """
    parts = []
    if filters.position:
        parts.append(f"Position: {filters.position}")
    if filters.min_touchdowns > 0:
        parts.append(f"Min TD: {filters.min_touchdowns}")
    if filters.min_yards > 0:
        parts.append(f"Min YD: {filters.min_yards}")
    if filters.min_tackles > 0:
        parts.append(f"Min TKL: {filters.min_tackles}")
    if filters.search_name:
        parts.append(f'Search: "{filters.search_name}"')
    if not parts:
        return ""
    return f"{SEPARATOR.join(parts)} ({result_count} players)"


def apply_filters(
    players: Iterable[PlayerRow],
    filters: FilterState,
    status: StatusSink | None = None,
) -> list[PlayerRow]:
    """Return the rows matching every active criterion, in input order.

    When ``status`` is given, the active filter summary is written to it
    (cleared when no criterion is active).
    """
    checks = _predicates(filters)
    result = [player for player in players if all(check(player) for check in checks)]
    if status is not None:
        status.text = describe_filters(filters, len(result))
    return result
