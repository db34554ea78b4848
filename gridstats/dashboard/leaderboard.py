"""Leaderboard view model.

Holds the season rows, the rows of the selected game, the shared filter store
and the sort state, and exposes what the leaderboard table renders.

Data Flow:
1. load_season(): fetch season totals, dedupe, ensure ranks
2. select_game(game): fetch that game's lines; they replace the season rows
   until clear_game() (or until the fetch fails)
3. visible_players(): active rows -> apply_filters -> sort_players
4. display_rows(): visible rows with dense 1..N display ranks
5. current_players(): visible rows with ranks ensured, for CSV export

Request Tokens:
Fetches are tracked per channel ("season", "game"). Each fetch takes the next
token for its channel, and a response is only applied if its token is still
the latest one issued on that channel. Selecting game B while game A's fetch
is still outstanding therefore never lets A's late response overwrite B.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..ranking import (
    DisplayRow,
    FilterState,
    PlayerRow,
    SortState,
    apply_filters,
    build_display_rows,
    dedupe_players,
    ensure_ranks,
)
from ..services.results import Result
from .api_client import DashboardApiClient
from .export import export_players
from .state import FilterStore, StatusLine

logger = logging.getLogger(__name__)

SEASON = "season"
GAME = "game"


@dataclass(frozen=True)
class RequestToken:
    channel: str
    number: int


class Leaderboard:
    def __init__(
        self,
        api: DashboardApiClient,
        filters: FilterStore | None = None,
        status: StatusLine | None = None,
        sort: SortState | None = None,
    ):
        self.api = api
        self.filters = filters or FilterStore()
        self.status = status or StatusLine()
        self.sort = sort or SortState()

        self.season_players: list[PlayerRow] = []
        # None while no game is selected or when the game fetch failed
        self.game_players: list[PlayerRow] | None = None
        self.selected_game: dict[str, Any] | None = None
        self.loading = False
        self.error: str | None = None

        self._latest = {SEASON: 0, GAME: 0}
        self._unsubscribe = self.filters.subscribe(self._on_filters_changed)

    def close(self) -> None:
        self._unsubscribe()

    # ========== REQUEST TOKENS ==========

    def issue_token(self, channel: str) -> RequestToken:
        self._latest[channel] += 1
        self.loading = True
        return RequestToken(channel, self._latest[channel])

    def is_current(self, token: RequestToken) -> bool:
        return self._latest[token.channel] == token.number

    # ========== SEASON ==========

    def load_season(self) -> bool:
        token = self.issue_token(SEASON)
        return self.receive_season(token, self.api.fetch_players())

    def receive_season(self, token: RequestToken, result: Result[list[PlayerRow]]) -> bool:
        """Apply a season response. Returns False when the response was stale."""
        if not self.is_current(token):
            logger.debug(f"Ignoring stale season response #{token.number}")
            return False

        self.loading = False
        if result.ok:
            self.season_players = ensure_ranks(dedupe_players(result.value))
            self.error = None
            logger.info(f"Loaded {len(self.season_players)} season players")
        else:
            self.season_players = []
            self.error = result.error.message
            logger.warning(f"Error fetching players: {self.error}")
        self._refresh_status()
        return True

    # ========== GAME SELECTION ==========

    def select_game(self, game: dict[str, Any]) -> bool:
        self.selected_game = game
        token = self.issue_token(GAME)
        return self.receive_game(token, self.api.fetch_game_players(game["id"]))

    def receive_game(self, token: RequestToken, result: Result[list[PlayerRow]]) -> bool:
        """Apply a game response; a failure falls back to the season rows."""
        if not self.is_current(token):
            logger.debug(f"Ignoring stale game response #{token.number}")
            return False

        self.loading = False
        if result.ok:
            self.game_players = ensure_ranks(dedupe_players(result.value))
            self.error = None
        else:
            self.game_players = None
            self.error = result.error.message
            logger.warning(f"Error fetching game player data: {self.error}")
        self._refresh_status()
        return True

    def clear_game(self) -> None:
        """Back to season rows. Any game fetch still in flight is superseded."""
        self._latest[GAME] += 1
        self.selected_game = None
        self.game_players = None
        self.loading = False
        self._refresh_status()

    # ========== TABLE ==========

    def active_players(self) -> list[PlayerRow]:
        if self.selected_game is not None and self.game_players is not None:
            return self.game_players
        return self.season_players

    def handle_sort(self, field: str) -> SortState:
        self.sort = self.sort.toggle(field)
        return self.sort

    def filtered_players(self) -> list[PlayerRow]:
        return apply_filters(self.active_players(), self.filters.state, self.status)

    def visible_players(self) -> list[PlayerRow]:
        return self.sort.apply(self.filtered_players())

    def display_rows(self) -> list[DisplayRow]:
        return build_display_rows(self.visible_players())

    def current_players(self) -> list[PlayerRow]:
        """Visible rows in table order with ranks ensured."""
        return ensure_ranks(self.visible_players())

    def export_csv(self, output_dir: Path) -> Path:
        return export_players(
            self.current_players(),
            output_dir,
            selected_game=self.selected_game,
            filtered=bool(self.status),
        )

    def _on_filters_changed(self, _state: FilterState) -> None:
        self._refresh_status()

    def _refresh_status(self) -> None:
        # apply_filters writes the active filter summary to the status line
        self.filtered_players()
