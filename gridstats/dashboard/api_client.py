"""HTTP client the dashboard uses to talk to the gridstats API.

Every call returns a Result instead of raising, so views can branch on
``result.ok`` and show ``result.error.message`` without try/except blocks:

    api = DashboardApiClient()
    result = api.fetch_players()
    if result.ok:
        rows = result.value          # list[PlayerRow]
    else:
        print(result.error.message)  # e.g. "Connection error: ..."

Error Mapping:
- Network errors and timeouts -> ErrorKind.CONNECTION
- A JSON object with an "error" key -> kind taken from the HTTP status
  (404, 409, 400, 502, 503), INTERNAL when the server used 200
- A body that is not JSON, or not the expected shape -> ErrorKind.INTERNAL
"""

import logging
from typing import Any

import httpx
from httpx import HTTPError

from ..config.settings import settings
from ..ranking import PlayerRow, rows_from_payload
from ..services.results import Err, ErrorKind, Ok, Result

logger = logging.getLogger(__name__)

KINDS_BY_STATUS = {
    404: ErrorKind.NOT_FOUND,
    409: ErrorKind.UNCHANGED,
    400: ErrorKind.VALIDATION,
    502: ErrorKind.UPSTREAM,
    503: ErrorKind.CONNECTION,
}


class DashboardApiClient:
    """Typed wrapper around the ?table= endpoint.

    Pass ``client`` to inject a pre-configured httpx.Client (tests use one
    backed by httpx.MockTransport).
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ):
        self.base_url = base_url or settings.dashboard_api_url
        # An injected client belongs to the caller and is left open
        self._owns_client = client is None
        self.client = client or httpx.Client(
            timeout=timeout if timeout is not None else settings.dashboard_timeout,
            headers={"User-Agent": "gridstats-dashboard/0.1"},
        )

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "DashboardApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(
        self, method: str, params: dict[str, Any], payload: dict[str, Any] | None = None
    ) -> Result[Any]:
        try:
            response = self.client.request(method, self.base_url, params=params, json=payload)
        except HTTPError as e:
            logger.warning(f"{method} {params} failed: {e}")
            return Err.of(ErrorKind.CONNECTION, f"Connection error: {e}")

        try:
            data = response.json()
        except ValueError:
            return Err.of(
                ErrorKind.INTERNAL,
                f"Invalid response from server (HTTP {response.status_code})",
                response.text[:200],
            )

        if isinstance(data, dict) and "error" in data:
            kind = KINDS_BY_STATUS.get(response.status_code, ErrorKind.INTERNAL)
            return Err.of(kind, str(data["error"]), data.get("details"))
        return Ok(data)

    def _expect_list(self, result: Result[Any], what: str) -> Result[list[Any]]:
        if result.ok and not isinstance(result.value, list):
            return Err.of(ErrorKind.INTERNAL, f"Expected a list of {what}")
        return result

    # ========== READS ==========

    def fetch_games(self) -> Result[list[dict[str, Any]]]:
        return self._expect_list(self._request("GET", {"table": "games"}), "games")

    def fetch_game(self, game_id: int) -> Result[dict[str, Any]]:
        return self._request("GET", {"table": "games", "id": game_id})

    def fetch_players(self) -> Result[list[PlayerRow]]:
        """Season totals, converted to PlayerRow values."""
        result = self._expect_list(self._request("GET", {"table": "players"}), "players")
        return Ok(rows_from_payload(result.value)) if result.ok else result

    def fetch_player(self, player_id: int) -> Result[PlayerRow]:
        result = self._request("GET", {"table": "players", "id": player_id})
        return Ok(PlayerRow.from_mapping(result.value)) if result.ok else result

    def fetch_game_players(self, game_id: int) -> Result[list[PlayerRow]]:
        """One game's player lines, converted to PlayerRow values."""
        result = self._expect_list(
            self._request("GET", {"table": "gameplayers", "gameId": game_id}), "game players"
        )
        return Ok(rows_from_payload(result.value)) if result.ok else result

    def fetch_player_stats(self, game_id: int | None = None) -> Result[list[dict[str, Any]]]:
        """Raw stat rows (one per player per game), the rows the admin edits."""
        params: dict[str, Any] = {"table": "playerstats"}
        if game_id is not None:
            params["gameId"] = game_id
        return self._expect_list(self._request("GET", params), "player stats")

    def fetch_player_stat(self, stat_id: int) -> Result[dict[str, Any]]:
        return self._request("GET", {"table": "playerstats", "id": stat_id})

    # ========== WRITES ==========

    def create_game(self, data: dict[str, Any]) -> Result[dict[str, Any]]:
        return self._request("POST", {"table": "games"}, data)

    def create_player(self, data: dict[str, Any]) -> Result[dict[str, Any]]:
        return self._request("POST", {"table": "players"}, data)

    def update_game(self, game_id: int, data: dict[str, Any]) -> Result[dict[str, Any]]:
        return self._request("PUT", {"table": "games", "id": game_id}, data)

    def update_player(self, player_id: int, data: dict[str, Any]) -> Result[dict[str, Any]]:
        return self._request("PUT", {"table": "players", "id": player_id}, data)

    def delete_game(self, game_id: int) -> Result[dict[str, Any]]:
        return self._request("DELETE", {"table": "games", "id": game_id})

    def delete_player(self, player_id: int) -> Result[dict[str, Any]]:
        return self._request("DELETE", {"table": "players", "id": player_id})

    # ========== MAINTENANCE ==========

    def initialize_database(self) -> Result[dict[str, Any]]:
        return self._request("GET", {"table": "init"})

    def regenerate_database(self) -> Result[dict[str, Any]]:
        return self._request("GET", {"table": "regenerate"})

    def test_connection(self) -> Result[dict[str, Any]]:
        return self._request("GET", {"table": "test"})
