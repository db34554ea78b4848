"""HTTP client for the random seed-data generator (Mockaroo).

Mockaroo serves generated JSON arrays from saved schemas:

    GET {base_url}/{endpoint}.json?key={api_key}

Two schemas are used: one that produces game descriptors and one that
produces player stat descriptors. The client only fetches and validates the
payload shape; mapping descriptors to rows happens in seeder.py.

Failure Handling:
Any failure raises IngestionError, which the service boundary reports as an
upstream error. There is no retry: a seed run is cheap to repeat.
- Network errors / timeouts -> "Connection error: ..."
- Non-200 status -> "API returned status N" (first 200 chars of the body as details)
- Invalid JSON or a payload that is not a list -> "JSON parsing error: ..."
"""

import logging
from typing import Any

import httpx
from httpx import HTTPError

from ..config.settings import settings
from ..core.exceptions import ConfigurationError, IngestionError

logger = logging.getLogger(__name__)


class MockarooClient:
    """Fetches generated game and player batches.

    The underlying httpx.Client can be injected, which is how tests supply a
    MockTransport instead of reaching the network.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ):
        self.base_url = (base_url if base_url is not None else settings.mockaroo_base_url).rstrip("/")
        if not self.base_url:
            raise ConfigurationError("Seed data base URL is empty. Set MOCKAROO_BASE_URL.")
        self.api_key = api_key if api_key is not None else settings.mockaroo_api_key
        self.timeout = timeout if timeout is not None else settings.mockaroo_timeout

        self.client = client or httpx.Client(
            timeout=self.timeout, headers={"User-Agent": "gridstats/0.1"}
        )

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "MockarooClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def fetch(self, endpoint: str) -> list[dict[str, Any]]:
        """Fetch one generated batch as a list of JSON objects."""
        url = f"{self.base_url}/{endpoint}.json"
        logger.debug(f"Fetching seed data from {url}")

        try:
            response = self.client.get(
                url, params={"key": self.api_key}, headers={"Accept": "application/json"}
            )
        except HTTPError as e:
            logger.warning(f"Seed data request to {endpoint} failed: {e}")
            raise IngestionError(f"Connection error: {e}") from e

        logger.debug(f"Seed data HTTP status {response.status_code} for {endpoint}")
        if response.status_code != 200:
            raise IngestionError(
                f"API returned status {response.status_code}", details=response.text[:200]
            )

        try:
            data = response.json()
        except ValueError as e:
            raise IngestionError(f"JSON parsing error: {e}", details=response.text[:200]) from e

        if isinstance(data, dict) and "error" in data:
            raise IngestionError(f"Seed data service error: {data['error']}")
        # A single generated record comes back as an object rather than a list
        if isinstance(data, dict):
            data = [data]
        if not isinstance(data, list):
            raise IngestionError(
                f"JSON parsing error: expected a list, got {type(data).__name__}"
            )

        records = [item for item in data if isinstance(item, dict)]
        logger.info(f"Fetched {len(records)} records from {endpoint}")
        return records

    def fetch_games(self) -> list[dict[str, Any]]:
        return self.fetch(settings.mockaroo_games_endpoint)

    def fetch_players(self) -> list[dict[str, Any]]:
        return self.fetch(settings.mockaroo_players_endpoint)
