"""Tests for the seed data client and the seeding operations."""

from datetime import date

import httpx
import pytest
from sqlalchemy import func, select

from gridstats.core.exceptions import ConfigurationError, IngestionError
from gridstats.database.models import Game, PlayerGameStat
from gridstats.ingestion import MockarooClient, map_game, map_player, populate_initial_data, regenerate_database
from gridstats.ingestion.seeder import parse_game_date
from gridstats.services import ErrorKind


def client_returning(response: httpx.Response) -> MockarooClient:
    return MockarooClient(
        base_url="https://seed.test",
        api_key="k",
        client=httpx.Client(transport=httpx.MockTransport(lambda request: response)),
    )


def count(session, model):
    return session.scalar(select(func.count()).select_from(model))


# ========== CLIENT ==========


def test_fetch_sends_key_and_returns_records(make_seed_client, seed_source):
    with make_seed_client() as client:
        games = client.fetch_games()
    assert len(games) == 3
    request = seed_source["requests"][0]
    assert request.url.params["key"] == "test-key"
    assert request.headers["accept"] == "application/json"


def test_single_object_is_wrapped_in_a_list():
    client = client_returning(httpx.Response(200, json={"player_name": "Solo"}))
    assert client.fetch("playerdata") == [{"player_name": "Solo"}]


@pytest.mark.parametrize(
    "response, message",
    [
        (httpx.Response(503, text="busy"), "API returned status 503"),
        (httpx.Response(200, text="<html>"), "JSON parsing error"),
        (httpx.Response(200, json={"error": "bad key"}), "Seed data service error: bad key"),
        (httpx.Response(200, json="nope"), "JSON parsing error: expected a list"),
    ],
)
def test_bad_responses_raise_ingestion_error(response, message):
    with pytest.raises(IngestionError) as excinfo:
        client_returning(response).fetch("gamedata")
    assert excinfo.value.message.startswith(message)


def test_transport_failure_raises_ingestion_error():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = MockarooClient(base_url="https://seed.test", client=httpx.Client(transport=httpx.MockTransport(refuse)))
    with pytest.raises(IngestionError, match="Connection error"):
        client.fetch_games()


def test_empty_base_url_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        MockarooClient(base_url="")


# ========== MAPPING ==========


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2024-09-09", date(2024, 9, 9)),
        ("9/15/2024", date(2024, 9, 15)),
        ("2024-09-09T13:05:00", date(2024, 9, 9)),
        ("2024/10/06", date(2024, 10, 6)),
        ("next sunday", None),
        (None, None),
    ],
)
def test_parse_game_date(value, expected):
    assert parse_game_date(value) == expected


def test_map_game_defaults_and_clamping():
    values = map_game({"game_date": "2024-09-09", "niners_score": "-3"})
    assert values == {
        "game_date": date(2024, 9, 9),
        "opponent": "",
        "venue": "Home",
        "home_score": 0,
        "opponent_score": 0,
    }
    assert map_game({"opponent": "No Date"}) is None


def test_map_player_skips_missing_names():
    assert map_player({"touchdowns": 3}) is None
    assert map_player({"player_name": "Nick Bosa", "tackles": "7"}) == {
        "player_name": "Nick Bosa",
        "touchdowns": 0,
        "yards": 0,
        "tackles": 7,
    }


# ========== SEEDING ==========


def test_populate_shares_one_roster_between_games(session, make_seed_client, seed_source):
    result = populate_initial_data(session, make_seed_client(), roster_mode="shared")

    assert result.ok
    assert result.value["games_added"] == 2
    # Three named players per game
    assert count(session, PlayerGameStat) == 6
    player_fetches = [r for r in seed_source["requests"] if r.url.path == "/playerdata.json"]
    assert len(player_fetches) == 1


def test_per_game_roster_fetches_for_each_game(session, make_seed_client, seed_source):
    populate_initial_data(session, make_seed_client(), roster_mode="per_game")
    player_fetches = [r for r in seed_source["requests"] if r.url.path == "/playerdata.json"]
    assert len(player_fetches) == 2


def test_populate_skips_when_games_exist(session, sample_game, make_seed_client, seed_source):
    result = populate_initial_data(session, make_seed_client())
    assert result.value == {
        "message": "Database already has data. Skipping initialization.",
        "count": 1,
    }
    assert seed_source["requests"] == [], "No fetch should happen when data exists"


def test_regenerate_replaces_everything(session, sample_game, make_seed_client):
    result = regenerate_database(session, make_seed_client())
    assert result.value["message"] == "Database regenerated with seed data"
    opponents = set(session.scalars(select(Game.opponent)))
    assert opponents == {"New York Jets", "Minnesota Vikings"}
    assert count(session, Game) == 2


def test_regenerate_failure_leaves_store_intact(session, sample_game, make_seed_client, seed_source):
    seed_source["player_status"] = 502
    result = regenerate_database(session, make_seed_client())

    assert not result.ok
    assert result.error.kind == ErrorKind.UPSTREAM
    assert count(session, Game) == 1
    assert count(session, PlayerGameStat) == 3
