"""Tests for the ?table= HTTP API.

These go through FastAPI's TestClient, so routing, body parsing and JSON
serialisation are exercised together with the service layer.
"""

import pytest

from gridstats.config.settings import settings

GAME = {
    "game_date": "2024-09-09",
    "opponent": "New York Jets",
    "venue": "Levi's Stadium",
    "home_score": 32,
    "opponent_score": 19,
}


@pytest.fixture(params=["/api", "/backend/api.php"])
def endpoint(request):
    """Both mount points serve the same handlers."""
    return request.param


def create_game(client, endpoint, **overrides):
    response = client.post(endpoint, params={"table": "games"}, json={**GAME, **overrides})
    return response.json()["id"]


def test_root_and_health(client):
    assert client.get("/").json()["message"] == "gridstats API"
    assert client.get("/health").json()["status"] == "healthy"


def test_game_round_trip(client, endpoint):
    created = client.post(endpoint, params={"table": "games"}, json=GAME)
    assert created.status_code == 200
    body = created.json()
    assert body["success"] is True
    assert body["message"] == "Game created successfully"

    game = client.get(endpoint, params={"table": "games", "id": body["id"]}).json()
    assert game == {"id": body["id"], **GAME}

    update = client.put(endpoint, params={"table": "games", "id": body["id"]}, json={**GAME, "opponent_score": 20})
    assert update.json() == {"success": True, "message": "Game updated successfully"}

    delete = client.delete(endpoint, params={"table": "games", "id": body["id"]})
    assert delete.json()["success"] is True
    assert client.get(endpoint, params={"table": "games"}).json() == []


def test_legacy_score_key_and_datetime_are_accepted(client):
    payload = {"game_date": "2024-09-15 00:00:00", "opponent": "Minnesota Vikings", "niners_score": 17}
    game_id = client.post("/api", params={"table": "games"}, json=payload).json()["id"]

    game = client.get("/api", params={"table": "games", "id": game_id}).json()
    assert game["game_date"] == "2024-09-15"
    assert game["home_score"] == 17
    assert game["venue"] == "Home"


def test_games_are_listed_newest_first(client):
    for day in ("2024-09-09", "2024-10-20", "2024-09-29"):
        create_game(client, "/api", game_date=day)
    dates = [game["game_date"] for game in client.get("/api", params={"table": "games"}).json()]
    assert dates == ["2024-10-20", "2024-09-29", "2024-09-09"]


def test_players_are_aggregated(client):
    first = create_game(client, "/api")
    second = create_game(client, "/api", game_date="2024-09-15")
    for game_id, touchdowns in ((first, 2), (second, 1)):
        client.post(
            "/api",
            params={"table": "players"},
            json={"game_id": game_id, "player_name": "Brock Purdy", "touchdowns": touchdowns, "yards": 200},
        )

    (purdy,) = client.get("/api", params={"table": "players"}).json()
    assert purdy["touchdowns"] == 3
    assert purdy["yards"] == 400
    assert purdy["games_played"] == 2
    assert purdy["position"] == "N/A"


def test_game_players_use_camel_case_ranks(client, sample_game):
    rows = client.get("/api", params={"table": "gameplayers", "gameId": sample_game.id}).json()
    assert len(rows) == 3
    assert {"seasonRank", "gameRank", "games_played", "position"} <= rows[0].keys()
    assert sorted(row["gameRank"] for row in rows) == [1, 2, 3]


def test_deleting_a_game_removes_its_players(client, sample_game):
    response = client.delete("/api", params={"table": "games", "id": sample_game.id})
    assert response.json()["message"] == "Game and related player records deleted successfully"
    assert client.get("/api", params={"table": "playerstats"}).json() == []


@pytest.mark.parametrize(
    "method, params, message",
    [
        ("GET", {}, "No table specified"),
        ("GET", {"table": "teams"}, "Unknown table specified: teams"),
        ("GET", {"table": "gameplayers"}, "Unknown table specified: gameplayers"),
        ("POST", {}, "No table specified"),
        ("PUT", {"table": "games"}, "Table or ID not specified"),
        ("DELETE", {"id": 1}, "Table or ID not specified"),
        ("DELETE", {"table": "teams", "id": 1}, "Unknown table specified: teams"),
    ],
)
def test_request_errors(client, method, params, message):
    response = client.request(method, "/api", params=params)
    assert response.status_code == 200, "Errors use HTTP 200 by default"
    assert response.json() == {"error": message}


def test_missing_body(client):
    response = client.post("/api", params={"table": "games"})
    assert response.json() == {"error": "No data provided"}


def test_invalid_body(client):
    response = client.post("/api", params={"table": "games"}, json={"opponent": "No Date"})
    assert response.json()["error"].startswith("Invalid data: game_date")


def test_not_found_and_unchanged(client, sample_game):
    missing = client.get("/api", params={"table": "games", "id": 999}).json()
    assert missing == {"error": "Game not found"}

    same = {
        "game_date": "2024-09-09",
        "opponent": "New York Jets",
        "venue": "Levi's Stadium",
        "home_score": 32,
        "opponent_score": 19,
    }
    unchanged = client.put("/api", params={"table": "games", "id": sample_game.id}, json=same).json()
    assert unchanged == {"error": "No changes made to game"}


def test_strict_status_codes(client, monkeypatch):
    monkeypatch.setattr(settings, "strict_status_codes", True)
    assert client.get("/api", params={"table": "games", "id": 999}).status_code == 404
    assert client.get("/api").status_code == 400


def test_options_preflight(client):
    response = client.options("/api")
    assert response.status_code == 200
    assert response.content == b""


def test_connectivity_report(client, sample_game):
    report = client.get("/api", params={"table": "test"}).json()
    assert report["database_connection"] == "Connected successfully"
    assert report["tables"] == "All required tables exist"
    assert report["records"] == {"games": 1, "players": 3}


def test_init_seeds_once(client):
    first = client.get("/api", params={"table": "init"}).json()
    assert first == {"success": True, "message": "Database initialized with seed data", "games_added": 2}

    second = client.get("/api", params={"table": "init"}).json()
    assert second["message"] == "Database already has data. Skipping initialization."
    assert second["count"] == 2


def test_regenerate_keeps_data_when_generator_fails(client, sample_game, seed_source):
    seed_source["player_status"] = 500
    response = client.get("/api", params={"table": "regenerate"}).json()
    assert response["error"] == "API returned status 500"

    games = client.get("/api", params={"table": "games"}).json()
    assert [game["id"] for game in games] == [sample_game.id]
    assert len(client.get("/api", params={"table": "playerstats"}).json()) == 3
