"""Shared pytest fixtures.

Every test gets a private in-memory SQLite database. StaticPool keeps a single
connection alive, so the schema created here is the same database the API's
worker thread sees through the overridden get_db dependency.

The seed data generator is replaced with an httpx.MockTransport that serves
the descriptor batches below; tests tweak ``seed_source`` to simulate
failures.
"""

from datetime import date

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from gridstats.api.main import app
from gridstats.api.routers.tables import get_seed_client_factory
from gridstats.database.connection import build_engine, get_db
from gridstats.database.models import Base, Game, PlayerGameStat
from gridstats.ingestion import MockarooClient

GAME_DESCRIPTORS = [
    {
        "game_date": "2024-09-09",
        "opponent": "New York Jets",
        "venue": "Levi's Stadium",
        "niners_score": 32,
        "opponent_score": 19,
    },
    {
        "game_date": "9/15/2024",
        "opponent": "Minnesota Vikings",
        "venue": "U.S. Bank Stadium",
        "niners_score": "17",
        "opponent_score": 23,
    },
    # No usable date: skipped
    {"game_date": "", "opponent": "Nobody"},
]

PLAYER_DESCRIPTORS = [
    {"player_name": "Brock Purdy", "touchdowns": 2, "yards": 231, "tackles": 0},
    {"player_name": "George Kittle", "touchdowns": "1", "yards": 76, "tackles": None},
    # No name: skipped
    {"player_name": "", "touchdowns": 3, "yards": 40, "tackles": 1},
    {"player_name": "Fred Warner", "touchdowns": 0, "yards": -5, "tackles": 9},
]


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def seed_source():
    """Mutable description of what the fake generator serves."""
    return {
        "games": GAME_DESCRIPTORS,
        "players": PLAYER_DESCRIPTORS,
        "player_status": 200,
        "requests": [],
    }


@pytest.fixture
def make_seed_client(seed_source):
    def handler(request: httpx.Request) -> httpx.Response:
        seed_source["requests"].append(request)
        if request.url.path == "/gamedata.json":
            return httpx.Response(200, json=seed_source["games"])
        if request.url.path == "/playerdata.json":
            if seed_source["player_status"] != 200:
                return httpx.Response(seed_source["player_status"], text="generator exploded")
            return httpx.Response(200, json=seed_source["players"])
        return httpx.Response(404, json={"error": "Schema not found"})

    def factory() -> MockarooClient:
        return MockarooClient(
            base_url="https://seed.test",
            api_key="test-key",
            client=httpx.Client(transport=httpx.MockTransport(handler)),
        )

    return factory


@pytest.fixture
def client(session_factory, make_seed_client):
    """TestClient wired to the in-memory database and the fake generator.

    Not used as a context manager, so the startup hook that creates tables on
    the configured database never runs.
    """

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_seed_client_factory] = lambda: make_seed_client
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_game(session):
    """Game 1 with three player rows."""
    game = Game(
        game_date=date(2024, 9, 9),
        opponent="New York Jets",
        venue="Levi's Stadium",
        home_score=32,
        opponent_score=19,
    )
    game.player_stats.extend(
        [
            PlayerGameStat(player_name="Brock Purdy", touchdowns=2, yards=231, tackles=0),
            PlayerGameStat(player_name="Christian McCaffrey", touchdowns=1, yards=147, tackles=0),
            PlayerGameStat(player_name="Fred Warner", touchdowns=0, yards=0, tackles=11),
        ]
    )
    session.add(game)
    session.commit()
    return game
