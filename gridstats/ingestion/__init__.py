"""Seed data ingestion."""

from .mockaroo_client import MockarooClient
from .seeder import import_games, map_game, map_player, populate_initial_data, regenerate_database

__all__ = [
    "MockarooClient",
    "import_games",
    "map_game",
    "map_player",
    "populate_initial_data",
    "regenerate_database",
]
