"""Dashboard client: API access, leaderboard and score strip view models, CSV export."""

from .api_client import DashboardApiClient
from .export import EXPORT_COLUMNS, export_filename, export_frame, export_players
from .leaderboard import Leaderboard, RequestToken
from .scores import GameCard, ScoreBoard
from .state import FilterStore, StatusLine

__all__ = [
    "DashboardApiClient",
    "EXPORT_COLUMNS",
    "FilterStore",
    "GameCard",
    "Leaderboard",
    "RequestToken",
    "ScoreBoard",
    "StatusLine",
    "export_filename",
    "export_frame",
    "export_players",
]
