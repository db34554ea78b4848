"""Score strip shown above the leaderboard: one card per game.

Opponents are stored as full team names ("Seattle Seahawks"). The card splits
that into a city and a team name, looks up the opponent's stadium, and points
at the team logo under /images/team-logos/.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

from ..ranking import coerce_int
from .api_client import DashboardApiClient

logger = logging.getLogger(__name__)

HOME_STADIUM = "Levi's Stadium"

STADIUMS = {
    "Seahawks": "Lumen Field",
    "Cardinals": "State Farm Stadium",
    "Rams": "SoFi Stadium",
    "Cowboys": "AT&T Stadium",
    "Eagles": "Lincoln Financial Field",
    "Packers": "Lambeau Field",
    "Chiefs": "Arrowhead Stadium",
    "Bengals": "Paycor Stadium",
    "Ravens": "M&T Bank Stadium",
    "Buccaneers": "Raymond James Stadium",
    "Jaguars": "TIAA Bank Field",
    "Giants": "MetLife Stadium",
    "Saints": "Caesars Superdome",
}


def team_name(opponent: str | None) -> str:
    """Last word of the opponent ("San Francisco 49ers" -> "49ers")."""
    parts = (opponent or "").split()
    return parts[-1] if parts else "Unknown Team"


def team_city(opponent: str | None) -> str:
    """Everything before the team name; empty for one-word opponents."""
    parts = (opponent or "").split()
    return " ".join(parts[:-1])


def stadium_for(opponent: str | None) -> str:
    if not opponent:
        return "Unknown Stadium"
    return STADIUMS.get(team_name(opponent), HOME_STADIUM)


def team_logo_path(opponent: str | None) -> str | None:
    if not (opponent or "").strip():
        return None
    return f"/images/team-logos/{team_name(opponent).lower()}.png"


def game_result(home_score: int, opponent_score: int) -> str:
    if home_score > opponent_score:
        return "W"
    if home_score < opponent_score:
        return "L"
    return "T"


@dataclass(frozen=True)
class GameCard:
    game_id: int
    game_date: str
    opponent: str
    team: str
    city: str
    stadium: str
    logo_path: str | None
    home_score: int
    opponent_score: int
    result: str

    @property
    def score(self) -> str:
        return f"{self.home_score} - {self.opponent_score}"

    @property
    def display_date(self) -> str:
        """Date as "Sep 9, 2024", or the raw value when it does not parse."""
        try:
            parsed = date.fromisoformat(self.game_date)
        except ValueError:
            return self.game_date
        return f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}"

    @classmethod
    def from_game(cls, game: dict[str, Any]) -> "GameCard":
        opponent = str(game.get("opponent") or "")
        home = coerce_int(game.get("home_score", game.get("niners_score")))
        away = coerce_int(game.get("opponent_score"))
        return cls(
            game_id=coerce_int(game.get("id")),
            game_date=str(game.get("game_date") or ""),
            opponent=opponent,
            team=team_name(opponent),
            city=team_city(opponent),
            stadium=stadium_for(opponent),
            logo_path=team_logo_path(opponent),
            home_score=home,
            opponent_score=away,
            result=game_result(home, away),
        )


class ScoreBoard:
    """Loads the games list and turns it into cards, newest first."""

    def __init__(self, api: DashboardApiClient):
        self.api = api
        self.games: list[dict[str, Any]] = []
        self.error: str | None = None

    def load(self) -> list[dict[str, Any]]:
        result = self.api.fetch_games()
        if result.ok:
            # ISO dates sort correctly as strings
            self.games = sorted(
                result.value, key=lambda game: str(game.get("game_date") or ""), reverse=True
            )
            self.error = None
        else:
            logger.warning(f"Error fetching games: {result.error.message}")
            self.games = []
            self.error = "Failed to load games data."
        return self.games

    def cards(self) -> list[GameCard]:
        return [GameCard.from_game(game) for game in self.games]

    def find(self, game_id: int) -> dict[str, Any] | None:
        for game in self.games:
            if coerce_int(game.get("id")) == game_id:
                return game
        return None
