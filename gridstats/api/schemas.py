"""
Pydantic schemas for API request/response models.

Key Pydantic Concepts:
- BaseModel: Base class for all data models
- ConfigDict: Configuration options for model behavior
- Field: Per-field validation (ge=0 for counters, length limits for text)
- AliasChoices: Accept more than one JSON key for the same field
- from_attributes: Allows creation from SQLAlchemy ORM objects

Schema Organization:
- Request schemas (*In): validate JSON bodies of POST/PUT requests
- Response schemas (*Out): define what the API sends back

Request bodies are validated in lax mode, so "14" is accepted for an integer
field, the way the dashboard's form inputs send them.
"""

from datetime import date

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# ========== REQUEST SCHEMAS ==========


class GameIn(BaseModel):
    """Body of POST/PUT ?table=games.

    The home score is accepted as ``home_score`` or under the older
    ``niners_score`` key the first dashboard used.
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    game_date: date
    opponent: str = Field(..., max_length=100)
    venue: str = Field("Home", max_length=100)
    home_score: int = Field(0, ge=0, validation_alias=AliasChoices("home_score", "niners_score"))
    opponent_score: int = Field(0, ge=0)

    @field_validator("game_date", mode="before")
    @classmethod
    def _strip_time(cls, value):
        # "2024-09-09 00:00:00" and "2024-09-09T00:00:00" come back from older exports
        if isinstance(value, str) and len(value) > 10 and value[10] in " T":
            return value[:10]
        return value


class PlayerStatIn(BaseModel):
    """Body of POST/PUT ?table=players (one player's line for one game)."""

    model_config = ConfigDict(str_strip_whitespace=True)

    game_id: int
    player_name: str = Field(..., min_length=1, max_length=100)
    touchdowns: int = Field(0, ge=0)
    yards: int = Field(0, ge=0)
    tackles: int = Field(0, ge=0)


# ========== RESPONSE SCHEMAS ==========


class GameOut(BaseModel):
    """A game as returned by GET ?table=games. Dates serialise as YYYY-MM-DD."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    game_date: date
    opponent: str
    venue: str
    home_score: int
    opponent_score: int


class PlayerStatOut(BaseModel):
    """A raw PlayerGameStat row (GET ?table=playerstats)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    game_id: int
    player_name: str
    touchdowns: int
    yards: int
    tackles: int


class AggregatedPlayerOut(BaseModel):
    """Season totals for one player name (GET ?table=players)."""

    model_config = ConfigDict(from_attributes=True)

    id: int  # Smallest stat row id of the player
    player_name: str
    position: str = "N/A"
    touchdowns: int
    yards: int
    tackles: int
    games_played: int


class GamePlayerOut(BaseModel):
    """One player's line in a single game, ranked within that game."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    player_name: str
    position: str
    touchdowns: int
    yards: int
    tackles: int
    games_played: int = 1
    season_rank: int = Field(..., serialization_alias="seasonRank")
    game_rank: int = Field(..., serialization_alias="gameRank")


class MutationResponse(BaseModel):
    """Successful create/update/delete."""

    success: bool = True
    id: int | None = None
    message: str
