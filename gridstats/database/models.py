"""SQLAlchemy database models for the team stats dashboard.

This file defines the database schema using SQLAlchemy ORM (Object-Relational Mapping).
The schema is intentionally small: one row per recorded game, and one row per
player performance in a game.

For beginners:

SQLAlchemy ORM: A Python toolkit that lets you work with databases using Python classes
instead of raw SQL. Each class represents a database table, and instances represent rows.

Database Design Principles Applied:
1. Foreign Keys: player rows point at the game they belong to
2. Cascading deletes: removing a game removes its player rows (owned composition)
3. Indexes: speed up the "all rows for this game" and "group by name" queries
4. Defaults: stat counters start at 0

Table names are "games" and "players" so an existing database created by the
earlier dashboard backend can be opened without migration.
"""

from sqlalchemy import CheckConstraint  # Enforce non-negative counters
from sqlalchemy import Column  # Defines table columns with types and constraints
from sqlalchemy import Date  # Calendar date of the game
from sqlalchemy import ForeignKey  # References to other tables' primary keys
from sqlalchemy import Index  # Database indexes for query performance
from sqlalchemy import Integer  # Whole numbers (id, yards, touchdowns)
from sqlalchemy import String  # Text fields with length limits (names, venue)
from sqlalchemy.orm import declarative_base  # Base class for all models
from sqlalchemy.orm import relationship  # Defines how tables are related

# Base class for all database models
Base = declarative_base()


class Game(Base):
    """One recorded match with its final score.

    The id is assigned by the database on insert and never changes afterwards.
    The home side is always "our" team, so only the opponent is named.

    Relationship Navigation:
    - game.player_stats gives every PlayerGameStat recorded for this game
    """

    __tablename__ = "games"

    # Primary key - assigned by the store
    id = Column(Integer, primary_key=True, index=True)

    # Schedule and matchup
    game_date = Column(Date, nullable=False, index=True)  # Sorted newest first in listings
    opponent = Column(String(100), nullable=False)  # "Seattle Seahawks"
    venue = Column(String(100), nullable=False)  # "Levi's Stadium", "Away", "Home"

    # Final score
    home_score = Column(Integer, nullable=False, default=0)
    opponent_score = Column(Integer, nullable=False, default=0)

    # Player rows are owned by the game: deleting the game deletes them too.
    # passive_deletes lets the database ON DELETE CASCADE do the work when it can.
    player_stats = relationship(
        "PlayerGameStat",
        back_populates="game",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("home_score >= 0", name="ck_game_home_score_non_negative"),
        CheckConstraint("opponent_score >= 0", name="ck_game_opponent_score_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Game id={self.id} {self.game_date} vs {self.opponent}>"


class PlayerGameStat(Base):
    """One player's recorded performance in one game.

    A player is identified by name only; the same name appearing in several
    games is the same player for season aggregation purposes.
    """

    __tablename__ = "players"

    id = Column(Integer, primary_key=True, index=True)

    # Owning game - a stat row cannot outlive its game
    game_id = Column(
        Integer,
        ForeignKey("games.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    game = relationship("Game", back_populates="player_stats")

    player_name = Column(String(100), nullable=False)

    # Counting stats
    touchdowns = Column(Integer, nullable=False, default=0)
    yards = Column(Integer, nullable=False, default=0)
    tackles = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        # Season aggregation groups by player name
        Index("idx_player_stat_name", "player_name"),
        CheckConstraint("touchdowns >= 0", name="ck_player_touchdowns_non_negative"),
        CheckConstraint("yards >= 0", name="ck_player_yards_non_negative"),
        CheckConstraint("tackles >= 0", name="ck_player_tackles_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<PlayerGameStat id={self.id} game={self.game_id} {self.player_name}>"
