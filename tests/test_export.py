"""Tests for the leaderboard CSV export."""

from datetime import date

import pandas as pd
import pytest

from gridstats.config.settings import settings
from gridstats.core.exceptions import ValidationError
from gridstats.dashboard import EXPORT_COLUMNS, export_filename, export_frame, export_players
from gridstats.ranking import PlayerRow

PLAYERS = [
    PlayerRow(id=1, player_name="Brock Purdy", touchdowns=31, yards=4280, tackles=2, games_played=17,
              season_rank=1, game_rank=1),
    PlayerRow(id=7, player_name="Brock Purdy", touchdowns=2, yards=231, games_played=1, season_rank=4,
              game_rank=4),
    PlayerRow(id=2, player_name="Fred Warner", tackles=132, games_played=17, season_rank=3, game_rank=3),
    PlayerRow(id=9, player_name="error: bad name", touchdowns=1, games_played=2),
]


def test_header_matches_dashboard_format():
    assert ",".join(EXPORT_COLUMNS) == (
        "ID,Name,Position,Touchdowns,Yards,Tackles,Games Played,Season Rank,Game Rank"
    )


def test_frame_has_one_row_per_name():
    df = export_frame(PLAYERS)
    assert list(df["ID"]) == [1, 2, 9]
    assert list(df["Name"]) == ["Brock Purdy", "Fred Warner", "Player 9"]
    assert list(df["Position"])[:2] == ["QB", "LB"]


@pytest.mark.parametrize(
    "game, filtered, expected",
    [
        (None, False, "49ers-stats-2024-09-09.csv"),
        (None, True, "49ers-stats-filtered-2024-09-09.csv"),
        ({"opponent": "Seattle  Seahawks"}, True, "49ers-stats-seattle-seahawks-filtered-2024-09-09.csv"),
        ({"opponent": "New York Jets"}, False, "49ers-stats-new-york-jets-2024-09-09.csv"),
    ],
)
def test_filename(game, filtered, expected):
    assert export_filename(game, filtered, today=date(2024, 9, 9), prefix="49ers-stats") == expected


def test_export_writes_csv(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "export_filename_prefix", "team")
    path = export_players(PLAYERS, tmp_path / "out", today=date(2024, 9, 9))

    assert path.name == "team-2024-09-09.csv"
    lines = path.read_text().splitlines()
    assert lines[0] == ",".join(EXPORT_COLUMNS)
    assert lines[1] == "1,Brock Purdy,QB,31,4280,2,17,1,1"
    # Missing ranks are left empty
    assert lines[3].endswith(",2,,")

    df = pd.read_csv(path)
    assert len(df) == 3


def test_export_without_players_fails(tmp_path):
    with pytest.raises(ValidationError, match="No players to export"):
        export_players([], tmp_path)
