"""Tests for sort-for-display, sort toggling and display rank remapping."""

from gridstats.ranking import (
    FilterState,
    PlayerRow,
    SortState,
    apply_filters,
    assign_ranks,
    build_display_rows,
    sort_players,
)

ROSTER = assign_ranks(
    [
        PlayerRow(id=1, player_name="Brock Purdy", touchdowns=31, yards=4280, tackles=2, games_played=17),
        PlayerRow(id=2, player_name="Fred Warner", touchdowns=0, yards=0, tackles=132, games_played=17),
        PlayerRow(id=3, player_name="deebo Samuel", touchdowns=7, yards=1405, tackles=0, games_played=14),
        PlayerRow(id=4, player_name="Jake Moody", touchdowns=0, yards=0, tackles=0, games_played=0),
        PlayerRow(id=5, player_name="George Kittle", touchdowns=6, yards=1020, tackles=0, games_played=6),
    ]
)


def ids(rows):
    return [row.id for row in rows]


def test_name_sort_ignores_case():
    assert ids(sort_players(ROSTER, "player_name", "asc")) == [1, 3, 2, 5, 4]


def test_name_sort_folds_accents():
    players = [
        PlayerRow(id=1, player_name="Zed Alpha"),
        PlayerRow(id=2, player_name="Émile Beta"),
        PlayerRow(id=3, player_name="Emile Beta"),
        PlayerRow(id=4, player_name="ñico Gamma"),
    ]
    assert ids(sort_players(players, "player_name", "asc")) == [3, 2, 4, 1]
    assert ids(sort_players(players, "lastName", "asc")) == [1, 2, 3, 4], "Equal last names keep input order"


def test_last_name_sort():
    assert ids(sort_players(ROSTER, "lastName", "asc")) == [5, 4, 1, 3, 2]


def test_numeric_sort_descending():
    assert ids(sort_players(ROSTER, "yards", "desc")) == [1, 3, 5, 2, 4]


def test_equal_keys_keep_input_order_in_both_directions():
    # Warner and Moody both have 0 yards; Warner comes first in the input
    assert ids(sort_players(ROSTER, "yards", "asc"))[:2] == [2, 4]
    assert ids(sort_players(ROSTER, "yards", "desc"))[-2:] == [2, 4]


def test_efficiency_treats_zero_games_as_one():
    # Kittle 1.0, Purdy 1.82, Samuel 0.5, Warner 0, Moody 0/1
    assert ids(sort_players(ROSTER, "efficiency", "desc")) == [1, 5, 3, 2, 4]


def test_missing_rank_sorts_last():
    unranked = PlayerRow(id=9, player_name="New Guy")
    assert ids(sort_players([unranked, *ROSTER], "seasonRank", "asc"))[-1] == 9


def test_position_sort_uses_inferred_position():
    positions = [row.position for row in build_display_rows(sort_players(ROSTER, "position"))]
    assert positions == sorted(positions)


def test_unknown_field_keeps_input_order():
    assert ids(sort_players(ROSTER, "no_such_field", "desc")) == ids(ROSTER)


def test_sort_dedupes():
    assert ids(sort_players([*ROSTER, ROSTER[0]], "seasonRank")) == ids(
        sort_players(ROSTER, "seasonRank")
    )


def test_toggle_same_field_flips_direction():
    state = SortState("yards", "desc")
    assert state.toggle("yards") == SortState("yards", "asc")
    assert state.toggle("yards").toggle("yards") == state


def test_toggle_new_field_defaults():
    state = SortState()
    assert state.toggle("touchdowns") == SortState("touchdowns", "desc")
    assert SortState("yards", "asc").toggle("gameRank") == SortState("gameRank", "asc")


def test_display_ranks_are_dense_after_filtering():
    # Purdy (season rank 1) has no "e" in his name
    visible = sort_players(apply_filters(ROSTER, FilterState(search_name="e")), "yards", "desc")
    rows = build_display_rows(visible)

    stored = sorted(row.player.season_rank for row in rows)
    assert stored == [2, 3, 4, 5]
    assert sorted(row.display_season_rank for row in rows) == [1, 2, 3, 4]
    assert sorted(row.display_game_rank for row in rows) == [1, 2, 3, 4]

    # Display rank follows stored rank, not table order
    best = min(rows, key=lambda row: row.player.season_rank)
    assert best.display_season_rank == 1


def test_display_rows_drop_repeated_names_and_split_names():
    twin = PlayerRow(id=10, player_name="Brock Purdy", touchdowns=1)
    rows = build_display_rows([ROSTER[0], twin, ROSTER[1]])
    assert [row.player.id for row in rows] == [1, 2]
    assert (rows[0].first_name, rows[0].last_name) == ("Brock", "Purdy")


def test_placeholder_names_in_display_rows():
    broken = PlayerRow(id=42, player_name="error: generator failed", touchdowns=1)
    (row,) = build_display_rows([broken])
    assert row.name == "Player 42"
    assert (row.first_name, row.last_name) == ("Player", "42")
