"""Tests for the leaderboard filter predicate and its summary text."""

import pytest

from gridstats.dashboard import FilterStore, StatusLine
from gridstats.ranking import FilterState, PlayerRow, apply_filters, describe_filters

A = PlayerRow(id=1, player_name="A", touchdowns=10, yards=100, tackles=5)
B = PlayerRow(id=2, player_name="B", touchdowns=5, yards=900, tackles=2)

ROSTER = [
    PlayerRow(id=1, player_name="Brock Purdy", touchdowns=31, yards=4280, tackles=2),
    PlayerRow(id=2, player_name="Fred Warner", touchdowns=0, yards=0, tackles=132),
    PlayerRow(id=3, player_name="Deebo Samuel", touchdowns=7, yards=1405, tackles=0),
    PlayerRow(id=4, player_name="", touchdowns=1, yards=20, tackles=40),
]


def test_min_touchdowns_example():
    assert apply_filters([A, B], FilterState(min_touchdowns=6)) == [A]


def test_default_filter_is_identity():
    assert apply_filters(ROSTER, FilterState()) == ROSTER


def test_filtering_is_idempotent():
    filters = FilterState(min_yards=100, search_name="e")
    once = apply_filters(ROSTER, filters)
    assert apply_filters(once, filters) == once


def test_position_uses_inferred_position():
    assert [p.id for p in apply_filters(ROSTER, FilterState(position="LB"))] == [2]
    assert [p.id for p in apply_filters(ROSTER, FilterState(position="WR"))] == [3]


def test_search_is_case_insensitive_on_display_name():
    assert [p.id for p in apply_filters(ROSTER, FilterState(search_name="PURDY"))] == [1]
    # Empty names display as "Player <id>"
    assert [p.id for p in apply_filters(ROSTER, FilterState(search_name="player 4"))] == [4]


def test_criteria_are_combined():
    filters = FilterState(min_touchdowns=5, min_yards=2000)
    assert [p.id for p in apply_filters(ROSTER, filters)] == [1]


def test_ranks_are_untouched():
    ranked = [p.with_ranks(i + 1, i + 1) for i, p in enumerate(ROSTER)]
    result = apply_filters(ranked, FilterState(min_tackles=30))
    assert [(p.season_rank, p.game_rank) for p in result] == [(2, 2), (4, 4)]


def test_summary_lists_active_criteria_in_order():
    filters = FilterState(
        position="QB", min_touchdowns=6, min_yards=500, min_tackles=10, search_name="ab"
    )
    assert describe_filters(filters, 3) == (
        'Position: QB • Min TD: 6 • Min YD: 500 • Min TKL: 10 • Search: "ab" (3 players)'
    )


def test_summary_is_empty_without_active_criteria():
    assert describe_filters(FilterState(), 12) == ""


def test_status_sink_receives_summary():
    status = StatusLine("stale text")
    apply_filters([A, B], FilterState(min_touchdowns=6), status)
    assert status.text == "Min TD: 6 (1 players)"

    apply_filters([A, B], FilterState(), status)
    assert status.text == "", "Clearing filters should clear the status line"


def test_updated_parses_form_input():
    filters = FilterState().updated("min_yards", "250yds")
    assert filters.min_yards == 250
    assert FilterState().updated("min_yards", "junk").min_yards == 0
    assert filters.is_active
    assert not FilterState().is_active


def test_unknown_filter_name_is_rejected():
    with pytest.raises(KeyError):
        FilterState().updated("max_yards", 10)


def test_negative_minimum_means_no_filter():
    assert FilterState(min_tackles=-1) == FilterState()
    assert apply_filters([A, B], FilterState(min_yards=-50)) == [A, B]


def test_negative_form_input_is_cleared():
    store = FilterStore()
    seen = []
    store.subscribe(seen.append)

    state = store.set("min_touchdowns", "-3")

    assert state.min_touchdowns == 0
    assert not state.is_active
    assert seen == [], "Clamped value equals the current state, so nothing changes"
