"""Tests for the stats filter stages."""

from datetime import date

from test_helpers import make_game, make_run, ms

from services.view_resolver import SourcedGame
from utils.stats_filters import (
    end_of_day_ms,
    filter_by_class,
    filter_by_date,
    filter_by_tags,
    matches_tag_filter,
    start_of_day_ms,
)
from utils.view_filter import DateFilter, TagFilter, TagSideFilter

# ============= Date Tests =============


def test_inactive_date_filter_returns_input_unchanged():
    games = [make_game("a", ms(2024, 1, 1))]

    assert filter_by_date(games, DateFilter()) is games
    assert filter_by_date(games, None) is games


def test_date_filter_includes_whole_boundary_days():
    games = [
        make_game("before", ms(2024, 3, 9, 23, 59)),
        make_game("start", ms(2024, 3, 10, 0, 0)),
        make_game("end", ms(2024, 3, 12, 23, 59)),
        make_game("after", ms(2024, 3, 13, 0, 0)),
    ]

    kept = filter_by_date(games, DateFilter(start=date(2024, 3, 10), end=date(2024, 3, 12)))

    assert [game.id for game in kept] == ["start", "end"]


def test_date_filter_open_ranges():
    games = [make_game("old", ms(2023, 1, 1)), make_game("new", ms(2024, 6, 1))]

    since = filter_by_date(games, DateFilter(start=date(2024, 1, 1)))
    until = filter_by_date(games, DateFilter(end=date(2023, 12, 31)))

    assert [game.id for game in since] == ["new"]
    assert [game.id for game in until] == ["old"]


def test_date_filter_applies_to_runs():
    runs = [make_run("r1", ms(2024, 1, 1), 3, 2), make_run("r2", ms(2024, 2, 1), 7, 0)]

    kept = filter_by_date(runs, DateFilter(start=date(2024, 1, 15)))

    assert [run.id for run in kept] == ["r2"]


def test_day_bounds_are_one_day_apart():
    day = date(2024, 5, 5)

    assert end_of_day_ms(day) - start_of_day_ms(day) == 24 * 60 * 60 * 1000 - 1


# ============= Tag Tests =============


def test_include_requires_intersection():
    tag_filter = TagFilter(my=TagSideFilter(include=frozenset({"aggro"})))

    assert matches_tag_filter(make_game("a", 1, my_tags=("aggro", "ladder")), tag_filter) is True
    assert matches_tag_filter(make_game("b", 1, my_tags=("control",)), tag_filter) is False


def test_untagged_game_fails_include_and_passes_exclude():
    game = make_game("a", 1)

    include = TagFilter(opp=TagSideFilter(include=frozenset({"x"})))
    exclude = TagFilter(opp=TagSideFilter(exclude=frozenset({"x"})))

    assert matches_tag_filter(game, include) is False
    assert matches_tag_filter(game, exclude) is True


def test_exclude_vetoes_even_when_also_included():
    tag_filter = TagFilter(my=TagSideFilter(include=frozenset({"x"}), exclude=frozenset({"x"})))

    assert matches_tag_filter(make_game("a", 1, my_tags=("x",)), tag_filter) is False


def test_my_and_opponent_sides_are_independent():
    tag_filter = TagFilter(
        my=TagSideFilter(include=frozenset({"mine"})),
        opp=TagSideFilter(exclude=frozenset({"theirs"})),
    )
    games = [
        make_game("ok", 1, my_tags=("mine",)),
        make_game("opp-vetoed", 2, my_tags=("mine",), opp_tags=("theirs",)),
        make_game("wrong-side", 3, opp_tags=("mine",)),
    ]

    kept = filter_by_tags(games, tag_filter)

    assert [game.id for game in kept] == ["ok"]


def test_tag_filter_reads_through_provenance_wrapper():
    wrapped = SourcedGame(make_game("a", 1, my_tags=("x",)), "deck-1", "Forest")
    tag_filter = TagFilter(my=TagSideFilter(include=frozenset({"x"})))

    assert filter_by_tags([wrapped], tag_filter) == [wrapped]


# ============= Class Tests =============


def test_class_filter():
    games = [make_game("a", 1, opponent_class="Rune"), make_game("b", 2, opponent_class="Haven")]

    assert [game.id for game in filter_by_class(games, "Rune")] == ["a"]
    assert filter_by_class(games, None) is games
