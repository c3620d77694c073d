"""Tests for game aggregation, streaks and run summaries."""

from test_helpers import fake_t, make_game, make_run

from utils.game_constants import CLASSES
from utils.game_stats import aggregate_games, format_rate, longest_win_streak, summarize_runs
from utils.records import GameRecord


def _games_with_results(results: list[str]) -> list[GameRecord]:
    return [make_game(f"g{i}", timestamp=1000 + i, result=result) for i, result in enumerate(results)]


def test_longest_streak_mixed_results():
    games = _games_with_results(["Win", "Win", "Loss", "Win", "Win", "Win"])

    assert longest_win_streak(games) == 3


def test_longest_streak_all_losses_is_zero():
    assert longest_win_streak(_games_with_results(["Loss"] * 5)) == 0


def test_longest_streak_all_wins_counts_every_game():
    assert longest_win_streak(_games_with_results(["Win"] * 7)) == 7


def test_longest_streak_uses_chronological_order_not_input_order():
    """Games arrive newest first; the streak must still follow timestamps."""
    games = [
        make_game("c", 300, result="Win"),
        make_game("a", 100, result="Win"),
        make_game("d", 400, result="Win"),
        make_game("b", 200, result="Loss"),
    ]

    # chronological: Win, Loss, Win, Win
    assert longest_win_streak(games) == 2


def test_empty_input_yields_zeroed_aggregate():
    stats = aggregate_games([])

    assert stats.total == 0
    assert stats.wins == 0
    assert stats.losses == 0
    assert stats.longest_streak == 0
    assert stats.opponent_distribution == {cls: 0 for cls in CLASSES}
    assert all(bucket == {"wins": 0, "total": 0} for bucket in stats.win_loss_by_opponent.values())


def test_aggregate_counts_turns_and_opponents():
    games = [
        make_game("1", 100, opponent_class="Dragon", turn="1st", result="Win"),
        make_game("2", 200, opponent_class="Dragon", turn="2nd", result="Loss"),
        make_game("3", 300, opponent_class="Rune", turn="1st", result="Win"),
    ]

    stats = aggregate_games(games)

    assert stats.total == 3
    assert stats.wins == 2
    assert stats.losses == 1
    assert stats.first_turn_total == 2
    assert stats.first_turn_wins == 2
    assert stats.second_turn_total == 1
    assert stats.second_turn_wins == 0
    assert stats.opponent_distribution["Dragon"] == 2
    assert stats.opponent_distribution["Rune"] == 1
    assert stats.opponent_distribution["Haven"] == 0
    assert stats.win_loss_by_opponent["Dragon"] == {"wins": 1, "total": 2}
    assert stats.longest_streak == 1


def test_missing_fields_are_treated_defensively():
    """Unknown class lands in no bucket; a missing result counts as a loss."""
    game = GameRecord(id="x", timestamp=1, opponent_class=None, turn=None, result=None)

    stats = aggregate_games([game])

    assert stats.total == 1
    assert stats.losses == 1
    assert stats.second_turn_total == 1
    assert sum(stats.opponent_distribution.values()) == 0


def test_format_rate_uses_one_decimal():
    assert format_rate(2, 3, fake_t) == "66.7%"
    assert format_rate(2, 2, fake_t) == "100.0%"
    assert format_rate(0, 4, fake_t) == "0.0%"


def test_format_rate_zero_denominator_is_na():
    assert format_rate(0, 0, fake_t) == "N/A"


def test_summarize_runs_average_and_histogram():
    runs = [make_run("r1", 1, 7, 1), make_run("r2", 2, 3, 2), make_run("r3", 3, 3, 2)]

    average, distribution = summarize_runs(runs, fake_t)

    assert average == "4.33"
    assert distribution == [0, 0, 0, 2, 0, 0, 0, 1]


def test_summarize_runs_without_runs():
    average, distribution = summarize_runs([], fake_t)

    assert average == "N/A"
    assert distribution == [0] * 8
