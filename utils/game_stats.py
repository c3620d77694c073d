"""Win/loss aggregation over logged games and Take Two runs."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

from utils.game_constants import CLASSES, MAX_RUN_WINS, RESULT_WIN, TURN_FIRST
from utils.records import GameRecord, RunRecord

Translate = Callable[..., str]


def _empty_distribution() -> dict[str, int]:
    return {cls: 0 for cls in CLASSES}


def _empty_win_loss() -> dict[str, dict[str, int]]:
    return {cls: {"wins": 0, "total": 0} for cls in CLASSES}


@dataclass
class GameAggregate:
    total: int = 0
    wins: int = 0
    losses: int = 0
    first_turn_total: int = 0
    first_turn_wins: int = 0
    second_turn_total: int = 0
    second_turn_wins: int = 0
    longest_streak: int = 0
    opponent_distribution: dict[str, int] = field(default_factory=_empty_distribution)
    win_loss_by_opponent: dict[str, dict[str, int]] = field(default_factory=_empty_win_loss)


def longest_win_streak(games: Iterable[GameRecord]) -> int:
    """Longest run of consecutive wins in chronological order."""
    ordered = sorted(games, key=lambda game: game.timestamp)
    longest = 0
    current = 0
    for game in ordered:
        if game.result == RESULT_WIN:
            current += 1
        else:
            longest = max(longest, current)
            current = 0
    return max(longest, current)


def aggregate_games(games: Sequence[GameRecord]) -> GameAggregate:
    """
    Accumulate totals, per-turn splits and per-opponent tallies in one pass.

    Anything other than a Win counts as a loss and anything other than going
    first counts as going second. Games against an unknown class still count
    towards the totals but land in no class bucket.
    """
    stats = GameAggregate()
    for game in games:
        won = game.result == RESULT_WIN
        stats.total += 1
        if won:
            stats.wins += 1
        else:
            stats.losses += 1

        if game.turn == TURN_FIRST:
            stats.first_turn_total += 1
            stats.first_turn_wins += won
        else:
            stats.second_turn_total += 1
            stats.second_turn_wins += won

        bucket = stats.win_loss_by_opponent.get(game.opponent_class)
        if bucket is not None:
            stats.opponent_distribution[game.opponent_class] += 1
            bucket["total"] += 1
            bucket["wins"] += won

    stats.longest_streak = longest_win_streak(games)
    return stats


def format_rate(wins: int, total: int, t: Translate) -> str:
    if total <= 0:
        return t("na")
    return f"{wins / total * 100:.1f}%"


def summarize_runs(runs: Sequence[RunRecord], t: Translate) -> tuple[str, list[int]]:
    """Return the formatted average wins and a 0..7 win-count histogram."""
    distribution = [0] * (MAX_RUN_WINS + 1)
    if not runs:
        return t("na"), distribution
    total_wins = 0
    for run in runs:
        total_wins += run.wins
        if 0 <= run.wins <= MAX_RUN_WINS:
            distribution[run.wins] += 1
    return f"{total_wins / len(runs):.2f}", distribution


__all__ = [
    "GameAggregate",
    "aggregate_games",
    "longest_win_streak",
    "format_rate",
    "summarize_runs",
]
