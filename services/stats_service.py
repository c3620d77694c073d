"""
Stats aggregation service.

This module turns a deck collection plus a view filter into everything the
stats screen displays: headline win rates, the opponent breakdown, streaks
and the paginated match/run histories. Results are memoized per filter and
dropped whenever the source collections are replaced.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from loguru import logger

from services.stats_cache import MISS, StatsCache
from services.view_resolver import DisplayDeck, SourcedGame, SourcedRun, resolve_display_deck
from utils.game_constants import CLASSES, ITEMS_PER_PAGE, MODE_TAKE_TWO
from utils.game_stats import GameAggregate, aggregate_games, format_rate, summarize_runs
from utils.pagination import Page, paginate
from utils.records import Deck, Tag
from utils.stats_filters import filter_by_class, filter_by_date, filter_by_tags
from utils.view_filter import ViewFilterSpec, cache_key

Translate = Callable[..., str]


@dataclass(frozen=True)
class HeadlineStats:
    total: int
    wins: int
    losses: int
    first_turn_total: int
    first_turn_wins: int
    second_turn_total: int
    second_turn_wins: int
    longest_streak: int
    win_rate: str
    first_turn_win_rate: str
    second_turn_win_rate: str


@dataclass(frozen=True)
class StatsResult:
    display_deck: DisplayDeck
    stats: HeadlineStats
    # Aggregated before the opponent-class filter.
    breakdown: GameAggregate
    win_rate_by_class: dict[str, str]
    games: Page[SourcedGame]
    runs: Page[SourcedRun]
    filtered_games_count: int
    average_wins: str
    win_distribution: tuple[int, ...]

    @property
    def total_games(self) -> int:
        return self.games.total_items

    @property
    def total_runs(self) -> int:
        return self.runs.total_items

    def play_rate(self, opponent_class: str, t: Translate) -> str:
        """Share of the breakdown population played against ``opponent_class``."""
        count = self.breakdown.opponent_distribution.get(opponent_class, 0)
        return format_rate(count, self.filtered_games_count, t)


def _headline(aggregate: GameAggregate, t: Translate) -> HeadlineStats:
    return HeadlineStats(
        total=aggregate.total,
        wins=aggregate.wins,
        losses=aggregate.losses,
        first_turn_total=aggregate.first_turn_total,
        first_turn_wins=aggregate.first_turn_wins,
        second_turn_total=aggregate.second_turn_total,
        second_turn_wins=aggregate.second_turn_wins,
        longest_streak=aggregate.longest_streak,
        win_rate=format_rate(aggregate.wins, aggregate.total, t),
        first_turn_win_rate=format_rate(aggregate.first_turn_wins, aggregate.first_turn_total, t),
        second_turn_win_rate=format_rate(aggregate.second_turn_wins, aggregate.second_turn_total, t),
    )


class StatsService:
    """Computes and memoizes stats for the stats screen."""

    def __init__(self, cache: StatsCache | None = None, page_size: int = ITEMS_PER_PAGE) -> None:
        self._cache = cache or StatsCache()
        self._page_size = page_size

    @property
    def cache(self) -> StatsCache:
        return self._cache

    def get_stats_for_view(
        self,
        spec: ViewFilterSpec,
        decks: Sequence[Deck],
        tags: Sequence[Tag],
        t: Translate,
        language: str,
        mode: str,
    ) -> StatsResult | None:
        """
        Return the stats for a view, computing them on a cache miss.

        Args:
            spec: Deck selector, filters and history pages
            decks: Deck collection for the active mode (compared by identity)
            tags: Tag collection (compared by identity)
            t: Translation function for placeholders and synthetic deck names
            language: Current language, only used to partition the cache
            mode: Active tracker mode

        Returns:
            StatsResult, or None when the deck selector matches no deck
        """
        self._cache.invalidate_if_changed(decks, tags, mode)
        key = cache_key(spec, language, mode)
        cached = self._cache.get(key)
        if cached is not MISS:
            return cached

        display_deck = resolve_display_deck(spec.deck_selector, decks, mode, t)
        if display_deck is None:
            return None

        result = self._compute(spec, display_deck, t, mode)
        self._cache.store(key, result)
        return result

    def _compute(
        self,
        spec: ViewFilterSpec,
        display_deck: DisplayDeck,
        t: Translate,
        mode: str,
    ) -> StatsResult:
        games = filter_by_date(display_deck.games, spec.date_filter)
        runs = filter_by_date(display_deck.runs, spec.date_filter)
        games = filter_by_tags(games, spec.tag_filter)

        breakdown = aggregate_games([entry.record for entry in games])
        filtered_games_count = len(games)

        games = filter_by_class(games, spec.filter_class)
        headline = aggregate_games([entry.record for entry in games])

        win_rate_by_class = {
            cls: format_rate(
                breakdown.win_loss_by_opponent[cls]["wins"],
                breakdown.win_loss_by_opponent[cls]["total"],
                t,
            )
            for cls in CLASSES
        }

        if mode == MODE_TAKE_TWO:
            average_wins, win_distribution = summarize_runs([entry.record for entry in runs], t)
        else:
            average_wins, win_distribution = summarize_runs([], t)

        sorted_games = sorted(games, key=lambda entry: entry.record.timestamp, reverse=True)
        sorted_runs = sorted(runs, key=lambda entry: entry.record.timestamp, reverse=True)

        logger.debug(
            f"Computed stats for {display_deck.id!r}: {headline.total} games "
            f"({filtered_games_count} before class filter), {len(sorted_runs)} runs"
        )
        return StatsResult(
            display_deck=display_deck,
            stats=_headline(headline, t),
            breakdown=breakdown,
            win_rate_by_class=win_rate_by_class,
            games=paginate(sorted_games, spec.match_history_page, self._page_size),
            runs=paginate(sorted_runs, spec.result_history_page, self._page_size),
            filtered_games_count=filtered_games_count,
            average_wins=average_wins,
            win_distribution=tuple(win_distribution),
        )


_default_stats_service: StatsService | None = None


def get_stats_service() -> StatsService:
    """Return a shared StatsService instance."""
    global _default_stats_service
    if _default_stats_service is None:
        _default_stats_service = StatsService()
    return _default_stats_service


def reset_stats_service() -> None:
    """Reset the shared StatsService instance (used in tests)."""
    global _default_stats_service
    _default_stats_service = None


def get_stats_for_view(
    spec: ViewFilterSpec,
    decks: Sequence[Deck],
    tags: Sequence[Tag],
    t: Translate,
    language: str,
    mode: str,
) -> StatsResult | None:
    return get_stats_service().get_stats_for_view(spec, decks, tags, t, language, mode)


__all__ = [
    "HeadlineStats",
    "StatsResult",
    "StatsService",
    "get_stats_service",
    "reset_stats_service",
    "get_stats_for_view",
]
