#!/usr/bin/env python3
"""Print the stats screen for a deck, a class or all decks from the stored tracker data."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from datetime import date
from pathlib import Path

from loguru import logger

from repositories.tracker_repository import TrackerRepository
from services.state_service import StateService
from services.stats_service import StatsResult, StatsService
from services.store_service import StoreService
from services.tracker_service import TrackerService
from utils.constants import DATA_DIR, LOGS_DIR
from utils.game_constants import CLASSES, MODES
from utils.i18n import SUPPORTED_LANGUAGES, I18n
from utils.logging_config import configure_logging
from utils.view_filter import DateFilter, parse_deck_selector


def _print_result(result: StatsResult, i18n: I18n) -> None:
    t = i18n.t
    stats = result.stats
    print(result.display_deck.name)
    print(f"  {t('games')}: {stats.total}  {t('wins')}: {stats.wins}  {t('losses')}: {stats.losses}")
    print(f"  {t('winRate')}: {stats.win_rate}")
    print(f"  {t('firstWinRate')}: {stats.first_turn_win_rate} ({stats.first_turn_wins}/{stats.first_turn_total})")
    print(f"  {t('secondWinRate')}: {stats.second_turn_win_rate} ({stats.second_turn_wins}/{stats.second_turn_total})")
    print(f"  {t('longestStreak')}: {stats.longest_streak}")
    if result.total_runs:
        print(f"  {t('averageWins')}: {result.average_wins}  ({t('runs')}: {result.total_runs})")

    print(f"\n{t('opponentBreakdown')}")
    for cls in CLASSES:
        count = result.breakdown.opponent_distribution[cls]
        print(
            f"  {i18n.class_name(cls):<12} {count:>4}  "
            f"{t('playRate')}: {result.play_rate(cls, t):>7}  "
            f"{t('winRate')}: {result.win_rate_by_class[cls]:>7}"
        )

    page = result.games
    print(f"\n{t('matchHistory')} ({t('pageOf', page=page.page, pages=page.total_pages)})")
    for entry in page.items:
        game = entry.record
        print(f"  {game.timestamp}  {game.result!s:<4} vs {game.opponent_class!s:<7} {game.turn}  [{entry.source_deck_id}]")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("deck", help='Deck id, "all" or "all-<Class>".')
    parser.add_argument("--data-dir", type=Path, default=DATA_DIR, help="Directory holding the stored data.")
    parser.add_argument("--from", dest="start", type=date.fromisoformat, help="First day (YYYY-MM-DD).")
    parser.add_argument("--to", dest="end", type=date.fromisoformat, help="Last day (YYYY-MM-DD).")
    parser.add_argument("--class", dest="filter_class", choices=CLASSES, help="Only games against this class.")
    parser.add_argument("--page", type=int, default=1, help="Match history page (default: 1).")
    parser.add_argument("--mode", choices=MODES, help="Switch to (and store) this tracker mode.")
    parser.add_argument("--language", choices=SUPPORTED_LANGUAGES, help="Switch to (and store) this language.")
    parser.add_argument("--verbose", action="store_true", help="Log cache and pipeline details.")
    args = parser.parse_args(argv)

    if args.page < 1:
        parser.error("--page must be at least 1")

    configure_logging(LOGS_DIR, level="DEBUG" if args.verbose else "WARNING")

    store = StoreService(args.data_dir)
    tracker = TrackerService(
        repository=TrackerRepository(store),
        state_service=StateService(store),
        stats_service=StatsService(),
    )
    tracker.load()
    if args.mode:
        tracker.set_mode(args.mode)
    if args.language:
        tracker.set_language(args.language)

    spec = tracker.default_view(parse_deck_selector(args.deck))
    date_filter = spec.date_filter
    if args.start or args.end:
        date_filter = DateFilter(start=args.start, end=args.end)
    spec = replace(
        spec, date_filter=date_filter, filter_class=args.filter_class, match_history_page=args.page
    )

    result = tracker.stats_for_view(spec)
    if result is None:
        logger.error(tracker.i18n.t("deckNotFound", deck=args.deck))
        return 1

    _print_result(result, tracker.i18n)
    return 0


if __name__ == "__main__":
    sys.exit(main())
