"""Test helper utilities for managing global state in tests.

This module provides utilities for resetting global service and repository
instances to ensure test isolation and prevent state leakage between tests.
It also builds the records most tests need.
"""

import sys
from datetime import datetime
from pathlib import Path

# Add parent directory to sys.path to enable imports from repositories and services
parent_dir = Path(__file__).parent.parent
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))

# ruff: noqa: E402
from repositories.tracker_repository import reset_tracker_repository
from services.stats_service import reset_stats_service
from services.store_service import reset_store_service
from services.tracker_service import reset_tracker_service
from utils.i18n import reset_i18n
from utils.records import Deck, GameRecord, RunRecord


def reset_all_services() -> None:
    """Reset all global service instances."""
    reset_tracker_service()
    reset_stats_service()
    reset_store_service()
    reset_i18n()


def reset_all_repositories() -> None:
    """Reset all global repository instances."""
    reset_tracker_repository()


def reset_all_globals() -> None:
    """Reset all global service and repository instances.

    This is the recommended function to call in test teardown or setup
    to ensure complete isolation between tests.
    """
    reset_all_services()
    reset_all_repositories()


def ms(year: int, month: int, day: int, hour: int = 12, minute: int = 0) -> int:
    """Epoch milliseconds for a local-time moment."""
    return int(datetime(year, month, day, hour, minute).timestamp() * 1000)


def make_game(
    game_id: str,
    timestamp: int,
    opponent_class: str = "Dragon",
    turn: str = "1st",
    result: str = "Win",
    my_tags: tuple[str, ...] = (),
    opp_tags: tuple[str, ...] = (),
) -> GameRecord:
    return GameRecord(
        id=game_id,
        timestamp=timestamp,
        opponent_class=opponent_class,
        turn=turn,
        result=result,
        my_tag_ids=frozenset(my_tags),
        opponent_tag_ids=frozenset(opp_tags),
    )


def make_run(run_id: str, timestamp: int, wins: int, losses: int) -> RunRecord:
    return RunRecord(id=run_id, timestamp=timestamp, wins=wins, losses=losses)


def make_deck(deck_id: str, deck_class: str = "Forest", games=(), runs=(), name: str | None = None) -> Deck:
    return Deck(
        id=deck_id,
        name=name or f"Deck {deck_id}",
        deck_class=deck_class,
        games=tuple(games),
        runs=tuple(runs),
    )


def fake_t(key: str, **kwargs) -> str:
    """Translation stand-in that makes placeholders easy to assert on."""
    if key == "na":
        return "N/A"
    if kwargs:
        params = ",".join(f"{k}={v}" for k, v in sorted(kwargs.items()))
        return f"{key}({params})"
    return key
