"""
Tracker Repository - persistence of decks, Take Two decks, tags and tag usage.

Data is stored as JSON blobs under the same keys the browser build of the
tracker used, so an existing data directory can be read as-is.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from loguru import logger

from services.store_service import StoreService, get_store_service
from utils.constants import (
    STORAGE_KEY_DECKS,
    STORAGE_KEY_TAG_USAGE,
    STORAGE_KEY_TAGS,
    STORAGE_KEY_TAKE_TWO_DECKS,
)
from utils.game_constants import CLASSES
from utils.records import Deck, Tag


def initialize_take_two_decks(stored: Iterable[Deck]) -> tuple[Deck, ...]:
    """Return exactly one Take Two deck per class, keeping any stored games and runs."""
    by_id = {deck.id: deck for deck in stored}
    decks = []
    for cls in CLASSES:
        existing = by_id.get(cls)
        if existing is None:
            decks.append(Deck(id=cls, name=cls, deck_class=cls))
        else:
            decks.append(existing)
    return tuple(decks)


class TrackerRepository:
    """Repository for the tracker's stored collections."""

    def __init__(self, store: StoreService | None = None) -> None:
        self.store = store or get_store_service()

    def _load_list(self, key: str) -> list[dict[str, Any]]:
        payload = self.store.get(key, [])
        if not isinstance(payload, list):
            logger.warning(f"Stored {key!r} is not a list; ignoring it")
            return []
        return [item for item in payload if isinstance(item, dict)]

    # ============= Tags =============

    def load_tags(self) -> tuple[Tag, ...]:
        return tuple(Tag.from_dict(item) for item in self._load_list(STORAGE_KEY_TAGS))

    def save_tags(self, tags: Iterable[Tag]) -> None:
        self.store.put(STORAGE_KEY_TAGS, [tag.to_dict() for tag in tags])

    def load_tag_usage(self) -> dict[str, int]:
        payload = self.store.get(STORAGE_KEY_TAG_USAGE, {})
        if not isinstance(payload, dict):
            return {}
        usage: dict[str, int] = {}
        for tag_id, timestamp in payload.items():
            try:
                usage[str(tag_id)] = int(timestamp)
            except (TypeError, ValueError):
                logger.debug(f"Dropping malformed usage timestamp for tag {tag_id}")
        return usage

    def save_tag_usage(self, tag_usage: dict[str, int]) -> None:
        self.store.put(STORAGE_KEY_TAG_USAGE, dict(tag_usage))

    # ============= Decks =============

    def _load_decks(self, key: str, known_tag_ids: Iterable[str]) -> tuple[Deck, ...]:
        known = frozenset(known_tag_ids)
        decks = tuple(
            Deck.from_dict(item).without_unknown_tags(known) for item in self._load_list(key)
        )
        logger.debug(f"Loaded {len(decks)} decks from {key!r}")
        return decks

    def load_decks(self, known_tag_ids: Iterable[str]) -> tuple[Deck, ...]:
        return self._load_decks(STORAGE_KEY_DECKS, known_tag_ids)

    def save_decks(self, decks: Iterable[Deck]) -> None:
        self.store.put(STORAGE_KEY_DECKS, [deck.to_dict() for deck in decks])

    def load_take_two_decks(self, known_tag_ids: Iterable[str]) -> tuple[Deck, ...]:
        return initialize_take_two_decks(self._load_decks(STORAGE_KEY_TAKE_TWO_DECKS, known_tag_ids))

    def save_take_two_decks(self, decks: Iterable[Deck]) -> None:
        self.store.put(STORAGE_KEY_TAKE_TWO_DECKS, [deck.to_dict() for deck in decks])


_default_repository: TrackerRepository | None = None


def get_tracker_repository() -> TrackerRepository:
    global _default_repository
    if _default_repository is None:
        _default_repository = TrackerRepository()
    return _default_repository


def reset_tracker_repository() -> None:
    """Reset the global tracker repository instance (used in tests)."""
    global _default_repository
    _default_repository = None


__all__ = [
    "TrackerRepository",
    "initialize_take_two_decks",
    "get_tracker_repository",
    "reset_tracker_repository",
]
