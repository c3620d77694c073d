"""Memoization of stats results keyed on the view filter."""

from __future__ import annotations

from typing import Any

from loguru import logger

MISS = object()


class StatsCache:
    """
    Holds computed stats per filter key.

    The whole cache is dropped as soon as the deck collection, the tag
    collection or the mode differs from the last call. Collections are
    compared by identity, so callers must replace a collection rather than
    mutate it in place.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Any] = {}
        self._last_decks: Any = None
        self._last_tags: Any = None
        self._last_mode: str | None = None

    def invalidate_if_changed(self, decks: Any, tags: Any, mode: str) -> bool:
        """Clear the cache when any source reference changed; returns True if cleared."""
        if decks is self._last_decks and tags is self._last_tags and mode == self._last_mode:
            return False
        if self._entries:
            logger.debug(f"Stats cache invalidated ({len(self._entries)} entries dropped)")
        self._entries.clear()
        self._last_decks = decks
        self._last_tags = tags
        self._last_mode = mode
        return True

    def get(self, key: str) -> Any:
        result = self._entries.get(key, MISS)
        if result is MISS:
            logger.debug("Stats cache miss")
        else:
            logger.debug("Stats cache hit")
        return result

    def store(self, key: str, result: Any) -> None:
        self._entries[key] = result

    def clear(self) -> None:
        self._entries.clear()
        self._last_decks = None
        self._last_tags = None
        self._last_mode = None

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries


__all__ = ["MISS", "StatsCache"]
