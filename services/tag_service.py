"""
Tag management helpers.

All functions are pure: they take the current collections and return new
ones, leaving the inputs untouched. A collection is returned unchanged (the
same object) when an operation does not affect it, so the stats cache only
invalidates when something really changed.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, replace

from utils.records import Deck, GameRecord, Tag
from utils.result import Result
from utils.view_filter import TagFilter, TagSideFilter


@dataclass(frozen=True)
class RenameOutcome:
    """Either the renamed tag list, or the existing tag the caller should merge into."""

    tags: tuple[Tag, ...]
    merge_source: Tag | None = None
    merge_target: Tag | None = None

    @property
    def needs_merge(self) -> bool:
        return self.merge_target is not None


def find_tag_by_name(tags: Iterable[Tag], name: str, exclude_id: str | None = None) -> Tag | None:
    lowered = name.strip().lower()
    for tag in tags:
        if tag.id != exclude_id and tag.name.lower() == lowered:
            return tag
    return None


def add_tag(tags: Sequence[Tag], name: str, tag_id: str | None = None) -> Result[tuple[Tag, ...], str]:
    name = name.strip()
    if not name:
        return Result.failure("empty")
    if find_tag_by_name(tags, name):
        return Result.failure("duplicate")
    return Result.success((*tags, Tag(id=tag_id or str(uuid.uuid4()), name=name)))


def rename_tag(tags: Sequence[Tag], tag_id: str, new_name: str) -> Result[RenameOutcome, str]:
    new_name = new_name.strip()
    if not new_name:
        return Result.failure("empty")
    source = next((tag for tag in tags if tag.id == tag_id), None)
    if source is None:
        return Result.failure("missing")
    existing = find_tag_by_name(tags, new_name, exclude_id=tag_id)
    if existing:
        return Result.success(RenameOutcome(tags=tuple(tags), merge_source=source, merge_target=existing))
    renamed = tuple(replace(tag, name=new_name) if tag.id == tag_id else tag for tag in tags)
    return Result.success(RenameOutcome(tags=renamed))


def _rewrite_ids(ids: frozenset[str], source_id: str, target_id: str | None) -> frozenset[str]:
    if source_id not in ids:
        return ids
    rewritten = ids - {source_id}
    if target_id is not None:
        rewritten = rewritten | {target_id}
    return rewritten


def _rewrite_game(game: GameRecord, source_id: str, target_id: str | None) -> GameRecord:
    my_tags = _rewrite_ids(game.my_tag_ids, source_id, target_id)
    opp_tags = _rewrite_ids(game.opponent_tag_ids, source_id, target_id)
    if my_tags is game.my_tag_ids and opp_tags is game.opponent_tag_ids:
        return game
    return replace(game, my_tag_ids=my_tags, opponent_tag_ids=opp_tags)


def rewrite_tag_in_decks(
    decks: tuple[Deck, ...], source_id: str, target_id: str | None
) -> tuple[Deck, ...]:
    """Replace ``source_id`` with ``target_id`` in every game (remove it when target is None)."""
    changed = False
    rewritten_decks = []
    for deck in decks:
        games = tuple(_rewrite_game(game, source_id, target_id) for game in deck.games)
        if any(new is not old for new, old in zip(games, deck.games)):
            deck = replace(deck, games=games)
            changed = True
        rewritten_decks.append(deck)
    return tuple(rewritten_decks) if changed else decks


def _rewrite_side(side: TagSideFilter, source_id: str, target_id: str | None) -> TagSideFilter:
    return TagSideFilter(
        include=_rewrite_ids(side.include, source_id, target_id),
        exclude=_rewrite_ids(side.exclude, source_id, target_id),
    )


def rewrite_tag_in_filter(tag_filter: TagFilter, source_id: str, target_id: str | None) -> TagFilter:
    return TagFilter(
        my=_rewrite_side(tag_filter.my, source_id, target_id),
        opp=_rewrite_side(tag_filter.opp, source_id, target_id),
    )


def delete_tag_usage(tag_usage: Mapping[str, int], tag_id: str) -> dict[str, int]:
    return {key: value for key, value in tag_usage.items() if key != tag_id}


def merge_tag_usage(tag_usage: Mapping[str, int], source_id: str, target_id: str) -> dict[str, int]:
    """Keep the most recent timestamp of the two tags under ``target_id``."""
    merged = delete_tag_usage(tag_usage, source_id)
    source_ts = tag_usage.get(source_id)
    target_ts = tag_usage.get(target_id)
    if source_ts and (not target_ts or source_ts > target_ts):
        merged[target_id] = source_ts
    return merged


def record_tag_usage(tag_usage: Mapping[str, int], tag_ids: Iterable[str], now_ms: int) -> dict[str, int]:
    updated = dict(tag_usage)
    for tag_id in tag_ids:
        updated[tag_id] = now_ms
    return updated


def sorted_by_usage(tags: Iterable[Tag], tag_usage: Mapping[str, int]) -> list[Tag]:
    """Most recently used first, then alphabetically."""
    return sorted(tags, key=lambda tag: (-tag_usage.get(tag.id, 0), tag.name.lower()))


__all__ = [
    "RenameOutcome",
    "find_tag_by_name",
    "add_tag",
    "rename_tag",
    "rewrite_tag_in_decks",
    "rewrite_tag_in_filter",
    "delete_tag_usage",
    "merge_tag_usage",
    "record_tag_usage",
    "sorted_by_usage",
]
