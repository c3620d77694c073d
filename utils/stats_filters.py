"""Predicates and filter stages for the stats pipeline.

Stages accept either raw records or provenance wrappers that expose the raw
record as ``.record``.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, time, timedelta
from typing import Any, TypeVar

from utils.view_filter import DateFilter, TagFilter, TagSideFilter

T = TypeVar("T")


def _record(entry: Any) -> Any:
    return getattr(entry, "record", entry)


def start_of_day_ms(day: date) -> int:
    """Local midnight of ``day`` in epoch milliseconds."""
    return int(datetime.combine(day, time.min).timestamp() * 1000)


def end_of_day_ms(day: date) -> int:
    """Last millisecond of ``day`` in local time."""
    return start_of_day_ms(day + timedelta(days=1)) - 1


def date_bounds(date_filter: DateFilter) -> tuple[int | None, int | None]:
    start_ms = start_of_day_ms(date_filter.start) if date_filter.start else None
    end_ms = end_of_day_ms(date_filter.end) if date_filter.end else None
    return start_ms, end_ms


def in_date_range(timestamp: int, start_ms: int | None, end_ms: int | None) -> bool:
    if start_ms is not None and timestamp < start_ms:
        return False
    if end_ms is not None and timestamp > end_ms:
        return False
    return True


def filter_by_date(entries: Sequence[T], date_filter: DateFilter | None) -> Sequence[T]:
    if date_filter is None or not date_filter.is_active:
        return entries
    start_ms, end_ms = date_bounds(date_filter)
    return [entry for entry in entries if in_date_range(_record(entry).timestamp, start_ms, end_ms)]


def matches_tag_side(tag_ids: frozenset[str], side: TagSideFilter) -> bool:
    if side.include and side.include.isdisjoint(tag_ids):
        return False
    if side.exclude and not side.exclude.isdisjoint(tag_ids):
        return False
    return True


def matches_tag_filter(game: Any, tag_filter: TagFilter) -> bool:
    record = _record(game)
    my_tags = getattr(record, "my_tag_ids", None) or frozenset()
    opp_tags = getattr(record, "opponent_tag_ids", None) or frozenset()
    return matches_tag_side(my_tags, tag_filter.my) and matches_tag_side(opp_tags, tag_filter.opp)


def filter_by_tags(games: Sequence[T], tag_filter: TagFilter | None) -> Sequence[T]:
    if tag_filter is None or not tag_filter.is_active:
        return games
    return [game for game in games if matches_tag_filter(game, tag_filter)]


def filter_by_class(games: Sequence[T], filter_class: str | None) -> Sequence[T]:
    if not filter_class:
        return games
    return [game for game in games if _record(game).opponent_class == filter_class]


__all__ = [
    "start_of_day_ms",
    "end_of_day_ms",
    "date_bounds",
    "in_date_range",
    "filter_by_date",
    "matches_tag_side",
    "matches_tag_filter",
    "filter_by_tags",
    "filter_by_class",
]
