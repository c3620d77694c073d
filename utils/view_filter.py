"""View filter definition for the stats screen and its canonical cache key."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Union

from utils.game_constants import CLASSES

ALL_DECKS_TOKEN = "all"
ALL_OF_CLASS_PREFIX = "all-"


@dataclass(frozen=True)
class AllDecks:
    """Every deck in the active collection."""


@dataclass(frozen=True)
class AllOfClass:
    """Every deck belonging to one class."""

    deck_class: str


@dataclass(frozen=True)
class DeckById:
    deck_id: str


DeckSelector = Union[AllDecks, AllOfClass, DeckById]


def parse_deck_selector(token: str | None) -> DeckSelector:
    """Map the stored ``"all"`` / ``"all-<Class>"`` / raw id tokens onto selectors."""
    token = token or ""
    if token == ALL_DECKS_TOKEN:
        return AllDecks()
    if token.startswith(ALL_OF_CLASS_PREFIX):
        return AllOfClass(token[len(ALL_OF_CLASS_PREFIX) :])
    return DeckById(token)


def selector_token(selector: DeckSelector) -> str:
    if isinstance(selector, AllDecks):
        return ALL_DECKS_TOKEN
    if isinstance(selector, AllOfClass):
        return f"{ALL_OF_CLASS_PREFIX}{selector.deck_class}"
    if isinstance(selector, DeckById):
        return selector.deck_id
    raise TypeError(f"Unknown deck selector: {selector!r}")


def _parse_date(value: Any) -> date | None:
    if not value:
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        return None


def _parse_page(value: Any) -> int:
    try:
        return max(int(value), 1)
    except (TypeError, ValueError):
        return 1


@dataclass(frozen=True)
class DateFilter:
    start: date | None = None
    end: date | None = None

    @property
    def is_active(self) -> bool:
        return bool(self.start or self.end)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> DateFilter:
        data = data or {}
        return cls(start=_parse_date(data.get("start")), end=_parse_date(data.get("end")))

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
        }


@dataclass(frozen=True)
class TagSideFilter:
    include: frozenset[str] = field(default_factory=frozenset)
    exclude: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_active(self) -> bool:
        return bool(self.include or self.exclude)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> TagSideFilter:
        data = data or {}
        return cls(
            include=frozenset(data.get("include") or ()),
            exclude=frozenset(data.get("exclude") or ()),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"include": sorted(self.include), "exclude": sorted(self.exclude)}


@dataclass(frozen=True)
class TagFilter:
    my: TagSideFilter = field(default_factory=TagSideFilter)
    opp: TagSideFilter = field(default_factory=TagSideFilter)

    @property
    def is_active(self) -> bool:
        return self.my.is_active or self.opp.is_active

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> TagFilter:
        data = data or {}
        return cls(my=TagSideFilter.from_dict(data.get("my")), opp=TagSideFilter.from_dict(data.get("opp")))

    def to_dict(self) -> dict[str, Any]:
        return {"my": self.my.to_dict(), "opp": self.opp.to_dict()}


@dataclass(frozen=True)
class ViewFilterSpec:
    """Everything that decides what the stats screen shows."""

    deck_selector: DeckSelector = field(default_factory=AllDecks)
    date_filter: DateFilter = field(default_factory=DateFilter)
    tag_filter: TagFilter = field(default_factory=TagFilter)
    filter_class: str | None = None
    match_history_page: int = 1
    result_history_page: int = 1

    def __post_init__(self) -> None:
        if self.filter_class is not None and self.filter_class not in CLASSES:
            raise ValueError(f"Unknown opponent class filter: {self.filter_class}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "deckId": selector_token(self.deck_selector),
            "dateFilter": self.date_filter.to_dict(),
            "tagFilter": self.tag_filter.to_dict(),
            "filterClass": self.filter_class,
            "matchHistoryCurrentPage": self.match_history_page,
            "resultHistoryCurrentPage": self.result_history_page,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ViewFilterSpec:
        filter_class = data.get("filterClass")
        return cls(
            deck_selector=parse_deck_selector(data.get("deckId")),
            date_filter=DateFilter.from_dict(data.get("dateFilter")),
            tag_filter=TagFilter.from_dict(data.get("tagFilter")),
            filter_class=filter_class if filter_class in CLASSES else None,
            match_history_page=_parse_page(data.get("matchHistoryCurrentPage")),
            result_history_page=_parse_page(data.get("resultHistoryCurrentPage")),
        )


def cache_key(spec: ViewFilterSpec, language: str, mode: str) -> str:
    """Serialize a spec plus language and mode into an order-independent key."""
    payload = {**spec.to_dict(), "language": language, "mode": mode}
    return json.dumps(payload, sort_keys=True, separators=(",", ":"))


__all__ = [
    "AllDecks",
    "AllOfClass",
    "DeckById",
    "DeckSelector",
    "DateFilter",
    "TagSideFilter",
    "TagFilter",
    "ViewFilterSpec",
    "parse_deck_selector",
    "selector_token",
    "cache_key",
]
