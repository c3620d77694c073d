"""Record types for logged games, Take Two runs, decks and tags.

Every record is a frozen dataclass holding tuples/frozensets. Changing a deck
therefore always means building a new deck (and a new deck collection), which
is what lets the stats cache detect changes by identity alone.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Any

from utils.game_constants import MAX_RUN_LOSSES, MAX_RUN_WINS


def _tag_ids(value: Any) -> frozenset[str]:
    if not value:
        return frozenset()
    return frozenset(str(tag_id) for tag_id in value if tag_id)


def _as_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def validate_run_tally(wins: int, losses: int) -> None:
    """Raise ValueError unless the tally describes a finished Take Two run."""
    if not 0 <= wins <= MAX_RUN_WINS:
        raise ValueError(f"Run wins must be between 0 and {MAX_RUN_WINS}, got {wins}")
    if not 0 <= losses <= MAX_RUN_LOSSES:
        raise ValueError(f"Run losses must be between 0 and {MAX_RUN_LOSSES}, got {losses}")
    if wins == MAX_RUN_WINS and losses == MAX_RUN_LOSSES:
        raise ValueError("A run cannot reach both the win and the loss cap")


@dataclass(frozen=True)
class GameRecord:
    """A single logged game."""

    id: str
    timestamp: int
    opponent_class: str | None
    turn: str | None
    result: str | None
    my_tag_ids: frozenset[str] = field(default_factory=frozenset)
    opponent_tag_ids: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameRecord:
        return cls(
            id=str(data.get("id", "")),
            timestamp=_as_int(data.get("timestamp")),
            opponent_class=data.get("opponentClass"),
            turn=data.get("turn"),
            result=data.get("result"),
            my_tag_ids=_tag_ids(data.get("myTagIds")),
            opponent_tag_ids=_tag_ids(data.get("opponentTagIds")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "opponentClass": self.opponent_class,
            "turn": self.turn,
            "result": self.result,
            "myTagIds": sorted(self.my_tag_ids),
            "opponentTagIds": sorted(self.opponent_tag_ids),
        }


@dataclass(frozen=True)
class RunRecord:
    """A completed Take Two draft run, summarized by its final tally."""

    id: str
    timestamp: int
    wins: int
    losses: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RunRecord:
        return cls(
            id=str(data.get("id", "")),
            timestamp=_as_int(data.get("timestamp")),
            wins=_as_int(data.get("wins")),
            losses=_as_int(data.get("losses")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "wins": self.wins,
            "losses": self.losses,
        }


@dataclass(frozen=True)
class Tag:
    id: str
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Tag:
        return cls(id=str(data.get("id", "")), name=str(data.get("name", "")))

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class Deck:
    """A deck owns its games (and, in Take Two mode, its runs)."""

    id: str
    name: str
    deck_class: str
    games: tuple[GameRecord, ...] = ()
    runs: tuple[RunRecord, ...] = ()
    notes: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Deck:
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            deck_class=str(data.get("class", "")),
            games=tuple(GameRecord.from_dict(game) for game in data.get("games") or []),
            runs=tuple(RunRecord.from_dict(run) for run in data.get("runs") or []),
            notes=data.get("notes") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "class": self.deck_class,
            "games": [game.to_dict() for game in self.games],
            "runs": [run.to_dict() for run in self.runs],
            "notes": self.notes,
        }

    def without_unknown_tags(self, known_tag_ids: Iterable[str]) -> Deck:
        """Return a deck whose games only reference tags in ``known_tag_ids``."""
        known = frozenset(known_tag_ids)
        changed = False
        games = []
        for game in self.games:
            my_tags = game.my_tag_ids & known
            opp_tags = game.opponent_tag_ids & known
            if my_tags != game.my_tag_ids or opp_tags != game.opponent_tag_ids:
                game = replace(game, my_tag_ids=my_tags, opponent_tag_ids=opp_tags)
                changed = True
            games.append(game)
        if not changed:
            return self
        return replace(self, games=tuple(games))


__all__ = ["GameRecord", "RunRecord", "Tag", "Deck", "validate_run_tally"]
