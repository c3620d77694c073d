"""Resolve a deck selector into the deck-like record the stats screen analyzes."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from loguru import logger

from utils.game_constants import ALL_CLASSES_LABEL, CLASSES, MODE_TAKE_TWO
from utils.records import Deck, GameRecord, RunRecord
from utils.view_filter import AllDecks, AllOfClass, DeckById, DeckSelector, selector_token


@dataclass(frozen=True)
class SourcedGame:
    """A game together with the deck that owns it."""

    record: GameRecord
    source_deck_id: str
    source_deck_class: str


@dataclass(frozen=True)
class SourcedRun:
    record: RunRecord
    source_deck_id: str
    source_deck_class: str


@dataclass(frozen=True)
class DisplayDeck:
    id: str
    name: str
    deck_class: str
    games: tuple[SourcedGame, ...]
    runs: tuple[SourcedRun, ...]


def _games_of(decks: Iterable[Deck]) -> tuple[SourcedGame, ...]:
    return tuple(
        SourcedGame(game, deck.id, deck.deck_class) for deck in decks for game in deck.games
    )


def _class_label(deck_class: str, t: Callable[..., str]) -> str:
    if deck_class not in CLASSES:
        return deck_class
    return t(f"classes.{deck_class}")


def _runs_of(decks: Iterable[Deck], mode: str) -> tuple[SourcedRun, ...]:
    if mode != MODE_TAKE_TWO:
        return ()
    return tuple(SourcedRun(run, deck.id, deck.deck_class) for deck in decks for run in deck.runs)


def resolve_display_deck(
    selector: DeckSelector,
    decks: Sequence[Deck],
    mode: str,
    t: Callable[..., str],
) -> DisplayDeck | None:
    """
    Build the synthetic deck for a selector.

    Args:
        selector: Which deck(s) to analyze
        decks: Deck collection for the active mode
        mode: Active tracker mode; runs are only gathered in Take Two mode
        t: Translation function used for the synthetic deck names

    Returns:
        DisplayDeck, or None when a deck id does not match any deck
    """
    if isinstance(selector, AllOfClass):
        class_decks = [deck for deck in decks if deck.deck_class == selector.deck_class]
        class_label = _class_label(selector.deck_class, t)
        return DisplayDeck(
            id=selector_token(selector),
            name=t("allClassDecks", **{"class": class_label}),
            deck_class=selector.deck_class,
            games=_games_of(class_decks),
            runs=_runs_of(class_decks, mode),
        )

    if isinstance(selector, AllDecks):
        name = t("allClasses") if mode == MODE_TAKE_TWO else t("allDecks")
        return DisplayDeck(
            id=selector_token(selector),
            name=name,
            deck_class=ALL_CLASSES_LABEL,
            games=_games_of(decks),
            runs=_runs_of(decks, mode),
        )

    if isinstance(selector, DeckById):
        for deck in decks:
            if deck.id == selector.deck_id:
                return DisplayDeck(
                    id=deck.id,
                    name=deck.name,
                    deck_class=deck.deck_class,
                    games=_games_of([deck]),
                    runs=_runs_of([deck], mode),
                )
        logger.debug(f"No deck matches id {selector.deck_id!r}")
        return None

    raise TypeError(f"Unknown deck selector: {selector!r}")


__all__ = ["SourcedGame", "SourcedRun", "DisplayDeck", "resolve_display_deck"]
