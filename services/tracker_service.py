"""
Tracker service - deck, game, run and tag mutations.

Every mutation builds new collections instead of editing the current ones,
which keeps the stats cache (compared by identity) correct, then persists
the collections it touched.
"""

from __future__ import annotations

import time
import uuid
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, replace

from loguru import logger

from repositories.tracker_repository import (
    TrackerRepository,
    get_tracker_repository,
    initialize_take_two_decks,
)
from services import tag_service
from services.state_service import StateService, TrackerSettings
from services.stats_service import StatsResult, StatsService, get_stats_service
from utils.game_constants import CLASSES, MODE_TAKE_TWO, MODES, RESULTS, TURNS
from utils.i18n import I18n, SUPPORTED_LANGUAGES
from utils.records import Deck, GameRecord, RunRecord, Tag, validate_run_tally
from utils.result import Result
from utils.view_filter import DateFilter, DeckSelector, TagFilter, ViewFilterSpec


@dataclass(frozen=True)
class TrackerState:
    decks: tuple[Deck, ...] = ()
    take_two_decks: tuple[Deck, ...] = ()
    tags: tuple[Tag, ...] = ()
    tag_usage: Mapping[str, int] = field(default_factory=dict)
    settings: TrackerSettings = field(default_factory=TrackerSettings)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _new_id() -> str:
    return str(uuid.uuid4())


class TrackerService:
    """Owns the tracker state and applies user actions to it."""

    def __init__(
        self,
        repository: TrackerRepository | None = None,
        state_service: StateService | None = None,
        stats_service: StatsService | None = None,
        i18n: I18n | None = None,
        clock: Callable[[], int] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._repository = repository or get_tracker_repository()
        self._state_service = state_service or StateService(self._repository.store)
        self._stats_service = stats_service or get_stats_service()
        self._i18n = i18n or I18n()
        self._clock = clock or _now_ms
        self._new_id = id_factory or _new_id
        self._state = TrackerState(take_two_decks=initialize_take_two_decks(()))

    # ------------------------------------------------------------------ State ---------------------------------------------------------------
    @property
    def state(self) -> TrackerState:
        return self._state

    @property
    def mode(self) -> str:
        return self._state.settings.mode

    @property
    def i18n(self) -> I18n:
        return self._i18n

    def load(self) -> TrackerState:
        """Read every stored collection and the settings."""
        tags = self._repository.load_tags()
        tag_ids = [tag.id for tag in tags]
        settings = self._state_service.load()
        self._state = TrackerState(
            decks=self._repository.load_decks(tag_ids),
            take_two_decks=self._repository.load_take_two_decks(tag_ids),
            tags=tags,
            tag_usage=self._repository.load_tag_usage(),
            settings=settings,
        )
        self._i18n.set_language(settings.language)
        logger.info(
            f"Loaded {len(self._state.decks)} decks, {len(tags)} tags (mode={settings.mode})"
        )
        return self._state

    def current_decks(self) -> tuple[Deck, ...]:
        if self.mode == MODE_TAKE_TWO:
            return self._state.take_two_decks
        return self._state.decks

    def _commit(
        self,
        state: TrackerState,
        *,
        decks: bool = False,
        take_two: bool = False,
        tags: bool = False,
        usage: bool = False,
        settings: bool = False,
    ) -> None:
        self._state = state
        if decks:
            self._repository.save_decks(state.decks)
        if take_two:
            self._repository.save_take_two_decks(state.take_two_decks)
        if tags:
            self._repository.save_tags(state.tags)
        if usage:
            self._repository.save_tag_usage(dict(state.tag_usage))
        if settings:
            self._state_service.save(state.settings)

    def _commit_current_decks(self, decks: tuple[Deck, ...], **extra: bool) -> None:
        if self.mode == MODE_TAKE_TWO:
            self._commit(replace(self._state, take_two_decks=decks), take_two=True, **extra)
        else:
            self._commit(replace(self._state, decks=decks), decks=True, **extra)

    def _find_deck(self, deck_id: str) -> Deck | None:
        return next((deck for deck in self.current_decks() if deck.id == deck_id), None)

    def _replace_deck(self, deck_id: str, update: Callable[[Deck], Deck]) -> tuple[Deck, ...]:
        return tuple(update(deck) if deck.id == deck_id else deck for deck in self.current_decks())

    def _known_tag_ids(self, tag_ids: Iterable[str]) -> frozenset[str]:
        known = {tag.id for tag in self._state.tags}
        return frozenset(tag_id for tag_id in tag_ids if tag_id in known)

    # ------------------------------------------------------------------ Decks ---------------------------------------------------------------
    def add_deck(self, name: str, deck_class: str) -> Result[Deck, str]:
        if self.mode == MODE_TAKE_TWO:
            return Result.failure("take_two_mode")
        name = name.strip()
        if not name:
            return Result.failure("empty_name")
        if deck_class not in CLASSES:
            return Result.failure("invalid_class")
        deck = Deck(id=self._new_id(), name=name, deck_class=deck_class)
        self._commit(replace(self._state, decks=(deck, *self._state.decks)), decks=True)
        logger.info(f"Added deck {name!r} ({deck_class})")
        return Result.success(deck)

    def rename_deck(self, deck_id: str, name: str) -> Result[Deck, str]:
        if self.mode == MODE_TAKE_TWO:
            return Result.failure("take_two_mode")
        name = name.strip()
        if not name:
            return Result.failure("empty_name")
        if self._find_deck(deck_id) is None:
            return Result.failure("missing_deck")
        decks = self._replace_deck(deck_id, lambda deck: replace(deck, name=name))
        self._commit_current_decks(decks)
        return Result.success(self._find_deck(deck_id))

    def update_notes(self, deck_id: str, notes: str) -> Result[Deck, str]:
        if self._find_deck(deck_id) is None:
            return Result.failure("missing_deck")
        decks = self._replace_deck(deck_id, lambda deck: replace(deck, notes=notes))
        self._commit_current_decks(decks)
        return Result.success(self._find_deck(deck_id))

    def delete_deck(self, deck_id: str) -> Result[None, str]:
        """Delete a deck; in Take Two mode the class deck stays but loses its records."""
        if self._find_deck(deck_id) is None:
            return Result.failure("missing_deck")
        if self.mode == MODE_TAKE_TWO:
            decks = self._replace_deck(deck_id, lambda deck: replace(deck, games=(), runs=()))
        else:
            decks = tuple(deck for deck in self._state.decks if deck.id != deck_id)
        self._commit_current_decks(decks)
        logger.info(f"Deleted deck {deck_id} (mode={self.mode})")
        return Result.success(None)

    # ------------------------------------------------------------------ Games ---------------------------------------------------------------
    @staticmethod
    def _validate_game_fields(opponent_class: str, turn: str, result: str) -> str | None:
        if opponent_class not in CLASSES:
            return "invalid_class"
        if turn not in TURNS:
            return "invalid_turn"
        if result not in RESULTS:
            return "invalid_result"
        return None

    def log_game(
        self,
        deck_id: str,
        opponent_class: str,
        turn: str,
        result: str,
        my_tag_ids: Iterable[str] = (),
        opponent_tag_ids: Iterable[str] = (),
    ) -> Result[GameRecord, str]:
        error = self._validate_game_fields(opponent_class, turn, result)
        if error:
            return Result.failure(error)
        if self._find_deck(deck_id) is None:
            return Result.failure("missing_deck")

        now = self._clock()
        game = GameRecord(
            id=self._new_id(),
            timestamp=now,
            opponent_class=opponent_class,
            turn=turn,
            result=result,
            my_tag_ids=self._known_tag_ids(my_tag_ids),
            opponent_tag_ids=self._known_tag_ids(opponent_tag_ids),
        )
        decks = self._replace_deck(deck_id, lambda deck: replace(deck, games=(game, *deck.games)))
        usage = tag_service.record_tag_usage(
            self._state.tag_usage, game.my_tag_ids | game.opponent_tag_ids, now
        )
        self._state = replace(self._state, tag_usage=usage)
        self._commit_current_decks(decks, usage=True)
        logger.info(f"Logged {result} vs {opponent_class} ({turn}) for deck {deck_id}")
        return Result.success(game)

    def edit_game(
        self,
        deck_id: str,
        game_id: str,
        opponent_class: str,
        turn: str,
        result: str,
        my_tag_ids: Iterable[str] = (),
        opponent_tag_ids: Iterable[str] = (),
    ) -> Result[GameRecord, str]:
        """Replace every editable field of a game; the id and timestamp are kept."""
        error = self._validate_game_fields(opponent_class, turn, result)
        if error:
            return Result.failure(error)
        deck = self._find_deck(deck_id)
        original = next((game for game in deck.games if game.id == game_id), None) if deck else None
        if original is None:
            return Result.failure("missing_game")

        edited = replace(
            original,
            opponent_class=opponent_class,
            turn=turn,
            result=result,
            my_tag_ids=self._known_tag_ids(my_tag_ids),
            opponent_tag_ids=self._known_tag_ids(opponent_tag_ids),
        )
        decks = self._replace_deck(
            deck_id,
            lambda d: replace(d, games=tuple(edited if g.id == game_id else g for g in d.games)),
        )
        usage = tag_service.record_tag_usage(
            self._state.tag_usage, edited.my_tag_ids | edited.opponent_tag_ids, self._clock()
        )
        self._state = replace(self._state, tag_usage=usage)
        self._commit_current_decks(decks, usage=True)
        return Result.success(edited)

    def delete_game(self, deck_id: str, game_id: str) -> Result[None, str]:
        deck = self._find_deck(deck_id)
        if deck is None or not any(game.id == game_id for game in deck.games):
            return Result.failure("missing_game")
        decks = self._replace_deck(
            deck_id, lambda d: replace(d, games=tuple(g for g in d.games if g.id != game_id))
        )
        self._commit_current_decks(decks)
        return Result.success(None)

    # ------------------------------------------------------------------ Runs ----------------------------------------------------------------
    def add_run(self, deck_class: str, wins: int, losses: int) -> Result[RunRecord, str]:
        if self.mode != MODE_TAKE_TWO:
            return Result.failure("normal_mode")
        if deck_class not in CLASSES:
            return Result.failure("invalid_class")
        try:
            validate_run_tally(wins, losses)
        except ValueError as exc:
            logger.warning(f"Rejected run {wins}-{losses}: {exc}")
            return Result.failure("invalid_tally")

        run = RunRecord(id=self._new_id(), timestamp=self._clock(), wins=wins, losses=losses)
        decks = self._replace_deck(deck_class, lambda deck: replace(deck, runs=(run, *deck.runs)))
        self._commit_current_decks(decks)
        logger.info(f"Logged Take Two run {wins}-{losses} for {deck_class}")
        return Result.success(run)

    def delete_run(self, deck_id: str, run_id: str) -> Result[None, str]:
        deck = next((d for d in self._state.take_two_decks if d.id == deck_id), None)
        if deck is None or not any(run.id == run_id for run in deck.runs):
            return Result.failure("missing_run")
        decks = tuple(
            replace(d, runs=tuple(r for r in d.runs if r.id != run_id)) if d.id == deck_id else d
            for d in self._state.take_two_decks
        )
        self._commit(replace(self._state, take_two_decks=decks), take_two=True)
        return Result.success(None)

    # ------------------------------------------------------------------ Tags ----------------------------------------------------------------
    def add_tag(self, name: str) -> Result[Tag, str]:
        outcome = tag_service.add_tag(self._state.tags, name, tag_id=self._new_id())
        if outcome.is_error:
            return Result.failure(outcome.error)
        tags = outcome.unwrap()
        self._commit(replace(self._state, tags=tags), tags=True)
        return Result.success(tags[-1])

    def rename_tag(self, tag_id: str, name: str) -> Result[tag_service.RenameOutcome, str]:
        """Rename a tag, or report the existing tag it should be merged into."""
        outcome = tag_service.rename_tag(self._state.tags, tag_id, name)
        if outcome.is_success and not outcome.unwrap().needs_merge:
            self._commit(replace(self._state, tags=outcome.unwrap().tags), tags=True)
        return outcome

    def _cascade(
        self, source_id: str, target_id: str | None, view: ViewFilterSpec | None
    ) -> ViewFilterSpec | None:
        state = self._state
        settings = replace(
            state.settings,
            global_tag_filter=tag_service.rewrite_tag_in_filter(
                state.settings.global_tag_filter, source_id, target_id
            ),
        )
        if target_id is None:
            usage = tag_service.delete_tag_usage(state.tag_usage, source_id)
        else:
            usage = tag_service.merge_tag_usage(state.tag_usage, source_id, target_id)
        self._commit(
            replace(
                state,
                decks=tag_service.rewrite_tag_in_decks(state.decks, source_id, target_id),
                take_two_decks=tag_service.rewrite_tag_in_decks(
                    state.take_two_decks, source_id, target_id
                ),
                tags=tuple(tag for tag in state.tags if tag.id != source_id),
                tag_usage=usage,
                settings=settings,
            ),
            decks=True,
            take_two=True,
            tags=True,
            usage=True,
            settings=True,
        )
        if view is None:
            return None
        return replace(
            view, tag_filter=tag_service.rewrite_tag_in_filter(view.tag_filter, source_id, target_id)
        )

    def _has_tag(self, tag_id: str) -> bool:
        return any(tag.id == tag_id for tag in self._state.tags)

    def delete_tag(
        self, tag_id: str, view: ViewFilterSpec | None = None
    ) -> Result[ViewFilterSpec | None, str]:
        """
        Delete a tag everywhere it is referenced.

        Args:
            tag_id: Tag to delete
            view: Active stats view whose tag filter should drop the tag too

        Returns:
            Result holding the cleaned view (None when no view was given),
            or ``"missing_tag"`` when the tag does not exist
        """
        if not self._has_tag(tag_id):
            return Result.failure("missing_tag")
        logger.info(f"Deleting tag {tag_id}")
        return Result.success(self._cascade(tag_id, None, view))

    def merge_tags(
        self, source_id: str, target_id: str, view: ViewFilterSpec | None = None
    ) -> Result[ViewFilterSpec | None, str]:
        """Rewrite every reference of ``source_id`` to ``target_id`` and drop the source tag."""
        if not self._has_tag(source_id) or not self._has_tag(target_id):
            return Result.failure("missing_tag")
        if source_id == target_id:
            return Result.success(view)
        logger.info(f"Merging tag {source_id} into {target_id}")
        return Result.success(self._cascade(source_id, target_id, view))

    def tags_by_recent_use(self) -> list[Tag]:
        return tag_service.sorted_by_usage(self._state.tags, self._state.tag_usage)

    # ------------------------------------------------------------------ Settings ------------------------------------------------------------
    def set_mode(self, mode: str) -> None:
        if mode not in MODES:
            raise ValueError(f"Unknown mode: {mode}")
        settings = replace(self._state.settings, mode=mode)
        self._commit(replace(self._state, settings=settings), settings=True)

    def set_language(self, language: str) -> None:
        if language not in SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported language: {language}")
        self._i18n.set_language(language)
        settings = replace(self._state.settings, language=language)
        self._commit(replace(self._state, settings=settings), settings=True)

    def set_global_filters(
        self, date_filter: DateFilter | None = None, tag_filter: TagFilter | None = None
    ) -> None:
        settings = self._state.settings
        if date_filter is not None:
            settings = replace(settings, global_date_filter=date_filter)
        if tag_filter is not None:
            settings = replace(settings, global_tag_filter=tag_filter)
        self._commit(replace(self._state, settings=settings), settings=True)

    def reset_all(self) -> None:
        settings = replace(
            self._state.settings, global_date_filter=DateFilter(), global_tag_filter=TagFilter()
        )
        self._commit(
            TrackerState(take_two_decks=initialize_take_two_decks(()), settings=settings),
            decks=True,
            take_two=True,
            tags=True,
            usage=True,
            settings=True,
        )
        logger.info("All tracker data reset")

    # ------------------------------------------------------------------ Stats ---------------------------------------------------------------
    def default_view(self, selector: DeckSelector) -> ViewFilterSpec:
        """A fresh stats view for ``selector`` carrying the global filters."""
        settings = self._state.settings
        return ViewFilterSpec(
            deck_selector=selector,
            date_filter=settings.global_date_filter,
            tag_filter=settings.global_tag_filter,
        )

    def stats_for_view(self, spec: ViewFilterSpec) -> StatsResult | None:
        return self._stats_service.get_stats_for_view(
            spec,
            self.current_decks(),
            self._state.tags,
            self._i18n.t,
            self._i18n.language,
            self.mode,
        )


_default_tracker_service: TrackerService | None = None


def get_tracker_service() -> TrackerService:
    """Return a shared TrackerService instance, loading stored data on first use."""
    global _default_tracker_service
    if _default_tracker_service is None:
        _default_tracker_service = TrackerService()
        _default_tracker_service.load()
    return _default_tracker_service


def reset_tracker_service() -> None:
    global _default_tracker_service
    _default_tracker_service = None


__all__ = [
    "TrackerState",
    "TrackerService",
    "get_tracker_service",
    "reset_tracker_service",
]
