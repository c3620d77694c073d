from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from services.store_service import StoreService, get_store_service
from utils.constants import STORAGE_KEY_SETTINGS
from utils.game_constants import CHART_TYPES, MODE_NORMAL, MODES
from utils.i18n import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES
from utils.view_filter import DateFilter, TagFilter

THEMES = ("light", "dark")


@dataclass(frozen=True)
class TrackerSettings:
    """Persisted user preferences, including the filters shared by every stats view."""

    language: str = DEFAULT_LANGUAGE
    mode: str = MODE_NORMAL
    theme: str = "light"
    chart_type: str = "pie"
    global_date_filter: DateFilter = field(default_factory=DateFilter)
    global_tag_filter: TagFilter = field(default_factory=TagFilter)

    def to_dict(self) -> dict[str, Any]:
        return {
            "language": self.language,
            "mode": self.mode,
            "theme": self.theme,
            "chartType": self.chart_type,
            "globalDateFilter": self.global_date_filter.to_dict(),
            "globalTagFilter": self.global_tag_filter.to_dict(),
        }


class StateService:
    """Loads and persists tracker settings."""

    def __init__(self, store: StoreService | None = None) -> None:
        self.store = store or get_store_service()

    @staticmethod
    def coerce_choice(value: Any, choices: Any, default: str) -> str:
        return value if value in choices else default

    def build_settings(self, raw: Any) -> TrackerSettings:
        """Turn a stored settings payload into validated settings."""
        if not isinstance(raw, dict):
            if raw is not None:
                logger.warning(f"Ignoring malformed settings payload of type {type(raw).__name__}")
            raw = {}
        return TrackerSettings(
            language=self.coerce_choice(raw.get("language"), SUPPORTED_LANGUAGES, DEFAULT_LANGUAGE),
            mode=self.coerce_choice(raw.get("mode"), MODES, MODE_NORMAL),
            theme=self.coerce_choice(raw.get("theme"), THEMES, "light"),
            chart_type=self.coerce_choice(raw.get("chartType"), CHART_TYPES, "pie"),
            global_date_filter=DateFilter.from_dict(raw.get("globalDateFilter")),
            global_tag_filter=TagFilter.from_dict(raw.get("globalTagFilter")),
        )

    def load(self) -> TrackerSettings:
        return self.build_settings(self.store.get(STORAGE_KEY_SETTINGS))

    def save(self, settings: TrackerSettings) -> None:
        self.store.put(STORAGE_KEY_SETTINGS, settings.to_dict())


__all__ = ["TrackerSettings", "StateService", "THEMES"]
