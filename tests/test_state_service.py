"""Tests for settings persistence."""

from datetime import date

from services.state_service import StateService, TrackerSettings
from services.store_service import StoreService
from utils.constants import STORAGE_KEY_SETTINGS
from utils.view_filter import DateFilter, TagFilter, TagSideFilter


def test_missing_settings_fall_back_to_defaults(tmp_path):
    settings = StateService(StoreService(tmp_path)).load()

    assert settings == TrackerSettings()
    assert settings.language == "en"
    assert settings.mode == "normal"


def test_invalid_choices_are_coerced(tmp_path):
    store = StoreService(tmp_path)
    store.put(
        STORAGE_KEY_SETTINGS,
        {"language": "fr", "mode": "arena", "theme": "dark", "chartType": "radar"},
    )

    settings = StateService(store).load()

    assert settings.language == "en"
    assert settings.mode == "normal"
    assert settings.theme == "dark"
    assert settings.chart_type == "pie"


def test_malformed_payload_is_ignored(tmp_path):
    store = StoreService(tmp_path)
    store.put(STORAGE_KEY_SETTINGS, ["not", "a", "dict"])

    assert StateService(store).load() == TrackerSettings()


def test_save_and_load_round_trip(tmp_path):
    service = StateService(StoreService(tmp_path))
    settings = TrackerSettings(
        language="ja",
        mode="takeTwo",
        theme="dark",
        chart_type="bar",
        global_date_filter=DateFilter(start=date(2024, 5, 1)),
        global_tag_filter=TagFilter(opp=TagSideFilter(include=frozenset({"t1"}))),
    )

    service.save(settings)

    assert service.load() == settings
    assert service.store.get(STORAGE_KEY_SETTINGS)["chartType"] == "bar"
