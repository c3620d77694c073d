"""Tests for StoreService JSON persistence helper."""

import json
from pathlib import Path

import pytest

from services.store_service import StoreService, get_store_service


@pytest.fixture
def store_service(tmp_path: Path) -> StoreService:
    """Provide a StoreService rooted in a temporary directory."""
    return StoreService(tmp_path)


def test_get_missing_key_returns_default(store_service: StoreService):
    """Reading an absent key yields the provided default."""
    assert store_service.get("svwb-deck-tracker-decks") is None
    assert store_service.get("svwb-deck-tracker-decks", []) == []


def test_put_then_get_round_trips_payload(store_service: StoreService):
    """Stored payloads are read back unchanged, non-ASCII included."""
    payload = [{"id": "d1", "name": "エルフ", "class": "Forest", "games": []}]

    store_service.put("svwb-deck-tracker-decks", payload)

    assert store_service.get("svwb-deck-tracker-decks") == payload


def test_get_returns_default_on_invalid_json(store_service: StoreService):
    """Corrupt files are ignored rather than raising."""
    store_service.path_for("settings").write_text("{bad json", encoding="utf-8")

    assert store_service.get("settings", {}) == {}


def test_put_creates_missing_directories(tmp_path: Path):
    """Writing creates the base directory on demand."""
    store = StoreService(tmp_path / "nested" / "data")

    store.put("tags", [])

    assert json.loads(store.path_for("tags").read_text(encoding="utf-8")) == []


def test_path_for_sanitizes_keys(store_service: StoreService, tmp_path: Path):
    """Keys cannot escape the base directory."""
    path = store_service.path_for("../evil key")

    assert path.parent == tmp_path
    assert path.name == ".._evil_key.json"


def test_delete_removes_key(store_service: StoreService):
    store_service.put("tags", [{"id": "t1", "name": "Aggro"}])

    store_service.delete("tags")
    store_service.delete("tags")

    assert store_service.get("tags") is None


def test_get_store_service_returns_singleton():
    """Global accessor returns the same instance."""
    assert get_store_service() is get_store_service()
