"""Tests for the show_stats command-line script."""

import importlib.util
from pathlib import Path

import pytest
from loguru import logger
from test_helpers import make_deck, make_game, ms

from repositories.tracker_repository import TrackerRepository
from services.store_service import StoreService

SCRIPT_PATH = Path(__file__).resolve().parent.parent / "scripts" / "show_stats.py"


@pytest.fixture
def show_stats(tmp_path, monkeypatch):
    spec = importlib.util.spec_from_file_location("show_stats", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    monkeypatch.setattr(module, "LOGS_DIR", tmp_path / "logs")
    yield module
    logger.remove()


@pytest.fixture
def data_dir(tmp_path) -> Path:
    path = tmp_path / "data"
    games = [
        make_game("g1", ms(2024, 3, 1), opponent_class="Dragon", result="Win"),
        make_game("g2", ms(2024, 3, 2), opponent_class="Haven", result="Loss"),
    ]
    deck = make_deck("d1", "Forest", games=games, name="Ramp")
    TrackerRepository(StoreService(path)).save_decks([deck])
    return path


def _log_text(tmp_path: Path) -> str:
    logger.remove()
    log_files = list((tmp_path / "logs").glob("svwb_tracker_*.log"))
    assert len(log_files) == 1
    return log_files[0].read_text(encoding="utf-8")


def test_prints_stats_for_deck(show_stats, data_dir, capsys):
    assert show_stats.main(["d1", "--data-dir", str(data_dir)]) == 0

    out = capsys.readouterr().out
    assert "Ramp" in out
    assert "Win Rate: 50.0%" in out
    assert "Page 1 of 1" in out


def test_verbose_logs_debug_details_to_file(show_stats, data_dir, tmp_path):
    show_stats.main(["all", "--data-dir", str(data_dir), "--verbose"])

    assert "Stats cache miss" in _log_text(tmp_path)


def test_default_level_keeps_debug_out_of_log_file(show_stats, data_dir, tmp_path):
    show_stats.main(["all", "--data-dir", str(data_dir)])

    assert "Stats cache miss" not in _log_text(tmp_path)


def test_unknown_deck_logs_error_and_fails(show_stats, data_dir, tmp_path):
    assert show_stats.main(["missing", "--data-dir", str(data_dir)]) == 1

    assert "Deck not found: missing" in _log_text(tmp_path)


def test_class_filter_and_date_range(show_stats, data_dir, capsys):
    show_stats.main(
        ["all-Forest", "--data-dir", str(data_dir), "--class", "Haven", "--from", "2024-03-02"]
    )

    out = capsys.readouterr().out
    assert "All Forest Decks" in out
    assert "Win Rate: 0.0%" in out
