"""Constants file."""

import os
import sys
from pathlib import Path

APP_NAME = "SVWB Win Tracker"


def _default_base_dir() -> Path:
    """Return the writable base directory for stored data and logs."""
    override = os.getenv("SVWB_TRACKER_HOME")
    if override:
        return Path(override)
    if getattr(sys, "frozen", False):
        local_appdata = os.getenv("LOCALAPPDATA")
        if local_appdata:
            return Path(local_appdata) / APP_NAME
        return Path.home() / ".svwb_tracker"
    return Path(__file__).resolve().parent.parent


BASE_DATA_DIR = _default_base_dir()
DATA_DIR = BASE_DATA_DIR / "data"
LOGS_DIR = BASE_DATA_DIR / "logs"


STORAGE_KEY_DECKS = "svwb-deck-tracker-decks"
STORAGE_KEY_TAKE_TWO_DECKS = "svwb-deck-tracker-take-two-decks"
STORAGE_KEY_TAGS = "svwb-deck-tracker-tags"
STORAGE_KEY_TAG_USAGE = "svwb-deck-tracker-tag-usage"
STORAGE_KEY_SETTINGS = "svwb-tracker-settings"

__all__ = [
    "APP_NAME",
    "BASE_DATA_DIR",
    "DATA_DIR",
    "LOGS_DIR",
    "STORAGE_KEY_DECKS",
    "STORAGE_KEY_TAKE_TWO_DECKS",
    "STORAGE_KEY_TAGS",
    "STORAGE_KEY_TAG_USAGE",
    "STORAGE_KEY_SETTINGS",
]
