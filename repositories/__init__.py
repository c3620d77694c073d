"""
Repositories package - Data access layer.

This package contains repository classes that handle data persistence and
retrieval, isolating the services from storage details.
"""

from repositories.tracker_repository import (
    TrackerRepository,
    get_tracker_repository,
    initialize_take_two_decks,
)

__all__ = [
    "TrackerRepository",
    "get_tracker_repository",
    "initialize_take_two_decks",
]
