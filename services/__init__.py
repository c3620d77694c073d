"""
Services package - Business logic layer.

This package exposes business services while avoiding heavy imports at module load time.
"""

from importlib import import_module
from typing import Any

__all__ = [
    "StateService",
    "StatsCache",
    "StatsResult",
    "StatsService",
    "StoreService",
    "TrackerService",
    "TrackerSettings",
    "get_stats_for_view",
    "get_stats_service",
    "get_store_service",
    "get_tracker_service",
    "resolve_display_deck",
]

_LAZY_MODULES = {
    "StateService": "services.state_service",
    "TrackerSettings": "services.state_service",
    "StatsCache": "services.stats_cache",
    "StatsResult": "services.stats_service",
    "StatsService": "services.stats_service",
    "get_stats_for_view": "services.stats_service",
    "get_stats_service": "services.stats_service",
    "StoreService": "services.store_service",
    "get_store_service": "services.store_service",
    "TrackerService": "services.tracker_service",
    "get_tracker_service": "services.tracker_service",
    "resolve_display_deck": "services.view_resolver",
}


def __getattr__(name: str) -> Any:
    if name in _LAZY_MODULES:
        module = import_module(_LAZY_MODULES[name])
        value = getattr(module, name)
        globals()[name] = value
        return value

    raise AttributeError(f"module 'services' has no attribute '{name}'")
