"""Key/value blob storage backed by one JSON file per key."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from loguru import logger

from utils.constants import DATA_DIR

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class StoreService:
    """Service that reads and writes JSON blobs by key."""

    def __init__(self, base_dir: Path | None = None) -> None:
        self.base_dir = base_dir or DATA_DIR

    def path_for(self, key: str) -> Path:
        return self.base_dir / f"{_UNSAFE_KEY_CHARS.sub('_', key)}.json"

    def get(self, key: str, default: Any = None) -> Any:
        """
        Load the blob stored under ``key``.

        Args:
            key: Storage key
            default: Value returned when the key is absent or unreadable

        Returns:
            Decoded JSON payload, or ``default``
        """
        path = self.path_for(key)
        if not path.exists():
            return default
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning(f"Invalid JSON at {path}; ignoring stored {key!r}")
            return default
        except OSError as exc:
            logger.warning(f"Failed to read {path}: {exc}")
            return default

    def put(self, key: str, value: Any) -> None:
        path = self.path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(value, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            logger.warning(f"Failed to write {path}: {exc}")

    def delete(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning(f"Failed to remove {path}: {exc}")


_default_store_service: StoreService | None = None


def get_store_service() -> StoreService:
    """Return a shared StoreService instance."""
    global _default_store_service
    if _default_store_service is None:
        _default_store_service = StoreService()
    return _default_store_service


def reset_store_service() -> None:
    global _default_store_service
    _default_store_service = None


__all__ = ["StoreService", "get_store_service", "reset_store_service"]
