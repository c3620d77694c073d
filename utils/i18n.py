"""Translation lookup for the English and Japanese locales."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from loguru import logger

LOCALES_DIR = Path(__file__).resolve().parent.parent / "locales"
DEFAULT_LANGUAGE = "en"
SUPPORTED_LANGUAGES = ["en", "ja"]


def normalize_language(language: str | None) -> str:
    return language if language in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE


class I18n:
    def __init__(self, language: str = DEFAULT_LANGUAGE, locales_dir: Path | None = None):
        self._locales_dir = locales_dir or LOCALES_DIR
        self._language = normalize_language(language)
        self._translations: dict[str, Any] = {}
        self._load_translations()

    def _load_translations(self) -> None:
        locale_file = self._locales_dir / f"{self._language}.json"
        if not locale_file.exists():
            logger.warning(f"Translation file not found: {locale_file}")
            fallback = self._locales_dir / f"{DEFAULT_LANGUAGE}.json"
            if self._language != DEFAULT_LANGUAGE and fallback.exists():
                logger.info(f"Falling back to {DEFAULT_LANGUAGE}")
                locale_file = fallback

        try:
            with open(locale_file, encoding="utf-8") as f:
                self._translations = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.error(f"Failed to load translations from {locale_file}: {exc}")
            self._translations = {}

    def _lookup(self, key: str) -> Any:
        value: Any = self._translations
        for part in key.split("."):
            if not isinstance(value, dict):
                return None
            value = value.get(part)
        return value

    def t(self, key: str, **kwargs: Any) -> str:
        value = self._lookup(key)
        if value is None:
            logger.warning(f"Translation key not found: {key}")
            return key

        if isinstance(value, str) and kwargs:
            try:
                return value.format(**kwargs)
            except KeyError as exc:
                logger.warning(f"Missing format parameter for key {key}: {exc}")
                return value

        return str(value)

    __call__ = t

    def class_name(self, deck_class: str) -> str:
        """Localized display name of a class, falling back to the raw class id."""
        value = self._lookup(f"classes.{deck_class}")
        return str(value) if value is not None else deck_class

    @property
    def language(self) -> str:
        return self._language

    def set_language(self, language: str) -> None:
        if language not in SUPPORTED_LANGUAGES:
            logger.warning(f"Unsupported language: {language}")
            return
        if language != self._language:
            self._language = language
            self._load_translations()


_global_i18n: I18n | None = None


def get_i18n() -> I18n:
    global _global_i18n
    if _global_i18n is None:
        _global_i18n = I18n()
    return _global_i18n


def reset_i18n() -> None:
    global _global_i18n
    _global_i18n = None


def t(key: str, **kwargs: Any) -> str:
    return get_i18n().t(key, **kwargs)


__all__ = [
    "I18n",
    "get_i18n",
    "reset_i18n",
    "normalize_language",
    "t",
    "SUPPORTED_LANGUAGES",
    "DEFAULT_LANGUAGE",
]
