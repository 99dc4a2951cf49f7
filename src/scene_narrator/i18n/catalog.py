"""Message templates keyed by their English text.

Lookups fall back to English, then to the key itself, so a missing catalog
never silences narration.
"""

from __future__ import annotations

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Protocol

logger = logging.getLogger("scene_narrator.i18n")


class Translator(Protocol):
    def translate(self, key: str, *args: object) -> str:
        """Return the localized template for ``key`` formatted with ``args``."""


class MessageCatalog:
    """JSON-backed catalog of ``{key: {language: template}}`` entries."""

    def __init__(self, entries: dict[str, dict[str, str]] | None = None, *, language: str = "en") -> None:
        self._entries = dict(entries or {})
        self.language = language

    @classmethod
    def bundled(cls, *, language: str = "en") -> MessageCatalog:
        text = resources.files("scene_narrator.i18n").joinpath("messages.json").read_text(encoding="utf-8")
        return cls(json.loads(text), language=language)

    @classmethod
    def from_file(cls, path: str | Path, *, language: str = "en") -> MessageCatalog:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(payload, dict):
            raise ValueError(f"Message catalog must be a JSON object: {path}")
        return cls(payload, language=language)

    def __len__(self) -> int:
        return len(self._entries)

    def template(self, key: str) -> str:
        if not key:
            return key
        by_language = self._entries.get(key)
        if not by_language:
            return key

        localized = by_language.get(self.language)
        if localized:
            return localized
        english = by_language.get("en")
        if english:
            return english
        return key

    def translate(self, key: str, *args: object) -> str:
        template = self.template(key)
        if not args:
            return template
        try:
            return template.format(*args)
        except (IndexError, KeyError, ValueError):
            logger.warning("message_format_failed", extra={"key": key, "language": self.language})
            return key.format(*args)

    __call__ = translate


def load_catalog(language: str = "en", messages_path: str | None = None) -> MessageCatalog:
    if messages_path:
        return MessageCatalog.from_file(messages_path, language=language)
    return MessageCatalog.bundled(language=language)
