"""Filters editor scaffolding text out of narration."""

from __future__ import annotations

from typing import Iterable

DEFAULT_PLACEHOLDERS: tuple[str, ...] = ("new text", "option a", "text", "---", "label")


class PlaceholderFilter:
    """Case-insensitive blacklist of authoring placeholder strings."""

    def __init__(self, blacklist: Iterable[str] = DEFAULT_PLACEHOLDERS) -> None:
        self._blacklist = frozenset(entry.strip().lower() for entry in blacklist)

    def is_placeholder(self, text: str | None) -> bool:
        if text is None:
            return True
        stripped = text.strip()
        if not stripped:
            return True
        return stripped.lower() in self._blacklist

    def clean(self, text: str | None) -> str | None:
        """Return stripped ``text`` or ``None`` when it is a placeholder."""
        if self.is_placeholder(text):
            return None
        return text.strip()


_default_filter = PlaceholderFilter()


def is_placeholder(text: str | None) -> bool:
    return _default_filter.is_placeholder(text)
