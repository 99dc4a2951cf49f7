from __future__ import annotations


class AnnouncementDeduplicator:
    """Remembers the last text announced per context so repeats stay silent."""

    def __init__(self) -> None:
        self._last: dict[str, str] = {}

    def should_announce(self, context: str, text: str) -> bool:
        if self._last.get(context) == text:
            return False
        self._last[context] = text
        return True

    def last(self, context: str) -> str | None:
        return self._last.get(context)

    def reset(self, context: str | None = None) -> None:
        """Forget one context, or every context when ``context`` is ``None``."""
        if context is None:
            self._last.clear()
        else:
            self._last.pop(context, None)
