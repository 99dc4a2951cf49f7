"""Narration output orchestration."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .dedup import AnnouncementDeduplicator
from .interfaces import NarrationSink

logger = logging.getLogger("scene_narrator.speech")


@dataclass(slots=True)
class NarrationOutputConfig:
    """Configurable controls for spoken narration."""

    enabled: bool = True
    interrupt: bool = False
    max_chars: int = 500


class NarrationOutputService:
    """Normalizes narration text and forwards it to a sink."""

    def __init__(
        self,
        sink: NarrationSink,
        config: NarrationOutputConfig | None = None,
        deduplicator: AnnouncementDeduplicator | None = None,
    ) -> None:
        self._sink = sink
        self._config = config or NarrationOutputConfig()
        self._deduplicator = deduplicator or AnnouncementDeduplicator()

    @property
    def deduplicator(self) -> AnnouncementDeduplicator:
        return self._deduplicator

    def speak(self, text: str | None, interrupt: bool | None = None) -> str | None:
        """Send narration to the sink when output is enabled; returns what was spoken."""
        if not self._config.enabled or text is None:
            return None

        normalized = " ".join(text.split())
        if not normalized:
            return None

        limited = normalized[: self._config.max_chars]
        try:
            self._sink.speak(limited, self._config.interrupt if interrupt is None else interrupt)
        except Exception:  # noqa: BLE001
            logger.exception("narration_sink_failed", extra={"chars": len(limited)})
            return None
        return limited

    def announce(self, context: str, text: str | None, interrupt: bool | None = None) -> str | None:
        """Speak ``text`` unless it repeats the last announcement for ``context``."""
        if text is None:
            return None
        normalized = " ".join(text.split())
        if not normalized or not self._deduplicator.should_announce(context, normalized):
            return None
        return self.speak(normalized, interrupt)

    def reset(self, context: str | None = None) -> None:
        self._deduplicator.reset(context)
