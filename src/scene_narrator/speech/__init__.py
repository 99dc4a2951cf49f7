"""Narration sinks and output orchestration."""

from .console import ConsoleNarrationSink
from .dedup import AnnouncementDeduplicator
from .interfaces import NarrationSink
from .output import NarrationOutputConfig, NarrationOutputService

__all__ = [
    "AnnouncementDeduplicator",
    "ConsoleNarrationSink",
    "NarrationOutputConfig",
    "NarrationOutputService",
    "NarrationSink",
]
