"""Contracts for narration output."""

from typing import Protocol


class NarrationSink(Protocol):
    """Accepts final narration strings, e.g. a screen reader or TTS engine."""

    def speak(self, text: str, interrupt: bool = False) -> None:
        """Say ``text``; ``interrupt`` cuts off whatever is currently being spoken."""
