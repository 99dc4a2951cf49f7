"""One-frame deferred label reads after a cursor move.

Hosts move their cursor after the event that reports the move, so the label
is read on the next frame. Every schedule bumps a generation counter and only
the newest pending read fires.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Protocol

from scene_narrator.models import FocusContext
from scene_narrator.scene.interfaces import CursorSource
from scene_narrator.text.resolver import LabelResolver

logger = logging.getLogger("scene_narrator.text.deferred")


class FrameScheduler(Protocol):
    def call_next_frame(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` once, on the next frame."""


class ManualFrameScheduler:
    """Frame scheduler driven by the host calling :meth:`tick` once per frame."""

    def __init__(self) -> None:
        self._pending: list[Callable[[], None]] = []

    def call_next_frame(self, callback: Callable[[], None]) -> None:
        self._pending.append(callback)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def tick(self) -> int:
        """Run callbacks queued before this tick; returns how many ran."""
        due, self._pending = self._pending, []
        for callback in due:
            callback()
        return len(due)


class AsyncioFrameScheduler:
    """Treats one event-loop iteration as a frame."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_next_frame(self, callback: Callable[[], None]) -> None:
        loop = self._loop or asyncio.get_running_loop()
        loop.call_soon(callback)


class CursorReadScheduler:
    def __init__(
        self,
        resolver: LabelResolver,
        cursor: CursorSource,
        frames: FrameScheduler,
        on_label: Callable[[str], None],
    ) -> None:
        self.resolver = resolver
        self.cursor = cursor
        self.frames = frames
        self.on_label = on_label
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def cursor_moved(self) -> int:
        """Schedule a read for the next frame, superseding any pending one."""
        self._generation += 1
        generation = self._generation
        self.frames.call_next_frame(lambda: self._fire(generation))
        return generation

    def _fire(self, generation: int) -> None:
        if generation != self._generation:
            logger.debug("deferred_read_superseded", extra={"generation": generation, "latest": self._generation})
            return

        try:
            node = self.cursor.current_node()
            index = self.cursor.current_index()
        except Exception:  # noqa: BLE001
            logger.exception("cursor_read_failed", extra={"generation": generation})
            return
        if node is None:
            return

        label = self.resolver.resolve_label(FocusContext(node=node, index=index))
        if label:
            self.on_label(label)
