"""Section-by-section narration of detail screens.

One session is open at a time. Opening a screen replaces any previous
session; input is ignored while closed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from scene_narrator.i18n import MessageCatalog, Translator
from scene_narrator.sections.cursor import NavigationCursor

logger = logging.getLogger("scene_narrator.sections")


class NavigationKey(str, Enum):
    DOWN = "down"
    UP = "up"
    SHIFT_DOWN = "shift_down"
    SHIFT_UP = "shift_up"
    CTRL_DOWN = "ctrl_down"
    CTRL_UP = "ctrl_up"


@dataclass(frozen=True, slots=True)
class ScreenProfile:
    """Per-screen tables and builders plugged into :class:`SectionNavigator`."""

    name: str
    build_sections: Callable[[Any], list[str]]
    group_starts: tuple[int, ...] = (0,)
    group_names: tuple[str, ...] = ()
    read_section: Callable[[Any, int], str | None] | None = None

    def group_name(self, position: int) -> str | None:
        if 0 <= position < len(self.group_names):
            return self.group_names[position]
        return None


class SectionNavigator:
    def __init__(self, emit: Callable[[str], None], translator: Translator | None = None) -> None:
        self.emit = emit
        self.translator = translator or MessageCatalog()
        self._profile: ScreenProfile | None = None
        self._context: Any = None
        self._liveness: Callable[[], bool] | None = None
        self._cursor: NavigationCursor | None = None

    @property
    def is_open(self) -> bool:
        return self._cursor is not None

    @property
    def index(self) -> int | None:
        return self._cursor.index if self._cursor is not None else None

    @property
    def sections(self) -> list[str]:
        return list(self._cursor.sections) if self._cursor is not None else []

    @property
    def profile(self) -> ScreenProfile | None:
        return self._profile

    def open(self, profile: ScreenProfile, context: Any, liveness: Callable[[], bool] | None = None) -> bool:
        """Start a session on ``profile``; returns ``False`` when there is nothing to read."""
        self.close()
        try:
            sections = [section for section in profile.build_sections(context) if section]
        except Exception:  # noqa: BLE001
            logger.exception("section_build_failed", extra={"screen": profile.name})
            return False
        if not sections:
            logger.warning("section_session_empty", extra={"screen": profile.name})
            return False

        self._profile = profile
        self._context = context
        self._liveness = liveness
        self._cursor = NavigationCursor(sections=sections, group_starts=profile.group_starts)
        logger.info("section_session_opened", extra={"screen": profile.name, "sections": len(sections)})
        self._announce(0)
        return True

    def refresh(self) -> None:
        """Rebuild sections after the screen's content changed; does not announce."""
        if self._cursor is None or self._profile is None:
            return
        try:
            sections = [section for section in self._profile.build_sections(self._context) if section]
        except Exception:  # noqa: BLE001
            logger.exception("section_refresh_failed", extra={"screen": self._profile.name})
            return
        if not sections:
            self.close()
            return
        self._cursor.replace(sections)

    def close(self) -> None:
        if self._profile is not None:
            logger.info("section_session_closed", extra={"screen": self._profile.name})
        self._profile = None
        self._context = None
        self._liveness = None
        self._cursor = None

    def next(self) -> None:
        cursor = self._cursor
        if cursor is None:
            return
        if cursor.at_bottom:
            self.emit(self.translator.translate("Bottom"))
            return
        self._move_to(cursor.index + 1)

    def previous(self) -> None:
        cursor = self._cursor
        if cursor is None:
            return
        if cursor.at_top:
            self.emit(self.translator.translate("Top"))
            return
        self._move_to(cursor.index - 1)

    def jump_next_group(self) -> None:
        if self._cursor is not None:
            self._move_to(self._cursor.next_group_start(), with_group=True)

    def jump_previous_group(self) -> None:
        if self._cursor is not None:
            self._move_to(self._cursor.previous_group_start(), with_group=True)

    def jump_top(self) -> None:
        if self._cursor is not None:
            self._move_to(0)

    def jump_bottom(self) -> None:
        if self._cursor is not None:
            self._move_to(len(self._cursor) - 1)

    def handle(self, key: NavigationKey) -> bool:
        """Service one key press; returns whether the press was consumed."""
        if self._cursor is None:
            return False
        if not self._is_alive():
            self.close()
            return False

        actions = {
            NavigationKey.DOWN: self.next,
            NavigationKey.UP: self.previous,
            NavigationKey.SHIFT_DOWN: self.jump_next_group,
            NavigationKey.SHIFT_UP: self.jump_previous_group,
            NavigationKey.CTRL_DOWN: self.jump_bottom,
            NavigationKey.CTRL_UP: self.jump_top,
        }
        try:
            action = actions[NavigationKey(key)]
        except ValueError:
            return False
        action()
        return True

    def _is_alive(self) -> bool:
        if self._liveness is None:
            return True
        try:
            return bool(self._liveness())
        except Exception:  # noqa: BLE001
            logger.warning("section_liveness_failed", exc_info=True)
            return False

    def _section_text(self, index: int) -> str | None:
        """Section text at ``index``; ``None`` when a live read cannot reach its data."""
        profile = self._profile
        cursor = self._cursor
        if profile is None or cursor is None:
            return None
        if profile.read_section is None:
            return cursor.sections[index]
        if self._context is None:
            return None
        try:
            text = profile.read_section(self._context, index)
        except Exception:  # noqa: BLE001
            logger.warning("section_read_failed", extra={"screen": profile.name, "index": index}, exc_info=True)
            return None
        return text or cursor.sections[index]

    def _move_to(self, index: int, *, with_group: bool = False) -> None:
        cursor = self._cursor
        if cursor is None:
            return
        text = self._section_text(index)
        if text is None:
            self.emit(self.translator.translate("Error reading"))
            return

        cursor.index = index
        if with_group and self._profile is not None:
            group_name = self._profile.group_name(cursor.group_of(index))
            if group_name:
                text = self.translator.translate("{0}: {1}", self.translator.translate(group_name), text)
        self.emit(text)

    def _announce(self, index: int) -> None:
        self._move_to(index)
