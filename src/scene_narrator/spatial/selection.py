"""Selection cursor over the latest scan: cycle entities and categories, then announce or route."""

from __future__ import annotations

import logging
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Sequence

from scene_narrator.i18n import MessageCatalog, Translator
from scene_narrator.models import EntityInfo, Vec3
from scene_narrator.navigation.path import PathNarrator, RouteFinder, find_path
from scene_narrator.spatial.classification import EntityCategory
from scene_narrator.spatial.filters import ReachabilityFilter
from scene_narrator.spatial.scanner import describe_entity

logger = logging.getLogger("scene_narrator.spatial.selection")

CATEGORY_CYCLE: tuple[EntityCategory, ...] = (
    EntityCategory.MAP_EXIT,
    EntityCategory.SAVE_POINT,
    EntityCategory.TREASURE,
    EntityCategory.NPC,
    EntityCategory.SHOP_NPC,
    EntityCategory.INTERACTIVE,
    EntityCategory.TELEPORT,
    EntityCategory.EVENT,
    EntityCategory.DEFAULT,
)

CATEGORY_NAMES: Mapping[EntityCategory, str] = MappingProxyType(
    {
        EntityCategory.MAP_EXIT: "Map Exits",
        EntityCategory.SAVE_POINT: "Save Points",
        EntityCategory.TREASURE: "Treasure Chests",
        EntityCategory.NPC: "NPCs",
        EntityCategory.SHOP_NPC: "Shops",
        EntityCategory.INTERACTIVE: "Interactive Objects",
        EntityCategory.TELEPORT: "Teleports",
        EntityCategory.EVENT: "Events",
        EntityCategory.DEFAULT: "Other",
    }
)


class EntityKey(str, Enum):
    NEXT = "next"
    PREVIOUS = "previous"
    REPEAT = "repeat"
    NEXT_CATEGORY = "next_category"
    PREVIOUS_CATEGORY = "previous_category"
    RESET_CATEGORY = "reset_category"
    ROUTE = "route"
    TOGGLE_PATHFINDING = "toggle_pathfinding"


class EntityNavigator:
    """Cycles through scanned entities, optionally narrowed to one category.

    The category filter and the reachability check are applied when the user
    cycles, against the reference position of that key press. Bearings and
    distances are always computed from the reference passed in.
    """

    def __init__(
        self,
        translator: Translator | None = None,
        *,
        finder: RouteFinder | None = None,
        path_narrator: PathNarrator | None = None,
        categories: Sequence[EntityCategory] = CATEGORY_CYCLE,
    ) -> None:
        self.translator = translator or MessageCatalog()
        self.finder = finder
        self.path_narrator = path_narrator or PathNarrator(self.translator)
        self.categories = tuple(categories)
        self.reachable_only = False
        self._infos: list[EntityInfo] = []
        self._category: EntityCategory | None = None
        self._selected: Any = None

    @property
    def category(self) -> EntityCategory | None:
        """Active category, ``None`` meaning all categories."""
        return self._category

    @property
    def selected(self) -> EntityInfo | None:
        for info in self._infos:
            if info.handle is self._selected:
                return info
        return None

    def update(self, infos: Sequence[EntityInfo]) -> None:
        """Replace the scan result; the selection survives when its handle is still present."""
        self._infos = list(infos)
        if self.selected is None:
            self._selected = None

    def visible(self, reference: Vec3) -> list[EntityInfo]:
        infos = self._infos
        if self._category is not None:
            infos = [info for info in infos if info.category == self._category.value]
        if self.reachable_only and self.finder is not None:
            reachability = ReachabilityFilter(self.finder)
            infos = [info for info in infos if reachability.accepts(info, reference)]
        return infos

    def next(self, reference: Vec3) -> str:
        return self._step(reference, 1)

    def previous(self, reference: Vec3) -> str:
        return self._step(reference, -1)

    def _step(self, reference: Vec3, offset: int) -> str:
        candidates = self.visible(reference)
        if not candidates:
            self._selected = None
            return self._empty_text()

        position = self._position_in(candidates)
        if position is None:
            position = 0 if offset > 0 else len(candidates) - 1
        else:
            position = (position + offset) % len(candidates)
        self._selected = candidates[position].handle
        return describe_entity(candidates[position], reference, self.translator)

    def _position_in(self, candidates: Sequence[EntityInfo]) -> int | None:
        for position, info in enumerate(candidates):
            if info.handle is self._selected:
                return position
        return None

    def _empty_text(self) -> str:
        t = self.translator.translate
        if self._category is None:
            return t("No entities")
        return t("No entities in {0}", t(CATEGORY_NAMES.get(self._category, self._category.value)))

    def next_category(self) -> str:
        return self._cycle_category(1)

    def previous_category(self) -> str:
        return self._cycle_category(-1)

    def _cycle_category(self, offset: int) -> str:
        # Position 0 is "All", followed by each category in cycle order.
        order: list[EntityCategory | None] = [None, *self.categories]
        position = order.index(self._category) if self._category in order else 0
        self._category = order[(position + offset) % len(order)]
        self._selected = None
        return self.category_announcement()

    def reset_category(self) -> str:
        self._category = None
        self._selected = None
        return self.category_announcement()

    def category_announcement(self) -> str:
        t = self.translator.translate
        if self._category is None:
            name = t("All")
        else:
            name = t(CATEGORY_NAMES.get(self._category, self._category.value))
        return t("Category: {0}", name)

    def toggle_reachability(self) -> str:
        t = self.translator.translate
        if self.finder is None:
            return t("Pathfinding unavailable")
        self.reachable_only = not self.reachable_only
        logger.info("reachability_filter_toggled", extra={"filter": "reachability", "enabled": self.reachable_only})
        return t("Pathfinding filter on") if self.reachable_only else t("Pathfinding filter off")

    def repeat(self, reference: Vec3) -> str:
        info = self.selected
        if info is None:
            return self.translator.translate("No entity selected")
        return describe_entity(info, reference, self.translator)

    def announce_current(self, reference: Vec3) -> str:
        """Live description of the selection plus a route summary when a finder is configured."""
        t = self.translator.translate
        info = self.selected
        if info is None:
            return t("No entity selected")

        description = describe_entity(info, reference, self.translator)
        if self.finder is None:
            return description
        route = find_path(reference, info.position, self.finder, self.path_narrator)
        if route.success:
            return t("{0}. Path: {1}", description, route.description)
        return t("{0}. No path found", description)

    def handle(self, key: EntityKey, reference: Vec3) -> str:
        actions = {
            EntityKey.NEXT: lambda: self.next(reference),
            EntityKey.PREVIOUS: lambda: self.previous(reference),
            EntityKey.REPEAT: lambda: self.repeat(reference),
            EntityKey.NEXT_CATEGORY: self.next_category,
            EntityKey.PREVIOUS_CATEGORY: self.previous_category,
            EntityKey.RESET_CATEGORY: self.reset_category,
            EntityKey.ROUTE: lambda: self.announce_current(reference),
            EntityKey.TOGGLE_PATHFINDING: self.toggle_reachability,
        }
        return actions[EntityKey(key)]()
