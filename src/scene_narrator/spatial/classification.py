"""Type tag to category tables for scanned entities."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from scene_narrator.models import PriorityClass


class EntityCategory(str, Enum):
    MAP_EXIT = "map_exit"
    SAVE_POINT = "save_point"
    TREASURE = "treasure"
    NPC = "npc"
    SHOP_NPC = "shop_npc"
    INTERACTIVE = "interactive"
    TELEPORT = "teleport"
    EVENT = "event"
    DEFAULT = "default"
    VISUAL = "visual"
    COLLISION = "collision"
    TRIGGER_AREA = "trigger_area"


SCAFFOLDING_CATEGORIES = frozenset({EntityCategory.VISUAL, EntityCategory.COLLISION, EntityCategory.TRIGGER_AREA})

CATEGORY_PRIORITY: Mapping[EntityCategory, PriorityClass] = MappingProxyType(
    {
        EntityCategory.MAP_EXIT: PriorityClass.MAP_EXIT,
        EntityCategory.SAVE_POINT: PriorityClass.SAVE_POINT,
        EntityCategory.TREASURE: PriorityClass.TREASURE,
        EntityCategory.NPC: PriorityClass.NPC,
        EntityCategory.SHOP_NPC: PriorityClass.SHOP_NPC,
        EntityCategory.INTERACTIVE: PriorityClass.INTERACTIVE,
        EntityCategory.TELEPORT: PriorityClass.TELEPORT,
        EntityCategory.EVENT: PriorityClass.EVENT,
        EntityCategory.DEFAULT: PriorityClass.DEFAULT,
    }
)

DEFAULT_TYPE_CATEGORIES: Mapping[str, EntityCategory] = MappingProxyType(
    {
        "GotoMapEventEntity": EntityCategory.MAP_EXIT,
        "MapExit": EntityCategory.MAP_EXIT,
        "SavePointEventEntity": EntityCategory.SAVE_POINT,
        "SavePoint": EntityCategory.SAVE_POINT,
        "FieldTresureBox": EntityCategory.TREASURE,
        "TreasureBox": EntityCategory.TREASURE,
        "FieldNonPlayer": EntityCategory.NPC,
        "Npc": EntityCategory.NPC,
        "ShopNonPlayer": EntityCategory.SHOP_NPC,
        "Shop": EntityCategory.SHOP_NPC,
        "PropEntity": EntityCategory.INTERACTIVE,
        "InteractiveEntity": EntityCategory.INTERACTIVE,
        "TeleportEntity": EntityCategory.TELEPORT,
        "ToLayer": EntityCategory.TELEPORT,
        "EventTriggerEntity": EntityCategory.EVENT,
        "FieldMapObjectDefault": EntityCategory.VISUAL,
        "VisualEffect": EntityCategory.VISUAL,
        "FieldColliderEntity": EntityCategory.COLLISION,
        "Collision": EntityCategory.COLLISION,
        "TriggerArea": EntityCategory.TRIGGER_AREA,
        "AreaTrigger": EntityCategory.TRIGGER_AREA,
    }
)


class ClassificationTable:
    """Immutable lookup from type tag to :class:`EntityCategory`."""

    def __init__(
        self,
        categories: Mapping[str, EntityCategory] = DEFAULT_TYPE_CATEGORIES,
        *,
        fallback: EntityCategory = EntityCategory.DEFAULT,
        scaffolding: frozenset[EntityCategory] = SCAFFOLDING_CATEGORIES,
        priorities: Mapping[EntityCategory, PriorityClass] = CATEGORY_PRIORITY,
    ) -> None:
        self._categories = MappingProxyType(dict(categories))
        self.fallback = fallback
        self.scaffolding = scaffolding
        self._priorities = MappingProxyType(dict(priorities))

    def category_of(self, type_tag: str) -> EntityCategory:
        return self._categories.get(type_tag, self.fallback)

    def is_narratable(self, category: EntityCategory) -> bool:
        return category not in self.scaffolding

    def priority_of(self, category: EntityCategory) -> PriorityClass:
        return self._priorities.get(category, PriorityClass.DEFAULT)

    def with_overrides(self, overrides: Mapping[str, EntityCategory]) -> ClassificationTable:
        merged = dict(self._categories)
        merged.update(overrides)
        return ClassificationTable(
            merged,
            fallback=self.fallback,
            scaffolding=self.scaffolding,
            priorities=self._priorities,
        )
