"""Scan, prioritize, and report nearby entities."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence

from scene_narrator.i18n import MessageCatalog, Translator
from scene_narrator.models import EntityInfo, Vec3
from scene_narrator.navigation.compass import bearing
from scene_narrator.spatial.classification import ClassificationTable, EntityCategory
from scene_narrator.spatial.filters import EntityFilter
from scene_narrator.spatial.grouping import GroupingStrategy, apply_grouping
from scene_narrator.spatial.source import EntitySource

logger = logging.getLogger("scene_narrator.spatial")

NPC_CATEGORIES = frozenset({EntityCategory.NPC, EntityCategory.SHOP_NPC})


class EntityScanner:
    """Turns raw entity handles into a de-duplicated, distance-sorted list.

    Entities that sit on the same quantized position collapse to the member
    with the lowest priority rank; ties keep the earlier handle. Filters run
    before de-duplication, grouping after it.
    """

    def __init__(
        self,
        source: EntitySource,
        table: ClassificationTable | None = None,
        *,
        self_exclusion_distance: float = 0.1,
        dedup_tolerance: float = 0.1,
        filters: Sequence[EntityFilter] = (),
        grouping: Sequence[GroupingStrategy] = (),
    ) -> None:
        if dedup_tolerance <= 0:
            raise ValueError("dedup_tolerance must be positive")
        self.source = source
        self.table = table or ClassificationTable()
        self.self_exclusion_distance = self_exclusion_distance
        self.dedup_tolerance = dedup_tolerance
        self.filters = list(filters)
        self.grouping = list(grouping)

    def scan(self, reference: Vec3, entities: Iterable[Any], max_distance: float) -> list[EntityInfo]:
        infos: list[EntityInfo] = []
        for handle in entities:
            info = self._describe(handle, reference)
            if info is None or info.distance > max_distance:
                continue
            infos.append(info)

        kept = [info for info in infos if self._passes_filters(info, reference)]
        kept = self.deduplicate(kept)
        kept = apply_grouping(kept, self.grouping, reference)
        kept.sort(key=lambda info: info.distance)
        return kept

    def dedup_key(self, position: Vec3) -> tuple[int, int, int]:
        tolerance = self.dedup_tolerance
        return (round(position.x / tolerance), round(position.y / tolerance), round(position.z / tolerance))

    def deduplicate(self, infos: Sequence[EntityInfo]) -> list[EntityInfo]:
        best: dict[tuple[int, int, int], EntityInfo] = {}
        for info in infos:
            key = self.dedup_key(info.position)
            current = best.get(key)
            if current is None or info.priority_class < current.priority_class:
                best[key] = info
        return list(best.values())

    def _describe(self, handle: Any, reference: Vec3) -> EntityInfo | None:
        if handle is None:
            return None
        try:
            position = self.source.get_position(handle)
            if position is None:
                return None
            distance = reference.distance_to(position)
            if distance <= self.self_exclusion_distance:
                return None
            type_tag = self.source.get_type_tag(handle)
            category = self.table.category_of(type_tag)
            if not self.table.is_narratable(category):
                return None
            display_name = self.source.get_display_name(handle)
            details = dict(self.source.get_details(handle) or {})
        except Exception:  # noqa: BLE001
            logger.warning("entity_unresolvable", exc_info=True)
            return None

        return EntityInfo(
            handle=handle,
            position=position,
            distance=distance,
            type_tag=type_tag,
            display_name=display_name,
            priority_class=self.table.priority_of(category),
            category=category.value,
            is_npc=category in NPC_CATEGORIES,
            is_treasure=category is EntityCategory.TREASURE,
            details=details,
        )

    def _passes_filters(self, info: EntityInfo, reference: Vec3) -> bool:
        for entity_filter in self.filters:
            try:
                if not entity_filter.accepts(info, reference):
                    return False
            except Exception:  # noqa: BLE001
                logger.warning("entity_filter_failed", extra={"filter": entity_filter.name}, exc_info=True)
                return False
        return True


def format_report(
    infos: Sequence[EntityInfo],
    radius: float,
    limit: int = 5,
    translator: Translator | None = None,
) -> str:
    """Bounded spoken summary of a scan result."""
    translator = translator or MessageCatalog()
    if not infos:
        return translator.translate("No entities within {0} units", f"{radius:g}")

    entries = [translator.translate("{0} at {1} units", info.label, f"{info.distance:.1f}") for info in infos[:limit]]
    report = translator.translate("{0} entities nearby: {1}", len(infos), ". ".join(entries))
    remaining = len(infos) - limit
    if remaining > 0:
        suffix = translator.translate("...and {0} more", remaining)
        report = f"{report}. {suffix}"
    return report


def describe_bearing(reference: Vec3, target: Vec3, translator: Translator | None = None) -> str:
    translator = translator or MessageCatalog()
    return translator.translate(bearing(reference, target).value)


def describe_entity(info: EntityInfo, reference: Vec3, translator: Translator | None = None) -> str:
    """Name, live bearing, and current distance; recomputed from ``reference`` every call."""
    translator = translator or MessageCatalog()
    distance = reference.distance_to(info.position)
    return translator.translate(
        "{0}, {1}, {2} units",
        info.label,
        describe_bearing(reference, info.position, translator),
        f"{distance:.1f}",
    )
