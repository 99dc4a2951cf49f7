"""Collapse related entities into one representative each."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Protocol, Sequence

from scene_narrator.models import EntityInfo, Vec3
from scene_narrator.spatial.classification import EntityCategory


class GroupingStrategy(Protocol):
    name: str

    def group_key(self, info: EntityInfo) -> str | None:
        """Return a key shared by every member of ``info``'s group, or ``None``."""

    def select_representative(self, members: Sequence[EntityInfo], reference: Vec3) -> EntityInfo:
        """Pick the single member announced for the group."""


class MapExitGrouping:
    """Map exits leading to the same destination; the closest one represents them."""

    name = "map_exit"

    def __init__(self, destination_field: str = "destination") -> None:
        self.destination_field = destination_field

    def group_key(self, info: EntityInfo) -> str | None:
        if info.category != EntityCategory.MAP_EXIT.value:
            return None
        destination = info.details.get(self.destination_field)
        if destination is None:
            return None
        return f"MapExit_{destination}"

    def select_representative(self, members: Sequence[EntityInfo], reference: Vec3) -> EntityInfo:
        return min(members, key=lambda member: member.position.distance_to(reference))


@dataclass(frozen=True, slots=True)
class Region:
    min_x: float
    max_x: float
    min_y: float
    max_y: float
    min_z: float | None = None
    max_z: float | None = None

    def contains(self, point: Vec3) -> bool:
        if self.min_z is not None and point.z < self.min_z:
            return False
        if self.max_z is not None and point.z > self.max_z:
            return False
        return self.min_x <= point.x <= self.max_x and self.min_y <= point.y <= self.max_y


class RegionGrouping:
    """Entities inside a named rectangle; the member nearest the centroid represents them."""

    name = "region"

    def __init__(self, regions: Mapping[str, Region]) -> None:
        self.regions = dict(regions)

    def group_key(self, info: EntityInfo) -> str | None:
        for region_name, region in self.regions.items():
            if region.contains(info.position):
                return f"Region_{region_name}"
        return None

    def select_representative(self, members: Sequence[EntityInfo], reference: Vec3) -> EntityInfo:
        count = len(members)
        centroid = Vec3(
            sum(member.position.x for member in members) / count,
            sum(member.position.y for member in members) / count,
            sum(member.position.z for member in members) / count,
        )
        return min(members, key=lambda member: member.position.distance_to(centroid))


def apply_grouping(
    infos: Sequence[EntityInfo],
    strategies: Sequence[GroupingStrategy],
    reference: Vec3,
) -> list[EntityInfo]:
    """Replace each group with its representative; the first matching strategy owns an entity."""
    if not strategies:
        return list(infos)

    result: list[EntityInfo | str] = []
    groups: dict[str, tuple[GroupingStrategy, list[EntityInfo]]] = {}
    for info in infos:
        for strategy in strategies:
            key = strategy.group_key(info)
            if key is None:
                continue
            if key not in groups:
                groups[key] = (strategy, [])
                result.append(key)
            groups[key][1].append(info)
            break
        else:
            result.append(info)

    grouped: list[EntityInfo] = []
    for item in result:
        if isinstance(item, str):
            strategy, members = groups[item]
            representative = strategy.select_representative(members, reference)
            representative.group_key = item
            representative.details["group_size"] = len(members)
            grouped.append(representative)
        else:
            grouped.append(item)
    return grouped
