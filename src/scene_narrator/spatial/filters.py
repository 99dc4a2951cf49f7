"""Optional post-scan entity filters."""

from __future__ import annotations

from typing import Iterable, Protocol

from scene_narrator.models import EntityInfo, Vec3
from scene_narrator.navigation.path import RouteFinder, find_path
from scene_narrator.spatial.classification import EntityCategory


class EntityFilter(Protocol):
    name: str

    def accepts(self, info: EntityInfo, reference: Vec3) -> bool:
        """Return whether ``info`` stays in the scan result."""


class CategoryFilter:
    """Keeps only the given categories, or drops them when ``exclude`` is set."""

    name = "category"

    def __init__(self, categories: Iterable[EntityCategory | str], *, exclude: bool = False) -> None:
        self.categories = frozenset(EntityCategory(category).value for category in categories)
        self.exclude = exclude

    def accepts(self, info: EntityInfo, reference: Vec3) -> bool:
        matched = info.category in self.categories
        return not matched if self.exclude else matched


class ReachabilityFilter:
    """Drops entities with no route from the reference position. Runs one search per entity."""

    name = "reachability"

    def __init__(self, finder: RouteFinder) -> None:
        self.finder = finder

    def accepts(self, info: EntityInfo, reference: Vec3) -> bool:
        return find_path(reference, info.position, self.finder).success
