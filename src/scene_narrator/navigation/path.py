"""Compact compass narration of waypoint paths, plus route lookup helpers."""

from __future__ import annotations

import logging
from typing import Callable, Protocol, Sequence

from scene_narrator.i18n import MessageCatalog, Translator
from scene_narrator.models import CompassDirection, PathInfo, PathSegment, Vec3
from scene_narrator.navigation.compass import classify_vector

logger = logging.getLogger("scene_narrator.navigation")

TILE_SIZE = 16.0
MERGE_TOLERANCE = 0.1

# Cardinals first, then diagonals.
ADJACENT_OFFSETS: tuple[Vec3, ...] = (
    Vec3(0.0, TILE_SIZE, 0.0),
    Vec3(TILE_SIZE, 0.0, 0.0),
    Vec3(0.0, -TILE_SIZE, 0.0),
    Vec3(-TILE_SIZE, 0.0, 0.0),
    Vec3(TILE_SIZE, TILE_SIZE, 0.0),
    Vec3(TILE_SIZE, -TILE_SIZE, 0.0),
    Vec3(-TILE_SIZE, -TILE_SIZE, 0.0),
    Vec3(-TILE_SIZE, TILE_SIZE, 0.0),
)

CARDINAL_STEPS: tuple[tuple[CompassDirection, Vec3], ...] = (
    (CompassDirection.NORTH, Vec3(0.0, TILE_SIZE, 0.0)),
    (CompassDirection.SOUTH, Vec3(0.0, -TILE_SIZE, 0.0)),
    (CompassDirection.EAST, Vec3(TILE_SIZE, 0.0, 0.0)),
    (CompassDirection.WEST, Vec3(-TILE_SIZE, 0.0, 0.0)),
)


class RouteFinder(Protocol):
    def search(self, start: Vec3, goal: Vec3) -> list[Vec3] | None:
        """Return waypoints from ``start`` to ``goal`` (inclusive) or ``None``."""


class PathNarrator:
    """Run-length compass summary of a waypoint list, e.g. ``"North 2, East 1"``."""

    def __init__(self, translator: Translator | None = None, *, merge_tolerance: float = MERGE_TOLERANCE) -> None:
        self.translator = translator or MessageCatalog()
        self.merge_tolerance = merge_tolerance

    def segments(self, waypoints: Sequence[Vec3]) -> list[PathSegment]:
        segments: list[PathSegment] = []
        current: Vec3 | None = None
        for start, end in zip(waypoints, waypoints[1:]):
            unit = (end - start).normalized()
            if current is not None and segments and unit.distance_to(current) < self.merge_tolerance:
                segments[-1].step_count += 1
                continue
            current = unit
            segments.append(PathSegment(direction=classify_vector(unit), step_count=1))
        return segments

    def describe(self, waypoints: Sequence[Vec3]) -> str:
        if len(waypoints) < 2:
            return self.translator.translate("No movement needed")
        return self.render(self.segments(waypoints))

    def render(self, segments: Sequence[PathSegment]) -> str:
        parts = [
            self.translator.translate("{0} {1}", self.translator.translate(segment.direction.value), segment.step_count)
            for segment in segments
        ]
        return ", ".join(parts)


def find_path(
    start: Vec3,
    goal: Vec3,
    finder: RouteFinder,
    narrator: PathNarrator | None = None,
) -> PathInfo:
    """Search a route to ``goal``, retrying the eight neighbouring tiles when it is blocked."""
    narrator = narrator or PathNarrator()
    targets = [goal] + [goal + offset for offset in ADJACENT_OFFSETS]
    try:
        for target in targets:
            waypoints = finder.search(start, target)
            if waypoints:
                segments = narrator.segments(waypoints)
                return PathInfo(
                    success=True,
                    segments=segments,
                    raw_waypoints=list(waypoints),
                    description=narrator.describe(waypoints),
                )
    except Exception as exc:  # noqa: BLE001
        logger.warning("route_search_failed", extra={"start": start, "goal": goal}, exc_info=True)
        return PathInfo(success=False, error=f"{type(exc).__name__}: {exc}")

    return PathInfo(success=False, error=narrator.translator.translate("No path found"))


def walkable_directions(
    position: Vec3,
    can_move: Callable[[Vec3, Vec3], bool],
    translator: Translator | None = None,
) -> str:
    """List the cardinal directions one tile away that ``can_move`` allows."""
    translator = translator or MessageCatalog()
    directions: list[str] = []
    try:
        for direction, offset in CARDINAL_STEPS:
            if can_move(position, position + offset):
                directions.append(translator.translate(direction.value))
    except Exception:  # noqa: BLE001
        logger.warning("walkable_check_failed", extra={"position": position}, exc_info=True)
        return translator.translate("Cannot check directions")

    if not directions:
        return translator.translate("Stuck, no walkable directions")
    return ", ".join(directions)
