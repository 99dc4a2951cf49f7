from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any


@dataclass(frozen=True, slots=True)
class Vec3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def distance_to(self, other: Vec3) -> float:
        return (self - other).length()

    def normalized(self) -> Vec3:
        length = self.length()
        if length < 1e-5:
            return Vec3()
        return Vec3(self.x / length, self.y / length, self.z / length)

    @classmethod
    def parse(cls, raw: str) -> Vec3:
        """Parse ``"x,y"`` or ``"x,y,z"`` into a vector."""
        parts = [part.strip() for part in raw.split(",") if part.strip()]
        if len(parts) not in (2, 3):
            raise ValueError(f"Expected 'x,y' or 'x,y,z', got: {raw!r}")
        values = [float(part) for part in parts]
        return cls(*values)


@dataclass(slots=True)
class FocusContext:
    """Node currently under the cursor plus its index in a repeating list."""

    node: Any
    index: int = 0


class PriorityClass(IntEnum):
    """Ordinal used to pick one representative among co-located entities.

    Lower values win.
    """

    MAP_EXIT = 0
    SAVE_POINT = 1
    TREASURE = 2
    NPC = 3
    SHOP_NPC = 4
    INTERACTIVE = 5
    TELEPORT = 6
    EVENT = 7
    DEFAULT = 8


class CompassDirection(str, Enum):
    NORTH = "North"
    NORTHEAST = "Northeast"
    EAST = "East"
    SOUTHEAST = "Southeast"
    SOUTH = "South"
    SOUTHWEST = "Southwest"
    WEST = "West"
    NORTHWEST = "Northwest"
    UNKNOWN = "Unknown"


@dataclass(slots=True)
class EntityInfo:
    handle: Any
    position: Vec3
    distance: float
    type_tag: str
    display_name: str | None = None
    priority_class: PriorityClass = PriorityClass.DEFAULT
    category: str = "default"
    is_npc: bool = False
    is_treasure: bool = False
    group_key: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def label(self) -> str:
        return self.display_name or self.type_tag


@dataclass(slots=True)
class PathSegment:
    direction: CompassDirection
    step_count: int


@dataclass(slots=True)
class PathInfo:
    success: bool
    segments: list[PathSegment] = field(default_factory=list)
    raw_waypoints: list[Vec3] = field(default_factory=list)
    error: str | None = None
    description: str | None = None

    @property
    def step_count(self) -> int:
        """Number of moves; the first waypoint is the starting position."""
        return max(0, len(self.raw_waypoints) - 1)
