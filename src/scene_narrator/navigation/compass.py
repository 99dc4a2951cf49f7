"""Eight-way compass classification on the x/y plane (+y is north)."""

from __future__ import annotations

import math

from scene_narrator.models import CompassDirection, Vec3

DIAGONAL_THRESHOLD = 0.4
CARDINAL_THRESHOLD = 0.1

_BEARING_BUCKETS = (
    (22.5, CompassDirection.NORTH),
    (67.5, CompassDirection.NORTHEAST),
    (112.5, CompassDirection.EAST),
    (157.5, CompassDirection.SOUTHEAST),
    (202.5, CompassDirection.SOUTH),
    (247.5, CompassDirection.SOUTHWEST),
    (292.5, CompassDirection.WEST),
    (337.5, CompassDirection.NORTHWEST),
)


def classify_vector(delta: Vec3) -> CompassDirection:
    """Classify a movement delta; diagonals need both axes above 0.4 of the unit vector."""
    unit = delta.normalized()
    x, y = unit.x, unit.y

    if abs(x) > DIAGONAL_THRESHOLD and abs(y) > DIAGONAL_THRESHOLD:
        if y > 0:
            return CompassDirection.NORTHEAST if x > 0 else CompassDirection.NORTHWEST
        return CompassDirection.SOUTHEAST if x > 0 else CompassDirection.SOUTHWEST

    if abs(y) > abs(x):
        return CompassDirection.NORTH if y > 0 else CompassDirection.SOUTH
    if abs(x) > CARDINAL_THRESHOLD:
        return CompassDirection.EAST if x > 0 else CompassDirection.WEST
    return CompassDirection.UNKNOWN


def bearing_degrees(origin: Vec3, target: Vec3) -> float:
    """Clockwise angle from north, in ``[0, 360)``."""
    dx = target.x - origin.x
    dy = target.y - origin.y
    angle = math.degrees(math.atan2(dx, dy))
    if angle < 0:
        angle += 360.0
    return angle


def bearing(origin: Vec3, target: Vec3) -> CompassDirection:
    """Live 8-way bearing from ``origin`` to ``target``."""
    if abs(target.x - origin.x) < 1e-5 and abs(target.y - origin.y) < 1e-5:
        return CompassDirection.UNKNOWN

    angle = bearing_degrees(origin, target)
    for upper, direction in _BEARING_BUCKETS:
        if angle < upper:
            return direction
    return CompassDirection.NORTH
