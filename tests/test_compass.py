from __future__ import annotations

import pytest

from scene_narrator.models import CompassDirection, Vec3
from scene_narrator.navigation import bearing, bearing_degrees, classify_vector


@pytest.mark.parametrize(
    ("delta", "expected"),
    [
        (Vec3(0.71, 0.71, 0.0), CompassDirection.NORTHEAST),
        (Vec3(-0.71, 0.71, 0.0), CompassDirection.NORTHWEST),
        (Vec3(0.71, -0.71, 0.0), CompassDirection.SOUTHEAST),
        (Vec3(-0.71, -0.71, 0.0), CompassDirection.SOUTHWEST),
        (Vec3(0.0, 1.0, 0.0), CompassDirection.NORTH),
        (Vec3(0.0, -16.0, 0.0), CompassDirection.SOUTH),
        (Vec3(-1.0, 0.2, 0.0), CompassDirection.WEST),
        (Vec3(16.0, 0.0, 0.0), CompassDirection.EAST),
    ],
)
def test_classify_vector(delta: Vec3, expected: CompassDirection) -> None:
    assert classify_vector(delta) is expected


def test_diagonal_needs_both_axes_above_threshold() -> None:
    # 0.35 of the unit vector on x is below the diagonal threshold.
    assert classify_vector(Vec3(0.35, 0.94, 0.0)) is CompassDirection.NORTH


def test_negligible_delta_is_unknown() -> None:
    assert classify_vector(Vec3()) is CompassDirection.UNKNOWN
    assert classify_vector(Vec3(0.0, 0.0, 5.0)) is CompassDirection.UNKNOWN


def test_bearing_buckets() -> None:
    origin = Vec3()

    assert bearing(origin, Vec3(3.0, 10.0)) is CompassDirection.NORTH
    assert bearing(origin, Vec3(10.0, 3.0)) is CompassDirection.EAST
    assert bearing(origin, Vec3(-3.0, -10.0)) is CompassDirection.SOUTH
    assert bearing(origin, Vec3(-10.0, 10.0)) is CompassDirection.NORTHWEST
    assert bearing(origin, Vec3(-3.0, 10.0)) is CompassDirection.NORTH
    assert bearing(origin, origin) is CompassDirection.UNKNOWN


def test_bearing_degrees_is_clockwise_from_north() -> None:
    assert bearing_degrees(Vec3(), Vec3(0.0, 5.0)) == pytest.approx(0.0)
    assert bearing_degrees(Vec3(), Vec3(5.0, 0.0)) == pytest.approx(90.0)
    assert bearing_degrees(Vec3(), Vec3(-5.0, 0.0)) == pytest.approx(270.0)
