"""Compass directions and path narration."""

from .compass import bearing, bearing_degrees, classify_vector
from .path import PathNarrator, RouteFinder, find_path, walkable_directions

__all__ = [
    "PathNarrator",
    "RouteFinder",
    "bearing",
    "bearing_degrees",
    "classify_vector",
    "find_path",
    "walkable_directions",
]
