"""Scene graph contracts, capability lookup, and in-memory fixtures."""

from .hierarchy import CapabilityIndex, NodeCapabilities, ancestors, descendants, find_path
from .interfaces import CursorSource, SceneGraphAccessor
from .loader import JsonSceneLoader, SceneLoadError
from .tree import SceneNode, StaticCursor, TreeSceneAccessor

__all__ = [
    "CapabilityIndex",
    "CursorSource",
    "JsonSceneLoader",
    "NodeCapabilities",
    "SceneGraphAccessor",
    "SceneLoadError",
    "SceneNode",
    "StaticCursor",
    "TreeSceneAccessor",
    "ancestors",
    "descendants",
    "find_path",
]
