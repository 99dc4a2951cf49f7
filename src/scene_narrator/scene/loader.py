"""JSON fixtures for scene graphs.

A scene file holds one node object::

    {
      "name": "Canvas",
      "active": true,
      "texts": {"text": "Config"},
      "tags": ["icon_label"],
      "position": [0, 16, 0],
      "children": [...]
    }

Only ``name`` is required.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Protocol

from scene_narrator.models import Vec3
from scene_narrator.scene.tree import SceneNode, TreeSceneAccessor


class SceneLoadError(ValueError):
    """Raised when a fixture file does not describe a valid scene."""


class SceneLoader(Protocol):
    """Loads scene graphs from disk or remote storage."""

    def load(self, path: str) -> TreeSceneAccessor:
        """Return an accessor over the loaded scene."""


def parse_position(raw: Any, *, where: str = "position") -> Vec3 | None:
    if raw is None:
        return None
    if isinstance(raw, str):
        try:
            return Vec3.parse(raw)
        except ValueError as exc:
            raise SceneLoadError(f"{where}: {exc}") from exc
    if isinstance(raw, (list, tuple)) and len(raw) in (2, 3):
        try:
            return Vec3(*(float(value) for value in raw))
        except (TypeError, ValueError) as exc:
            raise SceneLoadError(f"{where}: coordinates must be numbers") from exc
    if isinstance(raw, dict):
        try:
            return Vec3(float(raw.get("x", 0.0)), float(raw.get("y", 0.0)), float(raw.get("z", 0.0)))
        except (TypeError, ValueError) as exc:
            raise SceneLoadError(f"{where}: coordinates must be numbers") from exc
    raise SceneLoadError(f"{where}: expected [x, y, z], got {raw!r}")


def build_node(payload: Any, *, where: str = "root") -> SceneNode:
    if not isinstance(payload, dict):
        raise SceneLoadError(f"{where}: node must be an object")
    name = payload.get("name")
    if not isinstance(name, str) or not name:
        raise SceneLoadError(f"{where}: node requires a non-empty 'name'")

    texts = payload.get("texts", {})
    if not isinstance(texts, dict) or not all(isinstance(value, str) for value in texts.values()):
        raise SceneLoadError(f"{where}/{name}: 'texts' must map roles to strings")
    tags = payload.get("tags", [])
    if not isinstance(tags, list):
        raise SceneLoadError(f"{where}/{name}: 'tags' must be a list")

    node = SceneNode(
        name=name,
        active=bool(payload.get("active", True)),
        texts={str(role): value for role, value in texts.items()},
        tags=frozenset(str(tag) for tag in tags),
        position=parse_position(payload.get("position"), where=f"{where}/{name}"),
    )
    children = payload.get("children", [])
    if not isinstance(children, list):
        raise SceneLoadError(f"{where}/{name}: 'children' must be a list")
    for child in children:
        node.add(build_node(child, where=f"{where}/{name}"))
    return node


def read_json(path: str | Path) -> Any:
    target = Path(path).expanduser()
    if not target.exists():
        raise FileNotFoundError(f"Fixture not found: {target}")
    try:
        return json.loads(target.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SceneLoadError(f"{target}: invalid JSON ({exc.msg} at line {exc.lineno})") from exc


class JsonSceneLoader:
    """Builds a :class:`TreeSceneAccessor` from a JSON scene file."""

    def load(self, path: str) -> TreeSceneAccessor:
        return TreeSceneAccessor(build_node(read_json(path)))

    def loads(self, text: str) -> TreeSceneAccessor:
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SceneLoadError(f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc
        return TreeSceneAccessor(build_node(payload))
