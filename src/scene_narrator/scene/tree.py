"""In-memory scene graph used by the CLI and by tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterator, Sequence

from scene_narrator.models import Vec3


@dataclass(slots=True, eq=False)
class SceneNode:
    name: str
    active: bool = True
    texts: dict[str, str] = field(default_factory=dict)
    tags: frozenset[str] = frozenset()
    position: Vec3 | None = None
    children: list[SceneNode] = field(default_factory=list)
    parent: SceneNode | None = field(default=None, repr=False)

    def add(self, child: SceneNode) -> SceneNode:
        child.parent = self
        self.children.append(child)
        return child

    def walk(self) -> Iterator[SceneNode]:
        yield self
        for child in self.children:
            yield from child.walk()

    def path(self) -> str:
        parts: list[str] = []
        current: SceneNode | None = self
        while current is not None:
            parts.append(current.name)
            current = current.parent
        return "/".join(reversed(parts))


class TreeSceneAccessor:
    """Scene graph accessor over :class:`SceneNode` trees."""

    def __init__(self, root: SceneNode) -> None:
        self.root = root

    def get_parent(self, node: SceneNode) -> SceneNode | None:
        return node.parent

    def get_children(self, node: SceneNode) -> Sequence[SceneNode]:
        return tuple(node.children)

    def get_name(self, node: SceneNode) -> str:
        return node.name

    def is_active(self, node: SceneNode) -> bool:
        return node.active

    def get_attached_text(self, node: SceneNode, role: str = "text") -> str | None:
        return node.texts.get(role)

    def get_text_roles(self, node: SceneNode) -> Sequence[str]:
        return tuple(node.texts)

    def get_tags(self, node: SceneNode) -> frozenset[str]:
        return node.tags

    def get_world_position(self, node: SceneNode) -> Vec3 | None:
        return node.position

    def find_first(self, predicate: Callable[[SceneNode], bool]) -> SceneNode | None:
        for node in self.root.walk():
            if predicate(node):
                return node
        return None

    def resolve(self, path: str) -> SceneNode | None:
        """Return the node at ``path``, a ``/``-separated chain starting at the root's name."""
        parts = [part for part in path.split("/") if part]
        if not parts or parts[0] != self.root.name:
            return None
        current = self.root
        for part in parts[1:]:
            current = next((child for child in current.children if child.name == part), None)
            if current is None:
                return None
        return current


@dataclass(slots=True)
class StaticCursor:
    """Cursor source with settable node and index."""

    node: SceneNode | None = None
    index: int = 0

    def current_node(self) -> SceneNode | None:
        return self.node

    def current_index(self) -> int:
        return self.index

    def move(self, node: SceneNode | None, index: int) -> None:
        self.node = node
        self.index = index
