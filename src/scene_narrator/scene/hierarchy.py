"""Tree walking helpers and per-node capability resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

from scene_narrator.scene.interfaces import (
    DIRECT_TEXT_ROLE,
    ICON_LABEL_TAG,
    NAME_ROLE,
    SceneGraphAccessor,
)

OPTIONS_ROOT_NAME = "config_root"
OPTIONS_CONTENT_PATH = "MaskObject/Scroll View/Viewport/Content"
COMMAND_LIST_MARKERS = ("command_list", "menu_list")


@dataclass(frozen=True, slots=True)
class NodeCapabilities:
    """Narratable facets of a single node."""

    name: str
    direct_text: str | None = None
    label_text: str | None = None
    has_direct_text: bool = False
    is_options_root: bool = False
    is_command_list: bool = False
    is_icon_label: bool = False
    is_scroll_content: bool = False


class CapabilityIndex:
    """Resolves :class:`NodeCapabilities` once per node for one narration request."""

    def __init__(self, accessor: SceneGraphAccessor) -> None:
        self.accessor = accessor
        # Entries hold the node itself so its id cannot be reused while cached.
        self._cache: dict[int, tuple[Any, NodeCapabilities]] = {}

    def of(self, node: Any) -> NodeCapabilities:
        key = id(node)
        cached = self._cache.get(key)
        if cached is None or cached[0] is not node:
            cached = (node, self._resolve(node))
            self._cache[key] = cached
        return cached[1]

    def _resolve(self, node: Any) -> NodeCapabilities:
        accessor = self.accessor
        name = accessor.get_name(node) or ""
        roles = list(accessor.get_text_roles(node))
        tags = accessor.get_tags(node)

        direct_text = None
        has_direct_text = roles == [DIRECT_TEXT_ROLE]
        if has_direct_text:
            direct_text = accessor.get_attached_text(node, DIRECT_TEXT_ROLE)

        label_text = accessor.get_attached_text(node, NAME_ROLE) if NAME_ROLE in roles else None

        parent = accessor.get_parent(node)
        parent_name = accessor.get_name(parent) if parent is not None else ""
        grandparent = accessor.get_parent(parent) if parent is not None else None
        grandparent_name = accessor.get_name(grandparent) if grandparent is not None else ""

        return NodeCapabilities(
            name=name,
            direct_text=direct_text,
            label_text=label_text,
            has_direct_text=has_direct_text,
            is_options_root=name == OPTIONS_ROOT_NAME,
            is_command_list=any(marker in name for marker in COMMAND_LIST_MARKERS),
            is_icon_label=ICON_LABEL_TAG in tags,
            is_scroll_content=name == "Content"
            and (parent_name == "Viewport" or grandparent_name == "Scroll View"),
        )


def ancestors(accessor: SceneGraphAccessor, node: Any, max_depth: int) -> Iterator[Any]:
    """Yield ``node`` and its parents, at most ``max_depth`` nodes."""
    current = node
    depth = 0
    while current is not None and depth < max_depth:
        yield current
        current = accessor.get_parent(current)
        depth += 1


def descendants(accessor: SceneGraphAccessor, node: Any, *, include_inactive: bool = False) -> Iterator[Any]:
    """Pre-order walk of ``node``'s subtree, ``node`` included.

    Inactive subtrees are skipped unless ``include_inactive`` is set.
    """
    stack = [node]
    while stack:
        current = stack.pop()
        if not include_inactive and not accessor.is_active(current):
            continue
        yield current
        children = list(accessor.get_children(current))
        stack.extend(reversed(children))


def find_child(accessor: SceneGraphAccessor, node: Any, name: str) -> Any | None:
    for child in accessor.get_children(node):
        if accessor.get_name(child) == name:
            return child
    return None


def find_path(accessor: SceneGraphAccessor, node: Any, path: str) -> Any | None:
    """Follow a ``/``-separated chain of child names below ``node``."""
    current = node
    for part in path.split("/"):
        if not part:
            continue
        current = find_child(accessor, current, part)
        if current is None:
            return None
    return current


def find_descendant_path(accessor: SceneGraphAccessor, node: Any, path: str) -> Any | None:
    """Resolve ``path`` starting from ``node`` or any of its descendants."""
    for candidate in descendants(accessor, node):
        found = find_path(accessor, candidate, path)
        if found is not None:
            return found
    return None


def find_scroll_content(index: CapabilityIndex, root: Any) -> Any | None:
    """Find the scroll-view ``Content`` node holding one child per list entry."""
    for candidate in descendants(index.accessor, root):
        if index.of(candidate).is_scroll_content:
            return candidate
    return None


def child_at(accessor: SceneGraphAccessor, node: Any, position: int) -> Any | None:
    children = accessor.get_children(node)
    if 0 <= position < len(children):
        return children[position]
    return None
