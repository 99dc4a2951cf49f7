"""Contracts for reading a host scene graph."""

from __future__ import annotations

from typing import Any, Callable, Protocol, Sequence

from scene_narrator.models import Vec3

DIRECT_TEXT_ROLE = "text"
NAME_ROLE = "name"

ICON_LABEL_TAG = "icon_label"


class SceneGraphAccessor(Protocol):
    """Read-only view over opaque host nodes.

    Implementations may raise on destroyed nodes; callers treat any exception
    as missing data.
    """

    def get_parent(self, node: Any) -> Any | None:
        """Return the parent node, or None at the root."""

    def get_children(self, node: Any) -> Sequence[Any]:
        """Return the ordered children of ``node``."""

    def get_name(self, node: Any) -> str:
        """Return the node's name."""

    def is_active(self, node: Any) -> bool:
        """Return whether the node is active in the hierarchy."""

    def get_attached_text(self, node: Any, role: str = DIRECT_TEXT_ROLE) -> str | None:
        """Return the text value attached to ``node`` under ``role``."""

    def get_text_roles(self, node: Any) -> Sequence[str]:
        """Return the roles of every text value attached directly to ``node``."""

    def get_tags(self, node: Any) -> frozenset[str]:
        """Return component tags describing widget shapes attached to ``node``."""

    def get_world_position(self, node: Any) -> Vec3 | None:
        """Return the node's world position when it has one."""

    def find_first(self, predicate: Callable[[Any], bool]) -> Any | None:
        """Return the first node in the graph satisfying ``predicate``."""


class CursorSource(Protocol):
    """Host cursor whose node and index are read at narration time."""

    def current_node(self) -> Any | None:
        """Return the node the cursor currently sits on."""

    def current_index(self) -> int:
        """Return the cursor's index into the list it belongs to."""
