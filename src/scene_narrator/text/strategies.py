"""Ordered strategies that pull a readable label out of a focused node.

Each strategy answers one structural question about the area around the
focused node. Strategies never raise on missing data; they return ``None``
so the resolver can fall through to the next one.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterator, Protocol

from scene_narrator.models import FocusContext
from scene_narrator.scene.hierarchy import (
    OPTIONS_CONTENT_PATH,
    CapabilityIndex,
    ancestors,
    child_at,
    descendants,
    find_child,
    find_descendant_path,
    find_scroll_content,
)
from scene_narrator.scene.interfaces import DIRECT_TEXT_ROLE, NAME_ROLE, SceneGraphAccessor
from scene_narrator.text.placeholders import PlaceholderFilter

OPTION_NAME_NODES = ("command_name", "nameText", "last_text")
VALUE_LIKE = re.compile(r"^\d+%?$|^On$|^Off$|^Active$|^Wait$")


@dataclass(slots=True)
class ResolutionContext:
    """Per-request state shared by every strategy."""

    accessor: SceneGraphAccessor
    capabilities: CapabilityIndex
    placeholders: PlaceholderFilter
    max_depth: int = 10

    def ancestors(self, node: Any) -> Iterator[Any]:
        return ancestors(self.accessor, node, self.max_depth)

    def clean(self, text: str | None) -> str | None:
        return self.placeholders.clean(text)

    def text_of(self, node: Any, role: str = DIRECT_TEXT_ROLE) -> str | None:
        return self.clean(self.accessor.get_attached_text(node, role))

    def first_text(self, root: Any, *, role: str | None = DIRECT_TEXT_ROLE, skip_values: bool = False) -> str | None:
        """First usable text in ``root``'s subtree; ``role=None`` accepts any role."""
        for node in descendants(self.accessor, root):
            roles = [role] if role is not None else list(self.accessor.get_text_roles(node))
            for current_role in roles:
                text = self.text_of(node, current_role)
                if text is None:
                    continue
                if skip_values and VALUE_LIKE.match(text):
                    continue
                return text
        return None

    def named_text(self, root: Any, name: str, role: str = DIRECT_TEXT_ROLE) -> str | None:
        for node in descendants(self.accessor, root):
            if self.accessor.get_name(node) == name:
                text = self.text_of(node, role)
                if text is not None:
                    return text
        return None


class TextStrategy(Protocol):
    name: str

    def resolve(self, focus: FocusContext, context: ResolutionContext) -> str | None:
        """Return a label for ``focus`` or ``None`` to let the next strategy try."""


class ControlRemapReader(Protocol):
    """External reader for control remapping panels."""

    def try_read(self, node: Any, index: int) -> str | None:
        """Return the remapping entry text at ``index`` or ``None``."""


def options_content(context: ResolutionContext, options_root: Any) -> Any | None:
    return find_descendant_path(context.accessor, options_root, OPTIONS_CONTENT_PATH)


def selected_option(context: ResolutionContext, node: Any, index: int) -> Any | None:
    """Return the list entry at ``index`` under the nearest options root or command list."""
    for ancestor in context.ancestors(node):
        caps = context.capabilities.of(ancestor)
        if caps.is_options_root:
            content = options_content(context, ancestor)
        elif caps.is_command_list:
            content = find_scroll_content(context.capabilities, ancestor)
        else:
            continue
        if content is None:
            return None
        return child_at(context.accessor, content, index)
    return None


class AncestorTextStrategy:
    """Nearest node up the parent chain carrying exactly one direct text value."""

    name = "ancestor_text"

    def resolve(self, focus: FocusContext, context: ResolutionContext) -> str | None:
        for node in context.ancestors(focus.node):
            caps = context.capabilities.of(node)
            if not caps.has_direct_text:
                continue
            text = context.clean(caps.direct_text)
            if text is not None:
                return text
        return None


class OptionsListStrategy:
    """Indexed option entry below a ``config_root`` container."""

    name = "options_list"

    def resolve(self, focus: FocusContext, context: ResolutionContext) -> str | None:
        for node in context.ancestors(focus.node):
            if not context.capabilities.of(node).is_options_root:
                continue
            content = options_content(context, node)
            if content is None:
                return None
            entry = child_at(context.accessor, content, focus.index)
            if entry is None:
                return None
            return self.option_name(entry, context)
        return None

    def option_name(self, entry: Any, context: ResolutionContext) -> str | None:
        root = find_child(context.accessor, entry, "root")
        if root is not None:
            text = context.text_of(root, NAME_ROLE)
            if text is not None:
                return text

        text = context.first_text(entry, role=NAME_ROLE)
        if text is not None:
            return text

        for node_name in OPTION_NAME_NODES:
            text = context.named_text(entry, node_name)
            if text is not None:
                return text

        return context.first_text(entry)


class IconLabelStrategy:
    """Composite icon plus label widgets, directly or inside an indexed list."""

    name = "icon_label"

    def resolve(self, focus: FocusContext, context: ResolutionContext) -> str | None:
        for node in context.ancestors(focus.node):
            caps = context.capabilities.of(node)
            if caps.is_icon_label:
                text = context.clean(caps.label_text)
                if text is not None:
                    return text

            content = find_scroll_content(context.capabilities, node)
            if content is None:
                continue
            entry = child_at(context.accessor, content, focus.index)
            if entry is None:
                continue
            text = self._label_in(entry, context)
            if text is not None:
                return text
        return None

    def _label_in(self, entry: Any, context: ResolutionContext) -> str | None:
        # The entry itself, its children, then one wrapper level deeper.
        accessor = context.accessor
        candidates = [entry]
        for child in accessor.get_children(entry):
            candidates.append(child)
        for child in accessor.get_children(entry):
            candidates.extend(accessor.get_children(child))

        for candidate in candidates:
            if not accessor.is_active(candidate):
                continue
            caps = context.capabilities.of(candidate)
            if not caps.is_icon_label:
                continue
            text = context.clean(caps.label_text)
            if text is not None:
                return text
        return None


class ControlRemapStrategy:
    """Delegates control remapping panels to an external reader."""

    name = "control_remap"

    def __init__(self, reader: ControlRemapReader | None = None) -> None:
        self.reader = reader

    def resolve(self, focus: FocusContext, context: ResolutionContext) -> str | None:
        if self.reader is None:
            return None
        return context.clean(self.reader.try_read(focus.node, focus.index))


class CommandListStrategy:
    """Indexed entry below a ``command_list`` or ``menu_list`` container."""

    name = "command_list"

    def resolve(self, focus: FocusContext, context: ResolutionContext) -> str | None:
        for node in context.ancestors(focus.node):
            if not context.capabilities.of(node).is_command_list:
                continue
            content = find_scroll_content(context.capabilities, node)
            if content is None:
                continue
            entry = child_at(context.accessor, content, focus.index)
            if entry is None:
                continue
            text = context.first_text(entry, role=NAME_ROLE)
            if text is None:
                text = context.first_text(entry, skip_values=True)
            if text is not None:
                return text
        return None


class DescendantTextStrategy:
    """Any text anywhere below each ancestor; last resort."""

    name = "descendant_text"

    def resolve(self, focus: FocusContext, context: ResolutionContext) -> str | None:
        for node in context.ancestors(focus.node):
            text = context.first_text(node, role=None)
            if text is not None:
                return text
        return None


def default_strategies(remap_reader: ControlRemapReader | None = None) -> list[TextStrategy]:
    return [
        AncestorTextStrategy(),
        OptionsListStrategy(),
        IconLabelStrategy(),
        ControlRemapStrategy(remap_reader),
        CommandListStrategy(),
        DescendantTextStrategy(),
    ]
