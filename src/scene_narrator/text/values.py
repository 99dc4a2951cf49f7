"""Current-value lookup for option entries (sliders, arrow buttons, dropdowns)."""

from __future__ import annotations

from typing import Any

from scene_narrator.models import FocusContext
from scene_narrator.scene.hierarchy import descendants, find_child
from scene_narrator.text.strategies import ResolutionContext, selected_option

# Widget root -> name of the node holding its displayed value, in lookup order.
VALUE_FIELDS: tuple[tuple[str, str], ...] = (
    ("slider_type_root", "last_text"),
    ("arrowbutton_type_root", "last_text"),
    ("dropdown_type_root", "Label"),
)


class OptionValueReader:
    """Reads the value shown next to an option label at the same list index."""

    def __init__(self, fields: tuple[tuple[str, str], ...] = VALUE_FIELDS) -> None:
        self.fields = fields

    def read_value(self, focus: FocusContext, context: ResolutionContext) -> str | None:
        entry = selected_option(context, focus.node, focus.index)
        if entry is None:
            return None
        root = find_child(context.accessor, entry, "root") or entry
        for widget_name, text_name in self.fields:
            widget = self._widget(root, widget_name, context)
            if widget is None or not context.accessor.is_active(widget):
                continue
            value = context.named_text(widget, text_name)
            if value is not None:
                return value
        return None

    def _widget(self, root: Any, widget_name: str, context: ResolutionContext) -> Any | None:
        for node in descendants(context.accessor, root, include_inactive=True):
            if context.accessor.get_name(node) == widget_name:
                return node
        return None
