from __future__ import annotations

from scene_narrator.models import FocusContext
from scene_narrator.scene import CapabilityIndex, SceneNode, TreeSceneAccessor
from scene_narrator.text import (
    DEFAULT_PLACEHOLDERS,
    DescendantTextStrategy,
    LabelResolver,
    PlaceholderFilter,
    ResolutionContext,
    is_placeholder,
)
from scene_narrator.text.strategies import AncestorTextStrategy


class StubRemapReader:
    def __init__(self, text: str | None) -> None:
        self.text = text
        self.calls: list[int] = []

    def try_read(self, node, index: int) -> str | None:
        self.calls.append(index)
        return self.text


class ExplodingStrategy:
    name = "exploding"

    def resolve(self, focus, context):
        raise RuntimeError("destroyed node")


def _node(name: str, *children: SceneNode, **kwargs) -> SceneNode:
    node = SceneNode(name=name, **kwargs)
    for child in children:
        node.add(child)
    return node


def _options_scene() -> tuple[TreeSceneAccessor, SceneNode]:
    cursor = _node("cursor")
    content = _node(
        "Content",
        _node(
            "item0",
            _node(
                "root",
                _node("slider_type_root", _node("last_text", texts={"text": "3"})),
                texts={"name": "Battle Speed"},
            ),
        ),
        _node(
            "item1",
            _node(
                "root",
                _node("arrowbutton_type_root", _node("last_text", texts={"text": "On"}), active=False),
                _node("dropdown_type_root", _node("Label", texts={"text": "Stereo"})),
                texts={"name": "Sound"},
            ),
        ),
        _node("item2", _node("root", texts={"name": "Cursor Memory"})),
    )
    scroll = _node("MaskObject", _node("Scroll View", _node("Viewport", content)))
    root = _node("Canvas", _node("config_root", scroll, cursor))
    return TreeSceneAccessor(root), cursor


def test_placeholder_filter_is_case_insensitive() -> None:
    assert is_placeholder("New Text")
    assert is_placeholder("  OPTION A ")
    assert is_placeholder("   ")
    assert is_placeholder(None)
    assert not is_placeholder("Items")
    assert PlaceholderFilter(["Dummy"]).clean(" dummy ") is None
    assert PlaceholderFilter(["Dummy"]).clean(" Items ") == "Items"


def test_ancestor_direct_text_is_found_above_cursor() -> None:
    cursor = _node("cursor")
    root = _node("Canvas", _node("button", cursor, texts={"text": "Config"}))

    resolver = LabelResolver(TreeSceneAccessor(root))

    assert resolver.resolve_label(FocusContext(node=cursor)) == "Config"


def test_placeholder_text_is_skipped_for_next_ancestor() -> None:
    cursor = _node("cursor")
    root = _node("panel", _node("button", cursor, texts={"text": "New Text"}), texts={"text": "Items"})

    resolver = LabelResolver(TreeSceneAccessor(root))

    assert resolver.resolve_label(FocusContext(node=cursor)) == "Items"


def test_no_match_returns_none_instead_of_placeholder() -> None:
    cursor = _node("cursor")
    root = _node("root", _node("holder", cursor, _node("caption", texts={"text": "---"})), texts={"text": "Label"})

    resolver = LabelResolver(TreeSceneAccessor(root))

    label = resolver.resolve_label(FocusContext(node=cursor))

    assert label is None


def test_resolved_labels_never_hit_blacklist() -> None:
    for placeholder in DEFAULT_PLACEHOLDERS:
        cursor = _node("cursor")
        root = _node("root", _node("holder", cursor, texts={"text": placeholder.upper()}))
        resolver = LabelResolver(TreeSceneAccessor(root))
        assert resolver.resolve_label(FocusContext(node=cursor)) is None


def test_options_list_combines_label_and_current_value() -> None:
    accessor, cursor = _options_scene()
    resolver = LabelResolver(accessor)

    assert resolver.resolve_label(FocusContext(node=cursor, index=0)) == "Battle Speed: 3"
    # The arrow button is inactive, so the dropdown label supplies the value.
    assert resolver.resolve_label(FocusContext(node=cursor, index=1)) == "Sound: Stereo"
    assert resolver.resolve_label(FocusContext(node=cursor, index=2)) == "Cursor Memory"


def test_earlier_strategy_wins_over_descendant_fallback() -> None:
    accessor, cursor = _options_scene()
    focus = FocusContext(node=cursor, index=1)

    context = ResolutionContext(
        accessor=accessor,
        capabilities=CapabilityIndex(accessor),
        placeholders=PlaceholderFilter(),
    )

    assert DescendantTextStrategy().resolve(focus, context) == "Battle Speed"
    assert LabelResolver(accessor).resolve_label(focus) == "Sound: Stereo"


def test_icon_label_widget_inside_nested_wrapper() -> None:
    cursor = _node("cursor")
    content = _node(
        "Content",
        _node("entry0", _node("wrapper", _node("icon", tags=frozenset({"icon_label"}), texts={"name": "Potion", "value": "x3"}))),
        _node("entry1", _node("wrapper", _node("icon", tags=frozenset({"icon_label"}), texts={"name": "Ether", "value": "x1"}))),
    )
    root = _node("Canvas", _node("item_list", _node("Scroll View", _node("Viewport", content)), cursor))

    resolver = LabelResolver(TreeSceneAccessor(root))

    assert resolver.resolve_label(FocusContext(node=cursor, index=1)) == "Ether"


def test_icon_label_on_ancestor_reads_name_role() -> None:
    cursor = _node("cursor")
    root = _node("Canvas", _node("slot", cursor, tags=frozenset({"icon_label"}), texts={"name": "Relic", "value": "2"}))

    resolver = LabelResolver(TreeSceneAccessor(root))

    assert resolver.resolve_label(FocusContext(node=cursor)) == "Relic"


def test_command_list_skips_value_like_text() -> None:
    cursor = _node("cursor")
    content = _node(
        "Content",
        _node("entry0", _node("value", texts={"text": "50%"}), _node("caption", texts={"text": "Volume"})),
        _node("entry1", _node("value", texts={"text": "Off"}), _node("caption", texts={"text": "Vibration"})),
    )
    root = _node("Canvas", _node("sound_command_list", _node("Viewport", content), cursor))

    resolver = LabelResolver(TreeSceneAccessor(root))

    assert resolver.resolve_label(FocusContext(node=cursor, index=0)) == "Volume"
    assert resolver.resolve_label(FocusContext(node=cursor, index=1)) == "Vibration"


def test_control_remap_reader_is_consulted_with_index() -> None:
    cursor = _node("cursor")
    root = _node("Canvas", _node("keys_panel", cursor))
    reader = StubRemapReader("Confirm: Enter")

    resolver = LabelResolver(TreeSceneAccessor(root), remap_reader=reader)

    assert resolver.resolve_label(FocusContext(node=cursor, index=4)) == "Confirm: Enter"
    assert reader.calls == [4]


def test_failing_strategy_is_treated_as_miss() -> None:
    cursor = _node("cursor")
    root = _node("Canvas", _node("button", cursor, texts={"text": "Save"}))

    resolver = LabelResolver(TreeSceneAccessor(root), strategies=[ExplodingStrategy(), AncestorTextStrategy()])

    assert resolver.resolve_label(FocusContext(node=cursor)) == "Save"


def test_ancestor_walk_is_bounded_by_max_depth() -> None:
    cursor = _node("cursor")
    current = cursor
    for depth in range(12):
        current = _node(f"level{depth}", current)
    current.texts["text"] = "Too Far"

    shallow = LabelResolver(TreeSceneAccessor(current), max_depth=3)
    deep = LabelResolver(TreeSceneAccessor(current), max_depth=20)

    assert shallow.resolve_label(FocusContext(node=cursor)) is None
    assert deep.resolve_label(FocusContext(node=cursor)) == "Too Far"


class Handle:
    def __init__(self, name: str) -> None:
        self.name = name


class WrapperAccessor:
    """Hands out a fresh wrapper object for every lookup, like a host proxy layer."""

    def get_parent(self, node):
        return None

    def get_children(self, node):
        return ()

    def get_name(self, node) -> str:
        return node.name

    def is_active(self, node) -> bool:
        return True

    def get_attached_text(self, node, role: str = "text"):
        return node.name if role == "text" else None

    def get_text_roles(self, node):
        return ("text",)

    def get_tags(self, node) -> frozenset[str]:
        return frozenset()


def test_capabilities_follow_transient_wrappers() -> None:
    index = CapabilityIndex(WrapperAccessor())

    names = [index.of(Handle(f"node{i}")).direct_text for i in range(50)]

    assert names == [f"node{i}" for i in range(50)]
