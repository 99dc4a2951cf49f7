from __future__ import annotations

import pytest

from scene_narrator.i18n import MessageCatalog
from scene_narrator.models import PriorityClass, Vec3
from scene_narrator.spatial import (
    CategoryFilter,
    ClassificationTable,
    EntityCategory,
    EntityRecord,
    EntityScanner,
    MapExitGrouping,
    ReachabilityFilter,
    RecordEntitySource,
    Region,
    RegionGrouping,
    describe_bearing,
    format_report,
)

ORIGIN = Vec3(0.0, 0.0, 0.0)


class FlakySource(RecordEntitySource):
    def get_position(self, handle):
        if handle.name == "destroyed":
            raise RuntimeError("object was collected")
        return super().get_position(handle)


class WallFinder:
    """Everything east of x=30 is unreachable."""

    def search(self, start: Vec3, goal: Vec3) -> list[Vec3] | None:
        if goal.x > 30:
            return None
        return [start, goal]


def _record(type_tag: str, x: float, y: float = 0.0, name: str | None = None, **details) -> EntityRecord:
    return EntityRecord(type_tag=type_tag, position=Vec3(x, y, 0.0), name=name, details=details)


def test_scan_filters_self_scaffolding_and_far_entities() -> None:
    scanner = EntityScanner(RecordEntitySource())
    records = [
        _record("FieldNonPlayer", 0.05, name="player"),
        _record("VisualEffect", 3.0),
        _record("FieldColliderEntity", 4.0),
        _record("FieldNonPlayer", 200.0, name="far"),
        None,
        EntityRecord(type_tag="FieldNonPlayer", position=None),
        _record("FieldTresureBox", 12.0, name="Chest"),
        _record("FieldNonPlayer", 5.0, name="Guard"),
    ]

    infos = scanner.scan(ORIGIN, records, max_distance=160.0)

    assert [info.label for info in infos] == ["Guard", "Chest"]
    assert all(0 < info.distance <= 160.0 for info in infos)
    assert infos[0].is_npc is True
    assert infos[1].is_treasure is True
    assert infos[1].priority_class == PriorityClass.TREASURE


def test_scan_drops_handles_whose_source_raises() -> None:
    scanner = EntityScanner(FlakySource())

    infos = scanner.scan(ORIGIN, [_record("FieldNonPlayer", 3.0, name="destroyed"), _record("Npc", 4.0, name="Locke")], 50.0)

    assert [info.label for info in infos] == ["Locke"]


def test_colocated_entities_keep_lowest_priority_rank() -> None:
    scanner = EntityScanner(RecordEntitySource())
    records = [
        _record("FieldNonPlayer", 10.0, 10.0, name="npc"),
        _record("GotoMapEventEntity", 10.02, 10.0, name="exit"),
        _record("EventTriggerEntity", 10.0, 9.98, name="event"),
        _record("Npc", 20.0, name="first"),
        _record("FieldNonPlayer", 20.0, name="second"),
    ]

    infos = scanner.scan(ORIGIN, records, 100.0)

    assert [info.label for info in infos] == ["exit", "first"]


def test_scan_output_is_sorted_by_distance() -> None:
    scanner = EntityScanner(RecordEntitySource())
    records = [_record("Npc", float(x), name=str(x)) for x in (40, 3, 25, 7, 12)]

    infos = scanner.scan(ORIGIN, records, 100.0)

    distances = [info.distance for info in infos]
    assert distances == sorted(distances)


def test_dedup_tolerance_must_be_positive() -> None:
    with pytest.raises(ValueError):
        EntityScanner(RecordEntitySource(), dedup_tolerance=0)


def test_map_exits_to_same_destination_collapse_to_closest() -> None:
    scanner = EntityScanner(RecordEntitySource(), grouping=[MapExitGrouping()])
    records = [
        _record("GotoMapEventEntity", 8.0, name="far door", destination=12),
        _record("GotoMapEventEntity", 3.0, name="near door", destination=12),
        _record("GotoMapEventEntity", 5.0, 5.0, name="other door", destination=4),
    ]

    infos = scanner.scan(ORIGIN, records, 100.0)

    assert [info.label for info in infos] == ["near door", "other door"]
    assert infos[0].group_key == "MapExit_12"
    assert infos[0].details["group_size"] == 2


def test_region_grouping_keeps_member_nearest_centroid() -> None:
    grouping = RegionGrouping({"Cave": Region(min_x=10, max_x=40, min_y=-10, max_y=10)})
    scanner = EntityScanner(RecordEntitySource(), grouping=[grouping])
    records = [
        _record("EventTriggerEntity", 12.0, name="west tile"),
        _record("EventTriggerEntity", 25.0, name="middle tile"),
        _record("EventTriggerEntity", 38.0, name="east tile"),
        _record("Npc", 60.0, name="outside"),
    ]

    infos = scanner.scan(ORIGIN, records, 100.0)

    assert [info.label for info in infos] == ["middle tile", "outside"]
    assert infos[0].details["group_size"] == 3


def test_category_and_reachability_filters() -> None:
    records = [
        _record("FieldTresureBox", 10.0, name="near chest"),
        _record("FieldTresureBox", 100.0, name="walled chest"),
        _record("Npc", 5.0, name="Edgar"),
    ]

    treasure_only = EntityScanner(RecordEntitySource(), filters=[CategoryFilter([EntityCategory.TREASURE])])
    reachable = EntityScanner(RecordEntitySource(), filters=[ReachabilityFilter(WallFinder())])

    assert [info.label for info in treasure_only.scan(ORIGIN, records, 160.0)] == ["near chest", "walled chest"]
    assert [info.label for info in reachable.scan(ORIGIN, records, 160.0)] == ["Edgar", "near chest"]


def test_report_is_bounded_with_exact_remaining_count() -> None:
    scanner = EntityScanner(RecordEntitySource())
    infos = scanner.scan(ORIGIN, [_record("Npc", float(x), name=f"npc{x}") for x in range(1, 8)], 160.0)

    report = format_report(infos, 160.0, limit=5)

    assert report.startswith("7 entities nearby: npc1 at 1.0 units. ")
    assert report.count(" units") == 5
    assert report.endswith("...and 2 more")


def test_report_without_overflow_and_empty_report() -> None:
    scanner = EntityScanner(RecordEntitySource())
    infos = scanner.scan(ORIGIN, [_record("Npc", 3.0, name="Guard"), _record("FieldTresureBox", 0.0, 5.0)], 160.0)

    assert format_report(infos, 160.0) == "2 entities nearby: Guard at 3.0 units. FieldTresureBox at 5.0 units"
    assert format_report([], 160.0) == "No entities within 160 units"


def test_bearing_is_computed_live_from_reference() -> None:
    target = Vec3(10.0, 10.0, 0.0)

    assert describe_bearing(ORIGIN, target) == "Northeast"
    assert describe_bearing(Vec3(10.0, 0.0, 0.0), target) == "North"
    assert describe_bearing(Vec3(20.0, 10.0, 0.0), target) == "West"
    assert describe_bearing(ORIGIN, target, MessageCatalog.bundled(language="ja")) == "北東"


def test_classification_overrides_change_category_and_priority() -> None:
    table = ClassificationTable().with_overrides({"FieldMapObjectDefault": EntityCategory.INTERACTIVE})
    scanner = EntityScanner(RecordEntitySource(), table)

    infos = scanner.scan(ORIGIN, [_record("FieldMapObjectDefault", 4.0, name="lever")], 50.0)

    assert [info.label for info in infos] == ["lever"]
    assert infos[0].priority_class == PriorityClass.INTERACTIVE
    assert ClassificationTable().is_narratable(EntityCategory.VISUAL) is False


def test_filters_run_before_colocated_entities_collapse() -> None:
    scanner = EntityScanner(RecordEntitySource(), filters=[CategoryFilter([EntityCategory.NPC])])
    records = [
        _record("GotoMapEventEntity", 10.0, name="door"),
        _record("FieldNonPlayer", 10.0, name="Guard"),
    ]

    assert [info.label for info in scanner.scan(ORIGIN, records, 100.0)] == ["Guard"]


def test_empty_report_keeps_fractional_radius() -> None:
    assert format_report([], 7.5) == "No entities within 7.5 units"
