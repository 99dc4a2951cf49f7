"""Nearby entity scanning and reporting."""

from .classification import ClassificationTable, EntityCategory
from .filters import CategoryFilter, EntityFilter, ReachabilityFilter
from .grouping import GroupingStrategy, MapExitGrouping, Region, RegionGrouping, apply_grouping
from .scanner import EntityScanner, describe_bearing, describe_entity, format_report
from .selection import CATEGORY_CYCLE, EntityKey, EntityNavigator
from .source import EntityRecord, EntitySource, RecordEntitySource, load_entities, parse_entities

__all__ = [
    "CATEGORY_CYCLE",
    "CategoryFilter",
    "ClassificationTable",
    "EntityCategory",
    "EntityFilter",
    "EntityKey",
    "EntityNavigator",
    "EntityRecord",
    "EntityScanner",
    "EntitySource",
    "GroupingStrategy",
    "MapExitGrouping",
    "ReachabilityFilter",
    "RecordEntitySource",
    "Region",
    "RegionGrouping",
    "apply_grouping",
    "describe_bearing",
    "describe_entity",
    "format_report",
    "load_entities",
    "parse_entities",
]
