"""Section navigation for narratable detail screens."""

from .cursor import NavigationCursor
from .navigator import NavigationKey, ScreenProfile, SectionNavigator
from .screens import (
    ATTRIBUTE_TYPE_NAMES,
    ITEM_DETAIL,
    STATUS_DETAILS,
    AttributeCategory,
    AttributeIcon,
    CharacterStatus,
    ItemDetail,
    ItemDetailSections,
    StatLine,
    StatusSections,
    item_detail_profile,
    magical_stats,
    physical_stats,
    status_details_profile,
    status_overview,
    strip_icon_markup,
)

__all__ = [
    "ATTRIBUTE_TYPE_NAMES",
    "AttributeCategory",
    "AttributeIcon",
    "CharacterStatus",
    "ITEM_DETAIL",
    "ItemDetail",
    "ItemDetailSections",
    "NavigationCursor",
    "NavigationKey",
    "STATUS_DETAILS",
    "ScreenProfile",
    "SectionNavigator",
    "StatLine",
    "StatusSections",
    "item_detail_profile",
    "magical_stats",
    "physical_stats",
    "status_details_profile",
    "status_overview",
    "strip_icon_markup",
]
