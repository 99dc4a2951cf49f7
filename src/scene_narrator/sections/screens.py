"""Screen profiles for the item detail and character status screens."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from scene_narrator.i18n import MessageCatalog, Translator
from scene_narrator.sections.navigator import ScreenProfile

_MARKUP = re.compile(r"<[^>]*>")

ATTRIBUTE_TYPE_NAMES: Mapping[int, str] = MappingProxyType(
    {1: "Fire", 5: "Ice", 3: "Lightning", 6: "Poison", 10: "Wind", 8: "Holy", 7: "Earth", 9: "Water"}
)
ELEMENT_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("fire", "Fire"),
    ("ice", "Ice"),
    ("lightning", "Lightning"),
    ("thunder", "Lightning"),
    ("poison", "Poison"),
    ("wind", "Wind"),
    ("holy", "Holy"),
    ("earth", "Earth"),
    ("water", "Water"),
)


def strip_icon_markup(text: str | None) -> str | None:
    """Drop inline icon tags such as ``<IC_SWORD>`` and tidy whitespace."""
    if text is None:
        return None
    cleaned = " ".join(_MARKUP.sub("", text).split())
    return cleaned or None


@dataclass(slots=True)
class StatLine:
    name: str
    value: str | None = None
    plus: str | None = None
    active: bool = True

    def render(self) -> str:
        if self.plus and self.value:
            return f"{self.name} {self.plus}{self.value}"
        if self.value:
            return f"{self.name} {self.value}"
        return self.name


@dataclass(slots=True)
class AttributeIcon:
    attribute_type: int = -1
    sprite_name: str | None = None
    enable_icon_name: str | None = None

    @property
    def enabled(self) -> bool:
        sprite = self.sprite_name
        if sprite is not None and sprite.endswith("(Clone)"):
            sprite = sprite[: -len("(Clone)")]
        return sprite is not None and self.enable_icon_name is not None and sprite == self.enable_icon_name


@dataclass(slots=True)
class AttributeCategory:
    name: str
    icons: list[AttributeIcon] = field(default_factory=list)
    active: bool = True


@dataclass(slots=True)
class ItemDetail:
    name: str | None = None
    quantity: int = 0
    stats: list[StatLine] = field(default_factory=list)
    abilities: list[StatLine] = field(default_factory=list)
    attributes: list[AttributeCategory] = field(default_factory=list)
    magic: list[StatLine] = field(default_factory=list)
    description: str | None = None
    parameter_message: str | None = None
    equippable: list[str] = field(default_factory=list)


class ItemDetailSections:
    """Builds the ordered narration sections for one :class:`ItemDetail`."""

    def __init__(
        self,
        translator: Translator | None = None,
        attribute_names: Mapping[int, str] = ATTRIBUTE_TYPE_NAMES,
    ) -> None:
        self.translator = translator or MessageCatalog()
        self.attribute_names = attribute_names

    def __call__(self, item: ItemDetail | None) -> list[str]:
        if item is None:
            return []
        t = self.translator.translate
        sections: list[str] = []

        name = strip_icon_markup(item.name)
        if name:
            sections.append(t("{0}, quantity {1}", name, item.quantity) if item.quantity > 0 else name)

        sections.extend(self.stat_groups(item.stats))

        abilities = [line.render() for line in item.abilities if line.active and line.name]
        if abilities:
            sections.append(t("Properties: {0}", ". ".join(abilities)))

        for category in item.attributes:
            if not category.active or not category.name:
                continue
            elements = [self.element_name(icon) for icon in category.icons if icon.enabled]
            sections.append(t("{0}: {1}", category.name, ", ".join(elements) if elements else t("none")))

        magic = [line.render() for line in item.magic if line.active and line.name]
        if magic:
            sections.append(t("Magic: {0}", ". ".join(magic)))

        for text in (item.description, item.parameter_message):
            cleaned = strip_icon_markup(text)
            if cleaned:
                sections.append(cleaned)

        names = [name.strip() for name in item.equippable if name and name.strip()]
        if names:
            sections.append(t("Can equip: {0}", ", ".join(names)))
        return sections

    def stat_groups(self, stats: list[StatLine]) -> list[str]:
        """Split stats into base, attack, defense and evasion sections by name."""
        groups: dict[str, list[str]] = {"base": [], "attack": [], "defense": [], "evasion": []}
        for line in stats:
            if not line.active or not line.name:
                continue
            lowered = line.name.lower()
            if "attack" in lowered:
                groups["attack"].append(line.render())
            elif "def" in lowered:
                groups["defense"].append(line.render())
            elif "eva" in lowered:
                groups["evasion"].append(line.render())
            else:
                groups["base"].append(line.render())
        return [". ".join(entries) for entries in groups.values() if entries]

    def element_name(self, icon: AttributeIcon) -> str:
        t = self.translator.translate
        if icon.attribute_type >= 0 and icon.attribute_type in self.attribute_names:
            return t(self.attribute_names[icon.attribute_type])
        if icon.enable_icon_name:
            lowered = icon.enable_icon_name.lower()
            for keyword, display in ELEMENT_KEYWORDS:
                if keyword in lowered:
                    return t(display)
        return t("Element {0}", icon.attribute_type)


def item_detail_profile(translator: Translator | None = None) -> ScreenProfile:
    return ScreenProfile(name="item_detail", build_sections=ItemDetailSections(translator))


@dataclass(slots=True)
class CharacterStatus:
    """Live character data; values are read again every time a section is announced."""

    name: str | None = None
    level: int | None = None
    hp: int | None = None
    max_hp: int | None = None
    mp: int | None = None
    max_mp: int | None = None
    strength: int | None = None
    stamina: int | None = None
    magic: int | None = None
    spirit: int | None = None
    defense: int | None = None
    evade: int | None = None
    magic_defense: int | None = None
    magic_evade: int | None = None
    experience: int | None = None
    next_level: int | None = None
    commands: list[str] = field(default_factory=list)
    magicite: str | None = None
    bonus: str | None = None


# (label, attribute) per section, in narration order.
STATUS_FIELDS: tuple[tuple[str, str], ...] = (
    ("Name", "name"),
    ("Level", "level"),
    ("HP", "hp"),
    ("MP", "mp"),
    ("Strength", "strength"),
    ("Stamina", "stamina"),
    ("Magic", "magic"),
    ("Spirit", "spirit"),
    ("Defense", "defense"),
    ("Evade", "evade"),
    ("Magic Defense", "magic_defense"),
    ("Magic Evade", "magic_evade"),
    ("Experience", "experience"),
    ("Next Level", "next_level"),
    ("Commands", "commands"),
    ("Magicite", "magicite"),
    ("Bonus", "bonus"),
)
STATUS_GROUP_STARTS: tuple[int, ...] = (0, 2, 4, 8, 12)
STATUS_GROUP_NAMES: tuple[str, ...] = ("Character", "Vitals", "Attributes", "Combat", "Progression")


class StatusSections:
    def __init__(self, translator: Translator | None = None) -> None:
        self.translator = translator or MessageCatalog()

    def __call__(self, status: CharacterStatus | None) -> list[str]:
        if status is None:
            return []
        return [self.read(status, index) or "" for index in range(len(STATUS_FIELDS))]

    def read(self, status: CharacterStatus, index: int) -> str | None:
        t = self.translator.translate
        label, attribute = STATUS_FIELDS[index]
        if attribute == "name":
            return status.name or t("Not available")
        if attribute == "hp":
            return t("HP: {0} / {1}", _display(status.hp), _display(status.max_hp))
        if attribute == "mp":
            return t("MP: {0} / {1}", _display(status.mp), _display(status.max_mp))
        value = getattr(status, attribute)
        if isinstance(value, list):
            value = ", ".join(value) if value else None
        return t("{0}: {1}", t(label), _display(value, t("Not available")))


def _display(value: object, missing: str = "?") -> str:
    if value is None or value == "" or value == "---":
        return missing
    return str(value)


def status_details_profile(translator: Translator | None = None) -> ScreenProfile:
    sections = StatusSections(translator)
    return ScreenProfile(
        name="status_details",
        build_sections=sections,
        group_starts=STATUS_GROUP_STARTS,
        group_names=STATUS_GROUP_NAMES,
        read_section=sections.read,
    )


def status_overview(status: CharacterStatus | None, translator: Translator | None = None) -> str | None:
    """Name, level, vitals and progression in one sentence chain."""
    if status is None:
        return None
    t = (translator or MessageCatalog()).translate
    parts: list[str] = []
    if status.name:
        parts.append(status.name)
    if status.level is not None:
        parts.append(t("Level {0}", status.level))
    if status.hp is not None and status.max_hp is not None:
        parts.append(t("HP: {0} / {1}", status.hp, status.max_hp))
    if status.mp is not None and status.max_mp is not None:
        parts.append(t("MP: {0} / {1}", status.mp, status.max_mp))
    if status.experience is not None:
        parts.append(t("Experience: {0}", status.experience))
    if status.next_level is not None:
        parts.append(t("Next Level: {0}", status.next_level))
    if status.commands:
        parts.append(t("Commands: {0}", ", ".join(status.commands)))
    if status.magicite and status.magicite.strip() != "---":
        parts.append(t("Magicite: {0}", status.magicite))
    if status.bonus and status.bonus.strip() != "---":
        parts.append(t("Bonus: {0}", status.bonus))
    return ". ".join(parts) if parts else None


def _stat_summary(status: CharacterStatus | None, fields: tuple[tuple[str, str], ...], translator: Translator | None) -> str:
    t = (translator or MessageCatalog()).translate
    if status is None:
        return t("No character data available")
    return ". ".join(t("{0}: {1}", t(label), _display(getattr(status, attribute))) for label, attribute in fields)


def physical_stats(status: CharacterStatus | None, translator: Translator | None = None) -> str:
    fields = (("Strength", "strength"), ("Stamina", "stamina"), ("Defense", "defense"), ("Evade", "evade"))
    return _stat_summary(status, fields, translator)


def magical_stats(status: CharacterStatus | None, translator: Translator | None = None) -> str:
    fields = (("Magic", "magic"), ("Spirit", "spirit"), ("Magic Defense", "magic_defense"), ("Magic Evade", "magic_evade"))
    return _stat_summary(status, fields, translator)


ITEM_DETAIL = item_detail_profile()
STATUS_DETAILS = status_details_profile()
