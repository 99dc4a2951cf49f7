"""Entity handle contracts and a record-backed source for fixtures."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from scene_narrator.models import Vec3
from scene_narrator.scene.loader import SceneLoadError, parse_position, read_json


class EntitySource(Protocol):
    """Reads facts about opaque entity handles. May raise for destroyed handles."""

    def get_position(self, handle: Any) -> Vec3 | None:
        """Return the entity's world position."""

    def get_type_tag(self, handle: Any) -> str:
        """Return the entity's host type name."""

    def get_display_name(self, handle: Any) -> str | None:
        """Return a user-facing name, if the host has one."""

    def get_details(self, handle: Any) -> dict[str, Any]:
        """Return extra host data such as a map exit's destination id."""


@dataclass(slots=True)
class EntityRecord:
    type_tag: str
    position: Vec3 | None
    name: str | None = None
    details: dict[str, Any] = field(default_factory=dict)


class RecordEntitySource:
    """Entity source whose handles are :class:`EntityRecord` instances."""

    def get_position(self, handle: EntityRecord) -> Vec3 | None:
        return handle.position

    def get_type_tag(self, handle: EntityRecord) -> str:
        return handle.type_tag

    def get_display_name(self, handle: EntityRecord) -> str | None:
        return handle.name

    def get_details(self, handle: EntityRecord) -> dict[str, Any]:
        return dict(handle.details)


def parse_entities(payload: Any) -> list[EntityRecord]:
    if isinstance(payload, dict):
        payload = payload.get("entities")
    if not isinstance(payload, list):
        raise SceneLoadError("entity fixture must be a list or an object with an 'entities' list")

    records: list[EntityRecord] = []
    for position, raw in enumerate(payload):
        where = f"entities[{position}]"
        if not isinstance(raw, dict):
            raise SceneLoadError(f"{where}: entity must be an object")
        type_tag = raw.get("type")
        if not isinstance(type_tag, str) or not type_tag:
            raise SceneLoadError(f"{where}: entity requires a non-empty 'type'")
        details = raw.get("details", {})
        if not isinstance(details, dict):
            raise SceneLoadError(f"{where}: 'details' must be an object")
        records.append(
            EntityRecord(
                type_tag=type_tag,
                position=parse_position(raw.get("position"), where=where),
                name=raw.get("name"),
                details=details,
            )
        )
    return records


def load_entities(path: str | Path) -> list[EntityRecord]:
    return parse_entities(read_json(path))
