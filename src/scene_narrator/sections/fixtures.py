"""JSON fixtures for detail screens, validated with pydantic."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from scene_narrator.scene.loader import SceneLoadError, read_json
from scene_narrator.sections.screens import CharacterStatus, ItemDetail

_ITEM_DETAIL = TypeAdapter(ItemDetail)
_CHARACTER_STATUS = TypeAdapter(CharacterStatus)


def parse_item_detail(payload: Any) -> ItemDetail:
    try:
        return _ITEM_DETAIL.validate_python(payload)
    except ValidationError as exc:
        raise SceneLoadError(f"invalid item detail: {exc.error_count()} error(s)\n{exc}") from exc


def parse_character_status(payload: Any) -> CharacterStatus:
    try:
        return _CHARACTER_STATUS.validate_python(payload)
    except ValidationError as exc:
        raise SceneLoadError(f"invalid character status: {exc.error_count()} error(s)\n{exc}") from exc


def load_item_detail(path: str | Path) -> ItemDetail:
    return parse_item_detail(read_json(path))


def load_character_status(path: str | Path) -> CharacterStatus:
    return parse_character_status(read_json(path))
