"""Focused-element text resolution."""

from .deferred import AsyncioFrameScheduler, CursorReadScheduler, FrameScheduler, ManualFrameScheduler
from .placeholders import DEFAULT_PLACEHOLDERS, PlaceholderFilter, is_placeholder
from .resolver import LabelResolver
from .strategies import (
    AncestorTextStrategy,
    CommandListStrategy,
    ControlRemapReader,
    ControlRemapStrategy,
    DescendantTextStrategy,
    IconLabelStrategy,
    OptionsListStrategy,
    ResolutionContext,
    TextStrategy,
    default_strategies,
)
from .values import OptionValueReader

__all__ = [
    "AncestorTextStrategy",
    "AsyncioFrameScheduler",
    "CommandListStrategy",
    "ControlRemapReader",
    "ControlRemapStrategy",
    "CursorReadScheduler",
    "DEFAULT_PLACEHOLDERS",
    "DescendantTextStrategy",
    "FrameScheduler",
    "IconLabelStrategy",
    "LabelResolver",
    "ManualFrameScheduler",
    "OptionValueReader",
    "OptionsListStrategy",
    "PlaceholderFilter",
    "ResolutionContext",
    "TextStrategy",
    "default_strategies",
    "is_placeholder",
]
