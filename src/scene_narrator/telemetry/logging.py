"""Logging setup and the runtime telemetry contract."""

from __future__ import annotations

import logging
from typing import Protocol

from rich.logging import RichHandler

_LOG_FORMAT = "%(name)s: %(message)s"


class Telemetry(Protocol):
    """Reports operational events, traces, and narration outcomes."""

    def emit(self, event_name: str, payload: dict) -> None:
        """Publish telemetry event to the configured sink."""


class LoggingTelemetry:
    """Telemetry sink that writes events to a stdlib logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("scene_narrator.telemetry")

    def emit(self, event_name: str, payload: dict) -> None:
        self._logger.info(event_name, extra={"payload": payload})


def configure_logging(level: str = "INFO", *, rich_output: bool = True) -> logging.Logger:
    """Install a single handler on the ``scene_narrator`` logger tree."""
    root = logging.getLogger("scene_narrator")
    root.setLevel(level.upper())
    for handler in list(root.handlers):
        root.removeHandler(handler)

    if rich_output:
        handler: logging.Handler = RichHandler(rich_tracebacks=True, show_path=False)
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root.addHandler(handler)
    root.propagate = False
    return root
