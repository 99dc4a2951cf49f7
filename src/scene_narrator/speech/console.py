"""Narration sink that prints to the terminal."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape


class ConsoleNarrationSink:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        self.spoken: list[str] = []

    def speak(self, text: str, interrupt: bool = False) -> None:
        self.spoken.append(text)
        marker = "[bold red]![/bold red] " if interrupt else ""
        self.console.print(f"{marker}[cyan]{escape(text)}[/cyan]")
