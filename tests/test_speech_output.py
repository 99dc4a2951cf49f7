from __future__ import annotations

import io

from rich.console import Console

from scene_narrator.speech import (
    AnnouncementDeduplicator,
    ConsoleNarrationSink,
    NarrationOutputConfig,
    NarrationOutputService,
)


class RecordingSink:
    def __init__(self) -> None:
        self.calls: list[tuple[str, bool]] = []

    def speak(self, text: str, interrupt: bool = False) -> None:
        self.calls.append((text, interrupt))


class BrokenSink:
    def speak(self, text: str, interrupt: bool = False) -> None:
        raise OSError("audio device unavailable")


def test_speak_normalizes_and_truncates() -> None:
    sink = RecordingSink()
    service = NarrationOutputService(sink, NarrationOutputConfig(max_chars=9))

    spoken = service.speak("  Battle \n Speed   3 ")

    assert spoken == "Battle Sp"
    assert sink.calls == [("Battle Sp", False)]


def test_speak_skips_empty_and_disabled_output() -> None:
    sink = RecordingSink()

    assert NarrationOutputService(sink).speak("   ") is None
    assert NarrationOutputService(sink).speak(None) is None
    assert NarrationOutputService(sink, NarrationOutputConfig(enabled=False)).speak("Top") is None
    assert sink.calls == []


def test_interrupt_defaults_to_config() -> None:
    sink = RecordingSink()
    service = NarrationOutputService(sink, NarrationOutputConfig(interrupt=True))

    service.speak("one")
    service.speak("two", interrupt=False)

    assert sink.calls == [("one", True), ("two", False)]


def test_sink_failures_do_not_propagate() -> None:
    service = NarrationOutputService(BrokenSink())

    assert service.speak("Potion") is None


def test_announce_suppresses_repeats_per_context() -> None:
    sink = RecordingSink()
    service = NarrationOutputService(sink)

    service.announce("focus", "Potion")
    service.announce("focus", " Potion ")
    service.announce("scan", "Potion")
    service.reset("focus")
    service.announce("focus", "Potion")

    assert [text for text, _ in sink.calls] == ["Potion", "Potion", "Potion"]
    assert service.deduplicator.last("scan") == "Potion"


def test_deduplicator_reset_all() -> None:
    dedup = AnnouncementDeduplicator()
    dedup.should_announce("a", "x")
    dedup.should_announce("b", "y")

    dedup.reset()

    assert dedup.last("a") is None
    assert dedup.should_announce("b", "y") is True


def test_console_sink_records_and_prints_escaped_text() -> None:
    buffer = io.StringIO()
    sink = ConsoleNarrationSink(Console(file=buffer, color_system=None, width=120))

    sink.speak("[Magic] Fire")
    sink.speak("Bottom", interrupt=True)

    assert sink.spoken == ["[Magic] Fire", "Bottom"]
    output = buffer.getvalue()
    assert "[Magic] Fire" in output
    assert "! Bottom" in output
