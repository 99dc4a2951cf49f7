from __future__ import annotations

import importlib
import json
import sys
import types

import pytest


def test_console_entrypoint_exposes_app() -> None:
    pytest.importorskip("typer")

    module = importlib.import_module("scene_narrator.main")

    assert hasattr(module, "app")
    assert module.app is not None


def test_describe_path_prints_compass_summary() -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from scene_narrator.main import app

    result = typer_testing.CliRunner().invoke(
        app,
        ["describe-path", "--point", "0,0", "--point", "0,16", "--point", "0,32", "--point", "16,32"],
        catch_exceptions=False,
    )

    assert result.exit_code == 0
    assert "North 2, East 1" in result.stdout


def test_describe_path_rejects_malformed_point() -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from scene_narrator.main import app

    result = typer_testing.CliRunner().invoke(app, ["describe-path", "--point", "north"])

    assert result.exit_code != 0


def test_resolve_reads_label_from_scene_file(tmp_path) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from scene_narrator.main import app

    scene = tmp_path / "scene.json"
    scene.write_text(
        json.dumps({"name": "Canvas", "children": [{"name": "Items", "texts": {"text": "Items"}, "children": [{"name": "cursor"}]}]}),
        encoding="utf-8",
    )
    runner = typer_testing.CliRunner()

    found = runner.invoke(app, ["resolve", str(scene), "--cursor", "Canvas/Items/cursor"], catch_exceptions=False)
    missing = runner.invoke(app, ["resolve", str(scene), "--cursor", "Canvas/Nowhere"], catch_exceptions=False)

    assert found.exit_code == 0
    assert "Items" in found.stdout
    assert missing.exit_code == 1
    assert "No node at path" in missing.stdout


def test_scan_reports_entities_from_file(tmp_path) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from scene_narrator.main import app

    entities = tmp_path / "entities.json"
    entities.write_text(
        json.dumps([{"type": "FieldNonPlayer", "name": "Guard", "position": [3, 0, 0]}, {"type": "VisualEffect", "position": [1, 0, 0]}]),
        encoding="utf-8",
    )

    result = typer_testing.CliRunner().invoke(app, ["scan", str(entities)], catch_exceptions=False)

    assert result.exit_code == 0
    assert "1 entities nearby: Guard at 3.0 units" in result.stdout


def test_scan_reports_missing_fixture(tmp_path) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from scene_narrator.main import app

    result = typer_testing.CliRunner().invoke(app, ["scan", str(tmp_path / "absent.json")], catch_exceptions=False)

    assert result.exit_code == 1
    assert "Fixture not found" in result.stdout


def test_speak_reports_actionable_error_when_voice_backend_missing(monkeypatch) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from scene_narrator.main import app

    fake_tts = types.ModuleType("scene_narrator.speech.tts_pyttsx3")

    class _MissingBackend:
        def __init__(self, *args, **kwargs) -> None:
            raise RuntimeError("Speech backend unavailable. Install extras with: pip install 'scene-narrator[voice]'")

    fake_tts.Pyttsx3NarrationSink = _MissingBackend
    monkeypatch.setitem(sys.modules, "scene_narrator.speech.tts_pyttsx3", fake_tts)

    result = typer_testing.CliRunner().invoke(app, ["describe-path", "--point", "0,0", "--speak"], catch_exceptions=False)

    assert result.exit_code == 1
    assert "scene-narrator[voice]" in result.stdout
