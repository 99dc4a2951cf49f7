"""CLI entrypoint for Scene Narrator."""

from __future__ import annotations

import typer
from rich import print

from scene_narrator.config import settings
from scene_narrator.models import Vec3
from scene_narrator.narrator import SceneNarrator
from scene_narrator.scene import JsonSceneLoader, SceneLoadError, SceneNode, TreeSceneAccessor
from scene_narrator.sections import NavigationKey, item_detail_profile, status_details_profile
from scene_narrator.sections.fixtures import load_character_status, load_item_detail
from scene_narrator.spatial import RecordEntitySource, load_entities
from scene_narrator.speech import ConsoleNarrationSink
from scene_narrator.telemetry import configure_logging

app = typer.Typer(help="Scene Narrator command line tools")

_KEY_ALIASES = {
    "j": NavigationKey.DOWN,
    "down": NavigationKey.DOWN,
    "k": NavigationKey.UP,
    "up": NavigationKey.UP,
    "J": NavigationKey.SHIFT_DOWN,
    "shift_down": NavigationKey.SHIFT_DOWN,
    "K": NavigationKey.SHIFT_UP,
    "shift_up": NavigationKey.SHIFT_UP,
    "G": NavigationKey.CTRL_DOWN,
    "ctrl_down": NavigationKey.CTRL_DOWN,
    "g": NavigationKey.CTRL_UP,
    "ctrl_up": NavigationKey.CTRL_UP,
}


@app.callback()
def main(log_level: str = typer.Option(None, help="Override SCENE_NARRATOR_LOG_LEVEL")) -> None:
    configure_logging(log_level or settings.log_level)


def _build_sink(speak: bool):
    if not speak:
        return ConsoleNarrationSink()
    try:
        from scene_narrator.speech.tts_pyttsx3 import Pyttsx3NarrationSink

        return Pyttsx3NarrationSink()
    except RuntimeError as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)


def _build_narrator(accessor=None, *, speak: bool = False, entity_source=None) -> SceneNarrator:
    accessor = accessor or TreeSceneAccessor(SceneNode("root"))
    return SceneNarrator.from_settings(accessor, _build_sink(speak), settings, entity_source=entity_source)


def _parse_point(raw: str) -> Vec3:
    try:
        return Vec3.parse(raw)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command("show-config")
def show_config() -> None:
    """Show the effective runtime configuration."""
    print(settings.model_dump())


@app.command("describe-path")
def describe_path(
    point: list[str] = typer.Option(..., "--point", help="Waypoint as x,y[,z]; repeat in travel order"),
    speak: bool = typer.Option(False, help="Speak through pyttsx3 instead of printing"),
) -> None:
    """Summarize a waypoint list as compass directions."""
    waypoints = [_parse_point(raw) for raw in point]
    narrator = _build_narrator(speak=speak)
    segments = narrator.path_narrator.segments(waypoints)
    description = narrator.describe_path(waypoints)
    print(
        {
            "description": description,
            "segments": [{"direction": segment.direction.value, "steps": segment.step_count} for segment in segments],
        }
    )


@app.command()
def scan(
    entities_file: str = typer.Argument(..., help="JSON list of entities"),
    x: float = typer.Option(0.0, help="Reference X"),
    y: float = typer.Option(0.0, help="Reference Y"),
    z: float = typer.Option(0.0, help="Reference Z"),
    radius: float = typer.Option(None, help="Maximum distance; defaults to SCENE_NARRATOR_SCAN_RADIUS"),
    speak: bool = typer.Option(False, help="Speak through pyttsx3 instead of printing"),
) -> None:
    """Report entities near a reference position."""
    try:
        records = load_entities(entities_file)
    except (FileNotFoundError, SceneLoadError) as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)

    narrator = _build_narrator(speak=speak, entity_source=RecordEntitySource())
    reference = Vec3(x, y, z)
    effective_radius = radius if radius is not None else settings.scan_radius
    infos = narrator.scan(reference, records, effective_radius)
    report = narrator.report(infos, effective_radius)
    print(
        {
            "report": report,
            "entities": [
                {
                    "type": info.type_tag,
                    "name": info.display_name,
                    "category": info.category,
                    "distance": round(info.distance, 1),
                }
                for info in infos
            ],
        }
    )


@app.command()
def resolve(
    scene_file: str = typer.Argument(..., help="JSON scene graph"),
    cursor: str = typer.Option(..., help="Path of the focused node, e.g. Canvas/config_root/cursor"),
    index: int = typer.Option(0, help="Cursor index within its list"),
    speak: bool = typer.Option(False, help="Speak through pyttsx3 instead of printing"),
) -> None:
    """Resolve the label a cursor on a scene node would narrate."""
    try:
        accessor = JsonSceneLoader().load(scene_file)
    except (FileNotFoundError, SceneLoadError) as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)

    node = accessor.resolve(cursor)
    if node is None:
        print({"error": f"No node at path: {cursor}"})
        raise typer.Exit(code=1)

    narrator = _build_narrator(accessor, speak=speak)
    label = narrator.narrate_focus(node, index)
    print({"cursor": cursor, "index": index, "label": label})
    if label is None:
        raise typer.Exit(code=1)


@app.command()
def browse(
    detail_file: str = typer.Argument(..., help="JSON item detail or character status"),
    screen: str = typer.Option("item", help="item or status"),
    speak: bool = typer.Option(False, help="Speak through pyttsx3 instead of printing"),
) -> None:
    """Browse a detail screen section by section (j/k, J/K for groups, g/G for top/bottom, q to quit)."""
    try:
        if screen == "status":
            context = load_character_status(detail_file)
        elif screen == "item":
            context = load_item_detail(detail_file)
        else:
            raise typer.BadParameter("screen must be 'item' or 'status'")
    except (FileNotFoundError, SceneLoadError) as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)

    narrator = _build_narrator(speak=speak)
    if screen == "status":
        profile = status_details_profile(narrator.translator)
    else:
        profile = item_detail_profile(narrator.translator)

    if not narrator.open_screen(profile, context):
        print({"error": "Nothing to narrate on this screen"})
        raise typer.Exit(code=1)

    while True:
        try:
            raw = input("> ").strip()
        except EOFError:
            break
        if raw in ("q", "quit"):
            break
        key = _KEY_ALIASES.get(raw)
        if key is None:
            print({"keys": sorted(_KEY_ALIASES)})
            continue
        narrator.handle_key(key)
    narrator.sections.close()


if __name__ == "__main__":
    app()
