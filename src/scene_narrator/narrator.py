from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Sequence

from scene_narrator.config import Settings
from scene_narrator.i18n import MessageCatalog, Translator, load_catalog
from scene_narrator.models import EntityInfo, FocusContext, PathInfo, Vec3
from scene_narrator.navigation import PathNarrator, RouteFinder, find_path
from scene_narrator.scene.interfaces import CursorSource, SceneGraphAccessor
from scene_narrator.sections import NavigationKey, ScreenProfile, SectionNavigator
from scene_narrator.spatial import EntityKey, EntityNavigator, EntityScanner, EntitySource, describe_entity, format_report
from scene_narrator.speech import NarrationOutputConfig, NarrationOutputService, NarrationSink
from scene_narrator.telemetry import LoggingTelemetry, Telemetry
from scene_narrator.text import CursorReadScheduler, FrameScheduler, LabelResolver, PlaceholderFilter

logger = logging.getLogger("scene_narrator.narrator")

FOCUS_CONTEXT = "focus"
CURSOR_CONTEXT = "cursor"


class SceneNarrator:
    """Routes every narration component to one output service."""

    def __init__(
        self,
        accessor: SceneGraphAccessor,
        output: NarrationOutputService,
        *,
        translator: Translator | None = None,
        resolver: LabelResolver | None = None,
        scanner: EntityScanner | None = None,
        path_narrator: PathNarrator | None = None,
        route_finder: RouteFinder | None = None,
        telemetry: Telemetry | None = None,
        scan_radius: float = 160.0,
        report_limit: int = 5,
    ) -> None:
        self.accessor = accessor
        self.output = output
        self.translator = translator or MessageCatalog()
        self.resolver = resolver or LabelResolver(accessor, translator=self.translator)
        self.scanner = scanner
        self.path_narrator = path_narrator or PathNarrator(self.translator)
        self.telemetry = telemetry or LoggingTelemetry()
        self.scan_radius = scan_radius
        self.report_limit = report_limit
        self.sections = SectionNavigator(emit=lambda text: self.output.speak(text, interrupt=True), translator=self.translator)
        self.entities = EntityNavigator(self.translator, finder=route_finder, path_narrator=self.path_narrator)

    @classmethod
    def from_settings(
        cls,
        accessor: SceneGraphAccessor,
        sink: NarrationSink,
        settings: Settings,
        *,
        entity_source: EntitySource | None = None,
        route_finder: RouteFinder | None = None,
    ) -> SceneNarrator:
        translator = load_catalog(settings.language, settings.messages_path)
        resolver = LabelResolver(
            accessor,
            placeholders=PlaceholderFilter(settings.placeholder_texts),
            translator=translator,
            max_depth=settings.max_hierarchy_depth,
        )
        scanner = None
        if entity_source is not None:
            scanner = EntityScanner(
                entity_source,
                self_exclusion_distance=settings.self_exclusion_distance,
                dedup_tolerance=settings.dedup_tolerance,
            )
        output = NarrationOutputService(
            sink,
            NarrationOutputConfig(
                enabled=settings.speech_enabled,
                interrupt=settings.speech_interrupt,
                max_chars=settings.speech_max_chars,
            ),
        )
        return cls(
            accessor,
            output,
            translator=translator,
            resolver=resolver,
            scanner=scanner,
            route_finder=route_finder,
            scan_radius=settings.scan_radius,
            report_limit=settings.report_limit,
        )

    def narrate_focus(self, node: Any, index: int = 0) -> str | None:
        label = self.resolver.resolve_label(FocusContext(node=node, index=index))
        if label is None:
            return None
        self.telemetry.emit("focus_narrated", {"index": index, "chars": len(label)})
        return self.output.announce(FOCUS_CONTEXT, label)

    def cursor_reader(self, cursor: CursorSource, frames: FrameScheduler) -> CursorReadScheduler:
        """Deferred reader that announces the cursor's label one frame after each move."""
        return CursorReadScheduler(
            self.resolver,
            cursor,
            frames,
            on_label=lambda label: self.output.announce(CURSOR_CONTEXT, label),
        )

    def scan(self, reference: Vec3, entities: Iterable[Any], radius: float | None = None) -> list[EntityInfo]:
        if self.scanner is None:
            raise RuntimeError("No entity source configured for scanning")
        infos = self.scanner.scan(reference, entities, radius if radius is not None else self.scan_radius)
        self.entities.update(infos)
        return infos

    def report(self, infos: Sequence[EntityInfo], radius: float | None = None) -> str:
        effective_radius = radius if radius is not None else self.scan_radius
        report = format_report(infos, effective_radius, self.report_limit, self.translator)
        self.telemetry.emit("nearby_reported", {"count": len(infos), "radius": effective_radius})
        self.output.speak(report)
        return report

    def report_nearby(self, reference: Vec3, entities: Iterable[Any], radius: float | None = None) -> str:
        return self.report(self.scan(reference, entities, radius), radius)

    def announce_entity(self, info: EntityInfo, reference: Vec3) -> str:
        text = describe_entity(info, reference, self.translator)
        self.output.speak(text, interrupt=True)
        return text

    def handle_entity_key(self, key: EntityKey, reference: Vec3) -> str:
        """Cycle, filter or route to the entities from the latest scan."""
        text = self.entities.handle(key, reference)
        self.telemetry.emit("entity_key", {"key": EntityKey(key).value})
        self.output.speak(text, interrupt=True)
        return text

    def describe_path(self, waypoints: Sequence[Vec3]) -> str:
        text = self.path_narrator.describe(waypoints)
        self.output.speak(text)
        return text

    def navigate_to(self, start: Vec3, goal: Vec3, finder: RouteFinder) -> PathInfo:
        info = find_path(start, goal, finder, self.path_narrator)
        self.telemetry.emit("path_requested", {"success": info.success, "steps": info.step_count})
        self.output.speak(info.description if info.success else info.error)
        return info

    def open_screen(self, profile: ScreenProfile, context: Any, liveness: Callable[[], bool] | None = None) -> bool:
        # The first label on a new screen is always spoken.
        self.output.reset(FOCUS_CONTEXT)
        self.output.reset(CURSOR_CONTEXT)
        opened = self.sections.open(profile, context, liveness)
        if not opened:
            logger.info("screen_not_narratable", extra={"screen": profile.name})
        return opened

    def repeat_last(self, context: str = FOCUS_CONTEXT) -> str:
        """Speak the last announcement of ``context`` again, bypassing duplicate suppression."""
        text = self.output.deduplicator.last(context)
        if text is None:
            text = self.translator.translate("Nothing to repeat")
        self.output.speak(text, interrupt=True)
        return text

    def handle_key(self, key: NavigationKey) -> bool:
        return self.sections.handle(key)
