from __future__ import annotations

import logging
from typing import Iterable

from scene_narrator.i18n import MessageCatalog, Translator
from scene_narrator.models import FocusContext
from scene_narrator.scene.hierarchy import CapabilityIndex
from scene_narrator.scene.interfaces import SceneGraphAccessor
from scene_narrator.text.placeholders import PlaceholderFilter
from scene_narrator.text.strategies import ControlRemapReader, ResolutionContext, TextStrategy, default_strategies
from scene_narrator.text.values import OptionValueReader

logger = logging.getLogger("scene_narrator.text")


class LabelResolver:
    """Runs the strategy chain for a focus context.

    Strategies are tried strictly in order and the first usable label wins.
    When the focused entry also shows a current value, the result reads
    ``"<label>: <value>"``.
    """

    def __init__(
        self,
        accessor: SceneGraphAccessor,
        strategies: Iterable[TextStrategy] | None = None,
        *,
        placeholders: PlaceholderFilter | None = None,
        value_reader: OptionValueReader | None = None,
        remap_reader: ControlRemapReader | None = None,
        translator: Translator | None = None,
        max_depth: int = 10,
    ) -> None:
        self.accessor = accessor
        self.strategies = list(strategies) if strategies is not None else default_strategies(remap_reader)
        self.placeholders = placeholders or PlaceholderFilter()
        self.value_reader = value_reader or OptionValueReader()
        self.translator = translator or MessageCatalog()
        self.max_depth = max_depth

    def resolve_label(self, focus: FocusContext) -> str | None:
        if focus.node is None:
            return None

        context = ResolutionContext(
            accessor=self.accessor,
            capabilities=CapabilityIndex(self.accessor),
            placeholders=self.placeholders,
            max_depth=self.max_depth,
        )
        for strategy in self.strategies:
            try:
                label = context.clean(strategy.resolve(focus, context))
            except Exception:  # noqa: BLE001
                logger.exception("strategy_failed", extra={"strategy": strategy.name, "index": focus.index})
                continue
            if label is None:
                continue

            value = self._read_value(focus, context)
            logger.debug("label_resolved", extra={"strategy": strategy.name, "index": focus.index})
            if value is not None and value != label:
                return self.translator.translate("{0}: {1}", label, value)
            return label

        logger.debug("label_unresolved", extra={"index": focus.index})
        return None

    def _read_value(self, focus: FocusContext, context: ResolutionContext) -> str | None:
        try:
            return self.value_reader.read_value(focus, context)
        except Exception:  # noqa: BLE001
            logger.exception("value_read_failed", extra={"index": focus.index})
            return None
