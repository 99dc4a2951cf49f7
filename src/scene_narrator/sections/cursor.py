from __future__ import annotations

from bisect import bisect_left, bisect_right
from dataclasses import dataclass, field


@dataclass(slots=True)
class NavigationCursor:
    """Index into a list of narration sections split into groups.

    ``index`` stays within ``[0, len(sections) - 1]`` while ``sections`` is
    non-empty. Group starts beyond the current list are ignored.
    """

    sections: list[str] = field(default_factory=list)
    group_starts: tuple[int, ...] = (0,)
    index: int = 0

    def __post_init__(self) -> None:
        self.group_starts = tuple(sorted(set(self.group_starts)))
        self.clamp()

    def __len__(self) -> int:
        return len(self.sections)

    @property
    def current(self) -> str | None:
        if not self.sections:
            return None
        return self.sections[self.index]

    @property
    def at_top(self) -> bool:
        return self.index == 0

    @property
    def at_bottom(self) -> bool:
        return self.index >= len(self.sections) - 1

    def replace(self, sections: list[str]) -> None:
        """Swap in rebuilt sections, keeping the index when it is still valid."""
        self.sections = list(sections)
        self.clamp()

    def clamp(self) -> None:
        if not self.sections:
            self.index = 0
        elif self.index >= len(self.sections):
            self.index = len(self.sections) - 1
        elif self.index < 0:
            self.index = 0

    def active_group_starts(self) -> tuple[int, ...]:
        starts = tuple(start for start in self.group_starts if 0 <= start < len(self.sections))
        return starts or (0,)

    def next_group_start(self) -> int:
        starts = self.active_group_starts()
        position = bisect_right(starts, self.index)
        if position < len(starts):
            return starts[position]
        return starts[0]

    def previous_group_start(self) -> int:
        starts = self.active_group_starts()
        position = bisect_left(starts, self.index)
        if position > 0:
            return starts[position - 1]
        return starts[-1]

    def group_of(self, index: int) -> int:
        """Position of the group containing ``index`` in :attr:`group_starts`."""
        starts = self.active_group_starts()
        return max(0, bisect_right(starts, index) - 1)
