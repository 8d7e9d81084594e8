"""Random Tool — aggregate root combining a source, draw configuration, presentation and history.

Invariants:
    - RandomTool is frozen: every change produces a new value (dataclasses.replace)
    - current_drawing is always a member of compatible_drawings
    - compatible_drawings is derived from source, never edited on its own
    - history timestamps are non-decreasing; updated_at >= created_at
    - excluded_ids only meaningful for list sources (always empty for ranges)

Design Decisions:
    - DrawResult as a closed union of two frozen dataclasses (ListDrawResult |
      RangeDrawResult) matched with `match`, not a string tag
    - Tuples and frozensets instead of lists/sets so snapshots cannot be mutated
"""

from dataclasses import dataclass, field
from typing import ClassVar

from saikoron.core.domain_types import DrawingType, EpochMillis, SourceType, ToolId
from saikoron.core.draw_engine import RangeValue
from saikoron.core.sources import ListItem, RandomSource


@dataclass(frozen=True)
class DrawMode:
    """How one invocation of the engine draws. count >= 1 enforced by callers."""
    count: int = 1
    exclude_after_draw: bool = False
    allow_duplicates: bool = False


@dataclass(frozen=True)
class ListDrawResult:
    items: tuple[ListItem, ...]
    timestamp: EpochMillis

    source_type: ClassVar[SourceType] = SourceType.LIST


@dataclass(frozen=True)
class RangeDrawResult:
    values: tuple[RangeValue, ...]
    timestamp: EpochMillis

    source_type: ClassVar[SourceType] = SourceType.RANGE


DrawResult = ListDrawResult | RangeDrawResult


@dataclass(frozen=True)
class RandomTool:
    """Per-tool state — pure frozen dataclass, no IO."""

    id: ToolId
    name: str
    source: RandomSource
    compatible_drawings: tuple[DrawingType, ...]
    current_drawing: DrawingType
    created_at: EpochMillis
    updated_at: EpochMillis
    draw_mode: DrawMode = field(default_factory=DrawMode)
    excluded_ids: frozenset[str] = frozenset()
    history: tuple[DrawResult, ...] = ()

    @property
    def source_type(self) -> SourceType:
        return self.source.source_type

    @property
    def last_result(self) -> DrawResult | None:
        return self.history[-1] if self.history else None
