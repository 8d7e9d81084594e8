"""Source Model — the two candidate-source shapes and their candidate counts.

Invariants:
    - RandomSource is a closed union: ListSource | RangeSource, matched exhaustively
    - ListItem.weight >= 0 (0 = kept in the list but never selected)
    - RangeSource: finite bounds, min <= max, step > 0
    - candidate_count(range) = floor((max - min) / step) + 1, float steps included

Design Decisions:
    - Frozen dataclasses: value semantics, a source is never edited in place
    - Known limitation: floating steps inherit float division rounding
      ((0.3 - 0) / 0.1 == 2.9999999999999996 -> 3 candidates, not 4); kept as is
"""

import math
from dataclasses import dataclass
from typing import ClassVar, assert_never

from saikoron.core.domain_types import ItemId, SourceType
from saikoron.core.errors import InvalidSourceError


@dataclass(frozen=True)
class ListItem:
    """One weighted candidate of a list source."""
    id: ItemId
    label: str
    weight: float = 1

    def __post_init__(self) -> None:
        if not math.isfinite(self.weight) or self.weight < 0:
            raise InvalidSourceError(
                f"Item weight must be a non-negative number, got {self.weight}",
                "weight",
            )


@dataclass(frozen=True)
class ListSource:
    """Explicit ordered candidate list."""
    source_type: ClassVar[SourceType] = SourceType.LIST

    items: tuple[ListItem, ...] = ()

    @property
    def item_ids(self) -> frozenset[str]:
        return frozenset(item.id for item in self.items)


@dataclass(frozen=True)
class RangeSource:
    """Numeric range {min, min+step, ...} truncated at max."""
    source_type: ClassVar[SourceType] = SourceType.RANGE

    min: float
    max: float
    step: float = 1
    is_integer: bool = True

    def __post_init__(self) -> None:
        for name in ("min", "max", "step"):
            if not math.isfinite(getattr(self, name)):
                raise InvalidSourceError(f"Range {name} must be finite", name)
        if self.min > self.max:
            raise InvalidSourceError(
                f"Range min ({self.min}) must not exceed max ({self.max})", "min",
            )
        if self.step <= 0:
            raise InvalidSourceError(
                f"Range step must be positive, got {self.step}", "step",
            )


RandomSource = ListSource | RangeSource


def candidate_count(source: RandomSource) -> int:
    """Number of distinct candidates a source can produce. Pure."""
    match source:
        case ListSource():
            return len(source.items)
        case RangeSource():
            return math.floor((source.max - source.min) / source.step) + 1
        case _:
            assert_never(source)
