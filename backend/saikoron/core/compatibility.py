"""Compatibility Resolver — which drawing types a source may legally use.

Invariants:
    - SIMPLE is always legal
    - List sources: CARDS <= cards_max, SLOT <= slot_max, WHEEL <= wheel_max candidates
    - Range sources never get CARDS; SLOT and WHEEL follow the same thresholds
    - Default drawing priority: WHEEL > SLOT > CARDS > SIMPLE
    - A source edit must be followed by resolve_drawing (current drawing clamped)

Design Decisions:
    - Thresholds as a named frozen table (DRAWING_THRESHOLDS): single source of truth,
      overridable per call for tests and alternative front-ends
    - Result order mirrors insertion order (simple, cards, slot, wheel) so serialized
      tools match existing client data
"""

from dataclasses import dataclass
from typing import assert_never

from saikoron.core.domain_types import DrawingType
from saikoron.core.sources import ListSource, RandomSource, RangeSource, candidate_count


@dataclass(frozen=True)
class DrawingThresholds:
    """Maximum candidate counts per drawing type."""
    wheel_max: int = 20
    slot_max: int = 50
    cards_max: int = 100
    large_range: int = 1000


DRAWING_THRESHOLDS = DrawingThresholds()

DRAWING_PRIORITY: tuple[DrawingType, ...] = (
    DrawingType.WHEEL,
    DrawingType.SLOT,
    DrawingType.CARDS,
    DrawingType.SIMPLE,
)


def get_compatible_drawings(
    source: RandomSource,
    count: int | None = None,
    thresholds: DrawingThresholds = DRAWING_THRESHOLDS,
) -> tuple[DrawingType, ...]:
    """Ordered legal drawing types for a source. Pure."""
    if count is None:
        count = candidate_count(source)
    drawings = [DrawingType.SIMPLE]

    match source:
        case ListSource():
            if count <= thresholds.cards_max:
                drawings.append(DrawingType.CARDS)
        case RangeSource():
            pass
        case _:
            assert_never(source)

    if count <= thresholds.slot_max:
        drawings.append(DrawingType.SLOT)
    if count <= thresholds.wheel_max:
        drawings.append(DrawingType.WHEEL)
    return tuple(drawings)


def get_default_drawing(compatible: tuple[DrawingType, ...]) -> DrawingType:
    for drawing in DRAWING_PRIORITY:
        if drawing in compatible:
            return drawing
    return DrawingType.SIMPLE


def resolve_drawing(
    source: RandomSource,
    current: DrawingType | None = None,
    thresholds: DrawingThresholds = DRAWING_THRESHOLDS,
) -> tuple[tuple[DrawingType, ...], DrawingType]:
    """Recompute legal drawings and keep `current` only while it stays legal."""
    compatible = get_compatible_drawings(source, thresholds=thresholds)
    if current is not None and current in compatible:
        return compatible, current
    return compatible, get_default_drawing(compatible)


def is_large_range(
    source: RandomSource, thresholds: DrawingThresholds = DRAWING_THRESHOLDS,
) -> bool:
    """True for range sources with more than `large_range` candidates."""
    match source:
        case RangeSource():
            return candidate_count(source) > thresholds.large_range
        case ListSource():
            return False
        case _:
            assert_never(source)
