"""Draw Engine — weighted list sampling and range sampling under duplicate/exclusion policy.

Invariants:
    - Every decision is a uniform draw from a closed candidate set, weighted by item weight
    - Empty or zero-weight candidate set -> None (normal outcome, not an error)
    - Zero-weight items are never returned, even by the rounding fallback
    - draw_many_from_list: one working exclusion set shared by both policies;
      returned exclusions == input unless exclude_after_draw
    - draw_many_from_range without duplicates: count capped at the candidate count

Design Decisions:
    - `uniform` is an injected callable over [0, 1) (default random.random) so tests
      can pass fixed sequences or a seeded random.Random(...).random
    - Non-integer range values rounded to the decimal precision of step/min (max 10
      places) to mask float accumulation; integer ranges rounded half-up to int
    - Unique range draws reject on step index as well as value, so rounding that maps
      two indices to one value cannot loop forever
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from saikoron.core.domain_types import UniformSource, default_uniform
from saikoron.core.sources import ListItem, RangeSource, candidate_count

MAX_DECIMAL_PLACES: int = 10

RangeValue = int | float


@dataclass(frozen=True)
class ListDraw:
    """Outcome of a batch list draw."""
    items: tuple[ListItem, ...]
    excluded_ids: frozenset[str]


# ─── List sampling ───────────────────────────────────────────────

def draw_one_from_list(
    items: Iterable[ListItem],
    excluded_ids: Iterable[str] = frozenset(),
    uniform: UniformSource = default_uniform,
) -> ListItem | None:
    """Weighted draw of one item, skipping excluded ids. Pure given `uniform`."""
    excluded = frozenset(excluded_ids)
    eligible = [i for i in items if i.id not in excluded and i.weight > 0]
    if not eligible:
        return None

    total_weight = sum(i.weight for i in eligible)
    if total_weight <= 0:
        return None

    r = uniform() * total_weight
    cumulative = 0.0
    for item in eligible:
        cumulative += item.weight
        if r < cumulative:
            return item
    # float rounding can leave r == cumulative on the last step
    return eligible[-1]


def draw_many_from_list(
    items: Iterable[ListItem],
    count: int,
    excluded_ids: Iterable[str] = frozenset(),
    allow_duplicates: bool = False,
    exclude_after_draw: bool = False,
    uniform: UniformSource = default_uniform,
) -> ListDraw:
    """Repeat draw_one_from_list `count` times; stops early once candidates run out."""
    candidates = tuple(items)
    original = frozenset(excluded_ids)
    working = set(original)
    drawn: list[ListItem] = []

    for _ in range(count):
        item = draw_one_from_list(candidates, working, uniform)
        if item is None:
            break
        drawn.append(item)
        if not allow_duplicates or exclude_after_draw:
            working.add(item.id)

    return ListDraw(
        items=tuple(drawn),
        excluded_ids=frozenset(working) if exclude_after_draw else original,
    )


# ─── Range sampling ──────────────────────────────────────────────

def _decimal_places(value: float) -> int:
    exponent = Decimal(repr(value)).as_tuple().exponent
    return -exponent if isinstance(exponent, int) and exponent < 0 else 0


def range_precision(source: RangeSource) -> int:
    """Decimal places kept for non-integer range values."""
    places = max(_decimal_places(source.step), _decimal_places(source.min))
    return min(places, MAX_DECIMAL_PLACES)


def _is_unit_integer(source: RangeSource) -> bool:
    return (
        source.is_integer
        and source.step == 1
        and math.ceil(source.min) <= math.floor(source.max)
    )


def _index_space(source: RangeSource) -> int:
    if _is_unit_integer(source):
        return math.floor(source.max) - math.ceil(source.min) + 1
    return candidate_count(source)


def _value_at(source: RangeSource, index: int) -> RangeValue:
    if _is_unit_integer(source):
        return math.ceil(source.min) + index
    value = source.min + index * source.step
    if source.is_integer:
        # halves round up, not to even
        return math.floor(value + 0.5)
    return round(value, range_precision(source))


def _draw_index(space: int, uniform: UniformSource) -> int:
    index = math.floor(uniform() * space)
    return max(0, min(index, space - 1))


def draw_one_from_range(
    source: RangeSource, uniform: UniformSource = default_uniform,
) -> RangeValue:
    """Uniform draw of one candidate value from a range source."""
    return _value_at(source, _draw_index(_index_space(source), uniform))


def draw_many_from_range(
    source: RangeSource,
    count: int,
    allow_duplicates: bool = True,
    uniform: UniformSource = default_uniform,
) -> list[RangeValue]:
    """Draw `count` values; without duplicates, capped at the candidate count.

    Unique draws use rejection sampling, so callers should avoid requesting unique
    values from astronomically large ranges.
    """
    if allow_duplicates:
        return [draw_one_from_range(source, uniform) for _ in range(count)]

    space = _index_space(source)
    target = min(count, space)
    values: list[RangeValue] = []
    seen_values: set[RangeValue] = set()
    tried: set[int] = set()

    while len(values) < target and len(tried) < space:
        index = _draw_index(space, uniform)
        if index in tried:
            continue
        tried.add(index)
        value = _value_at(source, index)
        if value in seen_values:
            continue
        seen_values.add(value)
        values.append(value)
    return values
