"""Draw Engine — tests for weighted list sampling and range sampling.

Invariants:
    - Empty / fully excluded / all-zero-weight candidate sets yield None
    - Zero-weight items are never drawn
    - Without duplicates a batch never repeats an item or value
    - Exclusions returned unchanged unless exclude_after_draw
    - Range values always lie on the step grid within [min, max]

Design Decisions:
    - Exact cases use fixed uniform sequences; distribution checks use a seeded
      random.Random so the bounds are deterministic
"""

import itertools
import random
from collections import Counter

from saikoron.core.draw_engine import (
    MAX_DECIMAL_PLACES,
    draw_many_from_list,
    draw_many_from_range,
    draw_one_from_list,
    draw_one_from_range,
    range_precision,
)
from saikoron.core.sources import ListItem, RangeSource

A = ListItem(id="a", label="A", weight=1)
B = ListItem(id="b", label="B", weight=1)
C = ListItem(id="c", label="C", weight=2)
ITEMS = (A, B, C)


def _seq(*values: float):
    it = itertools.cycle(values)
    return lambda: next(it)


# ─── draw_one_from_list ──────────────────────────────────────────

def test_walks_cumulative_weights():
    assert draw_one_from_list(ITEMS, uniform=_seq(0.0)) == A
    assert draw_one_from_list(ITEMS, uniform=_seq(0.3)) == B
    assert draw_one_from_list(ITEMS, uniform=_seq(0.5)) == C


def test_rounding_fallback_returns_last_eligible():
    assert draw_one_from_list(ITEMS, uniform=_seq(1.0)) == C


def test_fallback_never_returns_zero_weight_item():
    zero = ListItem(id="z", label="Z", weight=0)
    assert draw_one_from_list((A, zero), uniform=_seq(1.0)) == A


def test_excluded_items_skipped():
    assert draw_one_from_list(ITEMS, {"a"}, uniform=_seq(0.0)) == B


def test_empty_list_yields_none():
    assert draw_one_from_list(()) is None


def test_all_excluded_yields_none():
    assert draw_one_from_list(ITEMS, {"a", "b", "c"}) is None


def test_all_zero_weights_yield_none():
    items = (ListItem("x", "X", 0), ListItem("y", "Y", 0))
    assert draw_one_from_list(items) is None


def test_heavy_weight_dominates():
    heavy = ListItem(id="h", label="Heavy", weight=100)
    light = ListItem(id="l", label="Light", weight=1)
    uniform = random.Random(42).random
    counts = Counter(
        draw_one_from_list((heavy, light), uniform=uniform).id for _ in range(1000)
    )
    assert counts["h"] > 900


def test_zero_weight_never_drawn_over_many_draws():
    zero = ListItem(id="z", label="Z", weight=0)
    uniform = random.Random(7).random
    drawn = {draw_one_from_list((A, zero, B), uniform=uniform).id for _ in range(500)}
    assert "z" not in drawn


# ─── draw_many_from_list ─────────────────────────────────────────

def test_batch_without_duplicates_is_distinct():
    draw = draw_many_from_list(ITEMS, 3, uniform=random.Random(1).random)
    assert sorted(i.id for i in draw.items) == ["a", "b", "c"]


def test_batch_stops_when_candidates_run_out():
    draw = draw_many_from_list(ITEMS, 5, uniform=random.Random(2).random)
    assert len(draw.items) == 3


def test_batch_with_duplicates_fills_count():
    draw = draw_many_from_list(
        ITEMS, 10, allow_duplicates=True, uniform=_seq(0.0),
    )
    assert [i.id for i in draw.items] == ["a"] * 10


def test_exclusions_unchanged_without_exclude_after_draw():
    draw = draw_many_from_list(ITEMS, 2, {"c"}, uniform=_seq(0.0))
    assert draw.excluded_ids == frozenset({"c"})
    assert [i.id for i in draw.items] == ["a", "b"]


def test_exclude_after_draw_accumulates_drawn_ids():
    draw = draw_many_from_list(
        ITEMS, 1, {"c"}, exclude_after_draw=True, uniform=_seq(0.0),
    )
    assert draw.excluded_ids == frozenset({"a", "c"})


def test_exclude_after_draw_overrides_duplicates():
    draw = draw_many_from_list(
        ITEMS, 5, allow_duplicates=True, exclude_after_draw=True,
        uniform=random.Random(3).random,
    )
    assert len(draw.items) == 3
    assert len({i.id for i in draw.items}) == 3
    assert draw.excluded_ids == frozenset({"a", "b", "c"})


def test_fully_excluded_batch_is_empty():
    draw = draw_many_from_list(ITEMS, 3, {"a", "b", "c"})
    assert draw.items == ()


# ─── Range sampling ──────────────────────────────────────────────

DICE = RangeSource(min=1, max=6)


def test_dice_maps_uniform_to_faces():
    assert draw_one_from_range(DICE, _seq(0.0)) == 1
    assert draw_one_from_range(DICE, _seq(0.5)) == 4
    assert draw_one_from_range(DICE, _seq(0.999)) == 6


def test_uniform_of_one_is_clamped_to_last_value():
    assert draw_one_from_range(DICE, _seq(1.0)) == 6


def test_integer_values_are_ints():
    assert isinstance(draw_one_from_range(DICE, _seq(0.2)), int)


def test_stepped_range_stays_on_grid():
    source = RangeSource(min=0, max=10, step=3)
    assert draw_one_from_range(source, _seq(0.99)) == 9
    values = draw_many_from_range(source, 200, uniform=random.Random(5).random)
    assert set(values) <= {0, 3, 6, 9}


def test_decimal_range_rounded_to_step_precision():
    source = RangeSource(min=0, max=1, step=0.1, is_integer=False)
    assert draw_one_from_range(source, _seq(0.3)) == 0.3


def test_integer_range_with_fractional_step_rounds_halves_up():
    source = RangeSource(min=0, max=3, step=0.5)
    values = [draw_one_from_range(source, _seq((i + 0.5) / 7)) for i in range(7)]
    assert values == [0, 1, 1, 2, 2, 3, 3]


def test_decimal_range_draws_stay_on_step_grid():
    source = RangeSource(min=0, max=1, step=0.1, is_integer=False)
    values = draw_many_from_range(source, 100, uniform=random.Random(21).random)
    assert len(values) == 100
    for v in values:
        assert 0 <= v <= 1
        assert abs(v - round(v / 0.1) * 0.1) < 1e-4


def test_integer_range_with_fractional_bounds():
    source = RangeSource(min=0.5, max=3.5)
    values = draw_many_from_range(source, 100, uniform=random.Random(9).random)
    assert set(values) <= {1, 2, 3}


def test_dice_distribution_is_roughly_uniform():
    values = draw_many_from_range(DICE, 6000, uniform=random.Random(11).random)
    counts = Counter(values)
    assert set(counts) == {1, 2, 3, 4, 5, 6}
    assert all(800 < n < 1200 for n in counts.values())


def test_unique_range_draw_is_distinct():
    values = draw_many_from_range(
        DICE, 6, allow_duplicates=False, uniform=random.Random(4).random,
    )
    assert sorted(values) == [1, 2, 3, 4, 5, 6]


def test_unique_range_draw_capped_at_candidate_count():
    values = draw_many_from_range(
        DICE, 10, allow_duplicates=False, uniform=random.Random(6).random,
    )
    assert len(values) == 6


def test_unique_draw_terminates_when_rounding_collapses_values():
    # 0, 0.4, 0.8 round to 0, 0, 1
    source = RangeSource(min=0, max=1, step=0.4)
    values = draw_many_from_range(
        source, 3, allow_duplicates=False, uniform=random.Random(8).random,
    )
    assert sorted(values) == [0, 1]


def test_range_draw_with_duplicates_fills_count():
    assert len(draw_many_from_range(DICE, 20, uniform=random.Random(0).random)) == 20


# ─── range_precision ─────────────────────────────────────────────

def test_precision_from_step_and_min():
    assert range_precision(RangeSource(min=0, max=1, step=0.1, is_integer=False)) == 1
    assert range_precision(RangeSource(min=0.25, max=1, step=0.5, is_integer=False)) == 2


def test_precision_capped():
    source = RangeSource(min=0, max=1e-9, step=1e-12, is_integer=False)
    assert range_precision(source) == MAX_DECIMAL_PLACES
