"""Compatibility Resolver — tests for legal drawing types and default selection.

Invariants:
    - SIMPLE always legal; ranges never get CARDS
    - Thresholds: wheel <= 20, slot <= 50, cards <= 100 candidates
    - Default priority WHEEL > SLOT > CARDS > SIMPLE
    - resolve_drawing keeps a still-legal current drawing, otherwise falls back
"""

from saikoron.core.compatibility import (
    DrawingThresholds,
    get_compatible_drawings,
    get_default_drawing,
    is_large_range,
    resolve_drawing,
)
from saikoron.core.domain_types import DrawingType
from saikoron.core.sources import ListItem, ListSource, RangeSource

W, S, C, P = DrawingType.WHEEL, DrawingType.SLOT, DrawingType.CARDS, DrawingType.SIMPLE


def _list(n: int) -> ListSource:
    return ListSource(items=tuple(ListItem(str(i), f"L{i}") for i in range(n)))


# ─── get_compatible_drawings ─────────────────────────────────────

def test_small_list_gets_every_drawing():
    assert set(get_compatible_drawings(_list(3))) == {P, C, S, W}


def test_list_drawings_in_insertion_order():
    assert get_compatible_drawings(_list(3)) == (P, C, S, W)


def test_list_of_twenty_keeps_wheel():
    assert W in get_compatible_drawings(_list(20))


def test_list_of_21_loses_wheel():
    assert set(get_compatible_drawings(_list(21))) == {P, C, S}


def test_list_of_51_only_simple_and_cards():
    assert set(get_compatible_drawings(_list(51))) == {P, C}


def test_list_of_101_only_simple():
    assert get_compatible_drawings(_list(101)) == (P,)


def test_empty_list_gets_every_drawing():
    assert set(get_compatible_drawings(ListSource())) == {P, C, S, W}


def test_dice_range_excludes_cards():
    drawings = get_compatible_drawings(RangeSource(min=1, max=6))
    assert set(drawings) == {P, S, W}
    assert C not in drawings


def test_hundred_value_range_only_simple():
    assert get_compatible_drawings(RangeSource(min=1, max=100)) == (P,)


def test_explicit_count_overrides_source_count():
    assert get_compatible_drawings(_list(3), count=60) == (P, C)


def test_custom_thresholds():
    thresholds = DrawingThresholds(wheel_max=2, slot_max=3, cards_max=4)
    assert set(get_compatible_drawings(_list(3), thresholds=thresholds)) == {P, C, S}


# ─── get_default_drawing / resolve_drawing ───────────────────────

def test_default_drawing_priority():
    assert get_default_drawing((P, C, S, W)) == W
    assert get_default_drawing((P, C, S)) == S
    assert get_default_drawing((P, C)) == C
    assert get_default_drawing((P,)) == P


def test_default_drawing_of_empty_set_is_simple():
    assert get_default_drawing(()) == P


def test_resolve_keeps_compatible_current():
    compatible, drawing = resolve_drawing(_list(30), current=C)
    assert drawing == C
    assert set(compatible) == {P, C, S}


def test_resolve_clamps_incompatible_current():
    _, drawing = resolve_drawing(_list(30), current=W)
    assert drawing == S


def test_resolve_without_current_uses_default():
    _, drawing = resolve_drawing(_list(5))
    assert drawing == W


# ─── is_large_range ──────────────────────────────────────────────

def test_large_range_threshold():
    assert not is_large_range(RangeSource(min=1, max=1000))
    assert is_large_range(RangeSource(min=1, max=1001))


def test_list_is_never_large_range():
    assert not is_large_range(_list(5000))


def test_ten_items_get_every_drawing():
    assert set(get_compatible_drawings(_list(10))) == {P, C, S, W}


def test_thirty_items_lose_wheel_only():
    assert set(get_compatible_drawings(_list(30))) == {P, C, S}


def test_million_value_range_only_simple():
    source = RangeSource(min=1, max=1_000_000)
    assert get_compatible_drawings(source) == (P,)
    assert is_large_range(source)
