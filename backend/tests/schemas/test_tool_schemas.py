"""Tool Schemas — field-level validation of request bodies.

Invariants:
    - Labels stripped and non-empty, weights >= 0
    - Range bodies reject min > max and step <= 0; blank range name becomes "min〜max"
    - Source edits discriminated on "type"; duplicate item ids rejected
    - Legacy payloads accept camelCase keys
"""

import pytest
from pydantic import ValidationError

from saikoron.core.domain_types import DrawingType
from saikoron.core.sources import ListSource, RangeSource
from saikoron.schemas.tool import (
    DrawingUpdate,
    DrawModeUpdate,
    ItemIn,
    LegacyImport,
    ListToolCreate,
    RangeToolCreate,
    SourceUpdate,
    ToolRename,
)


# ─── Creation ────────────────────────────────────────────────────

def test_item_label_is_stripped():
    assert ItemIn(label="  Sushi ").label == "Sushi"


def test_whitespace_label_rejected():
    with pytest.raises(ValidationError):
        ItemIn(label="   ")


def test_negative_weight_rejected():
    with pytest.raises(ValidationError):
        ItemIn(label="x", weight=-1)


def test_list_create_requires_items():
    with pytest.raises(ValidationError):
        ListToolCreate(name="x", items=[])


def test_list_create_to_drafts():
    body = ListToolCreate(items=[{"label": "A"}, {"label": "B", "weight": 3}])
    drafts = body.to_drafts()
    assert [(d.label, d.weight) for d in drafts] == [("A", 1), ("B", 3)]
    assert body.name == ""


def test_range_create_default_name():
    assert RangeToolCreate(min=1, max=6).name == "1〜6"


def test_range_create_keeps_integers():
    body = RangeToolCreate(name="d", min=1, max=6)
    assert isinstance(body.min, int)
    assert body.step == 1


@pytest.mark.parametrize("fields", [
    {"min": 10, "max": 1},
    {"min": 0, "max": 1, "step": 0},
    {"min": 0, "max": 1, "step": -0.5},
])
def test_range_create_rejects_bad_bounds(fields):
    with pytest.raises(ValidationError):
        RangeToolCreate(**fields)


# ─── Edits ───────────────────────────────────────────────────────

def test_source_update_list_keeps_ids_and_fills_missing():
    body = SourceUpdate(source={
        "type": "list",
        "items": [{"id": "keep", "label": "A"}, {"label": "B"}],
    })
    source = body.source.to_source()
    assert isinstance(source, ListSource)
    assert source.items[0].id == "keep"
    assert source.items[1].id


def test_source_update_rejects_duplicate_ids():
    with pytest.raises(ValidationError):
        SourceUpdate(source={
            "type": "list",
            "items": [{"id": "a", "label": "A"}, {"id": "a", "label": "B"}],
        })


def test_source_update_range():
    body = SourceUpdate(source={
        "type": "range", "min": 0, "max": 1, "step": 0.25, "is_integer": False,
    })
    assert body.source.to_source() == RangeSource(
        min=0, max=1, step=0.25, is_integer=False,
    )


def test_source_update_unknown_type_rejected():
    with pytest.raises(ValidationError):
        SourceUpdate(source={"type": "dice"})


def test_rename_rejects_blank():
    with pytest.raises(ValidationError):
        ToolRename(name="  ")


def test_drawing_update_parses_enum():
    assert DrawingUpdate(drawing="cards").drawing == DrawingType.CARDS


def test_draw_mode_update_only_sets_given_fields():
    assert DrawModeUpdate(count=3).to_updates() == {"count": 3}
    assert DrawModeUpdate(allow_duplicates=False).to_updates() == {
        "allow_duplicates": False,
    }


def test_draw_mode_count_must_be_positive():
    with pytest.raises(ValidationError):
        DrawModeUpdate(count=0)


# ─── Legacy ──────────────────────────────────────────────────────

def test_legacy_import_accepts_camel_case():
    body = LegacyImport(roulettes=[{
        "id": "r1",
        "name": "Old",
        "items": [{"id": "x", "label": "X", "weight": 2}],
        "history": [{"id": "l1", "itemId": "x", "label": "X", "timestamp": 5}],
        "createdAt": 1,
        "updatedAt": 5,
    }])
    roulette = body.roulettes[0].to_roulette()
    assert roulette.history[0].item_id == "x"
    assert (roulette.created_at, roulette.updated_at) == (1, 5)
