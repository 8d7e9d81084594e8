"""Tool Schemas — Pydantic models with field-level validation for tool endpoints.

Invariants:
    - Labels: 1-200 chars, stripped, non-empty; weights >= 0
    - Ranges: min <= max, step > 0
    - DrawModeUpdate.count >= 1 (the core merges without validating)
    - Source edits keep item ids unique; items without id get a fresh one
    - Legacy roulette payloads accept the camelCase keys written by old clients

Design Decisions:
    - Literal discriminator for source edits: Pydantic picks list vs range natively
    - to_*() converters build core values so routes stay thin
    - int | float for range bounds: integers stay integers in stored snapshots
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from saikoron.core.domain_types import DrawingType, EpochMillis, ItemId, new_id
from saikoron.core.legacy_roulette import ResultLog, Roulette, RouletteItem
from saikoron.core.sources import ListItem, ListSource, RangeSource
from saikoron.core.tool_lifecycle import ItemDraft

Number = int | float


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("value cannot be empty or whitespace")
    return v


# --- Creation ----------------------------------------------------------------

class ItemIn(BaseModel):
    """New list item — label and relative weight."""
    label: str = Field(min_length=1, max_length=200)
    weight: float = Field(1, ge=0)

    @field_validator("label")
    @classmethod
    def strip_label(cls, v: str) -> str:
        return _strip_required(v)


class ListToolCreate(BaseModel):
    """List tool creation — blank name is derived from the labels by the core."""
    name: str = Field("", max_length=100)
    items: list[ItemIn] = Field(min_length=1, max_length=1000)

    def to_drafts(self) -> list[ItemDraft]:
        return [ItemDraft(label=i.label, weight=i.weight) for i in self.items]


class RangeToolCreate(BaseModel):
    """Range tool creation — blank name becomes "min〜max"."""
    name: str = Field("", max_length=100)
    min: Number
    max: Number
    step: Number = 1
    is_integer: bool = True

    @model_validator(mode="after")
    def check_bounds(self) -> "RangeToolCreate":
        if self.min > self.max:
            raise ValueError("min must not exceed max")
        if self.step <= 0:
            raise ValueError("step must be positive")
        if not self.name.strip():
            self.name = f"{self.min}〜{self.max}"
        return self


# --- Edits -------------------------------------------------------------------

class ItemEdit(ItemIn):
    """Edited list item — existing items keep their id."""
    id: str | None = Field(None, max_length=64)


class ListSourceUpdate(BaseModel):
    type: Literal["list"] = "list"
    items: list[ItemEdit] = Field(max_length=1000)

    @model_validator(mode="after")
    def check_unique_ids(self) -> "ListSourceUpdate":
        ids = [i.id for i in self.items if i.id]
        if len(ids) != len(set(ids)):
            raise ValueError("item ids must be unique")
        return self

    def to_source(self) -> ListSource:
        return ListSource(items=tuple(
            ListItem(id=ItemId(i.id or new_id()), label=i.label, weight=i.weight)
            for i in self.items
        ))


class RangeSourceUpdate(BaseModel):
    type: Literal["range"] = "range"
    min: Number
    max: Number
    step: Number = 1
    is_integer: bool = True

    @model_validator(mode="after")
    def check_bounds(self) -> "RangeSourceUpdate":
        if self.min > self.max:
            raise ValueError("min must not exceed max")
        if self.step <= 0:
            raise ValueError("step must be positive")
        return self

    def to_source(self) -> RangeSource:
        return RangeSource(
            min=self.min, max=self.max, step=self.step, is_integer=self.is_integer,
        )


class SourceUpdate(BaseModel):
    source: Annotated[
        ListSourceUpdate | RangeSourceUpdate, Field(discriminator="type"),
    ]


class ToolRename(BaseModel):
    name: str = Field(min_length=1, max_length=100)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _strip_required(v)


class DrawingUpdate(BaseModel):
    drawing: DrawingType


class DrawModeUpdate(BaseModel):
    """Partial draw mode — omitted fields keep their current value."""
    count: int | None = Field(None, ge=1, le=1000)
    exclude_after_draw: bool | None = None
    allow_duplicates: bool | None = None

    def to_updates(self) -> dict[str, int | bool]:
        return self.model_dump(exclude_none=True)


# --- Legacy roulette ---------------------------------------------------------

class LegacyItemIn(BaseModel):
    id: str = Field(min_length=1, max_length=64)
    label: str = Field(max_length=200)
    weight: float = Field(1, ge=0)


class LegacyLogIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1, max_length=64)
    item_id: str = Field(alias="itemId", min_length=1, max_length=64)
    label: str = Field(max_length=200)
    timestamp: int = Field(ge=0)


class LegacyRouletteIn(BaseModel):
    """Roulette record as stored by older clients."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1, max_length=64)
    name: str = Field(max_length=200)
    items: list[LegacyItemIn] = []
    history: list[LegacyLogIn] = []
    created_at: int = Field(0, alias="createdAt", ge=0)
    updated_at: int = Field(0, alias="updatedAt", ge=0)

    def to_roulette(self) -> Roulette:
        return Roulette(
            id=self.id,
            name=self.name,
            items=tuple(
                RouletteItem(id=i.id, label=i.label, weight=i.weight)
                for i in self.items
            ),
            history=tuple(
                ResultLog(
                    id=log.id, item_id=log.item_id,
                    label=log.label, timestamp=EpochMillis(log.timestamp),
                )
                for log in self.history
            ),
            created_at=EpochMillis(self.created_at),
            updated_at=EpochMillis(self.updated_at),
        )


class LegacyImport(BaseModel):
    roulettes: list[LegacyRouletteIn] = Field(max_length=500)


class LegacyPayloadImport(BaseModel):
    """Raw legacy roulette store as an old client persisted it (JSON text or list).

    Not validated field by field: an unreadable payload imports nothing.
    """
    payload: str | list[Any] | None = None
