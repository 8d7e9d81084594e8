"""Tool Lifecycle — create tools and apply every state transition as a new snapshot.

Invariants:
    - Every transition is PURE: takes a RandomTool, returns a new RandomTool
    - updated_at refreshed on every applied transition and never moves backwards
    - Draw timestamps are non-decreasing across a tool's history
    - Any source change re-runs the compatibility resolver and clamps current_drawing
    - change_drawing to an incompatible type is a flagged no-op (applied=False)
    - change_draw_mode merges without validation (count >= 1 is the caller's job)

Design Decisions:
    - Transitions return small result dataclasses (DrawExecution, DrawingChange) when
      the caller needs more than the new tool
    - clock / new_id / uniform injected with production defaults
    - No terminal state: a tool lives until the owning collaborator discards it
"""

import logging
from dataclasses import dataclass, replace
from typing import Iterable, assert_never

from saikoron.core.compatibility import resolve_drawing
from saikoron.core.domain_types import (
    Clock,
    DrawingType,
    EpochMillis,
    IdFactory,
    ItemId,
    ToolId,
    UniformSource,
    default_uniform,
    epoch_millis,
    new_id,
)
from saikoron.core.draw_engine import draw_many_from_list, draw_many_from_range
from saikoron.core.random_tool import (
    DrawResult,
    ListDrawResult,
    RandomTool,
    RangeDrawResult,
)
from saikoron.core.sources import ListItem, ListSource, RandomSource, RangeSource

logger = logging.getLogger(__name__)

DEFAULT_TOOL_NAME: str = "新しいルーレット"
NAME_SEPARATOR: str = "・"
NAME_LABEL_LIMIT: int = 3
COPY_SUFFIX: str = " (コピー)"


@dataclass(frozen=True)
class ItemDraft:
    """Label/weight pair for an item that has no id yet."""
    label: str
    weight: float = 1


@dataclass(frozen=True)
class DrawExecution:
    result: DrawResult
    tool: RandomTool


@dataclass(frozen=True)
class DrawingChange:
    """Outcome of change_drawing; applied=False means the tool is unchanged."""
    tool: RandomTool
    applied: bool


# ─── Naming ──────────────────────────────────────────────────────

def suggest_tool_name(labels: Iterable[str]) -> str:
    """Name a tool after its first labels (blank labels ignored)."""
    cleaned = [label.strip() for label in labels if label.strip()]
    if not cleaned:
        return DEFAULT_TOOL_NAME
    if len(cleaned) <= NAME_LABEL_LIMIT:
        return NAME_SEPARATOR.join(cleaned)
    return f"{NAME_SEPARATOR.join(cleaned[:NAME_LABEL_LIMIT])}..."


# ─── Construction ────────────────────────────────────────────────

def build_list_source(
    drafts: Iterable[ItemDraft], new_id: IdFactory = new_id,
) -> ListSource:
    return ListSource(items=tuple(
        ListItem(id=ItemId(new_id()), label=d.label, weight=d.weight)
        for d in drafts
    ))


def _new_tool(
    name: str, source: RandomSource, clock: Clock, new_id: IdFactory,
) -> RandomTool:
    now = EpochMillis(clock())
    compatible, drawing = resolve_drawing(source)
    return RandomTool(
        id=ToolId(new_id()),
        name=name,
        source=source,
        compatible_drawings=compatible,
        current_drawing=drawing,
        created_at=now,
        updated_at=now,
    )


def create_list_tool(
    name: str,
    items: Iterable[ItemDraft],
    *,
    clock: Clock = epoch_millis,
    new_id: IdFactory = new_id,
) -> RandomTool:
    """Create a list-sourced tool; a blank name is derived from the labels."""
    source = build_list_source(items, new_id)
    if not name.strip():
        name = suggest_tool_name(item.label for item in source.items)
    return _new_tool(name, source, clock, new_id)


def create_range_tool(
    name: str,
    min: float,
    max: float,
    step: float = 1,
    is_integer: bool = True,
    *,
    clock: Clock = epoch_millis,
    new_id: IdFactory = new_id,
) -> RandomTool:
    source = RangeSource(min=min, max=max, step=step, is_integer=is_integer)
    return _new_tool(name, source, clock, new_id)


def duplicate_tool(
    tool: RandomTool, *, clock: Clock = epoch_millis, new_id: IdFactory = new_id,
) -> RandomTool:
    """Copy a tool's source and settings under new ids; history is not copied."""
    source = tool.source
    if isinstance(source, ListSource):
        source = ListSource(items=tuple(
            replace(item, id=ItemId(new_id())) for item in source.items
        ))
    copy = _new_tool(f"{tool.name}{COPY_SUFFIX}", source, clock, new_id)
    return replace(copy, current_drawing=tool.current_drawing, draw_mode=tool.draw_mode)


# ─── Transitions ─────────────────────────────────────────────────

def _touch(tool: RandomTool, clock: Clock) -> EpochMillis:
    return EpochMillis(max(clock(), tool.updated_at))


def execute_tool(
    tool: RandomTool,
    uniform: UniformSource = default_uniform,
    *,
    clock: Clock = epoch_millis,
) -> DrawExecution:
    """Run the draw engine once and append the result to history."""
    timestamp = _touch(tool, clock)
    if tool.history:
        timestamp = EpochMillis(max(timestamp, tool.history[-1].timestamp))
    mode = tool.draw_mode
    source = tool.source

    match source:
        case ListSource():
            draw = draw_many_from_list(
                source.items, mode.count, tool.excluded_ids,
                mode.allow_duplicates, mode.exclude_after_draw, uniform,
            )
            result: DrawResult = ListDrawResult(items=draw.items, timestamp=timestamp)
            excluded = draw.excluded_ids
        case RangeSource():
            values = draw_many_from_range(
                source, mode.count, mode.allow_duplicates, uniform,
            )
            result = RangeDrawResult(values=tuple(values), timestamp=timestamp)
            excluded = tool.excluded_ids
        case _:
            assert_never(source)

    updated = replace(
        tool,
        excluded_ids=excluded,
        history=(*tool.history, result),
        updated_at=timestamp,
    )
    return DrawExecution(result=result, tool=updated)


def change_drawing(
    tool: RandomTool, drawing: DrawingType, *, clock: Clock = epoch_millis,
) -> DrawingChange:
    if drawing not in tool.compatible_drawings:
        logger.warning(
            f"Drawing '{drawing.value}' is not compatible with tool",
            extra={"tool_id": tool.id, "drawing": drawing.value},
        )
        return DrawingChange(tool=tool, applied=False)
    updated = replace(tool, current_drawing=drawing, updated_at=_touch(tool, clock))
    return DrawingChange(tool=updated, applied=True)


def change_draw_mode(
    tool: RandomTool, *, clock: Clock = epoch_millis, **updates: int | bool,
) -> RandomTool:
    """Merge partial DrawMode fields (count, exclude_after_draw, allow_duplicates)."""
    return replace(
        tool,
        draw_mode=replace(tool.draw_mode, **updates),
        updated_at=_touch(tool, clock),
    )


def reset_exclusions(tool: RandomTool, *, clock: Clock = epoch_millis) -> RandomTool:
    return replace(tool, excluded_ids=frozenset(), updated_at=_touch(tool, clock))


def clear_history(tool: RandomTool, *, clock: Clock = epoch_millis) -> RandomTool:
    return replace(tool, history=(), updated_at=_touch(tool, clock))


def rename_tool(tool: RandomTool, name: str, *, clock: Clock = epoch_millis) -> RandomTool:
    return replace(tool, name=name, updated_at=_touch(tool, clock))


def update_source(
    tool: RandomTool, source: RandomSource, *, clock: Clock = epoch_millis,
) -> RandomTool:
    """Replace the source, re-resolve drawings, and drop exclusions for vanished items."""
    compatible, drawing = resolve_drawing(source, tool.current_drawing)
    match source:
        case ListSource():
            excluded = tool.excluded_ids & source.item_ids
        case RangeSource():
            excluded = frozenset()
        case _:
            assert_never(source)
    return replace(
        tool,
        source=source,
        compatible_drawings=compatible,
        current_drawing=drawing,
        excluded_ids=excluded,
        updated_at=_touch(tool, clock),
    )


def toggle_exclusion(
    tool: RandomTool, item_id: str, *, clock: Clock = epoch_millis,
) -> RandomTool:
    """Manually exclude/include one list item. Unknown ids and range tools: unchanged."""
    source = tool.source
    if not isinstance(source, ListSource) or item_id not in source.item_ids:
        return tool
    excluded = tool.excluded_ids ^ {item_id}
    return replace(tool, excluded_ids=excluded, updated_at=_touch(tool, clock))
