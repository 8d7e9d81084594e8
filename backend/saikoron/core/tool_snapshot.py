"""Tool Snapshot — serialization / deserialization for RandomTool and legacy Roulette.

Invariants:
    - to_snapshot produces a JSON-safe dict (no sets, no Enums, no dataclasses)
    - Keys are camelCase and match the data stored by existing clients
    - largeRange is a derived display hint (range with > 1000 candidates); ignored on load
    - from_snapshot recomputes compatibleDrawings from the source and clamps
      currentDrawing (stored compatibility is never trusted)
    - Missing optional keys fall back to defaults (forward-compatible)
    - Round-trip preserves every field: numbers, order, empty history, zero weights
    - Undecodable data raises SnapshotError

Design Decisions:
    - Pure, no IO: the repository decides where the dict lives
    - roulettes_from_payload swallows malformed payloads into [] because an unreadable
      legacy store means "nothing to import", mirroring the old client loader
"""

import json
import logging
from typing import Any, assert_never

from saikoron.core.compatibility import is_large_range, resolve_drawing
from saikoron.core.domain_types import (
    DrawingType,
    EpochMillis,
    ItemId,
    SourceType,
    ToolId,
)
from saikoron.core.errors import InvalidSourceError, SnapshotError
from saikoron.core.legacy_roulette import ResultLog, Roulette, RouletteItem
from saikoron.core.random_tool import (
    DrawMode,
    DrawResult,
    ListDrawResult,
    RandomTool,
    RangeDrawResult,
)
from saikoron.core.sources import ListItem, ListSource, RandomSource, RangeSource

logger = logging.getLogger(__name__)


# ─── Encoding ────────────────────────────────────────────────────

def _item_to_snapshot(item: ListItem) -> dict:
    return {"id": item.id, "label": item.label, "weight": item.weight}


def source_to_snapshot(source: RandomSource) -> dict:
    match source:
        case ListSource():
            return {
                "type": SourceType.LIST.value,
                "items": [_item_to_snapshot(i) for i in source.items],
            }
        case RangeSource():
            return {
                "type": SourceType.RANGE.value,
                "min": source.min,
                "max": source.max,
                "step": source.step,
                "isInteger": source.is_integer,
            }
        case _:
            assert_never(source)


def result_to_snapshot(result: DrawResult) -> dict:
    match result:
        case ListDrawResult():
            return {
                "type": SourceType.LIST.value,
                "items": [_item_to_snapshot(i) for i in result.items],
                "timestamp": result.timestamp,
            }
        case RangeDrawResult():
            return {
                "type": SourceType.RANGE.value,
                "values": list(result.values),
                "timestamp": result.timestamp,
            }
        case _:
            assert_never(result)


def tool_to_snapshot(tool: RandomTool) -> dict:
    """Serialize a RandomTool to a JSON-safe dict. Pure, no IO."""
    return {
        "id": tool.id,
        "name": tool.name,
        "source": source_to_snapshot(tool.source),
        "compatibleDrawings": [d.value for d in tool.compatible_drawings],
        "currentDrawing": tool.current_drawing.value,
        "largeRange": is_large_range(tool.source),
        "drawMode": {
            "count": tool.draw_mode.count,
            "excludeAfterDraw": tool.draw_mode.exclude_after_draw,
            "allowDuplicates": tool.draw_mode.allow_duplicates,
        },
        "excludedIds": sorted(tool.excluded_ids),
        "history": [result_to_snapshot(r) for r in tool.history],
        "createdAt": tool.created_at,
        "updatedAt": tool.updated_at,
    }


def roulette_to_snapshot(roulette: Roulette) -> dict:
    return {
        "id": roulette.id,
        "name": roulette.name,
        "items": [
            {"id": i.id, "label": i.label, "weight": i.weight}
            for i in roulette.items
        ],
        "history": [
            {
                "id": log.id, "itemId": log.item_id,
                "label": log.label, "timestamp": log.timestamp,
            }
            for log in roulette.history
        ],
        "createdAt": roulette.created_at,
        "updatedAt": roulette.updated_at,
    }


# ─── Decoding ────────────────────────────────────────────────────

def _item_from_snapshot(data: dict) -> ListItem:
    return ListItem(
        id=ItemId(str(data["id"])),
        label=str(data["label"]),
        weight=data.get("weight", 1),
    )


def source_from_snapshot(data: dict) -> RandomSource:
    kind = SourceType(data["type"])
    match kind:
        case SourceType.LIST:
            return ListSource(items=tuple(
                _item_from_snapshot(i) for i in data.get("items", [])
            ))
        case SourceType.RANGE:
            return RangeSource(
                min=data["min"],
                max=data["max"],
                step=data.get("step", 1),
                is_integer=bool(data.get("isInteger", True)),
            )
        case _:
            assert_never(kind)


def result_from_snapshot(data: dict) -> DrawResult:
    kind = SourceType(data["type"])
    timestamp = EpochMillis(int(data["timestamp"]))
    match kind:
        case SourceType.LIST:
            return ListDrawResult(
                items=tuple(_item_from_snapshot(i) for i in data.get("items", [])),
                timestamp=timestamp,
            )
        case SourceType.RANGE:
            return RangeDrawResult(
                values=tuple(data.get("values", [])), timestamp=timestamp,
            )
        case _:
            assert_never(kind)


def _draw_mode_from_snapshot(data: dict | None) -> DrawMode:
    if not data:
        return DrawMode()
    defaults = DrawMode()
    return DrawMode(
        count=int(data.get("count", defaults.count)),
        exclude_after_draw=bool(data.get("excludeAfterDraw", defaults.exclude_after_draw)),
        allow_duplicates=bool(data.get("allowDuplicates", defaults.allow_duplicates)),
    )


def tool_from_snapshot(data: dict) -> RandomTool:
    """Reconstruct a RandomTool from a snapshot dict. Pure, no IO.

    compatibleDrawings is recomputed from the source; a stored currentDrawing that
    is no longer legal is replaced by the default drawing.
    """
    try:
        source = source_from_snapshot(data["source"])
        stored_drawing = data.get("currentDrawing")
        compatible, drawing = resolve_drawing(
            source, DrawingType(stored_drawing) if stored_drawing else None,
        )
        created_at = EpochMillis(int(data.get("createdAt", 0)))
        return RandomTool(
            id=ToolId(str(data["id"])),
            name=str(data.get("name", "")),
            source=source,
            compatible_drawings=compatible,
            current_drawing=drawing,
            created_at=created_at,
            updated_at=EpochMillis(int(data.get("updatedAt", created_at))),
            draw_mode=_draw_mode_from_snapshot(data.get("drawMode")),
            excluded_ids=frozenset(str(i) for i in data.get("excludedIds", [])),
            history=tuple(result_from_snapshot(r) for r in data.get("history", [])),
        )
    except (AttributeError, KeyError, TypeError, ValueError, InvalidSourceError) as e:
        raise SnapshotError(f"Invalid tool snapshot: {e}") from e


def roulette_from_snapshot(data: dict) -> Roulette:
    try:
        created_at = EpochMillis(int(data.get("createdAt", 0)))
        return Roulette(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            items=tuple(
                RouletteItem(
                    id=str(i["id"]), label=str(i["label"]),
                    weight=i.get("weight", 1),
                )
                for i in data.get("items", [])
            ),
            history=tuple(
                ResultLog(
                    id=str(log["id"]),
                    item_id=str(log["itemId"]),
                    label=str(log["label"]),
                    timestamp=EpochMillis(int(log["timestamp"])),
                )
                for log in data.get("history") or []
            ),
            created_at=created_at,
            updated_at=EpochMillis(int(data.get("updatedAt", created_at))),
        )
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise SnapshotError(f"Invalid roulette snapshot: {e}") from e


def roulettes_from_payload(payload: str | list[Any] | None) -> list[Roulette]:
    """Decode a stored legacy roulette collection; unreadable payloads yield []."""
    if not payload:
        return []
    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as e:
            logger.warning(f"Legacy roulette payload is not valid JSON: {e}")
            return []
    if not isinstance(payload, list):
        logger.warning("Legacy roulette payload is not a list")
        return []
    try:
        return [roulette_from_snapshot(entry) for entry in payload]
    except SnapshotError as e:
        logger.warning(f"Legacy roulette payload rejected: {e.message}")
        return []
