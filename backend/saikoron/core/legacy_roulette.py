"""Legacy Roulette Adapter — converts between RandomTool and the older list-only roulette record.

Invariants:
    - to_legacy is defined for list sources only; range tools yield None (not an error)
    - One legacy history row per drawn item; each row gets a fresh id and keeps the
      original item id, label and draw timestamp
    - from_legacy keeps id, name, items and timestamps; history rows become one
      single-item ListDrawResult each (weight 1, rows carry no weight)
    - from_legacy recomputes compatibility and the default drawing from the items

Design Decisions:
    - Conversion is lossy towards legacy: draw mode, exclusions, drawing choice and
      grouping of multi-item draws are not representable there
"""

from dataclasses import dataclass
from typing import assert_never

from saikoron.core.compatibility import resolve_drawing
from saikoron.core.domain_types import EpochMillis, IdFactory, ItemId, ToolId, new_id
from saikoron.core.random_tool import ListDrawResult, RandomTool, RangeDrawResult
from saikoron.core.sources import ListItem, ListSource

HISTORY_ITEM_WEIGHT: float = 1


@dataclass(frozen=True)
class RouletteItem:
    id: str
    label: str
    weight: float


@dataclass(frozen=True)
class ResultLog:
    """One legacy history row: a single drawn item."""
    id: str
    item_id: str
    label: str
    timestamp: EpochMillis


@dataclass(frozen=True)
class Roulette:
    """List-only tool record written by older clients."""
    id: str
    name: str
    items: tuple[RouletteItem, ...] = ()
    history: tuple[ResultLog, ...] = ()
    created_at: EpochMillis = EpochMillis(0)
    updated_at: EpochMillis = EpochMillis(0)


def to_legacy(tool: RandomTool, new_id: IdFactory = new_id) -> Roulette | None:
    """Flatten a list tool into a roulette. None when the source is a range."""
    source = tool.source
    if not isinstance(source, ListSource):
        return None

    history: list[ResultLog] = []
    for result in tool.history:
        match result:
            case ListDrawResult():
                history.extend(
                    ResultLog(
                        id=new_id(), item_id=item.id,
                        label=item.label, timestamp=result.timestamp,
                    )
                    for item in result.items
                )
            case RangeDrawResult():
                # list tools never record range results
                continue
            case _:
                assert_never(result)

    return Roulette(
        id=tool.id,
        name=tool.name,
        items=tuple(
            RouletteItem(id=item.id, label=item.label, weight=item.weight)
            for item in source.items
        ),
        history=tuple(history),
        created_at=tool.created_at,
        updated_at=tool.updated_at,
    )


def from_legacy(roulette: Roulette) -> RandomTool:
    """Rebuild a list tool from a roulette record, preserving identity and history."""
    source = ListSource(items=tuple(
        ListItem(id=ItemId(item.id), label=item.label, weight=item.weight)
        for item in roulette.items
    ))
    compatible, drawing = resolve_drawing(source)
    history = tuple(
        ListDrawResult(
            items=(ListItem(
                id=ItemId(log.item_id), label=log.label, weight=HISTORY_ITEM_WEIGHT,
            ),),
            timestamp=log.timestamp,
        )
        for log in roulette.history
    )
    return RandomTool(
        id=ToolId(roulette.id),
        name=roulette.name,
        source=source,
        compatible_drawings=compatible,
        current_drawing=drawing,
        created_at=roulette.created_at,
        updated_at=roulette.updated_at,
        history=history,
    )
