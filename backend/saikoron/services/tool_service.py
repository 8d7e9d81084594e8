"""Tool Service — orchestrates repository IO around pure tool transitions.

Invariants:
    - Every mutation: load latest snapshot → pure core transition → save new snapshot
    - Read-modify-write for one tool is serialized by a per-tool asyncio.Lock
      (single writer per tool inside this process)
    - Rejected drawing changes and no-op toggles are not written back
    - Missing tools raise ResourceNotFoundError; range tools asked for the legacy
      shape raise LegacyNotRepresentableError (core returns None, shell decides)

Design Decisions:
    - Locks live in a module-level WeakValueDictionary: an entry exists only while a
      caller holds or awaits it, so unknown ids never accumulate
    - Single-process uvicorn, no cross-worker coordination
      (ADR: last write wins across processes)
    - uniform / clock injected so routes can run seeded draws and tests stay exact
"""

import asyncio
import logging
import weakref
from typing import Callable, Iterable

from saikoron.core import tool_lifecycle as lifecycle
from saikoron.core.domain_types import (
    Clock,
    DrawingType,
    ToolId,
    UniformSource,
    default_uniform,
    epoch_millis,
)
from saikoron.core.errors import (
    ErrorContext,
    LegacyNotRepresentableError,
    ResourceNotFoundError,
)
from saikoron.core.legacy_roulette import Roulette, from_legacy, to_legacy
from saikoron.core.random_tool import RandomTool
from saikoron.core.repository_protocols import ToolRepository
from saikoron.core.sources import RandomSource

logger = logging.getLogger(__name__)

_tool_locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()


def _lock_for(tool_id: str) -> asyncio.Lock:
    """Lock shared by every caller currently working on `tool_id`."""
    lock = _tool_locks.get(tool_id)
    if lock is None:
        lock = asyncio.Lock()
        _tool_locks[tool_id] = lock
    return lock


class ToolService:
    """Use cases for random tools, one method per API operation."""

    def __init__(
        self,
        repo: ToolRepository,
        uniform: UniformSource = default_uniform,
        clock: Clock = epoch_millis,
    ):
        self.repo = repo
        self.uniform = uniform
        self.clock = clock

    # ─── Queries ─────────────────────────────────────────────────

    async def list_tools(self) -> list[RandomTool]:
        return await self.repo.list_all()

    async def get_tool(self, tool_id: str) -> RandomTool:
        tool = await self.repo.get(ToolId(tool_id))
        if tool is None:
            raise ResourceNotFoundError(
                "Tool", tool_id, ErrorContext(tool_id=tool_id),
            )
        return tool

    # ─── Creation / removal ──────────────────────────────────────

    async def create_list_tool(
        self, name: str, items: Iterable[lifecycle.ItemDraft],
    ) -> RandomTool:
        tool = lifecycle.create_list_tool(name, items, clock=self.clock)
        await self.repo.save(tool)
        logger.info(
            f"Created list tool '{tool.name}'",
            extra={"tool_id": tool.id, "source_type": tool.source_type.value},
        )
        return tool

    async def create_range_tool(
        self, name: str, min: float, max: float, step: float, is_integer: bool,
    ) -> RandomTool:
        tool = lifecycle.create_range_tool(
            name, min, max, step, is_integer, clock=self.clock,
        )
        await self.repo.save(tool)
        logger.info(
            f"Created range tool '{tool.name}'",
            extra={"tool_id": tool.id, "source_type": tool.source_type.value},
        )
        return tool

    async def duplicate_tool(self, tool_id: str) -> RandomTool:
        original = await self.get_tool(tool_id)
        copy = lifecycle.duplicate_tool(original, clock=self.clock)
        await self.repo.save(copy)
        return copy

    async def delete_tool(self, tool_id: str) -> None:
        async with _lock_for(tool_id):
            if not await self.repo.delete(ToolId(tool_id)):
                raise ResourceNotFoundError(
                    "Tool", tool_id, ErrorContext(tool_id=tool_id),
                )
        logger.info("Deleted tool", extra={"tool_id": tool_id})

    # ─── Transitions ─────────────────────────────────────────────

    async def _apply(
        self, tool_id: str, transition: Callable[[RandomTool], RandomTool],
    ) -> RandomTool:
        async with _lock_for(tool_id):
            tool = await self.get_tool(tool_id)
            updated = transition(tool)
            if updated is not tool:
                await self.repo.save(updated)
            return updated

    async def draw(self, tool_id: str) -> lifecycle.DrawExecution:
        async with _lock_for(tool_id):
            tool = await self.get_tool(tool_id)
            execution = lifecycle.execute_tool(tool, self.uniform, clock=self.clock)
            await self.repo.save(execution.tool)
        logger.info(
            "Draw executed",
            extra={
                "tool_id": tool_id,
                "source_type": tool.source_type.value,
                "draw_count": tool.draw_mode.count,
            },
        )
        return execution

    async def change_drawing(
        self, tool_id: str, drawing: DrawingType,
    ) -> lifecycle.DrawingChange:
        async with _lock_for(tool_id):
            tool = await self.get_tool(tool_id)
            change = lifecycle.change_drawing(tool, drawing, clock=self.clock)
            if change.applied:
                await self.repo.save(change.tool)
            return change

    async def change_draw_mode(self, tool_id: str, **updates: int | bool) -> RandomTool:
        return await self._apply(
            tool_id,
            lambda t: lifecycle.change_draw_mode(t, clock=self.clock, **updates),
        )

    async def reset_exclusions(self, tool_id: str) -> RandomTool:
        return await self._apply(
            tool_id, lambda t: lifecycle.reset_exclusions(t, clock=self.clock),
        )

    async def clear_history(self, tool_id: str) -> RandomTool:
        return await self._apply(
            tool_id, lambda t: lifecycle.clear_history(t, clock=self.clock),
        )

    async def toggle_exclusion(self, tool_id: str, item_id: str) -> RandomTool:
        return await self._apply(
            tool_id,
            lambda t: lifecycle.toggle_exclusion(t, item_id, clock=self.clock),
        )

    async def rename_tool(self, tool_id: str, name: str) -> RandomTool:
        return await self._apply(
            tool_id, lambda t: lifecycle.rename_tool(t, name, clock=self.clock),
        )

    async def update_source(self, tool_id: str, source: RandomSource) -> RandomTool:
        return await self._apply(
            tool_id, lambda t: lifecycle.update_source(t, source, clock=self.clock),
        )

    # ─── Legacy roulette ─────────────────────────────────────────

    async def export_legacy(self, tool_id: str) -> Roulette:
        roulette = to_legacy(await self.get_tool(tool_id))
        if roulette is None:
            raise LegacyNotRepresentableError(tool_id)
        return roulette

    async def import_legacy(self, roulettes: Iterable[Roulette]) -> list[RandomTool]:
        tools = [from_legacy(r) for r in roulettes]
        if tools:
            await self.repo.save_many(tools)
        logger.info(f"Imported {len(tools)} legacy roulette(s)")
        return tools
