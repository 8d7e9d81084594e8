"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Persistence is keyed by tool id with last-write-wins semantics
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, but the core transitions applied
      between get() and save() are never async themselves
"""

from typing import Protocol

from saikoron.core.domain_types import ToolId
from saikoron.core.random_tool import RandomTool


class ToolRepository(Protocol):
    """Contract for RandomTool persistence — implemented by shell."""
    async def list_all(self) -> list[RandomTool]: ...
    async def get(self, tool_id: ToolId) -> RandomTool | None: ...
    async def save(self, tool: RandomTool) -> None: ...
    async def save_many(self, tools: list[RandomTool]) -> None: ...
    async def delete(self, tool_id: ToolId) -> bool: ...
