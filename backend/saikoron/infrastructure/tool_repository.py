"""SQL Tool Repository — ToolRepository implementation over the random_tools table.

Invariants:
    - save() is an upsert by id (last write wins), committed immediately
    - Rows whose snapshot no longer decodes are skipped with a warning, never raised:
      an unreadable store degrades to fewer (or zero) tools
    - Returned tools are always freshly decoded; rows are never handed to callers

Design Decisions:
    - session.merge() for upsert: portable across SQLite and PostgreSQL
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from saikoron.core.domain_types import ToolId
from saikoron.core.errors import SnapshotError
from saikoron.core.random_tool import RandomTool
from saikoron.core.tool_snapshot import tool_from_snapshot, tool_to_snapshot
from saikoron.models.random_tool import RandomToolRecord

logger = logging.getLogger(__name__)


def _to_record(tool: RandomTool) -> RandomToolRecord:
    return RandomToolRecord(
        id=tool.id,
        name=tool.name,
        source_type=tool.source_type.value,
        snapshot=tool_to_snapshot(tool),
        created_at=tool.created_at,
        updated_at=tool.updated_at,
    )


def _decode(record: RandomToolRecord) -> RandomTool | None:
    try:
        return tool_from_snapshot(record.snapshot)
    except SnapshotError as e:
        logger.warning(
            f"Skipping unreadable tool snapshot: {e.message}",
            extra={"tool_id": record.id, "error_code": e.code},
        )
        return None


class SqlToolRepository:
    """Persists RandomTool snapshots through an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> list[RandomTool]:
        result = await self.db.execute(
            select(RandomToolRecord).order_by(RandomToolRecord.created_at),
        )
        tools = (_decode(r) for r in result.scalars().all())
        return [t for t in tools if t is not None]

    async def get(self, tool_id: ToolId) -> RandomTool | None:
        record = await self.db.get(RandomToolRecord, tool_id)
        return _decode(record) if record else None

    async def save(self, tool: RandomTool) -> None:
        await self.db.merge(_to_record(tool))
        await self.db.commit()

    async def save_many(self, tools: list[RandomTool]) -> None:
        for tool in tools:
            await self.db.merge(_to_record(tool))
        await self.db.commit()

    async def delete(self, tool_id: ToolId) -> bool:
        record = await self.db.get(RandomToolRecord, tool_id)
        if record is None:
            return False
        await self.db.delete(record)
        await self.db.commit()
        return True
