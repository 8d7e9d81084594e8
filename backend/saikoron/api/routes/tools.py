"""Tool Lifecycle Routes — create, list, read, rename, edit source, duplicate, delete.

Invariants:
    - Request bodies validated by Pydantic before reaching the handler
    - Responses are camelCase tool snapshots (core/tool_snapshot.py)
    - Source edits re-run the compatibility resolver (core/tool_lifecycle.update_source)

Design Decisions:
    - Thin handlers: every rule lives in core/, every IO step in ToolService
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from saikoron.api.dependencies import get_tool_service
from saikoron.core.tool_snapshot import tool_to_snapshot
from saikoron.schemas.tool import (
    ListToolCreate,
    RangeToolCreate,
    SourceUpdate,
    ToolRename,
)
from saikoron.services.tool_service import ToolService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/tools", tags=["tools"])


@router.post("/list", status_code=status.HTTP_201_CREATED)
async def create_list_tool(
    body: ListToolCreate, service: ToolService = Depends(get_tool_service),
):
    """Create a weighted-list tool."""
    tool = await service.create_list_tool(body.name, body.to_drafts())
    return tool_to_snapshot(tool)


@router.post("/range", status_code=status.HTTP_201_CREATED)
async def create_range_tool(
    body: RangeToolCreate, service: ToolService = Depends(get_tool_service),
):
    """Create a numeric-range tool."""
    tool = await service.create_range_tool(
        body.name, body.min, body.max, body.step, body.is_integer,
    )
    return tool_to_snapshot(tool)


@router.get("")
async def list_tools(service: ToolService = Depends(get_tool_service)):
    """List every stored tool, oldest first."""
    tools = await service.list_tools()
    return {"tools": [tool_to_snapshot(t) for t in tools]}


@router.get("/{tool_id}")
async def get_tool(tool_id: str, service: ToolService = Depends(get_tool_service)):
    return tool_to_snapshot(await service.get_tool(tool_id))


@router.delete("/{tool_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tool(tool_id: str, service: ToolService = Depends(get_tool_service)):
    await service.delete_tool(tool_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{tool_id}/name")
async def rename_tool(
    tool_id: str, body: ToolRename, service: ToolService = Depends(get_tool_service),
):
    return tool_to_snapshot(await service.rename_tool(tool_id, body.name))


@router.put("/{tool_id}/source")
async def update_source(
    tool_id: str, body: SourceUpdate, service: ToolService = Depends(get_tool_service),
):
    """Replace the tool's source; drawing is clamped to the new compatible set."""
    tool = await service.update_source(tool_id, body.source.to_source())
    return tool_to_snapshot(tool)


@router.post("/{tool_id}/duplicate", status_code=status.HTTP_201_CREATED)
async def duplicate_tool(
    tool_id: str, service: ToolService = Depends(get_tool_service),
):
    return tool_to_snapshot(await service.duplicate_tool(tool_id))
