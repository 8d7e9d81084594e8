"""Draw Routes — execute draws and adjust presentation, draw mode, exclusions and history.

Invariants:
    - POST /draw appends exactly one result and returns it with the new snapshot
    - PUT /drawing never fails for an incompatible type: 200 with applied=false and
      the unchanged tool
    - Draw mode count >= 1 enforced by DrawModeUpdate before the core merge
"""

import logging

from fastapi import APIRouter, Depends

from saikoron.api.dependencies import get_tool_service
from saikoron.core.tool_snapshot import result_to_snapshot, tool_to_snapshot
from saikoron.schemas.tool import DrawingUpdate, DrawModeUpdate
from saikoron.services.tool_service import ToolService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/tools", tags=["draws"])


@router.post("/{tool_id}/draw")
async def draw(tool_id: str, service: ToolService = Depends(get_tool_service)):
    """Run one draw with the tool's current draw mode."""
    execution = await service.draw(tool_id)
    return {
        "result": result_to_snapshot(execution.result),
        "tool": tool_to_snapshot(execution.tool),
    }


@router.put("/{tool_id}/drawing")
async def change_drawing(
    tool_id: str, body: DrawingUpdate, service: ToolService = Depends(get_tool_service),
):
    change = await service.change_drawing(tool_id, body.drawing)
    return {"applied": change.applied, "tool": tool_to_snapshot(change.tool)}


@router.patch("/{tool_id}/draw-mode")
async def change_draw_mode(
    tool_id: str, body: DrawModeUpdate, service: ToolService = Depends(get_tool_service),
):
    tool = await service.change_draw_mode(tool_id, **body.to_updates())
    return tool_to_snapshot(tool)


@router.post("/{tool_id}/exclusions/reset")
async def reset_exclusions(
    tool_id: str, service: ToolService = Depends(get_tool_service),
):
    return tool_to_snapshot(await service.reset_exclusions(tool_id))


@router.post("/{tool_id}/exclusions/{item_id}/toggle")
async def toggle_exclusion(
    tool_id: str, item_id: str, service: ToolService = Depends(get_tool_service),
):
    return tool_to_snapshot(await service.toggle_exclusion(tool_id, item_id))


@router.delete("/{tool_id}/history")
async def clear_history(tool_id: str, service: ToolService = Depends(get_tool_service)):
    return tool_to_snapshot(await service.clear_history(tool_id))
