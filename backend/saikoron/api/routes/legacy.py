"""Legacy Roulette Routes — export a list tool as a roulette, import old roulette records.

Invariants:
    - Export of a range tool → 409 LEGACY_NOT_REPRESENTABLE
    - Import keeps roulette ids: re-importing the same record overwrites (last write wins)
    - /legacy/roulettes validates every record (400 on bad input);
      /legacy/payload accepts a raw stored collection and imports nothing
      when it cannot be read
"""

import logging

from fastapi import APIRouter, Depends, status

from saikoron.api.dependencies import get_tool_service
from saikoron.core.tool_snapshot import (
    roulette_to_snapshot,
    roulettes_from_payload,
    tool_to_snapshot,
)
from saikoron.schemas.tool import LegacyImport, LegacyPayloadImport
from saikoron.services.tool_service import ToolService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["legacy"])


@router.get("/tools/{tool_id}/legacy")
async def export_legacy(tool_id: str, service: ToolService = Depends(get_tool_service)):
    return roulette_to_snapshot(await service.export_legacy(tool_id))


@router.post("/legacy/roulettes", status_code=status.HTTP_201_CREATED)
async def import_legacy(
    body: LegacyImport, service: ToolService = Depends(get_tool_service),
):
    tools = await service.import_legacy(r.to_roulette() for r in body.roulettes)
    return {"tools": [tool_to_snapshot(t) for t in tools]}


@router.post("/legacy/payload", status_code=status.HTTP_201_CREATED)
async def import_legacy_payload(
    body: LegacyPayloadImport, service: ToolService = Depends(get_tool_service),
):
    """Migrate an old client's stored roulette collection as-is."""
    tools = await service.import_legacy(roulettes_from_payload(body.payload))
    return {"tools": [tool_to_snapshot(t) for t in tools]}
