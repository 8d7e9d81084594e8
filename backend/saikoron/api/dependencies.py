"""Route Dependencies — builds a ToolService per request.

Invariants:
    - One AsyncSession per request (get_db), one repository bound to it
    - With settings.draw_seed set, every request shares one seeded generator

Design Decisions:
    - Seeded generator cached per seed (lru_cache): reproducible draw sequence for
      demos and manual QA without touching the core's defaults
"""

import random
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from saikoron.config import get_settings
from saikoron.core.domain_types import UniformSource, default_uniform
from saikoron.infrastructure.database import get_db
from saikoron.infrastructure.tool_repository import SqlToolRepository
from saikoron.services.tool_service import ToolService


@lru_cache
def _seeded_uniform(seed: int) -> UniformSource:
    return random.Random(seed).random


def get_uniform() -> UniformSource:
    seed = get_settings().draw_seed
    return default_uniform if seed is None else _seeded_uniform(seed)


async def get_tool_service(
    db: AsyncSession = Depends(get_db),
    uniform: UniformSource = Depends(get_uniform),
) -> ToolService:
    return ToolService(SqlToolRepository(db), uniform=uniform)
