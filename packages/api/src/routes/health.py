# This project was developed with assistance from AI tools.
"""Liveness and database health."""

import logging

from db import get_db_service
from fastapi import APIRouter

from .. import __version__
from ..schemas.health import HealthItem

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=list[HealthItem])
async def health() -> list[HealthItem]:
    """Report API liveness and whether the database answers."""
    items = [HealthItem(name="API", status="healthy", message="API is running", version=__version__)]
    try:
        ok = await get_db_service().health_check()
    except Exception as exc:
        logger.error("Database health check failed: %s", exc)
        ok = False
    items.append(
        HealthItem(
            name="Database",
            status="healthy" if ok else "unhealthy",
            message="PostgreSQL connection ok" if ok else "PostgreSQL unreachable",
        )
    )
    return items
