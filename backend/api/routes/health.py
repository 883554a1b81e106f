"""Service status for load balancers and operators."""

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.config import get_settings
from infrastructure.database import get_db
from infrastructure.database.models import Category

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])
settings = get_settings()


def _status(state: str, **extra) -> dict:
    return {
        "status": state,
        "service": settings.app_name,
        "version": settings.app_version,
        "timestamp": datetime.now(UTC).isoformat(),
        **extra,
    }


@router.get("")
async def process_status():
    return _status("ok")


@router.get("/db")
async def database_status(db: AsyncSession = Depends(get_db)):
    """
    Report whether the news database answers queries.

    Counts the seeded categories, so an empty or unreachable database
    shows up as ``unavailable`` with a 503.
    """
    try:
        categories = (await db.execute(select(func.count(Category.id)))).scalar_one()
    except SQLAlchemyError as e:
        logger.error("Database status check failed: %s", e)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=_status("unavailable", database="unreachable"),
        )

    if categories == 0:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=_status("unavailable", database="unseeded", categories=0),
        )
    return _status("ok", database="connected", categories=categories)
