"""
Public publisher directory.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.auth import PublicPublisherResponse
from infrastructure.database.connection import get_db
from services.publishers import list_publishers

router = APIRouter(prefix="/publishers", tags=["Publishers"])


@router.get("", response_model=list[PublicPublisherResponse])
async def get_publishers(db: AsyncSession = Depends(get_db)):
    """All publishers with their published article counts."""
    return [
        PublicPublisherResponse.from_publisher(publisher, news_count)
        for publisher, news_count in await list_publishers(db)
    ]
