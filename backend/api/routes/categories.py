"""
Category API routes.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.content import CategoryResponse
from infrastructure.database.connection import get_db
from services.categories import list_categories

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=list[CategoryResponse])
async def get_categories(db: AsyncSession = Depends(get_db)):
    """All categories with their published article counts."""
    return [
        CategoryResponse.from_category(category, news_count)
        for category, news_count in await list_categories(db)
    ]
