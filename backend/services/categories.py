"""
Category listing.
"""

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.models import Article, Category


async def list_categories(db: AsyncSession) -> list[tuple[Category, int]]:
    """All categories by name, each with its number of published articles."""
    query = (
        select(Category, func.count(Article.id))
        .outerjoin(
            Article,
            and_(Article.category_id == Category.id, Article.published.is_(True)),
        )
        .group_by(Category.id)
        .order_by(Category.name)
    )
    result = await db.execute(query)
    return [(category, count) for category, count in result.all()]
