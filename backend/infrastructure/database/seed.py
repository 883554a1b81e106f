"""
Reference data seeding.

Categories are read-only from the API's point of view, so the rows the
feed filters on are created here, once, keyed by slug.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models.content import Category

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES: list[dict[str, str]] = [
    {
        "name": "Technology",
        "slug": "technology",
        "description": "Latest in technology and innovation",
    },
    {
        "name": "Business",
        "slug": "business",
        "description": "Business and finance news",
    },
    {
        "name": "Sports",
        "slug": "sports",
        "description": "Sports updates and highlights",
    },
    {
        "name": "Entertainment",
        "slug": "entertainment",
        "description": "Entertainment and celebrity news",
    },
]


async def seed_categories(
    db: AsyncSession,
    categories: list[dict[str, str]] | None = None,
) -> int:
    """
    Insert any missing reference categories.

    Args:
        db: Database session
        categories: Category definitions; defaults to DEFAULT_CATEGORIES

    Returns:
        Number of categories created
    """
    categories = categories if categories is not None else DEFAULT_CATEGORIES

    result = await db.execute(select(Category.slug))
    existing = set(result.scalars().all())

    created = 0
    for data in categories:
        if data["slug"] in existing:
            continue
        db.add(Category(**data))
        existing.add(data["slug"])
        created += 1

    if created:
        await db.commit()
        logger.info("Seeded %d categories", created)
    return created
