"""
Unique article slug allocation.

The resolver probes the store for ``base``, ``base-1``, ``base-2``, ... and
returns the first free candidate. Concurrent creates with the same title can
pick the same candidate; the unique constraint on ``articles.slug`` rejects
the loser, which then restarts the search (see services.articles).
"""

import logging
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.slug import slugify
from infrastructure.database.models import Article

logger = logging.getLogger(__name__)

# Base used when a title normalizes to nothing (e.g. "!!!")
FALLBACK_SLUG_BASE = "article"

# Upper bound on store round-trips before falling back to a random suffix
MAX_SLUG_ATTEMPTS = 1000


async def slug_exists(
    db: AsyncSession,
    slug: str,
    exclude_id: str | None = None,
) -> bool:
    """Check whether any article other than ``exclude_id`` uses ``slug``."""
    query = select(Article.id).where(Article.slug == slug)
    if exclude_id is not None:
        query = query.where(Article.id != exclude_id)
    result = await db.execute(query.limit(1))
    return result.scalar_one_or_none() is not None


def slug_candidate(base: str, attempt: int) -> str:
    """Candidate for the given attempt: ``base`` first, then ``base-<n>``."""
    return base if attempt == 0 else f"{base}-{attempt}"


async def resolve_unique_slug(
    db: AsyncSession,
    title: str,
    exclude_id: str | None = None,
    max_attempts: int = MAX_SLUG_ATTEMPTS,
) -> str:
    """
    Pick a slug for ``title`` that no other article uses.

    Args:
        db: Database session
        title: Article title to derive the slug from
        exclude_id: ID of the article being updated, whose own slug does
            not count as a conflict
        max_attempts: Number of candidates to probe before giving up on
            sequential suffixes

    Returns:
        The first free candidate, or ``base-<random hex>`` if every probed
        candidate was taken
    """
    base = slugify(title) or FALLBACK_SLUG_BASE

    for attempt in range(max_attempts):
        candidate = slug_candidate(base, attempt)
        if not await slug_exists(db, candidate, exclude_id=exclude_id):
            return candidate

    fallback = f"{base}-{uuid4().hex[:8]}"
    logger.warning(
        "Slug search for %r exhausted %d candidates, using %s",
        base,
        max_attempts,
        fallback,
    )
    return fallback
