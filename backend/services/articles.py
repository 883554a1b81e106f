"""
Article operations: create, update, delete and detail reads.

Every operation receives the caller's identity explicitly and enforces its
own authorization rule against the article's recorded owner.
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import DuplicateError, NotFound, ValidationError
from core.security.access import CallerIdentity, ensure_owner, require_publisher
from infrastructure.database.models import Article, Category, Publisher
from services.slugs import resolve_unique_slug
from services.webhooks import WebhookDispatcher, build_view_event

logger = logging.getLogger(__name__)

# Writes retried when the slug unique constraint rejects a concurrently taken slug
MAX_SLUG_WRITE_ATTEMPTS = 3

UPDATABLE_FIELDS = {"title", "content", "excerpt", "image_url", "category_id", "published"}
# Fields that cannot be cleared; a null sent for them is ignored
NON_NULLABLE_FIELDS = {"title", "content", "category_id", "published"}


def _is_uuid(value: str) -> bool:
    try:
        UUID(str(value))
    except ValueError:
        return False
    return True


async def get_article(db: AsyncSession, article_id: str) -> Article | None:
    """Load an article (with publisher and category) by ID."""
    if not _is_uuid(article_id):
        return None
    result = await db.execute(
        select(Article)
        .where(Article.id == article_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_article_by_slug(db: AsyncSession, slug: str) -> Article | None:
    """Load an article (with publisher and category) by slug."""
    result = await db.execute(
        select(Article)
        .where(Article.slug == slug)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def _require_category(db: AsyncSession, category_id: str) -> Category:
    category = None
    if _is_uuid(category_id):
        result = await db.execute(select(Category).where(Category.id == category_id))
        category = result.scalar_one_or_none()
    if category is None:
        raise NotFound("Category not found")
    return category


async def _require_publisher_record(db: AsyncSession, publisher_id: str) -> None:
    # A signed token can outlive its publisher row
    found = None
    if _is_uuid(publisher_id):
        result = await db.execute(select(Publisher.id).where(Publisher.id == publisher_id))
        found = result.scalar_one_or_none()
    if found is None:
        raise NotFound("Publisher not found")


async def create_article(
    db: AsyncSession,
    caller: CallerIdentity,
    *,
    title: str,
    content: str,
    category_id: str,
    excerpt: str | None = None,
    image_url: str | None = None,
    published: bool = False,
) -> Article:
    """
    Create an article owned by the caller.

    Raises:
        Unauthenticated: If the caller is anonymous
        NotFound: If the publisher or the category does not exist
        DuplicateError: If no unique slug could be stored
    """
    publisher_id = require_publisher(caller)
    await _require_publisher_record(db, publisher_id)
    await _require_category(db, category_id)

    for attempt in range(1, MAX_SLUG_WRITE_ATTEMPTS + 1):
        slug = await resolve_unique_slug(db, title)
        article = Article(
            publisher_id=publisher_id,
            category_id=category_id,
            title=title,
            slug=slug,
            content=content,
            excerpt=excerpt,
            image_url=image_url,
            published=published,
        )
        db.add(article)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            logger.warning(
                "Slug %s taken concurrently, retrying (attempt %d/%d)",
                slug,
                attempt,
                MAX_SLUG_WRITE_ATTEMPTS,
            )
            continue

        logger.info(
            "Article created: %s (slug=%s)",
            article.id,
            slug,
            extra={"publisher_id": publisher_id, "article_id": article.id},
        )
        return await get_article(db, article.id)

    raise DuplicateError("Could not allocate a unique slug for this title, please retry")


async def update_article(
    db: AsyncSession,
    caller: CallerIdentity,
    article_id: str,
    changes: dict[str, Any],
) -> Article:
    """
    Apply the submitted fields to an article the caller owns.

    The slug is recomputed only when the title actually changes.

    Raises:
        Unauthenticated: If the caller is anonymous
        NotFound: If the article or the new category does not exist
        Forbidden: If the caller does not own the article
        DuplicateError: If no unique slug could be stored
    """
    require_publisher(caller)

    changes = {
        field: value
        for field, value in changes.items()
        if field in UPDATABLE_FIELDS and not (value is None and field in NON_NULLABLE_FIELDS)
    }

    for attempt in range(1, MAX_SLUG_WRITE_ATTEMPTS + 1):
        article = await get_article(db, article_id)
        if article is None:
            raise NotFound("News not found")
        ensure_owner(caller, article.publisher_id, action="update")

        if "category_id" in changes and changes["category_id"] != article.category_id:
            await _require_category(db, changes["category_id"])

        title_changed = "title" in changes and changes["title"] != article.title

        for field, value in changes.items():
            setattr(article, field, value)

        if title_changed:
            article.slug = await resolve_unique_slug(db, article.title, exclude_id=article.id)

        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            logger.warning(
                "Slug conflict updating article %s, retrying (attempt %d/%d)",
                article_id,
                attempt,
                MAX_SLUG_WRITE_ATTEMPTS,
            )
            continue

        logger.info(
            "Article updated: %s (fields=%s)",
            article_id,
            ",".join(sorted(changes)) or "-",
            extra={"publisher_id": caller.publisher_id, "article_id": article_id},
        )
        return await get_article(db, article_id)

    raise DuplicateError("Could not allocate a unique slug for this title, please retry")


async def delete_article(
    db: AsyncSession,
    caller: CallerIdentity,
    article_id: str,
) -> None:
    """
    Delete an article the caller owns.

    Raises:
        Unauthenticated: If the caller is anonymous
        NotFound: If the article does not exist
        Forbidden: If the caller does not own the article
    """
    require_publisher(caller)

    article = await get_article(db, article_id)
    if article is None:
        raise NotFound("News not found")
    ensure_owner(caller, article.publisher_id, action="delete")

    await db.delete(article)
    await db.commit()

    logger.info(
        "Article deleted: %s",
        article_id,
        extra={"publisher_id": caller.publisher_id, "article_id": article_id},
    )


async def read_article(
    db: AsyncSession,
    caller: CallerIdentity,
    dispatcher: WebhookDispatcher,
    *,
    article_id: str | None = None,
    slug: str | None = None,
) -> Article:
    """
    Fetch one article for reading, count the view and notify its publisher.

    The view counter is incremented with a single atomic UPDATE and
    committed before the webhook is launched. The webhook runs detached;
    its outcome never affects the returned article.

    Unpublished articles are only readable by their owner.

    Raises:
        ValidationError: If neither ``article_id`` nor ``slug`` is given
        NotFound: If no readable article matches
    """
    if not article_id and not slug:
        raise ValidationError("Either id or slug must be provided")

    if article_id:
        article = await get_article(db, article_id)
    else:
        article = await get_article_by_slug(db, slug)

    if article is None or (not article.published and not article.is_owned_by(caller.publisher_id)):
        raise NotFound("News not found")

    article_id = article.id
    result = await db.execute(
        update(Article)
        .where(Article.id == article_id)
        # Reads leave updated_at untouched
        .values(view_count=Article.view_count + 1, updated_at=Article.updated_at)
    )
    await db.commit()
    if result.rowcount == 0:
        raise NotFound("News not found")

    # The row can be deleted between the increment and this re-read
    article = await get_article(db, article_id)
    if article is None:
        raise NotFound("News not found")

    dispatcher.dispatch(
        article.publisher.webhook_url,
        build_view_event(article.id, article.title, article.view_count),
    )
    return article
