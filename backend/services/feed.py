"""
Feed query engine: filtering, search, sorting and pagination of articles.

The page query and the count query are built from the same list of
conditions. They run one after the other without a shared snapshot, so a
concurrent insert can make ``total_count`` and ``nodes`` disagree slightly;
that is acceptable for feed metadata.
"""

import logging
import math
from dataclasses import dataclass, field

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import ValidationError
from core.security.access import CallerIdentity, require_publisher
from infrastructure.database.models import Article

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

SORT_FIELDS = {
    "created_at": Article.created_at,
    "updated_at": Article.updated_at,
    "title": Article.title,
    "view_count": Article.view_count,
}

# camelCase names accepted for compatibility with older clients
SORT_FIELD_ALIASES = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "viewCount": "view_count",
}

SORT_ORDERS = ("asc", "desc")


def escape_like(value: str) -> str:
    """Escape LIKE wildcards for safe use in SQL LIKE/ILIKE patterns."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass
class FeedFilters:
    """Conjunctive filters applied to the article feed."""

    search: str | None = None
    category_id: str | None = None
    publisher_id: str | None = None
    published: bool | None = None


@dataclass
class PageRequest:
    """Which page to return and in what order."""

    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    sort_by: str = "created_at"
    sort_order: str = "desc"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def validate(self) -> None:
        """
        Raises:
            ValidationError: If page, limit or sort options are out of range
        """
        if self.page < 1:
            raise ValidationError("page must be greater than or equal to 1")
        if not 1 <= self.limit <= MAX_PAGE_SIZE:
            raise ValidationError(f"limit must be between 1 and {MAX_PAGE_SIZE}")
        if resolve_sort_field(self.sort_by) is None:
            allowed = ", ".join(sorted(SORT_FIELDS))
            raise ValidationError(f"Invalid sort field '{self.sort_by}'. Must be one of: {allowed}")
        if self.sort_order.lower() not in SORT_ORDERS:
            raise ValidationError("sort_order must be 'asc' or 'desc'")


@dataclass
class PageMeta:
    """Pagination metadata derived from the total match count."""

    has_next_page: bool
    has_previous_page: bool
    current_page: int
    total_pages: int


@dataclass
class FeedPage:
    """One page of articles."""

    nodes: list[Article] = field(default_factory=list)
    total_count: int = 0
    page_info: PageMeta | None = None


def resolve_sort_field(sort_by: str) -> str | None:
    """Canonical sort field name, or None if unsupported."""
    name = SORT_FIELD_ALIASES.get(sort_by, sort_by)
    return name if name in SORT_FIELDS else None


def build_conditions(filters: FeedFilters) -> list:
    """Translate filters into SQLAlchemy WHERE clauses (AND-ed together)."""
    conditions = []

    if filters.published is not None:
        conditions.append(Article.published == filters.published)

    if filters.search:
        pattern = f"%{escape_like(filters.search)}%"
        conditions.append(
            or_(
                Article.title.ilike(pattern, escape="\\"),
                Article.content.ilike(pattern, escape="\\"),
            )
        )

    if filters.category_id:
        conditions.append(Article.category_id == filters.category_id)
    if filters.publisher_id:
        conditions.append(Article.publisher_id == filters.publisher_id)

    return conditions


def build_page_info(page: int, limit: int, total_count: int) -> PageMeta:
    """Compute pagination metadata for ``page`` of size ``limit``."""
    total_pages = math.ceil(total_count / limit) if total_count > 0 else 0
    return PageMeta(
        has_next_page=page < total_pages,
        has_previous_page=page > 1,
        current_page=page,
        total_pages=total_pages,
    )


async def fetch_page(
    db: AsyncSession,
    filters: FeedFilters,
    page_request: PageRequest,
) -> FeedPage:
    """
    Run the count and page queries for a feed.

    Args:
        db: Database session
        filters: Search and filter criteria
        page_request: Page number, size and ordering

    Returns:
        FeedPage with at most ``limit`` articles and pagination metadata

    Raises:
        ValidationError: If the page request is invalid
    """
    page_request.validate()

    conditions = build_conditions(filters)

    sort_column = SORT_FIELDS[resolve_sort_field(page_request.sort_by)]
    descending = page_request.sort_order.lower() == "desc"
    # id breaks ties so rows with equal sort keys keep a stable page order
    order_by = (
        [sort_column.desc(), Article.id.desc()]
        if descending
        else [sort_column.asc(), Article.id.asc()]
    )

    count_query = select(func.count()).select_from(Article).where(*conditions)
    total_count = (await db.execute(count_query)).scalar() or 0

    query = (
        select(Article)
        .where(*conditions)
        .order_by(*order_by)
        .offset(page_request.offset)
        .limit(page_request.limit)
    )
    result = await db.execute(query)
    nodes = list(result.scalars().all())

    logger.debug(
        "Feed page %d (limit %d): %d of %d matching articles",
        page_request.page,
        page_request.limit,
        len(nodes),
        total_count,
    )

    return FeedPage(
        nodes=nodes,
        total_count=total_count,
        page_info=build_page_info(page_request.page, page_request.limit, total_count),
    )


async def fetch_own_feed(
    db: AsyncSession,
    caller: CallerIdentity,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    published: bool | None = None,
) -> FeedPage:
    """
    The caller's own articles, newest first, drafts included unless
    ``published`` is given.

    Raises:
        Unauthenticated: If the caller is anonymous
    """
    publisher_id = require_publisher(caller)
    return await fetch_page(
        db,
        FeedFilters(publisher_id=publisher_id, published=published),
        PageRequest(page=page, limit=limit),
    )
