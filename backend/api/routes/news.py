"""
News API routes: public feed, publisher feed, detail reads and writes.
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_caller_identity
from api.schemas.content import (
    ArticleConnection,
    ArticleCreateRequest,
    ArticleResponse,
    ArticleUpdateRequest,
    DeleteResponse,
    PageInfo,
)
from core.security import CallerIdentity
from infrastructure.database.connection import get_db
from services import articles as article_service
from services.feed import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    FeedFilters,
    FeedPage,
    PageRequest,
    fetch_own_feed,
    fetch_page,
)
from services.webhooks import WebhookDispatcher, get_webhook_dispatcher

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/news", tags=["News"])


def _connection(feed: FeedPage) -> ArticleConnection:
    return ArticleConnection(
        nodes=[ArticleResponse.model_validate(article) for article in feed.nodes],
        total_count=feed.total_count,
        page_info=PageInfo(
            has_next_page=feed.page_info.has_next_page,
            has_previous_page=feed.page_info.has_previous_page,
            current_page=feed.page_info.current_page,
            total_pages=feed.page_info.total_pages,
        ),
    )


@router.get("", response_model=ArticleConnection)
async def list_news(
    search: Optional[str] = None,
    category_id: Optional[UUID] = None,
    publisher_id: Optional[UUID] = None,
    published: bool = True,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    sort_by: str = "created_at",
    sort_order: str = "desc",
    db: AsyncSession = Depends(get_db),
):
    """
    Public feed with search, filters, sorting and pagination.

    ``published`` is an ordinary filter here, so ``published=false`` lists
    every publisher's drafts. The detail endpoints still return 404 for a
    draft unless the caller owns it, and a listed draft gains no views.
    """
    feed = await fetch_page(
        db,
        FeedFilters(
            search=search,
            category_id=str(category_id) if category_id else None,
            publisher_id=str(publisher_id) if publisher_id else None,
            published=published,
        ),
        PageRequest(page=page, limit=limit, sort_by=sort_by, sort_order=sort_order),
    )
    return _connection(feed)


@router.get("/mine", response_model=ArticleConnection)
async def list_my_news(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    published: Optional[bool] = None,
    caller: CallerIdentity = Depends(get_caller_identity),
    db: AsyncSession = Depends(get_db),
):
    """
    The caller's own articles, drafts included.
    """
    feed = await fetch_own_feed(db, caller, page=page, limit=limit, published=published)
    return _connection(feed)


@router.get("/slug/{slug}", response_model=ArticleResponse)
async def get_news_by_slug(
    slug: str,
    caller: CallerIdentity = Depends(get_caller_identity),
    dispatcher: WebhookDispatcher = Depends(get_webhook_dispatcher),
    db: AsyncSession = Depends(get_db),
):
    """
    Read an article by slug. Counts a view and notifies the publisher.
    """
    return await article_service.read_article(db, caller, dispatcher, slug=slug)


@router.get("/{article_id}", response_model=ArticleResponse)
async def get_news(
    article_id: str,
    caller: CallerIdentity = Depends(get_caller_identity),
    dispatcher: WebhookDispatcher = Depends(get_webhook_dispatcher),
    db: AsyncSession = Depends(get_db),
):
    """
    Read an article by ID. Counts a view and notifies the publisher.
    """
    return await article_service.read_article(db, caller, dispatcher, article_id=article_id)


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_news(
    request: ArticleCreateRequest,
    caller: CallerIdentity = Depends(get_caller_identity),
    db: AsyncSession = Depends(get_db),
):
    """
    Create an article owned by the caller.
    """
    return await article_service.create_article(
        db,
        caller,
        title=request.title,
        content=request.content,
        category_id=str(request.category_id),
        excerpt=request.excerpt,
        image_url=str(request.image_url) if request.image_url else None,
        published=request.published,
    )


@router.put("/{article_id}", response_model=ArticleResponse)
async def update_news(
    article_id: str,
    request: ArticleUpdateRequest,
    caller: CallerIdentity = Depends(get_caller_identity),
    db: AsyncSession = Depends(get_db),
):
    """
    Update an article. Only the fields sent are changed.
    """
    return await article_service.update_article(db, caller, article_id, request.to_changes())


@router.delete("/{article_id}", response_model=DeleteResponse)
async def delete_news(
    article_id: str,
    caller: CallerIdentity = Depends(get_caller_identity),
    db: AsyncSession = Depends(get_db),
):
    """
    Delete an article.
    """
    await article_service.delete_article(db, caller, article_id)
    return DeleteResponse(success=True, message="News deleted successfully")
