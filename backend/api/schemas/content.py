"""
Content API schemas for articles and categories.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

# ============================================================================
# Nested summaries
# ============================================================================


class PublisherSummary(BaseModel):
    """Public view of an article's publisher."""

    id: str
    name: str
    description: str | None = None

    model_config = ConfigDict(from_attributes=True)


class CategorySummary(BaseModel):
    """Compact view of an article's category."""

    id: str
    name: str
    slug: str

    model_config = ConfigDict(from_attributes=True)


# ============================================================================
# Article Schemas
# ============================================================================


class ArticleCreateRequest(BaseModel):
    """Request to create an article."""

    title: str = Field(..., min_length=5, max_length=500)
    content: str = Field(..., min_length=20)
    excerpt: str | None = Field(None, max_length=1000)
    image_url: HttpUrl | None = None
    category_id: UUID
    published: bool = False


class ArticleUpdateRequest(BaseModel):
    """Request to update an article. Only the fields sent are changed."""

    title: str | None = Field(None, min_length=5, max_length=500)
    content: str | None = Field(None, min_length=20)
    excerpt: str | None = Field(None, max_length=1000)
    image_url: HttpUrl | None = None
    category_id: UUID | None = None
    published: bool | None = None

    def to_changes(self) -> dict[str, Any]:
        """Submitted fields, in the shape the article service stores them."""
        changes = self.model_dump(exclude_unset=True)
        if changes.get("image_url") is not None:
            changes["image_url"] = str(changes["image_url"])
        if changes.get("category_id") is not None:
            changes["category_id"] = str(changes["category_id"])
        return changes


class ArticleResponse(BaseModel):
    """Article response."""

    id: str
    title: str
    slug: str
    content: str
    excerpt: str | None
    image_url: str | None
    published: bool
    view_count: int
    publisher_id: str
    category_id: str
    publisher: PublisherSummary
    category: CategorySummary
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PageInfo(BaseModel):
    """Pagination metadata for a feed page."""

    has_next_page: bool
    has_previous_page: bool
    current_page: int
    total_pages: int


class ArticleConnection(BaseModel):
    """One page of articles plus pagination metadata."""

    nodes: list[ArticleResponse]
    total_count: int
    page_info: PageInfo


class DeleteResponse(BaseModel):
    """Result of a delete operation."""

    success: bool
    message: str


# ============================================================================
# Category Schemas
# ============================================================================


class CategoryResponse(BaseModel):
    """Category with the number of published articles in it."""

    id: str
    name: str
    slug: str
    description: str | None
    news_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_category(cls, category: Any, news_count: int) -> "CategoryResponse":
        return cls(
            id=category.id,
            name=category.name,
            slug=category.slug,
            description=category.description,
            news_count=news_count,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )
