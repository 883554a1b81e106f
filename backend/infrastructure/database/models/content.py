"""
Content database models: Category and Article.
"""

from typing import TYPE_CHECKING, List, Optional
from uuid import uuid4

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .publisher import Publisher


class Category(Base, TimestampMixin):
    """Category reference data. Articles belong to exactly one category."""

    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    articles: Mapped[List["Article"]] = relationship(
        "Article",
        back_populates="category",
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, slug={self.slug})>"


class Article(Base, TimestampMixin):
    """News article model."""

    __tablename__ = "articles"

    # Primary key
    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    # Owner (immutable after creation)
    publisher_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("publishers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    category_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    # Content
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    excerpt: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)

    # Metadata
    published: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        index=True,
    )
    view_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Relationships
    publisher: Mapped["Publisher"] = relationship(
        "Publisher",
        back_populates="articles",
        lazy="joined",
    )
    category: Mapped["Category"] = relationship(
        "Category",
        back_populates="articles",
        lazy="joined",
    )

    __table_args__ = (
        Index("ix_articles_published_created", "published", "created_at"),
        Index("ix_articles_publisher_created", "publisher_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Article(id={self.id}, title={self.title[:30]}, slug={self.slug})>"

    def is_owned_by(self, publisher_id: Optional[str]) -> bool:
        """Check if the given publisher owns this article."""
        return publisher_id is not None and self.publisher_id == publisher_id
