"""
SQLAlchemy database models.
"""

from .base import Base, TimestampMixin
from .content import Article, Category
from .publisher import Publisher

__all__ = [
    "Base",
    "TimestampMixin",
    "Publisher",
    "Category",
    "Article",
]
