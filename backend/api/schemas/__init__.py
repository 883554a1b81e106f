"""
API request and response schemas.
"""

from .auth import (
    AuthResponse,
    LoginRequest,
    PublicPublisherResponse,
    PublisherResponse,
    RegisterRequest,
    WebhookUpdateRequest,
)
from .content import (
    ArticleConnection,
    ArticleCreateRequest,
    ArticleResponse,
    ArticleUpdateRequest,
    CategoryResponse,
    CategorySummary,
    DeleteResponse,
    PageInfo,
    PublisherSummary,
)

__all__ = [
    "AuthResponse",
    "LoginRequest",
    "PublicPublisherResponse",
    "PublisherResponse",
    "RegisterRequest",
    "WebhookUpdateRequest",
    "ArticleConnection",
    "ArticleCreateRequest",
    "ArticleResponse",
    "ArticleUpdateRequest",
    "CategoryResponse",
    "CategorySummary",
    "DeleteResponse",
    "PageInfo",
    "PublisherSummary",
]
