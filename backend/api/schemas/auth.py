"""
Authentication and publisher request/response schemas.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, EmailStr, Field, HttpUrl


class LoginRequest(BaseModel):
    """Login request schema."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    """Publisher registration request schema."""

    email: EmailStr
    # bcrypt only looks at the first 72 bytes
    password: str = Field(..., min_length=6, max_length=72)
    name: str = Field(..., min_length=2, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    webhook_url: Optional[HttpUrl] = None


class WebhookUpdateRequest(BaseModel):
    """Set (or clear, with null) the publisher's callback URL."""

    webhook_url: Optional[HttpUrl] = None


class PublisherResponse(BaseModel):
    """Full publisher profile, returned to the publisher itself."""

    id: str
    email: str
    name: str
    description: Optional[str] = None
    webhook_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    news_count: int = 0

    @classmethod
    def from_publisher(cls, publisher: Any, news_count: int) -> "PublisherResponse":
        return cls(
            id=publisher.id,
            email=publisher.email,
            name=publisher.name,
            description=publisher.description,
            webhook_url=publisher.webhook_url,
            created_at=publisher.created_at,
            updated_at=publisher.updated_at,
            news_count=news_count,
        )


class PublicPublisherResponse(BaseModel):
    """Publisher listing entry visible to anyone."""

    id: str
    name: str
    description: Optional[str] = None
    created_at: datetime
    news_count: int = 0

    @classmethod
    def from_publisher(cls, publisher: Any, news_count: int) -> "PublicPublisherResponse":
        return cls(
            id=publisher.id,
            name=publisher.name,
            description=publisher.description,
            created_at=publisher.created_at,
            news_count=news_count,
        )


class AuthResponse(BaseModel):
    """Token plus the authenticated publisher."""

    token: str
    token_type: str = "bearer"
    expires_in: int  # Seconds until the token expires
    publisher: PublisherResponse
