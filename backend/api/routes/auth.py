"""
Authentication API routes.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_caller_identity, token_service
from api.schemas.auth import (
    AuthResponse,
    LoginRequest,
    PublisherResponse,
    RegisterRequest,
    WebhookUpdateRequest,
)
from core.security import CallerIdentity
from infrastructure.database.connection import get_db
from infrastructure.database.models import Publisher
from services import publishers as publisher_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


async def _auth_response(db: AsyncSession, publisher: Publisher) -> AuthResponse:
    news_count = await publisher_service.count_articles(db, publisher.id)
    return AuthResponse(
        token=token_service.create_access_token(publisher.id),
        expires_in=token_service.expires_in_seconds,
        publisher=PublisherResponse.from_publisher(publisher, news_count),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    register_data: RegisterRequest,
    db: AsyncSession = Depends(get_db),
) -> AuthResponse:
    """
    Register a new publisher and return an access token.
    """
    publisher = await publisher_service.register_publisher(
        db,
        email=register_data.email,
        password=register_data.password,
        name=register_data.name,
        description=register_data.description,
        webhook_url=str(register_data.webhook_url) if register_data.webhook_url else None,
    )
    return await _auth_response(db, publisher)


@router.post("/login", response_model=AuthResponse)
async def login(
    login_data: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> AuthResponse:
    """
    Authenticate a publisher and return an access token.
    """
    publisher = await publisher_service.authenticate_publisher(
        db, login_data.email, login_data.password
    )
    logger.info("Publisher logged in: %s", publisher.id, extra={"publisher_id": publisher.id})
    return await _auth_response(db, publisher)


@router.get("/me", response_model=PublisherResponse)
async def get_me(
    caller: CallerIdentity = Depends(get_caller_identity),
    db: AsyncSession = Depends(get_db),
) -> PublisherResponse:
    """
    Get the authenticated publisher's profile.
    """
    publisher = await publisher_service.get_publisher(db, caller)
    news_count = await publisher_service.count_articles(db, publisher.id)
    return PublisherResponse.from_publisher(publisher, news_count)


@router.put("/webhook", response_model=PublisherResponse)
async def update_webhook(
    webhook_data: WebhookUpdateRequest,
    caller: CallerIdentity = Depends(get_caller_identity),
    db: AsyncSession = Depends(get_db),
) -> PublisherResponse:
    """
    Set or clear the URL notified when one of the caller's articles is read.
    """
    publisher = await publisher_service.update_webhook(
        db,
        caller,
        str(webhook_data.webhook_url) if webhook_data.webhook_url else None,
    )
    news_count = await publisher_service.count_articles(db, publisher.id)
    return PublisherResponse.from_publisher(publisher, news_count)
