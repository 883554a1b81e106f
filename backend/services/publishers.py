"""
Publisher accounts: registration, credential checks, profile and webhook.
"""

import logging

from sqlalchemy import and_, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import DuplicateError, InvalidCredentialsError, NotFound
from core.security.access import CallerIdentity, require_publisher
from core.security.password import password_hasher
from infrastructure.database.models import Article, Publisher

logger = logging.getLogger(__name__)

# Verified against when the email is unknown so both failure paths cost one bcrypt round
_DUMMY_HASH = "$2b$12$WmDNGEj9s7YLV5sV/N7aBOpWL0.T5.R5ZQOeKHNlLB.d7WN4HFXIC"


async def get_publisher_by_email(db: AsyncSession, email: str) -> Publisher | None:
    result = await db.execute(select(Publisher).where(Publisher.email == email.lower()))
    return result.scalar_one_or_none()


async def count_articles(
    db: AsyncSession,
    publisher_id: str,
    published_only: bool = False,
) -> int:
    """Number of articles owned by a publisher."""
    query = select(func.count()).select_from(Article).where(Article.publisher_id == publisher_id)
    if published_only:
        query = query.where(Article.published.is_(True))
    return (await db.execute(query)).scalar() or 0


async def register_publisher(
    db: AsyncSession,
    *,
    email: str,
    password: str,
    name: str,
    description: str | None = None,
    webhook_url: str | None = None,
) -> Publisher:
    """
    Create a publisher account.

    Raises:
        DuplicateError: If the email is already registered
    """
    email = email.lower()
    if await get_publisher_by_email(db, email) is not None:
        raise DuplicateError("Email already registered")

    publisher = Publisher(
        email=email,
        name=name,
        description=description,
        password_hash=password_hasher.hash(password),
        webhook_url=webhook_url,
    )
    db.add(publisher)
    try:
        await db.commit()
    except IntegrityError:
        # Another registration for the same email won the race
        await db.rollback()
        raise DuplicateError("Email already registered")
    await db.refresh(publisher)

    logger.info("Publisher registered: %s", publisher.id, extra={"publisher_id": publisher.id})
    return publisher


async def authenticate_publisher(db: AsyncSession, email: str, password: str) -> Publisher:
    """
    Check a publisher's credentials.

    Unknown email and wrong password fail the same way.

    Raises:
        InvalidCredentialsError: If the credentials do not match
    """
    publisher = await get_publisher_by_email(db, email)

    password_ok = password_hasher.verify(
        password,
        publisher.password_hash if publisher else _DUMMY_HASH,
    )
    if publisher is None or not password_ok:
        logger.info("Failed login attempt")
        raise InvalidCredentialsError("Invalid credentials")

    return publisher


async def get_publisher(db: AsyncSession, caller: CallerIdentity) -> Publisher:
    """
    The caller's own publisher record.

    Raises:
        Unauthenticated: If the caller is anonymous
        NotFound: If the publisher no longer exists
    """
    publisher_id = require_publisher(caller)
    result = await db.execute(select(Publisher).where(Publisher.id == publisher_id))
    publisher = result.scalar_one_or_none()
    if publisher is None:
        raise NotFound("Publisher not found")
    return publisher


async def update_webhook(
    db: AsyncSession,
    caller: CallerIdentity,
    webhook_url: str | None,
) -> Publisher:
    """Set or clear the caller's webhook URL."""
    publisher = await get_publisher(db, caller)
    publisher.webhook_url = webhook_url
    await db.commit()
    await db.refresh(publisher)

    logger.info(
        "Webhook %s for publisher %s",
        "set" if webhook_url else "cleared",
        publisher.id,
        extra={"publisher_id": publisher.id},
    )
    return publisher


async def list_publishers(db: AsyncSession) -> list[tuple[Publisher, int]]:
    """All publishers by name, each with its number of published articles."""
    query = (
        select(Publisher, func.count(Article.id))
        .outerjoin(
            Article,
            and_(Article.publisher_id == Publisher.id, Article.published.is_(True)),
        )
        .group_by(Publisher.id)
        .order_by(Publisher.name)
    )
    result = await db.execute(query)
    return [(publisher, count) for publisher, count in result.all()]
