"""
Pytest configuration and shared fixtures for backend tests.
"""

import sys
from pathlib import Path

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

import pytest
from typing import AsyncGenerator, Callable
from uuid import uuid4

import httpx
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Import after path is set
from infrastructure.database.models import Article, Base, Category, Publisher
from infrastructure.database.connection import get_db
from core.security import PasswordHasher
from api.dependencies import token_service
from services.webhooks import WebhookDispatcher, get_webhook_dispatcher

# Lower bcrypt cost keeps the suite fast; hashes stay verifiable by the app's hasher
password_hasher = PasswordHasher(rounds=4)

TEST_PASSWORD = "secret123"

# Database URL for testing (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def db_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        yield session
        await session.rollback()


async def _create_publisher(
    db_session: AsyncSession,
    email: str,
    name: str,
    webhook_url: str | None = None,
) -> Publisher:
    publisher = Publisher(
        id=str(uuid4()),
        email=email,
        name=name,
        description=f"{name} newsroom",
        password_hash=password_hasher.hash(TEST_PASSWORD),
        webhook_url=webhook_url,
    )
    db_session.add(publisher)
    await db_session.commit()
    await db_session.refresh(publisher)
    return publisher


@pytest.fixture
async def test_publisher(db_session: AsyncSession) -> Publisher:
    """Create a publisher with a webhook configured."""
    return await _create_publisher(
        db_session,
        email="planet@example.com",
        name="Daily Planet",
        webhook_url="https://hooks.example.com/daily-planet",
    )


@pytest.fixture
async def other_publisher(db_session: AsyncSession) -> Publisher:
    """Create a second publisher without a webhook."""
    return await _create_publisher(
        db_session,
        email="gazette@example.com",
        name="Gotham Gazette",
    )


@pytest.fixture
def auth_headers(test_publisher: Publisher) -> dict:
    """Generate authentication headers for the test publisher."""
    access_token = token_service.create_access_token(test_publisher.id)
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
def other_auth_headers(other_publisher: Publisher) -> dict:
    """Generate authentication headers for the second publisher."""
    access_token = token_service.create_access_token(other_publisher.id)
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
async def category(db_session: AsyncSession) -> Category:
    """Create a category."""
    category = Category(
        id=str(uuid4()),
        name="Technology",
        slug="technology",
        description="Latest in technology and innovation",
    )
    db_session.add(category)
    await db_session.commit()
    await db_session.refresh(category)
    return category


@pytest.fixture
async def other_category(db_session: AsyncSession) -> Category:
    """Create a second category."""
    category = Category(
        id=str(uuid4()),
        name="Business",
        slug="business",
        description="Business and finance news",
    )
    db_session.add(category)
    await db_session.commit()
    await db_session.refresh(category)
    return category


@pytest.fixture
def make_article(db_session: AsyncSession) -> Callable:
    """Factory inserting articles directly, bypassing the API."""

    async def _make(
        publisher: Publisher,
        category: Category,
        title: str = "Breaking news story",
        content: str = "A sufficiently long body of article content.",
        published: bool = True,
        slug: str | None = None,
        view_count: int = 0,
    ) -> Article:
        article = Article(
            id=str(uuid4()),
            publisher_id=publisher.id,
            category_id=category.id,
            title=title,
            slug=slug or f"{title.lower().replace(' ', '-')}-{uuid4().hex[:6]}",
            content=content,
            published=published,
            view_count=view_count,
        )
        db_session.add(article)
        await db_session.commit()
        await db_session.refresh(article)
        return article

    return _make


@pytest.fixture
def webhook_requests() -> list[httpx.Request]:
    """Outbound webhook requests captured by the mock transport."""
    return []


@pytest.fixture
def webhook_dispatcher(webhook_requests: list[httpx.Request]) -> WebhookDispatcher:
    """Dispatcher whose deliveries go to an in-process mock endpoint."""

    def handler(request: httpx.Request) -> httpx.Response:
        webhook_requests.append(request)
        return httpx.Response(200, json={"received": True})

    return WebhookDispatcher(timeout=1.0, transport=httpx.MockTransport(handler))


@pytest.fixture
async def async_client(
    db_session: AsyncSession,
    webhook_dispatcher: WebhookDispatcher,
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for testing."""
    # Import app here to avoid circular imports
    from main import app

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_webhook_dispatcher] = lambda: webhook_dispatcher

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
    await webhook_dispatcher.shutdown(grace_period=1.0)
