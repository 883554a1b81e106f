"""Integration tests for the category and publisher listings."""

import pytest
from httpx import AsyncClient

from infrastructure.database.models import Category, Publisher

pytestmark = pytest.mark.asyncio


class TestCategories:
    """Tests for GET /categories."""

    async def test_lists_by_name_with_published_counts(
        self,
        async_client: AsyncClient,
        test_publisher: Publisher,
        category: Category,
        other_category: Category,
        make_article,
    ):
        await make_article(test_publisher, category)
        await make_article(test_publisher, category)
        await make_article(test_publisher, category, published=False)

        response = await async_client.get("/api/v1/categories")

        assert response.status_code == 200
        data = response.json()
        assert [(c["name"], c["news_count"]) for c in data] == [
            ("Business", 0),
            ("Technology", 2),
        ]
        assert data[1]["slug"] == "technology"

    async def test_empty(self, async_client: AsyncClient):
        response = await async_client.get("/api/v1/categories")
        assert response.json() == []


class TestPublishers:
    """Tests for GET /publishers."""

    async def test_lists_by_name_with_published_counts(
        self,
        async_client: AsyncClient,
        test_publisher: Publisher,
        other_publisher: Publisher,
        category: Category,
        make_article,
    ):
        await make_article(test_publisher, category)
        await make_article(test_publisher, category, published=False)

        response = await async_client.get("/api/v1/publishers")

        assert response.status_code == 200
        data = response.json()
        assert [(p["name"], p["news_count"]) for p in data] == [
            ("Daily Planet", 1),
            ("Gotham Gazette", 0),
        ]

    async def test_private_fields_hidden(
        self, async_client: AsyncClient, test_publisher: Publisher
    ):
        response = await async_client.get("/api/v1/publishers")
        entry = response.json()[0]

        assert set(entry) == {"id", "name", "description", "created_at", "news_count"}
