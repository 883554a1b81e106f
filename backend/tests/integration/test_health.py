"""Integration tests for the status endpoints and common response headers."""

import pytest
from httpx import AsyncClient

from infrastructure.database.models import Category

pytestmark = pytest.mark.asyncio


async def test_process_status(async_client: AsyncClient):
    response = await async_client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["service"] == "News API"
    assert "timestamp" in data


async def test_database_status_counts_categories(
    async_client: AsyncClient, category: Category, other_category: Category
):
    response = await async_client.get("/api/v1/health/db")
    assert response.status_code == 200
    data = response.json()
    assert data["database"] == "connected"
    assert data["categories"] == 2


async def test_database_status_without_categories(async_client: AsyncClient):
    response = await async_client.get("/api/v1/health/db")
    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "unavailable"
    assert data["database"] == "unseeded"


async def test_response_headers(async_client: AsyncClient):
    response = await async_client.get("/")
    assert response.status_code == 200
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert "X-Request-ID" in response.headers
    assert "X-Response-Time" in response.headers


async def test_valid_request_id_is_echoed(async_client: AsyncClient):
    request_id = "6f1c9b1e-2f7a-4c7e-9a53-0c4c2b6f1d2a"
    response = await async_client.get("/api/v1/health", headers={"X-Request-ID": request_id})
    assert response.headers["X-Request-ID"] == request_id
