"""End-to-end flow: register, log in, publish, browse, read."""

import json

import pytest
from httpx import AsyncClient

from infrastructure.database.models import Category

pytestmark = pytest.mark.asyncio


async def test_publisher_journey(
    async_client: AsyncClient,
    category: Category,
    webhook_dispatcher,
    webhook_requests,
):
    """A new publisher's article shows up in the filtered feed and reports views."""
    register = await async_client.post(
        "/api/v1/auth/register",
        json={
            "email": "wire@example.com",
            "password": "secret123",
            "name": "Wire Service",
            "webhook_url": "https://hooks.example.com/wire",
        },
    )
    assert register.status_code == 201
    publisher_id = register.json()["publisher"]["id"]

    login = await async_client.post(
        "/api/v1/auth/login", json={"email": "wire@example.com", "password": "secret123"}
    )
    assert login.status_code == 200
    headers = {"Authorization": f"Bearer {login.json()['token']}"}

    created = await async_client.post(
        "/api/v1/news",
        json={
            "title": "Hello World",
            "content": "The first dispatch from the wire service desk.",
            "category_id": category.id,
            "published": True,
        },
        headers=headers,
    )
    assert created.status_code == 201
    article = created.json()
    assert article["slug"] == "hello-world"
    assert article["publisher"]["id"] == publisher_id

    feed = await async_client.get(
        "/api/v1/news", params={"category_id": category.id, "search": "hello"}
    )
    assert feed.status_code == 200
    assert [node["id"] for node in feed.json()["nodes"]] == [article["id"]]

    detail = await async_client.get(f"/api/v1/news/{article['id']}")
    assert detail.status_code == 200
    assert detail.json()["view_count"] == article["view_count"] + 1

    await webhook_dispatcher.shutdown(grace_period=1.0)
    assert len(webhook_requests) == 1
    delivered = webhook_requests[0]
    assert str(delivered.url) == "https://hooks.example.com/wire"
    body = json.loads(delivered.content)
    assert body["event"] == "news.viewed"
    assert body["data"] == {
        "newsId": article["id"],
        "newsTitle": "Hello World",
        "viewCount": 1,
    }

    me = await async_client.get("/api/v1/auth/me", headers=headers)
    assert me.json()["news_count"] == 1
