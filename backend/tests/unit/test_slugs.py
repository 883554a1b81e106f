"""
Unit tests for slug normalization and unique slug resolution.
"""

import re

import pytest

from core.slug import MAX_SLUG_BASE_LENGTH, slugify
from services.slugs import FALLBACK_SLUG_BASE, resolve_unique_slug, slug_candidate


class TestSlugify:
    """Tests for slugify."""

    @pytest.mark.parametrize(
        "title,expected",
        [
            ("Hello World", "hello-world"),
            ("Hello,   World!", "hello-world"),
            ("  --Leading and trailing--  ", "leading-and-trailing"),
            ("Multiple --- hyphens", "multiple-hyphens"),
            ("Café au lait", "caf-au-lait"),
            ("snake_case stays", "snake_case-stays"),
            ("2024: A Year in Review", "2024-a-year-in-review"),
            ("!!!", ""),
        ],
    )
    def test_normalization(self, title, expected):
        assert slugify(title) == expected

    def test_output_is_url_safe(self):
        assert re.fullmatch(r"[a-z0-9_-]*", slugify("Ünïcödé & <script>alert(1)</script>"))

    def test_long_titles_are_capped(self):
        slug = slugify("word " * 200)
        assert len(slug) <= MAX_SLUG_BASE_LENGTH
        assert not slug.endswith("-")


def test_slug_candidates():
    assert slug_candidate("hello-world", 0) == "hello-world"
    assert slug_candidate("hello-world", 1) == "hello-world-1"
    assert slug_candidate("hello-world", 12) == "hello-world-12"


class TestResolveUniqueSlug:
    """Tests for resolve_unique_slug against the store."""

    async def test_free_base_is_used(self, db_session):
        assert await resolve_unique_slug(db_session, "Hello World") == "hello-world"

    async def test_taken_base_gets_suffix(
        self, db_session, make_article, test_publisher, category
    ):
        await make_article(test_publisher, category, title="Hello World", slug="hello-world")
        assert await resolve_unique_slug(db_session, "Hello World") == "hello-world-1"

        await make_article(test_publisher, category, title="Hello World", slug="hello-world-1")
        assert await resolve_unique_slug(db_session, "Hello World") == "hello-world-2"

    async def test_gaps_are_reused(self, db_session, make_article, test_publisher, category):
        await make_article(test_publisher, category, title="Hello World", slug="hello-world")
        await make_article(test_publisher, category, title="Hello World", slug="hello-world-2")
        assert await resolve_unique_slug(db_session, "Hello World") == "hello-world-1"

    async def test_own_slug_is_not_a_conflict(
        self, db_session, make_article, test_publisher, category
    ):
        article = await make_article(
            test_publisher, category, title="Hello World", slug="hello-world"
        )
        resolved = await resolve_unique_slug(db_session, "Hello World", exclude_id=article.id)
        assert resolved == "hello-world"

    async def test_empty_base_falls_back(self, db_session):
        assert await resolve_unique_slug(db_session, "???") == FALLBACK_SLUG_BASE

    async def test_exhausted_search_uses_random_suffix(
        self, db_session, make_article, test_publisher, category
    ):
        for slug in ("busy", "busy-1", "busy-2"):
            await make_article(test_publisher, category, title="Busy", slug=slug)

        resolved = await resolve_unique_slug(db_session, "Busy", max_attempts=3)
        assert re.fullmatch(r"busy-[0-9a-f]{8}", resolved)
