"""Pytest configuration and fixtures."""

import os
from datetime import UTC, datetime, timedelta

import pytest

# Set test environment
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["JSON_LOGGING"] = "false"

BASE_DATE = datetime(2025, 6, 10, 9, 0, tzinfo=UTC)


@pytest.fixture
def base_date() -> datetime:
    """Publication date of the target article."""
    return BASE_DATE


@pytest.fixture
def make_article():
    """Factory for articles with sensible defaults."""
    from content_intel.models import Article

    def _make(article_id: str, days_offset: float = 0, **kwargs) -> Article:
        kwargs.setdefault("title", f"Article {article_id}")
        return Article(
            id=article_id,
            date=BASE_DATE + timedelta(days=days_offset),
            **kwargs,
        )

    return _make


@pytest.fixture
def target_article(make_article):
    """Target article for related-article ranking."""
    return make_article(
        "target",
        title="Parliament debates electricity tariffs",
        excerpt="<p>Members question Eskom over <strong>tariff increases</strong>.</p>",
        categories=("politics", "national"),
        tags=("eskom", "energy", "parliament"),
        author_slug="thandi-m",
    )


@pytest.fixture
def sample_articles(make_article):
    """Candidate pool around the target article."""
    return [
        make_article(
            "energy-follow-up",
            days_offset=-2,
            title="Eskom tariff increases approved by regulator",
            excerpt="Electricity tariffs rise again after parliament hearing.",
            categories=("politics", "business"),
            tags=("eskom", "energy"),
            author_slug="thandi-m",
        ),
        make_article(
            "sports-roundup",
            days_offset=-1,
            title="Weekend rugby results",
            excerpt="Springboks secure narrow victory.",
            categories=("sport",),
            tags=("rugby",),
            author_slug="sipho-k",
        ),
        make_article(
            "national-budget",
            days_offset=-45,
            title="National budget speech highlights",
            excerpt="Treasury outlines spending plans.",
            categories=("national",),
            tags=("budget",),
            author_slug="lerato-d",
        ),
    ]
