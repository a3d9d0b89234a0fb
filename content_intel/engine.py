"""
Stateless entry points of the content intelligence engine.

Page renderers, sitemap generators and ad-injection templates call these with
plain article data. Nothing here reads the environment, touches the network
or keeps state between calls; configuration is passed in explicitly.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from .models import AdPlacement, Article, LocationTag, PlacementConfig, RelevanceScore
from .processing.gazetteer import Gazetteer
from .processing.geo import GeoClassifier
from .processing.related import RelatednessRanker, ScoringWeights
from .processing.segmenter import ContentSegmenter


def rank_related(
    target: Article,
    candidates: Iterable[Article] | None,
    limit: int,
    weights: ScoringWeights | None = None,
) -> list[RelevanceScore]:
    """Rank candidate articles by relatedness to ``target``.

    Args:
        target: Article the related list is built for
        candidates: Candidate pool; may contain the target itself
        limit: Maximum number of results
        weights: Signal weights (defaults to the standard 40/30/20/5/5 split)

    Returns:
        Scores sorted by score, then publication date, both descending
    """
    if not candidates:
        return []
    return RelatednessRanker(target, weights).rank(candidates, limit)


def classify_location(
    title: str | None,
    content: str | None,
    category: str | None,
    tags: Iterable[str] | None,
    gazetteer: Gazetteer | None = None,
) -> LocationTag:
    """Infer the country, city and region an article is about."""
    return GeoClassifier(gazetteer).classify(title, content, category, tags)


def plan_placements(
    content_html: str | None,
    config: PlacementConfig | Mapping[str, Any] | None = None,
) -> list[AdPlacement]:
    """Choose block positions after which auxiliary content may be inserted."""
    return ContentSegmenter(config).plan(content_html)
