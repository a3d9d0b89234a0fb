"""
Multi-signal relatedness ranking for news articles.

A candidate's score is the weighted sum of:
- Category overlap with the target
- Tag overlap with the target
- Title/excerpt lexical similarity
- Publication proximity (step bands)
- Shared authorship

Each score carries an ordered trace of reasons for debugging; the trace never
feeds back into the ranking.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ..logging import get_logger, log_processing_stage
from ..models import Article, ReasonKind, RelevanceScore, ScoreReason
from ..utils import days_between
from .text_utils import clean_html_text, similarity

logger = get_logger(__name__)

UNCATEGORIZED = "uncategorized"

# (max days apart, band value); anything further apart gets FALLBACK_RECENCY
RECENCY_BANDS: tuple[tuple[float, float], ...] = (
    (7, 1.0),
    (30, 0.8),
    (90, 0.6),
    (180, 0.4),
)
FALLBACK_RECENCY = 0.2
RECENT_REASON_THRESHOLD = 0.8

# Below this the similarity still counts but is not worth explaining
SIMILARITY_REASON_THRESHOLD = 0.1


@dataclass(frozen=True)
class ScoringWeights:
    """Configurable weights for the relatedness signals."""
    category: float = 0.40
    tag: float = 0.30
    text: float = 0.20
    recency: float = 0.05
    author: float = 0.05
    min_score: float = 0.1

    @classmethod
    def from_settings(cls, settings) -> "ScoringWeights":
        """Load weights from application settings."""
        return cls(
            category=settings.w_category,
            tag=settings.w_tag,
            text=settings.w_text,
            recency=settings.w_recency,
            author=settings.w_author,
            min_score=settings.min_related_score,
        )


def recency_band(days_apart: float) -> float:
    """Map the distance between two publication dates to a band value."""
    for max_days, value in RECENCY_BANDS:
        if days_apart <= max_days:
            return value
    return FALLBACK_RECENCY


def _comparison_text(article: Article) -> str:
    return f"{article.title or ''} {clean_html_text(article.excerpt)}"


class RelatednessRanker:
    """Weighted related-article ranker for a single target article."""

    def __init__(self, target: Article, weights: ScoringWeights | None = None):
        self.target = target
        self.weights = weights or ScoringWeights()

        self._categories = set(target.categories)
        self._tags = set(target.tags)
        self._text = _comparison_text(target)

    def score(self, candidate: Article) -> RelevanceScore:
        """Calculate the full score and reason trace for one candidate."""
        w = self.weights
        total = 0.0
        reasons: list[ScoreReason] = []

        common_categories = self._categories.intersection(candidate.categories)
        if common_categories:
            total += w.category * len(common_categories) / max(len(self._categories), 1)
            reasons.append(ScoreReason(
                ReasonKind.CATEGORY, f"{len(common_categories)} common categories"
            ))

        common_tags = self._tags.intersection(candidate.tags)
        if common_tags:
            total += w.tag * len(common_tags) / max(len(self._tags), 1)
            reasons.append(ScoreReason(ReasonKind.TAG, f"{len(common_tags)} common tags"))

        text_similarity = similarity(self._text, _comparison_text(candidate))
        total += w.text * text_similarity
        if text_similarity > SIMILARITY_REASON_THRESHOLD:
            reasons.append(ScoreReason(
                ReasonKind.TEXT, f"content similarity: {round(text_similarity * 100)}%"
            ))

        recency = recency_band(days_between(self.target.date, candidate.date))
        total += w.recency * recency
        if recency > RECENT_REASON_THRESHOLD:
            reasons.append(ScoreReason(ReasonKind.RECENCY, "recent article"))

        if self.target.author_slug and candidate.author_slug == self.target.author_slug:
            total += w.author
            reasons.append(ScoreReason(ReasonKind.AUTHOR, "same author"))

        return RelevanceScore(article_id=candidate.id, score=total, reasons=tuple(reasons))

    def rank(self, candidates: Iterable[Article], limit: int) -> list[RelevanceScore]:
        """Score, filter and order candidates; at most ``limit`` results."""
        if limit <= 0:
            return []

        seen_ids = {self.target.id}
        scored: list[tuple[RelevanceScore, Article]] = []
        input_count = 0
        for candidate in candidates:
            input_count += 1
            if candidate.id in seen_ids:
                continue
            seen_ids.add(candidate.id)

            result = self.score(candidate)
            if result.score > self.weights.min_score:
                scored.append((result, candidate))

        # Stable sort keeps input order for exact ties
        scored.sort(key=lambda pair: (pair[0].score, pair[1].date.timestamp()), reverse=True)
        ranked = [result for result, _ in scored[:limit]]

        logger.debug(
            "Related articles ranked",
            **log_processing_stage(
                "rank_related",
                input_count=input_count,
                output_count=len(ranked),
                target_id=self.target.id,
            )
        )
        return ranked


@dataclass(frozen=True)
class SmartRelatedOptions:
    """Preferences layered on top of the plain relatedness ranking."""
    prefer_same_author: bool = False
    prefer_recent: bool = True
    exclude_categories: tuple[str, ...] = ()
    min_score: float | None = None
    pool_size: int = 12
    limit: int = 6


def smart_related(
    target: Article,
    candidates: Sequence[Article],
    options: SmartRelatedOptions | None = None,
    weights: ScoringWeights | None = None,
) -> list[RelevanceScore]:
    """Related articles adjusted for page-level preferences.

    Candidates in an excluded category are dropped before ranking. The top
    ``pool_size`` results are then reordered: same-author first when asked,
    and newest first when ``prefer_recent`` is set.
    """
    options = options or SmartRelatedOptions()
    excluded = set(options.exclude_categories)

    pool = [
        article for article in candidates
        if not excluded.intersection(article.categories)
    ]
    ranked = RelatednessRanker(target, weights).rank(pool, options.pool_size)

    if options.min_score is not None:
        ranked = [result for result in ranked if result.score >= options.min_score]

    by_id = {article.id: article for article in pool}

    if options.prefer_same_author and target.author_slug:
        ranked.sort(key=lambda result: by_id[result.article_id].author_slug != target.author_slug)

    if options.prefer_recent:
        ranked.sort(key=lambda result: by_id[result.article_id].date, reverse=True)

    return ranked[:max(options.limit, 0)]


def group_by_primary_category(articles: Iterable[Article]) -> dict[str, list[Article]]:
    """Group articles by their first (primary) category, preserving order."""
    grouped: dict[str, list[Article]] = {}
    for article in articles:
        primary = article.categories[0] if article.categories else UNCATEGORIZED
        grouped.setdefault(primary, []).append(article)
    return grouped


def trending(articles: Iterable[Article], limit: int = 3) -> list[Article]:
    """Most recent articles first.

    Recency stands in for engagement until view counts are supplied by the
    analytics collaborator.
    """
    if limit <= 0:
        return []
    return sorted(articles, key=lambda article: article.date, reverse=True)[:limit]
