"""Tests for the engine entry points."""

import pytest

import content_intel
from content_intel import (
    Country,
    PositionKind,
    classify_location,
    plan_placements,
    rank_related,
)
from content_intel.processing.related import ScoringWeights


def test_package_exports_facade():
    assert content_intel.rank_related is rank_related
    assert content_intel.__version__


def test_rank_related_facade(target_article, sample_articles):
    ranked = rank_related(target_article, sample_articles, 6)

    assert [r.article_id for r in ranked] == ["energy-follow-up", "national-budget"]
    assert ranked[0].score == pytest.approx(0.4 * 0.5 + 0.3 * 2 / 3 + 0.2 * 5 / 17 + 0.1)


@pytest.mark.parametrize("candidates", [None, [], ()])
def test_rank_related_without_candidates(target_article, candidates):
    assert rank_related(target_article, candidates, 6) == []


def test_rank_related_is_deterministic(target_article, sample_articles):
    first = rank_related(target_article, sample_articles, 6)
    second = rank_related(target_article, list(sample_articles), 6)
    assert first == second


def test_rank_related_accepts_generator(target_article, sample_articles):
    ranked = rank_related(target_article, (a for a in sample_articles), 6)
    assert len(ranked) == 2


def test_rank_related_with_weights(target_article, sample_articles):
    weights = ScoringWeights(category=0.0, tag=0.0, text=0.0, recency=1.0, author=0.0)

    ranked = rank_related(target_article, sample_articles, 6, weights)

    # recency only: 2 and 1 days apart score 1.0, 45 days apart scores 0.6
    assert [r.article_id for r in ranked] == ["sports-roundup", "energy-follow-up", "national-budget"]


def test_classify_location_facade():
    location = classify_location("Bulawayo water crisis", "", "", [])

    assert location.country is Country.ZIMBABWE
    assert location.city == "Bulawayo"


def test_plan_placements_facade():
    html = "".join(f"<p>{' '.join(['word'] * 200)}</p>" for _ in range(6))

    placements = plan_placements(html)

    assert [p.block_index for p in placements] == [1, 3, 5]
    assert placements[0].position_kind is PositionKind.AFTER_PARAGRAPH


def test_plan_placements_empty_body():
    assert plan_placements("") == []
    assert plan_placements(None) == []
