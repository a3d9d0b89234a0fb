"""Tests for text similarity and markup helpers."""

import pytest

from content_intel.processing.text_utils import (
    clean_html_text,
    count_words,
    format_place_name,
    qualifying_tokens,
    similarity,
)


def test_similarity_identical_text():
    """Text with a qualifying token is fully similar to itself."""
    text = "Harare council approves water budget"
    assert similarity(text, text) == 1.0


def test_similarity_is_commutative():
    a = "Eskom announces new load shedding schedule"
    b = "New schedule for load shedding from Eskom today"
    assert similarity(a, b) == similarity(b, a)


def test_similarity_jaccard_value():
    """Two shared tokens out of four distinct ones."""
    a = "election results tonight"
    b = "election results tomorrow"
    assert similarity(a, b) == pytest.approx(2 / 4)


def test_similarity_ignores_short_tokens():
    """Tokens of three characters or fewer never count."""
    assert similarity("the cat sat on a mat", "the cat sat on a mat") == 0.0
    assert qualifying_tokens("the cat sat on a mat") == set()


def test_similarity_is_case_insensitive():
    assert similarity("Parliament", "PARLIAMENT") == 1.0


@pytest.mark.parametrize("a,b", [
    ("", ""),
    (None, "something meaningful"),
    ("something meaningful", None),
    ("", "something meaningful"),
])
def test_similarity_empty_text(a, b):
    assert similarity(a, b) == 0.0


@pytest.mark.parametrize("a,b", [
    ("rugby world champions", "cricket world champions crowned"),
    ("completely different words", "nothing overlapping here"),
    ("alpha beta gamma delta", "alpha beta gamma delta epsilon"),
])
def test_similarity_bounds(a, b):
    assert 0.0 <= similarity(a, b) <= 1.0


def test_clean_html_text_strips_tags_and_entities():
    html = "<p>Floods hit <strong>Durban</strong> &amp; surrounds&nbsp;[&hellip;]</p>"
    assert clean_html_text(html) == "Floods hit Durban & surrounds […]"


def test_clean_html_text_empty():
    assert clean_html_text("") == ""
    assert clean_html_text(None) == ""


def test_count_words():
    assert count_words("one two  three\nfour") == 4
    assert count_words("") == 0
    assert count_words(None) == 0


@pytest.mark.parametrize("raw,expected", [
    ("harare", "Harare"),
    ("cape town", "Cape Town"),
    ("kwazulu-natal", "Kwazulu-Natal"),
    ("mashonaland east", "Mashonaland East"),
])
def test_format_place_name(raw, expected):
    assert format_place_name(raw) == expected
