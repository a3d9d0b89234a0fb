"""Text processing utilities for the content intelligence components."""

import html
import re

# Tokens this short or shorter are treated as stop words
MAX_STOP_TOKEN_LENGTH = 3

_TAG_RE = re.compile(r'<[^>]*>')
_WORD_SPLIT_RE = re.compile(r'([ \-])')


def clean_html_text(html_text: str | None) -> str:
    """Strip markup from an HTML fragment.

    Args:
        html_text: HTML text

    Returns:
        Plain text with tags removed, entities decoded and whitespace collapsed
    """
    if not html_text:
        return ""

    text = _TAG_RE.sub('', html_text)
    text = html.unescape(text)

    return re.sub(r'\s+', ' ', text.strip())


def qualifying_tokens(text: str | None) -> set[str]:
    """Lowercased whitespace tokens longer than the stop-word cut-off."""
    if not text:
        return set()
    return {
        token for token in text.lower().split()
        if len(token) > MAX_STOP_TOKEN_LENGTH
    }


def similarity(text_a: str | None, text_b: str | None) -> float:
    """Calculate lexical overlap using the Jaccard index.

    Args:
        text_a: First text
        text_b: Second text

    Returns:
        Similarity score (0.0 to 1.0); 0.0 when neither text has a qualifying token
    """
    tokens_a = qualifying_tokens(text_a)
    tokens_b = qualifying_tokens(text_b)

    union = tokens_a | tokens_b
    if not union:
        return 0.0

    return len(tokens_a & tokens_b) / len(union)


def count_words(text: str | None) -> int:
    """Count whitespace-separated words in plain text."""
    if not text:
        return 0
    return len(text.split())


def format_place_name(name: str) -> str:
    """Title-case a gazetteer entry word by word.

    Spaces and hyphens both separate words and are kept as written, so
    ``"kwazulu-natal"`` becomes ``"Kwazulu-Natal"``.
    """
    parts = _WORD_SPLIT_RE.split(name.strip())
    return ''.join(part[:1].upper() + part[1:] for part in parts)
