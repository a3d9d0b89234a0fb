"""Content processing module."""

from .gazetteer import (
    COUNTRY_PRECEDENCE,
    DEFAULT_COUNTRY,
    Gazetteer,
    GazetteerEntry,
    GazetteerError,
    load_gazetteer,
)
from .geo import GeoClassifier, classify_location, location_keywords
from .related import (
    RelatednessRanker,
    ScoringWeights,
    SmartRelatedOptions,
    group_by_primary_category,
    smart_related,
    trending,
)
from .segmenter import (
    AdFormat,
    ContentBlock,
    ContentSegmenter,
    optimal_ad_format,
    plan_placements,
    segment_blocks,
)
from .text_utils import clean_html_text, count_words, similarity

__all__ = [
    'RelatednessRanker',
    'ScoringWeights',
    'SmartRelatedOptions',
    'smart_related',
    'group_by_primary_category',
    'trending',
    'GeoClassifier',
    'classify_location',
    'location_keywords',
    'Gazetteer',
    'GazetteerEntry',
    'GazetteerError',
    'load_gazetteer',
    'COUNTRY_PRECEDENCE',
    'DEFAULT_COUNTRY',
    'ContentSegmenter',
    'ContentBlock',
    'AdFormat',
    'plan_placements',
    'segment_blocks',
    'optimal_ad_format',
    'similarity',
    'clean_html_text',
    'count_words',
]
