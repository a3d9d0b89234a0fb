"""Content Intelligence Engine: related articles, geo tagging and ad placement."""

from .engine import classify_location, plan_placements, rank_related
from .models import (
    AdPlacement,
    Article,
    ContentPosition,
    Country,
    LocationTag,
    PlacementConfig,
    PositionKind,
    ReasonKind,
    RelevanceScore,
    ScoreReason,
)

__version__ = "0.1.0"

__all__ = [
    'rank_related',
    'classify_location',
    'plan_placements',
    'Article',
    'RelevanceScore',
    'ScoreReason',
    'ReasonKind',
    'LocationTag',
    'Country',
    'AdPlacement',
    'PositionKind',
    'ContentPosition',
    'PlacementConfig',
]
