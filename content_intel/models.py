"""Value types shared by the content intelligence components."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from .logging import get_logger
from .utils import ensure_utc, parse_date_string

logger = get_logger(__name__)


class Country(Enum):
    """Markets the geo classifier can assign."""
    SOUTH_AFRICA = "South Africa"
    ZIMBABWE = "Zimbabwe"


class PositionKind(Enum):
    """What kind of block an ad placement follows."""
    AFTER_PARAGRAPH = "after-paragraph"
    AFTER_HEADING = "after-heading"
    AFTER_LIST = "after-list"
    AFTER_IMAGE = "after-image"


class ContentPosition(Enum):
    """Coarse reading-progress bucket."""
    EARLY = "early"
    MIDDLE = "middle"
    LATE = "late"


class ReasonKind(Enum):
    """Signal a score reason was produced by."""
    CATEGORY = "category"
    TAG = "tag"
    TEXT = "text"
    RECENCY = "recency"
    AUTHOR = "author"


def _slugs(values: Iterable[Any] | None) -> tuple[str, ...]:
    if not values:
        return ()
    slugs = []
    for value in values:
        # CMS payloads sometimes carry {"slug": ..., "name": ...} nodes
        if isinstance(value, Mapping):
            value = value.get("slug") or value.get("name")
        if value:
            slugs.append(str(value))
    return tuple(slugs)


@dataclass(frozen=True)
class Article:
    """Article record as supplied by the content store."""
    id: str
    title: str
    date: datetime
    excerpt: str = ""
    content: str = ""
    categories: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    author_slug: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", ensure_utc(self.date))
        object.__setattr__(self, "categories", tuple(self.categories))
        object.__setattr__(self, "tags", tuple(self.tags))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Article":
        """Build an article from a plain mapping (JSON / CMS shape).

        Raises:
            ValueError: If the id is missing or the date cannot be parsed.
        """
        article_id = data.get("id")
        if article_id in (None, ""):
            raise ValueError("Missing required field: id")

        raw_date = data.get("date")
        if isinstance(raw_date, datetime):
            date = raw_date
        else:
            date = parse_date_string(str(raw_date)) if raw_date else None
        if date is None:
            raise ValueError(f"Article {article_id} has no parseable date: {raw_date!r}")

        author = data.get("author_slug") or data.get("author")
        if isinstance(author, Mapping):
            author = author.get("slug")

        return cls(
            id=str(article_id),
            title=data.get("title") or "",
            excerpt=data.get("excerpt") or "",
            content=data.get("content") or "",
            date=date,
            categories=_slugs(data.get("categories")),
            tags=_slugs(data.get("tags")),
            author_slug=str(author) if author else None,
        )


@dataclass(frozen=True)
class ScoreReason:
    """One entry of the explanation trace attached to a relevance score."""
    kind: ReasonKind
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class RelevanceScore:
    """Relatedness of one candidate article to the target."""
    article_id: str
    score: float
    reasons: tuple[ScoreReason, ...] = ()

    @property
    def reason_messages(self) -> list[str]:
        return [reason.message for reason in self.reasons]


@dataclass(frozen=True)
class LocationTag:
    """Geographic classification of an article.

    ``low_confidence`` is set when nothing in the text matched the gazetteer
    and the default market was assigned.
    """
    country: Country
    city: str | None = None
    region: str | None = None
    low_confidence: bool = False


@dataclass(frozen=True)
class AdPlacement:
    """A position after a complete content block where an ad may go."""
    position_kind: PositionKind
    block_index: int
    bucket: ContentPosition = ContentPosition.EARLY


class PlacementConfig(BaseModel):
    """Spacing and quantity rules for ad placement planning.

    Negative numbers are clamped to zero and unknown preferred positions are
    dropped, so a bad config yields fewer placements instead of an error.
    """
    model_config = ConfigDict(frozen=True)

    min_paragraphs_before_first: int = 2
    min_words_between_placements: int = 300
    max_placements: int = 3
    preferred_positions: tuple[ContentPosition, ...] = Field(
        default=(ContentPosition.EARLY, ContentPosition.MIDDLE, ContentPosition.LATE)
    )

    @field_validator(
        "min_paragraphs_before_first",
        "min_words_between_placements",
        "max_placements",
        mode="before",
    )
    @classmethod
    def clamp_non_negative(cls, v: Any, info: ValidationInfo) -> int:
        try:
            value = int(v)
        except (TypeError, ValueError):
            logger.warning("Invalid placement setting, using 0", field=info.field_name, value=v)
            return 0
        if value < 0:
            logger.warning("Negative placement setting clamped to 0", field=info.field_name, value=value)
            return 0
        return value

    @field_validator("preferred_positions", mode="before")
    @classmethod
    def known_positions(cls, v: Any) -> tuple[ContentPosition, ...]:
        if v is None:
            return ()
        if isinstance(v, (str, ContentPosition)):
            v = [v]

        positions: list[ContentPosition] = []
        for item in v:
            try:
                position = item if isinstance(item, ContentPosition) else ContentPosition(str(item).lower())
            except ValueError:
                logger.warning("Unknown preferred position dropped", position=item)
                continue
            if position not in positions:
                positions.append(position)
        return tuple(positions)

    @classmethod
    def from_settings(cls, settings) -> "PlacementConfig":
        """Placement defaults taken from application settings."""
        return cls(
            min_paragraphs_before_first=settings.min_paragraphs_before_first,
            min_words_between_placements=settings.min_words_between_placements,
            max_placements=settings.max_placements,
        )
