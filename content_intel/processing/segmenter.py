"""
Ad placement planning inside article bodies.

The body is parsed into block units, one per closed paragraph, heading,
list, blockquote or figure. Walking the blocks in order, a placement is
proposed after a block once enough paragraphs and words have gone by, and
accepted when the reading-progress bucket is preferred (the first placement
is always accepted).
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from ..logging import LoggingMixin, log_processing_stage
from ..models import AdPlacement, ContentPosition, PlacementConfig, PositionKind
from .text_utils import count_words

BLOCK_TAGS = frozenset({"p", "h2", "h3", "h4", "h5", "h6", "ul", "ol", "blockquote", "figure"})
HEADING_TAGS = frozenset({"h2", "h3", "h4", "h5", "h6"})
LIST_TAGS = frozenset({"ul", "ol"})
NON_CONTENT_TAGS = frozenset({"script", "style", "template"})

EARLY_LIMIT = 0.35
MIDDLE_LIMIT = 0.7


class AdFormat(Enum):
    """Ad unit formats suited to different reading positions."""
    IN_ARTICLE = "in-article"
    RESPONSIVE = "responsive"


@dataclass(frozen=True)
class ContentBlock:
    """One block unit of an article body.

    ``closing_tag`` is None for trailing text that never reached a block
    boundary; such a block counts towards word totals only.
    """
    index: int
    closing_tag: str | None
    word_count: int

    @property
    def complete(self) -> bool:
        return self.closing_tag is not None

    @property
    def closes_paragraph(self) -> bool:
        return self.closing_tag == "p"

    @property
    def position_kind(self) -> PositionKind:
        if self.closing_tag in HEADING_TAGS:
            return PositionKind.AFTER_HEADING
        if self.closing_tag in LIST_TAGS:
            return PositionKind.AFTER_LIST
        if self.closing_tag == "figure":
            return PositionKind.AFTER_IMAGE
        return PositionKind.AFTER_PARAGRAPH


def _is_content_text(node: NavigableString) -> bool:
    if isinstance(node, PreformattedString):
        # comments, doctypes, CDATA, processing instructions
        return False
    parent = node.parent
    return parent is None or parent.name not in NON_CONTENT_TAGS


def segment_blocks(content_html: str | None) -> list[ContentBlock]:
    """Split an HTML body into block units in document order.

    A block ends where a block-level element closes; nested block elements
    close their own blocks first. Text between two boundaries belongs to the
    later block.
    """
    soup = BeautifulSoup(content_html or "", "html.parser")

    blocks: list[ContentBlock] = []
    pending: list[str] = []

    # (node, closing) pairs; the closing marker is pushed before the children
    stack: list[tuple[Any, bool]] = [(soup, False)]
    while stack:
        node, closing = stack.pop()
        if closing:
            blocks.append(ContentBlock(len(blocks), node.name, count_words(" ".join(pending))))
            pending = []
        elif isinstance(node, Tag):
            if node.name in BLOCK_TAGS:
                stack.append((node, True))
            stack.extend((child, False) for child in reversed(node.contents))
        elif isinstance(node, NavigableString) and _is_content_text(node):
            pending.append(str(node))

    trailing = " ".join(pending)
    if trailing.strip():
        blocks.append(ContentBlock(len(blocks), None, count_words(trailing)))

    return blocks


def content_position(progress: float) -> ContentPosition:
    """Bucket a 0..1 reading-progress ratio."""
    if progress < EARLY_LIMIT:
        return ContentPosition.EARLY
    if progress < MIDDLE_LIMIT:
        return ContentPosition.MIDDLE
    return ContentPosition.LATE


def coerce_config(config: PlacementConfig | Mapping[str, Any] | None) -> PlacementConfig:
    """Accept a config object, a mapping of its fields, or None for defaults."""
    if config is None:
        return PlacementConfig()
    if isinstance(config, PlacementConfig):
        return config
    if isinstance(config, Mapping):
        return PlacementConfig.model_validate(dict(config))
    raise TypeError(f"Unsupported placement config type: {type(config).__name__}")


class ContentSegmenter(LoggingMixin):
    """Chooses ad insertion points under spacing and quantity rules."""

    def __init__(self, config: PlacementConfig | Mapping[str, Any] | None = None):
        self.config = coerce_config(config)

    def plan(self, content_html: str | None) -> list[AdPlacement]:
        """Plan placements for one article body."""
        config = self.config
        blocks = segment_blocks(content_html)
        total_content_words = sum(block.word_count for block in blocks)

        placements: list[AdPlacement] = []
        paragraph_count = 0
        words_since_last_placement = 0
        total_words_seen = 0

        for block in blocks:
            if block.closes_paragraph:
                paragraph_count += 1
            words_since_last_placement += block.word_count
            total_words_seen += block.word_count

            if not block.complete:
                continue
            if len(placements) >= config.max_placements:
                break
            if paragraph_count < config.min_paragraphs_before_first:
                continue
            if words_since_last_placement < config.min_words_between_placements:
                continue

            progress = total_words_seen / total_content_words if total_content_words else 0.0
            bucket = content_position(progress)

            if bucket in config.preferred_positions or not placements:
                placements.append(AdPlacement(
                    position_kind=block.position_kind,
                    block_index=block.index,
                    bucket=bucket,
                ))
                words_since_last_placement = 0

        self.logger.debug(
            "Ad placements planned",
            **log_processing_stage(
                "plan_placements",
                input_count=len(blocks),
                output_count=len(placements),
                total_words=total_content_words,
            )
        )
        return placements


def plan_placements(
    content_html: str | None,
    config: PlacementConfig | Mapping[str, Any] | None = None,
) -> list[AdPlacement]:
    """Convenience function for placement planning."""
    return ContentSegmenter(config).plan(content_html)


def optimal_ad_format(position: ContentPosition, device: str | None = None) -> AdFormat:
    """Pick the ad format that suits a reading position.

    Native-looking in-article units go early (and mid-article on mobile);
    standard responsive units everywhere else.
    """
    if position is ContentPosition.EARLY:
        return AdFormat.IN_ARTICLE
    if position is ContentPosition.MIDDLE:
        return AdFormat.IN_ARTICLE if device == "mobile" else AdFormat.RESPONSIVE
    return AdFormat.RESPONSIVE
