"""Gazetteer-based country/city/region classification for article text."""

from collections.abc import Iterable
from dataclasses import dataclass

from ..logging import get_logger
from ..models import Country, LocationTag
from .gazetteer import (
    COUNTRY_PRECEDENCE,
    DEFAULT_COUNTRY,
    TIER_WEIGHTS,
    Gazetteer,
    load_gazetteer,
)
from .text_utils import format_place_name

logger = get_logger(__name__)

GENERIC_REGION_LABEL = "Southern Africa"


@dataclass(frozen=True)
class CountryMatches:
    """Gazetteer entries of one country found in a text."""
    country: Country
    cities: tuple[str, ...]
    regions: tuple[str, ...]
    keywords: tuple[str, ...]

    @property
    def score(self) -> int:
        return sum(
            weight * len(getattr(self, tier))
            for tier, weight in TIER_WEIGHTS.items()
        )


class GeoClassifier:
    """Scores free text against each country's gazetteer tiers."""

    def __init__(self, gazetteer: Gazetteer | None = None):
        self.gazetteer = gazetteer or load_gazetteer()

    def match(self, search_text: str, country: Country) -> CountryMatches:
        """Find gazetteer entries contained in already-lowercased text."""
        entry = self.gazetteer.entry(country)
        found = {
            tier: tuple(name for name in entry.tier(tier) if name in search_text)
            for tier in TIER_WEIGHTS
        }
        return CountryMatches(country=country, **found)

    def classify(
        self,
        title: str | None = "",
        content: str | None = "",
        category: str | None = "",
        tags: Iterable[str] | None = None,
    ) -> LocationTag:
        """Best-guess location for an article.

        Highest score wins; ties go to the earlier country in
        ``COUNTRY_PRECEDENCE``; no match at all yields ``DEFAULT_COUNTRY``
        flagged as low confidence.
        """
        tag_text = " ".join(str(tag) for tag in tags or ())
        search_text = f"{title or ''} {content or ''} {category or ''} {tag_text}".lower()

        best: CountryMatches | None = None
        for country in COUNTRY_PRECEDENCE:
            matches = self.match(search_text, country)
            if best is None or matches.score > best.score:
                best = matches

        if best is None or best.score == 0:
            logger.debug("No gazetteer match, using default country", country=DEFAULT_COUNTRY.value)
            return LocationTag(country=DEFAULT_COUNTRY, low_confidence=True)

        location = LocationTag(
            country=best.country,
            city=format_place_name(best.cities[0]) if best.cities else None,
            region=format_place_name(best.regions[0]) if best.regions else None,
        )
        logger.debug(
            "Location classified",
            country=location.country.value,
            city=location.city,
            region=location.region,
            score=best.score,
        )
        return location

    def location_keywords(self, location: LocationTag | None, category: str = "") -> list[str]:
        """SEO meta keywords for a classified location.

        Without a location a generic Southern Africa mix is returned.
        """
        keywords: list[str] = []

        if location is None:
            keywords.extend(self.gazetteer.keywords_for(Country.SOUTH_AFRICA).primary[:3])
            keywords.extend(self.gazetteer.keywords_for(Country.ZIMBABWE).primary[:2])
        else:
            market = self.gazetteer.keywords_for(location.country)
            keywords.extend(market.primary)
            if location.city:
                keywords.append(f"{location.city} news")
                if category:
                    keywords.append(f"{location.city} {category.lower()}")
            if location.region:
                keywords.append(f"{location.region} news")
            keywords.extend(market.secondary[:5])

        if category:
            label = location.country.value if location else GENERIC_REGION_LABEL
            keywords.append(f"{category.lower()} news {label}")

        # dict.fromkeys drops repeats but keeps first-seen order
        return list(dict.fromkeys(keywords))


def classify_location(
    title: str | None = "",
    content: str | None = "",
    category: str | None = "",
    tags: Iterable[str] | None = None,
    gazetteer: Gazetteer | None = None,
) -> LocationTag:
    """Convenience function for one-off classification."""
    return GeoClassifier(gazetteer).classify(title, content, category, tags)


def location_keywords(
    location: LocationTag | None,
    category: str = "",
    gazetteer: Gazetteer | None = None,
) -> list[str]:
    """Convenience function for location SEO keywords."""
    return GeoClassifier(gazetteer).location_keywords(location, category)
