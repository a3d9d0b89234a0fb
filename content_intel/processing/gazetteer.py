"""Static tiered place-name tables used by the geo classifier."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from ..logging import get_logger
from ..models import Country

logger = get_logger(__name__)

DEFAULT_GAZETTEER_PATH = Path(__file__).resolve().parent.parent / "gazetteer.yaml"

# Tier name -> score weight
TIER_WEIGHTS: Mapping[str, int] = MappingProxyType({
    "cities": 3,
    "regions": 2,
    "keywords": 1,
})

# South Africa is the primary market: it is assigned when nothing matches and
# it wins equal non-zero scores. Earlier countries win ties.
COUNTRY_PRECEDENCE: tuple[Country, ...] = (Country.SOUTH_AFRICA, Country.ZIMBABWE)
DEFAULT_COUNTRY = Country.SOUTH_AFRICA


class GazetteerError(ValueError):
    """Raised when gazetteer data cannot be read or is malformed."""


def _entries(values: Any, where: str) -> tuple[str, ...]:
    if values is None:
        return ()
    if not isinstance(values, list):
        raise GazetteerError(f"{where} must be a list, got {type(values).__name__}")
    return tuple(str(value).strip().lower() for value in values if str(value).strip())


def _country(name: str) -> Country:
    try:
        return Country(name)
    except ValueError:
        raise GazetteerError(f"Unknown country in gazetteer: {name!r}") from None


@dataclass(frozen=True)
class GazetteerEntry:
    """Ordered lookup tiers for one country."""
    cities: tuple[str, ...] = ()
    regions: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()

    def tier(self, name: str) -> tuple[str, ...]:
        return getattr(self, name)


@dataclass(frozen=True)
class LocalKeywords:
    """SEO meta keyword lists for one market."""
    primary: tuple[str, ...] = ()
    secondary: tuple[str, ...] = ()
    local: tuple[str, ...] = ()


@dataclass(frozen=True)
class Gazetteer:
    """Per-country lookup tables plus SEO keyword lists."""
    entries: Mapping[Country, GazetteerEntry] = field(default_factory=dict)
    seo_keywords: Mapping[Country, LocalKeywords] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))
        object.__setattr__(self, "seo_keywords", MappingProxyType(dict(self.seo_keywords)))

    def entry(self, country: Country) -> GazetteerEntry:
        return self.entries.get(country, GazetteerEntry())

    def keywords_for(self, country: Country) -> LocalKeywords:
        return self.seo_keywords.get(country, LocalKeywords())

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Gazetteer":
        """Build a gazetteer from the YAML document structure."""
        if not isinstance(data, Mapping):
            raise GazetteerError("Gazetteer document must be a mapping")

        countries = data.get("countries") or {}
        if not isinstance(countries, Mapping):
            raise GazetteerError("'countries' must be a mapping")

        entries = {}
        for name, tiers in countries.items():
            tiers = tiers or {}
            if not isinstance(tiers, Mapping):
                raise GazetteerError(f"Tiers for {name!r} must be a mapping")
            entries[_country(name)] = GazetteerEntry(**{
                tier: _entries(tiers.get(tier), f"{name}.{tier}")
                for tier in TIER_WEIGHTS
            })

        seo = {}
        for name, lists in (data.get("seo_keywords") or {}).items():
            lists = lists or {}
            if not isinstance(lists, Mapping):
                raise GazetteerError(f"SEO keywords for {name!r} must be a mapping")
            seo[_country(name)] = LocalKeywords(
                primary=tuple(lists.get("primary") or ()),
                secondary=tuple(lists.get("secondary") or ()),
                local=tuple(lists.get("local") or ()),
            )

        return cls(entries=entries, seo_keywords=seo)


@lru_cache(maxsize=8)
def _load_file(path: Path) -> Gazetteer:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise GazetteerError(f"Gazetteer file not readable: {path} ({e})") from e
    except yaml.YAMLError as e:
        raise GazetteerError(f"Gazetteer file is not valid YAML: {path} ({e})") from e

    gazetteer = Gazetteer.from_mapping(data or {})
    logger.debug(
        "Gazetteer loaded",
        path=str(path),
        countries=[country.value for country in gazetteer.entries],
    )
    return gazetteer


def load_gazetteer(source: str | Path | Mapping[str, Any] | None = None) -> Gazetteer:
    """Load a gazetteer from a YAML path, a mapping, or the packaged default.

    Files are parsed once per path; the result is immutable.

    Raises:
        GazetteerError: If the file is unreadable or the data malformed.
    """
    if source is None:
        return _load_file(DEFAULT_GAZETTEER_PATH)
    if isinstance(source, Mapping):
        return Gazetteer.from_mapping(source)
    return _load_file(Path(source).resolve())
