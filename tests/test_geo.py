"""Tests for gazetteer loading and geo classification."""

import pytest

from content_intel.models import Country, LocationTag
from content_intel.processing.gazetteer import (
    COUNTRY_PRECEDENCE,
    DEFAULT_COUNTRY,
    GazetteerError,
    load_gazetteer,
)
from content_intel.processing.geo import GeoClassifier, classify_location, location_keywords


def test_empty_input_defaults_to_south_africa():
    location = classify_location("", "", "", [])

    assert location.country is Country.SOUTH_AFRICA
    assert location.city is None
    assert location.region is None
    assert location.low_confidence is True


def test_missing_fields_are_treated_as_empty():
    location = classify_location(None, None, None, None)
    assert location == LocationTag(Country.SOUTH_AFRICA, low_confidence=True)


def test_harare_court_ruling():
    location = classify_location(
        "Harare court ruling",
        "The Harare High Court...",
        "Politics",
        ["zimbabwe"],
    )

    assert location.country is Country.ZIMBABWE
    assert location.city == "Harare"
    assert location.low_confidence is False


def test_equal_scores_go_to_south_africa():
    """One city from each country scores 3 each."""
    location = classify_location("Flights between Johannesburg and Bulawayo", "", "", [])

    assert location.country is Country.SOUTH_AFRICA
    assert location.city == "Johannesburg"


def test_city_and_region_are_title_cased():
    location = classify_location("Floods in Durban", "Rain across KwaZulu-Natal", "", [])

    assert location.country is Country.SOUTH_AFRICA
    assert location.city == "Durban"
    assert location.region == "Kwazulu-Natal"


def test_first_city_follows_gazetteer_order():
    """Pretoria is listed after Johannesburg, whatever the text order."""
    location = classify_location("Pretoria and Johannesburg commuters", "", "", [])
    assert location.city == "Johannesburg"


def test_zimbabwe_region_only():
    location = classify_location("", "Drought in Manicaland villages", "", [])

    assert location.country is Country.ZIMBABWE
    assert location.city is None
    assert location.region == "Manicaland"


def test_tags_and_category_are_searched():
    location = classify_location("Court ruling", "", "", ["mnangagwa"])
    assert location.country is Country.ZIMBABWE


def test_substring_matching():
    """Entries match inside longer words, not only on word boundaries."""
    location = classify_location("Mutareans celebrate", "", "", [])
    assert location.city == "Mutare"


def test_classification_is_deterministic():
    args = ("Bulawayo water crisis", "Residents of Bulawayo and Gweru", "News", ["water"])
    assert classify_location(*args) == classify_location(*args)


def test_country_policy_constants():
    assert COUNTRY_PRECEDENCE[0] is DEFAULT_COUNTRY is Country.SOUTH_AFRICA
    assert set(COUNTRY_PRECEDENCE) == set(Country)


def test_custom_gazetteer_mapping():
    gazetteer = load_gazetteer({
        "countries": {
            "South Africa": {"cities": ["gqeberha"]},
            "Zimbabwe": {"cities": ["hwange"], "keywords": ["victoria"]},
        }
    })

    classifier = GeoClassifier(gazetteer)

    assert classifier.classify("Hwange park near Victoria").country is Country.ZIMBABWE
    assert classifier.classify("Gqeberha harbour").city == "Gqeberha"


def test_custom_gazetteer_file(tmp_path):
    path = tmp_path / "gazetteer.yaml"
    path.write_text(
        "countries:\n"
        "  Zimbabwe:\n"
        "    cities: [Kariba]\n",
        encoding="utf-8",
    )

    gazetteer = load_gazetteer(path)

    assert gazetteer.entry(Country.ZIMBABWE).cities == ("kariba",)
    assert gazetteer.entry(Country.SOUTH_AFRICA).cities == ()
    assert classify_location("Lake Kariba", "", "", [], gazetteer).city == "Kariba"


def test_default_gazetteer_tiers():
    gazetteer = load_gazetteer()

    south_africa = gazetteer.entry(Country.SOUTH_AFRICA)
    assert south_africa.cities[0] == "johannesburg"
    assert "kwazulu-natal" in south_africa.regions
    assert "zimbabwe" in gazetteer.entry(Country.ZIMBABWE).keywords


@pytest.mark.parametrize("data", [
    {"countries": {"Zambia": {"cities": ["lusaka"]}}},
    {"countries": ["South Africa"]},
    {"countries": {"Zimbabwe": {"cities": "harare"}}},
    {"countries": {"Zimbabwe": ["harare"]}},
])
def test_malformed_gazetteer(data):
    with pytest.raises(GazetteerError):
        load_gazetteer(data)


def test_missing_gazetteer_file(tmp_path):
    with pytest.raises(GazetteerError):
        load_gazetteer(tmp_path / "missing.yaml")


def test_invalid_yaml_file(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("countries: [unclosed", encoding="utf-8")

    with pytest.raises(GazetteerError):
        load_gazetteer(path)


def test_location_keywords_for_city():
    location = LocationTag(Country.ZIMBABWE, city="Harare")

    keywords = location_keywords(location, "Politics")

    assert keywords[0] == "Zimbabwe news"
    assert "Harare politics" in keywords
    assert keywords.count("Harare news") == 1
    assert keywords[-1] == "politics news Zimbabwe"
    assert "ZANU-PF news" in keywords


def test_location_keywords_without_location():
    keywords = location_keywords(None, "Business")

    assert keywords == [
        "South Africa news",
        "SA breaking news",
        "South African politics",
        "Zimbabwe news",
        "Zim breaking news",
        "business news Southern Africa",
    ]


def test_location_keywords_region():
    location = LocationTag(Country.SOUTH_AFRICA, region="Gauteng")
    assert "Gauteng news" in location_keywords(location)
