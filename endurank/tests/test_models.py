"""
Tests for the pydantic models and configuration.
"""
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import TypeAdapter, ValidationError

from endurank.config import get_config, reset_config
from endurank.models.catalog import (
    GearItem,
    GearSubmission,
    RaceItem,
    RaceSubmission,
    Submission,
    naive_utc,
)
from endurank.models.ingestion import RawRaceRecord
from endurank.models.query import DateRange, ParsedQuery, PriceRange
from endurank.models.scoring import ScoreInput
from endurank.models.validation import ValidationResult


class TestCatalogModels:
    """Tests for catalog documents."""

    def test_from_camel_case_document(self):
        """Test that store documents load into models."""
        race = RaceItem.model_validate({
            "raceId": "r1",
            "raceName": "Escape from Alcatraz",
            "raceDate": "2027-06-06T06:00:00",
            "location": {"city": "San Francisco", "state": "CA"},
            "distance": "olympic",
            "msrp": 895,
            "isQualifier": False,
        })

        assert race.race_name == "Escape from Alcatraz"
        assert race.race_date == datetime(2027, 6, 6, 6, 0)
        assert race.display_name == "Escape from Alcatraz"

    def test_to_document_uses_camel_case(self):
        gear = GearItem(product_id="g1", product_name="Clifton 9", brand="Hoka",
                        sub_category="running-shoes", msrp=145)
        doc = gear.to_document()

        assert doc["productName"] == "Clifton 9"
        assert doc["subCategory"] == "running-shoes"
        assert "mpn" not in doc
        assert gear.item_id == "g1"

    def test_race_dates_stored_as_naive_utc(self):
        """Test that offset-aware race dates are converted to naive UTC."""
        race = RaceItem.model_validate({
            "raceId": "r1",
            "raceName": "Kona",
            "raceDate": "2027-10-09T06:25:00-10:00",
            "location": {"city": "Kailua-Kona", "state": "HI"},
            "distance": "full",
            "msrp": 1500,
            "lastScraped": "2026-10-18T12:00:00Z",
        })

        assert race.race_date == datetime(2027, 10, 9, 16, 25)
        assert race.last_scraped == datetime(2026, 10, 18, 12, 0)
        assert race.to_document()["raceDate"] == "2027-10-09T16:25:00"

    def test_raw_record_date_naive_utc(self):
        raw = RawRaceRecord(external_id="x", name="X", date="2027-07-25T07:00:00Z",
                            city="Austin", state="TX", distance="sprint")
        assert raw.date == datetime(2027, 7, 25, 7, 0)

    def test_naive_utc(self):
        naive = datetime(2027, 1, 1, 8, 0)
        assert naive_utc(naive) is naive
        assert naive_utc(None) is None
        assert naive_utc(datetime(2027, 1, 1, 8, 0, tzinfo=timezone(timedelta(hours=-5)))) == datetime(2027, 1, 1, 13, 0)

    def test_rejects_negative_price(self):
        with pytest.raises(ValidationError):
            GearItem(product_id="g1", product_name="X", brand="Y", sub_category="bikes", msrp=-1)

    def test_submission_discriminator(self):
        """Test that the kind field selects the submission model."""
        adapter = TypeAdapter(Submission)

        gear = adapter.validate_python({
            "kind": "gear", "brand": "Trek", "productName": "Speed Concept", "msrp": 5000,
            "subCategory": "bikes",
        })
        race = adapter.validate_python({
            "kind": "race", "raceName": "CapTex", "distance": "olympic", "city": "Austin", "state": "TX",
        })

        assert isinstance(gear, GearSubmission)
        assert isinstance(race, RaceSubmission)


class TestQueryModels:
    """Tests for query ranges."""

    def test_price_range_inclusive(self):
        price = PriceRange(min=100, max=200)
        assert price.contains(100) and price.contains(200)
        assert not price.contains(99.99)
        assert PriceRange(max=50).contains(0)

    def test_date_range_open_ended(self):
        dates = DateRange(start=datetime(2027, 6, 1).date())
        assert dates.contains(datetime(2030, 1, 1).date())
        assert not dates.contains(datetime(2027, 5, 31).date())

    def test_structured_terms(self):
        assert not ParsedQuery(original="x", keywords=["x"]).has_structured_terms
        assert ParsedQuery(original="x", organizers=["usat"]).has_structured_terms


class TestScoreInput:
    def test_bounds(self):
        with pytest.raises(ValidationError):
            ScoreInput(average_rating=5.5, cost_sensitivity=0.5, normalized_price=0.5)
        with pytest.raises(ValidationError):
            ScoreInput(average_rating=4, cost_sensitivity=1.5, normalized_price=0.5)


class TestValidationResult:
    def test_has_warnings(self):
        assert not ValidationResult(is_valid=True).has_warnings


class TestConfig:
    """Tests for environment-driven configuration."""

    @pytest.fixture(autouse=True)
    def fresh_config(self):
        reset_config()
        yield
        reset_config()

    def test_defaults(self):
        config = get_config()

        assert config.matching.similarity_threshold == 85
        assert config.scoring.default_cost_sensitivity == 0.5
        assert config.sync.stale_after_days == 7
        assert config.mysql.database == "endurank"

    def test_singleton(self):
        assert get_config() is get_config()

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("ENDURANK_SIMILARITY_THRESHOLD", "90")
        monkeypatch.setenv("ENDURANK_MYSQL_HOST", "catalog-db")
        reset_config()

        config = get_config()
        assert config.matching.similarity_threshold == 90
        assert config.mysql.host == "catalog-db"
