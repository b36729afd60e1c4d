"""
Tests for the search ranker.
"""
from datetime import date, datetime, timedelta, timezone

import pytest

from endurank.client.store import InMemoryCatalogStore
from endurank.ingestion.sources import StaticRaceSource
from endurank.ingestion.sync import sync_races
from endurank.models.catalog import RaceItem, RaceLocation
from endurank.models.ingestion import RawRaceRecord
from endurank.pipeline.query_parser import parse_query
from endurank.pipeline.ranking import SearchRanker


NOW = datetime(2026, 10, 18, 12, 0)


def _race(
    race_id: str,
    name: str,
    city: str,
    state: str,
    distance: str,
    days_out: int,
    msrp: float = 100,
    organizer: str = None,
    is_qualifier: bool = False,
) -> RaceItem:
    return RaceItem(
        race_id=race_id,
        race_name=name,
        race_date=NOW + timedelta(days=days_out),
        location=RaceLocation(city=city, state=state),
        distance=distance,
        msrp=msrp,
        organizer_series=organizer,
        is_qualifier=is_qualifier,
        status="live",
    )


@pytest.fixture
def ranker() -> SearchRanker:
    return SearchRanker(clock=lambda: NOW)


def _ids(races: list[RaceItem]) -> list[str]:
    return [race.race_id for race in races]


class TestRank:
    """Tests for filtering and ordering."""

    def test_state_filter_excludes_other_states(self, ranker):
        """Test that only the Texas sprint survives a Texas query."""
        candidates = [
            _race("austin", "Austin Sprint Tri", "Austin", "TX", "sprint", 30),
            _race("chicago", "Chicago Sprint", "Chicago", "IL", "sprint", 10),
        ]
        results = ranker.rank(candidates, parse_query("sprint races in Texas"))
        assert _ids(results) == ["austin"]

    def test_exact_name_first(self, ranker):
        """Test that an exact name match outranks a sooner partial match."""
        candidates = [
            _race("kids", "Austin Sprint Tri Kids", "Austin", "TX", "sprint", 20),
            _race("main", "Austin Sprint Tri", "Austin", "TX", "sprint", 40),
        ]
        results = ranker.rank(candidates, parse_query("Austin Sprint Tri"))
        assert _ids(results) == ["main", "kids"]

    def test_ties_break_on_date(self, ranker):
        """Test that equal scores go to the soonest race."""
        candidates = [
            _race("later", "Chicago Sprint B", "Chicago", "IL", "sprint", 60),
            _race("sooner", "Chicago Sprint A", "Chicago", "IL", "sprint", 15),
        ]
        results = ranker.rank(candidates, parse_query("sprint"))
        assert _ids(results) == ["sooner", "later"]

    def test_full_ties_keep_input_order(self, ranker):
        """Test that the sort is stable."""
        candidates = [
            _race(f"r{i}", f"Sprint {i}", "Chicago", "IL", "sprint", 15)
            for i in range(5)
        ]
        results = ranker.rank(candidates, parse_query("sprint"))
        assert _ids(results) == ["r0", "r1", "r2", "r3", "r4"]

    def test_filters_combine_with_and(self, ranker):
        """Test that a city and a disagreeing state return nothing."""
        candidates = [_race("austin", "Austin Sprint Tri", "Austin", "TX", "sprint", 30)]
        assert ranker.rank(candidates, parse_query("sprint in austin california")) == []

    def test_price_filter(self, ranker):
        candidates = [
            _race("cheap", "Cheap Sprint", "Austin", "TX", "sprint", 30, msrp=90),
            _race("pricey", "Pricey Sprint", "Austin", "TX", "sprint", 30, msrp=120),
        ]
        results = ranker.rank(candidates, parse_query("sprint under $100"))
        assert _ids(results) == ["cheap"]

    def test_qualifier_filter(self, ranker):
        """Test that a qualifier query drops non-qualifying races."""
        candidates = [
            _race("plain", "Ironman Texas", "The Woodlands", "TX", "full", 30, organizer="IRONMAN"),
            _race("kq", "Ironman Kona Qualifier", "Lake Placid", "NY", "full", 60,
                  organizer="IRONMAN", is_qualifier=True),
        ]
        results = ranker.rank(candidates, parse_query("ironman qualifier"))
        assert _ids(results) == ["kq"]

    def test_organizer_filter_needs_series(self, ranker):
        """Test that races without an organizer never match an organizer query."""
        candidates = [_race("indie", "Indie Half", "Boulder", "CO", "half", 30)]
        assert ranker.rank(candidates, parse_query("challenge half")) == []

    def test_date_filter(self, ranker):
        """Test that a month query keeps only races in that month."""
        candidates = [
            RaceItem(race_id="june", race_name="June Sprint", race_date=datetime(2027, 6, 14, 7),
                     location=RaceLocation(city="Austin", state="TX"), distance="sprint", msrp=80),
            RaceItem(race_id="aug", race_name="August Sprint", race_date=datetime(2027, 8, 9, 7),
                     location=RaceLocation(city="Austin", state="TX"), distance="sprint", msrp=80),
        ]
        parsed = parse_query("sprint races in june", today=date(2027, 1, 1))
        assert _ids(ranker.rank(candidates, parsed)) == ["june"]


class TestTextFallback:
    """Tests for queries with no recognised structure."""

    def test_substring_match(self, ranker):
        """Test plain substring matching when nothing structured was found."""
        candidates = [
            _race("placid", "Placid Olympic", "Lake Placid", "NY", "olympic", 30),
            _race("austin", "Austin Sprint Tri", "Austin", "TX", "sprint", 30),
        ]
        assert _ids(ranker.rank(candidates, parse_query("placid"))) == ["placid"]

    def test_upcoming_outranks_past(self, ranker):
        """Test that an upcoming race beats an otherwise equal past one."""
        candidates = [
            _race("past", "Placid Sprint", "Lake Placid", "NY", "sprint", -30),
            _race("future", "Placid Olympic", "Lake Placid", "NY", "olympic", 30),
        ]
        assert _ids(ranker.rank(candidates, parse_query("placid"))) == ["future", "past"]

    def test_empty_query_returns_everything(self, ranker):
        candidates = [
            _race("a", "Race A", "Austin", "TX", "sprint", 50),
            _race("b", "Race B", "Boulder", "CO", "half", 20),
        ]
        assert _ids(ranker.rank(candidates, parse_query(""))) == ["b", "a"]

    def test_explicit_raw_query(self, ranker):
        """Test that a caller-provided lower-cased query is used for matching."""
        candidates = [_race("placid", "Placid Olympic", "Lake Placid", "NY", "olympic", 30)]
        parsed = parse_query("")
        assert ranker.rank(candidates, parsed, raw_query_lower="nowhere") == []


class TestTimezones:
    """Tests for race dates that arrive with a UTC offset."""

    def test_synced_utc_race_ranks_with_default_clock(self):
        """Test that a race ingested with a 'Z' date ranks against the local clock."""
        store = InMemoryCatalogStore()
        source = StaticRaceSource("curated", [
            RawRaceRecord(
                external_id="lp-2027",
                name="Lake Placid Sprint",
                date="2027-07-25T07:00:00Z",
                city="Lake Placid",
                state="NY",
                distance="sprint",
            ),
        ])
        sync_races(store, [source], clock=lambda: NOW)

        races = [RaceItem.model_validate(doc) for doc in store.list_all("races")]
        results = SearchRanker().rank(races, parse_query("sprint"))

        assert _ids(results) == ["lake-placid-sprint-ny-sprint"]
        assert results[0].race_date == datetime(2027, 7, 25, 7, 0)

    def test_mixed_offsets_sort_by_instant(self, ranker):
        """Test that aware and naive dates sort together, aware ones as UTC."""
        aware = RaceItem(
            race_id="aware",
            race_name="Chicago Sprint A",
            race_date=datetime(2026, 11, 1, 9, 0, tzinfo=timezone(timedelta(hours=2))),
            location=RaceLocation(city="Chicago", state="IL"),
            distance="sprint",
            msrp=100,
        )
        naive = RaceItem(
            race_id="naive",
            race_name="Chicago Sprint B",
            race_date=datetime(2026, 11, 1, 8, 0),
            location=RaceLocation(city="Chicago", state="IL"),
            distance="sprint",
            msrp=100,
        )

        results = ranker.rank([naive, aware], parse_query("sprint"))

        assert _ids(results) == ["aware", "naive"]
        assert aware.race_date == datetime(2026, 11, 1, 7, 0)
