"""
Search ranker - filter and order already-fetched races against a parsed query.
"""
import logging
from datetime import datetime
from typing import Callable, Optional

from ..models.catalog import RaceItem
from ..models.query import ParsedQuery


logger = logging.getLogger(__name__)

EXACT_NAME_BOOST = 100
NAME_CONTAINS_BOOST = 50
DISTANCE_BOOST = 30
STATE_BOOST = 20
CITY_BOOST = 40
ORGANIZER_BOOST = 25
QUALIFIER_BOOST = 15
UPCOMING_BOOST = 5


class SearchRanker:
    """
    Ranks race candidates for a parsed search query.

    Hard filters combine with AND: a query naming a city and a state that
    disagree returns nothing rather than the union of both.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self.clock = clock

    def rank(
        self,
        candidates: list[RaceItem],
        parsed: ParsedQuery,
        raw_query_lower: Optional[str] = None,
    ) -> list[RaceItem]:
        """
        Filter and order races.

        Args:
            candidates: Races fetched by the caller (typically all live races)
            parsed: Output of parse_query for the search text
            raw_query_lower: Lower-cased search text, derived from parsed if None

        Returns:
            Matching races, best first; ties go to the soonest race date
        """
        query_lower = raw_query_lower if raw_query_lower is not None else parsed.original.lower().strip()
        now = self.clock()

        logger.info(f"Ranking {len(candidates)} races for '{query_lower}'")

        # Step 1: Hard filters
        filtered = [race for race in candidates if self._passes_filters(race, parsed)]

        # Step 2: Plain text match when nothing structured was recognised
        if not parsed.has_structured_terms:
            filtered = [race for race in filtered if self._matches_text(race, query_lower)]
        logger.info(f"After filters: {len(filtered)} races")

        # Step 3: Relevance scoring
        scored = [
            (race, self._relevance_score(race, parsed, query_lower, now))
            for race in filtered
        ]

        # Step 4: Best score first, then soonest date
        scored.sort(key=lambda x: (-x[1], x[0].race_date))
        return [race for race, _ in scored]

    def _passes_filters(self, race: RaceItem, parsed: ParsedQuery) -> bool:
        """Apply the parsed distances, locations, organizers and filters."""
        locations = parsed.locations
        filters = parsed.filters

        if parsed.distances and race.distance not in parsed.distances:
            return False

        if locations.states and race.location.state.upper() not in locations.states:
            return False

        if locations.cities and not self._city_matches(race, locations.cities):
            return False

        if parsed.organizers and not self._organizer_matches(race, parsed.organizers):
            return False

        if filters.price_range and not filters.price_range.contains(race.msrp):
            return False

        if filters.is_qualifier and not race.is_qualifier:
            return False

        if filters.date_range and not filters.date_range.contains(race.race_date.date()):
            return False

        return True

    def _city_matches(self, race: RaceItem, cities: list[str]) -> bool:
        city = race.location.city.lower()
        return any(c in city for c in cities)

    def _organizer_matches(self, race: RaceItem, organizers: list[str]) -> bool:
        organizer = (race.organizer_series or "").lower()
        return bool(organizer) and any(o in organizer for o in organizers)

    def _matches_text(self, race: RaceItem, query_lower: str) -> bool:
        fields = [
            race.race_name,
            race.location.city,
            race.location.state,
            race.location.region or "",
            race.distance,
            race.organizer_series or "",
        ]
        return any(query_lower in field.lower() for field in fields)

    def _relevance_score(
        self,
        race: RaceItem,
        parsed: ParsedQuery,
        query_lower: str,
        now: datetime,
    ) -> int:
        """Additive relevance score for a race that passed the filters."""
        score = 0
        name = race.race_name.lower()

        if query_lower and name == query_lower:
            score += EXACT_NAME_BOOST
        elif query_lower and query_lower in name:
            score += NAME_CONTAINS_BOOST

        if race.distance in parsed.distances:
            score += DISTANCE_BOOST

        if race.location.state.upper() in parsed.locations.states:
            score += STATE_BOOST

        if parsed.locations.cities and self._city_matches(race, parsed.locations.cities):
            score += CITY_BOOST

        if parsed.organizers and self._organizer_matches(race, parsed.organizers):
            score += ORGANIZER_BOOST

        if parsed.filters.is_qualifier and race.is_qualifier:
            score += QUALIFIER_BOOST

        if race.race_date > now:
            score += UPCOMING_BOOST

        return score
