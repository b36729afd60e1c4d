"""
Query models - structured representation of a free-text search.
"""
from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field


QueryIntent = Literal["find", "compare", "recommend", "info"]


class LocationFilter(BaseModel):
    """Locations mentioned in a query."""
    cities: list[str] = Field(default_factory=list)
    states: list[str] = Field(default_factory=list, description="Two-letter codes")
    regions: list[str] = Field(default_factory=list)


class PriceRange(BaseModel):
    """Registration or MSRP bounds, inclusive."""
    min: Optional[float] = None
    max: Optional[float] = None

    def contains(self, price: float) -> bool:
        if self.min is not None and price < self.min:
            return False
        if self.max is not None and price > self.max:
            return False
        return True


class DateRange(BaseModel):
    """Calendar date bounds, inclusive."""
    start: Optional[date] = None
    end: Optional[date] = None

    def contains(self, day: date) -> bool:
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True


class QueryFilters(BaseModel):
    """Hard filters extracted from a query."""
    price_range: Optional[PriceRange] = None
    date_range: Optional[DateRange] = None
    is_qualifier: Optional[bool] = None


class ParsedQuery(BaseModel):
    """
    Everything the parser could extract from a search string.
    Purely derived from the text; recomputed for every query.
    """
    original: str
    intent: QueryIntent = "find"
    locations: LocationFilter = Field(default_factory=LocationFilter)
    distances: list[str] = Field(default_factory=list)
    organizers: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    filters: QueryFilters = Field(default_factory=QueryFilters)

    @property
    def has_structured_terms(self) -> bool:
        """Whether any distance, state, city or organizer was recognised."""
        return bool(
            self.distances
            or self.locations.states
            or self.locations.cities
            or self.organizers
        )
