"""
Pydantic models for Endurank.
All data contracts are defined here for strict validation.
"""

from .catalog import (
    CatalogItem,
    GearItem,
    GearSubmission,
    RaceItem,
    RaceLocation,
    RaceSubmission,
    Submission,
)
from .query import DateRange, LocationFilter, ParsedQuery, PriceRange, QueryFilters
from .scoring import RatedReview, ScoredItem, ScoreInput
from .validation import ValidationResult
from .ingestion import RawRaceRecord, SyncError, SyncResult

__all__ = [
    # Catalog
    "CatalogItem",
    "GearItem",
    "GearSubmission",
    "RaceItem",
    "RaceLocation",
    "RaceSubmission",
    "Submission",
    # Query
    "DateRange",
    "LocationFilter",
    "ParsedQuery",
    "PriceRange",
    "QueryFilters",
    # Scoring
    "RatedReview",
    "ScoredItem",
    "ScoreInput",
    # Validation
    "ValidationResult",
    # Ingestion
    "RawRaceRecord",
    "SyncError",
    "SyncResult",
]
