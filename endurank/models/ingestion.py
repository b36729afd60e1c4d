"""
Ingestion models - raw race records from external sources and sync results.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .catalog import RaceDistance, RegistrationStatus, naive_utc


class RawRaceRecord(BaseModel):
    """A race as delivered by a source, before transformation."""
    external_id: str
    name: str
    date: datetime
    city: str
    state: str
    country: Optional[str] = None
    distance: RaceDistance
    registration_cost: Optional[float] = None
    registration_url: Optional[str] = None
    race_website_url: Optional[str] = None
    organizer_series: Optional[str] = None
    is_qualifier: Optional[bool] = None
    qualifier_for: Optional[str] = None
    registration_status: Optional[RegistrationStatus] = None
    max_capacity: Optional[int] = None
    source_url: Optional[str] = None

    @field_validator("date")
    @classmethod
    def _naive_utc(cls, value: datetime) -> datetime:
        return naive_utc(value)


class SyncError(BaseModel):
    """A record or source that failed to sync."""
    race_id: Optional[str] = None
    message: str


class SyncResult(BaseModel):
    """Outcome of syncing one source into the catalog."""
    source: str
    timestamp: datetime
    races_added: int = 0
    races_updated: int = 0
    races_skipped: int = 0
    errors: list[SyncError] = Field(default_factory=list)

    @property
    def total_processed(self) -> int:
        return self.races_added + self.races_updated + self.races_skipped
