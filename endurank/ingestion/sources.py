"""
Race data sources and the stateless helpers shared by all of them.

A source only has to provide a name and ``fetch_raw()``; transformation
and id generation are free functions.
"""
import re
from datetime import datetime, timedelta
from typing import Optional, Protocol, Sequence

from ..config import get_config
from ..models.catalog import RaceItem, RaceLocation
from ..models.ingestion import RawRaceRecord
from ..pipeline.gazetteers import STATE_REGIONS


class RaceSource(Protocol):
    """Anything that can list races."""
    name: str

    def fetch_raw(self) -> list[RawRaceRecord]: ...


class StaticRaceSource:
    """A curated, in-process list of races."""

    def __init__(self, name: str, records: Sequence[RawRaceRecord]):
        self.name = name
        self._records = list(records)

    def fetch_raw(self) -> list[RawRaceRecord]:
        return list(self._records)


def region_for_state(state: str) -> str:
    """Display region for a two-letter state code, 'Other' if unknown."""
    return STATE_REGIONS.get(state.upper(), "Other")


def generate_race_id(name: str, state: str, distance: str) -> str:
    """Stable id from race details, e.g. 'ironman-lake-placid-ny-full'."""
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return f"{slug}-{state.lower()}-{distance}"


def should_update(
    last_scraped: Optional[datetime],
    now: datetime,
    stale_after_days: Optional[int] = None,
) -> bool:
    """A race is refreshed when it was never scraped or the data is stale."""
    if last_scraped is None:
        return True
    days = stale_after_days if stale_after_days is not None else get_config().sync.stale_after_days
    return last_scraped < now - timedelta(days=days)


def to_race_item(raw: RawRaceRecord, source_name: str, now: datetime) -> RaceItem:
    """
    Build a catalog race from a raw record.
    Ingested races go live immediately with no reviews.
    """
    return RaceItem(
        race_id=generate_race_id(raw.name, raw.state, raw.distance),
        race_name=raw.name,
        race_date=raw.date,
        location=RaceLocation(
            city=raw.city,
            state=raw.state,
            country=raw.country or get_config().sync.default_country,
            region=region_for_state(raw.state),
        ),
        distance=raw.distance,
        msrp=raw.registration_cost or 0.0,
        organizer_series=raw.organizer_series,
        registration_url=raw.registration_url,
        race_website_url=raw.race_website_url,
        registration_status=raw.registration_status,
        max_capacity=raw.max_capacity,
        is_qualifier=bool(raw.is_qualifier),
        qualifier_for=raw.qualifier_for,
        status="live",
        data_source=source_name,
        external_id=raw.external_id,
        last_scraped=now,
        created_at=now,
        updated_at=now,
    )
