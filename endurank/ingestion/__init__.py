"""Race ingestion from external sources."""

from .sources import (
    RaceSource,
    StaticRaceSource,
    generate_race_id,
    region_for_state,
    should_update,
    to_race_item,
)
from .sync import sync_races, sync_source

__all__ = [
    "RaceSource",
    "StaticRaceSource",
    "generate_race_id",
    "region_for_state",
    "should_update",
    "to_race_item",
    "sync_races",
    "sync_source",
]
