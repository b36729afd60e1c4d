"""
Sync races from external sources into the catalog store.
"""
import logging
from datetime import datetime
from typing import Callable, Iterable, Optional

from pydantic import ValidationError

from ..client.store import COLLECTIONS, CatalogStore
from ..exceptions import StoreError
from ..models.catalog import RaceItem
from ..models.ingestion import RawRaceRecord, SyncError, SyncResult
from .sources import RaceSource, should_update, to_race_item


logger = logging.getLogger(__name__)

# Review aggregates, moderation state and creation metadata belong to the
# catalog, not the source, so a refresh leaves them alone.
PRESERVED_ON_UPDATE = {
    "raceId",
    "avgCourseRating",
    "avgCostRating",
    "avgVolunteersRating",
    "avgSpectatorRating",
    "averageRating",
    "totalReviewsCount",
    "status",
    "createdBy",
    "createdAt",
}


def _sync_record(
    store: CatalogStore,
    raw: RawRaceRecord,
    source_name: str,
    now: datetime,
    stale_after_days: Optional[int],
    result: SyncResult,
) -> None:
    race = to_race_item(raw, source_name, now)
    existing = store.get(COLLECTIONS["races"], race.race_id)

    if existing is None:
        store.put(COLLECTIONS["races"], race.race_id, race.to_document())
        result.races_added += 1
        logger.info(f"Added: {raw.name}")
        return

    last_scraped = RaceItem.model_validate(existing).last_scraped
    if not should_update(last_scraped, now, stale_after_days):
        result.races_skipped += 1
        logger.info(f"Skipped: {raw.name} (recently updated)")
        return

    changes = {
        key: value
        for key, value in race.to_document().items()
        if key not in PRESERVED_ON_UPDATE
    }
    store.update(COLLECTIONS["races"], race.race_id, changes)
    result.races_updated += 1
    logger.info(f"Updated: {raw.name}")


def sync_source(
    store: CatalogStore,
    source: RaceSource,
    clock: Callable[[], datetime] = datetime.now,
    stale_after_days: Optional[int] = None,
) -> SyncResult:
    """
    Sync one source. Record-level failures are collected in the result
    and do not stop the rest of the batch.
    """
    result = SyncResult(source=source.name, timestamp=clock())

    try:
        records = source.fetch_raw()
    except Exception as e:
        logger.error(f"Failed to fetch races from {source.name}: {e}")
        result.errors.append(SyncError(message=f"Failed to fetch races: {e}"))
        return result

    logger.info(f"Found {len(records)} races from {source.name}")

    for raw in records:
        try:
            _sync_record(store, raw, source.name, clock(), stale_after_days, result)
        except (StoreError, ValidationError) as e:
            logger.error(f"Error processing {raw.name}: {e}")
            result.errors.append(SyncError(race_id=raw.external_id, message=str(e)))

    return result


def sync_races(
    store: CatalogStore,
    sources: Iterable[RaceSource],
    clock: Callable[[], datetime] = datetime.now,
    stale_after_days: Optional[int] = None,
) -> list[SyncResult]:
    """
    Sync every source in turn.

    Returns:
        One SyncResult per source, in the order given
    """
    results = [sync_source(store, source, clock, stale_after_days) for source in sources]

    for result in results:
        logger.info(
            f"Source {result.source}: added={result.races_added} "
            f"updated={result.races_updated} skipped={result.races_skipped} "
            f"errors={len(result.errors)}"
        )

    return results
