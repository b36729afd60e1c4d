"""
Moderation workflow for submitted catalog items, and reviewer tiers.

Items start as ``pending`` and a moderator moves them once, to ``live``
or ``rejected``. Both are terminal.
"""
import logging
from datetime import datetime
from typing import Callable, Optional, TypeVar, Union

from ..exceptions import InvalidStatusTransition
from ..models.catalog import GearItem, ItemStatus, RaceItem
from ..models.scoring import UserTier


logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    "pending": frozenset({"live", "rejected"}),
    "live": frozenset(),
    "rejected": frozenset(),
}

# Minimum review count for each tier, highest first
TIER_THRESHOLDS: tuple[tuple[UserTier, int], ...] = (
    ("expert", 11),
    ("contributor", 4),
    ("beginner", 0),
)

Item = TypeVar("Item", bound=Union[GearItem, RaceItem])


def can_transition(current: ItemStatus, requested: ItemStatus) -> bool:
    return requested in ALLOWED_TRANSITIONS[current]


def transition(
    item: Item,
    new_status: ItemStatus,
    clock: Optional[Callable[[], datetime]] = None,
) -> Item:
    """
    Return a copy of the item with its new moderation status.

    Raises:
        InvalidStatusTransition: the item already left ``pending``, or
            the target is ``pending``
    """
    if not can_transition(item.status, new_status):
        raise InvalidStatusTransition(item.status, new_status)

    now = (clock or datetime.now)()
    logger.info(f"Moving {item.kind} '{item.item_id}' from {item.status} to {new_status}")
    return item.model_copy(update={"status": new_status, "updated_at": now})


def approve(item: Item, clock: Optional[Callable[[], datetime]] = None) -> Item:
    return transition(item, "live", clock)


def reject(item: Item, clock: Optional[Callable[[], datetime]] = None) -> Item:
    return transition(item, "rejected", clock)


def user_tier(review_count: int) -> UserTier:
    """Reviewer tier earned by number of reviews written."""
    for tier, minimum in TIER_THRESHOLDS:
        if review_count >= minimum:
            return tier
    return "beginner"
