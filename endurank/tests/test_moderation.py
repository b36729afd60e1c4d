"""
Tests for moderation transitions and reviewer tiers.
"""
from datetime import datetime

import pytest

from endurank.exceptions import InvalidStatusTransition
from endurank.models.catalog import GearItem
from endurank.pipeline.moderation import (
    approve,
    can_transition,
    reject,
    transition,
    user_tier,
)


MODERATED_AT = datetime(2026, 10, 18, 9, 30)


@pytest.fixture
def pending_gear() -> GearItem:
    return GearItem(
        product_id="g1",
        product_name="Clifton 9",
        brand="Hoka",
        sub_category="running-shoes",
        msrp=145,
        created_by="user-1",
    )


class TestTransitions:
    """Tests for moving items between statuses."""

    def test_approve(self, pending_gear):
        """Test that approval returns an updated copy."""
        live = approve(pending_gear, clock=lambda: MODERATED_AT)

        assert live.status == "live"
        assert live.updated_at == MODERATED_AT
        assert live.product_name == pending_gear.product_name
        assert pending_gear.status == "pending"

    def test_reject(self, pending_gear):
        assert reject(pending_gear).status == "rejected"

    def test_terminal_statuses(self, pending_gear):
        """Test that live and rejected items cannot move again."""
        live = approve(pending_gear)
        rejected = reject(pending_gear)

        with pytest.raises(InvalidStatusTransition):
            reject(live)
        with pytest.raises(InvalidStatusTransition):
            approve(rejected)

    def test_back_to_pending_not_allowed(self, pending_gear):
        with pytest.raises(InvalidStatusTransition) as exc_info:
            transition(pending_gear, "pending")

        assert exc_info.value.current == "pending"
        assert exc_info.value.requested == "pending"

    def test_can_transition(self):
        assert can_transition("pending", "live")
        assert can_transition("pending", "rejected")
        assert not can_transition("live", "rejected")


class TestUserTier:
    """Tests for reviewer tiers by review count."""

    @pytest.mark.parametrize("count,tier", [
        (0, "beginner"),
        (3, "beginner"),
        (4, "contributor"),
        (10, "contributor"),
        (11, "expert"),
        (250, "expert"),
    ])
    def test_thresholds(self, count, tier):
        assert user_tier(count) == tier
