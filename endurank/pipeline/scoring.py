"""
Endurank scoring engine - personalized 0-10 score per catalog item.

Endurank = W_R * R + W_P * (1 - C) * R - W_C * C * P_norm, scaled to 0-10

    R       weighted average rating (0-5)
    C       user cost sensitivity (0-1)
    P_norm  price divided by the category max price (0-1)
"""
import logging
import math
from typing import Iterable, Literal, Optional, Sequence, Union

import numpy as np

from ..config import get_config
from ..models.catalog import GearItem, RaceItem
from ..models.scoring import (
    CostSensitivity,
    PriceTier,
    RatedReview,
    ScoredItem,
    ScoreInput,
    ScoreTier,
    SortOption,
)


logger = logging.getLogger(__name__)

RATING_WEIGHT = 0.6
VALUE_WEIGHT = 0.3
COST_WEIGHT = 0.1

MAX_RATING = 5.0

COST_SENSITIVITY_FACTORS: dict[str, float] = {
    "economy": 1.0,
    "mid-range": 0.5,
    "performance": 0.0,
}

TIER_WEIGHTS: dict[str, float] = {
    "beginner": 0.75,
    "contributor": 1.0,
    "expert": 1.25,
}

# Upper bounds (exclusive) for budget and mid tiers
PRICE_TIER_BOUNDS: dict[str, tuple[float, float]] = {
    "gear": (100.0, 1000.0),
    "race": (150.0, 500.0),
}

PRICE_TIER_DISPLAY: dict[str, str] = {
    "budget": "$",
    "mid": "$$",
    "premium": "$$$",
}

CatalogEntry = Union[GearItem, RaceItem]


def cost_sensitivity_factor(tier: CostSensitivity) -> float:
    """Map a user's cost-sensitivity preference to a 0-1 factor."""
    return COST_SENSITIVITY_FACTORS[tier]


def cost_sensitivity_for(tier: Optional[CostSensitivity]) -> float:
    """Factor for a possibly unknown user (anonymous visitors get the configured default)."""
    if tier is None:
        return get_config().scoring.default_cost_sensitivity
    return cost_sensitivity_factor(tier)


def normalized_price(price: float, category_max_price: float) -> float:
    """Price relative to the most expensive item in its category, capped at 1."""
    if category_max_price == 0:
        return 0.0
    return min(price / category_max_price, 1.0)


def category_max_price(items: Iterable[CatalogEntry]) -> float:
    """Highest MSRP among the items, 1.0 for an empty category."""
    prices = [item.msrp for item in items]
    if not prices:
        return 1.0
    return float(np.max(prices))


def weighted_rating(ratings: Sequence[tuple[float, float]]) -> float:
    """
    Average of (rating, tier_weight) pairs weighted by reviewer tier.
    Returns 0 when there is nothing to average.
    """
    if not ratings:
        return 0.0

    values = np.array([r for r, _ in ratings], dtype=float)
    weights = np.array([w for _, w in ratings], dtype=float)
    if weights.sum() <= 0:
        return 0.0
    return float(np.average(values, weights=weights))


def weighted_rating_from_reviews(reviews: Sequence[RatedReview]) -> float:
    """Weighted rating using the reviewer tier cached on each review."""
    return weighted_rating([(r.rating, TIER_WEIGHTS[r.user_tier]) for r in reviews])


def price_tier(price: float, kind: Literal["gear", "race"]) -> PriceTier:
    """Bucket a price into budget / mid / premium for its catalog kind."""
    budget_below, mid_below = PRICE_TIER_BOUNDS[kind]
    if price < budget_below:
        return "budget"
    if price < mid_below:
        return "mid"
    return "premium"


def price_tier_display(tier: PriceTier) -> str:
    return PRICE_TIER_DISPLAY[tier]


def score_tier(score: float) -> ScoreTier:
    """Display band for an Endurank score."""
    if score >= 8.5:
        return "excellent"
    if score >= 7.0:
        return "great"
    if score >= 5.5:
        return "good"
    return "fair"


def _round_half_up(value: float, digits: int = 1) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


class ScoringEngine:
    """
    Deterministic Endurank scoring.
    Scores are 0-10 with one decimal, higher is better.
    """

    def __init__(
        self,
        rating_weight: float = RATING_WEIGHT,
        value_weight: float = VALUE_WEIGHT,
        cost_weight: float = COST_WEIGHT,
    ):
        self.rating_weight = rating_weight
        self.value_weight = value_weight
        self.cost_weight = cost_weight

    @classmethod
    def from_config(cls) -> "ScoringEngine":
        scoring = get_config().scoring
        return cls(
            rating_weight=scoring.rating_weight,
            value_weight=scoring.value_weight,
            cost_weight=scoring.cost_weight,
        )

    @property
    def max_raw_score(self) -> float:
        """Raw score of a 5-star item for a price-indifferent user."""
        return self.rating_weight * MAX_RATING + self.value_weight * MAX_RATING

    def score(self, score_input: ScoreInput) -> float:
        """
        Calculate the Endurank for one item.

        The raw blend is scaled so that a 5-star item scores exactly 10.0
        for a user with zero cost sensitivity; a 0-star item never scores
        above 0.
        """
        rating = score_input.average_rating
        sensitivity = score_input.cost_sensitivity

        rating_term = self.rating_weight * rating
        value_term = self.value_weight * (1 - sensitivity) * rating
        cost_penalty = self.cost_weight * sensitivity * score_input.normalized_price

        raw = rating_term + value_term - cost_penalty
        return _round_half_up(raw / self.max_raw_score * 10)

    def score_items(
        self,
        items: Sequence[CatalogEntry],
        cost_sensitivity: float,
        category_max: Optional[float] = None,
    ) -> list[ScoredItem]:
        """
        Score every item of one comparison category.

        Args:
            items: Gear or races shown together on a listing page
            cost_sensitivity: The viewing user's factor (0-1)
            category_max: Max price of the category, derived from items if None

        Returns:
            ScoredItem rows in input order
        """
        max_price = category_max if category_max is not None else category_max_price(items)
        scored = []

        for item in items:
            p_norm = normalized_price(item.msrp, max_price)
            endurank = self.score(ScoreInput(
                average_rating=item.average_rating,
                cost_sensitivity=cost_sensitivity,
                normalized_price=p_norm,
            ))
            scored.append(ScoredItem(
                item=item,
                endurank=endurank,
                normalized_price=p_norm,
                price_tier=price_tier(item.msrp, item.kind),
            ))

        logger.debug(f"Scored {len(scored)} items (category max {max_price})")
        return scored

    def sort_items(
        self,
        scored: list[ScoredItem],
        sort_by: SortOption = "endurank-desc",
    ) -> list[ScoredItem]:
        """Order scored items for display; equal keys keep their input order."""
        if sort_by == "endurank-desc":
            return sorted(scored, key=lambda s: s.endurank, reverse=True)
        elif sort_by == "endurank-asc":
            return sorted(scored, key=lambda s: s.endurank)
        elif sort_by == "rating-desc":
            return sorted(scored, key=lambda s: s.item.average_rating, reverse=True)
        elif sort_by == "price-asc":
            return sorted(scored, key=lambda s: s.item.msrp)
        elif sort_by == "price-desc":
            return sorted(scored, key=lambda s: s.item.msrp, reverse=True)
        raise ValueError(f"Unknown sort option: {sort_by}")

    def filter_by_price_tier(
        self,
        scored: list[ScoredItem],
        tier: Union[PriceTier, Literal["all"]] = "all",
    ) -> list[ScoredItem]:
        if tier == "all":
            return list(scored)
        return [s for s in scored if s.price_tier == tier]
