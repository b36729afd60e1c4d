"""
Scoring models - Endurank inputs and scored listing rows.
"""
from typing import Literal, Union

from pydantic import BaseModel, Field

from .catalog import GearItem, RaceItem


CostSensitivity = Literal["economy", "mid-range", "performance"]
UserTier = Literal["beginner", "contributor", "expert"]
PriceTier = Literal["budget", "mid", "premium"]
ScoreTier = Literal["excellent", "great", "good", "fair"]
SortOption = Literal["endurank-desc", "endurank-asc", "rating-desc", "price-asc", "price-desc"]


class ScoreInput(BaseModel):
    """Inputs to one Endurank computation."""
    average_rating: float = Field(ge=0, le=5, description="Weighted 5-star rating")
    cost_sensitivity: float = Field(ge=0, le=1, description="0 = price-indifferent, 1 = price-averse")
    normalized_price: float = Field(ge=0, le=1, description="Price relative to category max")


class RatedReview(BaseModel):
    """The parts of a review that feed the weighted rating."""
    rating: float = Field(ge=1, le=5)
    user_tier: UserTier = "contributor"


class ScoredItem(BaseModel):
    """A catalog item with its personalized score, for listing pages."""
    item: Union[GearItem, RaceItem]
    endurank: float
    normalized_price: float
    price_tier: PriceTier
