"""
Validation models - outcome of a duplicate check.
"""
from typing import Optional, Union

from pydantic import BaseModel, Field

from .catalog import GearItem, RaceItem


class ValidationResult(BaseModel):
    """
    Result of an exact or fuzzy duplicate check.

    ``is_valid=False`` only ever comes from an exact match and blocks
    creation. ``similar_items`` is advisory.
    """
    is_valid: bool
    error: Optional[str] = None
    duplicate_item: Optional[Union[GearItem, RaceItem]] = None
    similar_items: list[Union[GearItem, RaceItem]] = Field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return len(self.similar_items) > 0
