"""
Catalog models - gear and race items as stored in the document store.

Store documents use camelCase keys; the models accept either spelling and
dump camelCase with ``by_alias=True``.
"""
from datetime import datetime, timezone
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


ItemStatus = Literal["pending", "live", "rejected"]
GearSubCategory = Literal["bikes", "running-shoes", "nutrition"]
RaceDistance = Literal["sprint", "olympic", "half", "full"]
RegistrationStatus = Literal["open", "closed", "waitlist", "sold-out"]
CatalogKind = Literal["gear", "race"]


def naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive UTC; naive values are left alone."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class CatalogModel(BaseModel):
    """Base for models persisted as camelCase documents."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> dict[str, Any]:
        """Serialize for the document store."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class GearItem(CatalogModel):
    """A piece of gear (bike, running shoe, nutrition product)."""
    kind: Literal["gear"] = "gear"
    product_id: str
    product_name: str
    brand: str
    sub_category: GearSubCategory
    msrp: float = Field(ge=0, description="Used for normalized price")
    mpn: Optional[str] = Field(default=None, description="Manufacturer part number / SKU")
    average_rating: float = Field(default=0.0, ge=0, le=5)
    total_reviews_count: int = Field(default=0, ge=0)
    specs: dict[str, Any] = Field(default_factory=dict)
    image_url: Optional[str] = None
    status: ItemStatus = "pending"
    created_by: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def item_id(self) -> str:
        return self.product_id

    @property
    def display_name(self) -> str:
        return self.product_name


class RaceLocation(CatalogModel):
    """Where a race takes place."""
    city: str
    state: str
    country: Optional[str] = None
    region: Optional[str] = None


class RaceItem(CatalogModel):
    """A triathlon race."""
    kind: Literal["race"] = "race"
    race_id: str
    race_name: str
    race_date: datetime
    location: RaceLocation
    distance: RaceDistance
    msrp: float = Field(ge=0, description="Registration cost")

    organizer_series: Optional[str] = None
    registration_url: Optional[str] = None
    race_website_url: Optional[str] = None
    registration_status: Optional[RegistrationStatus] = None
    max_capacity: Optional[int] = None

    is_qualifier: bool = False
    qualifier_for: Optional[str] = None

    # Race reviews carry four sub-ratings
    avg_course_rating: float = Field(default=0.0, ge=0, le=5)
    avg_cost_rating: float = Field(default=0.0, ge=0, le=5)
    avg_volunteers_rating: float = Field(default=0.0, ge=0, le=5)
    avg_spectator_rating: float = Field(default=0.0, ge=0, le=5)
    average_rating: float = Field(default=0.0, ge=0, le=5)
    total_reviews_count: int = Field(default=0, ge=0)

    image_url: Optional[str] = None
    status: ItemStatus = "pending"
    created_by: Optional[str] = None

    # Ingestion tracking
    data_source: Optional[str] = None
    external_id: Optional[str] = None
    last_scraped: Optional[datetime] = None

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    # Kept naive so dates compare with each other and with the ranker clock
    @field_validator("race_date", "last_scraped", "created_at", "updated_at")
    @classmethod
    def _naive_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return naive_utc(value)

    @property
    def item_id(self) -> str:
        return self.race_id

    @property
    def display_name(self) -> str:
        return self.race_name


CatalogItem = Annotated[Union[GearItem, RaceItem], Field(discriminator="kind")]


class GearSubmission(CatalogModel):
    """Fields an admin submits when adding gear."""
    kind: Literal["gear"] = "gear"
    brand: str
    product_name: str
    msrp: float = Field(ge=0)
    sub_category: GearSubCategory
    mpn: Optional[str] = None


class RaceSubmission(CatalogModel):
    """Fields an admin submits when adding a race."""
    kind: Literal["race"] = "race"
    race_name: str
    distance: RaceDistance
    city: str
    state: str


Submission = Annotated[Union[GearSubmission, RaceSubmission], Field(discriminator="kind")]
