from datetime import datetime, timezone
from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

PriceRange = Literal["LOW", "MEDIUM", "HIGH"]

DEFAULT_IMAGE_URL = "https://placehold.co/800x600/orange/white?text=Restaurant+Image"
MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500

ZABIHA_MEATS = ("zabiha_chicken", "zabiha_lamb", "zabiha_beef", "zabiha_goat")
PARTIALLY_HALAL_MEATS = (
    "partially_halal_chicken",
    "partially_halal_lamb",
    "partially_halal_beef",
    "partially_halal_goat",
)

# NOT NULL columns; an update may omit them but never clear them.
NOT_NULL_FIELDS = (
    "name",
    "cuisine_type",
    "address",
    "price_range",
    "has_prayer_room",
    "has_outdoor_seating",
    "has_high_chair",
    "serves_alcohol",
    "is_fully_halal",
    "is_zabiha",
    "is_partially_halal",
    *PARTIALLY_HALAL_MEATS,
    *ZABIHA_MEATS,
    "is_featured",
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Restaurant(CamelModel):
    """
    Public listing shape.

    Only these fields leave the API; any other column on the row is dropped.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: str
    name: str
    cuisine_type: str
    address: str
    description: Optional[str] = None
    price_range: str
    has_prayer_room: bool = False
    has_outdoor_seating: bool = False
    has_high_chair: bool = False
    serves_alcohol: bool = False
    is_fully_halal: bool = False
    is_zabiha: bool = False
    is_partially_halal: bool = False
    partially_halal_chicken: bool = False
    partially_halal_lamb: bool = False
    partially_halal_beef: bool = False
    partially_halal_goat: bool = False
    image_url: Optional[str] = None
    zabiha_chicken: bool = False
    zabiha_lamb: bool = False
    zabiha_beef: bool = False
    zabiha_goat: bool = False
    zabiha_verified: Optional[datetime] = None
    zabiha_verified_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    brand_id: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    is_featured: bool = False
    comment_count: int = 0


def check_halal_details(data: Mapping[str, Any]) -> None:
    """
    Certification rules for a complete restaurant record.

    Takes a mapping so the admin update path can check the stored row with
    the patch applied.
    """
    if data.get("is_zabiha"):
        verified = data.get("zabiha_verified")
        if not verified:
            raise ValueError("Verification Date is required for Zabihah Certified restaurants")
        if verified.tzinfo is None:
            verified = verified.replace(tzinfo=timezone.utc)
        if verified > datetime.now(timezone.utc):
            raise ValueError("Verification Date cannot be in the future")
        if not (data.get("zabiha_verified_by") or "").strip():
            raise ValueError("Verified By is required for Zabihah Certified restaurants")
        if not any(data.get(meat) for meat in ZABIHA_MEATS):
            raise ValueError("Please select at least one Zabihah meat type")

    if data.get("is_partially_halal"):
        if not any(data.get(meat) for meat in PARTIALLY_HALAL_MEATS):
            raise ValueError("Please select at least one Partially Halal meat type")


class RestaurantWrite(CamelModel):
    description: Optional[str] = Field(None, max_length=MAX_DESCRIPTION_LENGTH)
    has_prayer_room: Optional[bool] = None
    has_outdoor_seating: Optional[bool] = None
    has_high_chair: Optional[bool] = None
    serves_alcohol: Optional[bool] = None
    is_fully_halal: Optional[bool] = None
    is_zabiha: Optional[bool] = None
    is_partially_halal: Optional[bool] = None
    partially_halal_chicken: Optional[bool] = None
    partially_halal_lamb: Optional[bool] = None
    partially_halal_beef: Optional[bool] = None
    partially_halal_goat: Optional[bool] = None
    zabiha_chicken: Optional[bool] = None
    zabiha_lamb: Optional[bool] = None
    zabiha_beef: Optional[bool] = None
    zabiha_goat: Optional[bool] = None
    zabiha_verified: Optional[datetime] = None
    zabiha_verified_by: Optional[str] = None
    image_url: Optional[str] = None
    brand_id: Optional[str] = None


class RestaurantCreate(RestaurantWrite):
    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    cuisine_type: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    price_range: PriceRange = "MEDIUM"
    description: str = Field("", max_length=MAX_DESCRIPTION_LENGTH)
    image_url: str = DEFAULT_IMAGE_URL
    has_prayer_room: bool = False
    has_outdoor_seating: bool = False
    has_high_chair: bool = False
    serves_alcohol: bool = False
    is_fully_halal: bool = False
    is_zabiha: bool = False
    is_partially_halal: bool = False
    partially_halal_chicken: bool = False
    partially_halal_lamb: bool = False
    partially_halal_beef: bool = False
    partially_halal_goat: bool = False
    zabiha_chicken: bool = False
    zabiha_lamb: bool = False
    zabiha_beef: bool = False
    zabiha_goat: bool = False

    @model_validator(mode="after")
    def _validate(self):
        if not self.name.strip():
            raise ValueError("Restaurant name is required")
        if not self.address.strip():
            raise ValueError("Address is required")
        check_halal_details(self.model_dump())
        return self


class RestaurantUpdate(RestaurantWrite):
    """Partial update; only fields present in the request body are written."""

    name: Optional[str] = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)
    cuisine_type: Optional[str] = None
    address: Optional[str] = None
    price_range: Optional[PriceRange] = None
    is_featured: Optional[bool] = None

    @field_validator(*NOT_NULL_FIELDS, mode="before")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value
