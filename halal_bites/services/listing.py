"""
Restaurant listing resolver.

Non-proximity listings are served read-through from Redis for
`RESTAURANTS_CACHE_TTL` seconds. Proximity listings (lat + lng) are
always computed from the database, annotated with `distance` in km
and sorted nearest first.
"""

from dataclasses import dataclass
from math import isfinite
from typing import Any, Dict, List, Optional
import logging

from halal_bites.core.exceptions import InvalidListingQuery
from halal_bites.repositories.restaurant import RestaurantRepository
from halal_bites.services.cache import CacheService
from halal_bites.services.geo import annotate_by_distance
from schemas.restaurant import Restaurant

logger = logging.getLogger(__name__)

RESTAURANTS_CACHE_KEY = "restaurants:all"
FEATURED_SUFFIX = ":featured"

# Every key a non-proximity listing can be cached under.
LISTING_CACHE_KEYS = (RESTAURANTS_CACHE_KEY, RESTAURANTS_CACHE_KEY + FEATURED_SUFFIX)

DEFAULT_TTL = 300  # seconds


@dataclass(frozen=True)
class ListingQuery:
    lat: Optional[float] = None
    lng: Optional[float] = None
    radius: Optional[float] = None
    featured: bool = False

    @property
    def proximity(self) -> bool:
        return self.lat is not None and self.lng is not None


def _parse_number(name: str, raw: Optional[str]) -> Optional[float]:
    if raw is None or raw.strip() == "":
        return None
    try:
        value = float(raw)
    except ValueError:
        raise InvalidListingQuery(f"{name} must be a number") from None
    if not isfinite(value):
        raise InvalidListingQuery(f"{name} must be a finite number")
    return value


def parse_listing_query(
    lat: Optional[str] = None,
    lng: Optional[str] = None,
    radius: Optional[str] = None,
    featured: Optional[str] = None,
) -> ListingQuery:
    """
    Validate raw query-string values.

    Coordinates must come as a pair and `radius` needs coordinates.
    Only the literal "true" turns on the featured filter.
    """
    lat_value = _parse_number("lat", lat)
    lng_value = _parse_number("lng", lng)
    radius_value = _parse_number("radius", radius)

    if (lat_value is None) != (lng_value is None):
        raise InvalidListingQuery("lat and lng must be provided together")
    if lat_value is not None and not -90 <= lat_value <= 90:
        raise InvalidListingQuery("lat must be between -90 and 90")
    if lng_value is not None and not -180 <= lng_value <= 180:
        raise InvalidListingQuery("lng must be between -180 and 180")
    if radius_value is not None:
        if lat_value is None:
            raise InvalidListingQuery("radius requires lat and lng")
        if radius_value < 0:
            raise InvalidListingQuery("radius must not be negative")

    return ListingQuery(
        lat=lat_value,
        lng=lng_value,
        radius=radius_value,
        featured=featured == "true",
    )


def listing_cache_key(query: ListingQuery) -> str:
    key = RESTAURANTS_CACHE_KEY
    if query.featured:
        key += FEATURED_SUFFIX
    if query.proximity:
        key += f":lat={query.lat}:lng={query.lng}"
    if query.radius is not None:
        key += f":radius={query.radius}"
    return key


def to_public(row: Dict[str, Any]) -> Dict[str, Any]:
    return Restaurant.model_validate(row).model_dump(by_alias=True, mode="json")


class ListingService:
    def __init__(
        self,
        repo: RestaurantRepository,
        cache: CacheService,
        ttl: int = DEFAULT_TTL,
    ):
        self.repo = repo
        self.cache = cache
        self.ttl = ttl

    def resolve(self, query: ListingQuery) -> List[Dict[str, Any]]:
        """
        Raises StoreUnavailable / CacheUnavailable; the router decides
        how to render those.
        """
        key = listing_cache_key(query)

        if not query.proximity:
            cached = self.cache.get(key)
            if cached is not None:
                return cached

        rows = self.repo.list_with_comment_counts(featured=query.featured)
        restaurants = [to_public(row) for row in rows]

        if query.proximity:
            return annotate_by_distance(restaurants, query.lat, query.lng, query.radius)

        if not self.cache.set(key, restaurants, self.ttl):
            logger.warning("Serving uncached listing for %s", key)
        return restaurants

    def invalidate(self) -> None:
        self.cache.delete(*LISTING_CACHE_KEYS)
