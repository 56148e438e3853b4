from typing import Any, Dict, List
import logging

from halal_bites.core.exceptions import (
    DuplicateRestaurant,
    InvalidRestaurant,
    RestaurantNotFound,
)
from halal_bites.repositories.restaurant import RestaurantRepository
from halal_bites.services.geocoding import Geocoder
from halal_bites.services.listing import ListingService, to_public
from schemas.restaurant import RestaurantCreate, RestaurantUpdate, check_halal_details

logger = logging.getLogger(__name__)


class RestaurantService:
    """Restaurant writes. Every successful mutation clears the listing cache."""

    def __init__(
        self,
        repo: RestaurantRepository,
        geocoder: Geocoder,
        listing: ListingService,
    ):
        self.repo = repo
        self.geocoder = geocoder
        self.listing = listing

    def list_for_admin(self) -> List[Dict[str, Any]]:
        return [to_public(row) for row in self.repo.list_with_comment_counts()]

    def create(self, payload: RestaurantCreate) -> Dict[str, Any]:
        existing = self.repo.find_by_name_or_address(payload.name, payload.address)
        if existing:
            raise DuplicateRestaurant("name" if existing["name"] == payload.name else "address")

        data = payload.model_dump()
        data["latitude"], data["longitude"] = self.geocoder.geocode(payload.address)
        if data["latitude"] is None:
            logger.warning("Creating restaurant %r without coordinates", payload.name)

        row = self.repo.create(data)
        self.listing.invalidate()
        logger.info("Created restaurant %s (%s)", row["id"], payload.name)
        return to_public(row)

    def update(self, restaurant_id: str, payload: RestaurantUpdate) -> Dict[str, Any]:
        data = payload.model_dump(exclude_unset=True)

        existing = self.repo.get(restaurant_id)
        if existing is None:
            raise RestaurantNotFound(restaurant_id)

        if "name" in data or "address" in data:
            clash = self.repo.find_by_name_or_address(
                data.get("name"), data.get("address"), exclude_id=restaurant_id
            )
            if clash:
                raise DuplicateRestaurant("name" if clash["name"] == data.get("name") else "address")

        try:
            check_halal_details({**existing, **data})
        except ValueError as exc:
            raise InvalidRestaurant(str(exc)) from None

        address = data.get("address")
        if address and address.strip():
            data["latitude"], data["longitude"] = self.geocoder.geocode(address)

        row = self.repo.update(restaurant_id, data)
        if row is None:
            raise RestaurantNotFound(restaurant_id)

        self.listing.invalidate()
        logger.info("Updated restaurant %s fields=%s", restaurant_id, sorted(data))
        return to_public(row)

    def delete(self, restaurant_id: str) -> None:
        if not self.repo.delete(restaurant_id):
            raise RestaurantNotFound(restaurant_id)
        self.listing.invalidate()
        logger.info("Deleted restaurant %s", restaurant_id)
