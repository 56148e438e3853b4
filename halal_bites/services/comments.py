from typing import Any, Dict, List
import logging

from halal_bites.core.exceptions import CommentNotFound, RestaurantNotFound
from halal_bites.repositories.comment import CommentRepository
from halal_bites.repositories.restaurant import RestaurantRepository
from halal_bites.services.listing import ListingService
from schemas.comment import Comment, CommentCreate

logger = logging.getLogger(__name__)


def _public(row: Dict[str, Any]) -> Dict[str, Any]:
    return Comment.model_validate(row).model_dump(by_alias=True, mode="json")


class CommentService:
    def __init__(
        self,
        repo: CommentRepository,
        restaurants: RestaurantRepository,
        listing: ListingService,
    ):
        self.repo = repo
        self.restaurants = restaurants
        self.listing = listing

    def list_for_restaurant(self, restaurant_id: str) -> List[Dict[str, Any]]:
        return [_public(row) for row in self.repo.list_for_restaurant(restaurant_id)]

    def create(self, payload: CommentCreate) -> Dict[str, Any]:
        if self.restaurants.get(payload.restaurant_id) is None:
            raise RestaurantNotFound(payload.restaurant_id)

        row = self.repo.create(payload.model_dump())
        # commentCount is part of the cached listing
        self.listing.invalidate()
        return _public(row)

    def delete(self, comment_id: str) -> None:
        if self.repo.delete(comment_id) is None:
            raise CommentNotFound(comment_id)
        self.listing.invalidate()
        logger.info("Deleted comment %s", comment_id)
