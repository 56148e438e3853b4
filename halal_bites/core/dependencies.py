from functools import lru_cache

from fastapi import Depends

from halal_bites.core.config import Settings, get_settings
from halal_bites.repositories.comment import CommentRepository
from halal_bites.repositories.restaurant import RestaurantRepository
from halal_bites.services.cache import CacheService
from halal_bites.services.comments import CommentService
from halal_bites.services.geocoding import Geocoder
from halal_bites.services.listing import ListingService
from halal_bites.services.restaurants import RestaurantService
from halal_bites.utils.redis_client import redis_client


# ============================================================
# REPOSITORIES / CLIENTS
# ============================================================

@lru_cache()
def get_restaurant_repo() -> RestaurantRepository:
    return RestaurantRepository()


@lru_cache()
def get_comment_repo() -> CommentRepository:
    return CommentRepository()


@lru_cache()
def get_cache_service() -> CacheService:
    return CacheService(redis_client)


@lru_cache()
def get_geocoder() -> Geocoder:
    return Geocoder.from_settings(get_settings())


# ============================================================
# SERVICES
# ============================================================

def get_listing_service(
    repo: RestaurantRepository = Depends(get_restaurant_repo),
    cache: CacheService = Depends(get_cache_service),
    settings: Settings = Depends(get_settings),
) -> ListingService:
    return ListingService(repo=repo, cache=cache, ttl=settings.RESTAURANTS_CACHE_TTL)


def get_restaurant_service(
    repo: RestaurantRepository = Depends(get_restaurant_repo),
    geocoder: Geocoder = Depends(get_geocoder),
    listing: ListingService = Depends(get_listing_service),
) -> RestaurantService:
    return RestaurantService(repo=repo, geocoder=geocoder, listing=listing)


def get_comment_service(
    repo: CommentRepository = Depends(get_comment_repo),
    restaurants: RestaurantRepository = Depends(get_restaurant_repo),
    listing: ListingService = Depends(get_listing_service),
) -> CommentService:
    return CommentService(repo=repo, restaurants=restaurants, listing=listing)
