from fastapi import APIRouter, Depends, HTTPException, Request
import sentry_sdk

from halal_bites.core.dependencies import get_cache_service, get_restaurant_repo
from halal_bites.core.exceptions import StoreUnavailable
from halal_bites.core.rate_limit import limiter
from halal_bites.repositories.restaurant import RestaurantRepository
from halal_bites.services.cache import CacheService

router = APIRouter(tags=["health"])


@router.get("/health")
@limiter.limit("500/minute")
async def health(
    request: Request,
    repo: RestaurantRepository = Depends(get_restaurant_repo),
    cache: CacheService = Depends(get_cache_service),
):
    try:
        count = repo.count()
    except StoreUnavailable as e:
        sentry_sdk.capture_exception(e)
        raise HTTPException(503, f"Health check failed: {e}")

    return {
        "status": "healthy",
        "restaurants_count": count,
        "cache": "connected" if cache.ping() else "disconnected",
    }
