from fastapi import APIRouter, Depends, HTTPException, Query, Request
from typing import Optional
import logging

from halal_bites.core.config import get_settings
from halal_bites.core.dependencies import get_listing_service, get_restaurant_service
from halal_bites.core.exceptions import (
    DuplicateRestaurant,
    InvalidListingQuery,
    ServiceUnavailable,
)
from halal_bites.core.rate_limit import limiter
from halal_bites.services.listing import ListingService, parse_listing_query
from halal_bites.services.restaurants import RestaurantService
from halal_bites.utils.sentry import report_failure
from schemas.restaurant import RestaurantCreate

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix="/restaurants", tags=["restaurants"])


# ============================================================
# LISTING (READ-THROUGH CACHE + PROXIMITY)
# ============================================================

@router.get("")
@limiter.limit(settings.LISTING_RATE_LIMIT)
async def list_restaurants(
    request: Request,
    lat: Optional[str] = Query(None),
    lng: Optional[str] = Query(None),
    radius: Optional[str] = Query(None, description="Kilometers; requires lat and lng"),
    featured: Optional[str] = Query(None, description='"true" to list featured restaurants only'),
    service: ListingService = Depends(get_listing_service),
):
    """
    Restaurant listing.

    With lat/lng the result carries `distance` (km) and is sorted nearest
    first. Backend failures render as an empty list so the UI keeps working.
    """
    try:
        query = parse_listing_query(lat=lat, lng=lng, radius=radius, featured=featured)
    except InvalidListingQuery as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    try:
        return service.resolve(query)
    except ServiceUnavailable as exc:
        logger.error("Restaurant listing failed (%s): %s", exc.kind, exc)
        report_failure(exc, "listing_failure", exc.kind)
        return []


# ============================================================
# PUBLIC SUBMISSION
# ============================================================

@router.post("", status_code=201)
@limiter.limit(settings.WRITE_RATE_LIMIT)
def create_restaurant(
    request: Request,
    payload: RestaurantCreate,
    service: RestaurantService = Depends(get_restaurant_service),
):
    # plain def: geocoding must run off the event loop
    try:
        return service.create(payload)
    except DuplicateRestaurant as exc:
        raise HTTPException(status_code=409, detail=str(exc))
