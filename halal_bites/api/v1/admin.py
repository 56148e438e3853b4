"""
Admin session + dashboard endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from typing import Optional
import logging

from halal_bites.core.admin_auth import (
    clear_session_cookie,
    require_admin,
    set_session_cookie,
    verify_admin_password,
)
from halal_bites.core.config import Settings, get_settings
from halal_bites.core.dependencies import (
    get_comment_repo,
    get_restaurant_repo,
    get_restaurant_service,
)
from halal_bites.core.exceptions import (
    DuplicateRestaurant,
    InvalidRestaurant,
    RestaurantNotFound,
)
from halal_bites.core.rate_limit import limiter
from halal_bites.repositories.comment import CommentRepository
from halal_bites.repositories.restaurant import RestaurantRepository
from halal_bites.services.restaurants import RestaurantService
from schemas.admin import AdminLogin, AdminStats
from schemas.restaurant import RestaurantUpdate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["admin"])


# ============================================================
# SESSION
# ============================================================

@router.post("/admin-login")
@limiter.limit(get_settings().WRITE_RATE_LIMIT)
async def admin_login(
    request: Request,
    response: Response,
    payload: AdminLogin,
    settings: Settings = Depends(get_settings),
):
    if not payload.email or not payload.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    if not verify_admin_password(settings, payload.email, payload.password):
        ip = request.client.host if request.client else "unknown"
        logger.warning("Failed admin login for %s from %s", payload.email, ip)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    set_session_cookie(response, settings, payload.email)
    return {"success": True}


@router.post("/admin-logout")
async def admin_logout(response: Response, settings: Settings = Depends(get_settings)):
    clear_session_cookie(response, settings)
    return {"success": True}


# ============================================================
# RESTAURANTS
# ============================================================

@router.get("/admin/restaurants")
async def admin_list_restaurants(
    admin: str = Depends(require_admin),
    service: RestaurantService = Depends(get_restaurant_service),
):
    return service.list_for_admin()


@router.patch("/admin/restaurants")
def admin_update_restaurant(
    payload: RestaurantUpdate,
    restaurant_id: Optional[str] = Query(None, alias="id"),
    admin: str = Depends(require_admin),
    service: RestaurantService = Depends(get_restaurant_service),
):
    # plain def: geocoding must run off the event loop
    if not restaurant_id:
        raise HTTPException(status_code=400, detail="Restaurant ID is required")
    try:
        return service.update(restaurant_id, payload)
    except RestaurantNotFound:
        raise HTTPException(status_code=404, detail="Restaurant not found")
    except DuplicateRestaurant as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except InvalidRestaurant as exc:
        raise HTTPException(status_code=422, detail=str(exc))


@router.delete("/admin/restaurants")
async def admin_delete_restaurant(
    restaurant_id: Optional[str] = Query(None, alias="id"),
    admin: str = Depends(require_admin),
    service: RestaurantService = Depends(get_restaurant_service),
):
    if not restaurant_id:
        raise HTTPException(status_code=400, detail="Restaurant ID is required")
    try:
        service.delete(restaurant_id)
    except RestaurantNotFound:
        raise HTTPException(status_code=404, detail="Restaurant not found")
    logger.info("Restaurant %s deleted by %s", restaurant_id, admin)
    return {"success": True}


# ============================================================
# DASHBOARD
# ============================================================

@router.get("/admin/stats", response_model=AdminStats)
async def admin_stats(
    admin: str = Depends(require_admin),
    restaurants: RestaurantRepository = Depends(get_restaurant_repo),
    comments: CommentRepository = Depends(get_comment_repo),
):
    return AdminStats(
        totalRestaurants=restaurants.count(),
        totalComments=comments.count(),
    )
