from fastapi import APIRouter, Depends, HTTPException, Query, Request
from typing import Optional

from halal_bites.core.admin_auth import require_admin
from halal_bites.core.config import get_settings
from halal_bites.core.dependencies import get_comment_service
from halal_bites.core.exceptions import CommentNotFound, RestaurantNotFound
from halal_bites.core.rate_limit import limiter
from halal_bites.services.comments import CommentService
from schemas.comment import CommentCreate

settings = get_settings()

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("")
async def list_comments(
    restaurant_id: Optional[str] = Query(None, alias="restaurantId"),
    service: CommentService = Depends(get_comment_service),
):
    if not restaurant_id:
        raise HTTPException(status_code=400, detail="Restaurant ID is required")
    return service.list_for_restaurant(restaurant_id)


@router.post("", status_code=201)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def add_comment(
    request: Request,
    payload: CommentCreate,
    service: CommentService = Depends(get_comment_service),
):
    try:
        return service.create(payload)
    except RestaurantNotFound:
        raise HTTPException(status_code=404, detail="Restaurant not found")


@router.delete("")
async def delete_comment(
    comment_id: Optional[str] = Query(None, alias="id"),
    admin: str = Depends(require_admin),
    service: CommentService = Depends(get_comment_service),
):
    if not comment_id:
        raise HTTPException(status_code=400, detail="Comment ID is required")
    try:
        service.delete(comment_id)
    except CommentNotFound:
        raise HTTPException(status_code=404, detail="Comment not found")
    return {"success": True}
