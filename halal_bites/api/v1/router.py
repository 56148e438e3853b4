from fastapi import APIRouter
from halal_bites.api.v1 import admin, comments, restaurants

api_router = APIRouter()
api_router.include_router(restaurants.router)
api_router.include_router(comments.router)
api_router.include_router(admin.router)
