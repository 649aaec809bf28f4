"""API v1 router aggregation."""

from fastapi import APIRouter

from app.api.v1.endpoints import fasting, food, goals, health, user

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(fasting.router, prefix="/fasting", tags=["fasting"])
api_router.include_router(user.router, prefix="/user", tags=["user"])
api_router.include_router(food.router, prefix="/food", tags=["food"])
api_router.include_router(goals.router, prefix="/goals", tags=["goals"])
