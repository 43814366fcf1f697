from fastapi import APIRouter

from podmetrics.api.routes import health, refresh, settings

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(refresh.router)
api_router.include_router(settings.router)
