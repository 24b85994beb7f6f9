from fastapi import APIRouter

from blueprint_timeline.api.routes import health, timeline

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(timeline.router, prefix="/timeline", tags=["timeline"])
