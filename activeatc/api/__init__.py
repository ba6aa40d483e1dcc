"""API routers for the Active ATC service."""

from fastapi import APIRouter

from .health import router as health_router
from .pilots import router as pilots_router
from .refresh import router as refresh_router
from .stations import router as stations_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(stations_router)
api_router.include_router(pilots_router)
api_router.include_router(refresh_router)

__all__ = ["api_router"]
