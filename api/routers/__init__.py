"""API routers."""

from api.routers.trends import router as trends_router
from api.routers.ttm import router as ttm_router

__all__ = [
    "trends_router",
    "ttm_router",
]
