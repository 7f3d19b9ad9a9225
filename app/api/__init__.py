# API endpoints and routers

from .search_endpoints import router as search_router
from .viewer_endpoints import router as viewer_router
from .health_endpoints import router as health_router

__all__ = [
    "search_router",
    "viewer_router",
    "health_router",
]
