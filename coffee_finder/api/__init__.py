"""HTTP routers."""

from .map_endpoints import router as map_router

__all__ = ["map_router"]
