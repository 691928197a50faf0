"""
FastAPI application setup.

Wires the location feed, the place search and directions adapters and the
refresh controller into the application state.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import logging
import time
import uuid
from datetime import datetime, timezone
from contextlib import asynccontextmanager
from typing import Optional

from coffee_finder.config.settings import Settings, get_settings
from coffee_finder.core.error_handlers import error_handler, setup_error_handlers
from coffee_finder.services.base import DirectionsService, PlaceSearchService
from coffee_finder.services.location_feed import LocationFeed
from coffee_finder.services.nominatim_search import NominatimPlaceSearch
from coffee_finder.services.osrm_directions import OSRMDirections
from coffee_finder.services.refresh_controller import RefreshController

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure logging based on settings, replacing any earlier root configuration"""
    log_config = {
        "level": getattr(logging, settings.log_level.value),
        "format": settings.log_format,
        "force": True,
    }

    if settings.log_file:
        log_config["filename"] = settings.log_file

    logging.basicConfig(**log_config)


def create_app(
    settings: Optional[Settings] = None,
    search_service: Optional[PlaceSearchService] = None,
    directions_service: Optional[DirectionsService] = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Application settings (defaults to the global settings)
        search_service: Place search implementation (defaults to Nominatim)
        directions_service: Directions implementation (defaults to OSRM)

    Returns:
        FastAPI: Configured application instance
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.app_name} v{settings.app_version}")

        search = search_service or NominatimPlaceSearch(settings.nominatim)
        directions = directions_service or OSRMDirections(settings.osrm)
        feed = LocationFeed()
        controller = RefreshController(search, directions, settings.refresh)
        controller.attach(feed)

        app.state.location_feed = feed
        app.state.controller = controller
        logger.info(
            f"Refresh workflow ready: query='{settings.refresh.search_query}' "
            f"radius={settings.refresh.search_radius_m:.0f}m "
            f"debounce={settings.refresh.debounce_delay_seconds}s "
            f"policy={settings.refresh.location_policy.value}"
        )

        try:
            yield
        finally:
            logger.info("Shutting down application")
            feed.stop()
            await controller.close()
            await search.aclose()
            await directions.aclose()
            logger.info("Application shutdown complete")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        **settings.get_cors_config()
    )

    setup_error_handlers(app)

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log requests and responses with timing information."""
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()

        logger.info(
            f"Request {request_id} started: {request.method} {request.url.path}",
            extra={
                'request_id': request_id,
                'method': request.method,
                'path': request.url.path,
                'client_ip': request.client.host if request.client else 'unknown'
            }
        )

        response = await call_next(request)

        processing_time = (time.time() - start_time) * 1000

        logger.info(
            f"Request {request_id} completed: {response.status_code} ({processing_time:.2f}ms)",
            extra={
                'request_id': request_id,
                'status_code': response.status_code,
                'processing_time_ms': processing_time
            }
        )

        return response

    from coffee_finder.api.map_endpoints import router as map_router
    app.include_router(map_router)

    @app.get("/")
    async def root():
        """Root endpoint for basic health check."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "status": "running"
        }

    @app.get("/health")
    async def health_check(request: Request):
        """Health check with workflow status and error statistics."""
        controller: Optional[RefreshController] = getattr(request.app.state, "controller", None)
        if controller is None:
            return {
                "status": "unhealthy",
                "message": "Refresh controller not initialized",
                "version": settings.app_version,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }

        state = controller.state
        return {
            "status": "healthy",
            "version": settings.app_version,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "details": {
                "has_location": state.location is not None,
                "places": len(state.places),
                "has_route": state.route is not None,
                "refresh_pending": state.refresh_pending,
                "searches_issued": controller.search_sequence,
                "directions_issued": controller.route_sequence,
            },
            "error_statistics": error_handler.get_error_statistics(),
        }

    return app


configure_logging(get_settings())

# Create application instance
app = create_app()
