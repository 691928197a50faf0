"""
OSRM directions adapter.

Talks to the OSRM /route service, converts internal (lat, lon) coordinates
to OSRM's lon,lat order and normalizes the response into Route objects.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from coffee_finder.config.settings import OSRMSettings, get_settings
from coffee_finder.core.exceptions import DirectionsFailedError
from coffee_finder.models.geo import Location, Route, RouteGeometry, TransportMode
from coffee_finder.services.base import DirectionsService

logger = logging.getLogger(__name__)

OSRM_PROFILES = {
    TransportMode.DRIVING: "driving",
    TransportMode.WALKING: "foot",
    TransportMode.CYCLING: "bike",
}


class OSRMDirections(DirectionsService):
    def __init__(
        self,
        config: Optional[OSRMSettings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config or get_settings().osrm
        self.base_url = self.config.base_url.rstrip("/")
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.config.timeout_seconds)
        return self._client

    @staticmethod
    def format_coordinates(points: List[Location]) -> str:
        """Convert locations to OSRM format 'lon,lat;lon,lat'"""
        return ";".join(f"{p.longitude},{p.latitude}" for p in points)

    async def route(
        self,
        source: Location,
        destination: Location,
        mode: TransportMode,
    ) -> List[Route]:
        """
        Calls the OSRM /route endpoint and returns routes best first.

        An OSRM ``NoRoute`` answer yields an empty list.

        Raises:
            DirectionsFailedError: On transport errors or any other non-Ok answer
        """
        profile = OSRM_PROFILES[mode]
        coordinates = self.format_coordinates([source, destination])
        url = f"{self.base_url}/route/v1/{profile}/{coordinates}"
        params = {
            "overview": "full",
            "geometries": "geojson",
        }

        try:
            response = await self._get_client().get(url, params=params)
        except httpx.HTTPError as e:
            raise DirectionsFailedError(f"OSRM request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise DirectionsFailedError(
                f"OSRM returned invalid JSON (status {response.status_code})"
            ) from e

        code = data.get("code") if isinstance(data, dict) else None
        if code == "NoRoute":
            logger.debug(f"OSRM found no {profile} route for {coordinates}")
            return []
        if code != "Ok" or response.status_code != 200:
            message = data.get("message", "Unknown error") if isinstance(data, dict) else "Unknown error"
            raise DirectionsFailedError(
                f"OSRM error: {message}",
                details={"code": code, "status_code": response.status_code},
            )

        routes = [self._parse_route(r) for r in data.get("routes") or []]
        logger.debug(f"OSRM {profile} {coordinates}: {len(routes)} routes")
        return routes

    @staticmethod
    def _parse_route(raw: Dict[str, Any]) -> Route:
        try:
            pairs = raw["geometry"]["coordinates"]
            points = tuple(Location(float(lat), float(lon)) for lon, lat in pairs)
        except (KeyError, TypeError, ValueError) as e:
            raise DirectionsFailedError("OSRM route geometry is malformed") from e

        return Route(
            geometry=RouteGeometry(points),
            distance_m=float(raw.get("distance", 0.0)),
            duration_s=float(raw.get("duration", 0.0)),
        )

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
