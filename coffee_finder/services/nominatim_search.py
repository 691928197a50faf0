"""
Nearby place search backed by OpenStreetMap Nominatim.
"""

import logging
from typing import Any, List, Optional

import httpx

from coffee_finder.config.settings import NominatimSettings, get_settings
from coffee_finder.core.exceptions import SearchFailedError
from coffee_finder.core.validation import ValidationError, validate_latitude, validate_longitude
from coffee_finder.models.geo import Location, Place, Region
from coffee_finder.services.base import PlaceSearchService

logger = logging.getLogger(__name__)


class NominatimPlaceSearch(PlaceSearchService):
    """Free-text search bounded to the region's viewbox."""

    def __init__(
        self,
        config: Optional[NominatimSettings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config or get_settings().nominatim
        self.base_url = self.config.base_url.rstrip("/")
        self._client = client
        self._owns_client = client is None

    def _get_headers(self) -> dict:
        headers = {"User-Agent": self.config.user_agent}
        if self.config.referer:
            headers["Referer"] = self.config.referer
        return headers

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers=self._get_headers(),
                timeout=self.config.timeout_seconds,
            )
        return self._client

    async def search(self, query: str, region: Region) -> List[Place]:
        """
        Search for ``query`` inside ``region``.

        Args:
            query: Free-text query (e.g. "coffee")
            region: Search area; converted to a bounded viewbox

        Returns:
            Places in provider order

        Raises:
            SearchFailedError: On transport errors, non-200 status or bad JSON
        """
        min_lon, min_lat, max_lon, max_lat = region.bounding_box()
        params = {
            "q": query,
            "format": "jsonv2",
            "viewbox": f"{min_lon},{max_lat},{max_lon},{min_lat}",
            "bounded": "1",
            "limit": str(self.config.max_results),
        }
        url = f"{self.base_url}/search"

        try:
            response = await self._get_client().get(
                url, params=params, headers=self._get_headers()
            )
        except httpx.HTTPError as e:
            raise SearchFailedError(
                f"Nominatim request failed: {e}", details={"query": query}
            ) from e

        if response.status_code != 200:
            raise SearchFailedError(
                f"Nominatim returned {response.status_code}",
                details={"query": query, "status_code": response.status_code},
            )

        try:
            data = response.json()
        except ValueError as e:
            raise SearchFailedError("Nominatim returned invalid JSON") from e

        if not isinstance(data, list):
            raise SearchFailedError(
                "Unexpected Nominatim payload", details={"type": type(data).__name__}
            )

        places = [place for place in (self._parse_item(item) for item in data) if place]
        logger.debug(
            f"Nominatim search '{query}' near {region.center.as_tuple()} "
            f"radius {region.radius_m:.0f}m got {len(places)} results"
        )
        return places

    @staticmethod
    def _parse_item(item: Any) -> Optional[Place]:
        if not isinstance(item, dict):
            return None
        try:
            lat = validate_latitude(item.get("lat"))
            lon = validate_longitude(item.get("lon"))
        except ValidationError:
            logger.debug(f"Skipping Nominatim item without usable coordinates: {item.get('place_id')}")
            return None

        name = item.get("name") or None
        place_id = item.get("place_id")
        return Place(
            name=name,
            coordinate=Location(lat, lon),
            provider_id=str(place_id) if place_id is not None else None,
        )

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
