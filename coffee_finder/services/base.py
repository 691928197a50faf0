"""
Abstract contracts for the collaborators the refresh workflow depends on.

Implementations talk to real providers (Nominatim, OSRM) or, in tests,
to in-memory fakes.
"""

from abc import ABC, abstractmethod
from typing import Callable, List

from coffee_finder.models.geo import Location, Place, Region, Route, TransportMode

LocationCallback = Callable[[Location], None]
Unsubscribe = Callable[[], None]


class LocationProvider(ABC):
    """Delivers location fixes to subscribers on the event loop."""

    @abstractmethod
    def subscribe(self, callback: LocationCallback) -> Unsubscribe:
        """Register ``callback`` for future fixes and return an unsubscribe function."""

    @abstractmethod
    def stop(self) -> None:
        """Stop delivering fixes."""


class PlaceSearchService(ABC):
    """Single-shot nearby search."""

    @abstractmethod
    async def search(self, query: str, region: Region) -> List[Place]:
        """
        Return places matching ``query`` inside ``region``.

        Raises:
            SearchFailedError: provider error or unusable response
        """

    async def aclose(self) -> None:
        """Release provider resources."""


class DirectionsService(ABC):
    """Single-shot route computation."""

    @abstractmethod
    async def route(
        self,
        source: Location,
        destination: Location,
        mode: TransportMode,
    ) -> List[Route]:
        """
        Return candidate routes, best first. An empty list means no route.

        Raises:
            DirectionsFailedError: provider error or unusable response
        """

    async def aclose(self) -> None:
        """Release provider resources."""
