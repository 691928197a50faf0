"""In-process location provider fed by HTTP clients or tests."""
import logging
from typing import List, Optional

from coffee_finder.models.geo import Location
from coffee_finder.services.base import LocationCallback, LocationProvider, Unsubscribe

logger = logging.getLogger(__name__)


class LocationFeed(LocationProvider):
    def __init__(self):
        self._subscribers: List[LocationCallback] = []
        self._stopped = False
        self.last_location: Optional[Location] = None

    @property
    def stopped(self) -> bool:
        return self._stopped

    def subscribe(self, callback: LocationCallback) -> Unsubscribe:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def stop(self) -> None:
        self._stopped = True
        logger.info("Location feed stopped")

    def publish(self, location: Location) -> int:
        """Deliver a fix to every subscriber. Returns the number notified."""
        if self._stopped:
            logger.debug("Dropping location fix, feed is stopped")
            return 0

        self.last_location = location
        delivered = 0
        for callback in list(self._subscribers):
            try:
                callback(location)
                delivered += 1
            except Exception as e:
                logger.error(f"Location subscriber failed: {e}", exc_info=True)
        return delivered
