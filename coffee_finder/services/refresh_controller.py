"""
Location-driven search and route refresh workflow.

The controller decides when to issue a nearby search and when to recompute
the driving route to the selected place:

- every processed location fix derives a search region, issues a search and
  (re)schedules a debounced route refresh
- selecting a place recomputes the route immediately
- each outbound request carries a sequence number; a completion whose number
  is not the latest issued for its request type is discarded, so a slow
  response can never overwrite fresher data

All mutation happens on the event loop thread. Renderers observe the
workflow through ``subscribe`` and never touch controller state directly.
"""

import asyncio
import logging
from typing import Callable, Coroutine, List, Optional, Set, Tuple

from coffee_finder.config.settings import LocationPolicy, RefreshSettings, get_settings
from coffee_finder.core.exceptions import (
    CoffeeFinderException,
    LocationUnavailableError,
    NoRouteFoundError,
)
from coffee_finder.core.scheduler import RefreshTimer
from coffee_finder.models.geo import Location, Place, Region, Route, TransportMode
from coffee_finder.models.state import ControllerState, StateChange, StateChangeKind
from coffee_finder.services.base import (
    DirectionsService,
    LocationProvider,
    PlaceSearchService,
    Unsubscribe,
)

logger = logging.getLogger(__name__)

StateListener = Callable[[StateChange], None]


class RefreshController:
    """
    Owns the user location, the displayed places, the selected destination,
    the displayed route and the single pending refresh timer.
    """

    def __init__(
        self,
        search_service: PlaceSearchService,
        directions_service: DirectionsService,
        config: Optional[RefreshSettings] = None,
    ):
        self.config = config or get_settings().refresh
        self.search_service = search_service
        self.directions_service = directions_service
        # routes are always computed for driving
        self.transport_mode = TransportMode.DRIVING

        self._timer = RefreshTimer("route-refresh")
        self._location: Optional[Location] = None
        self._region: Optional[Region] = None
        self._places: Tuple[Place, ...] = ()
        self._selected: Optional[Place] = None
        self._selected_index: Optional[int] = None
        self._route: Optional[Route] = None

        self._search_seq = 0
        self._route_seq = 0
        self._search_task: Optional[asyncio.Task] = None
        self._route_task: Optional[asyncio.Task] = None
        self._tasks: Set[asyncio.Task] = set()

        self._listeners: List[StateListener] = []
        self._fixes_processed = 0
        self._detach: Optional[Unsubscribe] = None

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def location(self) -> Optional[Location]:
        return self._location

    @property
    def region(self) -> Optional[Region]:
        return self._region

    @property
    def places(self) -> Tuple[Place, ...]:
        return self._places

    @property
    def selected_destination(self) -> Optional[Place]:
        return self._selected

    @property
    def route(self) -> Optional[Route]:
        return self._route

    @property
    def refresh_timer(self) -> RefreshTimer:
        return self._timer

    @property
    def search_sequence(self) -> int:
        """Number of searches issued so far."""
        return self._search_seq

    @property
    def route_sequence(self) -> int:
        """Number of directions requests issued so far."""
        return self._route_seq

    @property
    def state(self) -> ControllerState:
        return ControllerState(
            location=self._location,
            region=self._region,
            places=self._places,
            selected_destination=self._selected,
            selected_index=self._selected_index,
            route=self._route,
            refresh_pending=self._timer.pending,
        )

    def snapshot(self) -> ControllerState:
        return self.state

    def _index_of(self, place: Place, hint: Optional[int]) -> Optional[int]:
        """Position of ``place`` in the place list, preferring ``hint`` among equal duplicates."""
        if hint is not None and 0 <= hint < len(self._places) and self._places[hint] == place:
            return hint
        try:
            return self._places.index(place)
        except ValueError:
            return None

    def subscribe(self, listener: StateListener) -> Unsubscribe:
        """
        Register a listener for state changes.

        Listeners run synchronously on the event loop right after the change.

        Returns:
            Function removing the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Inbound events
    # ------------------------------------------------------------------

    def attach(self, provider: LocationProvider) -> None:
        """Start receiving fixes from ``provider``."""
        if self._detach is not None:
            self._detach()
        self._detach = provider.subscribe(self.on_location_update)

    def on_location_update(self, location: Location) -> None:
        """
        Handle a location fix.

        Derives the search region, issues a search for the configured query
        and replaces the pending route refresh with a new one. Under the
        ``single`` location policy only the first fix is processed.

        Args:
            location: Fix delivered by the location provider
        """
        if (
            self.config.location_policy == LocationPolicy.SINGLE
            and self._fixes_processed > 0
        ):
            logger.debug("Ignoring location fix, single-fix policy already satisfied")
            return
        self._fixes_processed += 1

        self._location = location
        self._region = Region.around(location, self.config.search_radius_m)
        self._notify(StateChangeKind.REGION)

        self._start_search(self._region)
        self._timer.schedule(self.config.debounce_delay_seconds, self._on_refresh_due)

    def on_place_selected(self, place: Place, index: Optional[int] = None) -> None:
        """
        Select ``place`` as the destination and recompute the route now.

        Selection bypasses the debounce timer.

        Args:
            place: Destination
            index: Position of ``place`` in the current place list, when known
        """
        self._selected = place
        self._selected_index = self._index_of(place, index)
        logger.info(f"Destination selected: {place.display_name or '<unnamed>'}")
        self._notify(StateChangeKind.SELECTION)
        self.recompute_route(place)

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def recompute_route(self, destination: Place) -> Optional[int]:
        """
        Issue a directions request from the current location to ``destination``.

        Returns:
            Sequence number of the issued request, or None when no location
            is known yet
        """
        if self._location is None:
            logger.debug(f"Route recompute skipped: {LocationUnavailableError().message}")
            return None

        self._route_seq += 1
        seq = self._route_seq
        self._cancel_superseded(self._route_task, "directions")
        self._route_task = self._spawn(
            self._run_directions(seq, self._location, destination)
        )
        return seq

    def _start_search(self, region: Region) -> int:
        self._search_seq += 1
        seq = self._search_seq
        self._cancel_superseded(self._search_task, "search")
        self._search_task = self._spawn(self._run_search(seq, region))
        logger.debug(
            f"Search #{seq} issued: '{self.config.search_query}' within "
            f"{region.radius_m:.0f}m of {region.center.as_tuple()}"
        )
        return seq

    def _on_refresh_due(self) -> None:
        destination = self._selected
        if destination is None:
            logger.debug("Route refresh due with no destination selected, nothing to do")
            return
        self.recompute_route(destination)

    async def _run_search(self, seq: int, region: Region) -> None:
        try:
            places = await self.search_service.search(self.config.search_query, region)
        except asyncio.CancelledError:
            logger.debug(f"Search #{seq} cancelled")
            raise
        except CoffeeFinderException as e:
            logger.warning(f"Search #{seq} failed, keeping previous places: {e.message}")
            return
        except Exception as e:
            logger.error(f"Search #{seq} raised unexpectedly: {e}", exc_info=True)
            return

        if seq != self._search_seq:
            logger.info(f"Discarding stale search #{seq} (latest is #{self._search_seq})")
            return

        self._places = tuple(places)
        if self._selected is not None:
            self._selected_index = self._index_of(self._selected, self._selected_index)
        logger.info(f"Search #{seq} returned {len(self._places)} places")
        self._notify(StateChangeKind.PLACES)

    async def _run_directions(self, seq: int, source: Location, destination: Place) -> None:
        try:
            routes = await self.directions_service.route(
                source, destination.coordinate, self.transport_mode
            )
        except asyncio.CancelledError:
            logger.debug(f"Directions #{seq} cancelled")
            raise
        except CoffeeFinderException as e:
            logger.warning(f"Directions #{seq} failed, route unchanged: {e.message}")
            return
        except Exception as e:
            logger.error(f"Directions #{seq} raised unexpectedly: {e}", exc_info=True)
            return

        if seq != self._route_seq:
            logger.info(f"Discarding stale directions #{seq} (latest is #{self._route_seq})")
            return

        if not routes:
            error = NoRouteFoundError(details={"destination": destination.display_name})
            logger.warning(f"Directions #{seq}: {error.message}")
            return

        # replaces the previously displayed geometry
        self._route = routes[0]
        logger.info(
            f"Directions #{seq} applied: {len(self._route.geometry)} points, "
            f"{self._route.distance_m:.0f}m"
        )
        self._notify(StateChangeKind.ROUTE)

    # ------------------------------------------------------------------
    # Task bookkeeping
    # ------------------------------------------------------------------

    def _spawn(self, coro: Coroutine) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _cancel_superseded(self, task: Optional[asyncio.Task], label: str) -> None:
        if not self.config.cancel_superseded_requests:
            return
        if task is not None and not task.done():
            logger.debug(f"Cancelling superseded {label} request")
            task.cancel()

    async def wait_idle(self) -> None:
        """Wait until no search or directions request is in flight."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        """Cancel the pending refresh and in-flight requests and detach from the provider."""
        self._timer.cancel()
        if self._detach is not None:
            self._detach()
            self._detach = None
        for task in list(self._tasks):
            task.cancel()
        await self.wait_idle()
        logger.info("Refresh controller closed")

    def _notify(self, kind: StateChangeKind) -> None:
        if not self._listeners:
            return
        event = StateChange(kind=kind, state=self.state)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                logger.error(f"State listener failed on {kind.value}: {e}", exc_info=True)
