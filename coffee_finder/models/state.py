"""
Observable refresh workflow state.

The controller publishes immutable snapshots; renderers subscribe to
StateChange events instead of being mutated from service callbacks.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from coffee_finder.models.geo import Location, Place, Region, Route


class StateChangeKind(str, Enum):
    """Which part of the state changed"""
    REGION = "region"
    PLACES = "places"
    SELECTION = "selection"
    ROUTE = "route"


@dataclass(frozen=True)
class ControllerState:
    location: Optional[Location] = None
    region: Optional[Region] = None
    places: Tuple[Place, ...] = field(default_factory=tuple)
    selected_destination: Optional[Place] = None
    selected_index: Optional[int] = None  # None when the selection is not in places
    route: Optional[Route] = None
    refresh_pending: bool = False


@dataclass(frozen=True)
class StateChange:
    kind: StateChangeKind
    state: ControllerState
