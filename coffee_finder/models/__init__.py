"""
Domain models for Coffee Finder.
"""

from .geo import (
    Location,
    Place,
    Region,
    Route,
    RouteGeometry,
    TransportMode,
)
from .state import ControllerState, StateChange, StateChangeKind

__all__ = [
    "Location",
    "Place",
    "Region",
    "Route",
    "RouteGeometry",
    "TransportMode",
    "ControllerState",
    "StateChange",
    "StateChangeKind",
]
