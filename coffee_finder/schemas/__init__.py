"""
Request and response schemas for the HTTP surface.
"""

from .base import Envelope, ErrorDetail
from .map import (
    AnnotationRead,
    LocationIn,
    LocationRead,
    MapStateRead,
    PlaceRead,
    RegionRead,
    RouteRead,
    places_to_read,
)

__all__ = [
    "Envelope",
    "ErrorDetail",
    "AnnotationRead",
    "LocationIn",
    "LocationRead",
    "MapStateRead",
    "PlaceRead",
    "RegionRead",
    "RouteRead",
    "places_to_read",
]
