"""
Services module for Coffee Finder.

Exposes the refresh workflow, its collaborator contracts and the concrete
provider adapters.
"""

from .base import DirectionsService, LocationProvider, PlaceSearchService
from .location_feed import LocationFeed
from .map_annotations import MapAnnotation, build_annotations, cluster_label
from .nominatim_search import NominatimPlaceSearch
from .osrm_directions import OSRMDirections
from .refresh_controller import RefreshController

__all__ = [
    "DirectionsService",
    "LocationProvider",
    "PlaceSearchService",
    "LocationFeed",
    "MapAnnotation",
    "build_annotations",
    "cluster_label",
    "NominatimPlaceSearch",
    "OSRMDirections",
    "RefreshController",
]
