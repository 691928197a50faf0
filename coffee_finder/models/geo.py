"""
Geographic value objects shared by the refresh workflow, the service
adapters and the HTTP layer.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from coffee_finder.core.exceptions import InvalidLocationError
from coffee_finder.core.validation import (
    ValidationError,
    validate_latitude,
    validate_longitude,
    validate_radius,
)

METERS_PER_DEGREE = 111320.0


class TransportMode(str, Enum):
    """Directions transport modes."""
    DRIVING = "driving"
    WALKING = "walking"
    CYCLING = "cycling"


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float

    @classmethod
    def create(cls, latitude: float, longitude: float) -> "Location":
        """Build a validated location, raising InvalidLocationError on bad input."""
        try:
            return cls(validate_latitude(latitude), validate_longitude(longitude))
        except ValidationError as e:
            raise InvalidLocationError(
                str(e), details={"latitude": latitude, "longitude": longitude}
            ) from e

    def as_tuple(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)


@dataclass(frozen=True)
class Region:
    """Search area: a center plus a radius in meters."""
    center: Location
    radius_m: float

    @classmethod
    def around(cls, location: Location, radius_m: float) -> "Region":
        try:
            return cls(center=location, radius_m=validate_radius(radius_m))
        except ValidationError as e:
            raise InvalidLocationError(str(e), details={"radius_m": radius_m}) from e

    def bounding_box(self) -> Tuple[float, float, float, float]:
        """
        Return (min_lon, min_lat, max_lon, max_lat).

        The region spans radius_m meters along each axis, centered on the
        user, matching a map region built with equal latitudinal and
        longitudinal meters.
        """
        half = self.radius_m / 2.0
        dlat = half / METERS_PER_DEGREE
        cos_lat = max(math.cos(math.radians(self.center.latitude)), 1e-6)
        dlon = half / (METERS_PER_DEGREE * cos_lat)
        return (
            max(self.center.longitude - dlon, -180.0),
            max(self.center.latitude - dlat, -90.0),
            min(self.center.longitude + dlon, 180.0),
            min(self.center.latitude + dlat, 90.0),
        )


@dataclass(frozen=True)
class Place:
    """A point of interest returned by a nearby search."""
    name: Optional[str]
    coordinate: Location
    provider_id: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or ""


@dataclass(frozen=True)
class RouteGeometry:
    """Ordered path coordinates of one computed route."""
    coordinates: Tuple[Location, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.coordinates)


@dataclass(frozen=True)
class Route:
    geometry: RouteGeometry
    distance_m: float = 0.0
    duration_s: float = 0.0
