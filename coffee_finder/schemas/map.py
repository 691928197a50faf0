from typing import List, Optional, Sequence

from pydantic import BaseModel, Field

from coffee_finder.models.geo import Location, Place, Region, Route
from coffee_finder.models.state import ControllerState
from coffee_finder.services.map_annotations import MapAnnotation


class LocationIn(BaseModel):
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class LocationRead(BaseModel):
    latitude: float
    longitude: float

    @classmethod
    def from_domain(cls, location: Location) -> "LocationRead":
        return cls(latitude=location.latitude, longitude=location.longitude)


class RegionRead(BaseModel):
    center: LocationRead
    radius_m: float

    @classmethod
    def from_domain(cls, region: Region) -> "RegionRead":
        return cls(center=LocationRead.from_domain(region.center), radius_m=region.radius_m)


class PlaceRead(BaseModel):
    index: int
    name: str
    latitude: float
    longitude: float
    provider_id: Optional[str] = None

    @classmethod
    def from_domain(cls, index: int, place: Place) -> "PlaceRead":
        return cls(
            index=index,
            name=place.display_name,
            latitude=place.coordinate.latitude,
            longitude=place.coordinate.longitude,
            provider_id=place.provider_id,
        )


class RouteRead(BaseModel):
    coordinates: List[List[float]]  # [[lat, lon], ...]
    distance_m: float
    duration_s: float

    @classmethod
    def from_domain(cls, route: Route) -> "RouteRead":
        return cls(
            coordinates=[[p.latitude, p.longitude] for p in route.geometry.coordinates],
            distance_m=route.distance_m,
            duration_s=route.duration_s,
        )


class AnnotationRead(BaseModel):
    title: str
    latitude: float
    longitude: float
    member_count: int
    cluster_label: Optional[str] = None

    @classmethod
    def from_domain(cls, annotation: MapAnnotation) -> "AnnotationRead":
        return cls(
            title=annotation.title,
            latitude=annotation.coordinate.latitude,
            longitude=annotation.coordinate.longitude,
            member_count=annotation.member_count,
            cluster_label=annotation.label,
        )


def places_to_read(places: Sequence[Place]) -> List[PlaceRead]:
    return [PlaceRead.from_domain(i, p) for i, p in enumerate(places)]


class MapStateRead(BaseModel):
    location: Optional[LocationRead] = None
    region: Optional[RegionRead] = None
    places: List[PlaceRead] = Field(default_factory=list)
    selected: Optional[PlaceRead] = None
    route: Optional[RouteRead] = None
    refresh_pending: bool = False

    @classmethod
    def from_domain(cls, state: ControllerState) -> "MapStateRead":
        selected = None
        if state.selected_destination is not None:
            index = state.selected_index
            if index is None:
                index = -1  # selection outlived the place set it came from
            selected = PlaceRead.from_domain(index, state.selected_destination)

        return cls(
            location=LocationRead.from_domain(state.location) if state.location else None,
            region=RegionRead.from_domain(state.region) if state.region else None,
            places=places_to_read(state.places),
            selected=selected,
            route=RouteRead.from_domain(state.route) if state.route else None,
            refresh_pending=state.refresh_pending,
        )
