"""Map and place list endpoints."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request

from coffee_finder.core.exceptions import PlaceNotFoundError
from coffee_finder.models.geo import Location
from coffee_finder.schemas.base import Envelope
from coffee_finder.schemas.map import (
    AnnotationRead,
    LocationIn,
    MapStateRead,
    PlaceRead,
    RouteRead,
    places_to_read,
)
from coffee_finder.services.location_feed import LocationFeed
from coffee_finder.services.map_annotations import build_annotations
from coffee_finder.services.refresh_controller import RefreshController

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/map", tags=["map"])


def get_controller(request: Request) -> RefreshController:
    return request.app.state.controller


def get_location_feed(request: Request) -> LocationFeed:
    return request.app.state.location_feed


@router.post("/location", response_model=Envelope[MapStateRead])
async def post_location(
    body: LocationIn,
    wait: bool = Query(False, description="Wait for the triggered search to finish"),
    feed: LocationFeed = Depends(get_location_feed),
    controller: RefreshController = Depends(get_controller),
):
    location = Location.create(body.latitude, body.longitude)
    delivered = feed.publish(location)
    logger.debug(f"Location {location.as_tuple()} delivered to {delivered} subscribers")
    if wait:
        await controller.wait_idle()
    return Envelope(status="ok", data=MapStateRead.from_domain(controller.state))


@router.get("/state", response_model=Envelope[MapStateRead])
async def get_state(controller: RefreshController = Depends(get_controller)):
    return Envelope(status="ok", data=MapStateRead.from_domain(controller.state))


@router.get("/places", response_model=Envelope[List[PlaceRead]])
async def get_places(controller: RefreshController = Depends(get_controller)):
    return Envelope(status="ok", data=places_to_read(controller.places))


@router.post("/places/{index}/select", response_model=Envelope[MapStateRead])
async def select_place(
    index: int,
    wait: bool = Query(False, description="Wait for the directions request to finish"),
    controller: RefreshController = Depends(get_controller),
):
    places = controller.places
    if not 0 <= index < len(places):
        raise PlaceNotFoundError(index, len(places))

    controller.on_place_selected(places[index], index)
    if wait:
        await controller.wait_idle()
    return Envelope(status="ok", data=MapStateRead.from_domain(controller.state))


@router.get("/route", response_model=Envelope[Optional[RouteRead]])
async def get_route(controller: RefreshController = Depends(get_controller)):
    route = controller.route
    return Envelope(status="ok", data=RouteRead.from_domain(route) if route else None)


@router.get("/annotations", response_model=Envelope[List[AnnotationRead]])
async def get_annotations(
    request: Request,
    controller: RefreshController = Depends(get_controller),
):
    config = request.app.state.settings.presentation
    annotations = build_annotations(controller.places, config)
    return Envelope(status="ok", data=[AnnotationRead.from_domain(a) for a in annotations])
