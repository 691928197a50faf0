"""
Unit tests for the OSRM directions adapter
"""
import httpx
import pytest

from coffee_finder.config.settings import OSRMSettings
from coffee_finder.core.exceptions import DirectionsFailedError
from coffee_finder.models.geo import Location, TransportMode
from coffee_finder.services.osrm_directions import OSRMDirections

SOURCE = Location(47.6062, -122.3321)
DESTINATION = Location(47.6150, -122.3200)

OK_PAYLOAD = {
    "code": "Ok",
    "routes": [
        {
            "distance": 1523.4,
            "duration": 240.1,
            "geometry": {
                "type": "LineString",
                "coordinates": [[-122.3321, 47.6062], [-122.3250, 47.6100], [-122.3200, 47.6150]],
            },
        },
        {
            "distance": 1800.0,
            "duration": 300.0,
            "geometry": {"type": "LineString", "coordinates": [[-122.3321, 47.6062], [-122.3200, 47.6150]]},
        },
    ],
}


def make_directions(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OSRMDirections(config=OSRMSettings(base_url="https://osrm.test/"), client=client), client


def test_format_coordinates_uses_lon_lat_order():
    assert OSRMDirections.format_coordinates([SOURCE, DESTINATION]) == (
        "-122.3321,47.6062;-122.32,47.615"
    )


@pytest.mark.asyncio
async def test_route_request_and_parse():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=OK_PAYLOAD)

    service, client = make_directions(handler)
    routes = await service.route(SOURCE, DESTINATION, TransportMode.DRIVING)
    await client.aclose()

    request = seen[0]
    assert request.url.path == "/route/v1/driving/-122.3321,47.6062;-122.32,47.615"
    assert request.url.params["overview"] == "full"
    assert request.url.params["geometries"] == "geojson"

    assert len(routes) == 2
    best = routes[0]
    assert best.distance_m == 1523.4
    assert best.duration_s == 240.1
    assert best.geometry.coordinates[0] == SOURCE
    assert best.geometry.coordinates[-1] == DESTINATION
    assert len(best.geometry) == 3


@pytest.mark.asyncio
async def test_walking_uses_foot_profile():
    seen = []

    def handler(request):
        seen.append(request.url.path)
        return httpx.Response(200, json=OK_PAYLOAD)

    service, client = make_directions(handler)
    await service.route(SOURCE, DESTINATION, TransportMode.WALKING)
    await client.aclose()

    assert seen[0].startswith("/route/v1/foot/")


@pytest.mark.asyncio
async def test_no_route_returns_empty_list():
    payload = {"code": "NoRoute", "message": "Impossible route between points"}
    service, client = make_directions(lambda request: httpx.Response(400, json=payload))

    routes = await service.route(SOURCE, DESTINATION, TransportMode.DRIVING)
    await client.aclose()

    assert routes == []


@pytest.mark.asyncio
async def test_error_code_raises():
    payload = {"code": "InvalidQuery", "message": "Query string malformed"}
    service, client = make_directions(lambda request: httpx.Response(400, json=payload))

    with pytest.raises(DirectionsFailedError, match="Query string malformed") as excinfo:
        await service.route(SOURCE, DESTINATION, TransportMode.DRIVING)
    await client.aclose()

    assert excinfo.value.details["code"] == "InvalidQuery"
    assert excinfo.value.status_code == 502


@pytest.mark.asyncio
async def test_invalid_json_raises():
    service, client = make_directions(lambda request: httpx.Response(502, text="<html>bad gateway</html>"))

    with pytest.raises(DirectionsFailedError, match="invalid JSON"):
        await service.route(SOURCE, DESTINATION, TransportMode.DRIVING)
    await client.aclose()


@pytest.mark.asyncio
async def test_malformed_geometry_raises():
    payload = {"code": "Ok", "routes": [{"distance": 1.0, "geometry": "encoded-polyline"}]}
    service, client = make_directions(lambda request: httpx.Response(200, json=payload))

    with pytest.raises(DirectionsFailedError, match="malformed"):
        await service.route(SOURCE, DESTINATION, TransportMode.DRIVING)
    await client.aclose()


@pytest.mark.asyncio
async def test_timeout_raises():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    service, client = make_directions(handler)

    with pytest.raises(DirectionsFailedError):
        await service.route(SOURCE, DESTINATION, TransportMode.DRIVING)
    await client.aclose()
