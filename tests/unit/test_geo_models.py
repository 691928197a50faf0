"""
Unit tests for geographic value objects
"""
import pytest

from coffee_finder.core.exceptions import InvalidLocationError
from coffee_finder.models.geo import Location, Place, Region, RouteGeometry


def test_location_is_hashable_value():
    a = Location.create(47.6, -122.3)
    b = Location(47.6, -122.3)

    assert a == b
    assert len({a, b}) == 1
    assert a.as_tuple() == (47.6, -122.3)


def test_region_bounding_box_spans_radius():
    region = Region.around(Location(0.0, 0.0), 1000.0)

    min_lon, min_lat, max_lon, max_lat = region.bounding_box()

    assert max_lat - min_lat == pytest.approx(1000.0 / 111320.0)
    assert max_lon - min_lon == pytest.approx(1000.0 / 111320.0)
    assert min_lat < 0.0 < max_lat


def test_region_bounding_box_widens_longitude_away_from_equator():
    equator = Region.around(Location(0.0, 10.0), 1000.0).bounding_box()
    north = Region.around(Location(60.0, 10.0), 1000.0).bounding_box()

    assert (north[2] - north[0]) == pytest.approx(2 * (equator[2] - equator[0]), rel=1e-3)


def test_region_bounding_box_clamped_at_pole():
    min_lon, min_lat, max_lon, max_lat = Region.around(Location(90.0, 0.0), 1000.0).bounding_box()

    assert max_lat == 90.0
    assert -180.0 <= min_lon and max_lon <= 180.0


def test_region_rejects_non_positive_radius():
    with pytest.raises(InvalidLocationError):
        Region.around(Location(0.0, 0.0), 0)


def test_place_display_name_defaults_to_empty():
    assert Place(name=None, coordinate=Location(1.0, 2.0)).display_name == ""
    assert Place(name="Blue Bottle", coordinate=Location(1.0, 2.0)).display_name == "Blue Bottle"


def test_route_geometry_length():
    geometry = RouteGeometry((Location(0.0, 0.0), Location(0.0, 0.001)))

    assert len(geometry) == 2
    assert len(RouteGeometry()) == 0
