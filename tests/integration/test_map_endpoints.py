from fastapi.testclient import TestClient

from coffee_finder.config.settings import RefreshSettings, Settings
from coffee_finder.main import create_app
from coffee_finder.models.geo import Location, Place
from tests.fakes import FakeDirectionsService, FakeSearchService, make_route

PLACES = [
    Place(name="Victrola", coordinate=Location(47.6150, -122.3200), provider_id="11"),
    Place(name=None, coordinate=Location(47.6100, -122.3300), provider_id="12"),
]
ROUTE = make_route((47.6062, -122.3321), (47.6100, -122.3250), (47.6150, -122.3200))


def make_client(search=None, directions=None):
    settings = Settings(refresh=RefreshSettings(debounce_delay_seconds=5.0))
    app = create_app(
        settings,
        search_service=search or FakeSearchService(results=PLACES),
        directions_service=directions or FakeDirectionsService(routes=[ROUTE]),
    )
    return TestClient(app)


def test_location_update_populates_places():
    with make_client() as client:
        r = client.post('/map/location?wait=true', json={'latitude': 47.6062, 'longitude': -122.3321})
        assert r.status_code == 200
        body = r.json()
        assert body['status'] == 'ok'
        assert body['data']['location'] == {'latitude': 47.6062, 'longitude': -122.3321}
        assert body['data']['region']['radius_m'] == 1000.0
        assert body['data']['refresh_pending'] is True
        assert [p['name'] for p in body['data']['places']] == ['Victrola', '']

        r = client.get('/map/places')
        assert [p['index'] for p in r.json()['data']] == [0, 1]


def test_select_place_returns_route():
    directions = FakeDirectionsService(routes=[ROUTE])
    with make_client(directions=directions) as client:
        client.post('/map/location?wait=true', json={'latitude': 47.6062, 'longitude': -122.3321})

        r = client.post('/map/places/0/select?wait=true')
        assert r.status_code == 200
        data = r.json()['data']
        assert data['selected']['name'] == 'Victrola'
        assert data['selected']['index'] == 0
        assert len(data['route']['coordinates']) == 3

        r = client.get('/map/route')
        assert r.json()['data']['coordinates'][-1] == [47.615, -122.32]
        assert len(directions.calls) == 1


def test_route_empty_before_selection():
    with make_client() as client:
        r = client.get('/map/route')
        assert r.status_code == 200
        assert r.json()['data'] is None


def test_select_unknown_place_returns_error_envelope():
    with make_client() as client:
        r = client.post('/map/places/3/select')
        assert r.status_code == 404
        body = r.json()
        assert body['status'] == 'error'
        assert body['data'] is None
        assert body['error']['error_code'] == 'PLACE_NOT_FOUND'


def test_out_of_range_location_rejected():
    with make_client() as client:
        r = client.post('/map/location', json={'latitude': 95.0, 'longitude': 0.0})
        assert r.status_code == 422
        body = r.json()
        assert body['status'] == 'error'
        assert body['error']['error_code'] == 'VALIDATION_ERROR'

        r = client.get('/map/state')
        assert r.json()['data']['location'] is None


def test_annotations_cluster_nearby_places():
    crowded = [Place(name=f"Cart {i}", coordinate=Location(47.6001, -122.3001)) for i in range(3)]
    with make_client(search=FakeSearchService(results=crowded + PLACES)) as client:
        client.post('/map/location?wait=true', json={'latitude': 47.6062, 'longitude': -122.3321})

        r = client.get('/map/annotations')
        assert r.status_code == 200
        annotations = r.json()['data']
        assert len(annotations) == 3
        assert annotations[0]['member_count'] == 3
        assert annotations[0]['cluster_label'] == '3'
        assert annotations[1]['title'] == 'Victrola'
        assert annotations[1]['cluster_label'] is None


def test_health_reports_workflow():
    with make_client() as client:
        r = client.get('/health')
        assert r.json()['status'] == 'healthy'
        assert r.json()['details']['has_location'] is False

        client.post('/map/location?wait=true', json={'latitude': 47.6062, 'longitude': -122.3321})
        details = client.get('/health').json()['details']
        assert details['has_location'] is True
        assert details['places'] == 2
        assert details['searches_issued'] == 1
        assert details['directions_issued'] == 0


def test_selecting_duplicate_place_reports_its_own_index():
    twins = [PLACES[0], Place(name="Victrola", coordinate=PLACES[0].coordinate, provider_id="11")]
    with make_client(search=FakeSearchService(results=twins)) as client:
        client.post('/map/location?wait=true', json={'latitude': 47.6062, 'longitude': -122.3321})

        r = client.post('/map/places/1/select?wait=true')
        assert r.status_code == 200
        assert r.json()['data']['selected']['index'] == 1

        r = client.get('/map/state')
        assert r.json()['data']['selected']['index'] == 1
