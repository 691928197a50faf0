from coffee_finder.models.geo import Location
from coffee_finder.services.location_feed import LocationFeed


def test_publish_delivers_to_subscribers():
    feed = LocationFeed()
    received = []
    feed.subscribe(received.append)

    assert feed.publish(Location(1.0, 2.0)) == 1
    assert received == [Location(1.0, 2.0)]
    assert feed.last_location == Location(1.0, 2.0)


def test_unsubscribe_stops_delivery():
    feed = LocationFeed()
    received = []
    unsubscribe = feed.subscribe(received.append)

    unsubscribe()
    unsubscribe()

    assert feed.publish(Location(1.0, 2.0)) == 0
    assert received == []


def test_stopped_feed_drops_fixes():
    feed = LocationFeed()
    received = []
    feed.subscribe(received.append)

    feed.stop()

    assert feed.stopped
    assert feed.publish(Location(1.0, 2.0)) == 0
    assert received == []
    assert feed.last_location is None


def test_failing_subscriber_does_not_block_others():
    feed = LocationFeed()
    received = []

    def broken(location):
        raise RuntimeError("boom")

    feed.subscribe(broken)
    feed.subscribe(received.append)

    assert feed.publish(Location(1.0, 2.0)) == 1
    assert received == [Location(1.0, 2.0)]
