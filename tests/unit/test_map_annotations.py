"""
Unit tests for map annotation grouping and cluster labels
"""
import pytest

from coffee_finder.config.settings import PresentationSettings
from coffee_finder.models.geo import Location, Place
from coffee_finder.services.map_annotations import build_annotations, cluster_label


def test_cluster_label_caps_at_max_text():
    config = PresentationSettings()

    assert cluster_label(2, config) == "2"
    assert cluster_label(99, config) == "99"
    assert cluster_label(100, config) == "99+"
    assert cluster_label(250, config) == "99+"


def test_cluster_label_uses_configured_cap():
    config = PresentationSettings(cluster_max_count=10, cluster_max_text="9+")

    assert cluster_label(9, config) == "9"
    assert cluster_label(10, config) == "9+"


def test_separate_places_stay_single():
    config = PresentationSettings()
    places = [
        Place(name="Alpha", coordinate=Location(10.0, 20.0)),
        Place(name=None, coordinate=Location(10.01, 20.01)),
    ]

    annotations = build_annotations(places, config)

    assert [a.title for a in annotations] == ["Alpha", ""]
    assert not any(a.is_cluster for a in annotations)
    assert annotations[0].label is None


def test_nearby_places_form_cluster_at_mean():
    config = PresentationSettings()
    places = [
        Place(name="Alpha", coordinate=Location(10.0001, 20.0001)),
        Place(name="Beta", coordinate=Location(10.0003, 20.0003)),
        Place(name="Gamma", coordinate=Location(11.0, 21.0)),
    ]

    annotations = build_annotations(places, config)

    assert len(annotations) == 2
    cluster = annotations[0]
    assert cluster.is_cluster
    assert cluster.member_count == 2
    assert cluster.label == "2"
    assert cluster.coordinate.latitude == pytest.approx(10.0002)
    assert annotations[1].title == "Gamma"


def test_large_cluster_label():
    config = PresentationSettings()
    places = [Place(name=f"Cafe {i}", coordinate=Location(10.0001, 20.0001)) for i in range(120)]

    annotations = build_annotations(places, config)

    assert len(annotations) == 1
    assert annotations[0].member_count == 120
    assert annotations[0].label == "99+"


def test_empty_places():
    assert build_annotations([], PresentationSettings()) == []
