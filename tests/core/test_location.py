"""Unit tests for location state helpers."""

from src.core.geo import Coordinate
from src.core.location import (
    LocationSnapshot,
    LocationStatus,
    coordinate_from_dict,
    coordinate_to_dict,
)


def test_coordinate_dict_round_trip():
    coord = Coordinate(34.0754, -84.2941)
    assert coordinate_from_dict(coordinate_to_dict(coord)) == coord


def test_coordinate_from_dict_rejects_garbage():
    assert coordinate_from_dict(None) is None
    assert coordinate_from_dict({"latitude": "north"}) is None
    assert coordinate_from_dict({"latitude": 1.0}) is None
    assert coordinate_from_dict([34.0, -84.0]) is None


def test_snapshot_has_location():
    assert LocationSnapshot(LocationStatus.IDLE).has_location is False
    assert LocationSnapshot(LocationStatus.IDLE, Coordinate(0.0, 0.0)).has_location is True
