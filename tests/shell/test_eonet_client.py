"""Tests for the NASA EONET client.

Uses the responses library to stub HTTP calls.
"""

from datetime import datetime, timezone
from urllib.parse import parse_qs, urlparse

import pytest
import responses

from src.core.config import EONET_API_BASE
from src.core.errors import FormatError, NetworkError
from src.core.events import EventSource
from src.core.geo import Coordinate
from src.core.severity import Severity
from src.shell.eonet_client import EONETClient


REFERENCE = Coordinate(latitude=34.0754, longitude=-84.2941)
FIXED_NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)

SAMPLE_PAYLOAD = {
    "title": "EONET Events",
    "events": [
        {
            "id": "EONET_1",
            "title": "North Georgia Wildfire",
            "categories": [{"id": "wildfires", "title": "Wildfires"}],
            "geometry": [{"date": "2024-05-31T10:00:00Z", "coordinates": [-84.1, 34.2]}],
        },
        {
            "id": "EONET_2",
            "title": "Florida Flood",
            "categories": [{"id": "floods", "title": "Floods"}],
            "geometry": [{"date": "2024-05-31T11:00:00Z", "coordinates": [-84.28, 29.58]}],
        },
        {
            "id": "EONET_3",
            "title": "Iceberg A23A",
            "categories": [{"id": "seaLakeIce", "title": "Sea and Lake Ice"}],
            "geometry": [],
        },
        {
            "id": "EONET_4",
            "title": "Undated storm",
            "categories": [{"id": "severeStorms", "title": "Severe Storms"}],
            "geometry": [{"coordinates": [-84.3, 34.0]}],
        },
    ],
}


@pytest.fixture
def client():
    return EONETClient(clock=lambda: FIXED_NOW)


class TestEONETClientFetch:
    """Tests for EONETClient.fetch()."""

    @responses.activate
    def test_keeps_only_events_within_radius(self, client):
        responses.add(responses.GET, EONET_API_BASE, json=SAMPLE_PAYLOAD, status=200)

        events = client.fetch(REFERENCE, 150)

        assert [e.id for e in events] == ["EONET_1", "EONET_4"]
        assert all(e.distance_km <= 150 for e in events)
        assert all(e.source == EventSource.ENVIRONMENTAL for e in events)

    @responses.activate
    def test_classifies_by_category(self, client):
        responses.add(responses.GET, EONET_API_BASE, json=SAMPLE_PAYLOAD, status=200)

        events = client.fetch(REFERENCE, 150)

        assert events[0].severity == Severity.EMERGENCY
        assert events[0].magnitude == "Wildfires"

    @responses.activate
    def test_undated_event_uses_fetch_time(self, client):
        responses.add(responses.GET, EONET_API_BASE, json=SAMPLE_PAYLOAD, status=200)

        events = client.fetch(REFERENCE, 150)

        assert events[1].timestamp == FIXED_NOW

    @responses.activate
    def test_requests_open_events_without_geo_params(self, client):
        responses.add(responses.GET, EONET_API_BASE, json={"events": []}, status=200)

        client.fetch(REFERENCE, 150)

        query = parse_qs(urlparse(responses.calls[0].request.url).query)
        assert query == {"status": ["open"]}

    @responses.activate
    def test_non_2xx_raises_network_error(self, client):
        responses.add(responses.GET, EONET_API_BASE, status=500)

        with pytest.raises(NetworkError):
            client.fetch(REFERENCE, 150)

    @responses.activate
    def test_non_json_raises_format_error(self, client):
        responses.add(responses.GET, EONET_API_BASE, body="not json", status=200)

        with pytest.raises(FormatError):
            client.fetch(REFERENCE, 150)

    @responses.activate
    def test_events_not_a_list_raises_format_error(self, client):
        responses.add(responses.GET, EONET_API_BASE, json={"events": "none"}, status=200)

        with pytest.raises(FormatError):
            client.fetch(REFERENCE, 150)
