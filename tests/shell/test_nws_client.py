"""Tests for the community alert client and its demonstration fallback.

Uses the responses library to stub HTTP calls.
"""

import os
from datetime import datetime, timezone
from unittest.mock import patch

import pytest
import requests
import responses

from src.core.alerts import demo_alerts
from src.core.config import NWS_ALERTS_URL
from src.core.severity import Severity
from src.shell.nws_client import CommunityAlertClient, default_alert_feed_url


FEED_URL = "https://alerts.example.com/active"
FIXED_NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)

SAMPLE_FEED = {
    "type": "FeatureCollection",
    "features": [
        {
            "id": "alert-1",
            "properties": {
                "headline": "Tornado Warning",
                "description": "Take shelter now.",
                "areaDesc": "Forsyth, GA",
                "sent": "2024-06-01T11:50:00Z",
                "senderName": "NWS Peachtree City GA",
                "severity": "Extreme",
            },
        }
    ],
}


@pytest.fixture
def client():
    return CommunityAlertClient(feed_url=FEED_URL, clock=lambda: FIXED_NOW)


class TestDefaultAlertFeedUrl:
    """Tests for the alert feed endpoint override."""

    def test_defaults_to_public_feed(self):
        with patch.dict(os.environ, {}, clear=True):
            assert default_alert_feed_url() == NWS_ALERTS_URL

    def test_env_var_overrides(self):
        with patch.dict(os.environ, {"NWS_ALERT_FEED": FEED_URL}):
            assert default_alert_feed_url() == FEED_URL
            assert CommunityAlertClient().feed_url == FEED_URL


class TestCommunityAlertClientFetch:
    """Tests for CommunityAlertClient.fetch_alerts()."""

    @responses.activate
    def test_returns_parsed_alerts(self, client):
        responses.add(responses.GET, FEED_URL, json=SAMPLE_FEED, status=200)

        alerts = client.fetch_alerts()

        assert len(alerts) == 1
        assert alerts[0].headline == "Tornado Warning"
        assert alerts[0].level == Severity.EMERGENCY

    @responses.activate
    def test_sends_identifying_header(self, client):
        responses.add(responses.GET, FEED_URL, json=SAMPLE_FEED, status=200)

        client.fetch_alerts()

        assert responses.calls[0].request.headers["User-Agent"] == "community-pulse"

    @responses.activate
    def test_http_500_returns_demo_alerts_unmodified(self, client):
        responses.add(responses.GET, FEED_URL, status=500)

        alerts = client.fetch_alerts()

        assert alerts == demo_alerts(FIXED_NOW)
        assert len(alerts) == 3

    @responses.activate
    def test_empty_feed_returns_demo_alerts(self, client):
        responses.add(responses.GET, FEED_URL, json={"features": []}, status=200)

        assert client.fetch_alerts() == demo_alerts(FIXED_NOW)

    @responses.activate
    def test_network_failure_returns_demo_alerts(self, client):
        responses.add(
            responses.GET,
            FEED_URL,
            body=requests.exceptions.ConnectionError("offline"),
        )

        assert client.fetch_alerts() == demo_alerts(FIXED_NOW)

    @responses.activate
    def test_unparseable_body_returns_demo_alerts(self, client):
        responses.add(responses.GET, FEED_URL, body="<xml/>", status=200)

        assert client.fetch_alerts() == demo_alerts(FIXED_NOW)

    @responses.activate
    def test_respects_limit(self):
        features = [dict(SAMPLE_FEED["features"][0], id=f"a{i}") for i in range(5)]
        responses.add(responses.GET, FEED_URL, json={"features": features}, status=200)

        client = CommunityAlertClient(feed_url=FEED_URL, limit=2, clock=lambda: FIXED_NOW)

        assert [a.id for a in client.fetch_alerts()] == ["a0", "a1"]
