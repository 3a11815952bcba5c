"""Tests for the Aggregator.

Sources are replaced with mocks so no HTTP calls are made.
"""

import threading
import time
from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest

from src.aggregator import AggregationResult, Aggregator
from src.core.config import Config, FeedConfig
from src.core.errors import AggregateFailure, FormatError, NetworkError
from src.core.events import EventSource, HazardEvent
from src.core.geo import Coordinate
from src.core.merge import AdapterOutcome
from src.core.severity import Severity
from src.shell.eonet_client import EONETClient
from src.shell.usgs_client import USGSClient


REFERENCE = Coordinate(34.0754, -84.2941)
BASE_TIME = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_event(
    event_id: str,
    source: EventSource = EventSource.SEISMIC,
    minutes_ago: int = 0,
    distance_km: float | None = 10.0,
) -> HazardEvent:
    return HazardEvent(
        id=event_id,
        title=f"Event {event_id}",
        description="",
        source=source,
        coordinates=REFERENCE,
        severity=Severity.INFO,
        timestamp=BASE_TIME - timedelta(minutes=minutes_ago),
        distance_km=distance_km,
    )


def make_source(name: str, events=None, error=None) -> Mock:
    source = Mock()
    source.name = name
    if error is not None:
        source.fetch.side_effect = error
    else:
        source.fetch.return_value = list(events or [])
    return source


class TestAggregatorDefaults:
    """Tests for aggregator construction."""

    def test_default_sources(self):
        aggregator = Aggregator()

        assert isinstance(aggregator.sources[0], USGSClient)
        assert isinstance(aggregator.sources[1], EONETClient)

    def test_rejects_duplicate_source_names(self):
        """Each failure cause must be attributable to one source."""
        with pytest.raises(ValueError, match="USGS"):
            Aggregator([make_source("USGS"), make_source("USGS")])

    def test_from_config_applies_feed_settings(self):
        config = Config(feeds=FeedConfig(
            seismic_url="https://quakes.example.com/query",
            timeout_seconds=3,
            user_agent="pulse-test",
            seismic_limit=5,
        ))

        aggregator = Aggregator.from_config(config, timeout=7)

        usgs, eonet = aggregator.sources
        assert usgs.base_url == "https://quakes.example.com/query"
        assert usgs.limit == 5
        assert usgs.user_agent == "pulse-test"
        assert eonet.timeout == 3
        assert aggregator.timeout == 7


class TestAggregate:
    """Tests for Aggregator.aggregate()."""

    def test_merges_sources_newest_first(self):
        seismic = make_source("USGS", [
            make_event("q-old", minutes_ago=30),
            make_event("q-new", minutes_ago=1),
        ])
        environmental = make_source("NASA EONET", [
            make_event("e-mid", EventSource.ENVIRONMENTAL, minutes_ago=10),
        ])

        events = Aggregator([seismic, environmental]).aggregate(REFERENCE, 150)

        assert [e.id for e in events] == ["q-new", "e-mid", "q-old"]

    def test_passes_reference_and_radius(self):
        source = make_source("USGS")

        Aggregator([source]).aggregate(REFERENCE, 80)

        source.fetch.assert_called_once_with(REFERENCE, 80)

    def test_ties_keep_source_order(self):
        """Equal timestamps keep invocation order."""
        seismic = make_source("USGS", [make_event("q", minutes_ago=5)])
        environmental = make_source(
            "NASA EONET", [make_event("e", EventSource.ENVIRONMENTAL, minutes_ago=5)]
        )

        events = Aggregator([seismic, environmental]).aggregate(REFERENCE, 150)

        assert [e.id for e in events] == ["q", "e"]

    def test_drops_events_beyond_radius(self):
        source = make_source("USGS", [
            make_event("near", distance_km=50),
            make_event("far", distance_km=151),
            make_event("edge", distance_km=150),
        ])

        events = Aggregator([source]).aggregate(REFERENCE, 150)

        assert {e.id for e in events} == {"near", "edge"}
        assert all(e.distance_km <= 150 for e in events)

    def test_one_failed_source_is_partial(self):
        """A failing source doesn't hide the other's events."""
        seismic = make_source("USGS", error=NetworkError("USGS", "HTTP 503", 503))
        environmental = make_source(
            "NASA EONET", [make_event("e1", EventSource.ENVIRONMENTAL)]
        )

        result = Aggregator([seismic, environmental]).aggregate_with_report(REFERENCE, 150)

        assert [e.id for e in result.events] == ["e1"]
        assert result.partial is True
        assert result.failed_sources == ["USGS"]

    def test_all_sources_failing_raises(self):
        """AggregateFailure carries every underlying cause."""
        network = NetworkError("USGS", "HTTP 500", 500)
        malformed = FormatError("NASA EONET", "not JSON")
        seismic = make_source("USGS", error=network)
        environmental = make_source("NASA EONET", error=malformed)

        with pytest.raises(AggregateFailure) as exc_info:
            Aggregator([seismic, environmental]).aggregate(REFERENCE, 150)

        assert exc_info.value.errors == {"USGS": network, "NASA EONET": malformed}

    def test_unexpected_exception_is_captured(self):
        broken = make_source("USGS", error=RuntimeError("bug"))
        healthy = make_source("NASA EONET", [make_event("e1")])

        result = Aggregator([broken, healthy]).aggregate_with_report(REFERENCE, 150)

        assert isinstance(result.outcomes[0].error, RuntimeError)
        assert len(result.events) == 1

    def test_empty_success_is_not_failure(self):
        source = make_source("USGS", [])
        assert Aggregator([source]).aggregate(REFERENCE, 150) == []

    def test_slow_source_times_out_without_blocking(self):
        """A hung source is reported as a network failure."""
        release = threading.Event()

        def hang(reference, radius_km):
            release.wait(timeout=5)
            return []

        slow = Mock()
        slow.name = "USGS"
        slow.fetch.side_effect = hang
        fast = make_source("NASA EONET", [make_event("e1")])

        started = time.monotonic()
        try:
            result = Aggregator([slow, fast], timeout=0.2).aggregate_with_report(
                REFERENCE, 150
            )
        finally:
            release.set()
        elapsed = time.monotonic() - started

        assert elapsed < 2
        assert [e.id for e in result.events] == ["e1"]
        assert isinstance(result.outcomes[0].error, NetworkError)
        assert result.failed_sources == ["USGS"]

    @pytest.mark.parametrize("radius", [0, -5, float("nan")])
    def test_rejects_invalid_radius(self, radius):
        source = make_source("USGS")

        with pytest.raises(ValueError):
            Aggregator([source]).aggregate(REFERENCE, radius)

        source.fetch.assert_not_called()

    def test_rejects_non_finite_reference(self):
        with pytest.raises(ValueError):
            Aggregator([make_source("USGS")]).aggregate(Coordinate(float("inf"), 0.0), 150)


class TestAggregationResult:
    """Tests for AggregationResult."""

    def test_summary_all_succeeded(self):
        result = AggregationResult(
            events=[make_event("a")],
            outcomes=[AdapterOutcome("USGS"), AdapterOutcome("NASA EONET")],
            radius_km=150,
        )

        assert result.summary == "1 events within 150 km from 2/2 sources"
        assert result.partial is False

    def test_summary_names_failed_sources(self):
        result = AggregationResult(
            events=[],
            outcomes=[
                AdapterOutcome("USGS", error=NetworkError("USGS", "down")),
                AdapterOutcome("NASA EONET"),
            ],
            radius_km=50,
        )

        assert result.summary == "0 events within 50 km from 1/2 sources (failed: USGS)"
