"""Functional Core - Pure functions with no side effects.

This module contains all business logic as pure functions:
- Geo/distance calculations
- Severity classification
- Feed parsing into the unified event model
- Community alert parsing and fallback data
- Merging per-source results

All functions here are deterministic and have no I/O.
"""

from src.core.alerts import CommunityAlert, demo_alerts, filter_by_level, parse_community_alerts
from src.core.errors import (
    AggregateFailure,
    FormatError,
    GeolocationError,
    HazardEngineError,
    NetworkError,
)
from src.core.events import (
    EventSource,
    HazardEvent,
    ParseStats,
    parse_environmental_events,
    parse_seismic_features,
)
from src.core.geo import Coordinate, calculate_distance, format_distance, is_within_radius
from src.core.merge import AdapterOutcome, merge_outcomes
from src.core.severity import Severity, from_alert_level, from_category_label, from_magnitude

__all__ = [
    # Geo
    "Coordinate",
    "calculate_distance",
    "format_distance",
    "is_within_radius",
    # Severity
    "Severity",
    "from_magnitude",
    "from_category_label",
    "from_alert_level",
    # Events
    "EventSource",
    "HazardEvent",
    "ParseStats",
    "parse_seismic_features",
    "parse_environmental_events",
    # Alerts
    "CommunityAlert",
    "parse_community_alerts",
    "demo_alerts",
    "filter_by_level",
    # Merge
    "AdapterOutcome",
    "merge_outcomes",
    # Errors
    "HazardEngineError",
    "NetworkError",
    "FormatError",
    "GeolocationError",
    "AggregateFailure",
]
