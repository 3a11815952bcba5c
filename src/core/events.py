"""Hazard event models and feed parsing - Pure functions.

This module maps the native payloads of the seismic (USGS GeoJSON) and
environmental (NASA EONET) feeds onto one HazardEvent model, attaching
distance and severity along the way. All functions are pure with no
side effects.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from src.core.errors import FormatError
from src.core.geo import Coordinate, calculate_distance
from src.core.severity import Severity, from_category_label, from_magnitude


class EventSource(str, Enum):
    """Feed an event came from."""
    SEISMIC = "USGS"
    ENVIRONMENTAL = "NASA EONET"


DEFAULT_SEISMIC_TITLE = "Earthquake"
DEFAULT_SEISMIC_DESCRIPTION = "Nearby seismic activity detected."
DEFAULT_ENVIRONMENTAL_DESCRIPTION = "Environmental event"


@dataclass(frozen=True)
class HazardEvent:
    """Immutable, source-independent hazard event.

    Attributes:
        id: Event ID, unique within its source
        title: Human-readable summary
        description: Longer description (may be empty)
        source: Feed the event came from
        coordinates: Event location
        severity: Derived severity level
        timestamp: Occurrence or detection time (UTC)
        distance_km: Distance from the reference point, None if unknown
        magnitude: Display-only magnitude or category label
    """
    id: str
    title: str
    description: str
    source: EventSource
    coordinates: Coordinate
    severity: Severity
    timestamp: datetime
    distance_km: float | None = None
    magnitude: str | None = None


@dataclass
class ParseStats:
    """Diagnostic counters for one feed response.

    Attributes:
        received: Records present in the payload
        parsed: Records kept
        skipped_invalid: Records dropped for missing/malformed geometry or time
        skipped_out_of_radius: Records dropped by the radius filter
    """
    received: int = 0
    parsed: int = 0
    skipped_invalid: int = 0
    skipped_out_of_radius: int = 0

    @property
    def skipped(self) -> int:
        """Total records dropped."""
        return self.skipped_invalid + self.skipped_out_of_radius


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def coordinate_from_position(position: Any) -> Coordinate | None:
    """Read a GeoJSON ``[longitude, latitude, ...]`` position.

    Pure function.

    Returns:
        Coordinate, or None if the position is not two finite numbers
    """
    if not isinstance(position, (list, tuple)) or len(position) < 2:
        return None

    longitude, latitude = position[0], position[1]
    if not (_is_number(longitude) and _is_number(latitude)):
        return None

    return Coordinate(latitude=float(latitude), longitude=float(longitude))


def parse_iso_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Pure function. Naive values are assumed to be UTC.
    """
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _optional_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


# ---------------------------------------------------------------------------
# Seismic feed (USGS GeoJSON)
# ---------------------------------------------------------------------------

def parse_seismic_feature(
    feature: dict[str, Any],
    reference: Coordinate,
) -> HazardEvent | None:
    """Parse a single USGS GeoJSON feature into a HazardEvent.

    Pure function: takes raw dict, returns HazardEvent or None if the
    feature has no usable coordinate or time.

    Args:
        feature: GeoJSON feature dict from the USGS API
        reference: Point distances are measured from

    Returns:
        HazardEvent or None if parsing fails
    """
    try:
        props = feature.get("properties") or {}
        geometry = feature.get("geometry") or {}

        coordinates = coordinate_from_position(geometry.get("coordinates"))
        if coordinates is None:
            return None

        # USGS uses milliseconds since epoch
        time_ms = props.get("time")
        if not _is_number(time_ms):
            return None
        event_time = datetime.fromtimestamp(time_ms / 1000, tz=timezone.utc)

        magnitude = _optional_float(props.get("mag"))
        if magnitude is not None and not math.isfinite(magnitude):
            magnitude = None
        magnitude_label = f"{magnitude:.1f}" if magnitude is not None else None

        return HazardEvent(
            id=str(feature.get("id", "")),
            title=props.get("title") or DEFAULT_SEISMIC_TITLE,
            description=props.get("place") or DEFAULT_SEISMIC_DESCRIPTION,
            source=EventSource.SEISMIC,
            coordinates=coordinates,
            severity=from_magnitude(magnitude),
            timestamp=event_time,
            distance_km=calculate_distance(reference, coordinates),
            magnitude=magnitude_label,
        )
    except (AttributeError, OverflowError, OSError, TypeError, ValueError):
        return None


def parse_seismic_features(
    geojson: Any,
    reference: Coordinate,
    radius_km: float,
) -> tuple[list[HazardEvent], ParseStats]:
    """Parse a USGS FeatureCollection, keeping events within the radius.

    Pure function. The radius filter is applied even though the USGS query
    already filters server-side.

    Raises:
        FormatError: If the payload is not a FeatureCollection-shaped object
    """
    if not isinstance(geojson, dict):
        raise FormatError(EventSource.SEISMIC.value, "response is not a JSON object")

    features = geojson.get("features", [])
    if features is None:
        features = []
    if not isinstance(features, list):
        raise FormatError(EventSource.SEISMIC.value, "'features' is not a list")

    stats = ParseStats(received=len(features))
    events = []

    for feature in features:
        event = parse_seismic_feature(feature, reference) if isinstance(feature, dict) else None
        if event is None:
            stats.skipped_invalid += 1
            continue
        if event.distance_km is not None and event.distance_km > radius_km:
            stats.skipped_out_of_radius += 1
            continue
        events.append(event)

    stats.parsed = len(events)
    return events, stats


# ---------------------------------------------------------------------------
# Environmental feed (NASA EONET)
# ---------------------------------------------------------------------------

def _first(items: Any) -> Any:
    if isinstance(items, list) and items:
        return items[0]
    return None


def category_label(event: dict[str, Any]) -> str:
    """Title of the event's first category, or empty string."""
    category = _first(event.get("categories"))
    if isinstance(category, dict):
        return category.get("title") or ""
    return ""


def parse_environmental_event(
    event: dict[str, Any],
    reference: Coordinate,
    fetched_at: datetime,
) -> HazardEvent | None:
    """Parse a single EONET event into a HazardEvent.

    Pure function. Only the first geometry entry is used.

    Args:
        event: Event dict from the EONET API
        reference: Point distances are measured from
        fetched_at: Timestamp used when the geometry carries no date

    Returns:
        HazardEvent or None if the geometry is absent or malformed
    """
    try:
        geometry = _first(event.get("geometry"))
        if not isinstance(geometry, dict):
            return None

        coordinates = coordinate_from_position(geometry.get("coordinates"))
        if coordinates is None:
            return None

        label = category_label(event)
        timestamp = parse_iso_timestamp(geometry.get("date")) or fetched_at

        return HazardEvent(
            id=str(event.get("id", "")),
            title=event.get("title") or "",
            description=event.get("description") or label or DEFAULT_ENVIRONMENTAL_DESCRIPTION,
            source=EventSource.ENVIRONMENTAL,
            coordinates=coordinates,
            severity=from_category_label(label),
            timestamp=timestamp,
            distance_km=calculate_distance(reference, coordinates),
            magnitude=label or None,
        )
    except (AttributeError, TypeError, ValueError):
        return None


def parse_environmental_events(
    payload: Any,
    reference: Coordinate,
    radius_km: float,
    fetched_at: datetime,
) -> tuple[list[HazardEvent], ParseStats]:
    """Parse an EONET event list, keeping events within the radius.

    Pure function. EONET returns a global list, so the radius filter here
    is the only geographic filtering applied.

    Raises:
        FormatError: If the payload is not an event-list-shaped object
    """
    if not isinstance(payload, dict):
        raise FormatError(EventSource.ENVIRONMENTAL.value, "response is not a JSON object")

    raw_events = payload.get("events", [])
    if raw_events is None:
        raw_events = []
    if not isinstance(raw_events, list):
        raise FormatError(EventSource.ENVIRONMENTAL.value, "'events' is not a list")

    stats = ParseStats(received=len(raw_events))
    events = []

    for raw in raw_events:
        event = (
            parse_environmental_event(raw, reference, fetched_at)
            if isinstance(raw, dict) else None
        )
        if event is None:
            stats.skipped_invalid += 1
            continue
        if event.distance_km is not None and event.distance_km > radius_km:
            stats.skipped_out_of_radius += 1
            continue
        events.append(event)

    stats.parsed = len(events)
    return events, stats
