"""Community alert models and parsing - Pure functions.

This module maps NWS-style alert features onto CommunityAlert objects and
owns the fixed demonstration dataset used when the live feed has nothing
to offer. All functions are pure with no side effects.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from src.core.events import parse_iso_timestamp
from src.core.severity import Severity, from_alert_level


# Maximum alerts kept from one feed response
DEFAULT_ALERT_LIMIT = 20


@dataclass(frozen=True)
class CommunityAlert:
    """Immutable community alert.

    Attributes:
        id: Alert identifier
        headline: Short headline
        description: Full alert text
        area: Affected area description
        updated: Time the alert was sent or became effective (UTC)
        source: Issuing organization
        level: Severity level
    """
    id: str
    headline: str
    description: str
    area: str
    updated: datetime
    source: str
    level: Severity


def parse_community_alert(
    feature: dict[str, Any],
    now: datetime,
) -> CommunityAlert | None:
    """Parse a single alert feature.

    Pure function.

    Args:
        feature: GeoJSON feature from the alert feed
        now: Fallback time when the alert carries no timestamp

    Returns:
        CommunityAlert or None if the feature is not an object
    """
    if not isinstance(feature, dict):
        return None

    props = feature.get("properties")
    if not isinstance(props, dict):
        props = {}

    updated = (
        parse_iso_timestamp(props.get("sent"))
        or parse_iso_timestamp(props.get("effective"))
        or now
    )

    return CommunityAlert(
        id=str(feature.get("id", "")),
        headline=props.get("headline") or props.get("event") or "Community alert",
        description=(
            props.get("description")
            or props.get("instruction")
            or "Stay tuned for additional information."
        ),
        area=props.get("areaDesc") or "Local area",
        updated=updated,
        source=props.get("senderName") or "NWS",
        level=from_alert_level(props.get("severity")),
    )


def parse_community_alerts(
    payload: Any,
    now: datetime,
    limit: int = DEFAULT_ALERT_LIMIT,
) -> list[CommunityAlert]:
    """Parse an alert feed response.

    Pure function. Returns an empty list for payloads without a usable
    feature list; the caller decides what to substitute.
    """
    if not isinstance(payload, dict):
        return []

    features = payload.get("features")
    if not isinstance(features, list):
        return []

    alerts = []
    for feature in features[:limit]:
        alert = parse_community_alert(feature, now)
        if alert is not None:
            alerts.append(alert)

    return alerts


def demo_alerts(now: datetime) -> list[CommunityAlert]:
    """Fixed demonstration alerts for offline use.

    Pure function.
    """
    return [
        CommunityAlert(
            id="mock-1",
            headline="Cooling center open downtown",
            description=(
                "City has activated the downtown wellness center with 150 beds, "
                "cold water, and translation services."
            ),
            area="Downtown core",
            updated=now,
            source="City Resilience Office",
            level=Severity.INFO,
        ),
        CommunityAlert(
            id="mock-2",
            headline="Road closure near riverfront",
            description="North River Drive is closed due to high water. Use 8th Avenue as a detour.",
            area="Riverfront district",
            updated=now - timedelta(minutes=45),
            source="Public Works",
            level=Severity.ALERT,
        ),
        CommunityAlert(
            id="mock-3",
            headline="Shelter activated at East High",
            description=(
                "Severe storms expected tonight. East High gym is open as an "
                "overnight shelter with medical staff on site."
            ),
            area="Eastborough",
            updated=now - timedelta(minutes=90),
            source="Emergency Management",
            level=Severity.EMERGENCY,
        ),
    ]


def filter_by_level(
    alerts: list[CommunityAlert],
    level: Severity | None = None,
) -> list[CommunityAlert]:
    """Keep alerts with exactly the given level.

    Pure function.

    Args:
        alerts: Alerts to filter
        level: Level to keep, None for all

    Returns:
        Filtered alerts, original order preserved
    """
    if level is None:
        return list(alerts)
    return [a for a in alerts if a.level == level]
