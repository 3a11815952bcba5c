"""Severity classification - Pure functions.

Each feed exposes a different raw signal, so each gets its own rule.
All rules map onto the same three-level Severity scale.
"""

import math
from enum import Enum


class Severity(str, Enum):
    """Three-level severity, derived from source-specific fields."""
    INFO = "info"
    ALERT = "alert"
    EMERGENCY = "emergency"


# Magnitude thresholds (inclusive)
EMERGENCY_MAGNITUDE = 6.0
ALERT_MAGNITUDE = 4.0

# Category keywords, checked in this order
EMERGENCY_CATEGORIES = ("wildfire", "volcano", "severe storms")
ALERT_CATEGORIES = ("earthquake", "floods", "hurricanes")

EMERGENCY_ALERT_LEVELS = frozenset({"extreme", "severe"})
ALERT_ALERT_LEVELS = frozenset({"moderate"})


def from_magnitude(magnitude: float | None) -> Severity:
    """Classify a seismic magnitude.

    Pure function.

    Args:
        magnitude: Event magnitude, None if not reported

    Returns:
        EMERGENCY for >= 6.0, ALERT for >= 4.0, INFO otherwise or when absent
    """
    if magnitude is None or math.isnan(magnitude):
        return Severity.INFO

    if magnitude >= EMERGENCY_MAGNITUDE:
        return Severity.EMERGENCY
    if magnitude >= ALERT_MAGNITUDE:
        return Severity.ALERT
    return Severity.INFO


def from_category_label(label: str | None) -> Severity:
    """Classify an environmental event category label.

    Pure function. Case-insensitive substring match; emergency keywords
    win over alert keywords.
    """
    if not label:
        return Severity.INFO

    normalized = label.lower()
    if any(keyword in normalized for keyword in EMERGENCY_CATEGORIES):
        return Severity.EMERGENCY
    if any(keyword in normalized for keyword in ALERT_CATEGORIES):
        return Severity.ALERT
    return Severity.INFO


def from_alert_level(level: str | None) -> Severity:
    """Classify a textual alert severity ("Extreme", "Moderate", ...).

    Pure function.
    """
    normalized = (level or "").strip().lower()
    if normalized in EMERGENCY_ALERT_LEVELS:
        return Severity.EMERGENCY
    if normalized in ALERT_ALERT_LEVELS:
        return Severity.ALERT
    return Severity.INFO
