"""Geographic calculations - Pure functions.

This module provides the coordinate type and distance calculations used to
place hazard events relative to a reference point.
All functions are pure with no side effects.
"""

import math
from dataclasses import dataclass


# Earth's radius in kilometers
EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class Coordinate:
    """Immutable WGS84 coordinate in degrees.

    Attributes:
        latitude: Latitude in degrees
        longitude: Longitude in degrees
    """
    latitude: float
    longitude: float

    @classmethod
    def from_values(cls, latitude: object, longitude: object) -> "Coordinate":
        """Build a coordinate from untrusted input.

        Raises:
            ValueError: If either value is not a finite number
        """
        try:
            lat = float(latitude)  # type: ignore[arg-type]
            lon = float(longitude)  # type: ignore[arg-type]
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid coordinate ({latitude!r}, {longitude!r})") from e

        if not (math.isfinite(lat) and math.isfinite(lon)):
            raise ValueError(f"Coordinate must be finite, got ({lat}, {lon})")

        return cls(latitude=lat, longitude=lon)

    @property
    def is_finite(self) -> bool:
        """True if both components are finite numbers."""
        return math.isfinite(self.latitude) and math.isfinite(self.longitude)


def calculate_distance(a: Coordinate, b: Coordinate) -> float:
    """Calculate great-circle distance between two points using Haversine formula.

    Pure function.

    Args:
        a: First point
        b: Second point

    Returns:
        Distance in kilometers
    """
    # Convert to radians
    lat1_rad = math.radians(a.latitude)
    lat2_rad = math.radians(b.latitude)
    delta_lat = math.radians(b.latitude - a.latitude)
    delta_lon = math.radians(b.longitude - a.longitude)

    # Haversine formula
    h = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return EARTH_RADIUS_KM * c


def is_within_radius(
    reference: Coordinate,
    point: Coordinate,
    radius_km: float,
) -> bool:
    """Check if a point is within a radius of the reference point.

    Pure function. The boundary is inclusive.

    Args:
        reference: Center point
        point: Point to check
        radius_km: Radius in kilometers

    Returns:
        True if point is within radius
    """
    return calculate_distance(reference, point) <= radius_km


def format_distance(distance_km: float) -> str:
    """Format a distance for display.

    Pure function.

    Examples:
        0.4 -> "400 m"
        152.3 -> "152 km"
        5570.0 -> "5.6 Mm"
    """
    if distance_km < 1:
        return f"{distance_km * 1000:.0f} m"

    if distance_km > 1000:
        return f"{distance_km / 1000:.1f} Mm"

    return f"{distance_km:.0f} km"
