"""Location resolution state - Pure data structures.

The stateful provider lives in the shell layer; this module only defines
the states it moves through and the snapshot it hands to callers.
"""

from dataclasses import dataclass
from enum import Enum

from src.core.geo import Coordinate


# Fixed key the last known coordinate is stored under
LOCATION_STORAGE_KEY = "community-pulse:last-location"


class LocationStatus(str, Enum):
    """Resolution state of the location provider."""
    IDLE = "idle"
    RESOLVING = "resolving"
    FAILED = "failed"


@dataclass(frozen=True)
class LocationSnapshot:
    """Point-in-time view of the location provider.

    Attributes:
        status: Current resolution state
        coordinate: Last known coordinate, if any
        error: Reason for the last failure (FAILED only)
    """
    status: LocationStatus
    coordinate: Coordinate | None = None
    error: str | None = None

    @property
    def has_location(self) -> bool:
        """True if a coordinate is available."""
        return self.coordinate is not None


def coordinate_to_dict(coordinate: Coordinate) -> dict[str, float]:
    """Serialize a coordinate for storage."""
    return {
        "latitude": coordinate.latitude,
        "longitude": coordinate.longitude,
    }


def coordinate_from_dict(data: object) -> Coordinate | None:
    """Deserialize a stored coordinate.

    Pure function.

    Returns:
        Coordinate, or None if the data is not a finite lat/lon mapping
    """
    if not isinstance(data, dict):
        return None
    try:
        return Coordinate.from_values(data.get("latitude"), data.get("longitude"))
    except ValueError:
        return None
