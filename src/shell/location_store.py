"""Location Cache - Imperative Shell.

This module persists the single last known coordinate to a local JSON
file. There is exactly one slot, stored under a fixed key; every save
overwrites it.

All I/O is contained here; (de)serialization helpers are in the core module.
"""

import json
import logging
from pathlib import Path

from src.core.config import DEFAULT_LOCATION_CACHE
from src.core.geo import Coordinate
from src.core.location import LOCATION_STORAGE_KEY, coordinate_from_dict, coordinate_to_dict


logger = logging.getLogger(__name__)


class LocationStore:
    """File-backed single-slot store for the last known coordinate.

    File structure:
    {
        "community-pulse:last-location": {"latitude": 34.07, "longitude": -84.29}
    }
    """

    def __init__(
        self,
        path: str | Path = DEFAULT_LOCATION_CACHE,
        key: str = LOCATION_STORAGE_KEY,
    ) -> None:
        """Initialize the store.

        Args:
            path: Cache file path (``~`` is expanded)
            key: Key the coordinate is stored under
        """
        self.path = Path(path).expanduser()
        self.key = key

    def load(self) -> Coordinate | None:
        """Read the cached coordinate.

        This method performs file I/O. A missing, unreadable or corrupt
        cache is treated as empty.

        Returns:
            Cached coordinate, or None
        """
        if not self.path.exists():
            return None

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable location cache %s: %s", self.path, str(e))
            return None

        if not isinstance(data, dict):
            logger.warning("Ignoring malformed location cache %s", self.path)
            return None

        coordinate = coordinate_from_dict(data.get(self.key))
        if coordinate is None:
            logger.warning("Location cache %s has no valid coordinate", self.path)
            return None

        logger.info(
            "Loaded cached location (%.4f, %.4f)",
            coordinate.latitude,
            coordinate.longitude,
        )
        return coordinate

    def save(self, coordinate: Coordinate) -> bool:
        """Overwrite the cached coordinate.

        This method performs file I/O.

        Args:
            coordinate: Coordinate to persist

        Returns:
            True if save was successful
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump({self.key: coordinate_to_dict(coordinate)}, f)
        except OSError as e:
            logger.error("Failed to save location cache %s: %s", self.path, str(e))
            return False

        logger.info("Saved location to %s", self.path)
        return True
