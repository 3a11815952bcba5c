"""Location Provider - Imperative Shell.

Resolves the reference coordinate for an aggregation: either from the
platform geolocator or from a manual override, persisting every resolved
coordinate to the single-slot cache.

States:
    IDLE      - nothing outstanding; may or may not hold a coordinate
    RESOLVING - a geolocation request is in flight
    FAILED    - the last request was rejected, timed out, or unsupported
"""

import logging
import threading
from typing import Protocol

from src.core.errors import GeolocationError
from src.core.geo import Coordinate
from src.core.location import LocationSnapshot, LocationStatus
from src.shell.location_store import LocationStore


logger = logging.getLogger(__name__)


UNSUPPORTED_MESSAGE = "Geolocation is not supported on this platform."


class Geolocator(Protocol):
    """Platform geolocation capability."""

    def locate(self) -> Coordinate:
        ...


class LocationProvider:
    """Tracks the user's reference coordinate.

    The cache is read once at construction; a cached coordinate seeds the
    provider without triggering a resolution.
    """

    def __init__(
        self,
        store: LocationStore,
        geolocator: Geolocator | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            store: Single-slot coordinate cache
            geolocator: Platform geolocator, None if unsupported
        """
        self.store = store
        self.geolocator = geolocator
        self._lock = threading.Lock()
        self._status = LocationStatus.IDLE
        self._coordinate: Coordinate | None = store.load()
        self._error: str | None = None
        self._in_flight = False
        self._overrides = 0

    @property
    def status(self) -> LocationStatus:
        return self._status

    @property
    def coordinate(self) -> Coordinate | None:
        return self._coordinate

    @property
    def error(self) -> str | None:
        return self._error

    def snapshot(self) -> LocationSnapshot:
        """Current state as an immutable snapshot."""
        with self._lock:
            return LocationSnapshot(
                status=self._status,
                coordinate=self._coordinate,
                error=self._error,
            )

    def _fail(self, message: str, overrides_seen: int | None = None) -> None:
        with self._lock:
            if overrides_seen is not None and overrides_seen != self._overrides:
                # A manual location was set while the request was running
                logger.info("Location request failed after manual override: %s", message)
                return
            self._status = LocationStatus.FAILED
            self._error = message
        logger.warning("Location request failed: %s", message)

    def request_location(self) -> Coordinate | None:
        """Resolve the current position with the platform geolocator.

        Only one platform request is outstanding at a time. A call made
        while one is in flight does nothing and returns the currently held
        coordinate, even if a manual override has since returned the
        provider to IDLE.

        Returns:
            Resolved coordinate (or the held one, if already resolving)

        Raises:
            GeolocationError: If the platform rejects, times out, or does
                not support the request. The provider moves to FAILED
                unless a manual location was set while it was running.
        """
        with self._lock:
            if self._in_flight:
                logger.info("Location request already in progress, ignoring")
                return self._coordinate
            geolocator = self.geolocator
            if geolocator is not None:
                self._in_flight = True
                self._status = LocationStatus.RESOLVING
            overrides_seen = self._overrides

        if geolocator is None:
            self._fail(UNSUPPORTED_MESSAGE)
            raise GeolocationError(UNSUPPORTED_MESSAGE)

        try:
            try:
                coordinate = geolocator.locate()
            except GeolocationError as e:
                self._fail(str(e), overrides_seen)
                raise
            except Exception as e:
                self._fail(f"Unexpected geolocation failure: {e}", overrides_seen)
                raise GeolocationError(f"Unexpected geolocation failure: {e}") from e

            self._accept(coordinate)
        finally:
            with self._lock:
                self._in_flight = False

        logger.info(
            "Resolved location (%.4f, %.4f)",
            coordinate.latitude,
            coordinate.longitude,
        )
        return coordinate

    def set_location(self, coordinate: Coordinate) -> None:
        """Manually set the reference coordinate.

        Accepted in any state; the provider moves to IDLE.

        Raises:
            ValueError: If the coordinate is not finite
        """
        if not coordinate.is_finite:
            raise ValueError(f"Coordinate must be finite, got {coordinate}")

        self._accept(coordinate, manual=True)
        logger.info(
            "Location set manually to (%.4f, %.4f)",
            coordinate.latitude,
            coordinate.longitude,
        )

    def _accept(self, coordinate: Coordinate, manual: bool = False) -> None:
        with self._lock:
            if manual:
                self._overrides += 1
            self._coordinate = coordinate
            self._status = LocationStatus.IDLE
            self._error = None
        self.store.save(coordinate)
