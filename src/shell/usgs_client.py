"""USGS API Client - Imperative Shell.

This module handles HTTP communication with the USGS Earthquake API.
All I/O is contained here; parsing and classification are in the core module.
"""

import logging
from typing import Any

from src.core.config import DEFAULT_USER_AGENT, USGS_API_BASE
from src.core.events import EventSource, HazardEvent, parse_seismic_features
from src.core.geo import Coordinate
from src.shell.http_client import get_json


logger = logging.getLogger(__name__)


# Default timeout for API requests (seconds)
DEFAULT_TIMEOUT = 10

# USGS returns at most this many events per query; no pagination
DEFAULT_LIMIT = 25


class USGSClient:
    """Seismic hazard source backed by the USGS FDSN event service.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    name = EventSource.SEISMIC.value

    def __init__(
        self,
        base_url: str = USGS_API_BASE,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        limit: int = DEFAULT_LIMIT,
    ) -> None:
        """Initialize USGS client.

        Args:
            base_url: USGS API base URL
            timeout: Request timeout in seconds
            user_agent: User-Agent header value
            limit: Maximum number of events to request
        """
        self.base_url = base_url
        self.timeout = timeout
        self.user_agent = user_agent
        self.limit = limit

    def _build_params(self, reference: Coordinate, radius_km: float) -> dict[str, str]:
        """Build query parameters for USGS API request.

        Args:
            reference: Search center
            radius_km: Search radius

        Returns:
            Dict of URL query parameters
        """
        return {
            "format": "geojson",
            "latitude": str(reference.latitude),
            "longitude": str(reference.longitude),
            "maxradiuskm": str(radius_km),
            "limit": str(self.limit),
            "orderby": "time",
        }

    def fetch_geojson(self, reference: Coordinate, radius_km: float) -> Any:
        """Fetch the raw GeoJSON response.

        This method performs HTTP I/O.

        Raises:
            NetworkError: If the request fails or returns non-2xx
            FormatError: If the body is not JSON
        """
        params = self._build_params(reference, radius_km)

        logger.info(
            "Fetching earthquakes from USGS",
            extra={"params": params},
        )

        return get_json(
            self.name,
            self.base_url,
            params=params,
            headers={"User-Agent": self.user_agent},
            timeout=self.timeout,
        )

    def fetch(self, reference: Coordinate, radius_km: float) -> list[HazardEvent]:
        """Fetch earthquakes near a point as hazard events.

        Args:
            reference: Search center
            radius_km: Search radius in kilometers

        Returns:
            Events within the radius, in feed order

        Raises:
            NetworkError: If the request fails or returns non-2xx
            FormatError: If the response is not a FeatureCollection
        """
        geojson = self.fetch_geojson(reference, radius_km)
        events, stats = parse_seismic_features(geojson, reference, radius_km)

        logger.info(
            "Fetched %d earthquakes from USGS (%d received, %d malformed, %d out of radius)",
            stats.parsed,
            stats.received,
            stats.skipped_invalid,
            stats.skipped_out_of_radius,
        )

        return events
