"""NASA EONET API Client - Imperative Shell.

EONET has no geographic query parameters; it returns every open event
worldwide and the radius filter runs client-side in the core module.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable

from src.core.config import DEFAULT_USER_AGENT, EONET_API_BASE
from src.core.events import EventSource, HazardEvent, parse_environmental_events
from src.core.geo import Coordinate
from src.shell.http_client import get_json


logger = logging.getLogger(__name__)


DEFAULT_TIMEOUT = 10


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EONETClient:
    """Environmental hazard source backed by NASA EONET open events.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    name = EventSource.ENVIRONMENTAL.value

    def __init__(
        self,
        base_url: str = EONET_API_BASE,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize EONET client.

        Args:
            base_url: EONET events endpoint
            timeout: Request timeout in seconds
            user_agent: User-Agent header value
            clock: Source of "now" for events without a date
        """
        self.base_url = base_url
        self.timeout = timeout
        self.user_agent = user_agent
        self.clock = clock

    def fetch_events(self) -> Any:
        """Fetch the raw open-event list.

        This method performs HTTP I/O.

        Raises:
            NetworkError: If the request fails or returns non-2xx
            FormatError: If the body is not JSON
        """
        logger.info("Fetching open events from NASA EONET")

        return get_json(
            self.name,
            self.base_url,
            params={"status": "open"},
            headers={"User-Agent": self.user_agent},
            timeout=self.timeout,
        )

    def fetch(self, reference: Coordinate, radius_km: float) -> list[HazardEvent]:
        """Fetch open environmental events near a point.

        Args:
            reference: Search center
            radius_km: Search radius in kilometers

        Returns:
            Events within the radius, in feed order

        Raises:
            NetworkError: If the request fails or returns non-2xx
            FormatError: If the response is not an event list
        """
        payload = self.fetch_events()
        events, stats = parse_environmental_events(
            payload,
            reference,
            radius_km,
            fetched_at=self.clock(),
        )

        if stats.skipped_invalid:
            logger.info(
                "Skipped %d EONET events with missing or malformed geometry",
                stats.skipped_invalid,
            )

        logger.info(
            "Kept %d of %d EONET events within %.0f km",
            stats.parsed,
            stats.received,
            radius_km,
        )

        return events
