"""Geolocation Client - Imperative Shell.

Resolves the device's approximate position with an IP geolocation
lookup. Every failure mode surfaces as GeolocationError; there is no
default location.
"""

import logging

import requests

from src.core.config import DEFAULT_USER_AGENT, GEOLOCATION_URL
from src.core.errors import GeolocationError
from src.core.geo import Coordinate


logger = logging.getLogger(__name__)


DEFAULT_TIMEOUT = 10


class IPGeolocationClient:
    """Platform geolocation via an IP lookup service.

    The service must return a JSON object with ``latitude`` and
    ``longitude`` fields (ipapi.co format).
    """

    def __init__(
        self,
        url: str = GEOLOCATION_URL,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.user_agent = user_agent

    def locate(self) -> Coordinate:
        """Look up the current position.

        This method performs HTTP I/O.

        Returns:
            Current coordinate

        Raises:
            GeolocationError: If the lookup fails, times out, or returns
                no usable coordinate
        """
        logger.info("Requesting location from %s", self.url)

        try:
            response = requests.get(
                self.url,
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            raise GeolocationError("Location request timed out") from e
        except requests.RequestException as e:
            raise GeolocationError(f"Location service unreachable: {e}") from e

        if not 200 <= response.status_code < 300:
            raise GeolocationError(
                f"Location service returned HTTP {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise GeolocationError("Location service returned invalid JSON") from e

        if not isinstance(data, dict):
            raise GeolocationError("Location service returned an unexpected payload")

        if data.get("error"):
            reason = data.get("reason") or "lookup rejected"
            raise GeolocationError(f"Location service rejected the request: {reason}")

        try:
            return Coordinate.from_values(data.get("latitude"), data.get("longitude"))
        except ValueError as e:
            raise GeolocationError("Location service returned no usable coordinate") from e
