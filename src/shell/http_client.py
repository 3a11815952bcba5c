"""HTTP helper shared by the feed clients - Imperative Shell.

Translates requests' failure modes into the engine's error taxonomy so
every feed client fails the same way.
"""

import logging
from typing import Any

import requests

from src.core.errors import FormatError, NetworkError


logger = logging.getLogger(__name__)


def get_json(
    source: str,
    url: str,
    params: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
    timeout: float = 10.0,
) -> Any:
    """GET a URL and decode its JSON body.

    This function performs HTTP I/O.

    Args:
        source: Feed name used in errors and logs
        url: Endpoint URL
        params: Query parameters
        headers: Request headers
        timeout: Request timeout in seconds

    Returns:
        Decoded JSON body

    Raises:
        NetworkError: If the endpoint is unreachable, times out, or
            returns a non-2xx status
        FormatError: If the body is not valid JSON
    """
    try:
        response = requests.get(
            url,
            params=params,
            headers=headers,
            timeout=timeout,
        )
    except requests.Timeout as e:
        logger.error("%s request timed out after %.1fs", source, timeout)
        raise NetworkError(source, "request timed out") from e
    except requests.RequestException as e:
        logger.error("%s request failed: %s", source, str(e))
        raise NetworkError(source, str(e)) from e

    if not 200 <= response.status_code < 300:
        logger.warning(
            "%s returned non-2xx: %d",
            source,
            response.status_code,
        )
        raise NetworkError(
            source,
            f"HTTP {response.status_code}",
            status_code=response.status_code,
        )

    try:
        return response.json()
    except ValueError as e:
        logger.error("%s returned a body that is not JSON", source)
        raise FormatError(source, "response body is not valid JSON") from e
