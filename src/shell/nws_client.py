"""Community Alert Feed Client - Imperative Shell.

This module fetches active alerts from an NWS-compatible feed. When the
feed cannot supply anything (unreachable, non-2xx, unparseable or empty)
the fixed demonstration alerts are returned instead, so the alert view
always has content to show.
"""

import logging
import os
from datetime import datetime, timezone
from typing import Callable

from src.core.alerts import DEFAULT_ALERT_LIMIT, CommunityAlert, demo_alerts, parse_community_alerts
from src.core.config import DEFAULT_USER_AGENT, NWS_ALERTS_URL
from src.core.errors import FormatError, NetworkError
from src.shell.http_client import get_json


logger = logging.getLogger(__name__)


# Environment variable that overrides the alert feed endpoint
ALERT_FEED_ENV_VAR = "NWS_ALERT_FEED"

DEFAULT_TIMEOUT = 10


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def default_alert_feed_url() -> str:
    """Alert feed URL from the environment, or the public NWS feed."""
    return os.environ.get(ALERT_FEED_ENV_VAR) or NWS_ALERTS_URL


class CommunityAlertClient:
    """Client for the community alert feed.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    name = "NWS"

    def __init__(
        self,
        feed_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        limit: int = DEFAULT_ALERT_LIMIT,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize alert client.

        Args:
            feed_url: Alert feed URL (defaults to NWS_ALERT_FEED or public NWS feed)
            timeout: Request timeout in seconds
            user_agent: User-Agent header value
            limit: Maximum alerts kept from one response
            clock: Source of "now" for timestamps and fallback data
        """
        self.feed_url = feed_url or default_alert_feed_url()
        self.timeout = timeout
        self.user_agent = user_agent
        self.limit = limit
        self.clock = clock

    def fetch_alerts(self) -> list[CommunityAlert]:
        """Fetch current community alerts.

        This method performs HTTP I/O. It never raises for feed problems;
        the demonstration alerts are returned instead.

        Returns:
            Parsed alerts, or the three demonstration alerts
        """
        now = self.clock()

        logger.info("Fetching community alerts from %s", self.feed_url)

        try:
            payload = get_json(
                self.name,
                self.feed_url,
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
            )
        except (NetworkError, FormatError) as e:
            logger.warning("Alert feed unavailable (%s), using demonstration alerts", e)
            return demo_alerts(now)

        alerts = parse_community_alerts(payload, now, limit=self.limit)

        if not alerts:
            logger.warning("Alert feed returned no alerts, using demonstration alerts")
            return demo_alerts(now)

        logger.info("Fetched %d community alerts", len(alerts))
        return alerts
