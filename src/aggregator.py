"""Aggregator - Wires Functional Core and Imperative Shell.

This module fans a search out to every hazard source concurrently,
captures each source's outcome on its own, and hands the outcomes to the
pure merge logic in core. It's the "glue" between the feed clients and
the caller.
"""

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from typing import Protocol

from src.core.config import Config
from src.core.errors import AggregateFailure, NetworkError
from src.core.events import HazardEvent
from src.core.geo import Coordinate
from src.core.merge import AdapterOutcome, merge_outcomes
from src.shell.eonet_client import EONETClient
from src.shell.usgs_client import USGSClient


logger = logging.getLogger(__name__)


class HazardSource(Protocol):
    """A feed that can be searched around a point."""

    name: str

    def fetch(self, reference: Coordinate, radius_km: float) -> list[HazardEvent]:
        ...


@dataclass
class AggregationResult:
    """Result of one aggregation.

    Attributes:
        events: Merged events, newest first
        outcomes: Per-source outcomes, in invocation order
        radius_km: Radius the search used
    """
    events: list[HazardEvent]
    outcomes: list[AdapterOutcome]
    radius_km: float

    @property
    def failed_sources(self) -> list[str]:
        """Names of sources that failed."""
        return [o.source for o in self.outcomes if not o.success]

    @property
    def partial(self) -> bool:
        """True if at least one source failed."""
        return bool(self.failed_sources)

    @property
    def summary(self) -> str:
        """Human-readable summary of the aggregation."""
        ok = len(self.outcomes) - len(self.failed_sources)
        text = (
            f"{len(self.events)} events within {self.radius_km:.0f} km "
            f"from {ok}/{len(self.outcomes)} sources"
        )
        if self.failed_sources:
            text += f" (failed: {', '.join(self.failed_sources)})"
        return text


def _validate_request(reference: Coordinate, radius_km: float) -> None:
    if not reference.is_finite:
        raise ValueError(f"Reference coordinate must be finite, got {reference}")
    if not radius_km > 0:
        raise ValueError(f"Radius must be positive, got {radius_km}")


class Aggregator:
    """Runs every hazard source concurrently and merges what succeeds.

    Sources are invoked in list order; that order also breaks timestamp
    ties in the merged result. A failing or slow source never cancels or
    delays the others beyond the wait timeout.
    """

    def __init__(
        self,
        sources: list[HazardSource] | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize aggregator.

        Args:
            sources: Hazard sources (USGS + EONET if not provided)
            timeout: Seconds to wait for each source, None to wait indefinitely

        Raises:
            ValueError: If two sources share a name
        """
        self.sources = sources if sources is not None else [USGSClient(), EONETClient()]

        # Outcomes and failure causes are keyed by source name
        names = [source.name for source in self.sources]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Hazard source names must be unique, got duplicates: {duplicates}")

        self.timeout = timeout

    @classmethod
    def from_config(cls, config: Config, timeout: float | None = None) -> "Aggregator":
        """Build an aggregator with clients configured from ``config``."""
        feeds = config.feeds
        return cls(
            sources=[
                USGSClient(
                    base_url=feeds.seismic_url,
                    timeout=feeds.timeout_seconds,
                    user_agent=feeds.user_agent,
                    limit=feeds.seismic_limit,
                ),
                EONETClient(
                    base_url=feeds.environmental_url,
                    timeout=feeds.timeout_seconds,
                    user_agent=feeds.user_agent,
                ),
            ],
            timeout=timeout,
        )

    def _run_source(
        self,
        source: HazardSource,
        reference: Coordinate,
        radius_km: float,
    ) -> AdapterOutcome:
        """Invoke one source, capturing its failure instead of raising."""
        try:
            events = source.fetch(reference, radius_km)
        except Exception as e:
            logger.warning("Hazard source %s failed: %s", source.name, e)
            return AdapterOutcome(source=source.name, error=e)

        return AdapterOutcome(source=source.name, events=tuple(events))

    def _collect(
        self,
        futures: list[tuple[HazardSource, Future]],
        timeout: float | None,
    ) -> list[AdapterOutcome]:
        """Wait for every future, in invocation order."""
        deadline = None if timeout is None else time.monotonic() + timeout
        outcomes = []

        for source, future in futures:
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            try:
                outcomes.append(future.result(timeout=remaining))
            except FutureTimeoutError:
                logger.warning(
                    "Hazard source %s did not respond within %.1fs",
                    source.name,
                    timeout,
                )
                future.cancel()
                outcomes.append(AdapterOutcome(
                    source=source.name,
                    error=NetworkError(source.name, f"no response within {timeout}s"),
                ))

        return outcomes

    def aggregate_with_report(
        self,
        reference: Coordinate,
        radius_km: float,
        timeout: float | None = None,
    ) -> AggregationResult:
        """Search every source and report per-source outcomes.

        Args:
            reference: Search center
            radius_km: Search radius in kilometers
            timeout: Per-source wait timeout (overrides the instance default)

        Returns:
            AggregationResult with merged events and outcomes

        Raises:
            ValueError: If the reference is not finite or the radius not positive
            AggregateFailure: If every source failed
        """
        _validate_request(reference, radius_km)
        wait_timeout = timeout if timeout is not None else self.timeout

        logger.info(
            "Aggregating hazards within %.0f km of (%.4f, %.4f) from %d sources",
            radius_km,
            reference.latitude,
            reference.longitude,
            len(self.sources),
        )

        executor = ThreadPoolExecutor(
            max_workers=max(1, len(self.sources)),
            thread_name_prefix="hazard-source",
        )
        try:
            futures = [
                (source, executor.submit(self._run_source, source, reference, radius_km))
                for source in self.sources
            ]
            outcomes = self._collect(futures, wait_timeout)
        finally:
            # Don't block on sources that timed out
            executor.shutdown(wait=False, cancel_futures=True)

        try:
            events = merge_outcomes(outcomes, radius_km)
        except AggregateFailure as e:
            logger.error("Aggregation failed: %s", e)
            raise

        result = AggregationResult(
            events=events,
            outcomes=outcomes,
            radius_km=radius_km,
        )
        logger.info("Completed: %s", result.summary)
        return result

    def aggregate(
        self,
        reference: Coordinate,
        radius_km: float,
        timeout: float | None = None,
    ) -> list[HazardEvent]:
        """Search every source and return the merged events.

        Fails only if every source fails.

        Raises:
            ValueError: If the reference is not finite or the radius not positive
            AggregateFailure: If every source failed
        """
        return self.aggregate_with_report(reference, radius_km, timeout).events
