"""Result merging for the aggregator - Pure functions.

Each hazard source produces an independent outcome; this module decides
what the caller sees once all outcomes are in.
"""

from dataclasses import dataclass, field

from src.core.errors import AggregateFailure
from src.core.events import HazardEvent, ParseStats


@dataclass(frozen=True)
class AdapterOutcome:
    """Result of invoking one hazard source.

    Attributes:
        source: Name of the source
        events: Events returned on success
        error: Exception raised on failure
        stats: Parse diagnostics, if the source reported them
    """
    source: str
    events: tuple[HazardEvent, ...] = field(default_factory=tuple)
    error: Exception | None = None
    stats: ParseStats | None = None

    @property
    def success(self) -> bool:
        """True if the source returned events (possibly none)."""
        return self.error is None


def sort_by_recency(events: list[HazardEvent]) -> list[HazardEvent]:
    """Sort events newest first.

    Pure function. The sort is stable, so events with equal timestamps
    keep their relative order.
    """
    return sorted(events, key=lambda e: e.timestamp, reverse=True)


def within_radius(events: list[HazardEvent], radius_km: float) -> list[HazardEvent]:
    """Drop events known to lie beyond the radius.

    Pure function. Events with unknown distance are kept.
    """
    return [
        e for e in events
        if e.distance_km is None or e.distance_km <= radius_km
    ]


def merge_outcomes(
    outcomes: list[AdapterOutcome],
    radius_km: float,
) -> list[HazardEvent]:
    """Merge per-source outcomes into one list.

    Pure function. Successful outcomes are concatenated in the order given
    (no de-duplication across sources), filtered to the radius, and sorted
    newest first.

    Args:
        outcomes: One outcome per source, in invocation order
        radius_km: Search radius

    Returns:
        Merged events

    Raises:
        AggregateFailure: If no outcome succeeded
    """
    successes = [o for o in outcomes if o.success]

    if outcomes and not successes:
        raise AggregateFailure({
            o.source: o.error for o in outcomes if o.error is not None
        })

    combined: list[HazardEvent] = []
    for outcome in successes:
        combined.extend(outcome.events)

    return sort_by_recency(within_radius(combined, radius_km))
