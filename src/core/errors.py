"""Error taxonomy for the hazard aggregation engine.

Shell components raise these; the aggregator recovers per-source
NetworkError/FormatError and only surfaces AggregateFailure.
"""


class HazardEngineError(Exception):
    """Base class for all engine errors."""


class NetworkError(HazardEngineError):
    """A feed endpoint was unreachable or returned a non-success status.

    Attributes:
        source: Name of the feed that failed
        status_code: HTTP status code, if a response was received
    """

    def __init__(
        self,
        source: str,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source
        self.status_code = status_code


class FormatError(HazardEngineError):
    """A feed response could not be parsed into the expected schema."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source


class GeolocationError(HazardEngineError):
    """The platform denied, timed out, or does not support location lookup."""


class AggregateFailure(HazardEngineError):
    """Every hazard source failed during one aggregation.

    Attributes:
        errors: Underlying error per source name, in invocation order
    """

    def __init__(self, errors: dict[str, Exception]) -> None:
        causes = "; ".join(f"{name}: {error}" for name, error in errors.items())
        super().__init__(f"All {len(errors)} hazard sources failed ({causes})")
        self.errors = dict(errors)
