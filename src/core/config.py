"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field
from pathlib import Path


USGS_API_BASE = "https://earthquake.usgs.gov/fdsnws/event/1/query"
EONET_API_BASE = "https://eonet.gsfc.nasa.gov/api/v3/events"
NWS_ALERTS_URL = "https://api.weather.gov/alerts/active?status=actual&message_type=alert"
GEOLOCATION_URL = "https://ipapi.co/json/"

DEFAULT_USER_AGENT = "community-pulse"
DEFAULT_LOCATION_CACHE = "~/.community_pulse/location.json"

# Radius range offered to users (km)
MIN_SUGGESTED_RADIUS_KM = 25.0
MAX_SUGGESTED_RADIUS_KM = 500.0


@dataclass
class FeedConfig:
    """Endpoints and request settings for the external feeds.

    Attributes:
        seismic_url: USGS FDSN event query endpoint
        environmental_url: NASA EONET events endpoint
        alert_feed_url: Community alert feed endpoint
        user_agent: User-Agent header sent on every request
        timeout_seconds: Per-request timeout
        seismic_limit: Maximum events requested from USGS
        alert_limit: Maximum alerts kept from the alert feed
    """
    seismic_url: str = USGS_API_BASE
    environmental_url: str = EONET_API_BASE
    alert_feed_url: str = NWS_ALERTS_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout_seconds: float = 10.0
    seismic_limit: int = 25
    alert_limit: int = 20


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        default_radius_km: Search radius used when none is given
        feeds: Feed endpoints and request settings
        location_cache_path: File holding the last known coordinate
        geolocation_url: IP geolocation endpoint
        geolocation_timeout: Timeout for the geolocation lookup
    """
    default_radius_km: float = 150.0
    feeds: FeedConfig = field(default_factory=FeedConfig)
    location_cache_path: str = DEFAULT_LOCATION_CACHE
    geolocation_url: str = GEOLOCATION_URL
    geolocation_timeout: float = 10.0

    @property
    def cache_path(self) -> Path:
        """Location cache path with ``~`` expanded."""
        return Path(self.location_cache_path).expanduser()


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_coordinates(lat: float, lon: float, field_name: str) -> list[ValidationError]:
    """Validate latitude/longitude coordinates.

    Pure function.

    Args:
        lat: Latitude value
        lon: Longitude value
        field_name: Name of the field for error messages

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not -90 <= lat <= 90:
        errors.append(ValidationError(
            field=field_name,
            message=f"Latitude {lat} out of range [-90, 90]",
        ))

    if not -180 <= lon <= 180:
        errors.append(ValidationError(
            field=field_name,
            message=f"Longitude {lon} out of range [-180, 180]",
        ))

    return errors


def validate_radius(radius_km: float, field_name: str) -> list[ValidationError]:
    """Validate a search radius.

    Pure function. Non-positive radii are errors; radii outside the
    suggested range are warnings.
    """
    if not radius_km > 0:
        return [ValidationError(
            field=field_name,
            message=f"Radius must be positive, got {radius_km}",
        )]

    if not MIN_SUGGESTED_RADIUS_KM <= radius_km <= MAX_SUGGESTED_RADIUS_KM:
        return [ValidationError(
            field=field_name,
            message=(
                f"Radius {radius_km} km outside suggested range "
                f"[{MIN_SUGGESTED_RADIUS_KM:.0f}, {MAX_SUGGESTED_RADIUS_KM:.0f}]"
            ),
            severity="warning",
        )]

    return []


def _validate_url(url: str, field_name: str) -> list[ValidationError]:
    if not url or url.startswith("${"):
        return [ValidationError(
            field=field_name,
            message="URL not resolved (empty or still contains placeholder)",
        )]
    if not url.startswith(("http://", "https://")):
        return [ValidationError(
            field=field_name,
            message=f"URL must use http or https, got {url!r}",
        )]
    return []


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    errors.extend(validate_radius(config.default_radius_km, "default_radius_km"))

    feeds = config.feeds
    errors.extend(_validate_url(feeds.seismic_url, "feeds.seismic_url"))
    errors.extend(_validate_url(feeds.environmental_url, "feeds.environmental_url"))
    errors.extend(_validate_url(feeds.alert_feed_url, "feeds.alert_feed_url"))
    errors.extend(_validate_url(config.geolocation_url, "geolocation_url"))

    if feeds.timeout_seconds <= 0:
        errors.append(ValidationError(
            field="feeds.timeout_seconds",
            message=f"Timeout must be positive, got {feeds.timeout_seconds}",
        ))

    if config.geolocation_timeout <= 0:
        errors.append(ValidationError(
            field="geolocation_timeout",
            message=f"Timeout must be positive, got {config.geolocation_timeout}",
        ))

    if feeds.seismic_limit <= 0:
        errors.append(ValidationError(
            field="feeds.seismic_limit",
            message=f"Limit must be positive, got {feeds.seismic_limit}",
        ))

    if feeds.alert_limit <= 0:
        errors.append(ValidationError(
            field="feeds.alert_limit",
            message=f"Limit must be positive, got {feeds.alert_limit}",
        ))

    if not feeds.user_agent:
        errors.append(ValidationError(
            field="feeds.user_agent",
            message="User-Agent is empty; some feeds reject anonymous requests",
            severity="warning",
        ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
