"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- USGS and NASA EONET hazard feeds (HTTP)
- Community alert feed (HTTP)
- IP geolocation (HTTP)
- Location cache (local file)
- Configuration loading (environment/files)

Keep this layer thin and simple. All business logic should be in core.
"""

from src.shell.usgs_client import USGSClient
from src.shell.eonet_client import EONETClient
from src.shell.nws_client import CommunityAlertClient
from src.shell.geolocation_client import IPGeolocationClient
from src.shell.location_store import LocationStore
from src.shell.location_provider import LocationProvider
from src.shell.config_loader import load_config, Config

__all__ = [
    "USGSClient",
    "EONETClient",
    "CommunityAlertClient",
    "IPGeolocationClient",
    "LocationStore",
    "LocationProvider",
    "load_config",
    "Config",
]
