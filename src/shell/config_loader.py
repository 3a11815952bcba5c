"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

Models (Config, FeedConfig) are defined in src/core/config.py
to avoid information leakage between layers.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from src.core.config import Config, FeedConfig
from src.shell.nws_client import ALERT_FEED_ENV_VAR


logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = "config/config.yaml"


def _resolve_value(value: Any) -> Any:
    """Resolve a ``${VAR}`` placeholder from the environment.

    Non-string values and plain strings are returned unchanged; an unset
    variable leaves the placeholder in place (caught by validation).

    Args:
        value: Value to resolve

    Returns:
        Resolved value
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def _parse_feeds(data: dict[str, Any]) -> FeedConfig:
    """Parse feed settings from config data."""
    defaults = FeedConfig()
    return FeedConfig(
        seismic_url=_resolve_value(data.get("seismic_url", defaults.seismic_url)),
        environmental_url=_resolve_value(
            data.get("environmental_url", defaults.environmental_url)
        ),
        alert_feed_url=_resolve_value(data.get("alert_feed_url", defaults.alert_feed_url)),
        user_agent=_resolve_value(data.get("user_agent", defaults.user_agent)),
        timeout_seconds=float(data.get("timeout_seconds", defaults.timeout_seconds)),
        seismic_limit=int(data.get("seismic_limit", defaults.seismic_limit)),
        alert_limit=int(data.get("alert_limit", defaults.alert_limit)),
    )


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only env var expansion has side effects).

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object
    """
    defaults = Config()
    return Config(
        default_radius_km=float(data.get("default_radius_km", defaults.default_radius_km)),
        feeds=_parse_feeds(data.get("feeds") or {}),
        location_cache_path=_resolve_value(
            data.get("location_cache_path", defaults.location_cache_path)
        ),
        geolocation_url=_resolve_value(data.get("geolocation_url", defaults.geolocation_url)),
        geolocation_timeout=float(
            data.get("geolocation_timeout", defaults.geolocation_timeout)
        ),
    )


def apply_env_overrides(config: Config) -> Config:
    """Apply environment variable overrides to a config.

    Environment variables:
        NWS_ALERT_FEED: Community alert feed URL
        DEFAULT_RADIUS_KM: Default search radius
        REQUEST_TIMEOUT: Per-request timeout for the feeds (seconds)
        LOCATION_CACHE_PATH: Location cache file

    Returns:
        The same config object, updated in place
    """
    alert_feed = os.environ.get(ALERT_FEED_ENV_VAR)
    if alert_feed:
        config.feeds.alert_feed_url = alert_feed

    radius = os.environ.get("DEFAULT_RADIUS_KM")
    if radius:
        config.default_radius_km = float(radius)

    timeout = os.environ.get("REQUEST_TIMEOUT")
    if timeout:
        config.feeds.timeout_seconds = float(timeout)

    cache_path = os.environ.get("LOCATION_CACHE_PATH")
    if cache_path:
        config.location_cache_path = cache_path

    return config


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O. Environment overrides are applied on
    top of the file contents.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", DEFAULT_CONFIG_PATH)

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.info("Config file not found: %s, using defaults", path)
        return apply_env_overrides(Config())

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return apply_env_overrides(Config())

    config = apply_env_overrides(load_config_from_dict(data))

    logger.info(
        "Loaded config: radius %.0f km, cache %s",
        config.default_radius_km,
        config.location_cache_path,
    )

    return config


def load_config_from_env() -> Config:
    """Load configuration from environment variables only.

    Useful when no YAML file is deployed.

    Returns:
        Config object from environment
    """
    return apply_env_overrides(Config())
