"""
Service endpoint configuration for digidoc.

Stores the selected service profile in ~/.digidoc/config.json.
Environment variables override the file.
"""

from __future__ import annotations

__all__ = [
    "get_active_profile",
    "get_service_config",
    "reset_config",
    "save_service_config",
]

import logging
import os

from ..constants import (
    DEFAULT_TIMEOUT_SOAP,
    ENV_PROFILE,
    ENV_TIMEOUT,
    ENV_URL,
    MAX_TIMEOUT,
    MIN_TIMEOUT,
)
from ._storage import load_config, save_config
from .profiles import BUILTIN_PROFILES, ServiceProfile, make_custom_profile

_logger = logging.getLogger(__name__)


def _env_timeout() -> int | None:
    """Read the timeout override from the environment, if valid."""
    timeout_str = os.environ.get(ENV_TIMEOUT, "").strip()
    if not timeout_str:
        return None
    try:
        timeout = int(timeout_str)
    except ValueError:
        _logger.warning("Invalid %s value %r, using default", ENV_TIMEOUT, timeout_str)
        return DEFAULT_TIMEOUT_SOAP
    if timeout < MIN_TIMEOUT or timeout > MAX_TIMEOUT:
        _logger.warning(
            "%s=%d out of range [%d, %d], using default",
            ENV_TIMEOUT,
            timeout,
            MIN_TIMEOUT,
            MAX_TIMEOUT,
        )
        return DEFAULT_TIMEOUT_SOAP
    return timeout


def get_service_config() -> tuple[str | None, int | None, str | None]:
    """
    Resolve the active service URL and timeout.

    Priority: env vars > config file > built-in profile.

    Returns:
        (url, timeout, profile_name) or (None, None, None) if nothing is
        configured.
    """
    config = load_config()

    url = os.environ.get(ENV_URL, "").strip()
    profile_name = os.environ.get(ENV_PROFILE, "").strip().lower() or config.get("profile")

    if not url and profile_name and profile_name in BUILTIN_PROFILES:
        url = BUILTIN_PROFILES[profile_name].url

    if not url:
        url = config.get("url", "")

    if not url:
        return None, None, None

    timeout = _env_timeout()
    if timeout is None:
        config_timeout = config.get("timeout")
        if config_timeout is not None:
            timeout = config_timeout
        elif profile_name and profile_name in BUILTIN_PROFILES:
            timeout = BUILTIN_PROFILES[profile_name].timeout
        else:
            timeout = DEFAULT_TIMEOUT_SOAP

    return url, timeout, profile_name


def get_active_profile() -> ServiceProfile | None:
    """
    Get the ServiceProfile saved in the config file.

    Returns:
        ServiceProfile (built-in or custom), or None if not configured.
    """
    config = load_config()
    profile_name = config.get("profile")

    if profile_name and profile_name in BUILTIN_PROFILES:
        return BUILTIN_PROFILES[profile_name]

    url = config.get("url", "")
    if url:
        return make_custom_profile(url, config.get("timeout", DEFAULT_TIMEOUT_SOAP))

    return None


def save_service_config(profile: ServiceProfile) -> None:
    """Save a service profile as the active selection, replacing the old one."""
    save_config({"profile": profile.name, "url": profile.url, "timeout": profile.timeout})
    _logger.info("Saved service profile %s (%s)", profile.name, profile.url)


def reset_config() -> None:
    """Forget the saved service profile."""
    save_config({})
