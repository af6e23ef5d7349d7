"""
Service profiles for DigiDocService deployments.

A profile bundles the endpoint and timeout of one deployment.  Built-in
profiles are defined here; custom endpoints are represented as ad-hoc
instances.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse

from ..constants import DEFAULT_TIMEOUT_SOAP
from ..errors import ConfigError


@dataclass(frozen=True)
class ServiceProfile:
    """Describes a DigiDocService deployment."""

    name: str
    display_name: str
    url: str
    timeout: int = DEFAULT_TIMEOUT_SOAP


# Name of every profile built by make_custom_profile
CUSTOM_PROFILE = "custom"


# ── Built-in profiles ────────────────────────────────────────────────

BUILTIN_PROFILES: dict[str, ServiceProfile] = {
    "live": ServiceProfile(
        name="live",
        display_name="DigiDocService (production)",
        url="https://digidocservice.sk.ee/",
    ),
    "test": ServiceProfile(
        name="test",
        display_name="DigiDocService (test)",
        url="https://tsp.demo.sk.ee/",
    ),
}


def get_profile(name: str) -> ServiceProfile:
    """
    Look up a built-in profile by name.

    Args:
        name: Profile name (case-insensitive).

    Returns:
        The matching ServiceProfile.

    Raises:
        ConfigError: If no built-in profile matches.
    """
    key = name.lower().strip()
    if key not in BUILTIN_PROFILES:
        available = ", ".join(sorted(BUILTIN_PROFILES))
        raise ConfigError(f"Unknown profile {name!r}. Available: {available}")
    return BUILTIN_PROFILES[key]


def make_custom_profile(url: str, timeout: int = DEFAULT_TIMEOUT_SOAP) -> ServiceProfile:
    """
    Create an ad-hoc profile for a custom endpoint.

    Raises:
        ConfigError: If the URL scheme or hostname is invalid.
    """
    parsed = urlparse(url)
    if parsed.scheme == "http":
        raise ConfigError(
            "HTTP URLs are not supported. Use https:// to protect documents in transit."
        )
    if parsed.scheme != "https":
        raise ConfigError(f"Invalid URL scheme {parsed.scheme!r}. Use https://.")
    if not parsed.hostname:
        raise ConfigError(f"Invalid URL: no hostname found in {url!r}")

    return ServiceProfile(
        name=CUSTOM_PROFILE,
        display_name=f"Custom ({url})",
        url=url,
        timeout=timeout,
    )
