"""
Configuration and service profile management.

Import from this package rather than from the individual submodules.
"""

from __future__ import annotations

from ._storage import CONFIG_FILE
from .config import get_active_profile, get_service_config, reset_config, save_service_config
from .profiles import BUILTIN_PROFILES, ServiceProfile, get_profile, make_custom_profile

__all__ = [
    "BUILTIN_PROFILES",
    "CONFIG_FILE",
    "ServiceProfile",
    "get_active_profile",
    "get_profile",
    "get_service_config",
    "make_custom_profile",
    "reset_config",
    "save_service_config",
]
