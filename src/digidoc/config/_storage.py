"""
On-disk service selection: ``~/.digidoc/config.json``.

The file records which DigiDocService deployment to talk to: a built-in
profile name, or ``"custom"`` together with an https URL, plus an optional
timeout.  Entries that fail validation are dropped with a warning when the
file is loaded, so a hand-edited file cannot point the client at a plaintext
endpoint.
"""

from __future__ import annotations

__all__ = [
    "CONFIG_DIR",
    "CONFIG_FILE",
    "ConfigDict",
    "load_config",
    "save_config",
]

import json
import logging
import tempfile
from pathlib import Path
from typing import TypedDict

from ..constants import MAX_TIMEOUT, MIN_TIMEOUT
from ..errors import ConfigError
from .profiles import BUILTIN_PROFILES, CUSTOM_PROFILE, make_custom_profile

_logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".digidoc"
CONFIG_FILE = CONFIG_DIR / "config.json"


class ConfigDict(TypedDict, total=False):
    profile: str
    url: str
    timeout: int


def _read_json() -> dict[str, object]:
    try:
        text = CONFIG_FILE.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as e:
        _logger.warning("Cannot read %s: %s", CONFIG_FILE, e)
        return {}
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        _logger.warning("Config file corrupted, ignoring: %s", e)
        return {}
    if not isinstance(data, dict):
        _logger.warning("Config file %s is not a JSON object, ignoring", CONFIG_FILE)
        return {}
    return data


def _checked_profile(value: object) -> str | None:
    if not isinstance(value, str) or not value.strip():
        return None
    name = value.strip().lower()
    if name in BUILTIN_PROFILES or name == CUSTOM_PROFILE:
        return name
    _logger.warning("Unknown service profile %r in config, ignoring", value)
    return None


def _checked_url(value: object) -> str | None:
    if not isinstance(value, str) or not value.strip():
        return None
    url = value.strip()
    try:
        make_custom_profile(url)
    except ConfigError as e:
        _logger.warning("Ignoring configured url %r: %s", url, e)
        return None
    return url


def _checked_timeout(value: object) -> int | None:
    # bool is an int subclass; "timeout": true is not a timeout
    if not isinstance(value, int) or isinstance(value, bool):
        return None
    if not MIN_TIMEOUT <= value <= MAX_TIMEOUT:
        _logger.warning(
            "Config timeout=%d out of range [%d, %d], ignoring", value, MIN_TIMEOUT, MAX_TIMEOUT
        )
        return None
    return value


def load_config() -> ConfigDict:
    """Load the saved service selection, keeping only valid entries."""
    data = _read_json()
    config: ConfigDict = {}

    profile = _checked_profile(data.get("profile"))
    url = _checked_url(data.get("url"))
    timeout = _checked_timeout(data.get("timeout"))

    if profile == CUSTOM_PROFILE and url is None:
        _logger.warning("Custom service profile in config has no valid url, ignoring")
        profile = None
    if profile is not None:
        config["profile"] = profile
    if url is not None:
        config["url"] = url
    if timeout is not None:
        config["timeout"] = timeout
    return config


def save_config(config: ConfigDict) -> None:
    """Replace the config file atomically.

    The temp file is created owner-only (0600) and renamed over the old
    file, so readers see either the old or the new content.
    """
    CONFIG_DIR.mkdir(parents=True, exist_ok=True, mode=0o700)
    content = json.dumps(config, indent=2, ensure_ascii=False) + "\n"
    tmp: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=CONFIG_DIR, suffix=".tmp", delete=False
        ) as f:
            tmp = Path(f.name)
            f.write(content)
        tmp.replace(CONFIG_FILE)
    except BaseException:
        if tmp is not None:
            tmp.unlink(missing_ok=True)
        raise
    _logger.debug("Saved config to %s", CONFIG_FILE)
