"""Configuration directory policy.

Centralizes where profiles live on disk. Library code receives the
resolved directory through injection; this module makes the choice.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .errors import ConfigError

logger = logging.getLogger(__name__)

PRIVILEGED_PREFIX = Path("/usr/local")
PROFILES_SUBDIR = "profiles"
SETTINGS_FILENAME = "settings.yaml"


def is_privileged() -> bool:
    """Check whether the process runs with an effective uid of 0."""
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0


def default_prefix(privileged: bool, home: Path | None = None) -> Path:
    """Prefix used when none is given: /usr/local for root, else the home directory."""
    if privileged:
        return PRIVILEGED_PREFIX
    return home or Path.home()


def resolve_config_dir(
    app_name: str | None,
    *,
    config_dir: str | Path | None = None,
    prefix: str | Path | None = None,
    privileged: bool | None = None,
    home: Path | None = None,
) -> Path:
    """Resolve the application's configuration directory.

    Resolution order:
    1. Explicit ``config_dir`` override
    2. ``<prefix>/.<app_name>`` when the prefix is the user's home
    3. ``<prefix>/etc/<app_name>`` otherwise

    Args:
        app_name: Host application name
        config_dir: Explicit directory, short-circuits derivation
        prefix: Installation prefix (defaults by privilege)
        privileged: Override privilege detection (for testing)
        home: Override the user's home directory (for testing)

    Returns:
        Configuration directory (not created)

    Raises:
        ConfigError: If neither an app name nor an override is available
    """
    if config_dir:
        return Path(config_dir).expanduser()

    if not app_name:
        raise ConfigError("Cannot determine configuration directory: no application name or config dir given")

    home = home or Path.home()
    if privileged is None:
        privileged = is_privileged()

    base = Path(prefix).expanduser() if prefix else default_prefix(privileged, home)

    if base == home:
        resolved = base / f".{app_name}"
    else:
        resolved = base / "etc" / app_name

    logger.debug(f"Resolved config dir for '{app_name}': {resolved}")
    return resolved


def profiles_dir(config_dir: Path) -> Path:
    return config_dir / PROFILES_SUBDIR


def settings_file(config_dir: Path) -> Path:
    return config_dir / SETTINGS_FILENAME
