"""Environment-variable adapter for resolved profiles.

ResolvedProfile is a plain value. This module is the compatibility layer
for callers that expect the profile in a process environment, either
in-process (``os.environ`` or any mutable mapping) or in a parent shell
through ``eval "$(envprofiles load NAME)"``.
"""

from __future__ import annotations

import logging
import shlex
from collections.abc import Iterable
from collections.abc import MutableMapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .profiles.schema import ResolvedProfile
    from .profiles.schema import Value

logger = logging.getLogger(__name__)

DEFAULT_PROFILE_VAR = "PROFILE"


def env_value(value: Value) -> str:
    """Flatten a value for an environment variable; arrays are space-joined."""
    if isinstance(value, list):
        return " ".join(value)
    return value


def clear_environment(environ: MutableMapping[str, str], names: Iterable[str]) -> list[str]:
    """Remove ``names`` from ``environ``. Returns the names that were set."""
    removed = []
    for name in names:
        if name in environ:
            del environ[name]
            removed.append(name)
    if removed:
        logger.debug(f"Cleared {len(removed)} variables from environment")
    return removed


def export_profile(
    environ: MutableMapping[str, str],
    resolved: ResolvedProfile,
    profile_var: str = DEFAULT_PROFILE_VAR,
) -> None:
    """Write every resolved variable, plus the profile name, into ``environ``."""
    for name, value in resolved.items():
        environ[name] = env_value(value)
    environ[profile_var] = resolved.name


def render_shell_exports(
    resolved: ResolvedProfile,
    clear_names: Iterable[str] = (),
    profile_var: str = DEFAULT_PROFILE_VAR,
) -> str:
    """Shell code that clears stale variables and exports the profile.

    Arrays are emitted as shell arrays. Every value is quoted with
    shlex.quote, so the output is safe to ``eval``.
    """
    lines = []
    names = list(clear_names)
    if names:
        lines.append("unset " + " ".join(names))

    for name, value in resolved.items():
        if isinstance(value, list):
            quoted = " ".join(shlex.quote(item) for item in value)
            lines.append(f"{name}=({quoted})")
            lines.append(f"export {name}")
        else:
            lines.append(f"export {name}={shlex.quote(value)}")

    lines.append(f"export {profile_var}={shlex.quote(resolved.name)}")
    return "\n".join(lines) + "\n"
