"""Placeholder substitution for newly created profiles.

Templates may reference ``{{NAME}}`` tokens. They are replaced once,
when a profile file is created, and never at load time.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from collections.abc import Mapping

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\{\{([A-Za-z_][A-Za-z0-9_]*)\}\}")

PROFILE_PLACEHOLDER = "PROFILE"
APP_NAME_PLACEHOLDER = "PROFILE_NAME"


def substitute(template: str, placeholders: Mapping[str, str]) -> str:
    """Replace ``{{NAME}}`` tokens with their bound values.

    Tokens with no binding are left verbatim so literal braces survive.
    """

    def _replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in placeholders:
            return placeholders[key]
        logger.debug(f"No value for placeholder '{key}', leaving it as is")
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_replace, template)


def squeeze_blank_lines(text: str) -> str:
    """Collapse runs of blank lines into a single blank line."""
    lines: list[str] = []
    previous_blank = False
    for line in text.splitlines():
        blank = not line.strip()
        if blank and previous_blank:
            continue
        lines.append("" if blank else line)
        previous_blank = blank

    result = "\n".join(lines)
    if text.endswith("\n") and lines:
        result += "\n"
    return result


def build_placeholders(
    profile: str,
    app_name: str | None,
    extra_names: Iterable[str] = (),
    environ: Mapping[str, str] | None = None,
    overrides: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Build the placeholder set used when creating ``profile``.

    Args:
        profile: Name of the profile being created
        app_name: Host application name
        extra_names: Additional placeholder names read from ``environ``
        environ: Caller's environment; names missing from it stay unbound
        overrides: Explicit values, applied last

    Returns:
        Mapping of placeholder name to value
    """
    placeholders = {
        PROFILE_PLACEHOLDER: profile,
        APP_NAME_PLACEHOLDER: app_name or "",
    }

    if environ is not None:
        for name in extra_names:
            if name in environ:
                placeholders[name] = environ[name]
            else:
                logger.debug(f"Placeholder variable '{name}' is not set")

    if overrides:
        placeholders.update(overrides)

    return placeholders


def render_profile(template: str, placeholders: Mapping[str, str]) -> str:
    """Text written to a new profile file."""
    return squeeze_blank_lines(substitute(template, placeholders))
