"""Error types raised by the profile engine.

Every engine operation raises one of these instead of exiting; only the
CLI layer turns them into exit codes.
"""

from __future__ import annotations

from pathlib import Path


class ProfileError(Exception):
    """Base class for all profile engine errors."""


class ConfigError(ProfileError):
    """Raised when the application name or configuration directory cannot be determined."""


class NotFoundError(ProfileError):
    """Raised when a profile name is empty or its file does not exist."""

    def __init__(self, name: str, path: Path | None = None):
        self.name = name
        self.path = path
        if not name:
            message = "No profile name given"
        elif path is not None:
            message = f"Profile '{name}' not found at {path}"
        else:
            message = f"Profile '{name}' not found"
        super().__init__(message)


class AlreadyExistsError(ProfileError):
    """Raised when creating a profile whose file already exists."""

    def __init__(self, name: str, path: Path):
        self.name = name
        self.path = path
        super().__init__(f"Profile '{name}' already exists at {path}")


class MissingRequiredVariableError(ProfileError):
    """Raised when a required variable is unset or empty after merging."""

    def __init__(self, variable: str, profile: str):
        self.variable = variable
        self.profile = profile
        super().__init__(f"Required variable '{variable}' is not set in profile '{profile}'")


class InputRequiredError(ProfileError):
    """Raised when no profile name can be obtained, interactively or otherwise."""


class NoProfilesAvailableError(ProfileError):
    """Raised when a selection is attempted against an empty store."""


class InvalidProfileNameError(ProfileError):
    """Raised for names that are hidden files or would leave the profile directory."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid profile name '{name}': {reason}")


class ProfileSyntaxError(ProfileError):
    """Raised when a template or profile file contains an unparseable assignment."""

    def __init__(self, source: str, line: int, detail: str):
        self.source = source
        self.line = line
        self.detail = detail
        super().__init__(f"{source}:{line}: {detail}")


__all__ = [
    "AlreadyExistsError",
    "ConfigError",
    "InputRequiredError",
    "InvalidProfileNameError",
    "MissingRequiredVariableError",
    "NoProfilesAvailableError",
    "NotFoundError",
    "ProfileError",
    "ProfileSyntaxError",
]
