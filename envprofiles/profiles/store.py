"""On-disk storage for profile files.

One plain-text file per profile under ``<config_dir>/profiles/``.
There is no index: the directory listing is the source of truth.
"""

from __future__ import annotations

import fnmatch
import logging
from pathlib import Path

from ..errors import AlreadyExistsError
from ..errors import InvalidProfileNameError
from ..errors import NotFoundError
from ..paths import profiles_dir

logger = logging.getLogger(__name__)


def validate_profile_name(name: str) -> str:
    """Return ``name`` if it is usable as a profile file name.

    Raises:
        InvalidProfileNameError: For empty, hidden or path-like names
    """
    if not name:
        raise InvalidProfileNameError(name, "name is empty")
    if name.startswith("."):
        raise InvalidProfileNameError(name, "name must not begin with '.'")
    if "/" in name or "\\" in name or "\0" in name:
        raise InvalidProfileNameError(name, "name must not contain path separators")
    return name


class ProfileStore:
    """Maps profile names to files in a profile directory."""

    def __init__(self, config_dir: Path):
        self.config_dir = Path(config_dir)
        self.profile_dir = profiles_dir(self.config_dir)

    def ensure_dir(self) -> Path:
        """Create the profile directory, parents included."""
        self.profile_dir.mkdir(parents=True, exist_ok=True)
        return self.profile_dir

    def path_for(self, name: str) -> Path:
        """Path of the profile file. Does not check existence."""
        return self.profile_dir / name

    def exists(self, name: str) -> bool:
        if not name:
            return False
        return self.path_for(name).is_file()

    def list(self, pattern: str | None = None, *, glob: bool = False) -> list[str]:
        """List profile names, sorted.

        Args:
            pattern: Name to match exactly. None matches everything.
            glob: Treat ``pattern`` as a glob matched against the whole name

        Returns:
            Names of regular, non-hidden files in the profile directory
        """
        if not self.profile_dir.is_dir():
            return []

        names = []
        for entry in self.profile_dir.iterdir():
            if entry.name.startswith(".") or not entry.is_file():
                continue
            if pattern is not None and not _matches(entry.name, pattern, glob):
                continue
            names.append(entry.name)

        return sorted(names)

    def read(self, name: str) -> str:
        path = self.path_for(name)
        if not name or not path.is_file():
            raise NotFoundError(name, path if name else None)
        logger.debug(f"Reading profile '{name}' from {path}")
        return path.read_text(encoding="utf-8")

    def write(self, name: str, text: str) -> Path:
        """Write a new profile file; never overwrites."""
        validate_profile_name(name)
        path = self.path_for(name)
        if path.exists():
            raise AlreadyExistsError(name, path)

        self.ensure_dir()
        with open(path, "x", encoding="utf-8") as f:
            f.write(text)
        logger.info(f"Created profile '{name}' at {path}")
        return path

    def delete(self, name: str) -> None:
        path = self.path_for(name)
        if not name or not path.is_file():
            raise NotFoundError(name, path if name else None)
        path.unlink()
        logger.info(f"Deleted profile '{name}'")


def _matches(name: str, pattern: str, glob: bool) -> bool:
    if glob:
        return fnmatch.fnmatchcase(name, pattern)
    return name == pattern
