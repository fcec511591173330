"""Settings for the profile engine.

Settings come from three places, most specific first:
1. Explicit arguments (CLI options or the embedding application)
2. ENVPROFILES_* environment variables
3. ``<config_dir>/settings.yaml``

Example settings.yaml:
```yaml
default_template_file: default.profile
placeholders: [USER, HOSTNAME]
extra_vars: [LEGACY_TOKEN]
interactive: true
hooks:
  create:
    post: git -C ~/.myapp add profiles
```
"""

from __future__ import annotations

import logging
import os
import re
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel
from pydantic import Field
from pydantic import ValidationError

from .errors import ConfigError
from .paths import resolve_config_dir
from .paths import settings_file
from .profiles.parser import parse_template
from .profiles.schema import ProfileTemplate

logger = logging.getLogger(__name__)

ENV_PREFIX = "ENVPROFILES_"
TRUTHY = frozenset({"1", "true", "yes", "on"})
FALSY = frozenset({"0", "false", "no", "off", ""})


class FileSettings(BaseModel):
    """Contents of settings.yaml."""

    default_template: str | None = None
    default_template_file: str | None = None
    placeholders: list[str] = Field(default_factory=list)
    extra_vars: list[str] = Field(default_factory=list)
    interactive: bool | None = None
    profile_var: str | None = None
    hooks: dict[str, dict[str, str | list[str]]] = Field(default_factory=dict)


class ProfileSettings(BaseModel):
    """Effective settings for one host application."""

    app_name: str | None = Field(None, description="Host application name")
    config_dir: Path = Field(..., description="Resolved configuration directory")
    template_text: str = Field("", description="Default template text")
    template_source: str = Field("<template>", description="Where the template text came from")
    placeholders: list[str] = Field(default_factory=list, description="Extra placeholder names")
    extra_vars: list[str] = Field(default_factory=list, description="Extra names cleared on load")
    interactive: bool = Field(False, description="Prompt and open the editor")
    profile_var: str = Field("PROFILE", description="Variable holding the loaded profile name")
    hooks: dict[str, dict[str, str | list[str]]] = Field(default_factory=dict)

    @classmethod
    def load(
        cls,
        app_name: str | None = None,
        *,
        config_dir: str | Path | None = None,
        prefix: str | Path | None = None,
        interactive: bool | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> ProfileSettings:
        """
        Build settings from arguments, environment and settings file.

        Args:
            app_name: Application name (overrides ENVPROFILES_APP_NAME)
            config_dir: Explicit config dir (overrides ENVPROFILES_CONFIG_DIR)
            prefix: Installation prefix (overrides ENVPROFILES_PREFIX)
            interactive: Interactive mode (overrides ENVPROFILES_INTERACTIVE)
            environ: Environment to read; defaults to os.environ

        Returns:
            Effective settings

        Raises:
            ConfigError: If no config directory can be determined, or the
                settings or template file is invalid
        """
        env = os.environ if environ is None else environ

        app_name = app_name or env.get(f"{ENV_PREFIX}APP_NAME") or None
        resolved_dir = resolve_config_dir(
            app_name,
            config_dir=config_dir or env.get(f"{ENV_PREFIX}CONFIG_DIR") or None,
            prefix=prefix or env.get(f"{ENV_PREFIX}PREFIX") or None,
            privileged=_parse_bool(env.get(f"{ENV_PREFIX}PRIVILEGED")),
        )

        file_settings = read_settings_file(settings_file(resolved_dir))

        template_text, template_source = _load_template(env, file_settings, resolved_dir)

        if interactive is None:
            interactive = _parse_bool(env.get(f"{ENV_PREFIX}INTERACTIVE"))
        if interactive is None:
            interactive = file_settings.interactive
        if interactive is None:
            interactive = sys.stdin.isatty()

        placeholders = _parse_list(env.get(f"{ENV_PREFIX}PLACEHOLDERS"))
        extra_vars = _parse_list(env.get(f"{ENV_PREFIX}EXTRA_VARS"))

        return cls(
            app_name=app_name,
            config_dir=resolved_dir,
            template_text=template_text,
            template_source=template_source,
            placeholders=placeholders if placeholders is not None else file_settings.placeholders,
            extra_vars=extra_vars if extra_vars is not None else file_settings.extra_vars,
            interactive=interactive,
            profile_var=env.get(f"{ENV_PREFIX}PROFILE_VAR") or file_settings.profile_var or "PROFILE",
            hooks=file_settings.hooks,
        )

    def template(self) -> ProfileTemplate:
        """Parse the default template."""
        return parse_template(self.template_text, source=self.template_source)


def read_settings_file(path: Path) -> FileSettings:
    """Read settings.yaml; a missing file yields empty settings.

    Raises:
        ConfigError: If the file is not valid YAML or has the wrong shape
    """
    if not path.is_file():
        return FileSettings()

    try:
        with open(path, encoding="utf-8") as f:
            data: Any = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid settings file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Invalid settings file {path}: expected a mapping at top level")

    try:
        settings = FileSettings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings file {path}: {e}") from e

    logger.debug(f"Loaded settings from {path}")
    return settings


def _load_template(env: Mapping[str, str], file_settings: FileSettings, config_dir: Path) -> tuple[str, str]:
    """Template text and a label for error messages.

    Inline text wins over a template file at each level.
    """
    text = env.get(f"{ENV_PREFIX}DEFAULT_TEMPLATE")
    if text is not None:
        return text, f"${ENV_PREFIX}DEFAULT_TEMPLATE"

    path_value = env.get(f"{ENV_PREFIX}DEFAULT_TEMPLATE_FILE")
    if path_value:
        return _read_template_file(Path(path_value).expanduser())

    if file_settings.default_template is not None:
        return file_settings.default_template, str(settings_file(config_dir))

    if file_settings.default_template_file:
        path = Path(file_settings.default_template_file).expanduser()
        if not path.is_absolute():
            path = config_dir / path
        return _read_template_file(path)

    return "", "<template>"


def _read_template_file(path: Path) -> tuple[str, str]:
    try:
        return path.read_text(encoding="utf-8"), str(path)
    except OSError as e:
        raise ConfigError(f"Cannot read default template {path}: {e}") from e


def _parse_bool(value: str | None) -> bool | None:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized in TRUTHY:
        return True
    if normalized in FALSY:
        return False
    logger.warning(f"Ignoring unrecognized boolean value: {value!r}")
    return None


def _parse_list(value: str | None) -> list[str] | None:
    """Split a comma or whitespace separated list; None if unset."""
    if value is None:
        return None
    return [item for item in re.split(r"[\s,]+", value) if item]
