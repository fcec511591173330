"""Load-time resolution of a profile's variables.

A profile's final variable set is the template's optional defaults
overlaid with the uncommented assignments of its profile file. Every
required variable must then be set and non-empty.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..errors import MissingRequiredVariableError
from ..errors import NotFoundError
from .parser import parse_assignments
from .schema import SOURCE_PROFILE
from .schema import SOURCE_TEMPLATE
from .schema import ProfileTemplate
from .schema import ResolvedProfile
from .schema import Value
from .schema import is_empty_value
from .store import ProfileStore

logger = logging.getLogger(__name__)


class ProfileResolver:
    """Merges template defaults with stored overrides and validates the result."""

    def __init__(
        self,
        store: ProfileStore,
        template: ProfileTemplate,
        extra_vars: Iterable[str] = (),
    ):
        """
        Initialize resolver.

        Args:
            store: Store holding the profile files
            template: Parsed default template (the variable vocabulary)
            extra_vars: Auxiliary names cleared alongside the vocabulary
        """
        self.store = store
        self.template = template
        self.extra_vars = list(extra_vars)

    def clear_names(self) -> list[str]:
        """Names to remove from an environment before exporting a profile."""
        names = self.template.names()
        for name in self.extra_vars:
            if name not in names:
                names.append(name)
        return names

    def resolve(self, name: str) -> ResolvedProfile:
        """
        Resolve a profile's final variable set.

        Args:
            name: Profile name

        Returns:
            Resolved profile (never persisted)

        Raises:
            NotFoundError: If the name is empty or the file is missing
            ProfileSyntaxError: If the profile file cannot be parsed
            MissingRequiredVariableError: On the first required variable left unset
        """
        path = self.store.path_for(name) if name else None
        if not name or path is None or not path.is_file():
            raise NotFoundError(name, path)

        overrides = parse_assignments(self.store.read(name), source=str(path))
        values, sources = self.merge(overrides)
        self.validate(name, values)

        logger.debug(f"Resolved profile '{name}' with {len(values)} variables")
        return ResolvedProfile(name=name, path=path, values=values, sources=sources)

    def merge(self, overrides: dict[str, Value]) -> tuple[dict[str, Value], dict[str, str]]:
        """Overlay profile assignments on the template's optional defaults.

        Returns:
            Tuple of (values, sources), ordered by template vocabulary first,
            then any extra names from the profile file
        """
        values: dict[str, Value] = {}
        sources: dict[str, str] = {}

        for var_name, default in self.template.optional_defaults().items():
            values[var_name] = default
            sources[var_name] = SOURCE_TEMPLATE

        vocabulary = set(self.template.names())
        for var_name, value in overrides.items():
            if vocabulary and var_name not in vocabulary:
                logger.warning(f"Variable '{var_name}' is not declared in the default template")
            values[var_name] = value
            sources[var_name] = SOURCE_PROFILE

        order = {var_name: index for index, var_name in enumerate(self.template.names())}
        ordered = sorted(values, key=lambda key: order.get(key, len(order)))
        return {key: values[key] for key in ordered}, {key: sources[key] for key in ordered}

    def validate(self, name: str, values: dict[str, Value]) -> None:
        """Fail on the first required variable that is unset or empty."""
        for var_name in self.template.required_names():
            if is_empty_value(values.get(var_name)):
                raise MissingRequiredVariableError(var_name, name)
