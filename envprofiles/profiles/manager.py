"""Top-level profile actions: create, edit, delete, load and select.

Each action is bracketed by ``<action>/pre`` and ``<action>/post`` hooks.
Failures are reported through the Messenger, then raised; nothing here
exits the process.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Mapping
from collections.abc import MutableMapping
from pathlib import Path
from typing import TypeVar

from ..environment import DEFAULT_PROFILE_VAR
from ..environment import clear_environment
from ..environment import export_profile
from ..errors import AlreadyExistsError
from ..errors import InputRequiredError
from ..errors import NoProfilesAvailableError
from ..errors import NotFoundError
from ..errors import ProfileError
from ..hooks import HookAction
from ..hooks import HookPhase
from ..hooks import HookRegistry
from ..ui.messages import Messenger
from ..ui.prompts import Prompter
from .placeholders import build_placeholders
from .placeholders import render_profile
from .resolver import ProfileResolver
from .schema import ProfileTemplate
from .schema import ResolvedProfile
from .store import ProfileStore
from .store import validate_profile_name

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProfileManager:
    """Runs profile actions for one host application.

    Args:
        store: Profile file storage
        template: Parsed default template
        app_name: Host application name (bound to the PROFILE_NAME placeholder)
        hooks: Lifecycle hook registry
        prompter: Interactive prompts; required when ``interactive`` is True
        messenger: Where user-facing notices and errors go
        interactive: Whether to prompt, confirm and open the editor
        placeholder_names: Extra placeholder names read from the environment at creation
        extra_vars: Auxiliary names cleared on every load
        profile_var: Variable holding the loaded profile name
    """

    def __init__(
        self,
        store: ProfileStore,
        template: ProfileTemplate,
        *,
        app_name: str | None = None,
        hooks: HookRegistry | None = None,
        prompter: Prompter | None = None,
        messenger: Messenger | None = None,
        interactive: bool = False,
        placeholder_names: Iterable[str] = (),
        extra_vars: Iterable[str] = (),
        profile_var: str = DEFAULT_PROFILE_VAR,
    ):
        self.store = store
        self.template = template
        self.app_name = app_name
        self.hooks = hooks or HookRegistry()
        self.prompter = prompter
        self.messenger = messenger
        self.interactive = interactive and prompter is not None
        self.placeholder_names = list(placeholder_names)
        self.profile_var = profile_var
        self.resolver = ProfileResolver(store, template, extra_vars)

    # ----- Selection -----

    def list(self, pattern: str | None = None, *, glob: bool = False) -> list[str]:
        return self.store.list(pattern, glob=glob)

    def select(self, name: str | None = None, prompt: str = "Select a profile") -> str:
        """Return ``name`` or ask the user to pick an existing profile.

        Raises:
            NoProfilesAvailableError: If there is nothing to pick from
            InputRequiredError: If no name was given and none was picked
        """
        return self._reported(lambda: self._select(name, prompt))

    def _select(self, name: str | None, prompt: str) -> str:
        if name:
            return name

        names = self.store.list()
        if not names:
            raise NoProfilesAvailableError(f"No profiles found in {self.store.profile_dir}")
        if not self.interactive:
            raise InputRequiredError("A profile name is required")

        self.hooks.dispatch(HookAction.SELECT, HookPhase.PRE)
        assert self.prompter is not None
        chosen = self.prompter.choose(prompt, names)
        if not chosen:
            raise InputRequiredError("No profile selected")
        self.hooks.dispatch(HookAction.SELECT, HookPhase.POST, chosen, self.store.path_for(chosen))
        return chosen

    def verify(self, name: str | None = None, prompt: str = "Select a profile") -> str:
        """Resolve ``name`` to an existing profile.

        Raises:
            NotFoundError: If the profile file does not exist
        """
        return self._reported(lambda: self._verify(name, prompt))

    def _verify(self, name: str | None, prompt: str) -> str:
        name = self._select(name, prompt)
        validate_profile_name(name)
        if not self.store.exists(name):
            raise NotFoundError(name, self.store.path_for(name))
        return name

    # ----- Actions -----

    def create(self, name: str | None = None, placeholders: Mapping[str, str] | None = None) -> Path:
        """Create a profile file from the default template.

        Args:
            name: Profile name; prompted for when missing and interactive
            placeholders: Explicit placeholder values, applied last

        Returns:
            Path of the new profile file

        Raises:
            InputRequiredError: If no name is available
            AlreadyExistsError: If the profile already exists (left untouched)
        """
        return self._reported(lambda: self._create(name, placeholders))

    def _create(self, name: str | None, placeholders: Mapping[str, str] | None) -> Path:
        if not name and self.interactive:
            assert self.prompter is not None
            name = self.prompter.ask("Profile name")
        if not name:
            raise InputRequiredError("A name is required to create a profile")

        validate_profile_name(name)
        path = self.store.path_for(name)
        if path.exists():
            raise AlreadyExistsError(name, path)

        self.hooks.dispatch(HookAction.CREATE, HookPhase.PRE, name, path)

        values = build_placeholders(
            name,
            self.app_name,
            self.placeholder_names,
            environ=os.environ,
            overrides=placeholders,
        )
        path = self.store.write(name, render_profile(self.template.text, values))

        if self.interactive:
            self._open_editor(path)
        else:
            self._warn(f"Profile '{name}' created at {path}; edit it to fill in its values")

        self.hooks.dispatch(HookAction.CREATE, HookPhase.POST, name, path)
        return path

    def edit(self, name: str | None = None) -> Path:
        """Open an existing profile in the editor."""
        return self._reported(lambda: self._edit(name))

    def _edit(self, name: str | None) -> Path:
        name = self._verify(name, "Select a profile to edit")
        path = self.store.path_for(name)
        if self.prompter is None:
            raise InputRequiredError("Editing requires an editor")

        self.hooks.dispatch(HookAction.EDIT, HookPhase.PRE, name, path)
        self._open_editor(path)
        self.hooks.dispatch(HookAction.EDIT, HookPhase.POST, name, path)
        return path

    def delete(self, name: str | None = None, *, assume_yes: bool = False) -> bool:
        """Delete an existing profile.

        Removal is always confirmed: by the user in interactive mode, or up
        front through ``assume_yes``.

        Returns:
            True if the file was removed, False if the user declined

        Raises:
            InputRequiredError: If not interactive and ``assume_yes`` is False
        """
        return self._reported(lambda: self._delete(name, assume_yes))

    def _delete(self, name: str | None, assume_yes: bool) -> bool:
        name = self._verify(name, "Select a profile to delete")
        path = self.store.path_for(name)

        if not assume_yes:
            if not self.interactive:
                raise InputRequiredError(f"Deleting profile '{name}' requires confirmation (pass --yes)")
            assert self.prompter is not None
            if not self.prompter.confirm(f"Delete profile '{name}'?", default=False):
                self._info(f"Kept profile '{name}'")
                return False

        self.hooks.dispatch(HookAction.DELETE, HookPhase.PRE, name, path)
        self.store.delete(name)
        self.hooks.dispatch(HookAction.DELETE, HookPhase.POST, name, path)
        return True

    def load(self, name: str | None = None, environ: MutableMapping[str, str] | None = None) -> ResolvedProfile:
        """Resolve a profile, optionally exporting it into ``environ``.

        When ``environ`` is given, the template vocabulary and extra variables
        are removed from it before resolution, so nothing from a previously
        loaded profile survives, even if validation fails.

        Raises:
            NotFoundError: If the profile does not exist
            MissingRequiredVariableError: If a required variable is unset or empty
        """
        return self._reported(lambda: self._load(name, environ))

    def _load(self, name: str | None, environ: MutableMapping[str, str] | None) -> ResolvedProfile:
        name = self._verify(name, "Select a profile to load")
        path = self.store.path_for(name)

        self.hooks.dispatch(HookAction.LOAD, HookPhase.PRE, name, path)

        if environ is not None:
            clear_environment(environ, self.resolver.clear_names())

        resolved = self.resolver.resolve(name)

        if environ is not None:
            export_profile(environ, resolved, self.profile_var)

        self.hooks.dispatch(HookAction.LOAD, HookPhase.POST, name, path)
        logger.info(f"Loaded profile '{name}'")
        return resolved

    # ----- Helpers -----

    def _open_editor(self, path: Path) -> None:
        assert self.prompter is not None
        if not self.prompter.edit(path):
            self._warn(f"Could not open an editor; edit {path} manually")

    def _reported(self, action: Callable[[], T]) -> T:
        try:
            return action()
        except ProfileError as e:
            if self.messenger is not None:
                self.messenger.error(str(e))
            raise

    def _info(self, message: str) -> None:
        if self.messenger is not None:
            self.messenger.info(message)

    def _warn(self, message: str) -> None:
        if self.messenger is not None:
            self.messenger.warning(message)
        else:
            logger.warning(message)
