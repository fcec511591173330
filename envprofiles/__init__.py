"""Named configuration profiles for host applications.

A profile is a small ``name=value`` file stored under the application's
configuration directory. Loading it overlays its values on the defaults
declared by a template and checks that required variables are set.

Typical embedding::

    from envprofiles import HookRegistry, ProfileManager, ProfileSettings, ProfileStore

    settings = ProfileSettings.load("myapp")
    manager = ProfileManager(ProfileStore(settings.config_dir), settings.template(), app_name="myapp")
    resolved = manager.load("staging")
"""

from .errors import AlreadyExistsError
from .errors import ConfigError
from .errors import InputRequiredError
from .errors import InvalidProfileNameError
from .errors import MissingRequiredVariableError
from .errors import NoProfilesAvailableError
from .errors import NotFoundError
from .errors import ProfileError
from .errors import ProfileSyntaxError
from .hooks import HookAction
from .hooks import HookEvent
from .hooks import HookPhase
from .hooks import HookRegistry
from .paths import resolve_config_dir
from .profiles import ProfileManager
from .profiles import ProfileResolver
from .profiles import ProfileStore
from .profiles import ProfileTemplate
from .profiles import ResolvedProfile
from .profiles import extract_required_variable_names
from .profiles import extract_variable_names
from .profiles import parse_template
from .settings import ProfileSettings

__version__ = "0.1.0"

__all__ = [
    "AlreadyExistsError",
    "ConfigError",
    "HookAction",
    "HookEvent",
    "HookPhase",
    "HookRegistry",
    "InputRequiredError",
    "InvalidProfileNameError",
    "MissingRequiredVariableError",
    "NoProfilesAvailableError",
    "NotFoundError",
    "ProfileError",
    "ProfileManager",
    "ProfileResolver",
    "ProfileSettings",
    "ProfileStore",
    "ProfileSyntaxError",
    "ProfileTemplate",
    "ResolvedProfile",
    "extract_required_variable_names",
    "extract_variable_names",
    "parse_template",
    "resolve_config_dir",
]
