"""Tests for configuration directory policy."""

from pathlib import Path

import pytest
from envprofiles.errors import ConfigError
from envprofiles.paths import PRIVILEGED_PREFIX
from envprofiles.paths import default_prefix
from envprofiles.paths import profiles_dir
from envprofiles.paths import resolve_config_dir

HOME = Path("/home/ada")


class TestResolveConfigDir:
    """Test config directory derivation."""

    def test_override_wins(self):
        assert resolve_config_dir("myapp", config_dir="/srv/cfg", home=HOME) == Path("/srv/cfg")

    def test_override_without_app_name(self):
        assert resolve_config_dir(None, config_dir="/srv/cfg") == Path("/srv/cfg")

    def test_home_prefix_uses_dot_directory(self):
        assert resolve_config_dir("myapp", privileged=False, home=HOME) == HOME / ".myapp"

    def test_privileged_uses_usr_local_etc(self):
        assert resolve_config_dir("myapp", privileged=True, home=HOME) == Path("/usr/local/etc/myapp")

    def test_explicit_prefix(self):
        assert resolve_config_dir("myapp", prefix="/opt/tools", privileged=False, home=HOME) == Path(
            "/opt/tools/etc/myapp"
        )

    def test_explicit_home_prefix(self):
        """A prefix equal to home still gets the dot directory."""
        assert resolve_config_dir("myapp", prefix=str(HOME), privileged=True, home=HOME) == HOME / ".myapp"

    def test_missing_app_name(self):
        with pytest.raises(ConfigError):
            resolve_config_dir(None)

    def test_empty_app_name(self):
        with pytest.raises(ConfigError):
            resolve_config_dir("", home=HOME)


class TestHelpers:
    """Test small path helpers."""

    def test_default_prefix(self):
        assert default_prefix(True, HOME) == PRIVILEGED_PREFIX
        assert default_prefix(False, HOME) == HOME

    def test_profiles_dir(self):
        assert profiles_dir(Path("/cfg")) == Path("/cfg/profiles")
