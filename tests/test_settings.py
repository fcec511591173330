"""
Tests for settings loading.

Focus on precedence between arguments, environment and settings.yaml.
"""

import pytest
import yaml
from envprofiles.errors import ConfigError
from envprofiles.settings import ProfileSettings
from envprofiles.settings import read_settings_file


@pytest.fixture
def cfg(tmp_path):
    path = tmp_path / "cfg"
    path.mkdir()
    return path


def write_settings(cfg, data):
    (cfg / "settings.yaml").write_text(yaml.safe_dump(data))


class TestProfileSettings:
    """Test effective settings."""

    def test_requires_app_name_or_dir(self):
        with pytest.raises(ConfigError):
            ProfileSettings.load(environ={})

    def test_config_dir_from_environment(self, cfg):
        settings = ProfileSettings.load(environ={"ENVPROFILES_CONFIG_DIR": str(cfg)}, interactive=False)
        assert settings.config_dir == cfg
        assert settings.app_name is None

    def test_argument_overrides_environment(self, cfg, tmp_path):
        environ = {"ENVPROFILES_CONFIG_DIR": str(tmp_path / "other")}
        settings = ProfileSettings.load(config_dir=cfg, environ=environ, interactive=False)
        assert settings.config_dir == cfg

    def test_template_from_environment(self, cfg):
        environ = {"ENVPROFILES_CONFIG_DIR": str(cfg), "ENVPROFILES_DEFAULT_TEMPLATE": "a=1\n#b=2\n"}
        settings = ProfileSettings.load(environ=environ, interactive=False)

        template = settings.template()

        assert template.names() == ["a", "b"]
        assert template.required_names() == ["a"]

    def test_template_file_from_environment(self, cfg, tmp_path):
        template_file = tmp_path / "default.profile"
        template_file.write_text("key=value\n")
        environ = {"ENVPROFILES_CONFIG_DIR": str(cfg), "ENVPROFILES_DEFAULT_TEMPLATE_FILE": str(template_file)}

        settings = ProfileSettings.load(environ=environ, interactive=False)

        assert settings.template_text == "key=value\n"
        assert settings.template_source == str(template_file)

    def test_missing_template_file(self, cfg, tmp_path):
        environ = {"ENVPROFILES_CONFIG_DIR": str(cfg), "ENVPROFILES_DEFAULT_TEMPLATE_FILE": str(tmp_path / "nope")}
        with pytest.raises(ConfigError):
            ProfileSettings.load(environ=environ, interactive=False)

    def test_no_template_is_empty_vocabulary(self, cfg):
        settings = ProfileSettings.load(config_dir=cfg, environ={}, interactive=False)
        assert settings.template().is_empty()

    def test_settings_file_values(self, cfg):
        (cfg / "default.profile").write_text("x=1\n")
        write_settings(
            cfg,
            {
                "default_template_file": "default.profile",
                "placeholders": ["USER"],
                "extra_vars": ["OLD"],
                "interactive": True,
                "profile_var": "APP_PROFILE",
                "hooks": {"create": {"post": "echo hi"}},
            },
        )

        settings = ProfileSettings.load(config_dir=cfg, environ={})

        assert settings.template_text == "x=1\n"
        assert settings.placeholders == ["USER"]
        assert settings.extra_vars == ["OLD"]
        assert settings.interactive is True
        assert settings.profile_var == "APP_PROFILE"
        assert settings.hooks == {"create": {"post": "echo hi"}}

    def test_environment_overrides_settings_file(self, cfg):
        write_settings(cfg, {"default_template": "fromfile=1\n", "placeholders": ["A"], "interactive": True})
        environ = {
            "ENVPROFILES_DEFAULT_TEMPLATE": "fromenv=1\n",
            "ENVPROFILES_PLACEHOLDERS": "B, C D",
            "ENVPROFILES_INTERACTIVE": "no",
        }

        settings = ProfileSettings.load(config_dir=cfg, environ=environ)

        assert settings.template_text == "fromenv=1\n"
        assert settings.placeholders == ["B", "C", "D"]
        assert settings.interactive is False

    def test_interactive_argument_wins(self, cfg):
        settings = ProfileSettings.load(config_dir=cfg, environ={"ENVPROFILES_INTERACTIVE": "1"}, interactive=False)
        assert settings.interactive is False

    def test_derived_config_dir(self, tmp_path):
        environ = {"ENVPROFILES_APP_NAME": "myapp", "ENVPROFILES_PREFIX": str(tmp_path), "ENVPROFILES_PRIVILEGED": "0"}
        settings = ProfileSettings.load(environ=environ, interactive=False)
        assert settings.config_dir == tmp_path / "etc" / "myapp"


class TestReadSettingsFile:
    """Test settings.yaml parsing."""

    def test_missing_file(self, cfg):
        settings = read_settings_file(cfg / "settings.yaml")
        assert settings.hooks == {}

    def test_empty_file(self, cfg):
        (cfg / "settings.yaml").write_text("")
        assert read_settings_file(cfg / "settings.yaml").placeholders == []

    def test_invalid_yaml(self, cfg):
        (cfg / "settings.yaml").write_text("hooks: [unclosed\n")
        with pytest.raises(ConfigError):
            read_settings_file(cfg / "settings.yaml")

    def test_wrong_shape(self, cfg):
        (cfg / "settings.yaml").write_text("- just\n- a list\n")
        with pytest.raises(ConfigError):
            read_settings_file(cfg / "settings.yaml")

    def test_wrong_field_type(self, cfg):
        write_settings(cfg, {"placeholders": {"not": "a list"}})
        with pytest.raises(ConfigError):
            read_settings_file(cfg / "settings.yaml")
