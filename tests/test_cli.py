"""
Tests for the envprofiles CLI.

Exercises commands end to end through click's CliRunner with a temporary
configuration directory and non-interactive mode.
"""

import pytest
from click.testing import CliRunner
from envprofiles.main import cli

TEMPLATE = "# {{PROFILE_NAME}} settings\na=1\n#b=2\n"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, tmp_path):
    """Invoke the CLI against a temp config dir without prompting."""
    config_dir = tmp_path / "cfg"

    def _invoke(*args, template=TEMPLATE):
        env = {
            "ENVPROFILES_DEFAULT_TEMPLATE": template,
            "ENVPROFILES_APP_NAME": "demoapp",
            "ENVPROFILES_LOG_PATH": "",
        }
        return runner.invoke(
            cli,
            ["--config-dir", str(config_dir), "--no-interactive", *args],
            env=env,
            catch_exceptions=False,
        )

    _invoke.config_dir = config_dir
    return _invoke


class TestCreateAndLoad:
    """Test the create/load round trip."""

    def test_create_writes_substituted_template(self, invoke):
        result = invoke("create", "demo")

        assert result.exit_code == 0
        text = (invoke.config_dir / "profiles" / "demo").read_text()
        assert text == "# demoapp settings\na=1\n#b=2\n"

    def test_create_with_placeholder_option(self, invoke):
        result = invoke("create", "demo", "-p", "REGION=eu", template="region={{REGION}}\n")

        assert result.exit_code == 0
        assert (invoke.config_dir / "profiles" / "demo").read_text() == "region=eu\n"

    def test_create_bad_placeholder(self, invoke):
        result = invoke("create", "demo", "-p", "novalue")
        assert result.exit_code == 2

    def test_create_twice_fails(self, invoke):
        invoke("create", "demo")
        result = invoke("create", "demo")

        assert result.exit_code == 1
        assert result.output.count("already exists") == 1

    def test_create_without_name_non_interactive(self, invoke):
        result = invoke("create")
        assert result.exit_code == 1
        assert "name is required" in result.output

    def test_load_prints_exports(self, invoke):
        invoke("create", "demo")
        result = invoke("load", "demo")

        assert result.exit_code == 0
        assert "unset a b" in result.output
        assert "export a=1" in result.output
        assert "export b=2" in result.output
        assert "export PROFILE=demo" in result.output

    def test_load_missing_required(self, invoke):
        profile = invoke.config_dir / "profiles" / "bad"
        profile.parent.mkdir(parents=True)
        profile.write_text("#a=1\n")

        result = invoke("load", "bad")

        assert result.exit_code == 1
        assert "Required variable 'a'" in result.output
        assert "export" not in result.output

    def test_load_missing_profile(self, invoke):
        result = invoke("load", "ghost")
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_show(self, invoke):
        invoke("create", "demo")
        result = invoke("show", "demo")

        assert result.exit_code == 0
        assert "template" in result.output
        assert "profile" in result.output


class TestListAndDelete:
    """Test enumeration and removal."""

    def test_list_with_pattern(self, invoke):
        for name in ["alpha", "beta", "alphabet"]:
            invoke("create", name)

        result = invoke("list", "alpha")

        assert result.exit_code == 0
        assert [line for line in result.output.splitlines() if line in {"alpha", "beta", "alphabet"}] == ["alpha"]

    def test_list_empty(self, invoke):
        result = invoke("list")
        assert result.exit_code == 0
        assert "No profiles found" in result.output

    def test_delete_then_load(self, invoke):
        invoke("create", "demo")

        assert invoke("delete", "demo", "--yes").exit_code == 0
        assert not (invoke.config_dir / "profiles" / "demo").exists()
        assert invoke("load", "demo").exit_code == 1

    def test_delete_requires_yes_when_non_interactive(self, invoke):
        invoke("create", "demo")
        result = invoke("delete", "demo")

        assert result.exit_code == 1
        assert "requires confirmation" in result.output
        assert (invoke.config_dir / "profiles" / "demo").exists()

    def test_select_without_profiles(self, invoke):
        result = invoke("select")
        assert result.exit_code == 1
        assert "No profiles found" in result.output


class TestIntrospection:
    """Test commands that only read configuration."""

    def test_vars(self, invoke):
        result = invoke("vars")
        assert result.output.split() == ["a", "b"]

    def test_vars_required(self, invoke):
        result = invoke("vars", "--required")
        assert result.output.split() == ["a"]

    def test_path(self, invoke):
        result = invoke("path", "demo")
        assert result.output.strip() == str(invoke.config_dir / "profiles" / "demo")

    def test_path_without_name(self, invoke):
        result = invoke("path")
        assert result.output.strip() == str(invoke.config_dir / "profiles")

    def test_missing_configuration(self, runner):
        result = runner.invoke(
            cli,
            ["--no-interactive", "list"],
            env={"ENVPROFILES_APP_NAME": "", "ENVPROFILES_CONFIG_DIR": ""},
        )
        assert result.exit_code == 1
        assert "Cannot determine configuration directory" in result.output
