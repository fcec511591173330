"""Tests for the environment-variable adapter."""

import shlex
import subprocess
from pathlib import Path

import pytest
from envprofiles.environment import clear_environment
from envprofiles.environment import env_value
from envprofiles.environment import export_profile
from envprofiles.environment import render_shell_exports
from envprofiles.profiles import ResolvedProfile


@pytest.fixture
def resolved():
    return ResolvedProfile(
        name="dev",
        path=Path("/cfg/profiles/dev"),
        values={"url": "https://x/?a=1&b=2", "hosts": ["one", "two three"], "empty": ""},
        sources={"url": "profile", "hosts": "template", "empty": "template"},
    )


class TestInProcess:
    """Test exporting into a mapping."""

    def test_env_value(self):
        assert env_value("x") == "x"
        assert env_value(["a", "b"]) == "a b"
        assert env_value([]) == ""

    def test_clear_environment(self):
        environ = {"a": "1", "keep": "2"}
        assert clear_environment(environ, ["a", "missing"]) == ["a"]
        assert environ == {"keep": "2"}

    def test_export_profile(self, resolved):
        environ: dict[str, str] = {}
        export_profile(environ, resolved)

        assert environ == {
            "url": "https://x/?a=1&b=2",
            "hosts": "one two three",
            "empty": "",
            "PROFILE": "dev",
        }

    def test_export_profile_custom_var(self, resolved):
        environ: dict[str, str] = {}
        export_profile(environ, resolved, profile_var="APP_PROFILE")
        assert environ["APP_PROFILE"] == "dev"
        assert "PROFILE" not in environ


class TestShellExports:
    """Test shell code rendering."""

    def test_render(self, resolved):
        output = render_shell_exports(resolved, ["url", "hosts", "empty", "OLD"])

        assert output.splitlines() == [
            "unset url hosts empty OLD",
            f"export url={shlex.quote('https://x/?a=1&b=2')}",
            "hosts=(one 'two three')",
            "export hosts",
            "export empty=''",
            "export PROFILE=dev",
        ]

    def test_no_unset_without_names(self, resolved):
        assert not render_shell_exports(resolved).startswith("unset")

    def test_output_is_valid_bash(self, resolved, tmp_path):
        """Evaluating the output in bash reproduces the values."""
        script = render_shell_exports(resolved) + 'printf "%s|%s|%s" "$url" "${hosts[1]}" "$PROFILE"\n'
        try:
            proc = subprocess.run(["bash", "-c", script], capture_output=True, text=True, timeout=10)
        except FileNotFoundError:
            pytest.skip("bash not available")

        assert proc.stdout == "https://x/?a=1&b=2|two three|dev"
