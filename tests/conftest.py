"""Pytest configuration and shared fixtures for envprofiles tests."""

from pathlib import Path

import pytest
from envprofiles.hooks import HookRegistry
from envprofiles.profiles import ProfileManager
from envprofiles.profiles import ProfileStore
from envprofiles.profiles import parse_template
from envprofiles.ui import RecordingMessenger


class FakePrompter:
    """Scripted stand-in for the terminal prompter."""

    def __init__(self, answer=None, choice=None, confirm=True, edit_ok=True):
        self.answer = answer
        self.choice = choice
        self.confirm_answer = confirm
        self.edit_ok = edit_ok
        self.calls: list[tuple] = []

    def ask(self, prompt, default=None):
        self.calls.append(("ask", prompt))
        return self.answer

    def choose(self, prompt, options, default=None):
        self.calls.append(("choose", prompt, list(options)))
        return self.choice

    def confirm(self, prompt, default=False):
        self.calls.append(("confirm", prompt))
        return self.confirm_answer

    def edit(self, path: Path) -> bool:
        self.calls.append(("edit", path))
        return self.edit_ok


@pytest.fixture
def config_dir(tmp_path):
    return tmp_path / "config"


@pytest.fixture
def store(config_dir):
    return ProfileStore(config_dir)


@pytest.fixture
def messenger():
    return RecordingMessenger()


@pytest.fixture
def make_manager(store, messenger):
    """Factory building a ProfileManager over the temp store."""

    def _make(template_text: str = "", **kwargs) -> ProfileManager:
        kwargs.setdefault("app_name", "demoapp")
        kwargs.setdefault("hooks", HookRegistry())
        kwargs.setdefault("messenger", messenger)
        return ProfileManager(store, parse_template(template_text), **kwargs)

    return _make


def write_profile(store: ProfileStore, name: str, text: str) -> Path:
    """Write a profile file directly, bypassing creation."""
    store.ensure_dir()
    path = store.path_for(name)
    path.write_text(text)
    return path
