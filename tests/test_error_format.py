"""Tests for error message formatting."""

from envprofiles.errors import MissingRequiredVariableError
from envprofiles.errors import NotFoundError
from envprofiles.utils.error_format import escape_markup
from envprofiles.utils.error_format import format_error_message


class TestFormatErrorMessage:
    """Test display messages for exceptions."""

    def test_regular_exception_gets_type(self):
        assert format_error_message(ValueError("bad input")) == "ValueError: bad input"

    def test_without_type(self):
        assert format_error_message(ValueError("bad input"), include_type=False) == "bad input"

    def test_profile_errors_are_not_prefixed(self):
        error = MissingRequiredVariableError("token", "dev")
        assert format_error_message(error) == "Required variable 'token' is not set in profile 'dev'"

    def test_empty_message_uses_friendly_text(self):
        assert format_error_message(TimeoutError()) == "TimeoutError: Operation timed out."

    def test_unknown_empty_exception(self):
        assert format_error_message(RuntimeError()) == "RuntimeError: (no additional details)"

    def test_not_found_without_name(self):
        assert format_error_message(NotFoundError("")) == "No profile name given"


class TestEscapeMarkup:
    """Test Rich markup escaping."""

    def test_brackets_escaped(self):
        assert escape_markup("[red]x[/red]") == "\\[red]x\\[/red]"

    def test_non_string(self):
        assert escape_markup(42) == "42"
