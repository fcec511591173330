"""Safe error message formatting utilities.

Ensures exceptions always have useful display messages, even when
their str() representation is empty.
"""

from __future__ import annotations

from rich.markup import escape as _escape_markup

from ..errors import ProfileError

# Friendly messages for exception types known to have empty str()
FRIENDLY_MESSAGES: dict[type, str] = {
    TimeoutError: "Operation timed out.",
    PermissionError: "Permission denied.",
    KeyboardInterrupt: "Operation interrupted by user.",
    EOFError: "No input available.",
}


def format_error_message(e: BaseException, *, include_type: bool = True) -> str:
    """Format an exception into a useful display message.

    Profile engine errors are already phrased for users, so their type
    name is never prepended.

    Examples:
        >>> format_error_message(ValueError("invalid input"))
        'ValueError: invalid input'

        >>> format_error_message(EOFError())
        'EOFError: No input available.'
    """
    error_str = str(e)
    error_type = type(e).__name__

    if error_str:
        if include_type and not isinstance(e, ProfileError) and error_type not in error_str:
            return f"{error_type}: {error_str}"
        return error_str

    for exc_type, friendly_msg in FRIENDLY_MESSAGES.items():
        if isinstance(e, exc_type):
            return f"{error_type}: {friendly_msg}"

    return f"{error_type}: (no additional details)"


def escape_markup(value: object) -> str:
    """Escape a value for safe interpolation into Rich markup strings.

    Prevents Rich from interpreting brackets in exception messages,
    file paths, or profile values as markup tags.
    """
    return _escape_markup(str(value))
