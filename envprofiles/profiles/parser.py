"""Parser for the shell-like ``name=value`` profile format.

Templates and profile files share one syntax::

    # Lines whose first non-blank character is '#' are comments.
    #log_level=info            <- optional variable (commented assignment)
    api_url='https://example'  <- required variable
    tags=(one "two three")     <- array literal
    hosts=(                    <- arrays may span lines
      alpha
      beta
    )
    region=eu  # note          <- trailing comments are dropped
    export region=eu-west-1    <- 'export' keyword is accepted

Values are parsed as data only. Nothing is expanded or executed, and
lines that are not assignments are skipped.
"""

from __future__ import annotations

import logging
import re
import shlex
from collections.abc import Iterator
from typing import NamedTuple

from ..errors import ProfileSyntaxError
from .schema import ProfileTemplate
from .schema import TemplateVariable
from .schema import Value

logger = logging.getLogger(__name__)

ASSIGNMENT_PATTERN = re.compile(r"^(?:export\s+)?([A-Za-z_][A-Za-z0-9_]*)=(.*)$")


class Assignment(NamedTuple):
    """A single ``name=value`` line."""

    name: str
    value: Value
    commented: bool
    line: int


def iter_assignments(text: str, source: str = "<template>") -> Iterator[Assignment]:
    """Yield every assignment in ``text``, commented or not, in file order.

    An array literal may span several physical lines; its assignment carries
    the line number where it starts.
    """
    lines = text.splitlines()
    index = 0
    while index < len(lines):
        lineno = index + 1
        stripped, commented = _uncomment(lines[index])
        index += 1
        if not stripped:
            continue

        match = ASSIGNMENT_PATTERN.match(stripped)
        if match is None:
            if not commented:
                logger.debug(f"{source}:{lineno}: ignoring non-assignment line")
            continue

        name, raw_value = match.group(1), strip_trailing_comment(match.group(2))
        next_index = index
        if raw_value.lstrip().startswith("("):
            raw_value, next_index = _continue_array(lines, index, raw_value.lstrip(), commented)

        try:
            value = parse_value(raw_value)
        except ValueError as e:
            if commented:
                # Prose that happens to look like an assignment
                logger.debug(f"{source}:{lineno}: ignoring unparseable comment: {e}")
                continue
            raise ProfileSyntaxError(source, lineno, f"cannot parse value of '{name}': {e}") from e

        index = next_index
        yield Assignment(name=name, value=value, commented=commented, line=lineno)


def _uncomment(raw_line: str) -> tuple[str, bool]:
    """Strip a line and any leading '#' marks; report whether it was commented."""
    stripped = raw_line.strip()
    if stripped.startswith("#"):
        return stripped.lstrip("#").strip(), True
    return stripped, False


def _continue_array(lines: list[str], index: int, raw_value: str, commented: bool) -> tuple[str, int]:
    """Join physical lines until the array literal closes.

    A commented array continues only over commented lines. An uncommented
    array skips comment lines inside it.
    """
    while _find_array_end(raw_value) is None and index < len(lines):
        text, line_commented = _uncomment(lines[index])
        if commented and not line_commented and text:
            break
        index += 1
        if line_commented and not commented:
            continue
        raw_value += "\n" + strip_trailing_comment(text)
    return raw_value, index


def strip_trailing_comment(raw: str) -> str:
    """Drop an unquoted ``#`` comment that follows whitespace.

    ``foo#bar`` and a value starting with ``#`` stay literal.
    """
    quote: str | None = None
    escaped = False
    for index, char in enumerate(raw):
        if escaped:
            escaped = False
        elif char == "\\" and quote != "'":
            escaped = True
        elif quote:
            if char == quote:
                quote = None
        elif char in ("'", '"'):
            quote = char
        elif char == "#" and index > 0 and raw[index - 1].isspace():
            return raw[:index].rstrip()
    return raw


def parse_value(raw: str) -> Value:
    """Parse the right-hand side of an assignment.

    Raises:
        ValueError: On unterminated quotes or array literals
    """
    raw = strip_trailing_comment(raw).strip()
    if raw.startswith("("):
        end = _find_array_end(raw)
        if end is None:
            raise ValueError("unterminated array literal")
        return shlex.split(raw[1:end])

    tokens = shlex.split(raw)
    if not tokens:
        return ""
    if len(tokens) > 1:
        logger.debug(f"Ignoring trailing words after value: {tokens[1:]}")
    return tokens[0]


def _find_array_end(raw: str) -> int | None:
    """Index of the ')' closing an array literal, skipping quoted text.

    None when the literal is not closed yet.
    """
    quote: str | None = None
    escaped = False
    for index, char in enumerate(raw[1:], start=1):
        if escaped:
            escaped = False
        elif char == "\\" and quote != "'":
            escaped = True
        elif quote:
            if char == quote:
                quote = None
        elif char in ("'", '"'):
            quote = char
        elif char == ")":
            return index
    return None


def parse_template(text: str | None, source: str = "<template>") -> ProfileTemplate:
    """Parse default template text into a typed vocabulary.

    A variable is required if any of its assignments is uncommented.
    Its default is the last value assigned anywhere in the template.
    """
    text = text or ""
    variables: dict[str, TemplateVariable] = {}
    for assignment in iter_assignments(text, source):
        existing = variables.get(assignment.name)
        if existing is None:
            variables[assignment.name] = TemplateVariable(
                name=assignment.name,
                default=assignment.value,
                required=not assignment.commented,
                line=assignment.line,
            )
        else:
            existing.default = assignment.value
            existing.required = existing.required or not assignment.commented
    return ProfileTemplate(text=text, variables=list(variables.values()))


def parse_assignments(text: str, source: str = "<profile>") -> dict[str, Value]:
    """Evaluate the uncommented assignments of a profile file; last one wins."""
    values: dict[str, Value] = {}
    for assignment in iter_assignments(text, source):
        if not assignment.commented:
            values[assignment.name] = assignment.value
    return values


def _as_template(template: str | ProfileTemplate | None) -> ProfileTemplate:
    if isinstance(template, ProfileTemplate):
        return template
    return parse_template(template)


def extract_variable_names(template: str | ProfileTemplate | None) -> list[str]:
    """All declared variable names, commented or not, in first-seen order."""
    return _as_template(template).names()


def extract_required_variable_names(template: str | ProfileTemplate | None) -> list[str]:
    """Names declared on at least one uncommented line."""
    return _as_template(template).required_names()
