"""Typed models for profile templates and resolved profiles."""

from __future__ import annotations

from collections.abc import Iterator
from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

from pydantic import BaseModel
from pydantic import Field

# A variable holds either a scalar string or an array of strings.
Value = str | list[str]

SOURCE_TEMPLATE = "template"
SOURCE_PROFILE = "profile"


class TemplateVariable(BaseModel):
    """One variable declared by the default template."""

    name: str = Field(..., description="Variable name")
    default: Value = Field("", description="Last value assigned in the template")
    required: bool = Field(False, description="True if declared on at least one uncommented line")
    line: int = Field(..., description="1-based line of the first declaration")


class ProfileTemplate(BaseModel):
    """Default template parsed into an ordered vocabulary.

    The original text is kept so that created profiles reproduce it
    verbatim, comments and blank lines included.
    """

    text: str = ""
    variables: list[TemplateVariable] = Field(default_factory=list)

    def names(self) -> list[str]:
        return [var.name for var in self.variables]

    def required_names(self) -> list[str]:
        return [var.name for var in self.variables if var.required]

    def get(self, name: str) -> TemplateVariable | None:
        for var in self.variables:
            if var.name == name:
                return var
        return None

    def defaults(self) -> dict[str, Value]:
        """Evaluate the template alone: every variable takes its template value."""
        return {var.name: _copy_value(var.default) for var in self.variables}

    def optional_defaults(self) -> dict[str, Value]:
        """Values inherited by profiles that do not set an optional variable."""
        return {var.name: _copy_value(var.default) for var in self.variables if not var.required}

    def is_empty(self) -> bool:
        return not self.variables


@dataclass(frozen=True)
class ResolvedProfile(Mapping[str, Value]):
    """Final variable set of a loaded profile.

    Behaves as a read-only ordered mapping of variable name to value.
    ``sources`` records whether each value came from the template or
    from the profile file.
    """

    name: str
    path: Path
    values: dict[str, Value] = field(default_factory=dict)
    sources: dict[str, str] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Value:
        return self.values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def source_of(self, key: str) -> str | None:
        return self.sources.get(key)

    def as_dict(self) -> dict[str, Value]:
        return {key: _copy_value(value) for key, value in self.values.items()}


def _copy_value(value: Value) -> Value:
    return list(value) if isinstance(value, list) else value


def is_empty_value(value: Value | None) -> bool:
    """True for unset values, empty strings and empty arrays."""
    if value is None:
        return True
    if isinstance(value, list):
        return len(value) == 0
    return value == ""
