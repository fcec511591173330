"""Profile templates, storage, resolution and actions."""

from .manager import ProfileManager
from .parser import extract_required_variable_names
from .parser import extract_variable_names
from .parser import parse_assignments
from .parser import parse_template
from .placeholders import build_placeholders
from .placeholders import squeeze_blank_lines
from .placeholders import substitute
from .resolver import ProfileResolver
from .schema import ProfileTemplate
from .schema import ResolvedProfile
from .schema import TemplateVariable
from .store import ProfileStore
from .store import validate_profile_name

__all__ = [
    "ProfileManager",
    "ProfileResolver",
    "ProfileStore",
    "ProfileTemplate",
    "ResolvedProfile",
    "TemplateVariable",
    "build_placeholders",
    "extract_required_variable_names",
    "extract_variable_names",
    "parse_assignments",
    "parse_template",
    "squeeze_blank_lines",
    "substitute",
    "validate_profile_name",
]
