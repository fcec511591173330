"""Terminal collaborators: prompts and user messages."""

from .messages import ConsoleMessenger
from .messages import Messenger
from .messages import RecordingMessenger
from .prompts import ConsolePrompter
from .prompts import Prompter

__all__ = [
    "ConsoleMessenger",
    "ConsolePrompter",
    "Messenger",
    "Prompter",
    "RecordingMessenger",
]
