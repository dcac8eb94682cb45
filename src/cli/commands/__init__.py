"""CLI command modules."""

from .chat import agents, chat, mode
from .history import history
from .knowledge import knowledge
from .notes import notes

__all__ = [
    "chat",
    "agents",
    "mode",
    "notes",
    "knowledge",
    "history",
]
