"""Orchestration: the per-session coordinator and its conversation archive."""

from .archive import ConversationArchive
from .coordinator import Coordinator

__all__ = ["ConversationArchive", "Coordinator"]
