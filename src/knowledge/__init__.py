"""Shared knowledge: notes, actions, memories and working patterns for all agents."""

from .models import (
    Action,
    BehaviorAnalysis,
    ContextualMemory,
    KnowledgeNote,
    SharedKnowledge,
    UserPreferences,
    WorkingPattern,
)
from .persistence import MemoryBlobStore, PersistencePort, SQLiteBlobStore
from .store import KnowledgeStore

__all__ = [
    "Action",
    "BehaviorAnalysis",
    "ContextualMemory",
    "KnowledgeNote",
    "KnowledgeStore",
    "MemoryBlobStore",
    "PersistencePort",
    "SQLiteBlobStore",
    "SharedKnowledge",
    "UserPreferences",
    "WorkingPattern",
]
