"""Shared enums and types for note-copilot."""

from enum import StrEnum


class ChatMode(StrEnum):
    GENERAL = "general"
    TASK_FOCUSED = "task-focused"
    CREATIVE = "creative"
    ANALYTICAL = "analytical"


class MessageRole(StrEnum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ActionPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AgentKind(StrEnum):
    GENERAL = "general"
    PRODUCTIVITY = "productivity"
    WRITING = "writing"


class Intent(StrEnum):
    TASK = "task"
    WRITING = "writing"
    SEARCH = "search"
    QUESTION = "question"
    GENERAL = "general"
