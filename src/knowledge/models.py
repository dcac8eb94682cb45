"""Data models for the shared knowledge store."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import BaseModel

from shared_types import ActionPriority


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO timestamp as a naive local datetime.

    Stored blobs may carry UTC offsets (e.g. a trailing ``Z``); the store's
    clock is naive, so aware values are converted to local time.
    """
    parsed = value if isinstance(value, datetime) else datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


@dataclass
class KnowledgeNote:
    """The agents' private working copy of a user note."""

    id: str
    title: str
    content: str
    tags: list[str] = field(default_factory=list)
    category: str | None = None
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "tags": list(self.tags),
            "category": self.category,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "KnowledgeNote":
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            content=data.get("content", ""),
            tags=list(data.get("tags") or []),
            category=data.get("category"),
            created_at=parse_timestamp(data["createdAt"]),
            updated_at=parse_timestamp(data["updatedAt"]),
        )


@dataclass
class Action:
    """Something an agent proposes or performs on the user's behalf."""

    type: str
    data: dict = field(default_factory=dict)
    message: str | None = None
    priority: ActionPriority = ActionPriority.MEDIUM
    requires_confirmation: bool = False
    timestamp: datetime | None = None  # set by the store when recorded

    def to_dict(self) -> dict:
        d = {
            "type": self.type,
            "data": dict(self.data),
            "priority": str(self.priority),
            "requiresConfirmation": self.requires_confirmation,
        }
        if self.message is not None:
            d["message"] = self.message
        if self.timestamp is not None:
            d["timestamp"] = _iso(self.timestamp)
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "Action":
        ts = data.get("timestamp")
        return cls(
            type=data["type"],
            data=dict(data.get("data") or {}),
            message=data.get("message"),
            priority=ActionPriority(data.get("priority") or ActionPriority.MEDIUM),
            requires_confirmation=bool(data.get("requiresConfirmation", False)),
            timestamp=parse_timestamp(ts) if ts else None,
        )


@dataclass
class ContextualMemory:
    """Scored summary of a past interaction or note."""

    id: str
    context: str
    insights: list[str] = field(default_factory=list)
    importance: float = 0.5
    timestamp: datetime = field(default_factory=datetime.now)
    related_topics: list[str] = field(default_factory=list)

    def __post_init__(self):
        self.importance = clamp(self.importance)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "context": self.context,
            "insights": list(self.insights),
            "importance": self.importance,
            "timestamp": _iso(self.timestamp),
            "relatedTopics": list(self.related_topics),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ContextualMemory":
        return cls(
            id=data["id"],
            context=data.get("context", ""),
            insights=list(data.get("insights") or []),
            importance=float(data.get("importance", 0.5)),
            timestamp=parse_timestamp(data["timestamp"]),
            related_topics=list(data.get("relatedTopics") or []),
        )


@dataclass
class WorkingPattern:
    """Aggregate (time-of-day, activity) statistic."""

    time_of_day: str
    activity_type: str
    frequency: int = 1
    effectiveness: float = 0.7

    def to_dict(self) -> dict:
        return {
            "timeOfDay": self.time_of_day,
            "activityType": self.activity_type,
            "frequency": self.frequency,
            "effectiveness": self.effectiveness,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkingPattern":
        return cls(
            time_of_day=data["timeOfDay"],
            activity_type=data["activityType"],
            frequency=int(data.get("frequency", 1)),
            effectiveness=clamp(float(data.get("effectiveness", 0.7))),
        )


class UserPreferences(BaseModel):
    communication_style: str = "conversational"  # conversational/detailed/concise
    task_management_style: str = "flexible"  # flexible/structured
    notification_level: str = "medium"
    preferred_language: str = "english"
    ai_personality: str = "friendly"  # friendly/creative/analytical/professional

    def merged(self, **changes) -> "UserPreferences":
        """Return a copy with the given fields replaced; unknown keys are ignored."""
        known = {k: v for k, v in changes.items() if k in type(self).model_fields}
        return self.model_copy(update=known)

    def to_dict(self) -> dict:
        return {
            "communicationStyle": self.communication_style,
            "taskManagementStyle": self.task_management_style,
            "notificationLevel": self.notification_level,
            "preferredLanguage": self.preferred_language,
            "aiPersonality": self.ai_personality,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserPreferences":
        mapping = {
            "communicationStyle": "communication_style",
            "taskManagementStyle": "task_management_style",
            "notificationLevel": "notification_level",
            "preferredLanguage": "preferred_language",
            "aiPersonality": "ai_personality",
        }
        return cls(**{mapping[k]: v for k, v in data.items() if k in mapping})


@dataclass
class SharedKnowledge:
    """Snapshot of the store handed to agents."""

    user_notes: list[KnowledgeNote] = field(default_factory=list)
    recent_actions: list[Action] = field(default_factory=list)
    contextual_memory: list[ContextualMemory] = field(default_factory=list)
    preferences: UserPreferences = field(default_factory=UserPreferences)
    working_patterns: list[WorkingPattern] = field(default_factory=list)


@dataclass
class BehaviorAnalysis:
    preferred_times: list[str] = field(default_factory=list)
    common_activities: list[str] = field(default_factory=list)
    effectiveness_patterns: list[dict] = field(default_factory=list)
