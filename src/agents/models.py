"""Data models shared by agents and the coordinator."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from knowledge.models import Action, SharedKnowledge, UserPreferences, clamp, parse_timestamp
from shared_types import AgentKind, MessageRole


@dataclass(frozen=True)
class AgentProfile:
    id: str
    name: str
    description: str
    capabilities: tuple[str, ...]
    personality: str
    expertise_areas: tuple[str, ...]
    system_prompt: str
    kind: AgentKind


@dataclass(frozen=True)
class Message:
    id: str
    role: MessageRole
    content: str
    timestamp: datetime
    agent_id: str | None = None
    metadata: dict | None = None

    def to_dict(self) -> dict:
        d = {
            "id": self.id,
            "role": str(self.role),
            "content": self.content,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.agent_id:
            d["agentId"] = self.agent_id
        if self.metadata:
            meta = dict(self.metadata)
            if meta.get("actions"):
                meta["actions"] = [a.to_dict() for a in meta["actions"]]
            d["metadata"] = meta
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "Message":
        metadata = data.get("metadata")
        if metadata and metadata.get("actions"):
            metadata = {**metadata, "actions": [Action.from_dict(a) for a in metadata["actions"]]}
        return cls(
            id=data["id"],
            role=MessageRole(data["role"]),
            content=data.get("content", ""),
            timestamp=parse_timestamp(data["timestamp"]),
            agent_id=data.get("agentId"),
            metadata=metadata or None,
        )


@dataclass
class AgentResponse:
    message: str
    confidence: float
    actions: list[Action] | None = None
    reasoning: str | None = None
    needs_clarification: bool = False
    clarification_question: str | None = None
    suggested_follow_ups: list[str] | None = None

    def __post_init__(self):
        self.confidence = clamp(self.confidence)

    def has_action(self, action_type: str) -> bool:
        return any(a.type == action_type for a in self.actions or [])

    def to_dict(self) -> dict:
        """Wire format consumed by the UI layer."""
        d: dict[str, Any] = {"message": self.message, "confidence": self.confidence}
        if self.actions:
            d["actions"] = [a.to_dict() for a in self.actions]
        if self.reasoning:
            d["reasoning"] = self.reasoning
        if self.needs_clarification:
            d["needsClarification"] = True
            d["clarificationQuestion"] = self.clarification_question
        if self.suggested_follow_ups:
            d["suggestedFollowUps"] = list(self.suggested_follow_ups)
        return d


class UserProfile(BaseModel):
    display_name: Optional[str] = None
    working_style: Optional[str] = None
    goals: list[str] = Field(default_factory=list)
    timezone: Optional[str] = None


class TaskContext(BaseModel):
    type: str = "general"  # productivity/creative/analysis/general
    description: str = ""
    priority: str = "medium"
    complexity: str = "moderate"
    deadline: Optional[datetime] = None


@dataclass
class ConversationContext:
    session_id: str
    conversation_history: list[Message] = field(default_factory=list)
    user_profile: UserProfile | None = None
    preferences: UserPreferences | None = None
    current_task: TaskContext | None = None
    shared_knowledge: SharedKnowledge | None = None


@dataclass
class IntentAnalysis:
    intent: str
    confidence: float
    extracted_entities: dict[str, list[str]] = field(default_factory=dict)
