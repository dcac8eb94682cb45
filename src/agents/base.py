"""Agent contract and the behaviour every agent shares."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime
from typing import Protocol, runtime_checkable

import structlog

from shared_types import ChatMode

from .models import AgentProfile, AgentResponse, ConversationContext, IntentAnalysis, Message
from .prompts import PromptTemplates
from .rules import DATE_PATTERN, DEFAULT_INTENT, INTENT_RULES, MODE_BY_INTENT, TIME_PATTERN, contains_any

logger = structlog.get_logger()

HISTORY_WINDOW = 6


@runtime_checkable
class AgentContract(Protocol):
    """What the coordinator needs from an agent."""

    profile: AgentProfile

    def set_context(self, context: ConversationContext) -> None: ...

    def process_message(
        self, text: str, mode: str, extra_context: dict | None = None
    ) -> AgentResponse: ...

    def build_system_prompt(self, mode: str) -> str: ...

    def analyze_user_intent(self, text: str, history: list[Message]) -> IntentAnalysis: ...

    def determine_optimal_mode(self, text: str, intent: str, current_mode: str) -> str: ...


class ResponseBackend(Protocol):
    """Optional text generator. Agents fall back to templates without one."""

    def generate(self, messages: list[dict], system: str | None = None) -> str: ...


class Agent(ABC):
    """Shared prompt building, keyword heuristics and the optional backend call.

    Subclasses implement ``process_message``; it must always return a
    response for well-formed input. ``extra_context`` is accepted for
    callers that carry per-turn data; the built-in agents do not read it.
    """

    def __init__(
        self,
        profile: AgentProfile,
        clock: Callable[[], datetime] | None = None,
        backend: ResponseBackend | None = None,
    ):
        self.profile = profile
        self.clock = clock or datetime.now
        self.backend = backend
        self.context: ConversationContext | None = None

    def set_context(self, context: ConversationContext) -> None:
        self.context = context

    @abstractmethod
    def process_message(self, text: str, mode: str, extra_context: dict | None = None) -> AgentResponse:
        ...

    def generate(self, mode: str, text: str) -> str | None:
        """Backend answer for ``text`` under this agent's system prompt, or None.

        None means no backend is configured or it failed; callers use templates.
        """
        if self.backend is None:
            return None
        messages = [{"role": str(m.role), "content": m.content} for m in self.history[-HISTORY_WINDOW:]]
        messages.append({"role": "user", "content": text})
        try:
            return self.backend.generate(messages=messages, system=self.build_system_prompt(mode))
        except Exception as e:
            logger.warning("agent.backend_failed", agent=self.profile.id, error=str(e))
            return None

    @property
    def history(self) -> list[Message]:
        return self.context.conversation_history if self.context else []

    # -- prompt ---------------------------------------------------------------

    def build_system_prompt(self, mode: str) -> str:
        return "\n\n".join(
            [
                self.profile.system_prompt,
                PromptTemplates.mode_block(mode),
                self.build_contextual_prompt(),
                f"{PromptTemplates.SHARED_KNOWLEDGE_HEADER}\n{self.build_shared_knowledge_prompt()}",
            ]
        )

    def build_contextual_prompt(self) -> str:
        if not self.context:
            return ""

        lines = ["", "CONTEXTUAL INFORMATION:"]
        profile = self.context.user_profile
        if profile:
            lines += [
                "User Profile:",
                f"- Name: {profile.display_name or 'User'}",
                f"- Working Style: {profile.working_style or 'Not specified'}",
                f"- Goals: {', '.join(profile.goals) or 'Not specified'}",
                f"- Timezone: {profile.timezone or 'Not specified'}",
            ]
        prefs = self.context.preferences
        if prefs:
            lines += [
                "User Preferences:",
                f"- Communication Style: {prefs.communication_style}",
                f"- Task Management: {prefs.task_management_style}",
                f"- AI Personality: {prefs.ai_personality}",
                f"- Language: {prefs.preferred_language}",
            ]
        task = self.context.current_task
        if task:
            lines += [
                "Current Task Context:",
                f"- Type: {task.type}",
                f"- Description: {task.description}",
                f"- Priority: {task.priority}",
                f"- Complexity: {task.complexity}",
                f"- Deadline: {task.deadline.isoformat() if task.deadline else 'None'}",
            ]
        return "\n".join(lines) + "\n"

    def build_shared_knowledge_prompt(self) -> str:
        knowledge = self.context.shared_knowledge if self.context else None
        if not knowledge:
            return ""

        parts = []
        notes = sorted(knowledge.user_notes, key=lambda n: n.updated_at, reverse=True)[:5]
        if notes:
            parts.append(
                "Recent User Notes:\n"
                + "\n".join(f"- {n.title}: {n.content[:100]}..." for n in notes)
            )

        actions = knowledge.recent_actions[-3:]
        if actions:
            parts.append(
                "Recent Actions:\n"
                + "\n".join(f"- {a.type}: {a.message or 'No description'}" for a in actions)
            )

        memories = sorted(knowledge.contextual_memory, key=lambda m: m.importance, reverse=True)[:3]
        if memories:
            parts.append(
                "Relevant Context:\n"
                + "\n".join(f"- {m.context}: {', '.join(m.insights)}" for m in memories)
            )

        patterns = sorted(knowledge.working_patterns, key=lambda p: p.effectiveness, reverse=True)[:2]
        if patterns:
            parts.append(
                "Working Patterns:\n"
                + "\n".join(
                    f"- {p.time_of_day}: {p.activity_type} (effectiveness: {p.effectiveness})"
                    for p in patterns
                )
            )

        return "".join(f"{p}\n" for p in parts)

    # -- heuristics ------------------------------------------------------------

    def analyze_user_intent(self, text: str, history: list[Message]) -> IntentAnalysis:
        lowered = text.lower()
        rule = next((r for r in INTENT_RULES if contains_any(lowered, r.keywords)), DEFAULT_INTENT)

        entities: dict[str, list[str]] = {}
        dates = [m.group(0) for m in DATE_PATTERN.finditer(text)]
        times = [m.group(0) for m in TIME_PATTERN.finditer(text)]
        if dates:
            entities["dates"] = dates
        if times:
            entities["times"] = times

        return IntentAnalysis(intent=str(rule.intent), confidence=rule.confidence, extracted_entities=entities)

    def determine_optimal_mode(self, text: str, intent: str, current_mode: str) -> str:
        mode = MODE_BY_INTENT.get(intent)
        return str(mode) if mode else current_mode

    @staticmethod
    def pick(mode: str, variants: dict[str, str]) -> str:
        """Mode-specific template; ``variants["default"]`` covers general and unknown modes."""
        try:
            return variants.get(ChatMode(mode), variants["default"])
        except ValueError:
            return variants["default"]
