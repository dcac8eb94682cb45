"""Coordinator: routes each turn to an agent and feeds results back into shared knowledge."""

from collections.abc import Callable
from datetime import datetime

import structlog

from agents import DELEGATE_ACTION, GENERAL_AGENT_ID, AgentContract, ResponseBackend, default_agents
from agents.models import (
    AgentResponse,
    ConversationContext,
    Message,
    TaskContext,
    UserProfile,
)
from agents.rules import (
    MODE_BY_TASK_TYPE,
    RECOMMEND_ANALYTICAL_WORDS,
    RECOMMEND_CREATIVE_WORDS,
    RECOMMEND_QUESTION_WORDS,
    RECOMMEND_TASK_WORDS,
    contains_any,
    extract_topics,
)
from knowledge.models import BehaviorAnalysis, ContextualMemory, KnowledgeNote, SharedKnowledge, UserPreferences
from knowledge.store import KnowledgeStore, default_id_factory
from observability import Metrics
from shared_types import ChatMode, MessageRole

logger = structlog.get_logger()

MAX_HISTORY = 20
TRIMMED_HISTORY = 15
SUMMARY_CHARS = 100


class Coordinator:
    """One conversation session: agent registry, active agent, history and knowledge.

    The active-agent pointer starts at the general agent and only moves on a
    delegation from the general agent's probe or an explicit ``switch_agent``.
    """

    def __init__(
        self,
        store: KnowledgeStore | None = None,
        agents: list[AgentContract] | None = None,
        backend: ResponseBackend | None = None,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[str], str] | None = None,
        max_history: int = MAX_HISTORY,
        trimmed_history: int = TRIMMED_HISTORY,
    ):
        self.clock = clock or datetime.now
        self.id_factory = id_factory or default_id_factory
        self.store = store or KnowledgeStore(clock=self.clock, id_factory=self.id_factory)
        self.max_history = max_history
        self.trimmed_history = trimmed_history
        self.metrics = Metrics()

        self.agents: dict[str, AgentContract] = {}
        for agent in agents or default_agents(backend=backend, clock=self.clock):
            self.agents[agent.profile.id] = agent
        if GENERAL_AGENT_ID not in self.agents:
            raise ValueError(f"Coordinator requires a {GENERAL_AGENT_ID!r} agent")

        self.active_agent: AgentContract = self.agents[GENERAL_AGENT_ID]
        knowledge = self.store.get_shared_knowledge()
        self.context = ConversationContext(
            session_id=self.id_factory("session"),
            shared_knowledge=knowledge,
            preferences=knowledge.preferences,
        )

    # -- turn processing ------------------------------------------------------

    def process_message(
        self,
        text: str,
        mode: str = ChatMode.GENERAL,
        user_profile: UserProfile | None = None,
        task_context: TaskContext | None = None,
    ) -> AgentResponse:
        with self.metrics.timer("turn"):
            self._update_context(user_profile, task_context)
            user_message = Message(
                id=self.id_factory("msg"),
                role=MessageRole.USER,
                content=text,
                timestamp=self.clock(),
            )
            self.context.conversation_history.append(user_message)

            agent = self._select_agent(text, mode)
            agent.set_context(self.context)
            response = agent.process_message(text, mode)

            assistant_message = Message(
                id=self.id_factory("msg"),
                role=MessageRole.ASSISTANT,
                content=response.message,
                timestamp=self.clock(),
                agent_id=agent.profile.id,
                metadata={
                    "actions": response.actions,
                    "confidence": response.confidence,
                    "reasoning": response.reasoning,
                },
            )
            self.context.conversation_history.append(assistant_message)
            self._trim_history()

            for action in response.actions or []:
                self.store.add_recent_action(action)
                self.metrics.counter("actions")

            self._learn_from_interaction(user_message, assistant_message, response)
            self.metrics.counter("turns")

        logger.debug(
            "coordinator.turn",
            session_id=self.context.session_id,
            agent=agent.profile.id,
            confidence=response.confidence,
            actions=len(response.actions or []),
        )
        return response

    def _select_agent(self, text: str, mode: str) -> AgentContract:
        """Probe the general agent every turn; follow its delegation if the target exists."""
        general = self.agents[GENERAL_AGENT_ID]
        general.set_context(self.context)
        probe = general.process_message(text, mode)

        delegation = next((a for a in probe.actions or [] if a.type == DELEGATE_ACTION), None)
        if delegation:
            target_id = delegation.data.get("agent_id")
            target = self.agents.get(target_id)
            if target:
                if target is not self.active_agent:
                    logger.info("coordinator.delegated", from_agent=self.active_agent.profile.id, to_agent=target_id)
                self.active_agent = target
                self.metrics.counter("delegations")
            else:
                logger.warning("coordinator.unknown_delegate", agent_id=target_id)

        return self.active_agent

    def _update_context(self, user_profile: UserProfile | None, task_context: TaskContext | None) -> None:
        if user_profile:
            self.context.user_profile = user_profile
        if task_context:
            self.context.current_task = task_context
        self._refresh_knowledge()
        self._trim_history()

    def _refresh_knowledge(self) -> None:
        self.context.shared_knowledge = self.store.get_shared_knowledge()
        self.context.preferences = self.context.shared_knowledge.preferences

    def _trim_history(self) -> None:
        history = self.context.conversation_history
        if len(history) > self.max_history:
            self.context.conversation_history = history[-self.trimmed_history :]

    def _learn_from_interaction(
        self, user_message: Message, assistant_message: Message, response: AgentResponse
    ) -> None:
        memory = ContextualMemory(
            id=self.id_factory("interaction"),
            context=(
                f"User: {user_message.content[:SUMMARY_CHARS]}... | "
                f"Assistant: {assistant_message.content[:SUMMARY_CHARS]}..."
            ),
            insights=[
                f"Agent used: {assistant_message.agent_id}",
                f"Confidence: {response.confidence}",
                f"Actions taken: {len(response.actions or [])}",
            ],
            importance=response.confidence,
            timestamp=self.clock(),
            related_topics=extract_topics(user_message.content),
        )
        self.store.add_contextual_memory(memory)

    # -- agents ---------------------------------------------------------------

    def switch_agent(self, agent_id: str) -> bool:
        agent = self.agents.get(agent_id)
        if agent is None:
            return False
        self.active_agent = agent
        return True

    def get_available_agents(self) -> list[dict]:
        return [
            {"id": a.profile.id, "name": a.profile.name, "description": a.profile.description}
            for a in self.agents.values()
        ]

    def get_current_agent(self) -> dict:
        return {"id": self.active_agent.profile.id, "name": self.active_agent.profile.name}

    def get_recommended_mode(self, text: str) -> ChatMode:
        """Mode to use before sending ``text``, from keywords, preferences and the current task."""
        lowered = text.lower()
        prefs = self.context.preferences or UserPreferences()

        if contains_any(lowered, RECOMMEND_TASK_WORDS) and prefs.task_management_style == "structured":
            return ChatMode.TASK_FOCUSED
        if contains_any(lowered, RECOMMEND_CREATIVE_WORDS) or prefs.ai_personality == "creative":
            return ChatMode.CREATIVE
        if contains_any(lowered, RECOMMEND_ANALYTICAL_WORDS) or prefs.ai_personality == "analytical":
            return ChatMode.ANALYTICAL
        if contains_any(lowered, RECOMMEND_QUESTION_WORDS) and prefs.communication_style == "detailed":
            return ChatMode.ANALYTICAL

        task = self.context.current_task
        if task and task.type in MODE_BY_TASK_TYPE:
            return MODE_BY_TASK_TYPE[task.type]
        return ChatMode.GENERAL

    # -- session state ------------------------------------------------------------

    def update_user_preferences(self, **changes) -> UserPreferences:
        self.store.update_user_preferences(**changes)
        self._refresh_knowledge()
        return self.context.preferences

    def set_user_profile(self, profile: UserProfile) -> None:
        self.context.user_profile = profile

    def set_task_context(self, task_context: TaskContext) -> None:
        self.context.current_task = task_context

    def get_conversation_history(self) -> list[Message]:
        return list(self.context.conversation_history)

    def clear_conversation_history(self) -> None:
        self.context.conversation_history = []

    def restore_conversation_history(self, messages: list[Message]) -> None:
        self.context.conversation_history = list(messages)

    # -- knowledge ------------------------------------------------------------------

    def get_shared_knowledge(self) -> SharedKnowledge:
        return self.store.get_shared_knowledge()

    def search_knowledge(
        self, query: str, tags: list[str] | None = None, category: str | None = None
    ) -> list[KnowledgeNote]:
        return self.store.search_notes(query, tags=tags, category=category)

    def add_note(
        self, title: str, content: str, tags: list[str] | tuple[str, ...] = (), category: str | None = None
    ) -> KnowledgeNote:
        now = self.clock()
        note = KnowledgeNote(
            id=self.id_factory("note"),
            title=title,
            content=content,
            tags=list(tags),
            category=category,
            created_at=now,
            updated_at=now,
        )
        self.store.add_note(note)
        self._refresh_knowledge()
        return note

    def update_note(self, note_id: str, **patch) -> bool:
        updated = self.store.update_note(note_id, **patch)
        self._refresh_knowledge()
        return updated

    def delete_note(self, note_id: str) -> bool:
        deleted = self.store.delete_note(note_id)
        self._refresh_knowledge()
        return deleted

    def analyze_user_behavior(self) -> BehaviorAnalysis:
        return self.store.analyze_user_behavior()
