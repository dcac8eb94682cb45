"""General assistant. Fallback agent and delegation referee."""

from dataclasses import dataclass

from knowledge.models import Action
from shared_types import ActionPriority, AgentKind, Intent

from .base import Agent, ResponseBackend
from .models import AgentProfile, AgentResponse, IntentAnalysis
from .prompts import PromptTemplates
from .rules import (
    COMPLEXITY_INDICATORS,
    DELEGATION_THRESHOLD,
    PRODUCTIVITY_KEYWORDS,
    SEARCHABLE_PHRASES,
    STOP_WORDS,
    WRITING_KEYWORDS,
    contains_any,
    keyword_confidence,
)

GENERAL_AGENT_ID = "general-agent"
DELEGATE_ACTION = "delegate_to_agent"

AGENT_NAMES = {
    "productivity-agent": "Productivity Assistant",
    "writing-agent": "Writing Assistant",
}

PROFILE = AgentProfile(
    id=GENERAL_AGENT_ID,
    name="General Assistant",
    description="Versatile AI assistant for general conversation, questions, and adaptive assistance",
    capabilities=(
        "general_conversation",
        "answer_questions",
        "provide_explanations",
        "offer_guidance",
        "coordinate_agents",
        "adapt_communication",
        "problem_solving",
        "brainstorming",
    ),
    personality="friendly",
    expertise_areas=("General Knowledge", "Conversation", "Problem Solving", "Coordination", "Guidance"),
    system_prompt=PromptTemplates.GENERAL_PERSONA,
    kind=AgentKind.GENERAL,
)


@dataclass
class Delegation:
    should_delegate: bool
    agent_id: str = ""
    reason: str = ""
    confidence: float = 0.5


class GeneralAgent(Agent):
    """Answers general requests and decides when a specialist should take over."""

    def __init__(self, backend: ResponseBackend | None = None, clock=None):
        super().__init__(PROFILE, clock=clock, backend=backend)

    def process_message(self, text: str, mode: str, extra_context: dict | None = None) -> AgentResponse:
        intent = self.analyze_user_intent(text, self.history)
        delegation = self.analyze_for_specialist(text)

        if delegation.should_delegate:
            actions = [self._delegate_action(text, delegation)]
        else:
            actions = self.suggest_general_actions(text, intent)
        follow_ups = self.follow_ups(intent.intent, delegation)

        generated = self.generate(mode, text)
        if generated is not None:
            return AgentResponse(
                message=generated,
                actions=actions or None,
                confidence=0.8,
                reasoning="Response generated by backend",
                suggested_follow_ups=follow_ups,
            )

        if delegation.should_delegate:
            message = self.delegation_message(delegation, mode)
            confidence = 0.8
            reasoning = f"Recommending {delegation.agent_id} for specialized handling"
        else:
            message = self.general_message(intent, mode)
            confidence = 0.7
            reasoning = f"Handling as general conversation with {intent.intent} intent"

        return AgentResponse(
            message=message,
            actions=actions or None,
            confidence=confidence,
            reasoning=reasoning,
            suggested_follow_ups=follow_ups,
        )

    # -- delegation -----------------------------------------------------------

    def analyze_for_specialist(self, text: str) -> Delegation:
        lowered = text.lower()

        if contains_any(lowered, PRODUCTIVITY_KEYWORDS):
            confidence = keyword_confidence(lowered, PRODUCTIVITY_KEYWORDS)
            if confidence > DELEGATION_THRESHOLD:
                return Delegation(
                    True, "productivity-agent", "Message contains productivity-related tasks", confidence
                )

        if contains_any(lowered, WRITING_KEYWORDS):
            confidence = keyword_confidence(lowered, WRITING_KEYWORDS)
            if confidence > DELEGATION_THRESHOLD:
                return Delegation(True, "writing-agent", "Message contains writing-related tasks", confidence)

        if self.is_complex_task(text):
            return Delegation(False, reason="Complex task requiring coordination", confidence=0.7)

        return Delegation(False, reason="Suitable for general assistance")

    @staticmethod
    def is_complex_task(text: str) -> bool:
        lowered = text.lower()
        indicators = sum(1 for i in COMPLEXITY_INDICATORS if i in lowered)
        return indicators >= 2 or len(text.split(".")) > 3

    @staticmethod
    def _delegate_action(text: str, delegation: Delegation) -> Action:
        return Action(
            type=DELEGATE_ACTION,
            data={
                "agent_id": delegation.agent_id,
                "reason": delegation.reason,
                "original_message": text,
            },
            message=f"Delegating to {delegation.agent_id}",
            priority=ActionPriority.HIGH,
        )

    # -- templates --------------------------------------------------------------

    def delegation_message(self, delegation: Delegation, mode: str) -> str:
        name = AGENT_NAMES.get(delegation.agent_id, "Specialized Assistant")
        return self.pick(
            mode,
            {
                "task-focused": f"I see you need help with something specific! Let me connect you with my {name} who specializes in exactly this type of task.",
                "analytical": f"Based on my analysis of your request, this would be best handled by my {name}. They have specialized knowledge and tools for this type of task.",
                "creative": f"This is exciting! My {name} will be perfect for this - they love working on these types of challenges.",
                "default": f"I think my {name} would be perfect for helping you with this! They have specialized expertise in this area.",
            },
        )

    def general_message(self, intent: IntentAnalysis, mode: str) -> str:
        if intent.intent == Intent.QUESTION:
            return self.pick(
                mode,
                {
                    "analytical": "Let me analyze your question and provide a comprehensive answer with supporting details and context.",
                    "creative": "Great question! Let me explore this from multiple angles and give you some interesting perspectives.",
                    "task-focused": "I'll give you a clear, direct answer to help you move forward quickly.",
                    "default": "I'd be happy to help answer your question! Let me think through this for you.",
                },
            )
        return self.pick(
            mode,
            {
                "analytical": "Let me understand your request and provide a thoughtful, structured response.",
                "creative": "I'm excited to help! Let's explore the creative possibilities in what you're asking.",
                "task-focused": "How can I help you get things done today? I'm ready to assist with whatever you need.",
                "default": "I'm here to help! Let me know what you'd like to work on together.",
            },
        )

    def suggest_general_actions(self, text: str, intent: IntentAnalysis) -> list[Action]:
        actions = []
        if intent.intent == Intent.QUESTION and contains_any(text.lower(), SEARCHABLE_PHRASES):
            actions.append(
                Action(
                    type="search_knowledge",
                    data={"query": text, "context": "general_knowledge"},
                    message="Search for relevant information",
                )
            )
        if "idea" in text or "brainstorm" in text:
            actions.append(
                Action(
                    type="brainstorm_ideas",
                    data={"topic": self.main_topic(text), "approach": "general"},
                    message="Generate ideas and suggestions",
                )
            )
        return actions

    @staticmethod
    def main_topic(text: str) -> str:
        words = [w for w in text.split() if len(w) > 3 and w.lower() not in STOP_WORDS]
        return " ".join(words[:3])

    @staticmethod
    def follow_ups(intent: str, delegation: Delegation) -> list[str]:
        if delegation.should_delegate:
            return [
                f"Should I connect you with the {delegation.agent_id}?",
                "Would you like me to prepare any context for the handoff?",
                "Do you have any specific requirements I should mention?",
            ]
        if intent == Intent.QUESTION:
            return [
                "Would you like me to explain any part in more detail?",
                "Do you have related questions I can help with?",
                "Should I look up additional resources on this topic?",
            ]
        return [
            "How else can I assist you today?",
            "Is there anything related you'd like to explore?",
            "Would you like help with any follow-up tasks?",
        ]
