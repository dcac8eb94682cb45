"""Tests for system prompt assembly."""

from datetime import timedelta

import pytest

from agents import ConversationContext, GeneralAgent, TaskContext, UserProfile, WritingAgent
from agents.prompts import PromptTemplates
from knowledge import Action, ContextualMemory, KnowledgeNote, SharedKnowledge, UserPreferences, WorkingPattern


def _knowledge(now):
    notes = [
        KnowledgeNote(
            id=f"n{i}",
            title=f"Note {i}",
            content=str(i) * 300,
            created_at=now - timedelta(days=i),
            updated_at=now - timedelta(days=i),
        )
        for i in range(7)
    ]
    memories = [
        ContextualMemory(id=f"m{i}", context=f"memory {i}", importance=i / 10, timestamp=now)
        for i in range(5)
    ]
    patterns = [
        WorkingPattern(time_of_day="morning", activity_type="writing", effectiveness=0.5),
        WorkingPattern(time_of_day="evening", activity_type="planning", effectiveness=0.9),
        WorkingPattern(time_of_day="night", activity_type="editing", effectiveness=0.6),
    ]
    actions = [Action(type=f"act{i}", message=f"did {i}") for i in range(5)]
    return SharedKnowledge(
        user_notes=list(reversed(notes)),
        recent_actions=actions,
        contextual_memory=memories,
        working_patterns=patterns,
    )


@pytest.fixture
def agent(clock, now):
    agent = GeneralAgent(clock=clock)
    agent.set_context(
        ConversationContext(
            session_id="s1",
            shared_knowledge=_knowledge(now),
            preferences=UserPreferences(),
        )
    )
    return agent


class TestSystemPrompt:
    def test_block_order(self, agent):
        prompt = agent.build_system_prompt("creative")
        persona = prompt.index("General Assistant")
        mode = prompt.index("MODE: Creative Assistance")
        context = prompt.index("CONTEXTUAL INFORMATION:")
        shared = prompt.index(PromptTemplates.SHARED_KNOWLEDGE_HEADER)
        assert persona < mode < context < shared

    def test_unknown_mode_is_adaptive(self, agent):
        assert "MODE: Adaptive Assistance" in agent.build_system_prompt("freestyle")

    def test_recent_notes_truncated(self, agent):
        prompt = agent.build_system_prompt("general")
        assert "- Note 0: " + "0" * 100 + "..." in prompt
        assert "0" * 101 not in prompt
        assert "Note 4" in prompt
        assert "Note 5" not in prompt

    def test_last_three_actions(self, agent):
        prompt = agent.build_system_prompt("general")
        assert "- act2: did 2" in prompt
        assert "- act4: did 4" in prompt
        assert "act1" not in prompt

    def test_top_memories_and_patterns(self, agent):
        prompt = agent.build_system_prompt("general")
        assert "memory 4" in prompt and "memory 2" in prompt
        assert "memory 1" not in prompt
        assert "evening: planning (effectiveness: 0.9)" in prompt
        assert "morning: writing" not in prompt

    def test_does_not_reorder_knowledge(self, agent):
        before = [n.id for n in agent.context.shared_knowledge.user_notes]
        agent.build_system_prompt("general")
        assert [n.id for n in agent.context.shared_knowledge.user_notes] == before

    def test_contextual_block(self, agent):
        agent.context.user_profile = UserProfile(display_name="Sam", goals=["ship v2"])
        agent.context.current_task = TaskContext(type="analysis", description="quarterly numbers")
        prompt = agent.build_system_prompt("analytical")
        assert "- Name: Sam" in prompt
        assert "- Goals: ship v2" in prompt
        assert "- Description: quarterly numbers" in prompt
        assert "- Deadline: None" in prompt

    def test_without_context(self, clock):
        prompt = WritingAgent(clock=clock).build_system_prompt("general")
        assert prompt.startswith(PromptTemplates.WRITING_PERSONA)
        assert prompt.endswith(PromptTemplates.SHARED_KNOWLEDGE_HEADER + "\n")
