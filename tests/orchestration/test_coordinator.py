"""Tests for the Coordinator: delegation, history bounds, learning."""

import pytest

from agents import GeneralAgent, ProductivityAgent, TaskContext, UserProfile, WritingAgent
from agents.general import Delegation
from orchestration import Coordinator
from shared_types import ChatMode, MessageRole

WRITING_REQUEST = "Please improve the grammar and tone of my essay"


class CountingGeneral(GeneralAgent):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.calls = 0

    def process_message(self, text, mode, extra_context=None):
        self.calls += 1
        return super().process_message(text, mode, extra_context)


class GhostDelegatingGeneral(GeneralAgent):
    def analyze_for_specialist(self, text):
        return Delegation(True, "ghost-agent", "No such agent", 0.9)


@pytest.fixture
def coordinator(store, clock, id_factory):
    return Coordinator(store=store, clock=clock, id_factory=id_factory)


def _with_general(general, store, clock, id_factory):
    agents = [general, ProductivityAgent(clock=clock), WritingAgent(clock=clock)]
    return Coordinator(store=store, agents=agents, clock=clock, id_factory=id_factory)


class TestDelegation:
    def test_starts_with_general(self, coordinator):
        assert coordinator.get_current_agent() == {"id": "general-agent", "name": "General Assistant"}

    def test_delegates_to_writing(self, coordinator):
        response = coordinator.process_message(WRITING_REQUEST)
        assert coordinator.get_current_agent()["id"] == "writing-agent"
        assert response.confidence == 0.85
        assert response.has_action("improve_text")

    def test_probe_runs_every_turn(self, store, clock, id_factory):
        general = CountingGeneral(clock=clock)
        coordinator = _with_general(general, store, clock, id_factory)

        coordinator.process_message(WRITING_REQUEST)
        assert general.calls == 1
        coordinator.process_message("hello there")
        assert general.calls == 2

    def test_general_active_runs_twice(self, store, clock, id_factory):
        general = CountingGeneral(clock=clock)
        coordinator = _with_general(general, store, clock, id_factory)
        coordinator.process_message("hello there")
        assert general.calls == 2

    def test_pointer_is_sticky(self, coordinator):
        coordinator.process_message(WRITING_REQUEST)
        response = coordinator.process_message("hello there")
        assert coordinator.get_current_agent()["id"] == "writing-agent"
        assert response.confidence == 0.85

    def test_later_delegation_moves_pointer(self, coordinator):
        coordinator.process_message(WRITING_REQUEST)
        coordinator.process_message("Set a reminder for my meeting and add it to my schedule")
        assert coordinator.get_current_agent()["id"] == "productivity-agent"
        assert coordinator.metrics.count("delegations") == 2

    def test_unknown_delegate_ignored(self, store, clock, id_factory):
        coordinator = _with_general(GhostDelegatingGeneral(clock=clock), store, clock, id_factory)
        response = coordinator.process_message("anything at all")
        assert coordinator.get_current_agent()["id"] == "general-agent"
        assert response.message

    def test_requires_general_agent(self, store, clock):
        with pytest.raises(ValueError):
            Coordinator(store=store, agents=[WritingAgent(clock=clock)], clock=clock)


class TestSwitching:
    def test_switch_known(self, coordinator):
        assert coordinator.switch_agent("productivity-agent") is True
        assert coordinator.get_current_agent()["id"] == "productivity-agent"

    def test_switch_unknown(self, coordinator):
        assert coordinator.switch_agent("nope") is False
        assert coordinator.get_current_agent()["id"] == "general-agent"

    def test_available_agents(self, coordinator):
        ids = [a["id"] for a in coordinator.get_available_agents()]
        assert ids == ["general-agent", "productivity-agent", "writing-agent"]


class TestHistory:
    def test_messages_recorded(self, coordinator):
        coordinator.process_message(WRITING_REQUEST)
        user, assistant = coordinator.get_conversation_history()
        assert user.role == MessageRole.USER
        assert user.content == WRITING_REQUEST
        assert assistant.role == MessageRole.ASSISTANT
        assert assistant.agent_id == "writing-agent"
        assert assistant.metadata["confidence"] == 0.85
        assert [a.type for a in assistant.metadata["actions"]] == ["improve_text", "adjust_tone"]

    def test_never_exceeds_max(self, coordinator):
        for i in range(30):
            coordinator.process_message(f"hello number {i}")
            assert len(coordinator.get_conversation_history()) <= 20

    def test_trimmed_to_fifteen(self, coordinator):
        for i in range(10):
            coordinator.process_message(f"hello number {i}")
        assert len(coordinator.get_conversation_history()) == 20
        coordinator.process_message("one more")
        history = coordinator.get_conversation_history()
        assert len(history) == 15
        assert history[-2].content == "one more"

    def test_clear_and_restore(self, coordinator):
        coordinator.process_message("hello")
        saved = coordinator.get_conversation_history()
        coordinator.clear_conversation_history()
        assert coordinator.get_conversation_history() == []
        coordinator.restore_conversation_history(saved)
        assert coordinator.get_conversation_history() == saved


class TestLearning:
    def test_actions_fed_back(self, coordinator, store):
        coordinator.process_message(WRITING_REQUEST)
        knowledge = store.get_shared_knowledge()
        assert [a.type for a in knowledge.recent_actions] == ["improve_text", "adjust_tone"]
        activities = {p.activity_type for p in knowledge.working_patterns}
        assert activities == {"writing", "general"}

    def test_interaction_memory(self, coordinator, store):
        coordinator.process_message(WRITING_REQUEST)
        [memory] = store.get_shared_knowledge().contextual_memory
        assert memory.context.startswith(f"User: {WRITING_REQUEST}... | Assistant: ")
        assert memory.insights == ["Agent used: writing-agent", "Confidence: 0.85", "Actions taken: 2"]
        assert memory.importance == 0.85
        assert memory.related_topics == ["please", "improve", "grammar", "tone", "essay"]

    def test_long_messages_summarised(self, coordinator, store):
        coordinator.process_message("hello " + "x" * 300)
        memory = store.get_shared_knowledge().contextual_memory[0]
        user_part = memory.context.split(" | ")[0]
        assert len(user_part) == len("User: ") + 100 + len("...")

    def test_metrics(self, coordinator):
        coordinator.process_message("hello")
        coordinator.process_message(WRITING_REQUEST)
        summary = coordinator.metrics.summary()
        assert summary["counters"]["turns"] == 2
        assert summary["counters"]["actions"] == 2
        assert summary["timers"]["turn"]["count"] == 2


class TestRecommendedMode:
    def test_creative_words(self, coordinator):
        assert coordinator.get_recommended_mode("Let's brainstorm a name") == ChatMode.CREATIVE

    def test_task_words_need_structured_style(self, coordinator):
        assert coordinator.get_recommended_mode("create a task") == ChatMode.GENERAL
        coordinator.update_user_preferences(task_management_style="structured")
        assert coordinator.get_recommended_mode("create a task") == ChatMode.TASK_FOCUSED

    def test_personality_applies_without_keywords(self, coordinator):
        coordinator.update_user_preferences(ai_personality="analytical")
        assert coordinator.get_recommended_mode("hello") == ChatMode.ANALYTICAL

    def test_questions_with_detailed_style(self, coordinator):
        coordinator.update_user_preferences(communication_style="detailed")
        assert coordinator.get_recommended_mode("why is it late?") == ChatMode.ANALYTICAL

    def test_task_context_fallback(self, coordinator):
        coordinator.set_task_context(TaskContext(type="creative"))
        assert coordinator.get_recommended_mode("hello") == ChatMode.CREATIVE


class TestSessionState:
    def test_profile_reaches_prompt(self, coordinator):
        coordinator.set_user_profile(UserProfile(display_name="Ada"))
        coordinator.process_message("hello")
        prompt = coordinator.active_agent.build_system_prompt("general")
        assert "- Name: Ada" in prompt

    def test_task_context_passed_per_turn(self, coordinator):
        coordinator.process_message("hello", task_context=TaskContext(type="analysis", description="Q3"))
        assert coordinator.context.current_task.description == "Q3"


class TestKnowledgeOps:
    def test_add_note_refreshes_snapshot(self, coordinator, now):
        note = coordinator.add_note("Trip", "Pack passport", tags=["travel"], category="personal")
        assert note.created_at == now
        assert [n.id for n in coordinator.context.shared_knowledge.user_notes] == [note.id]

    def test_search_update_delete(self, coordinator):
        note = coordinator.add_note("Trip", "Pack passport", tags=["travel"])
        assert coordinator.search_knowledge("passport") == [note]
        assert coordinator.search_knowledge("passport", tags=["work"]) == []

        assert coordinator.update_note(note.id, content="Pack passport and charger") is True
        assert "charger" in coordinator.context.shared_knowledge.user_notes[0].content

        assert coordinator.delete_note(note.id) is True
        assert coordinator.get_shared_knowledge().user_notes == []

    def test_preferences_refresh_context(self, coordinator):
        prefs = coordinator.update_user_preferences(preferred_language="german")
        assert prefs.preferred_language == "german"
        assert coordinator.context.preferences.preferred_language == "german"

    def test_behavior_analysis(self, coordinator):
        coordinator.process_message(WRITING_REQUEST)
        analysis = coordinator.analyze_user_behavior()
        assert analysis.preferred_times == ["morning"]
