"""Tests for note importance, memory relevance and pattern helpers."""

from datetime import datetime, timedelta

import pytest

from knowledge.models import ContextualMemory, KnowledgeNote
from knowledge.scoring import (
    activity_for_action,
    blend_effectiveness,
    memory_relevance,
    note_importance,
    time_of_day,
    tokenize_query,
)


def _note(now, tags=(), content="short body", title="Plain title", age_days=0):
    updated = now - timedelta(days=age_days)
    return KnowledgeNote(
        id="n1",
        title=title,
        content=content,
        tags=list(tags),
        created_at=updated,
        updated_at=updated,
    )


def _memory(now, context="", insights=(), topics=(), importance=0.5, age_days=0):
    return ContextualMemory(
        id="m1",
        context=context,
        insights=list(insights),
        importance=importance,
        timestamp=now - timedelta(days=age_days),
        related_topics=list(topics),
    )


class TestNoteImportance:
    def test_all_bonuses_clamp_to_one(self, now):
        note = _note(
            now,
            tags=["a", "b", "c", "d", "e"],
            content="x" * 600,
            title="Urgent: renew passport",
            age_days=2,
        )
        assert note_importance(note, now) == 1.0

    def test_no_bonuses(self, now):
        note = _note(now, content="y" * 50, age_days=40)
        assert note_importance(note, now) == pytest.approx(0.5)

    def test_tag_bonus_capped(self, now):
        note = _note(now, tags=["t"] * 10, age_days=40)
        assert note_importance(note, now) == pytest.approx(0.8)

    def test_recency_tiers(self, now):
        assert note_importance(_note(now, age_days=3), now) == pytest.approx(0.7)
        assert note_importance(_note(now, age_days=10), now) == pytest.approx(0.6)
        assert note_importance(_note(now, age_days=30), now) == pytest.approx(0.5)

    def test_keyword_in_content(self, now):
        note = _note(now, content="the project kickoff", age_days=40)
        assert note_importance(note, now) == pytest.approx(0.8)


class TestMemoryRelevance:
    def test_both_words_in_context(self, now):
        memory = _memory(now, context="Urgent meeting with the design team", importance=0.9, age_days=3)
        words = tokenize_query("urgent meeting")
        assert memory_relevance(memory, words, now) == pytest.approx(0.648)

    def test_insights_and_topics_count(self, now):
        memory = _memory(
            now,
            context="nothing relevant",
            insights=["Topic: budget"],
            topics=["budget"],
            importance=1.0,
            age_days=60,
        )
        assert memory_relevance(memory, ["budget"], now) == pytest.approx(0.4)

    def test_old_memory_decays(self, now):
        memory = _memory(now, context="budget review", importance=1.0, age_days=120)
        assert memory_relevance(memory, ["budget"], now) == pytest.approx(0.24)

    def test_clamped_to_one(self, now):
        memory = _memory(
            now,
            context="alpha beta gamma",
            insights=["alpha beta gamma"],
            topics=["alpha", "beta", "gamma"],
            importance=1.0,
        )
        assert memory_relevance(memory, ["alpha", "beta", "gamma"], now) == 1.0

    def test_no_match_is_zero(self, now):
        memory = _memory(now, context="groceries", importance=1.0)
        assert memory_relevance(memory, ["taxes"], now) == 0.0

    def test_monotonic_in_importance(self, now):
        words = ["launch"]
        scores = [
            memory_relevance(_memory(now, context="launch plan", importance=i), words, now)
            for i in (0.1, 0.4, 0.7, 1.0)
        ]
        assert scores == sorted(scores)

    def test_monotonic_in_recency(self, now):
        words = ["launch"]
        scores = [
            memory_relevance(_memory(now, context="launch plan", importance=0.8, age_days=d), words, now)
            for d in (1, 10, 60, 200)
        ]
        assert scores == sorted(scores, reverse=True)


class TestQueryTokens:
    def test_short_words_dropped(self):
        assert tokenize_query("An URGENT it meeting") == ["urgent", "meeting"]

    def test_empty(self):
        assert tokenize_query("   ") == []


class TestPatternHelpers:
    @pytest.mark.parametrize(
        "hour,bucket",
        [
            (0, "late-night"),
            (5, "late-night"),
            (6, "morning"),
            (11, "morning"),
            (12, "afternoon"),
            (17, "evening"),
            (20, "evening"),
            (21, "night"),
            (23, "night"),
        ],
    )
    def test_time_of_day(self, hour, bucket):
        assert time_of_day(datetime(2026, 1, 1, hour, 30)) == bucket

    def test_activity_mapping(self):
        assert activity_for_action("create_note") == "note-taking"
        assert activity_for_action("set_reminder") == "planning"
        assert activity_for_action("check_grammar") == "editing"
        assert activity_for_action("delegate_to_agent") == "general"

    def test_blend_pulls_toward_target(self):
        assert blend_effectiveness(0.7) == pytest.approx(0.7)
        assert blend_effectiveness(1.0) == pytest.approx(0.85)
        assert blend_effectiveness(0.1) == pytest.approx(0.4)
