"""Deterministic scoring for notes, memories and working patterns.

Every function takes ``now`` explicitly so callers control the clock.
"""

from datetime import datetime

from .models import ContextualMemory, KnowledgeNote, clamp

IMPORTANT_KEYWORDS = ("important", "urgent", "deadline", "meeting", "project")

ACTIVITY_BY_ACTION = {
    "create_note": "note-taking",
    "set_reminder": "planning",
    "search_notes": "information-retrieval",
    "improve_text": "writing",
    "summarize_text": "analysis",
    "translate_text": "translation",
    "check_grammar": "editing",
}
DEFAULT_ACTIVITY = "general"

# (exclusive upper hour, bucket)
TIME_OF_DAY_BUCKETS = (
    (6, "late-night"),
    (12, "morning"),
    (17, "afternoon"),
    (21, "evening"),
    (24, "night"),
)

# No explicit feedback signal exists yet, so every recorded action pulls
# effectiveness toward this target.
EFFECTIVENESS_TARGET = 0.7


def days_between(earlier: datetime, later: datetime) -> float:
    return (later - earlier).total_seconds() / 86400


def note_importance(note: KnowledgeNote, now: datetime) -> float:
    """Additive importance score for a note, clamped to [0, 1]."""
    importance = 0.5
    importance += min(len(note.tags) * 0.1, 0.3)

    if len(note.content) > 500:
        importance += 0.2

    age = days_between(note.updated_at, now)
    if age < 7:
        importance += 0.2
    elif age < 30:
        importance += 0.1

    title = note.title.lower()
    content = note.content.lower()
    if any(k in title or k in content for k in IMPORTANT_KEYWORDS):
        importance += 0.3

    return clamp(importance)


def tokenize_query(query: str) -> list[str]:
    """Lower-cased words longer than two characters."""
    return [w for w in query.lower().split() if len(w) > 2]


def memory_relevance(memory: ContextualMemory, query_words: list[str], now: datetime) -> float:
    """Keyword overlap weighted by importance and recency, capped at 1.0."""
    context = memory.context.lower()
    insights = " ".join(memory.insights).lower()
    topics = " ".join(memory.related_topics).lower()

    score = 0.0
    for word in query_words:
        if word in context:
            score += 0.3
        if word in insights:
            score += 0.2
        if word in topics:
            score += 0.2

    score *= memory.importance

    age = days_between(memory.timestamp, now)
    if age < 7:
        score *= 1.2
    elif age < 30:
        score *= 1.1
    elif age > 90:
        score *= 0.8

    return clamp(score)


def time_of_day(moment: datetime) -> str:
    for upper, bucket in TIME_OF_DAY_BUCKETS:
        if moment.hour < upper:
            return bucket
    return TIME_OF_DAY_BUCKETS[-1][1]


def activity_for_action(action_type: str) -> str:
    return ACTIVITY_BY_ACTION.get(action_type, DEFAULT_ACTIVITY)


def blend_effectiveness(current: float) -> float:
    return clamp((current + EFFECTIVENESS_TARGET) / 2)
