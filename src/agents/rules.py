"""Keyword rule tables for intent, mode and delegation heuristics.

Order matters: intent rules are evaluated top to bottom and the first match
wins. Bump RULES_VERSION whenever a table changes.
"""

import re
from dataclasses import dataclass

from shared_types import ChatMode, Intent

RULES_VERSION = "1"


@dataclass(frozen=True)
class IntentRule:
    intent: Intent
    confidence: float
    keywords: tuple[str, ...]


INTENT_RULES: tuple[IntentRule, ...] = (
    IntentRule(
        Intent.TASK,
        0.8,
        ("create", "make", "add", "note", "reminder", "task", "todo", "schedule"),
    ),
    IntentRule(
        Intent.WRITING,
        0.8,
        ("improve", "edit", "rewrite", "summarize", "translate", "grammar", "tone"),
    ),
    IntentRule(Intent.SEARCH, 0.7, ("find", "search", "look", "show", "get", "retrieve")),
    IntentRule(
        Intent.QUESTION,
        0.6,
        ("how", "what", "why", "when", "where", "explain", "help"),
    ),
)
DEFAULT_INTENT = IntentRule(Intent.GENERAL, 0.5, ())

DATE_PATTERN = re.compile(
    r"(\d{1,2}/\d{1,2}/\d{4}|\d{4}-\d{2}-\d{2}|today|tomorrow|next week)", re.IGNORECASE
)
TIME_PATTERN = re.compile(r"(\d{1,2}:\d{2}|\d{1,2}\s*(?:am|pm))", re.IGNORECASE)

MODE_BY_INTENT: dict[str, ChatMode] = {
    Intent.TASK: ChatMode.TASK_FOCUSED,
    Intent.WRITING: ChatMode.CREATIVE,
    Intent.SEARCH: ChatMode.ANALYTICAL,
    Intent.QUESTION: ChatMode.ANALYTICAL,
}

# Delegation (general agent)
PRODUCTIVITY_KEYWORDS = (
    "note", "reminder", "task", "todo", "schedule", "calendar", "organize",
    "productivity", "deadline", "appointment", "meeting", "remember",
)
WRITING_KEYWORDS = (
    "improve", "edit", "write", "rewrite", "grammar", "spelling", "translate",
    "summarize", "tone", "style", "content", "draft", "essay", "article",
)
DELEGATION_THRESHOLD = 0.6
COMPLEXITY_INDICATORS = (
    "and then", "after that", "next", "also", "plus", "additionally",
    "step by step", "multiple", "several", "various", "different",
)
SEARCHABLE_PHRASES = (
    "what is", "who is", "how does", "why does", "when did",
    "where is", "explain", "define", "tell me about",
)

# Recommended mode (coordinator, before a message is sent)
RECOMMEND_TASK_WORDS = ("create", "make", "do", "task", "reminder")
RECOMMEND_CREATIVE_WORDS = ("creative", "idea", "brainstorm", "imagine")
RECOMMEND_ANALYTICAL_WORDS = ("analyze", "compare", "research", "data")
RECOMMEND_QUESTION_WORDS = ("what", "how", "why", "when", "where")
MODE_BY_TASK_TYPE: dict[str, ChatMode] = {
    "productivity": ChatMode.TASK_FOCUSED,
    "creative": ChatMode.CREATIVE,
    "analysis": ChatMode.ANALYTICAL,
}

STOP_WORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
        "of", "with", "by", "i", "you", "me", "my", "your",
    }
)


def contains_any(text: str, keywords) -> bool:
    return any(k in text for k in keywords)


def keyword_confidence(text: str, keywords: tuple[str, ...]) -> float:
    """Share of keywords loosely matching any word, normalised to [0, 1]."""
    words = text.lower().split()
    matches = sum(1 for k in keywords if any(k in w or w in k for w in words))
    return min(matches / max(len(keywords) * 0.3, 1), 1.0)


def extract_topics(text: str, limit: int = 5) -> list[str]:
    """Distinct words longer than three characters, minus stop words, first-seen order."""
    topics: list[str] = []
    for word in text.lower().split():
        if len(word) > 3 and word not in STOP_WORDS and word not in topics:
            topics.append(word)
        if len(topics) == limit:
            break
    return topics
