"""Productivity assistant for notes, reminders and task organisation."""

import re
from datetime import datetime, timedelta

from knowledge.models import Action
from shared_types import ActionPriority, AgentKind, Intent

from .base import Agent, ResponseBackend
from .models import AgentProfile, AgentResponse, IntentAnalysis
from .prompts import PromptTemplates

PROFILE = AgentProfile(
    id="productivity-agent",
    name="Productivity Assistant",
    description="Specialized in task management, note creation, reminders, and productivity optimization",
    capabilities=(
        "create_note",
        "set_reminder",
        "search_notes",
        "update_note",
        "delete_note",
        "organize_tasks",
        "schedule_events",
        "analyze_productivity",
    ),
    personality="professional",
    expertise_areas=("Task Management", "Note Taking", "Time Management", "Workflow Optimization"),
    system_prompt=PromptTemplates.PRODUCTIVITY_PERSONA,
    kind=AgentKind.PRODUCTIVITY,
)

NOTE_TITLE_PATTERNS = [
    re.compile(r"note about (.+)", re.I),
    re.compile(r"create note (.+)", re.I),
    re.compile(r"write down (.+)", re.I),
    re.compile(r"remember (.+)", re.I),
]
REMINDER_TITLE_PATTERNS = [
    re.compile(r"remind me to (.+)", re.I),
    re.compile(r"reminder for (.+)", re.I),
    re.compile(r"don't forget (.+)", re.I),
]
SEARCH_PATTERNS = [
    re.compile(r"find (.+)", re.I),
    re.compile(r"search for (.+)", re.I),
    re.compile(r"look for (.+)", re.I),
    re.compile(r"show me (.+)", re.I),
]
TAG_PATTERNS = [
    re.compile(r"#(\w+)"),
    re.compile(r"tags?:?\s*([^,.]+)", re.I),
]
TIME_PARTS = re.compile(r"(\d{1,2}):?(\d{2})?\s*(am|pm)?", re.I)

NOTE_CATEGORIES = {
    "meeting": ("meeting", "call", "discussion", "conference"),
    "project": ("project", "work", "task", "assignment"),
    "personal": ("personal", "private", "family", "friend"),
    "idea": ("idea", "thought", "concept", "brainstorm"),
    "reference": ("reference", "info", "information", "resource"),
}
TASK_TYPES = {
    "reminder": ("remind", "remember", "don't forget"),
    "note": ("note", "write down", "record"),
    "schedule": ("schedule", "calendar", "appointment"),
    "organize": ("organize", "sort", "structure"),
    "analyze": ("analyze", "review", "examine"),
}


def _first_group(patterns, text: str, fallback: str) -> str:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match.group(1).strip()
    return fallback


def _classify(text: str, table: dict[str, tuple[str, ...]], default: str = "general") -> str:
    lowered = text.lower()
    for label, keywords in table.items():
        if any(k in lowered for k in keywords):
            return label
    return default


class ProductivityAgent(Agent):
    def __init__(self, backend: ResponseBackend | None = None, clock=None):
        super().__init__(PROFILE, clock=clock, backend=backend)

    def process_message(self, text: str, mode: str, extra_context: dict | None = None) -> AgentResponse:
        intent = self.analyze_user_intent(text, self.history)
        optimal_mode = self.determine_optimal_mode(text, intent.intent, mode)
        actions = self.suggest_actions(text, intent)

        if intent.intent == Intent.TASK:
            message = self.task_message(text, mode)
        elif intent.intent == Intent.SEARCH:
            query = _first_group(SEARCH_PATTERNS, text, text.strip())
            message = f'I\'ll search for information about "{query}". Let me look through your notes and related content.'
        else:
            message = self.pick(
                mode,
                {
                    "task-focused": "How can I help you be more productive today? I can create notes, set reminders, or help organize your tasks.",
                    "creative": "Let's explore some creative ways to boost your productivity! I can help with brainstorming and organizing ideas.",
                    "analytical": "I can analyze your productivity patterns and suggest optimizations. What specific area would you like to focus on?",
                    "default": "I'm here to help with your productivity needs. Whether it's notes, reminders, or task organization, just let me know!",
                },
            )

        message = self.generate(mode, text) or message

        return AgentResponse(
            message=message,
            actions=actions or None,
            confidence=0.8,
            reasoning=f"Detected {intent.intent} intent with {intent.confidence} confidence. Optimal mode: {optimal_mode}",
            suggested_follow_ups=self.follow_ups(intent.intent),
        )

    def suggest_actions(self, text: str, intent: IntentAnalysis) -> list[Action]:
        lowered = text.lower()
        actions = []

        if "note" in lowered or "write down" in lowered or "remember" in lowered:
            actions.append(
                Action(
                    type="create_note",
                    data={
                        "title": _first_group(NOTE_TITLE_PATTERNS, text, " ".join(text.split()[:5])),
                        "content": text,
                        "tags": self.extract_tags(text),
                        "category": _classify(text, NOTE_CATEGORIES),
                    },
                    message="Create a note with this information",
                )
            )

        entities = intent.extracted_entities
        if entities.get("dates") or entities.get("times"):
            actions.append(
                Action(
                    type="set_reminder",
                    data={
                        "title": _first_group(REMINDER_TITLE_PATTERNS, text, " ".join(text.split()[:6])),
                        "content": text,
                        "dateTime": self.resolve_datetime(entities).isoformat(),
                        "type": "reminder",
                    },
                    message="Set up a reminder for this",
                    priority=ActionPriority.HIGH,
                )
            )

        if "find" in lowered or "search" in lowered or "look for" in lowered:
            actions.append(
                Action(
                    type="search_notes",
                    data={
                        "query": _first_group(SEARCH_PATTERNS, text, text.strip()),
                        "filters": {
                            "tags": self.extract_tags(text),
                            "category": _classify(text, NOTE_CATEGORIES),
                        },
                    },
                    message="Search for relevant information",
                )
            )

        return actions

    @staticmethod
    def extract_tags(text: str) -> list[str]:
        tags: list[str] = []
        for pattern in TAG_PATTERNS:
            for match in pattern.finditer(text):
                tag = match.group(1).strip()
                if tag not in tags:
                    tags.append(tag)
        return tags

    def resolve_datetime(self, entities: dict[str, list[str]]) -> datetime:
        """Best-effort reminder time from extracted date/time entities."""
        target = self.clock()

        dates = entities.get("dates")
        if dates:
            word = dates[0].lower()
            if word == "tomorrow":
                target += timedelta(days=1)
            elif word == "next week":
                target += timedelta(days=7)
            elif word != "today":
                for fmt in ("%Y-%m-%d", "%m/%d/%Y"):
                    try:
                        parsed = datetime.strptime(dates[0], fmt)
                    except ValueError:
                        continue
                    target = target.replace(year=parsed.year, month=parsed.month, day=parsed.day)
                    break

        times = entities.get("times")
        if times:
            match = TIME_PARTS.search(times[0])
            if match:
                hours = int(match.group(1))
                minutes = int(match.group(2) or 0)
                meridiem = (match.group(3) or "").lower()
                if meridiem == "pm" and hours != 12:
                    hours += 12
                if meridiem == "am" and hours == 12:
                    hours = 0
                if hours < 24 and minutes < 60:
                    target = target.replace(hour=hours, minute=minutes, second=0, microsecond=0)

        return target

    def task_message(self, text: str, mode: str) -> str:
        task_type = _classify(text, TASK_TYPES)
        details = {
            "reminder": "I'll help you set up this reminder.",
            "note": "Let me create a well-organized note for you.",
            "schedule": "I can help you schedule this appropriately.",
        }
        detail = details.get(task_type, "I'll assist you with this task.")
        return self.pick(
            mode,
            {
                "task-focused": f"I'll help you get this done efficiently. {detail}",
                "creative": f"Let's approach this creatively! {detail}",
                "analytical": f"Let me break this down systematically. {detail}",
                "default": f"I can help you with that task. {detail}",
            },
        )

    @staticmethod
    def follow_ups(intent: str) -> list[str]:
        if intent == Intent.TASK:
            return [
                "Would you like me to break this down into smaller steps?",
                "Should I set a reminder for this task?",
                "Do you want to add any tags or categories?",
            ]
        if intent == Intent.SEARCH:
            return [
                "Would you like me to create a summary of the search results?",
                "Should I organize these findings into a new note?",
                "Do you want to set up alerts for similar topics?",
            ]
        return [
            "What's your main productivity goal for today?",
            "Would you like me to review your recent tasks?",
            "Should we set up any new reminders or notes?",
        ]
