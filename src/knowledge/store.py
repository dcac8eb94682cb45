"""KnowledgeStore: notes, actions, memories and working patterns shared by all agents."""

import copy
import uuid
from collections.abc import Callable
from datetime import datetime, timedelta

import structlog

from .models import (
    Action,
    BehaviorAnalysis,
    ContextualMemory,
    KnowledgeNote,
    SharedKnowledge,
    UserPreferences,
    WorkingPattern,
)
from .persistence import KNOWLEDGE_KEY, MemoryBlobStore, PersistencePort, decode_knowledge, encode_knowledge
from .scoring import (
    activity_for_action,
    blend_effectiveness,
    memory_relevance,
    note_importance,
    time_of_day,
    tokenize_query,
)

logger = structlog.get_logger()

MAX_ACTIONS = 50
MAX_MEMORIES = 100
RELEVANCE_THRESHOLD = 0.1
NOTE_RETENTION_IMPORTANCE = 0.7
UPDATABLE_NOTE_FIELDS = ("title", "content", "tags", "category")


def default_id_factory(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:16]}"


class KnowledgeStore:
    """In-memory knowledge with write-through persistence.

    The in-memory state is the source of truth for the process lifetime;
    persistence is best-effort and never raises to callers.
    """

    def __init__(
        self,
        port: PersistencePort | None = None,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[str], str] | None = None,
        max_actions: int = MAX_ACTIONS,
        max_memories: int = MAX_MEMORIES,
    ):
        self.port = port if port is not None else MemoryBlobStore()
        self.clock = clock or datetime.now
        self.id_factory = id_factory or default_id_factory
        self.max_actions = max_actions
        self.max_memories = max_memories
        self._knowledge = self._load()

    # -- notes -------------------------------------------------------------

    def add_note(self, note: KnowledgeNote) -> KnowledgeNote:
        """Store a note and derive a contextual memory from it."""
        self._knowledge.user_notes.append(note)
        self.add_contextual_memory(
            ContextualMemory(
                id=self.id_factory("note-context"),
                context=f"User created note: {note.title}",
                insights=[
                    f"Topic: {note.category or 'general'}",
                    f"Tags: {', '.join(note.tags)}",
                ],
                importance=note_importance(note, self.clock()),
                timestamp=self.clock(),
                related_topics=list(note.tags),
            )
        )
        self._save()
        return note

    def get_note(self, note_id: str) -> KnowledgeNote | None:
        for note in self._knowledge.user_notes:
            if note.id == note_id:
                return note
        return None

    def update_note(self, note_id: str, **patch) -> bool:
        """Apply a partial update. Returns False when the id is unknown."""
        note = self.get_note(note_id)
        if note is None:
            return False
        for key, value in patch.items():
            if key not in UPDATABLE_NOTE_FIELDS:
                logger.debug("knowledge.note_field_ignored", field=key)
                continue
            if key == "tags":
                value = list(value or [])
            elif value is None and key != "category":
                continue
            setattr(note, key, value)
        note.updated_at = self.clock()
        self._save()
        return True

    def delete_note(self, note_id: str) -> bool:
        before = len(self._knowledge.user_notes)
        self._knowledge.user_notes = [n for n in self._knowledge.user_notes if n.id != note_id]
        if len(self._knowledge.user_notes) == before:
            return False
        self._save()
        return True

    def search_notes(
        self,
        query: str,
        tags: list[str] | None = None,
        category: str | None = None,
    ) -> list[KnowledgeNote]:
        """Substring match on title/content, filtered by any-tag and exact category."""
        q = query.lower()
        results = []
        for note in self._knowledge.user_notes:
            if q not in note.title.lower() and q not in note.content.lower():
                continue
            if tags and not any(t in note.tags for t in tags):
                continue
            if category and note.category != category:
                continue
            results.append(note)
        return results

    # -- actions & patterns -------------------------------------------------

    def add_recent_action(self, action: Action) -> None:
        """Append to the bounded action log and update working patterns."""
        if action.timestamp is None:
            action.timestamp = self.clock()
        log = self._knowledge.recent_actions
        log.append(action)
        if len(log) > self.max_actions:
            del log[: len(log) - self.max_actions]
        self._update_working_patterns(action)
        self._save()

    def _update_working_patterns(self, action: Action) -> None:
        bucket = time_of_day(action.timestamp or self.clock())
        activity = activity_for_action(action.type)
        for pattern in self._knowledge.working_patterns:
            if pattern.time_of_day == bucket and pattern.activity_type == activity:
                pattern.frequency += 1
                pattern.effectiveness = blend_effectiveness(pattern.effectiveness)
                return
        self._knowledge.working_patterns.append(
            WorkingPattern(time_of_day=bucket, activity_type=activity)
        )

    def get_working_patterns(self) -> list[WorkingPattern]:
        return [copy.copy(p) for p in self._knowledge.working_patterns]

    def analyze_user_behavior(self) -> BehaviorAnalysis:
        patterns = self._knowledge.working_patterns

        by_time: dict[str, list[float]] = {}
        for p in patterns:
            by_time.setdefault(p.time_of_day, []).append(p.effectiveness)
        preferred_times = sorted(
            by_time, key=lambda t: sum(by_time[t]) / len(by_time[t]), reverse=True
        )[:3]

        activity_counts: dict[str, int] = {}
        for p in patterns:
            activity_counts[p.activity_type] = activity_counts.get(p.activity_type, 0) + p.frequency
        common_activities = sorted(
            activity_counts, key=lambda a: activity_counts[a], reverse=True
        )[:5]

        top = sorted(patterns, key=lambda p: p.effectiveness, reverse=True)[:5]
        effectiveness_patterns = [
            {"activity": p.activity_type, "best_time": p.time_of_day, "effectiveness": p.effectiveness}
            for p in top
        ]

        return BehaviorAnalysis(
            preferred_times=preferred_times,
            common_activities=common_activities,
            effectiveness_patterns=effectiveness_patterns,
        )

    # -- contextual memory --------------------------------------------------

    def add_contextual_memory(self, memory: ContextualMemory) -> None:
        """Append; over capacity keep the top entries by importance, then recency."""
        memories = self._knowledge.contextual_memory
        memories.append(memory)
        if len(memories) > self.max_memories:
            memories.sort(key=lambda m: (m.importance, m.timestamp), reverse=True)
            del memories[self.max_memories :]
        self._save()

    def get_relevant_context(self, query: str, limit: int = 5) -> list[tuple[ContextualMemory, float]]:
        """Memories scoring above the relevance threshold, best first."""
        words = tokenize_query(query)
        now = self.clock()
        scored = [(m, memory_relevance(m, words, now)) for m in self._knowledge.contextual_memory]
        scored = [(m, s) for m, s in scored if s > RELEVANCE_THRESHOLD]
        scored.sort(key=lambda pair: pair[1], reverse=True)
        return scored[:limit]

    # -- preferences & retention ---------------------------------------------

    def update_user_preferences(self, **changes) -> UserPreferences:
        self._knowledge.preferences = self._knowledge.preferences.merged(**changes)
        self._save()
        return self._knowledge.preferences

    @property
    def preferences(self) -> UserPreferences:
        return self._knowledge.preferences

    def clear_old_data(self, days_to_keep: int = 30) -> dict:
        """Drop memories older than the cutoff and old, low-importance notes."""
        now = self.clock()
        cutoff = now - timedelta(days=days_to_keep)

        memories_before = len(self._knowledge.contextual_memory)
        self._knowledge.contextual_memory = [
            m for m in self._knowledge.contextual_memory if m.timestamp > cutoff
        ]

        notes_before = len(self._knowledge.user_notes)
        self._knowledge.user_notes = [
            n
            for n in self._knowledge.user_notes
            if n.updated_at > cutoff or note_importance(n, now) > NOTE_RETENTION_IMPORTANCE
        ]

        removed = {
            "memories": memories_before - len(self._knowledge.contextual_memory),
            "notes": notes_before - len(self._knowledge.user_notes),
        }
        logger.info("knowledge.pruned", days_to_keep=days_to_keep, **removed)
        self._save()
        return removed

    # -- snapshots ------------------------------------------------------------

    def get_shared_knowledge(self) -> SharedKnowledge:
        """Deep copy, so agents can sort and slice without touching the store."""
        return copy.deepcopy(self._knowledge)

    def stats(self) -> dict:
        k = self._knowledge
        return {
            "notes": len(k.user_notes),
            "actions": len(k.recent_actions),
            "memories": len(k.contextual_memory),
            "patterns": len(k.working_patterns),
        }

    # -- persistence ------------------------------------------------------------

    def _load(self) -> SharedKnowledge:
        try:
            blob = self.port.load(KNOWLEDGE_KEY)
        except Exception as e:
            logger.warning("knowledge.load_failed", error=str(e))
            return SharedKnowledge()
        return decode_knowledge(blob)

    def _save(self) -> None:
        try:
            self.port.save(KNOWLEDGE_KEY, encode_knowledge(self._knowledge))
        except Exception as e:
            logger.warning("knowledge.save_failed", error=str(e))
