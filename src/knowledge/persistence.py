"""Persistence port for the knowledge blob, with SQLite and in-memory adapters."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Protocol

import structlog

from db import wal_session

from .models import (
    Action,
    ContextualMemory,
    KnowledgeNote,
    SharedKnowledge,
    UserPreferences,
    WorkingPattern,
)

logger = structlog.get_logger()

KNOWLEDGE_KEY = "ai_shared_knowledge"


class PersistencePort(Protocol):
    """Local key-value store holding serialized blobs."""

    def load(self, key: str) -> str | None: ...

    def save(self, key: str, blob: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryBlobStore:
    """Dict-backed port. Used by tests and for throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.blobs: dict[str, str] = dict(initial or {})
        self.save_count = 0

    def load(self, key: str) -> str | None:
        return self.blobs.get(key)

    def save(self, key: str, blob: str) -> None:
        self.blobs[key] = blob
        self.save_count += 1

    def delete(self, key: str) -> None:
        self.blobs.pop(key, None)


class SQLiteBlobStore:
    """Single-table key-value store in SQLite."""

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path).expanduser()
        self._init_db()

    def _init_db(self):
        with wal_session(self.db_path) as conn:
            conn.execute(
                """CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )"""
            )

    def load(self, key: str) -> str | None:
        with wal_session(self.db_path) as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        return row[0] if row else None

    def save(self, key: str, blob: str) -> None:
        with wal_session(self.db_path) as conn:
            conn.execute(
                """INSERT INTO kv_store (key, value, updated_at)
                   VALUES (?, ?, CURRENT_TIMESTAMP)
                   ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at""",
                (key, blob),
            )

    def delete(self, key: str) -> None:
        with wal_session(self.db_path) as conn:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))


def encode_knowledge(knowledge: SharedKnowledge) -> str:
    """Serialize the whole store. Timestamps become ISO-8601 strings."""
    return json.dumps(
        {
            "userNotes": [n.to_dict() for n in knowledge.user_notes],
            "recentActions": [a.to_dict() for a in knowledge.recent_actions],
            "contextualMemory": [m.to_dict() for m in knowledge.contextual_memory],
            "preferences": knowledge.preferences.to_dict(),
            "workingPatterns": [p.to_dict() for p in knowledge.working_patterns],
        }
    )


def _decode_items(section: str, raw, parse: Callable) -> list:
    if raw is None:
        return []
    if not isinstance(raw, list):
        logger.warning("knowledge.section_invalid", section=section, kind=type(raw).__name__)
        return []
    items = []
    dropped = 0
    for entry in raw:
        try:
            items.append(parse(entry))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            dropped += 1
            logger.debug("knowledge.entry_invalid", section=section, error=str(e))
    if dropped:
        logger.warning("knowledge.entries_dropped", section=section, dropped=dropped)
    return items


def _merge_patterns(patterns: list[WorkingPattern]) -> list[WorkingPattern]:
    """Collapse duplicate (time of day, activity) rows: frequencies add, the last effectiveness wins."""
    merged: dict[tuple[str, str], WorkingPattern] = {}
    for p in patterns:
        key = (p.time_of_day, p.activity_type)
        if key in merged:
            merged[key].frequency += p.frequency
            merged[key].effectiveness = p.effectiveness
        else:
            merged[key] = p
    if len(merged) < len(patterns):
        logger.warning("knowledge.patterns_merged", duplicates=len(patterns) - len(merged))
    return list(merged.values())


def decode_knowledge(blob: str | None) -> SharedKnowledge:
    """Parse a stored blob, keeping every section and entry that parses.

    Never raises: unreadable input yields a default store.
    """
    knowledge = SharedKnowledge()
    if not blob:
        return knowledge

    try:
        data = json.loads(blob)
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning("knowledge.blob_unreadable", error=str(e))
        return knowledge
    if not isinstance(data, dict):
        logger.warning("knowledge.blob_unreadable", error="top-level value is not an object")
        return knowledge

    knowledge.user_notes = _decode_items("userNotes", data.get("userNotes"), KnowledgeNote.from_dict)
    knowledge.recent_actions = _decode_items("recentActions", data.get("recentActions"), Action.from_dict)
    knowledge.contextual_memory = _decode_items(
        "contextualMemory", data.get("contextualMemory"), ContextualMemory.from_dict
    )
    knowledge.working_patterns = _merge_patterns(
        _decode_items("workingPatterns", data.get("workingPatterns"), WorkingPattern.from_dict)
    )

    prefs = data.get("preferences")
    if isinstance(prefs, dict):
        try:
            knowledge.preferences = UserPreferences.from_dict(prefs)
        except ValueError as e:
            logger.warning("knowledge.preferences_invalid", error=str(e))

    return knowledge
