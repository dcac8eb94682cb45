"""Conversation archive. Keeps a session's history across process restarts."""

import json

import structlog

from agents.models import Message
from knowledge.persistence import PersistencePort

logger = structlog.get_logger()

CONVERSATION_KEY = "ai_agents_conversation"


class ConversationArchive:
    """Saves and restores conversation history through a persistence port.

    Same policy as the knowledge store: failures are logged, never raised.
    """

    def __init__(self, port: PersistencePort, key: str = CONVERSATION_KEY):
        self.port = port
        self.key = key

    def load(self) -> list[Message]:
        try:
            blob = self.port.load(self.key)
        except Exception as e:
            logger.warning("conversation.load_failed", error=str(e))
            return []
        if not blob:
            return []

        try:
            raw = json.loads(blob)
        except json.JSONDecodeError as e:
            logger.warning("conversation.blob_unreadable", error=str(e))
            return []
        if not isinstance(raw, list):
            return []

        messages = []
        for entry in raw:
            try:
                messages.append(Message.from_dict(entry))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.debug("conversation.message_invalid", error=str(e))
        return messages

    def save(self, messages: list[Message]) -> None:
        try:
            self.port.save(self.key, json.dumps([m.to_dict() for m in messages]))
        except Exception as e:
            logger.warning("conversation.save_failed", error=str(e))

    def clear(self) -> None:
        try:
            self.port.delete(self.key)
        except Exception as e:
            logger.warning("conversation.clear_failed", error=str(e))
