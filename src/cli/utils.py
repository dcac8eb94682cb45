"""Shared CLI utilities."""

import sys

import structlog
from rich.console import Console

console = Console()
logger = structlog.get_logger()


def get_components():
    """Build the store, coordinator and archive from config.

    The coordinator's history is restored from the archive so one-shot
    commands behave like a continuing session.
    """
    from cli.config import load_config_model
    from knowledge import KnowledgeStore, SQLiteBlobStore
    from orchestration import ConversationArchive, Coordinator

    try:
        config = load_config_model()
    except ValueError as e:
        console.print(f"[red]Config error:[/] {e}")
        sys.exit(1)

    port = SQLiteBlobStore(config.paths.data_db)
    store = KnowledgeStore(
        port,
        max_actions=config.knowledge.max_actions,
        max_memories=config.knowledge.max_memories,
    )
    coordinator = Coordinator(
        store=store,
        max_history=config.conversation.max_history,
        trimmed_history=config.conversation.trimmed_history,
    )
    archive = ConversationArchive(port)
    if config.conversation.persist_history:
        coordinator.restore_conversation_history(archive.load())

    return {
        "config": config,
        "port": port,
        "store": store,
        "coordinator": coordinator,
        "archive": archive,
    }


def parse_tags(tags: str | None) -> list[str]:
    return [t.strip() for t in tags.split(",") if t.strip()] if tags else []
