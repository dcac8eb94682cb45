"""Conversation history commands."""

import click
from rich.console import Console

from cli.utils import get_components
from shared_types import MessageRole

console = Console()


@click.group()
def history():
    """Show or clear the saved conversation."""
    pass


@history.command("show")
@click.option("-n", "--limit", default=10, help="Max messages to show")
def history_show(limit: int):
    """Show the most recent messages."""
    c = get_components()
    messages = c["coordinator"].get_conversation_history()[-limit:]

    if not messages:
        console.print("[yellow]No conversation history.[/]")
        return

    for m in messages:
        speaker = "you" if m.role == MessageRole.USER else (m.agent_id or m.role.value)
        console.print(f"[dim]{m.timestamp:%Y-%m-%d %H:%M}[/] [cyan]{speaker}:[/] {m.content}")


@history.command("clear")
def history_clear():
    """Delete the saved conversation."""
    c = get_components()
    c["coordinator"].clear_conversation_history()
    c["archive"].clear()
    console.print("[green]Conversation history cleared.[/]")
