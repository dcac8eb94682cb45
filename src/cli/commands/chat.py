"""Chat commands: one turn through the coordinator, agent listing, mode hints."""

import click
from rich.console import Console
from rich.table import Table

from cli.errors import UnknownAgentError
from cli.utils import get_components
from observability import log_session_summary
from shared_types import ChatMode

console = Console()

MODE_CHOICES = [m.value for m in ChatMode]


@click.command()
@click.argument("message")
@click.option("-m", "--mode", type=click.Choice(MODE_CHOICES), default=None, help="Chat mode")
@click.option("-a", "--agent", "agent_id", default=None, help="Switch to this agent before sending")
@click.option("--auto-mode", is_flag=True, help="Use the recommended mode for this message")
def chat(message: str, mode: str | None, agent_id: str | None, auto_mode: bool):
    """Send MESSAGE to the assistant."""
    c = get_components()
    coordinator = c["coordinator"]

    if agent_id and not coordinator.switch_agent(agent_id):
        available = [a["id"] for a in coordinator.get_available_agents()]
        raise click.ClickException(str(UnknownAgentError(agent_id, available)))

    if auto_mode:
        mode = coordinator.get_recommended_mode(message)
    mode = mode or c["config"].conversation.default_mode

    response = coordinator.process_message(message, mode=mode)
    if c["config"].conversation.persist_history:
        c["archive"].save(coordinator.get_conversation_history())
    log_session_summary(coordinator.context.session_id, coordinator.metrics)

    current = coordinator.get_current_agent()
    console.print(f"[cyan]{current['name']}[/] [dim]({mode}, confidence {response.confidence:.2f})[/]")
    console.print(response.message)

    for action in response.actions or []:
        console.print(f"  [green]→ {action.type}[/] {action.message}")
    if response.suggested_follow_ups:
        console.print("\n[dim]Follow-ups:[/]")
        for follow_up in response.suggested_follow_ups:
            console.print(f"  [dim]- {follow_up}[/]")


@click.command()
def agents():
    """List registered agents."""
    c = get_components()
    coordinator = c["coordinator"]
    current = coordinator.get_current_agent()["id"]

    table = Table(show_header=True)
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Description")
    for a in coordinator.get_available_agents():
        marker = " *" if a["id"] == current else ""
        table.add_row(a["id"] + marker, a["name"], a["description"])
    console.print(table)


@click.command()
@click.argument("message")
def mode(message: str):
    """Show the recommended chat mode for MESSAGE."""
    c = get_components()
    console.print(c["coordinator"].get_recommended_mode(message).value)
