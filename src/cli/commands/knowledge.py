"""Knowledge commands: relevant context, behavior analysis, pruning, stats, preferences."""

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components

console = Console()


@click.group()
def knowledge():
    """Inspect and maintain shared knowledge."""
    pass


@knowledge.command("context")
@click.argument("query")
@click.option("-n", "--limit", default=None, type=int, help="Max memories")
def knowledge_context(query: str, limit: int | None):
    """Show contextual memories relevant to QUERY."""
    c = get_components()
    limit = limit or c["config"].knowledge.context_limit
    results = c["store"].get_relevant_context(query, limit=limit)

    if not results:
        console.print("[yellow]No relevant memories.[/]")
        return

    for memory, score in results:
        console.print(f"\n[cyan]{score:.2f}[/] {memory.context[:120]}")
        if memory.related_topics:
            console.print(f"[dim]topics: {', '.join(memory.related_topics)}[/]")


@knowledge.command("behavior")
def knowledge_behavior():
    """Summarize working patterns."""
    c = get_components()
    analysis = c["coordinator"].analyze_user_behavior()

    console.print(f"Preferred times: {', '.join(analysis.preferred_times) or '-'}")
    console.print(f"Common activities: {', '.join(analysis.common_activities) or '-'}")
    if analysis.effectiveness_patterns:
        table = Table(show_header=True)
        table.add_column("Activity", style="green")
        table.add_column("Best time", style="cyan")
        table.add_column("Effectiveness", justify="right")
        for p in analysis.effectiveness_patterns:
            table.add_row(p["activity"], p["best_time"], f"{p['effectiveness']:.2f}")
        console.print(table)


@knowledge.command("prune")
@click.option("-d", "--days", default=None, type=int, help="Days to keep")
def knowledge_prune(days: int | None):
    """Drop stale memories and low-importance notes."""
    c = get_components()
    days = days or c["config"].knowledge.retention_days
    removed = c["store"].clear_old_data(days_to_keep=days)
    console.print(f"[green]Pruned:[/] {removed['memories']} memories, {removed['notes']} notes")


@knowledge.command("stats")
def knowledge_stats():
    """Show item counts."""
    c = get_components()
    for name, count in c["store"].stats().items():
        console.print(f"{name}: {count}")


@knowledge.command("prefs")
@click.option("--set", "assignments", multiple=True, help="key=value (repeatable)")
def knowledge_prefs(assignments: tuple[str, ...]):
    """Show or update user preferences."""
    c = get_components()
    changes = {}
    for item in assignments:
        key, sep, value = item.partition("=")
        if not sep:
            raise click.BadParameter(f"expected key=value, got {item!r}", param_hint="--set")
        changes[key.strip()] = value.strip()

    prefs = c["coordinator"].update_user_preferences(**changes) if changes else c["store"].preferences
    for key, value in prefs.model_dump().items():
        console.print(f"{key}: {value}")
