"""Note commands: add, list, search, delete."""

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components, parse_tags

console = Console()


def _notes_table(notes) -> Table:
    table = Table(show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Updated", style="cyan")
    table.add_column("Title")
    table.add_column("Category", style="green")
    table.add_column("Tags", style="dim")
    for n in notes:
        table.add_row(
            n.id,
            n.updated_at.strftime("%Y-%m-%d"),
            n.title[:40],
            n.category or "",
            ", ".join(n.tags[:3]),
        )
    return table


@click.group()
def notes():
    """Manage knowledge notes."""
    pass


@notes.command("add")
@click.argument("title")
@click.argument("content", required=False)
@click.option("--tags", help="Comma-separated tags")
@click.option("-c", "--category", default=None, help="Note category")
def notes_add(title: str, content: str | None, tags: str | None, category: str | None):
    """Add a note. Opens editor if no content provided."""
    c = get_components()

    if not content:
        content = click.edit("# Write your note here\n\n")
        if not content:
            console.print("[yellow]No content provided, cancelled.[/]")
            return

    note = c["coordinator"].add_note(title, content, tags=parse_tags(tags), category=category)
    console.print(f"[green]Created:[/] {note.id}")


@notes.command("list")
@click.option("-n", "--limit", default=10, help="Max notes to show")
def notes_list(limit: int):
    """List recently updated notes."""
    c = get_components()
    recent = sorted(c["store"].get_shared_knowledge().user_notes, key=lambda n: n.updated_at, reverse=True)

    if not recent:
        console.print("[yellow]No notes found.[/]")
        return
    console.print(_notes_table(recent[:limit]))


@notes.command("search")
@click.argument("query")
@click.option("--tag", "tags", multiple=True, help="Require tag (repeatable)")
@click.option("-c", "--category", default=None, help="Filter by category")
def notes_search(query: str, tags: tuple[str, ...], category: str | None):
    """Substring search across note titles, content and tags."""
    c = get_components()
    results = c["coordinator"].search_knowledge(query, tags=list(tags) or None, category=category)

    if not results:
        console.print("[yellow]No matches found.[/]")
        return
    console.print(_notes_table(results))


@notes.command("delete")
@click.argument("note_id")
def notes_delete(note_id: str):
    """Delete a note by ID."""
    c = get_components()
    if c["coordinator"].delete_note(note_id):
        console.print(f"[green]Deleted:[/] {note_id}")
    else:
        console.print(f"[red]Note not found:[/] {note_id}")
