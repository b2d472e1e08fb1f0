"""Command-line interface for DCC Character Sheet."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from dcc_character_sheet import __version__
from dcc_character_sheet.config import Settings, get_settings
from dcc_character_sheet.events import PriorStatus, RecordingSink, SaveEvent, log_save_event
from dcc_character_sheet.exceptions import CharacterSheetError
from dcc_character_sheet.storage import Library

console = Console()
err_console = Console(stderr=True)


def configure_logging(level: str) -> None:
    """Send log records through rich on stderr."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def open_library(ctx: click.Context, recorder: RecordingSink | None = None) -> Library:
    settings: Settings = ctx.obj

    def sink(event: SaveEvent) -> None:
        log_save_event(event)
        if recorder is not None:
            recorder(event)

    return Library.from_settings(settings, event_sink=sink)


@contextmanager
def reported_errors() -> Iterator[None]:
    """Turn storage errors into a red message and exit status 1."""
    try:
        yield
    except (CharacterSheetError, OSError) as exc:
        console.print(f"[red]✗[/red] {escape(str(exc))}")
        raise SystemExit(1) from exc


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Data directory (default: ~/dcc-character-sheet or DCC_DATA_DIR)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def main(ctx: click.Context, data_dir: Path | None, verbose: bool) -> None:
    """DCC Character Sheet - character, map, party and world note storage."""
    settings = get_settings()
    if data_dir is not None:
        settings = settings.model_copy(update={"data_dir": data_dir})
    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings


@main.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show the data directory and record counts."""
    with reported_errors():
        library = open_library(ctx)
        counts = library.counts()

    console.print("[bold]DCC Character Sheet Status[/bold]\n")
    console.print(f"Data directory: {library.base_dir}")

    table = Table()
    table.add_column("Kind", style="cyan")
    table.add_column("Active", justify="right")
    table.add_column("Deleted", justify="right", style="dim")
    for kind, (active, deleted) in counts.items():
        table.add_row(kind, f"{active:,}", f"{deleted:,}")
    console.print(table)


# ============================================================================
# Character Commands
# ============================================================================

@main.group()
def characters() -> None:
    """Character sheet commands."""
    pass


@characters.command(name="list")
@click.option("--deleted", is_flag=True, help="List deleted characters instead")
@click.pass_context
def characters_list(ctx: click.Context, deleted: bool) -> None:
    """List characters."""
    with reported_errors():
        found = open_library(ctx).characters.list_records(active_only=not deleted)

    if not found:
        console.print("[yellow]No characters found[/yellow]")
        return

    table = Table(title="Deleted characters" if deleted else "Characters")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Level", justify="right")
    table.add_column("HP", justify="right")
    table.add_column("History", justify="right")
    for character in sorted(found, key=lambda c: c.name.lower()):
        table.add_row(
            character.id,
            character.name,
            str(character.level),
            f"{character.current_health}/{character.max_health}",
            str(len(character.history)),
        )
    console.print(table)


@characters.command(name="show")
@click.argument("character_id")
@click.pass_context
def characters_show(ctx: click.Context, character_id: str) -> None:
    """Print a character sheet as JSON."""
    with reported_errors():
        character = open_library(ctx).characters.get(character_id)
    console.print_json(character.to_json())


@characters.command(name="save")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--note", "-n", default="", help="Why the sheet changed")
@click.pass_context
def characters_save(ctx: click.Context, path: Path, note: str) -> None:
    """Save a complete character sheet from a JSON file."""
    from dcc_character_sheet.models import Character

    try:
        character = Character.model_validate_json(path.read_text(encoding="utf-8"))
    except (ValidationError, UnicodeDecodeError) as exc:
        console.print(f"[red]✗[/red] {escape(str(path))} is not a valid character sheet", soft_wrap=True)
        console.print(f"[dim]{escape(str(exc))}[/dim]")
        raise SystemExit(1) from exc

    recorder = RecordingSink()
    with reported_errors():
        open_library(ctx, recorder).characters.save(character, note=note)

    event = recorder.last
    if event.prior_status is PriorStatus.UNREADABLE:
        console.print("[yellow]Saved file on disk was unreadable; history was not carried forward[/yellow]")

    if event.history_added:
        console.print(f"[green]✓[/green] Saved {escape(character.name)} with {len(event.changes)} change(s):")
        for change in event.changes:
            console.print(f"  - {escape(change)}")
    elif event.prior_status is PriorStatus.FOUND:
        console.print(f"[green]✓[/green] Saved {escape(character.name)} [dim](no changes)[/dim]")
    else:
        console.print(f"[green]✓[/green] Created {escape(character.name)}")


@characters.command(name="delete")
@click.argument("character_id")
@click.pass_context
def characters_delete(ctx: click.Context, character_id: str) -> None:
    """Soft delete a character."""
    with reported_errors():
        character = open_library(ctx).characters.delete(character_id)
    console.print(f"[green]✓[/green] Deleted {escape(character.name)}")


@characters.command(name="restore")
@click.argument("character_id")
@click.pass_context
def characters_restore(ctx: click.Context, character_id: str) -> None:
    """Restore a deleted character."""
    with reported_errors():
        character = open_library(ctx).characters.restore(character_id)
    console.print(f"[green]✓[/green] Restored {escape(character.name)}")


@characters.command(name="note")
@click.argument("character_id")
@click.argument("text")
@click.pass_context
def characters_note(ctx: click.Context, character_id: str, text: str) -> None:
    """Add a note to a character's history."""
    with reported_errors():
        character = open_library(ctx).characters.add_history_note(character_id, text)
    console.print(f"[green]✓[/green] Note added ({len(character.history)} history entries)")


@characters.command(name="history")
@click.argument("character_id")
@click.option("--export", "-e", is_flag=True, help="Also write <id>-history.txt next to the sheet")
@click.pass_context
def characters_history(ctx: click.Context, character_id: str, export: bool) -> None:
    """Show a character's change history."""
    with reported_errors():
        store = open_library(ctx).characters
        text = store.export_history(character_id) if export else store.render_history(character_id)

    console.print(text, markup=False, highlight=False, end="")
    if export:
        console.print(f"[green]✓[/green] History exported to: {store.history_path(character_id)}")


# ============================================================================
# Map, Party and World Note Commands
# ============================================================================

@main.group()
def maps() -> None:
    """Map commands."""
    pass


@main.group()
def parties() -> None:
    """Party commands."""
    pass


@main.group()
def notes() -> None:
    """World note commands."""
    pass


def add_soft_delete_commands(group: click.Group, store_attr: str, label: str, columns: dict) -> None:
    """Attach list/delete/restore commands for a plain record store."""

    @group.command(name="list", help=f"List {label}s.")
    @click.option("--deleted", is_flag=True, help=f"List deleted {label}s instead")
    @click.pass_context
    def list_cmd(ctx: click.Context, deleted: bool) -> None:
        with reported_errors():
            found = getattr(open_library(ctx), store_attr).list_records(active_only=not deleted)
        if not found:
            console.print(f"[yellow]No {label}s found[/yellow]")
            return
        table = Table(title=f"Deleted {label}s" if deleted else f"{label.capitalize()}s")
        table.add_column("ID", style="dim")
        for column in columns:
            table.add_column(column)
        for record in found:
            table.add_row(record.id, *(str(render(record)) for render in columns.values()))
        console.print(table)

    @group.command(name="delete", help=f"Soft delete a {label}.")
    @click.argument("record_id")
    @click.pass_context
    def delete_cmd(ctx: click.Context, record_id: str) -> None:
        with reported_errors():
            getattr(open_library(ctx), store_attr).delete(record_id)
        console.print(f"[green]✓[/green] Deleted {label} {escape(record_id)}")

    @group.command(name="restore", help=f"Restore a deleted {label}.")
    @click.argument("record_id")
    @click.pass_context
    def restore_cmd(ctx: click.Context, record_id: str) -> None:
        with reported_errors():
            getattr(open_library(ctx), store_attr).restore(record_id)
        console.print(f"[green]✓[/green] Restored {label} {escape(record_id)}")


add_soft_delete_commands(maps, "maps", "map", {
    "Name": lambda m: m.name,
    "Grid": lambda m: f"{m.grid_width}x{m.grid_height} @ {m.grid_size}px",
    "Icons": lambda m: len(m.icons),
})
add_soft_delete_commands(parties, "parties", "party", {
    "Name": lambda p: p.name,
    "Members": lambda p: len(p.character_ids),
    "Updated": lambda p: p.updated_at.strftime("%Y-%m-%d %H:%M"),
})
add_soft_delete_commands(notes, "world_notes", "world note", {
    "Title": lambda n: n.title,
    "Category": lambda n: n.category,
})


@maps.command(name="create")
@click.argument("name")
@click.option("--width", "-w", default=30, show_default=True, help="Grid columns")
@click.option("--height", "-h", default=20, show_default=True, help="Grid rows")
@click.option("--size", "-s", default=40, show_default=True, help="Cell size in pixels")
@click.pass_context
def maps_create(ctx: click.Context, name: str, width: int, height: int, size: int) -> None:
    """Create an empty map."""
    with reported_errors():
        game_map = open_library(ctx).maps.create(name, width, height, size)
    console.print(f"[green]✓[/green] Created map {game_map.id}")


@maps.command(name="clear")
@click.argument("map_id")
@click.pass_context
def maps_clear(ctx: click.Context, map_id: str) -> None:
    """Remove all drawings and icons from a map."""
    with reported_errors():
        open_library(ctx).maps.clear(map_id)
    console.print(f"[green]✓[/green] Cleared map {escape(map_id)}")


@parties.command(name="create")
@click.argument("name")
@click.option("--description", "-d", default="", help="Party description")
@click.option("--member", "-m", "members", multiple=True, help="Character id (repeatable)")
@click.pass_context
def parties_create(ctx: click.Context, name: str, description: str, members: tuple[str, ...]) -> None:
    """Create a party."""
    with reported_errors():
        party = open_library(ctx).parties.create(name, description, list(members))
    console.print(f"[green]✓[/green] Created party {party.id}")


@parties.command(name="members")
@click.argument("party_id")
@click.pass_context
def parties_members(ctx: click.Context, party_id: str) -> None:
    """List the characters in a party."""
    with reported_errors():
        library = open_library(ctx)
        members = library.parties.members(party_id, library.characters)

    if not members:
        console.print("[yellow]No members found[/yellow]")
        return
    for character in members:
        console.print(
            f"  {escape(character.name)} [dim](level {character.level}, "
            f"HP {character.current_health}/{character.max_health})[/dim]"
        )


if __name__ == "__main__":
    main()
