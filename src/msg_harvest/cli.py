#!/usr/bin/env python3
"""Command-line interface for msg-harvest."""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.progress import Progress
from rich.table import Table

from .config import DEFAULT_CONFIG
from .errors import ExportPrecondition
from .export import export_bundle, export_table
from .pipeline import BatchController, MessageResolver, MessageStore, SourceFile
from .utils import atomic_write_bytes

app = typer.Typer(help="msg-harvest - Outlook .msg metadata and attachment extraction")
console = Console()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else DEFAULT_CONFIG.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def collect_sources(paths: list[Path]) -> list[SourceFile]:
    """Expand files and directories into .msg sources, directories sorted recursively."""
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(
                sorted(p for p in path.rglob("*") if p.is_file() and p.suffix.lower() == ".msg")
            )
        else:
            files.append(path)
    return [SourceFile.from_path(f) for f in files]


@app.command()
def export(
    sources: list[Path] = typer.Argument(
        ..., help=".msg files or directories containing them", exists=True
    ),
    excel: Path = typer.Option(
        "emails_export.xlsx", "--excel", "-x", help="Output spreadsheet file"
    ),
    archive: Path = typer.Option(
        "all_attachments.zip", "--zip", "-z", help="Output attachment archive"
    ),
    no_excel: bool = typer.Option(False, "--no-excel", help="Skip the spreadsheet export"),
    no_zip: bool = typer.Option(False, "--no-zip", help="Skip the attachment archive"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Process .msg files and export a spreadsheet and an attachment archive."""
    configure_logging(verbose)

    inputs = collect_sources(sources)
    if not inputs:
        console.print("[yellow]No .msg files found[/yellow]")
        raise typer.Exit(1)

    console.print(f"[bold]Processing {len(inputs)} message files[/bold]")

    store = MessageStore()
    with Progress(console=console) as progress:
        task = progress.add_task("Processing...", total=len(inputs))

        def on_progress(index: int, total: int) -> None:
            progress.update(task, completed=index - 1, description=f"Processing {index}/{total}")

        store.extend(BatchController(MessageResolver(), on_progress).run(inputs))
        progress.update(task, completed=len(inputs))

    failed = store.failed
    console.print("\n[bold green]✓ Processing complete[/bold green]")
    console.print(f"Processed: {len(store)}")
    console.print(f"Failed: {len(failed)}")
    console.print(f"Attachments: {store.attachment_count}")

    if failed:
        table = Table(title="Failed files")
        table.add_column("File", style="cyan")
        table.add_column("Error", style="red")
        for record in failed:
            table.add_row(record.source_file_name, record.error_message or "")
        console.print(table)

    if not no_excel:
        atomic_write_bytes(excel, export_table(store))
        console.print(f"\n[bold green]✓ Spreadsheet saved:[/bold green] {excel}")

    if not no_zip:
        try:
            data = export_bundle(store)
        except ExportPrecondition as e:
            console.print(f"\n[yellow]{e}[/yellow]")
        else:
            atomic_write_bytes(archive, data)
            console.print(f"[bold green]✓ Attachments saved:[/bold green] {archive}")


@app.command()
def show(
    msg_file: Path = typer.Argument(..., help="Outlook .msg file", exists=True, dir_okay=False),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Resolve a single .msg file and display its normalized fields."""
    configure_logging(verbose)

    record = MessageResolver().resolve(SourceFile.from_path(msg_file))

    if record.failed:
        console.print(
            f"[red]✗ Failed to parse {record.source_file_name}:[/red] {record.error_message}"
        )
        raise typer.Exit(1)

    console.print(f"[bold cyan]{record.subject}[/bold cyan]")
    console.print(f"  From: {record.sender_name} <{record.sender_email or 'unknown'}>")
    if record.sender_phone:
        console.print(f"  Phone: {record.sender_phone}")
    console.print(f"  Date: {record.sent_date.strftime('%c')}")
    console.print(f"  To: {', '.join(str(r) for r in record.recipients) or 'N/A'}")

    if record.body:
        preview = record.body[:200].replace("\n", " ")
        console.print(f"  Preview: {preview}...")

    if record.attachments:
        table = Table(title=f"Attachments ({len(record.attachments)})")
        table.add_column("Name", style="cyan")
        table.add_column("Size", justify="right", style="magenta")
        table.add_column("Type", style="dim")
        for att in record.attachments:
            table.add_row(att.file_name, f"{att.size / 1024:.1f} KB", att.mime_type or "")
        console.print(table)


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
