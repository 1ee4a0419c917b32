# ABOUTME: The `bookcover discover` command.
# ABOUTME: Lists HTML documents under a directory that contain the bookcover marker.

from pathlib import Path

import click
from rich.console import Console

from bookcover.document.loader import discover_documents

console = Console()


@click.command()
@click.argument("directory", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--pattern",
    default="*.html",
    show_default=True,
    help="Glob for candidate files.",
)
def discover(directory: Path, pattern: str) -> None:
    """List documents containing the bookcover marker."""
    documents = discover_documents(directory, pattern=pattern)
    if not documents:
        console.print("[yellow]No documents with bookcover entries found.[/yellow]")
        return
    for path in documents:
        console.print(str(path), highlight=False)
    console.print(f"\n[bold]{len(documents)} document(s) found.[/bold]")
