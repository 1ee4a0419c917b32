# ABOUTME: The `bookcover inspect` command for previewing extracted entries.
# ABOUTME: Shows each entry's lookup key, cache key, and cache status without writing anything.

from pathlib import Path

import click
from bs4 import BeautifulSoup
from rich.console import Console
from rich.table import Table

from bookcover.cli.options import base_path_option
from bookcover.config import default_base_path
from bookcover.covers.cache import CoverCache, cache_key
from bookcover.document.extractor import extract_entries
from bookcover.document.loader import DocumentLoadError, load_document, parse_document

console = Console()


def _plain(markup: str) -> str:
    return BeautifulSoup(markup, "html.parser").get_text(" ", strip=True)


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@base_path_option
def inspect(path: Path, base_path: Path | None) -> None:
    """Show the book entries found in a document."""
    try:
        soup = parse_document(load_document(path))
    except DocumentLoadError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc

    entries = extract_entries(soup)
    if not entries:
        console.print(f"[dim]0 entries found in {path}[/dim]")
        return

    cache = CoverCache(base_path or default_base_path())

    table = Table(title=str(path.name))
    table.add_column("Id", style="bold", no_wrap=True)
    table.add_column("Title")
    table.add_column("Key")
    table.add_column("Cache")

    for entry in entries:
        if entry.isbn:
            key_label = entry.isbn
        elif entry.alternative_key:
            key_label = f"! {entry.alternative_key}"
        else:
            key_label = "[dim]none[/dim]"

        cached = cache.find(entry)
        if cached is not None:
            status = f"[green]{cached}[/green]"
        elif cache_key(entry) is None:
            status = "[dim]default[/dim]"
        else:
            status = "[yellow]missing[/yellow]"

        table.add_row(
            entry.identifier or "[red]no id[/red]",
            _plain(entry.title) or "[dim]untitled[/dim]",
            key_label,
            status,
        )

    console.print(table)
    console.print(f"\n[bold]{len(entries)} entries found.[/bold]")
