# ABOUTME: The `bookcover run` command that resolves covers and rewrites documents.
# ABOUTME: Processes documents one at a time; entries within a document resolve concurrently.

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeRemainingColumn,
)

from bookcover.cli.options import base_path_option
from bookcover.config import DEFAULT_MAGICK, DEFAULT_WORKERS, Settings, default_base_path
from bookcover.core.pipeline import DocumentResult, process_document
from bookcover.covers.cache import CoverCache
from bookcover.covers.http import CoverHttpClient
from bookcover.covers.lookup import CoverLookup
from bookcover.covers.resolver import CoverResolver, ResolveStatus
from bookcover.covers.transform import CoverTransformer
from bookcover.document.loader import DocumentLoadError, discover_documents
from bookcover.document.markup import MarkupError
from bookcover.document.writer import DEFAULT_STYLESHEET

logger = logging.getLogger(__name__)

console = Console()


def _create_resolver(settings: Settings, cache: CoverCache) -> CoverResolver:
    """Create the default resolver backed by live HTTP and ImageMagick."""
    http_client = CoverHttpClient()
    return CoverResolver(
        cache=cache,
        lookup=CoverLookup(http_client),
        http_client=http_client,
        transformer=CoverTransformer(magick=settings.magick),
        workers=settings.workers,
    )


def _make_progress(console: Console) -> Progress:
    """Create a Rich progress bar for cover resolution."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeRemainingColumn(),
        console=console,
        transient=True,
    )


def _select_documents(
    paths: tuple[Path, ...], discover_dir: Path | None, settings: Settings
) -> list[Path]:
    if paths:
        return list(paths)
    if discover_dir is not None:
        return discover_documents(discover_dir)
    return [settings.default_document]


def _print_summary(result: DocumentResult) -> None:
    parts = []
    labels = (
        (ResolveStatus.CACHED, "cached", "dim"),
        (ResolveStatus.DOWNLOADED, "downloaded", "green"),
        (ResolveStatus.UNNORMALIZED, "unnormalized", "yellow"),
        (ResolveStatus.DEFAULT, "default", "yellow"),
        (ResolveStatus.FAILED, "failed", "red"),
    )
    for status, label, style in labels:
        count = result.count(status)
        if count:
            parts.append(f"[{style}]{count} {label}[/{style}]")

    summary = ", ".join(parts) if parts else "[dim]no entries[/dim]"
    console.print(f"[bold]{result.output.name}[/bold]: {summary}", highlight=False)
    for failure in result.failures:
        console.print(
            f"  [red]Failed:[/red] {failure.entry.identifier}: {failure.error}",
            highlight=False,
        )


@click.command()
@click.argument("paths", nargs=-1, type=click.Path(dir_okay=False, path_type=Path))
@base_path_option
@click.option(
    "--discover",
    "discover_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Process every HTML document under this directory containing the marker.",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the result here instead of overwriting the source (single document only).",
)
@click.option(
    "--style/--no-style",
    default=True,
    help="Inject the cover stylesheet into <head> (default: --style).",
)
@click.option(
    "--stylesheet",
    "stylesheet_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="CSS file to inject instead of the built-in stylesheet.",
)
@click.option(
    "-w",
    "--workers",
    type=click.IntRange(min=1),
    default=DEFAULT_WORKERS,
    show_default=True,
    help="Maximum concurrent cover resolutions per document.",
)
@click.option(
    "--magick",
    default=DEFAULT_MAGICK,
    show_default=True,
    help="ImageMagick command used to normalize covers.",
)
def run(
    paths: tuple[Path, ...],
    base_path: Path | None,
    discover_dir: Path | None,
    output: Path | None,
    style: bool,
    stylesheet_file: Path | None,
    workers: int,
    magick: str,
) -> None:
    """Resolve covers for reading-list entries and rewrite the documents."""
    settings = Settings(
        base_path=base_path or default_base_path(), workers=workers, magick=magick
    )
    documents = _select_documents(paths, discover_dir, settings)
    if not documents:
        console.print("[yellow]No documents with bookcover entries found.[/yellow]")
        return
    if output is not None and len(documents) > 1:
        raise click.UsageError("--output can only be used with a single document.")

    stylesheet = None
    if style:
        stylesheet = (
            stylesheet_file.read_text(encoding="utf-8")
            if stylesheet_file is not None
            else DEFAULT_STYLESHEET
        )

    cache = CoverCache(settings.base_path)
    if not cache.default_exists():
        logger.warning("Default cover %s does not exist", cache.default_file)

    resolver = _create_resolver(settings, cache)
    console.print("Started 'bookcover' action.")

    for document in documents:
        progress = _make_progress(console)
        task_id = progress.add_task(document.name, total=None)

        with progress:
            try:
                result = process_document(
                    document,
                    resolver=resolver,
                    cache=cache,
                    output=output,
                    stylesheet=stylesheet,
                    on_entries=lambda total: progress.update(task_id, total=total),
                    on_result=lambda _result: progress.advance(task_id),
                )
            except (DocumentLoadError, MarkupError) as exc:
                progress.stop()
                console.print(f"[red]Error:[/red] {exc}", highlight=False)
                raise SystemExit(1) from exc

        _print_summary(result)

    console.print("Finished 'bookcover' action.")
