# ABOUTME: CLI package for bookcover, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from bookcover.cli.commands import discover_cmd, inspect_cmd, run_cmd


def _configure_logging(verbose: bool, quiet: bool) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))


@click.group()
@click.version_option(package_name="bookcover")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
@click.option("-q", "--quiet", is_flag=True, default=False, help="Only log errors.")
def cli(verbose: bool, quiet: bool) -> None:
    """bookcover - add cover widgets to a reading-list HTML page."""
    _configure_logging(verbose, quiet)


cli.add_command(run_cmd.run)
cli.add_command(inspect_cmd.inspect)
cli.add_command(discover_cmd.discover)
