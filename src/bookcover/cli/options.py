# ABOUTME: Shared Click options for bookcover CLI commands.
# ABOUTME: Provides the --base-path option, which falls back to the environment or cwd.

from pathlib import Path

import click

from bookcover.config import BASE_PATH_ENV

base_path_option = click.option(
    "--base-path",
    "base_path",
    type=click.Path(file_okay=False, path_type=Path),
    envvar=BASE_PATH_ENV,
    default=None,
    help=f"Directory holding covers/ (default: ${BASE_PATH_ENV} or the working directory).",
)
