# ABOUTME: Runtime settings and fixed constants for the bookcover pipeline.
# ABOUTME: Resolves the base path that the covers cache and default document live under.

import os
from dataclasses import dataclass
from pathlib import Path

BASE_PATH_ENV = "BOOKCOVER_BASE_PATH"

MARKER_PREFIX = "bookcover:"
ALTERNATIVE_KEY_FLAG = "!"

COVERS_DIRNAME = "covers"
DEFAULT_COVER = f"{COVERS_DIRNAME}/default.jpg"
DEFAULT_DOCUMENT = "Recently_ReadDatabase.html"

DEFAULT_WORKERS = 8
DEFAULT_MAGICK = "convert"


def default_base_path() -> Path:
    """Base path from the environment, falling back to the working directory."""
    value = os.environ.get(BASE_PATH_ENV)
    return Path(value) if value else Path.cwd()


@dataclass
class Settings:
    """Settings shared by every stage of a run."""

    base_path: Path
    workers: int = DEFAULT_WORKERS
    magick: str = DEFAULT_MAGICK

    def __post_init__(self) -> None:
        if self.workers < 1:
            msg = f"workers must be at least 1, got {self.workers}"
            raise ValueError(msg)

    @property
    def covers_dir(self) -> Path:
        return self.base_path / COVERS_DIRNAME

    @property
    def default_cover_file(self) -> Path:
        return self.base_path / DEFAULT_COVER

    @property
    def default_document(self) -> Path:
        return self.base_path / DEFAULT_DOCUMENT
