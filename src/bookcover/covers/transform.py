# ABOUTME: In-place cover normalization through ImageMagick.
# ABOUTME: Resizes to the thumbnail box, converts to grayscale, and applies ordered dithering.

import logging
import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path

from bookcover.config import DEFAULT_MAGICK

logger = logging.getLogger(__name__)

THUMBNAIL_BOX = "100x157"
DITHER_MATRIX = "o8x8"

Runner = Callable[[Sequence[str]], subprocess.CompletedProcess]


class TransformError(Exception):
    """Raised when the image conversion command fails."""


def _run(command: Sequence[str]) -> subprocess.CompletedProcess:
    return subprocess.run(command, capture_output=True, text=True, check=False)


def build_command(path: Path, magick: str = DEFAULT_MAGICK) -> list[str]:
    """The conversion command line, writing the result over the input file."""
    return [
        *magick.split(),
        str(path),
        "-resize",
        THUMBNAIL_BOX,
        "-colorspace",
        "gray",
        "-ordered-dither",
        DITHER_MATRIX,
        str(path),
    ]


class CoverTransformer:
    """Runs the normalization command on downloaded covers.

    Success means exit status 0 and nothing on stderr. The runner is
    injectable so tests can stand in for ImageMagick.
    """

    def __init__(self, magick: str = DEFAULT_MAGICK, runner: Runner | None = None) -> None:
        self._magick = magick
        self._runner = runner or _run

    def normalize(self, path: Path) -> Path:
        """Normalize the image at path in place.

        Raises:
            TransformError: If the command cannot be started, exits non-zero,
                or writes to stderr.
        """
        command = build_command(path, self._magick)
        logger.debug("Running %s", " ".join(command))
        try:
            result = self._runner(command)
        except OSError as exc:
            raise TransformError(f"Cannot run {command[0]}: {exc}") from exc

        stderr = (result.stderr or "").strip()
        if result.returncode != 0 or stderr:
            raise TransformError(
                f"{command[0]} failed for {path} (exit {result.returncode}): {stderr}"
            )
        return path
