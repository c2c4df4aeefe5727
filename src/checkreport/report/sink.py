"""Storage for the finished report and the images it refers to."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

import structlog
from PIL import Image

logger = structlog.get_logger(__name__)


class ArtifactSink(Protocol):
    def store_image(self, image: Image.Image) -> str:  # pragma: no cover - structural protocol
        """Persist an image and return the file name it was stored under."""

    def read_file(self, path: Path) -> list[str] | None:  # pragma: no cover - structural protocol
        """Return the lines of a text file, or None if it does not exist."""

    def write_document(self, name: str, text: str) -> Path:  # pragma: no cover - structural protocol
        """Write the report text and return where it went."""


class DirectorySink:
    """Write images and the report into one output directory.

    Images are numbered ``report1.png``, ``report2.png``, ... per sink.
    """

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)
        self._image_count = 0

    def store_image(self, image: Image.Image) -> str:
        self._image_count += 1
        name = f"report{self._image_count}.png"
        self.output_dir.mkdir(parents=True, exist_ok=True)
        image.save(self.output_dir / name, "PNG")
        logger.debug("sink.image_stored", name=name, size=image.size)
        return name

    def read_file(self, path: Path) -> list[str] | None:
        path = Path(path)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8").splitlines()

    def write_document(self, name: str, text: str) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        target = self.output_dir / name
        target.write_text(text, encoding="utf-8")
        return target


def load_image(path: Path) -> Image.Image:
    """Open an image file fully so the handle can be closed."""
    with Image.open(path) as image:
        image.load()
        return image.copy()
