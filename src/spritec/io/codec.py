"""Raster persistence: one PNG per content hash."""

from __future__ import annotations
from pathlib import Path
from typing import List

from PIL import Image

from ..compiler.constants import IMAGE_EXTENSION
from ..model.layers import Raster

__all__ = ["PngImageCodec", "image_path"]


def image_path(image_dir: Path, content_hash: str) -> Path:
    return image_dir / f"{content_hash}{IMAGE_EXTENSION}"


class PngImageCodec:
    """Writes ``<hash>.png`` files into ``image_dir``.

    Files are content-addressed, so an existing file already holds the
    pixels for its hash and is left untouched. ``written`` lists only the
    files this codec created; ``discard`` removes exactly those.
    """

    def __init__(self, image_dir: Path) -> None:
        self.image_dir = Path(image_dir)
        self.written: List[Path] = []

    def save(self, content_hash: str, raster: Raster, pixels: bytes) -> None:
        path = image_path(self.image_dir, content_hash)
        if path.exists():
            return
        self.image_dir.mkdir(parents=True, exist_ok=True)
        image = Image.frombytes("RGBA", (raster.width, raster.height), pixels)
        image.save(path, format="PNG", optimize=True)
        self.written.append(path)

    def discard(self) -> None:
        for path in self.written:
            path.unlink(missing_ok=True)
        self.written.clear()
