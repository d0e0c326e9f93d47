"""In-memory layer trees for tests.

Usage:
    from layer_helper import raster, group, solid
    doc = Document("level", (group("actors", raster("hero", 4, 4)),))
"""

from __future__ import annotations

from typing import Callable, List, Tuple

from spritec.model.layers import ContainerLayer, RasterData, RasterLayer


def pixels(
    width: int,
    height: int,
    alpha: Callable[[int, int], int] = lambda x, y: 255,
    color: Tuple[int, int, int] = (255, 0, 0),
) -> bytes:
    out = bytearray()
    for y in range(height):
        for x in range(width):
            out.extend(color)
            out.append(alpha(x, y))
    return bytes(out)


def solid(
    width: int, height: int, color: Tuple[int, int, int] = (255, 0, 0)
) -> RasterData:
    return RasterData(width, height, pixels(width, height, color=color))


def masked(width: int, height: int, opaque: set) -> RasterData:
    """Raster opaque exactly at the (x, y) positions in ``opaque``."""
    return RasterData(
        width,
        height,
        pixels(width, height, alpha=lambda x, y: 255 if (x, y) in opaque else 0),
    )


def raster(
    name: str | None,
    width: int,
    height: int,
    left: int = 0,
    top: int = 0,
    color: Tuple[int, int, int] = (255, 0, 0),
) -> RasterLayer:
    return RasterLayer(name, solid(width, height, color), left=left, top=top)


def group(name: str | None, *children, left: int = 0, top: int = 0) -> ContainerLayer:
    return ContainerLayer(name, tuple(children), left=left, top=top)


class RecordingCodec:
    """ImageCodec stand-in that remembers what it was asked to persist."""

    def __init__(self) -> None:
        self.saved: List[str] = []

    def save(self, content_hash: str, raster, pixels: bytes) -> None:
        self.saved.append(content_hash)
