"""Layered document decoding (PSD/PSB) via psd-tools.

Produces the in-memory :class:`~spritec.model.layers.Document` the walker
consumes. Pixels are pulled lazily, once per layer.
"""

from __future__ import annotations
from pathlib import Path
from typing import Iterable, List, Optional

from psd_tools import PSDImage

from ..compiler.constants import DOCUMENT_EXTENSIONS
from ..logging import get_logger
from ..model.layers import ContainerLayer, Document, Layer, RasterLayer

__all__ = ["PsdLayerRaster", "load_document", "find_documents"]


class PsdLayerRaster:
    """Raster view over a psd-tools pixel layer."""

    __slots__ = ("_layer", "width", "height", "_pixels")

    def __init__(self, layer) -> None:
        self._layer = layer
        self.width = int(layer.width)
        self.height = int(layer.height)
        self._pixels: Optional[bytes] = None

    def read(self) -> bytes:
        if self._pixels is None:
            image = self._layer.topil()
            if image is None:
                self._pixels = bytes(self.width * self.height * 4)
            else:
                self._pixels = image.convert("RGBA").tobytes()
        return self._pixels


def _convert(layer) -> Optional[Layer]:
    if layer.is_group():
        children = tuple(
            c for c in (_convert(child) for child in layer) if c is not None
        )
        return ContainerLayer(
            name=layer.name,
            children=children,
            left=int(layer.left),
            top=int(layer.top),
        )
    if layer.has_pixels():
        return RasterLayer(
            name=layer.name,
            raster=PsdLayerRaster(layer),
            left=int(layer.left),
            top=int(layer.top),
        )
    get_logger().warning(
        "Skipping layer '%s' (%s): no pixels and no children",
        layer.name,
        layer.kind,
    )
    return None


def load_document(path: str | Path) -> Document:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(p)
    psd = PSDImage.open(p)
    layers = tuple(c for c in (_convert(layer) for layer in psd) if c is not None)
    get_logger().debug(
        "Decoded %s: %dx%d, %d top-level layers",
        p.name,
        psd.width,
        psd.height,
        len(layers),
    )
    return Document(name=p.stem, layers=layers)


def find_documents(paths: Iterable[str | Path]) -> List[Path]:
    """Expand directories to their layered documents, sorted by name."""
    found: List[Path] = []
    for entry in paths:
        p = Path(entry)
        if p.is_dir():
            found.extend(
                sorted(
                    f
                    for f in p.iterdir()
                    if f.is_file() and f.suffix.lower() in DOCUMENT_EXTENSIONS
                )
            )
        elif p.exists():
            found.append(p)
        else:
            raise FileNotFoundError(p)
    return found
