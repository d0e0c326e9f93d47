"""Content-addressed image registry.

One ``ResourceImage`` and one persisted raster per distinct pixel content,
across every document of a run.
"""

from __future__ import annotations

import hashlib
import threading
from typing import Dict, Iterator, List, Optional, Protocol

from ..logging import get_logger
from ..model.layers import Raster
from ..model.resources import ResourceImage
from .bitmaps import build_hitmap, encode_bits
from .constants import CONTENT_HASH_SIZE, HITMAP_COMPRESSION

__all__ = ["ImageCodec", "ImageRegistry", "content_hash"]


class ImageCodec(Protocol):
    def save(self, content_hash: str, raster: Raster, pixels: bytes) -> None:
        ...


def content_hash(width: int, height: int, pixels: bytes) -> str:
    h = hashlib.blake2b(digest_size=CONTENT_HASH_SIZE)
    h.update(width.to_bytes(4, "little"))
    h.update(height.to_bytes(4, "little"))
    h.update(pixels)
    return h.hexdigest()


class ImageRegistry:
    def __init__(
        self,
        codec: Optional[ImageCodec] = None,
        *,
        hitmap_compression: int = HITMAP_COMPRESSION,
    ) -> None:
        self.codec = codec
        self.hitmap_compression = hitmap_compression
        self._images: Dict[str, ResourceImage] = {}
        self._lock = threading.Lock()
        self.hits = 0

    def register(self, raster: Raster, want_hitmap: bool) -> str:
        pixels = raster.read()
        key = content_hash(raster.width, raster.height, pixels)
        with self._lock:
            if key in self._images:
                self.hits += 1
                return key
            hitmap = None
            if want_hitmap:
                hitmap = encode_bits(
                    build_hitmap(
                        pixels,
                        raster.width,
                        raster.height,
                        self.hitmap_compression,
                    )
                )
            self._images[key] = ResourceImage(
                hash=key,
                width=raster.width,
                height=raster.height,
                hitmap=hitmap,
            )
            if self.codec is not None:
                self.codec.save(key, raster, pixels)
        get_logger().debug(
            "Registered image %s (%dx%d hitmap=%s)",
            key,
            raster.width,
            raster.height,
            want_hitmap,
        )
        return key

    def get(self, key: str) -> Optional[ResourceImage]:
        return self._images.get(key)

    @property
    def images(self) -> List[ResourceImage]:
        return list(self._images.values())

    def __contains__(self, key: object) -> bool:
        return key in self._images

    def __len__(self) -> int:
        return len(self._images)

    def __iter__(self) -> Iterator[ResourceImage]:
        return iter(self.images)
