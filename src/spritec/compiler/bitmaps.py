"""Occupancy bitmaps derived from a raster's alpha channel.

Two encoders share one packing layout (row-major cells, MSB-first within a
byte, trailing byte zero-filled):

- hitmap: a fixed bit budget spread over a grid approximating the raster's
  aspect ratio; a cell is solid when strictly more than half of it is opaque.
- walkmap: a fixed integer downscale; a cell is solid when at least half of
  it is opaque. Pixels past the last full tile are dropped.

The runtime decodes both layouts bit for bit, so neither threshold nor the
packing order may change.
"""

from __future__ import annotations

import base64
import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from .constants import HITMAP_COMPRESSION, WALKMAP_SCALE

__all__ = [
    "Walkmap",
    "alpha_mask",
    "pack_bits",
    "encode_bits",
    "hitmap_size",
    "build_hitmap",
    "build_walkmap",
]


@dataclass(frozen=True, slots=True)
class Walkmap:
    width: int
    height: int
    scale: int
    data: bytes


def alpha_mask(pixels: bytes, width: int, height: int) -> np.ndarray:
    """Boolean (height, width) array, True where alpha is non-zero."""
    rgba = np.frombuffer(pixels, dtype=np.uint8)
    if rgba.size != width * height * 4:
        raise ValueError(
            f"RGBA buffer size mismatch: {rgba.size}!={width * height * 4}"
        )
    return rgba.reshape(height, width, 4)[:, :, 3] != 0


def pack_bits(bits: Iterable[bool] | np.ndarray) -> bytes:
    arr = np.asarray(bits if isinstance(bits, np.ndarray) else list(bits))
    return np.packbits(arr.astype(bool).ravel(), bitorder="big").tobytes()


def encode_bits(data: bytes) -> str:
    """Base64 text form with the trailing padding stripped."""
    return base64.b64encode(data).decode("ascii").rstrip("=")


def hitmap_size(
    width: int, height: int, compression: int = HITMAP_COMPRESSION
) -> int:
    """Hitmap byte count: ceil(sqrt(area) / compression) rounded up to 4."""
    raw = math.ceil(math.sqrt(width * height) / compression)
    return (raw + 3) & ~3


def build_hitmap(
    pixels: bytes,
    width: int,
    height: int,
    compression: int = HITMAP_COMPRESSION,
) -> bytes:
    size = hitmap_size(width, height, compression)
    if size == 0:
        return b""
    bits = size * 8
    xdiv = math.floor(math.sqrt((bits * width) / height))
    xdiv = min(max(xdiv, 1), bits)
    ydiv = max(bits // xdiv, 1)
    xstep = math.ceil(width / xdiv)
    ystep = math.ceil(height / ydiv)

    mask = alpha_mask(pixels, width, height)
    xbucket = np.arange(width) // xstep
    ybucket = np.arange(height) // ystep
    index = ybucket[:, None] * xdiv + xbucket[None, :]
    counts = np.bincount(index[mask], minlength=bits)[:bits]
    solid = counts > (xstep * ystep) / 2
    return pack_bits(solid)


def build_walkmap(
    pixels: bytes, width: int, height: int, scale: int = WALKMAP_SCALE
) -> Walkmap:
    if scale < 1:
        raise ValueError(f"walkmap scale must be positive, got {scale}")
    out_w = width // scale
    out_h = height // scale
    if out_w == 0 or out_h == 0:
        return Walkmap(out_w, out_h, scale, b"")
    mask = alpha_mask(pixels, width, height)[: out_h * scale, : out_w * scale]
    counts = mask.reshape(out_h, scale, out_w, scale).sum(axis=(1, 3))
    solid = counts >= (scale * scale) / 2
    return Walkmap(out_w, out_h, scale, pack_bits(solid))
