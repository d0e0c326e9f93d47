"""Bit-exact hitmap/walkmap encoding tests.

Layouts are consumed by the runtime; expected bytes below are computed by
hand from the cell grid and MSB-first packing.
"""

from __future__ import annotations

import math

import pytest

from layer_helper import masked, pixels, solid
from spritec.compiler.bitmaps import (
    build_hitmap,
    build_walkmap,
    encode_bits,
    hitmap_size,
    pack_bits,
)


def test_pack_bits_msb_first_with_zero_filled_tail():
    assert pack_bits([1, 0, 0, 0, 0, 0, 0, 0, 1]) == b"\x80\x80"
    assert pack_bits([0, 0, 0, 0, 0, 0, 0, 1]) == b"\x01"
    assert pack_bits([]) == b""


def test_encode_bits_strips_padding():
    assert encode_bits(b"\xff") == "/w"
    assert encode_bits(b"\x00\x00\x00") == "AAAA"


@pytest.mark.parametrize(
    "w,h,c",
    [(1, 1, 4), (4, 4, 4), (10, 3, 4), (64, 64, 4), (33, 200, 4), (100, 7, 2), (16, 16, 16)],
)
def test_hitmap_size_law(w, h, c):
    expected = (math.ceil(math.sqrt(w * h) / c) + 3) // 4 * 4
    assert hitmap_size(w, h, c) == expected
    # Independent of pixel content
    checker = pixels(w, h, alpha=lambda x, y: 255 if (x + y) % 2 else 0)
    assert len(build_hitmap(checker, w, h, c)) == expected
    assert len(build_hitmap(bytes(w * h * 4), w, h, c)) == expected


def test_hitmap_opaque_4x4():
    # 32 bits over a 5-wide grid of 1x1 cells: rows start at bit 0, 5, 10, 15
    data = build_hitmap(solid(4, 4).pixels, 4, 4, 4)
    assert data == b"\xf7\xbd\xe0\x00"


def test_hitmap_extreme_aspect_ratio():
    # 8 bytes; the grid collapses to a single line of 64 cells of 16 px.
    # The last cell holds 8 of 16 px, which is not a strict majority.
    expected = b"\xff" * 7 + b"\xfc"
    assert build_hitmap(solid(1000, 1).pixels, 1000, 1, 4) == expected
    assert build_hitmap(solid(1, 1000).pixels, 1, 1000, 4) == expected


def test_hitmap_transparent_is_zero():
    assert build_hitmap(bytes(4 * 4 * 4), 4, 4, 4) == b"\x00" * 4


def test_hitmap_majority_is_strict():
    # 16x16 at compression 16: 5x6 grid of 4x3 cells, capacity 12
    half = {(x, y) for x in range(2) for y in range(3)}
    assert build_hitmap(masked(16, 16, half).pixels, 16, 16, 16) == b"\x00" * 4
    more = half | {(2, 0)}
    assert build_hitmap(masked(16, 16, more).pixels, 16, 16, 16) == (
        b"\x80" + b"\x00" * 3
    )


def test_hitmap_deterministic():
    px = pixels(37, 23, alpha=lambda x, y: 255 if (x * y) % 3 else 0)
    assert build_hitmap(px, 37, 23, 4) == build_hitmap(px, 37, 23, 4)


def test_hitmap_empty_raster():
    assert build_hitmap(b"", 0, 0, 4) == b""


def test_walkmap_truncates_partial_tiles():
    wm = build_walkmap(solid(10, 10).pixels, 10, 10, 3)
    assert (wm.width, wm.height, wm.scale) == (3, 3, 3)
    assert wm.data == b"\xff\x80"


def test_walkmap_ignores_trailing_strip():
    strip = {(9, y) for y in range(10)} | {(x, 9) for x in range(10)}
    wm = build_walkmap(masked(10, 10, strip).pixels, 10, 10, 3)
    assert wm.data == b"\x00\x00"


def test_walkmap_half_is_solid():
    # scale 2: capacity 4; left tile has 2 opaque, right tile has 1
    px = masked(4, 2, {(0, 0), (1, 1), (2, 0)}).pixels
    wm = build_walkmap(px, 4, 2, 2)
    assert (wm.width, wm.height) == (2, 1)
    assert wm.data == b"\x80"


def test_walkmap_row_major_order():
    # 2x2 grid at scale 1: only (1, 0) and (0, 1) are opaque
    px = masked(2, 2, {(1, 0), (0, 1)}).pixels
    assert build_walkmap(px, 2, 2, 1).data == b"\x60"


def test_walkmap_smaller_than_scale():
    wm = build_walkmap(solid(3, 3).pixels, 3, 3, 4)
    assert (wm.width, wm.height, wm.data) == (0, 0, b"")


def test_walkmap_rejects_bad_scale():
    with pytest.raises(ValueError):
        build_walkmap(solid(2, 2).pixels, 2, 2, 0)
