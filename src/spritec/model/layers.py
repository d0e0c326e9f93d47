"""Decoded layer tree handed to the walker.

A layer is either a raster-bearing leaf or a container of further layers,
never both.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol, Tuple, Union


class Raster(Protocol):
    width: int
    height: int

    def read(self) -> bytes:
        """Return RGBA8 bytes in row-major order."""
        ...


@dataclass(frozen=True, slots=True)
class RasterData:
    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        expected = self.width * self.height * 4
        if len(self.pixels) != expected:
            raise ValueError(
                f"RGBA buffer size mismatch: {len(self.pixels)}!={expected}"
            )

    def read(self) -> bytes:
        return self.pixels


@dataclass(frozen=True, slots=True)
class RasterLayer:
    name: str | None
    raster: Raster
    left: int = 0
    top: int = 0

    @property
    def is_empty(self) -> bool:
        return self.raster.width <= 0 or self.raster.height <= 0


@dataclass(frozen=True, slots=True)
class ContainerLayer:
    name: str | None
    children: Tuple["Layer", ...] = ()
    left: int = 0
    top: int = 0


Layer = Union[RasterLayer, ContainerLayer]


@dataclass(frozen=True, slots=True)
class Document:
    name: str
    layers: Tuple[Layer, ...] = ()


__all__ = [
    "Raster",
    "RasterData",
    "RasterLayer",
    "ContainerLayer",
    "Layer",
    "Document",
]
