"""Dataclass models for the emitted resource description.

The JSON shape produced by ``to_dict`` is consumed verbatim by the runtime,
which switches on the integer ``type`` of each sprite.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Optional, Union


class ResourceImageType(IntEnum):
    FRAME = 0
    PROXY = 1
    POINT = 2
    TEXT = 3
    ANIMATION = 4
    WALKMAP = 5
    QUAD = 6


Coordinate = Union[int, float]


@dataclass(slots=True)
class ResourcePoint:
    type: ResourceImageType
    name: str
    left: Coordinate
    top: Coordinate

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": int(self.type),
            "name": self.name,
            "left": self.left,
            "top": self.top,
        }


@dataclass(slots=True)
class ResourceQuad(ResourcePoint):
    width: int
    height: int

    def to_dict(self) -> Dict[str, Any]:
        d = ResourcePoint.to_dict(self)
        d["width"] = self.width
        d["height"] = self.height
        return d


@dataclass(slots=True)
class ResourceBitmap(ResourceQuad):
    data: str
    scale: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        d = ResourceQuad.to_dict(self)
        d["data"] = self.data
        if self.scale is not None:
            d["scale"] = self.scale
        return d


@dataclass(slots=True)
class ResourceFrame(ResourcePoint):
    image: str

    def to_dict(self) -> Dict[str, Any]:
        d = ResourcePoint.to_dict(self)
        d["image"] = self.image
        return d


@dataclass(slots=True)
class ResourceAnimationFrame:
    image: str
    left: Coordinate
    top: Coordinate
    delay: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "image": self.image,
            "left": self.left,
            "top": self.top,
            "delay": self.delay,
        }


@dataclass(slots=True)
class ResourceAnimation:
    type: ResourceImageType
    name: str
    frames: List[ResourceAnimationFrame] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": int(self.type),
            "name": self.name,
            "frames": [f.to_dict() for f in self.frames],
        }


ResourceSprite = Union[
    ResourceFrame,
    ResourceAnimation,
    ResourcePoint,
    ResourceQuad,
    ResourceBitmap,
]


@dataclass(slots=True)
class ResourceGroup:
    """Named node of the group forest.

    A group may hold sprites and child groups at the same time. ``sprites``
    is always serialized; ``children`` only when non-empty.
    """

    name: str
    sprites: List[ResourceSprite] = field(default_factory=list)
    children: List["ResourceGroup"] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.sprites and not self.children

    def iter_sprites(self):
        yield from self.sprites
        for child in self.children:
            yield from child.iter_sprites()

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "name": self.name,
            "sprites": [s.to_dict() for s in self.sprites],
        }
        if self.children:
            d["children"] = [c.to_dict() for c in self.children]
        return d


@dataclass(frozen=True, slots=True)
class ResourceImage:
    hash: str
    width: int
    height: int
    hitmap: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "hash": self.hash,
            "width": self.width,
            "height": self.height,
        }
        if self.hitmap is not None:
            d["hitmap"] = self.hitmap
        return d


@dataclass(slots=True)
class ResourceFile:
    groups: List[ResourceGroup] = field(default_factory=list)
    images: List[ResourceImage] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "groups": [g.to_dict() for g in self.groups],
            "images": [i.to_dict() for i in self.images],
        }


__all__ = [
    "ResourceImageType",
    "ResourcePoint",
    "ResourceQuad",
    "ResourceBitmap",
    "ResourceFrame",
    "ResourceAnimationFrame",
    "ResourceAnimation",
    "ResourceSprite",
    "ResourceGroup",
    "ResourceImage",
    "ResourceFile",
]
