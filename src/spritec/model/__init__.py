from .layers import (
    Raster,
    RasterData,
    RasterLayer,
    ContainerLayer,
    Layer,
    Document,
)
from .resources import (
    ResourceImageType,
    ResourcePoint,
    ResourceQuad,
    ResourceBitmap,
    ResourceFrame,
    ResourceAnimationFrame,
    ResourceAnimation,
    ResourceSprite,
    ResourceGroup,
    ResourceImage,
    ResourceFile,
)

__all__ = [
    "Raster",
    "RasterData",
    "RasterLayer",
    "ContainerLayer",
    "Layer",
    "Document",
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
