from .bitmaps import build_hitmap, build_walkmap, hitmap_size
from .naming import LayerTag, LayerName, parse_layer_name
from .origin import OriginStack, WalkContext
from .registry import ImageRegistry, content_hash
from .walker import LayerTreeWalker

__all__ = [
    "build_hitmap",
    "build_walkmap",
    "hitmap_size",
    "LayerTag",
    "LayerName",
    "parse_layer_name",
    "OriginStack",
    "WalkContext",
    "ImageRegistry",
    "content_hash",
    "LayerTreeWalker",
]
