"""Layer naming convention.

Designers annotate layers as ``name:tag``. The tag selects what the walker
builds from the layer; an absent tag means a frame for raster layers and a
group for containers.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from ..errors import unrecognized_tag
from .constants import DEFAULT_LOCAL_NAME, TAG_DELIMITER

__all__ = ["LayerTag", "LayerName", "parse_layer_name", "parse_frame_delay"]


class LayerTag(Enum):
    NONE = ""
    ORIGIN = "origin"
    NAMESPACE = "namespace"
    ANIMATION = "animation"
    WALKMAP = "walkmap"
    PROXY = "proxy"
    POINT = "point"
    TEXT = "text"


_TAGS = {t.value: t for t in LayerTag}


@dataclass(frozen=True, slots=True)
class LayerName:
    local: str
    tag: LayerTag
    raw: str


def _split(raw: str | None) -> tuple[str, str, str]:
    text = raw or ""
    local, _, tag = text.partition(TAG_DELIMITER)
    return text, local or DEFAULT_LOCAL_NAME, tag


def parse_layer_name(raw: str | None) -> LayerName:
    text, local, tag = _split(raw)
    try:
        kind = _TAGS[tag]
    except KeyError:
        raise unrecognized_tag(local, tag) from None
    return LayerName(local=local, tag=kind, raw=text)


def parse_frame_delay(raw: str | None) -> tuple[str, int | None]:
    """Split an animation frame name into ``(local, delay)``.

    ``delay`` is None when the tag payload is missing or not a non-negative
    integer; the caller decides how to report it.
    """
    _, local, tag = _split(raw)
    payload = tag.strip()
    if not (payload.isascii() and payload.isdigit()):
        return local, None
    return local, int(payload)
