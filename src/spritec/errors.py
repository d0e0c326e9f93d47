"""Error definitions for the resource compiler.

Every structural problem found while walking a layer tree is fatal for the
whole run; these are validation failures, not transient faults.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

E_EMPTY_DOCUMENT = "E_EMPTY_DOCUMENT"
E_UNRECOGNIZED_TAG = "E_UNRECOGNIZED_TAG"
E_ANIMATION_FRAME = "E_ANIMATION_FRAME"
E_TOP_LEVEL_SPRITE = "E_TOP_LEVEL_SPRITE"
E_LAYER_KIND = "E_LAYER_KIND"


@dataclass
class CompileError(Exception):
    code: str
    message: str
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}" + (
            f" | ctx={self.context}" if self.context else ""
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context or {},
        }


class EmptyDocumentError(CompileError):
    pass


class UnrecognizedTagError(CompileError):
    pass


class InvalidAnimationFrameError(CompileError):
    pass


class UnexpectedTopLevelSpriteError(CompileError):
    pass


class LayerKindError(CompileError):
    pass


def empty_document(document: str) -> EmptyDocumentError:
    return EmptyDocumentError(
        code=E_EMPTY_DOCUMENT,
        message=f"Document '{document}' has no top-level layers",
        context={"document": document},
    )


def unrecognized_tag(layer: str, tag: str) -> UnrecognizedTagError:
    return UnrecognizedTagError(
        code=E_UNRECOGNIZED_TAG,
        message=f"Layer '{layer}' has unrecognized tag '{tag}'",
        context={"layer": layer, "tag": tag},
    )


def invalid_animation_frame(
    animation: str, reason: str, frame: Optional[str] = None
) -> InvalidAnimationFrameError:
    ctx: Dict[str, Any] = {"animation": animation}
    if frame is not None:
        ctx["frame"] = frame
    return InvalidAnimationFrameError(
        code=E_ANIMATION_FRAME,
        message=f"Animation '{animation}': {reason}",
        context=ctx,
    )


def unexpected_top_level_sprite(
    document: str, sprite: str
) -> UnexpectedTopLevelSpriteError:
    return UnexpectedTopLevelSpriteError(
        code=E_TOP_LEVEL_SPRITE,
        message=(
            f"Document '{document}' emits sprite '{sprite}' outside of any group"
        ),
        context={"document": document, "sprite": sprite},
    )


def layer_kind_mismatch(layer: str, tag: str, expected: str) -> LayerKindError:
    return LayerKindError(
        code=E_LAYER_KIND,
        message=f"Layer '{layer}' tagged '{tag}' must be a {expected} layer",
        context={"layer": layer, "tag": tag, "expected": expected},
    )


__all__ = [
    "CompileError",
    "EmptyDocumentError",
    "UnrecognizedTagError",
    "InvalidAnimationFrameError",
    "UnexpectedTopLevelSpriteError",
    "LayerKindError",
    "empty_document",
    "unrecognized_tag",
    "invalid_animation_frame",
    "unexpected_top_level_sprite",
    "layer_kind_mismatch",
    "E_EMPTY_DOCUMENT",
    "E_UNRECOGNIZED_TAG",
    "E_ANIMATION_FRAME",
    "E_TOP_LEVEL_SPRITE",
    "E_LAYER_KIND",
]
