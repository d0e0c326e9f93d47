"""Recursive conversion of a decoded layer tree into resource groups.

Context (active origin, namespace prefix) is passed down by value. Every
visit returns the context that applies to the following siblings, which only
differs from its input after a raster ``origin`` marker.

Dispatch per layer (tag, layer kind):

=============  =========  ==============================================
tag            kind       result
=============  =========  ==============================================
origin         container  children walked into the same group under
                          the container's (left, top)
origin         raster     following siblings use the raster center
namespace      container  children walked into the same group with the
                          name prefixed
animation      container  one Animation sprite, one frame per child
walkmap        raster     one Walkmap sprite
proxy          raster     one Proxy quad (no image)
point          either     one Point sprite (no image)
text           raster     one Text sprite (image without hitmap)
(none)         raster     one Frame sprite (image with hitmap)
(none)         container  one child group
=============  =========  ==============================================
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List

from ..errors import (
    empty_document,
    invalid_animation_frame,
    layer_kind_mismatch,
    unexpected_top_level_sprite,
)
from ..logging import get_logger
from ..model.layers import ContainerLayer, Document, Layer, RasterLayer
from ..model.resources import (
    ResourceAnimation,
    ResourceAnimationFrame,
    ResourceBitmap,
    ResourceFrame,
    ResourceGroup,
    ResourceImageType,
    ResourcePoint,
    ResourceQuad,
    ResourceSprite,
)
from .bitmaps import build_walkmap, encode_bits
from .constants import WALKMAP_SCALE
from .naming import LayerName, LayerTag, parse_frame_delay, parse_layer_name
from .origin import WalkContext
from .registry import ImageRegistry

__all__ = ["LayerTreeWalker"]


@dataclass(slots=True)
class _Scope:
    sprites: List[ResourceSprite] = field(default_factory=list)
    children: List[ResourceGroup] = field(default_factory=list)


class LayerTreeWalker:
    def __init__(
        self, registry: ImageRegistry, *, walkmap_scale: int = WALKMAP_SCALE
    ) -> None:
        self.registry = registry
        self.walkmap_scale = walkmap_scale
        self.logger = get_logger()

    def walk_document(self, document: Document) -> List[ResourceGroup]:
        """Convert one document; only groups may appear at its root."""
        if not document.layers:
            raise empty_document(document.name)
        root = _Scope()
        self._walk_layers(document.layers, WalkContext.root(), root)
        if root.sprites:
            raise unexpected_top_level_sprite(
                document.name, root.sprites[0].name
            )
        return root.children

    # Traversal ---------------------------------------------------------------
    def _walk_layers(
        self, layers: Iterable[Layer], ctx: WalkContext, scope: _Scope
    ) -> None:
        for layer in layers:
            ctx = self._visit(layer, ctx, scope)

    def _visit(self, layer: Layer, ctx: WalkContext, scope: _Scope) -> WalkContext:
        name = parse_layer_name(layer.name)
        if isinstance(layer, RasterLayer):
            if layer.is_empty:
                self.logger.warning("Skipping empty layer '%s'", name.raw)
                return ctx
            return self._visit_raster(layer, name, ctx, scope)
        return self._visit_container(layer, name, ctx, scope)

    def _visit_raster(
        self,
        layer: RasterLayer,
        name: LayerName,
        ctx: WalkContext,
        scope: _Scope,
    ) -> WalkContext:
        tag = name.tag
        raster = layer.raster
        left, top = ctx.origins.relative_center(
            layer.left, layer.top, raster.width, raster.height
        )
        qualified = ctx.qualify(name.local)
        if tag is LayerTag.ORIGIN:
            return ctx.with_origin(
                layer.left + raster.width / 2, layer.top + raster.height / 2
            )
        if tag is LayerTag.NONE:
            image = self.registry.register(raster, want_hitmap=True)
            scope.sprites.append(
                ResourceFrame(
                    ResourceImageType.FRAME, qualified, left, top, image
                )
            )
        elif tag is LayerTag.TEXT:
            image = self.registry.register(raster, want_hitmap=False)
            scope.sprites.append(
                ResourceFrame(ResourceImageType.TEXT, qualified, left, top, image)
            )
        elif tag is LayerTag.POINT:
            scope.sprites.append(
                ResourcePoint(ResourceImageType.POINT, qualified, left, top)
            )
        elif tag is LayerTag.PROXY:
            scope.sprites.append(
                ResourceQuad(
                    ResourceImageType.PROXY,
                    qualified,
                    left,
                    top,
                    raster.width,
                    raster.height,
                )
            )
        elif tag is LayerTag.WALKMAP:
            walkmap = build_walkmap(
                raster.read(), raster.width, raster.height, self.walkmap_scale
            )
            scope.sprites.append(
                ResourceBitmap(
                    ResourceImageType.WALKMAP,
                    qualified,
                    left,
                    top,
                    raster.width,
                    raster.height,
                    encode_bits(walkmap.data),
                    walkmap.scale,
                )
            )
        else:
            raise layer_kind_mismatch(name.local, tag.value, "container")
        self.logger.debug("%s -> %s", name.raw, tag.value or "frame")
        return ctx

    def _visit_container(
        self,
        layer: ContainerLayer,
        name: LayerName,
        ctx: WalkContext,
        scope: _Scope,
    ) -> WalkContext:
        tag = name.tag
        if tag is LayerTag.ORIGIN:
            self._walk_layers(
                layer.children, ctx.with_origin(layer.left, layer.top), scope
            )
        elif tag is LayerTag.NAMESPACE:
            self._walk_layers(
                layer.children, ctx.with_namespace(name.local), scope
            )
        elif tag is LayerTag.ANIMATION:
            scope.sprites.append(self._build_animation(layer, name, ctx))
        elif tag is LayerTag.POINT:
            left, top = ctx.origins.relative(layer.left, layer.top)
            scope.sprites.append(
                ResourcePoint(
                    ResourceImageType.POINT, ctx.qualify(name.local), left, top
                )
            )
        elif tag is LayerTag.NONE:
            child = _Scope()
            self._walk_layers(layer.children, ctx, child)
            if not child.sprites and not child.children:
                self.logger.warning("Skipping empty layer '%s'", name.raw)
                return ctx
            scope.children.append(
                ResourceGroup(
                    name=ctx.qualify(name.local),
                    sprites=child.sprites,
                    children=child.children,
                )
            )
        else:
            raise layer_kind_mismatch(name.local, tag.value, "raster")
        return ctx

    def _build_animation(
        self, layer: ContainerLayer, name: LayerName, ctx: WalkContext
    ) -> ResourceAnimation:
        qualified = ctx.qualify(name.local)
        if not layer.children:
            raise invalid_animation_frame(qualified, "no frames")
        frames: List[ResourceAnimationFrame] = []
        for child in layer.children:
            frame_name, delay = parse_frame_delay(child.name)
            if not isinstance(child, RasterLayer) or child.is_empty:
                raise invalid_animation_frame(
                    qualified, f"frame '{frame_name}' has no raster", frame_name
                )
            if delay is None:
                raise invalid_animation_frame(
                    qualified,
                    f"frame '{child.name}' has no valid delay",
                    frame_name,
                )
            raster = child.raster
            left, top = ctx.origins.relative_center(
                child.left, child.top, raster.width, raster.height
            )
            image = self.registry.register(raster, want_hitmap=True)
            frames.append(ResourceAnimationFrame(image, left, top, delay))
        return ResourceAnimation(ResourceImageType.ANIMATION, qualified, frames)
