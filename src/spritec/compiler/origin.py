"""Origin stack and walk context.

Both are immutable: descending into a subtree builds a new value and the
caller's value is left untouched, so there is nothing to pop on the way out.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple, Union

from .constants import NAMESPACE_SEPARATOR

__all__ = ["Origin", "OriginStack", "WalkContext", "coordinate"]

Number = Union[int, float]


def coordinate(value: Number) -> Number:
    """Collapse integral floats so JSON output stays integer where possible."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


@dataclass(frozen=True, slots=True)
class Origin:
    left: Number = 0
    top: Number = 0


_ROOT = Origin(0, 0)


@dataclass(frozen=True, slots=True)
class OriginStack:
    entries: Tuple[Origin, ...] = (_ROOT,)

    def push_origin(self, left: Number, top: Number) -> "OriginStack":
        return OriginStack(self.entries + (Origin(left, top),))

    def pop_origin(self) -> "OriginStack":
        if len(self.entries) == 1:
            raise IndexError("cannot pop the root origin")
        return OriginStack(self.entries[:-1])

    def current_origin(self) -> Origin:
        return self.entries[-1]

    @property
    def depth(self) -> int:
        return len(self.entries)

    def relative(self, left: Number, top: Number) -> Tuple[Number, Number]:
        o = self.current_origin()
        return coordinate(left - o.left), coordinate(top - o.top)

    def relative_center(
        self, layer_left: int, layer_top: int, width: int, height: int
    ) -> Tuple[Number, Number]:
        return self.relative(layer_left + width / 2, layer_top + height / 2)


@dataclass(frozen=True, slots=True)
class WalkContext:
    origins: OriginStack = OriginStack()
    namespace: Tuple[str, ...] = ()

    @classmethod
    def root(cls) -> "WalkContext":
        return cls()

    def with_origin(self, left: Number, top: Number) -> "WalkContext":
        return WalkContext(self.origins.push_origin(left, top), self.namespace)

    def with_namespace(self, segment: str) -> "WalkContext":
        return WalkContext(self.origins, self.namespace + (segment,))

    def qualify(self, local: str) -> str:
        return NAMESPACE_SEPARATOR.join(self.namespace + (local,))
