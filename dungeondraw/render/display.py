from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Protocol, Type, TypeVar, runtime_checkable

from dungeondraw.render.primitives import Primitive


P = TypeVar("P")


@dataclass(frozen=True)
class BlurFilter:
    strength: float = 8.0
    quality: int = 4


@runtime_checkable
class Container(Protocol):
    def clear(self) -> None: ...

    def add_child(self, child: "DisplayNode") -> "DisplayNode": ...


@dataclass
class DisplayNode:
    """
    Minimal display-tree node: an ordered primitive list plus children, with an
    optional clip mask node and post-process filters. Hosts with a real scene
    graph translate this tree once per render.
    """

    name: str
    primitives: List[Primitive] = field(default_factory=list)
    children: List["DisplayNode"] = field(default_factory=list)
    mask: Optional["DisplayNode"] = None
    filters: List[BlurFilter] = field(default_factory=list)

    def clear(self) -> None:
        self.primitives.clear()
        self.children.clear()
        self.mask = None
        self.filters.clear()

    def add_child(self, child: "DisplayNode") -> "DisplayNode":
        self.children.append(child)
        return child

    def extend(self, primitives: Iterable[Primitive]) -> "DisplayNode":
        self.primitives.extend(primitives)
        return self

    def walk(self) -> Iterator["DisplayNode"]:
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, name: str) -> Optional["DisplayNode"]:
        for node in self.walk():
            if node.name == name:
                return node
        return None

    def find_all(self, name: str) -> List["DisplayNode"]:
        return [n for n in self.walk() if n.name == name]

    def primitives_of(self, kind: Type[P]) -> List[P]:
        return [p for node in self.walk() for p in node.primitives if isinstance(p, kind)]

    @property
    def blurred(self) -> bool:
        return bool(self.filters)


# Node names emitted by the composer, in z-order where they coexist.
EXTERIOR_SHADOW = "exterior_shadow"
FLOOR_MASK = "floor_mask"
BACKGROUND = "background"
FLOOR = "floor"
INTERIOR_SHADOW = "interior_shadow"
WALLS = "walls"
