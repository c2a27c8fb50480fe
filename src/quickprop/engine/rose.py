# src/quickprop/engine/rose.py
"""Lazy candidate trees ("rose trees").

A Rose pairs a value with a thunk producing its child trees. Children are
only computed when iterated, and every call to ``children()`` starts a fresh
iteration, so a tree over an unbounded shrink sequence costs nothing until
somebody asks for a candidate.

The shrink search relies on this: it stops at the first failing child, and
most of the tree is never built.

Trees are immutable. Transforms (map, scan, prune) return new trees that
wrap the old ones lazily; no node is ever mutated after creation.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Any

from quickprop.engine.shrink import Shrinker

type Children[T] = Callable[[], Iterable[Rose[T]]]


def _no_children() -> Iterable[Any]:
    return ()


class Rose[T]:
    """A value and its lazily computed children."""

    __slots__ = ("_children", "_value")

    def __init__(self, value: T, children: Children[T] | None = None) -> None:
        self._value = value
        self._children: Children[T] = children if children is not None else _no_children

    @property
    def value(self) -> T:
        return self._value

    def children(self) -> Iterator[Rose[T]]:
        """Fresh iterator over child trees."""
        return iter(self._children())

    @classmethod
    def single(cls, value: T) -> Rose[T]:
        """A leaf: a value with no candidates."""
        return cls(value)

    @classmethod
    def build(cls, value: T, shrinker: Shrinker[T]) -> Rose[T]:
        """Tree whose children are the shrinker's candidates, recursively.

        Every node's children correspond exactly to one application of the
        shrinker to that node's value.
        """
        return cls(value, lambda: (cls.build(candidate, shrinker) for candidate in shrinker.shrink(value)))

    def map[U](self, fn: Callable[[T], U]) -> Rose[U]:
        """Apply ``fn`` to every value, preserving shape.

        ``fn`` runs for this node now and for each child only when that
        child is produced.
        """
        return Rose(fn(self._value), lambda: (child.map(fn) for child in self.children()))

    def scan[S, U](self, state: S, fn: Callable[[S, T], U]) -> Rose[U]:
        """Like map, with a shared state passed to ``fn`` at every node.

        The same ``state`` object reaches every node; it is never copied,
        so it must only be read.
        """
        return Rose(fn(state, self._value), lambda: (child.scan(state, fn) for child in self.children()))

    def prune(self, predicate: Callable[[T], bool]) -> Rose[T]:
        """Drop the children of every node whose value satisfies ``predicate``."""
        if predicate(self._value):
            return Rose(self._value)
        return Rose(self._value, lambda: (child.prune(predicate) for child in self.children()))

    def take(self, depth: int, width: int | None = None) -> tuple[T, list[Any]]:
        """Materialise the tree as nested ``(value, [children])`` pairs.

        Bounded by ``depth`` levels and at most ``width`` children per node.
        Meant for inspection and tests; the search never calls it.
        """
        if depth <= 0:
            return self._value, []
        nested: list[Any] = []
        for index, child in enumerate(self.children()):
            if width is not None and index >= width:
                break
            nested.append(child.take(depth - 1, width))
        return self._value, nested

    def __repr__(self) -> str:
        return f"Rose({self._value!r}, ...)"
