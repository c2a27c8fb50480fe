# src/quickprop/engine/shrink.py
"""Deterministic shrink strategies.

A Shrinker proposes simpler replacement values for a concrete value. It
never consults randomness and every call restarts the sequence from the
beginning, so the candidate tree built on top of it can be walked lazily.

Candidate order matters: the shrink search descends into the *first*
failing candidate, so cheap, large reductions come first (zero, half, drop
the whole collection) and fine-grained steps come last.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Any, Protocol

from quickprop.contracts.outcome import Err, Ok


class Shrinker[T](Protocol):
    """Proposes smaller candidates for a value."""

    def shrink(self, value: T) -> Iterator[T]: ...


class EmptyShrinker:
    """Proposes nothing. The default for properties without a shrinker."""

    def shrink(self, value: Any) -> Iterator[Any]:
        return iter(())

    def __repr__(self) -> str:
        return "EmptyShrinker()"


def _toward_zero_half(value: int) -> int:
    # Floor division rounds -7 // 2 to -4; shrinking wants -3.
    return -(-value // 2) if value < 0 else value // 2


class IntegerShrinker:
    """Shrinks signed integers toward zero.

    Candidates, in order:
    1. ``0``
    2. ``-value`` when value is negative (same magnitude, preferred sign)
    3. half of value, rounded toward zero
    4. unit steps from value toward zero, excluding value and zero

    Every candidate except ``-value`` has strictly smaller magnitude than
    value, so repeated shrinking terminates.
    """

    def shrink(self, value: int) -> Iterator[int]:
        if value == 0:
            return
        yield 0
        seen = {0}
        if value < 0:
            yield -value
            seen.add(-value)
        half = _toward_zero_half(value)
        if half not in seen:
            yield half
            seen.add(half)
        step = -1 if value > 0 else 1
        for candidate in range(value + step, 0, step):
            if candidate not in seen:
                yield candidate

    def __repr__(self) -> str:
        return "IntegerShrinker()"


class UnsignedIntegerShrinker:
    """Shrinks non-negative integers: ``0``, half, then ``value-1`` down to 1."""

    def shrink(self, value: int) -> Iterator[int]:
        if value <= 0:
            return
        yield 0
        half = value // 2
        if half != 0:
            yield half
        for candidate in range(value - 1, 0, -1):
            if candidate != half:
                yield candidate

    def __repr__(self) -> str:
        return "UnsignedIntegerShrinker()"


class BoolShrinker:
    """``True`` shrinks to ``False``; ``False`` is minimal."""

    def shrink(self, value: bool) -> Iterator[bool]:
        if value:
            yield False


class CharShrinker:
    """Shrinks a character toward the front of its alphabet.

    Proposes the first alphabet character, then every character between it
    and the value's position. Characters outside the alphabet shrink to the
    first character only.
    """

    def __init__(self, alphabet: str) -> None:
        if not alphabet:
            raise ValueError("alphabet must not be empty")
        self._alphabet = alphabet

    def shrink(self, value: str) -> Iterator[str]:
        position = self._alphabet.find(value)
        if position == 0:
            return
        if position < 0:
            yield self._alphabet[0]
            return
        yield from self._alphabet[:position]


class CollectionShrinker[C]:
    """Shrinks variable-length collections.

    Two phases, never mixed in one candidate:

    1. Chunk removal. For chunk sizes ``len >> k`` (k = 0, 1, 2, ... while
       positive) remove each contiguous run of that size, left to right.
       The first candidate is therefore the empty collection.
    2. Element shrinking. For each position, replace that element with the
       *first* candidate of the element shrinker, if it has one.

    The number of candidates per call is O(n log n) in phase 1 plus at most
    n in phase 2; all candidates have length <= the original.

    ``factory`` rebuilds the container from a list of elements; use the
    same factory as the matching CollectionGenerator.
    Mappings are shrunk as lists of their items.
    """

    def __init__(
        self,
        element: Shrinker[Any],
        factory: Callable[[list[Any]], C] = list,  # type: ignore[assignment]
    ) -> None:
        self._element = element
        self._factory = factory

    def shrink(self, value: C) -> Iterator[C]:
        if isinstance(value, Mapping):
            elements = list(value.items())
        else:
            elements = list(value)  # type: ignore[call-overload]
        yield from self._removals(elements)
        yield from self._element_shrinks(elements)

    def _removals(self, elements: list[Any]) -> Iterator[C]:
        length = len(elements)
        shift = 0
        while (chunk := length >> shift) > 0:
            for offset in range(0, length, chunk):
                yield self._factory(elements[:offset] + elements[offset + chunk :])
            shift += 1

    def _element_shrinks(self, elements: list[Any]) -> Iterator[C]:
        for index, element in enumerate(elements):
            first = next(iter(self._element.shrink(element)), _NO_CANDIDATE)
            if first is _NO_CANDIDATE:
                continue
            replaced = list(elements)
            replaced[index] = first
            yield self._factory(replaced)

    def __repr__(self) -> str:
        return f"CollectionShrinker({self._element!r})"


_NO_CANDIDATE = object()


class TupleShrinker:
    """Shrinks a fixed-arity tuple one position at a time.

    For position 0, then 1, and so on, yields the tuple with only that
    component replaced by each candidate of its shrinker. Two positions are
    never shrunk in the same candidate.
    """

    def __init__(self, *shrinkers: Shrinker[Any]) -> None:
        self._shrinkers: Sequence[Shrinker[Any]] = shrinkers

    @property
    def arity(self) -> int:
        return len(self._shrinkers)

    def shrink(self, value: tuple[Any, ...]) -> Iterator[tuple[Any, ...]]:
        if len(value) != len(self._shrinkers):
            raise ValueError(f"expected a {len(self._shrinkers)}-tuple, got {len(value)} components")
        for index, shrinker in enumerate(self._shrinkers):
            for candidate in shrinker.shrink(value[index]):
                yield value[:index] + (candidate,) + value[index + 1 :]

    def __repr__(self) -> str:
        return f"TupleShrinker{tuple(self._shrinkers)!r}"


class OptionalShrinker[T]:
    """Opt-in shrinker for optional values: ``None``, then inner candidates."""

    def __init__(self, inner: Shrinker[T]) -> None:
        self._inner = inner

    def shrink(self, value: T | None) -> Iterator[T | None]:
        if value is None:
            return
        yield None
        yield from self._inner.shrink(value)


class ResultShrinker:
    """Opt-in shrinker for Ok/Err values: shrinks the payload, keeping the variant."""

    def __init__(self, ok: Shrinker[Any], err: Shrinker[Any]) -> None:
        self._ok = ok
        self._err = err

    def shrink(self, value: Ok | Err) -> Iterator[Ok | Err]:
        match value:
            case Ok(payload):
                for candidate in self._ok.shrink(payload):
                    yield Ok(candidate)
            case Err(payload):
                for candidate in self._err.shrink(payload):
                    yield Err(candidate)


def candidates[T](shrinker: Shrinker[T], value: T, limit: int | None = None) -> list[T]:
    """Materialise up to ``limit`` candidates, for inspection and tests."""
    out: list[T] = []
    for candidate in shrinker.shrink(value):
        if limit is not None and len(out) >= limit:
            break
        out.append(candidate)
    return out

