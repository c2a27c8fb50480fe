# src/quickprop/engine/generate.py
"""Size-parameterized random value generation.

A Generator produces one value from a GenerateContext, which pairs the
trial's random source with a size budget. Size bounds structural magnitude:
integer range, collection length, nesting depth. Composite generators pass
``ctx.child()`` (half the size) to their elements, so nested structures shrink
geometrically and the total work of a deep generator is a convergent series.

Invariants every generator here keeps:
- size 0 yields the simplest value of the type without touching the rng
- no state is kept between calls, so one instance serves any number of trials

Usage:
    gen = CollectionGenerator(IntegerGenerator())
    ctx = GenerateContext(random.Random(7), size=20)
    xs = gen.generate(ctx)
"""

from __future__ import annotations

import copy
import random
import sys
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from quickprop.contracts.outcome import Err, Ok

UNCONSTRAINED = sys.maxsize
"""Size sentinel meaning "draw from the full range"."""

UNCONSTRAINED_LENGTH = 1024
"""Upper bound for collection lengths drawn at UNCONSTRAINED size."""

PRINTABLE = "".join(chr(c) for c in range(ord("a"), ord("z") + 1)) + "".join(
    chr(c) for c in range(0x20, 0x7F) if not chr(c).islower()
)
"""Default character alphabet, simplest characters first."""


@dataclass(frozen=True, slots=True)
class GenerateContext:
    """Random source plus size budget for one generation call.

    The rng is owned by the trial that created it. Child contexts borrow the
    same rng; only the size differs.

    ``full_range`` makes numeric generators ignore the size and draw from
    their type's whole range. It is set for UNCONSTRAINED contexts and kept by
    their children, whose sizes are finite so nested collections still halve.
    """

    rng: random.Random
    size: int
    full_range: bool = False

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError(f"size must be >= 0, got {self.size}")
        if self.size == UNCONSTRAINED:
            object.__setattr__(self, "full_range", True)

    @property
    def unconstrained(self) -> bool:
        return self.size == UNCONSTRAINED

    def child(self) -> GenerateContext:
        """Context for generating a sub-value, at half the size.

        The child of an UNCONSTRAINED context gets half of
        UNCONSTRAINED_LENGTH and keeps ``full_range``.
        """
        size = UNCONSTRAINED_LENGTH if self.unconstrained else self.size
        return GenerateContext(self.rng, size // 2, self.full_range)

    def resized(self, size: int) -> GenerateContext:
        return GenerateContext(self.rng, size)



class Generator[T](Protocol):
    """Produces one value of a type from a context."""

    def generate(self, ctx: GenerateContext) -> T: ...


def draw_size(ctx: GenerateContext) -> int:
    """Draw a collection length from the context's size.

    Uniform on ``[0, size]``; at UNCONSTRAINED size, uniform on
    ``[0, UNCONSTRAINED_LENGTH]``. Size 0 returns 0 without consuming
    randomness.
    """
    if ctx.size == 0:
        return 0
    upper = UNCONSTRAINED_LENGTH if ctx.unconstrained else ctx.size
    return ctx.rng.randint(0, upper)


def _check_bits(bits: int) -> int:
    if bits < 1:
        raise ValueError(f"bits must be >= 1, got {bits}")
    return bits


class Constant[T]:
    """Always produces (a copy of) the same value."""

    def __init__(self, value: T) -> None:
        self._value = value

    def generate(self, ctx: GenerateContext) -> T:
        return copy.deepcopy(self._value)

    def __repr__(self) -> str:
        return f"Constant({self._value!r})"


class IntegerGenerator:
    """Signed integers of a fixed bit width, centred on zero.

    Draws from ``[-size, size]``. When size does not fit the type
    (``size > 2**(bits-1) - 1``) or the context asks for the full range,
    draws from the type's full range instead.
    """

    def __init__(self, bits: int = 64) -> None:
        self._bits = _check_bits(bits)
        self._max = 2 ** (self._bits - 1) - 1
        self._min = -(2 ** (self._bits - 1))

    @property
    def bounds(self) -> tuple[int, int]:
        return self._min, self._max

    def generate(self, ctx: GenerateContext) -> int:
        if ctx.size == 0:
            return 0
        if ctx.full_range or ctx.size > self._max:
            return ctx.rng.randint(self._min, self._max)
        return ctx.rng.randint(-ctx.size, ctx.size)

    def __repr__(self) -> str:
        return f"IntegerGenerator(bits={self._bits})"


class UnsignedIntegerGenerator:
    """Non-negative integers of a fixed bit width.

    Draws from ``[0, size]``, or ``[0, 2**bits - 1]`` when size does not fit or
    the context asks for the full range.
    """

    def __init__(self, bits: int = 64) -> None:
        self._bits = _check_bits(bits)
        self._max = 2**self._bits - 1

    @property
    def bounds(self) -> tuple[int, int]:
        return 0, self._max

    def generate(self, ctx: GenerateContext) -> int:
        if ctx.size == 0:
            return 0
        if ctx.full_range or ctx.size > self._max:
            return ctx.rng.randint(0, self._max)
        return ctx.rng.randint(0, ctx.size)

    def __repr__(self) -> str:
        return f"UnsignedIntegerGenerator(bits={self._bits})"


class BoolGenerator:
    """False at size 0, otherwise a fair coin."""

    def generate(self, ctx: GenerateContext) -> bool:
        if ctx.size == 0:
            return False
        return ctx.rng.random() < 0.5

    def __repr__(self) -> str:
        return "BoolGenerator()"


class CharGenerator:
    """Single characters from an alphabet ordered simplest-first.

    Size bounds how far into the alphabet a draw may reach: size 0 always
    yields the first character, size ``n`` draws from the first ``n + 1``.
    """

    def __init__(self, alphabet: str = PRINTABLE) -> None:
        if not alphabet:
            raise ValueError("alphabet must not be empty")
        self._alphabet = alphabet

    @property
    def alphabet(self) -> str:
        return self._alphabet

    def generate(self, ctx: GenerateContext) -> str:
        if ctx.size == 0:
            return self._alphabet[0]
        reach = min(ctx.size, len(self._alphabet) - 1)
        return self._alphabet[ctx.rng.randint(0, reach)]

    def __repr__(self) -> str:
        return f"CharGenerator(alphabet={self._alphabet!r})"


def as_string(chars: Iterable[str]) -> str:
    """Collection factory joining generated characters into a str."""
    return "".join(chars)


class CollectionGenerator[T]:
    """Variable-length collections.

    Draws a length with draw_size(), then that many elements each generated
    with ``ctx.child()``. The container is built by ``factory`` from the list
    of elements (``list``, ``tuple``, ``set``, ``bytes``, ``dict`` over pairs,
    or as_string).

    Set-like factories may end up shorter than the drawn length when elements
    collide; that is accepted rather than retried.
    """

    def __init__(
        self,
        element: Generator[Any],
        factory: Callable[[list[Any]], T] = list,  # type: ignore[assignment]
        *,
        max_length: int | None = None,
    ) -> None:
        if max_length is not None and max_length < 0:
            raise ValueError(f"max_length must be >= 0, got {max_length}")
        self._element = element
        self._factory = factory
        self._max_length = max_length

    def generate(self, ctx: GenerateContext) -> T:
        length = draw_size(ctx)
        if self._max_length is not None:
            length = min(length, self._max_length)
        element_ctx = ctx.child()
        return self._factory([self._element.generate(element_ctx) for _ in range(length)])

    def __repr__(self) -> str:
        return f"CollectionGenerator({self._element!r}, {getattr(self._factory, '__name__', self._factory)})"


class TupleGenerator:
    """Fixed-arity argument bundle: one value per component generator.

    Components are drawn in order from the same context.
    """

    def __init__(self, *generators: Generator[Any]) -> None:
        self._generators = generators

    @property
    def arity(self) -> int:
        return len(self._generators)

    def generate(self, ctx: GenerateContext) -> tuple[Any, ...]:
        return tuple(g.generate(ctx) for g in self._generators)

    def __repr__(self) -> str:
        return f"TupleGenerator{self._generators!r}"


class OptionalGenerator[T]:
    """None at size 0, otherwise None or an inner value with equal odds."""

    def __init__(self, inner: Generator[T]) -> None:
        self._inner = inner

    def generate(self, ctx: GenerateContext) -> T | None:
        if ctx.size == 0 or ctx.rng.random() < 0.5:
            return None
        return self._inner.generate(ctx.child())


class ResultGenerator:
    """Ok or Err with equal odds; the payload comes from the matching generator.

    Size 0 always yields ``Ok`` of the simplest ok payload.
    """

    def __init__(self, ok: Generator[Any], err: Generator[Any]) -> None:
        self._ok = ok
        self._err = err

    def generate(self, ctx: GenerateContext) -> Ok | Err:
        if ctx.size == 0:
            return Ok(self._ok.generate(ctx))
        if ctx.rng.random() < 0.5:
            return Ok(self._ok.generate(ctx.child()))
        return Err(self._err.generate(ctx.child()))


class OneOf:
    """Picks one of several generators uniformly, then delegates.

    At size 0 the first generator is used, so order alternatives
    simplest-first.
    """

    def __init__(self, *generators: Generator[Any]) -> None:
        if not generators:
            raise ValueError("OneOf needs at least one generator")
        self._generators: Sequence[Generator[Any]] = generators

    def generate(self, ctx: GenerateContext) -> Any:
        if ctx.size == 0:
            return self._generators[0].generate(ctx)
        return ctx.rng.choice(self._generators).generate(ctx)


class MappedGenerator[T, U]:
    """Applies a function to every value of an inner generator."""

    def __init__(self, inner: Generator[T], fn: Callable[[T], U]) -> None:
        self._inner = inner
        self._fn = fn

    def generate(self, ctx: GenerateContext) -> U:
        return self._fn(self._inner.generate(ctx))


def sample[T](generator: Generator[T], *, size: int = 10, seed: int | None = None, count: int = 10) -> list[T]:
    """Draw ``count`` values at a fixed size, for inspecting a generator."""
    rng = random.Random(seed)
    ctx = GenerateContext(rng, size)
    return [generator.generate(ctx) for _ in range(count)]
