# src/quickprop/engine/property.py
"""Property binding: generator + shrinker + predicate.

A Property turns one random context into a tree of verdicts:

    generate a bundle  ->  Rose.build(bundle, shrinker)  ->  scan(predicate)

Every node of the resulting tree holds a TestResult for that node's bundle,
computed when the node is first produced. The runner only ever looks at
the root and, on failure, walks children until none fail.

Arguments always travel as an argument bundle: a tuple with one slot per
predicate parameter. The predicate is invoked as ``fn(*bundle)``; that is
the whole of the arity adaptation.

Building properties:

    prop = for_all(IntegerGenerator(), IntegerGenerator()).property(lambda x, y: x + y == y + x)

    prop = (
        for_all(int, int)                 # types resolve through quickprop.arbitrary
        .when(lambda x, y: x <= y)
        .property(lambda x, y: max(x, y) == y)
    )

    @Property.from_function
    def prop_reverse(xs: list[int]) -> bool:
        return xs[::-1][::-1] == xs
"""

from __future__ import annotations

import copy
import dataclasses
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from quickprop.contracts.enums import TestStatus
from quickprop.contracts.outcome import Err, Ok
from quickprop.contracts.results import TestResult
from quickprop.core.logging import get_logger
from quickprop.engine.generate import Constant, GenerateContext, Generator, TupleGenerator
from quickprop.engine.rose import Rose
from quickprop.engine.shrink import EmptyShrinker, Shrinker, TupleShrinker

logger = get_logger(__name__)

Bundle = tuple[Any, ...]
"""Argument bundle: one slot per predicate parameter."""


def render(bundle: Bundle) -> str:
    """Human-readable rendering of an argument bundle."""
    return "(" + ", ".join(repr(arg) for arg in bundle) + ")"


def to_status(outcome: Any) -> TestStatus:
    """Map a predicate's return value to a verdict status.

    True -> PASS, False -> FAIL, None -> PASS, Ok(x) -> status of x,
    Err(_) -> FAIL. TestStatus and TestResult are taken as given.

    Raises:
        TypeError: For any other return type.
    """
    match outcome:
        case TestStatus():
            return outcome
        case TestResult(status=status):
            return status
        case bool():
            return TestStatus.PASS if outcome else TestStatus.FAIL
        case None:
            return TestStatus.PASS
        case Ok(value):
            return to_status(value)
        case Err():
            return TestStatus.FAIL
        case _:
            raise TypeError(
                f"property returned {type(outcome).__name__}; expected bool, None, TestStatus, TestResult, Ok or Err"
            )


def _describe_exception(exc: BaseException) -> str:
    return f"{type(exc).__name__}: {exc}"


@dataclass(frozen=True)
class Property:
    """A testable unit: how to generate a bundle, shrink it, and judge it.

    Constructed once and shared read-only across all trials of a run.

    Attributes:
        generator: Produces argument bundles
        predicate: Called as ``predicate(*bundle)``
        shrinker: Proposes smaller bundles (default: none)
        precondition: Called on a deep copy of the bundle first; False discards
        expected_failure: The run succeeds iff some trial fails
        resize_fn: Maps the runner's size to the size used for generation
    """

    generator: Generator[Bundle]
    predicate: Callable[..., Any]
    shrinker: Shrinker[Bundle] = field(default_factory=EmptyShrinker)
    precondition: Callable[..., bool] | None = None
    expected_failure: bool = False
    resize_fn: Callable[[int], int] | None = None

    @property
    def name(self) -> str:
        """Name of the predicate, for logs and reports."""
        return getattr(self.predicate, "__qualname__", repr(self.predicate))

    def test(self, ctx: GenerateContext) -> Rose[TestResult]:
        """Generate one bundle and return its verdict tree."""
        if self.resize_fn is not None:
            ctx = ctx.resized(self.resize_fn(ctx.size))
        return self.verdict_tree(self.generator.generate(ctx))

    def verdict_tree(self, bundle: Bundle) -> Rose[TestResult]:
        """Verdict tree for a given bundle.

        Discard nodes are terminal: a rejected input offers no candidates.
        """
        return (
            Rose.build(bundle, self.shrinker)
            .scan(self, _evaluate)
            .prune(lambda result: result.status is TestStatus.DISCARD)
        )

    def evaluate(self, bundle: Bundle) -> TestResult:
        """Verdict for a single bundle, without building a tree."""
        return _evaluate(self, bundle)

    def expect_failure(self) -> Property:
        """Copy of this property whose run succeeds only if a trial fails."""
        return dataclasses.replace(self, expected_failure=True)

    def resize(self, fn: Callable[[int], int]) -> Property:
        """Copy of this property generating at ``fn(size)`` instead of ``size``."""
        return dataclasses.replace(self, resize_fn=fn)

    @classmethod
    def from_function(cls, fn: Callable[..., Any]) -> Property:
        """Property over a function's annotated parameters.

        Generators and shrinkers come from quickprop.arbitrary.

        Raises:
            UnsupportedTypeError: If a parameter lacks a supported annotation.
        """
        from quickprop.arbitrary import arguments_for

        generator, shrinker = arguments_for(fn)
        return cls(generator=generator, predicate=fn, shrinker=shrinker)


def _evaluate(prop: Property, bundle: Bundle) -> TestResult:
    # Render before calling: the predicate may mutate its arguments.
    rendered = render(bundle)
    try:
        if prop.precondition is not None and not prop.precondition(*copy.deepcopy(bundle)):
            return TestResult.discarded(rendered)
        outcome = prop.predicate(*bundle)
        status = to_status(outcome)
    except Exception as exc:
        logger.debug("predicate_raised", input=rendered, error=_describe_exception(exc))
        return TestResult.failed(rendered, error=_describe_exception(exc))
    error = outcome.error if isinstance(outcome, TestResult) else None
    return TestResult(status, rendered, error)


class ForAll:
    """Builder binding generators (and optionally shrinkers) to a predicate."""

    def __init__(
        self,
        generators: Sequence[Generator[Any]],
        shrinkers: Sequence[Shrinker[Any]],
        precondition: Callable[..., bool] | None = None,
    ) -> None:
        if len(generators) != len(shrinkers):
            raise ValueError(f"{len(generators)} generators but {len(shrinkers)} shrinkers")
        self._generators = tuple(generators)
        self._shrinkers = tuple(shrinkers)
        self._precondition = precondition

    @property
    def arity(self) -> int:
        return len(self._generators)

    def shrink_with(self, *shrinkers: Shrinker[Any]) -> ForAll:
        """Replace the per-argument shrinkers, one per generator."""
        return ForAll(self._generators, shrinkers, self._precondition)

    def when(self, precondition: Callable[..., bool]) -> ForAll:
        """Discard bundles for which ``precondition(*bundle)`` is false."""
        return ForAll(self._generators, self._shrinkers, precondition)

    def property(self, predicate: Callable[..., Any]) -> Property:
        return Property(
            generator=TupleGenerator(*self._generators),
            predicate=predicate,
            shrinker=TupleShrinker(*self._shrinkers),
            precondition=self._precondition,
        )


def for_all(*sources: Any) -> ForAll:
    """Start a property over one argument per source.

    Each source is either a Generator (no shrinking for that argument) or a
    type annotation resolved through quickprop.arbitrary (default generator
    and shrinker).
    """
    from quickprop.arbitrary import arbitrary

    generators: list[Generator[Any]] = []
    shrinkers: list[Shrinker[Any]] = []
    for source in sources:
        if hasattr(source, "generate"):
            generators.append(source)
            shrinkers.append(EmptyShrinker())
        else:
            generator, shrinker = arbitrary(source)
            generators.append(generator)
            shrinkers.append(shrinker)
    return ForAll(generators, shrinkers)


def constant_property(result: TestResult) -> Property:
    """A property whose every trial yields ``result``."""
    return Property(generator=Constant(()), predicate=lambda: result)


def as_property(testable: Any) -> Property:
    """Coerce anything testable into a Property.

    Accepts a Property, a TestResult, or a function with annotated
    parameters.
    """
    if isinstance(testable, Property):
        return testable
    if isinstance(testable, TestResult):
        return constant_property(testable)
    if callable(testable):
        return Property.from_function(testable)
    raise TypeError(f"{type(testable).__name__} is not testable")
