# src/quickprop/contracts/errors.py
"""Exception taxonomy.

Most run outcomes are values (see CheckResult), not exceptions. The types
here cover the few places where raising is the contract:
- quickcheck() raising on anything but success
- asking the arbitrary catalog for a type it cannot generate
- the CLI failing to import its target
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from quickprop.contracts.results import CheckResult


class QuickpropError(Exception):
    """Base class for all quickprop errors."""


class PropertyFailedError(QuickpropError, AssertionError):
    """Raised by quickcheck() when a run does not succeed.

    Subclasses AssertionError so that pytest reports it as a test failure
    rather than an error.

    Attributes:
        result: The CheckResult of the run
    """

    def __init__(self, result: CheckResult) -> None:
        self.result = result
        super().__init__(result.describe())


class UnsupportedTypeError(QuickpropError, TypeError):
    """Raised when no default generator exists for a type annotation."""

    def __init__(self, annotation: object, reason: str | None = None) -> None:
        self.annotation = annotation
        message = f"No arbitrary generator for {annotation!r}"
        if reason is not None:
            message += f": {reason}"
        super().__init__(message)


class PropertyLoadError(QuickpropError):
    """Raised when a ``module:attribute`` target cannot be resolved to a property."""
