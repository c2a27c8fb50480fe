# src/quickprop/contracts/outcome.py
"""Two-variant outcome values a predicate may return.

``Ok`` carries a successful value (itself mapped to a status), ``Err``
carries an error payload and always maps to FAIL. ``ResultGenerator`` in
``quickprop.engine.generate`` produces these as generated inputs too, and
``Ok[int] | Err[str]`` is a supported parameter annotation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Ok[T]:
    """Successful outcome."""

    value: T = None  # type: ignore[assignment]


@dataclass(frozen=True)
class Err[E]:
    """Failed outcome."""

    error: E = None  # type: ignore[assignment]


type Outcome = Ok[Any] | Err[Any]
"""Union of the two outcome variants."""
