# src/quickprop/engine/events.py
"""Events emitted by the runner on the event bus.

Subscribe with ``EventBus.subscribe(TrialCompleted, handler)``; the default
NullEventBus drops them.
"""

from __future__ import annotations

from dataclasses import dataclass

from quickprop.contracts.enums import TestStatus
from quickprop.contracts.results import CheckResult


@dataclass(frozen=True, slots=True)
class TrialCompleted:
    """One trial's root verdict.

    Attributes:
        index: Zero-based attempt number within the run
        seed: Seed of the trial's random source
        size: Size the trial generated at
        status: Root verdict status
        input: Rendered root input
    """

    index: int
    seed: int
    size: int
    status: TestStatus
    input: str


@dataclass(frozen=True, slots=True)
class ShrinkStepTaken:
    """The shrink search moved to a smaller failing input."""

    step: int
    input: str


@dataclass(frozen=True, slots=True)
class RunFinished:
    """A run reached a terminal state."""

    result: CheckResult
