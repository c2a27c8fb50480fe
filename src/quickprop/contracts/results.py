# src/quickprop/contracts/results.py
"""Verdicts and run reports.

These types answer two questions:
- TestResult: "What happened when the predicate saw this input?"
- CheckResult: "What did the whole run conclude, and how do I reproduce it?"

CheckResult carries the seed and size of the trial that first failed, not of
the shrunk counterexample. Replaying that seed at that size regenerates the
original input exactly; shrinking is deterministic from there.
"""

from __future__ import annotations

from dataclasses import dataclass

from quickprop.contracts.enums import RunStatus, TestStatus


@dataclass(frozen=True, slots=True)
class TestResult:
    """Verdict for one input.

    Attributes:
        status: Pass, fail or discard
        input: Human-readable rendering of the argument bundle
        error: ``ExcType: message`` when the predicate raised, else None
    """

    __test__ = False

    status: TestStatus
    input: str = "()"
    error: str | None = None

    @classmethod
    def passed(cls, input: str = "()") -> TestResult:
        return cls(TestStatus.PASS, input)

    @classmethod
    def failed(cls, input: str = "()", error: str | None = None) -> TestResult:
        return cls(TestStatus.FAIL, input, error)

    @classmethod
    def discarded(cls, input: str = "()") -> TestResult:
        return cls(TestStatus.DISCARD, input)

    @property
    def is_failure(self) -> bool:
        return self.status is TestStatus.FAIL


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Outcome of a full property run.

    Attributes:
        status: Terminal run state
        successful_tests: Trials that passed before the run stopped
        discarded: Trials rejected by a precondition
        attempts: Total trials issued (passed + discarded + at most one failure)
        counterexample: Rendered input of the shrunk counterexample (FAILED only)
        original_input: Rendered input of the un-shrunk failing trial (FAILED only)
        shrink_steps: Number of successful shrink steps taken (FAILED only)
        seed: Seed of the first failing trial (FAILED only)
        size: Size of the first failing trial (FAILED only)
        error: Exception raised by the predicate on the counterexample, if any
    """

    status: RunStatus
    successful_tests: int
    discarded: int = 0
    attempts: int = 0
    counterexample: str | None = None
    original_input: str | None = None
    shrink_steps: int = 0
    seed: int | None = None
    size: int | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is RunStatus.SUCCEEDED

    def describe(self) -> str:
        """One-line human summary of the run."""
        match self.status:
            case RunStatus.SUCCEEDED:
                return f"OK, passed {self.successful_tests} tests"
            case RunStatus.GAVE_UP:
                return (
                    f"Gave up after {self.successful_tests} tests "
                    f"({self.discarded} discarded of {self.attempts} attempts)"
                )
            case RunStatus.NO_EXPECTED_FAILURE:
                return f"Expected failure, but passed {self.successful_tests} tests"
            case RunStatus.FAILED:
                text = (
                    f"Failed after {self.successful_tests} tests and {self.shrink_steps} shrinks: "
                    f"{self.counterexample} (seed={self.seed}, size={self.size})"
                )
                if self.error is not None:
                    text += f" raised {self.error}"
                return text
            case _:
                return f"Run still {self.status}"
