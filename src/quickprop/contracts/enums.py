# src/quickprop/contracts/enums.py
"""Status codes shared between the property binding, the runner and reports."""

from enum import StrEnum


class TestStatus(StrEnum):
    """Verdict of evaluating a predicate on one input.

    Values:
        PASS: Predicate held for the input
        FAIL: Predicate returned false or raised
        DISCARD: Precondition rejected the input; not counted as pass or fail
    """

    __test__ = False

    PASS = "pass"
    FAIL = "fail"
    DISCARD = "discard"


class RunStatus(StrEnum):
    """State of a property run.

    RUNNING is reported by Runner.status while trials are being issued.
    Every finished run ends in exactly one of the other four states.
    """

    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    GAVE_UP = "gave_up"
    NO_EXPECTED_FAILURE = "no_expected_failure"
