# tests/unit/contracts/test_errors.py
"""Tests for the exception taxonomy."""

from __future__ import annotations

from quickprop.contracts.enums import RunStatus
from quickprop.contracts.errors import (
    PropertyFailedError,
    PropertyLoadError,
    QuickpropError,
    UnsupportedTypeError,
)
from quickprop.contracts.results import CheckResult


class TestPropertyFailedError:
    """quickcheck's failure exception."""

    def test_carries_result(self) -> None:
        """The error keeps the run result and uses its description as message."""
        result = CheckResult(RunStatus.GAVE_UP, 0, discarded=10, attempts=10)
        error = PropertyFailedError(result)
        assert error.result is result
        assert str(error) == result.describe()

    def test_is_assertion_error(self) -> None:
        """pytest reports it as an assertion failure."""
        error = PropertyFailedError(CheckResult(RunStatus.NO_EXPECTED_FAILURE, 5))
        assert isinstance(error, AssertionError)
        assert isinstance(error, QuickpropError)


class TestUnsupportedTypeError:
    """Arbitrary catalog lookup failures."""

    def test_message(self) -> None:
        """The message names the unsupported annotation."""
        error = UnsupportedTypeError(complex)
        assert str(error) == "No arbitrary generator for <class 'complex'>"
        assert error.annotation is complex

    def test_message_with_reason(self) -> None:
        """A reason is appended to the message."""
        error = UnsupportedTypeError(dict, "dict needs key and value types")
        assert str(error).endswith(": dict needs key and value types")

    def test_is_type_error(self) -> None:
        """Callers can catch it as TypeError."""
        assert isinstance(UnsupportedTypeError(complex), TypeError)


def test_load_error_is_quickprop_error() -> None:
    """PropertyLoadError belongs to the quickprop hierarchy."""
    assert issubclass(PropertyLoadError, QuickpropError)
