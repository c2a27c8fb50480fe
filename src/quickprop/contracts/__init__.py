# src/quickprop/contracts/__init__.py
"""Shared contracts for cross-boundary data types.

This package is a LEAF MODULE with no outbound dependencies to core/engine.

Import patterns:
    from quickprop.contracts import TestStatus, TestResult, CheckResult
"""

from quickprop.contracts.enums import RunStatus, TestStatus
from quickprop.contracts.errors import (
    PropertyFailedError,
    PropertyLoadError,
    QuickpropError,
    UnsupportedTypeError,
)
from quickprop.contracts.outcome import Err, Ok, Outcome
from quickprop.contracts.results import CheckResult, TestResult

__all__ = [
    "CheckResult",
    "Err",
    "Ok",
    "Outcome",
    "PropertyFailedError",
    "PropertyLoadError",
    "QuickpropError",
    "RunStatus",
    "TestResult",
    "TestStatus",
    "UnsupportedTypeError",
]
