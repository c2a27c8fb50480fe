# src/quickprop/__init__.py
"""
quickprop: Property-based testing with lazy shrink trees.

State a property as a predicate over generated inputs; quickprop searches
for a counterexample and shrinks it to a small, reproducible failing case.
"""

__version__ = "0.1.0"

from quickprop.contracts import (
    CheckResult,
    Err,
    Ok,
    PropertyFailedError,
    RunStatus,
    TestResult,
    TestStatus,
)
from quickprop.core import CheckSettings
from quickprop.engine import (
    GenerateContext,
    Property,
    Rose,
    Runner,
    for_all,
    quickcheck,
    quicktest,
)

__all__ = [
    "CheckResult",
    "CheckSettings",
    "Err",
    "GenerateContext",
    "Ok",
    "Property",
    "PropertyFailedError",
    "Rose",
    "RunStatus",
    "Runner",
    "TestResult",
    "TestStatus",
    "__version__",
    "for_all",
    "quickcheck",
    "quicktest",
]
