# src/quickprop/engine/schedule.py
"""Adaptive size schedule.

Size ramps linearly from 0 toward ``max_size`` as passing trials approach
the target, so early trials probe small inputs and later ones large inputs.
A streak of discards adds ``discards // 10`` on top: when a precondition
rejects small inputs, bigger ones eventually get tried.

Rounding is floor division throughout. The result is always within
``[0, max_size]`` and never decreases as ``successful`` grows with the
discard streak held fixed.
"""

from __future__ import annotations


def size_for(successful: int, discards: int, tests: int, max_size: int) -> int:
    """Size for the next trial.

    Args:
        successful: Passing trials so far
        discards: Current streak of consecutive discards
        tests: Target number of passing trials (> 0)
        max_size: Upper bound (>= 0)

    Returns:
        Size in ``[0, max_size]``.
    """
    if tests <= 0:
        raise ValueError(f"tests must be > 0, got {tests}")
    ramp = successful * max_size // tests
    return max(0, min(max_size, ramp + discards // 10))
