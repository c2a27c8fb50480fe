# src/quickprop/core/config.py
"""Run configuration.

CheckSettings is the single configuration surface of the runner. It is
validated and frozen at construction; derive variants with
``settings.model_copy(update={...})`` or ``CheckSettings.with_overrides``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class CheckSettings(BaseModel):
    """Runner configuration.

    The runner issues at most ``tests * max_discard_ratio`` trials.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    tests: int = Field(
        default=100,
        gt=0,
        description="Number of passing trials required for success",
    )
    max_discard_ratio: int = Field(
        default=10,
        gt=0,
        description="Maximum attempts per required passing trial",
    )
    max_size: int = Field(
        default=100,
        ge=0,
        description="Upper bound of the size schedule",
    )

    @property
    def max_attempts(self) -> int:
        """Total trial budget for one run."""
        return self.tests * self.max_discard_ratio

    def with_overrides(self, **overrides: Any) -> CheckSettings:
        """Return validated settings with ``None`` overrides ignored.

        Convenient for layering optional CLI flags over defaults.
        """
        update = {key: value for key, value in overrides.items() if value is not None}
        return CheckSettings.model_validate({**self.model_dump(), **update})
