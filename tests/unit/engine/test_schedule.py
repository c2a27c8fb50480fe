# tests/unit/engine/test_schedule.py
"""Unit tests for the adaptive size schedule."""

from __future__ import annotations

import pytest

from quickprop.engine.schedule import size_for


class TestSizeFor:
    """Tests for size_for()."""

    def test_starts_at_zero(self) -> None:
        """The first trial runs at size 0."""
        assert size_for(0, 0, 100, 100) == 0

    def test_linear_ramp(self) -> None:
        """Size grows linearly with passing trials."""
        assert [size_for(n, 0, 100, 100) for n in (1, 50, 99)] == [1, 50, 99]

    def test_floor_division(self) -> None:
        """The ramp rounds down."""
        # 1 * 100 // 3 == 33
        assert size_for(1, 0, 3, 100) == 33
        assert size_for(2, 0, 3, 100) == 66

    def test_discard_streak_adds_a_tenth(self) -> None:
        """Every ten consecutive discards add one to the size."""
        assert size_for(0, 9, 100, 100) == 0
        assert size_for(0, 10, 100, 100) == 1
        assert size_for(20, 35, 100, 100) == 23

    def test_capped_at_max_size(self) -> None:
        """Size never exceeds max_size."""
        assert size_for(99, 500, 100, 100) == 100
        assert size_for(100, 0, 100, 30) == 30

    def test_max_size_zero(self) -> None:
        """max_size 0 pins every trial to size 0."""
        assert size_for(50, 1000, 100, 0) == 0

    def test_more_tests_than_size(self) -> None:
        """With more tests than sizes, each size repeats."""
        assert [size_for(n, 0, 1000, 10) for n in (0, 99, 100, 999)] == [0, 0, 1, 9]

    def test_tests_must_be_positive(self) -> None:
        """A zero test count is rejected."""
        with pytest.raises(ValueError, match="tests must be > 0"):
            size_for(0, 0, 0, 100)
