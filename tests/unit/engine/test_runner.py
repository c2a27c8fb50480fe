# tests/unit/engine/test_runner.py
"""Unit tests for the adaptive runner and shrink search."""

from __future__ import annotations

import random

import pytest

from quickprop.contracts.enums import RunStatus, TestStatus
from quickprop.contracts.errors import PropertyFailedError
from quickprop.contracts.results import TestResult
from quickprop.core.config import CheckSettings
from quickprop.engine.events import RunFinished, ShrinkStepTaken, TrialCompleted
from quickprop.engine.generate import IntegerGenerator
from quickprop.engine.property import for_all
from quickprop.engine.runner import Runner, quickcheck, quicktest


def _runner(seed: int = 1, **kwargs) -> Runner:
    return Runner(kwargs.pop("settings", None), seed_source=random.Random(seed), **kwargs)


# =============================================================================
# Terminal states
# =============================================================================


class TestTerminalStates:
    """Each way a run can end."""

    def test_passing_property_succeeds(self) -> None:
        """A property that always holds succeeds after the configured tests."""
        result = _runner().run(for_all(int).property(lambda x: x == x))
        assert result.status is RunStatus.SUCCEEDED
        assert result.successful_tests == 100
        assert result.attempts == 100
        assert result.discarded == 0
        assert result.counterexample is None

    def test_failing_property_fails_on_first_trial(self) -> None:
        """A property that never holds fails at size 0 with nothing to shrink."""
        result = _runner().run(for_all(int).property(lambda x: False))
        assert result.status is RunStatus.FAILED
        assert result.successful_tests == 0
        assert result.attempts == 1
        # The first trial runs at size 0, so the input is already minimal.
        assert result.size == 0
        assert result.counterexample == "(0)"
        assert result.original_input == "(0)"
        assert result.shrink_steps == 0

    def test_always_discarding_gives_up(self) -> None:
        """Discarding every input exhausts the attempt budget."""
        prop = for_all(int).when(lambda x: False).property(lambda x: True)
        result = _runner().run(prop)
        assert result.status is RunStatus.GAVE_UP
        assert result.successful_tests == 0
        assert result.discarded == 1000
        assert result.attempts == 1000

    def test_attempt_budget_follows_settings(self) -> None:
        """The attempt budget is tests times max_discard_ratio."""
        prop = for_all(int).when(lambda x: False).property(lambda x: True)
        result = _runner(settings=CheckSettings(tests=5, max_discard_ratio=2)).run(prop)
        assert result.attempts == 10

    def test_expected_failure_observed(self) -> None:
        """A failure of an expected-failure property is a success."""
        prop = for_all(int).property(lambda x: x == 0).expect_failure()
        result = _runner().run(prop)
        assert result.status is RunStatus.SUCCEEDED
        assert result.counterexample is None
        assert result.shrink_steps == 0

    def test_expected_failure_never_seen(self) -> None:
        """An expected failure that never happens is reported."""
        prop = for_all(int).property(lambda x: True).expect_failure()
        result = _runner().run(prop)
        assert result.status is RunStatus.NO_EXPECTED_FAILURE
        assert result.successful_tests == 100

    def test_exception_reported_as_failure(self) -> None:
        """A raising predicate fails the run and keeps the error."""
        result = _runner().run(for_all(list[int]).property(lambda xs: xs[0] is not None))
        assert result.status is RunStatus.FAILED
        assert result.counterexample == "([])"
        assert result.error == "IndexError: list index out of range"

    def test_plain_function_is_testable(self) -> None:
        """Annotated functions run directly."""
        def prop_double(x: int) -> bool:
            return x * 2 == x + x

        assert _runner().run(prop_double).status is RunStatus.SUCCEEDED

    def test_constant_test_result_is_testable(self) -> None:
        """A TestResult runs as a constant property."""
        assert _runner().run(TestResult.failed()).status is RunStatus.FAILED
        assert _runner().run(TestResult.passed()).status is RunStatus.SUCCEEDED

    def test_should_stop_cancels(self) -> None:
        """should_stop ends the run as GAVE_UP with partial counts."""
        polls: list[None] = []

        def should_stop() -> bool:
            polls.append(None)
            return len(polls) > 3

        result = _runner(should_stop=should_stop).run(for_all(int).property(lambda x: True))
        assert result.status is RunStatus.GAVE_UP
        assert result.successful_tests == 3
        assert result.attempts == 3


# =============================================================================
# Shrink search
# =============================================================================


class TestShrinkSearch:
    """Greedy descent into the first failing child."""

    def test_positive_threshold(self) -> None:
        """Shrinking x < 10 from 100 stops at 10."""
        tree = for_all(int).property(lambda x: x < 10).verdict_tree((100,))
        minimal, steps = _runner().shrink_search(tree)
        assert minimal.input == "(10)"
        assert steps == 5

    def test_negative_threshold(self) -> None:
        """Shrinking x > -10 from -100 stops at -10."""
        tree = for_all(int).property(lambda x: x > -10).verdict_tree((-100,))
        minimal, steps = _runner().shrink_search(tree)
        assert minimal.input == "(-10)"
        assert steps == 5

    def test_result_is_locally_minimal(self) -> None:
        """The result fails while none of its candidates do."""
        prop = for_all(list[int]).property(lambda xs: sum(xs) < 10)
        tree = prop.verdict_tree(([3, 4, 5, 6],))
        minimal, _ = _runner().shrink_search(tree)
        assert minimal.status is TestStatus.FAIL
        assert minimal.input == "([5, 6])"

    def test_deep_chain_does_not_recurse(self) -> None:
        """Thousands of shrink steps do not hit the recursion limit."""
        prop = for_all(IntegerGenerator()).shrink_with(_DecrementShrinker()).property(lambda x: x < 0)
        minimal, steps = _runner().shrink_search(prop.verdict_tree((5000,)))
        assert minimal.input == "(0)"
        assert steps == 5000


class _DecrementShrinker:
    def shrink(self, value: int):
        if value > 0:
            yield value - 1


# =============================================================================
# Reproducibility
# =============================================================================


class TestReproducibility:
    """Seeds, sizes and replay."""

    def test_replay_regenerates_original_input(self) -> None:
        """Replaying the reported seed and size regenerates the failure."""
        prop = for_all(list[int]).property(lambda xs: len(xs) < 3)
        result = _runner(seed=7).run(prop)
        assert result.status is RunStatus.FAILED
        replayed = Runner().replay(prop, result.seed, result.size)
        assert replayed.status is TestStatus.FAIL
        assert replayed.input == result.original_input

    def test_seed_source_makes_run_deterministic(self) -> None:
        """An injected seed source makes whole runs repeatable."""
        prop = for_all(list[int]).property(lambda xs: sum(xs) < 30)
        first = _runner(seed=42).run(prop)
        second = _runner(seed=42).run(prop)
        assert first == second

    def test_trial_tree_is_pure_in_seed_and_size(self) -> None:
        """The same seed and size give the same trial."""
        prop = for_all(list[int], str).property(lambda xs, s: True)
        first = Runner.trial_tree(prop, 123, 40).value
        second = Runner.trial_tree(prop, 123, 40).value
        assert first == second


# =============================================================================
# Size schedule and events
# =============================================================================


class TestEvents:
    """The runner reports progress on its event bus."""

    def test_sizes_ramp_linearly(self, event_bus, recorded_events) -> None:
        """Each trial reports its index and a linearly growing size."""
        settings = CheckSettings(tests=10, max_size=100)
        _runner(settings=settings, event_bus=event_bus).run(for_all(int).property(lambda x: True))
        trials = recorded_events[TrialCompleted]
        assert [t.size for t in trials] == [0, 10, 20, 30, 40, 50, 60, 70, 80, 90]
        assert [t.index for t in trials] == list(range(10))
        assert all(t.status is TestStatus.PASS for t in trials)

    def test_run_finished_carries_result(self, event_bus, recorded_events) -> None:
        """RunFinished carries the returned result."""
        result = _runner(event_bus=event_bus).run(for_all(int).property(lambda x: True))
        assert recorded_events[RunFinished] == [RunFinished(result)]

    def test_shrink_steps_emitted(self, event_bus, recorded_events) -> None:
        """Every accepted shrink step is reported in order."""
        prop = for_all(int).property(lambda x: abs(x) < 5).resize(lambda _: 10_000)
        result = _runner(event_bus=event_bus).run(prop)
        assert result.status is RunStatus.FAILED
        steps = recorded_events[ShrinkStepTaken]
        assert len(steps) == result.shrink_steps
        assert [s.step for s in steps] == list(range(1, result.shrink_steps + 1))
        assert not steps or steps[-1].input == result.counterexample
        assert result.counterexample in ("(5)", "(-5)")

    def test_discard_streak_pushes_size(self, event_bus, recorded_events) -> None:
        """Consecutive discards raise the size by one per ten."""
        settings = CheckSettings(tests=1, max_discard_ratio=25, max_size=100)
        prop = for_all(int).when(lambda x: False).property(lambda x: True)
        _runner(settings=settings, event_bus=event_bus).run(prop)
        sizes = [t.size for t in recorded_events[TrialCompleted]]
        assert sizes[:10] == [0] * 10
        assert sizes[10:20] == [1] * 10
        assert sizes[20:] == [2] * 5


# =============================================================================
# Entry points
# =============================================================================


class TestEntryPoints:
    """quicktest and quickcheck."""

    def test_quicktest_returns_result(self) -> None:
        """quicktest returns the CheckResult."""
        result = quicktest(for_all(int).property(lambda x: True), CheckSettings(tests=7))
        assert result.status is RunStatus.SUCCEEDED
        assert result.successful_tests == 7

    def test_quickcheck_raises_on_failure(self) -> None:
        """quickcheck raises PropertyFailedError on failure."""
        with pytest.raises(PropertyFailedError) as exc_info:
            quickcheck(for_all(int).property(lambda x: False), seed_source=random.Random(3))
        assert exc_info.value.result.status is RunStatus.FAILED
        assert isinstance(exc_info.value, AssertionError)
        assert "Failed after 0 tests" in str(exc_info.value)

    def test_quickcheck_raises_on_give_up(self) -> None:
        """quickcheck raises when the run gives up."""
        prop = for_all(int).when(lambda x: False).property(lambda x: True)
        with pytest.raises(PropertyFailedError, match="Gave up"):
            quickcheck(prop, CheckSettings(tests=2))

    def test_quickcheck_returns_on_success(self) -> None:
        """quickcheck returns the result on success."""
        result = quickcheck(for_all(int).property(lambda x: True))
        assert result.succeeded

    def test_default_settings(self) -> None:
        """Runner() uses the default CheckSettings."""
        assert Runner().settings == CheckSettings()


class TestRunnerStatus:
    """The runner reports RUNNING while trials are issued."""

    def test_status_lifecycle(self) -> None:
        """Status is None before a run, RUNNING during and terminal after."""
        observed: list[RunStatus | None] = []

        def should_stop() -> bool:
            observed.append(runner.status)
            return False

        runner = _runner(settings=CheckSettings(tests=3), should_stop=should_stop)
        assert runner.status is None
        runner.run(for_all(int).property(lambda x: True))
        assert observed == [RunStatus.RUNNING] * 3
        assert runner.status is RunStatus.SUCCEEDED
