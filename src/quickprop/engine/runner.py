# src/quickprop/engine/runner.py
"""Runner: the adaptive trial loop and shrink search.

The runner issues trials until one of:
- ``tests`` trials have passed                      -> SUCCEEDED
- a trial fails                                     -> shrink, then FAILED
- ``tests * max_discard_ratio`` attempts are used   -> GAVE_UP
- the optional ``should_stop`` callback returns True -> GAVE_UP (partial)

Each trial gets a fresh 64-bit seed from a non-reproducible source and a
``random.Random`` seeded with it. The seed and the scheduled size are
reported with any failure; ``Runner.replay(prop, seed, size)`` regenerates
that exact trial.

Trials are strictly sequential: each trial's size depends on how many
trials passed and how many were discarded before it.

Usage:
    result = quicktest(prop)
    if not result.succeeded:
        print(result.describe())

    quickcheck(prop)  # raises PropertyFailedError unless the run succeeds
"""

from __future__ import annotations

import random
from collections.abc import Callable
from typing import Any

from quickprop.contracts.enums import RunStatus, TestStatus
from quickprop.contracts.errors import PropertyFailedError
from quickprop.contracts.results import CheckResult, TestResult
from quickprop.core.config import CheckSettings
from quickprop.core.events import EventBusProtocol, NullEventBus
from quickprop.core.logging import get_logger, log_context
from quickprop.engine.events import RunFinished, ShrinkStepTaken, TrialCompleted
from quickprop.engine.generate import GenerateContext
from quickprop.engine.property import Property, as_property
from quickprop.engine.rose import Rose
from quickprop.engine.schedule import size_for

logger = get_logger(__name__)

SEED_BITS = 64


class Runner:
    """Runs properties against a configuration.

    Example:
        runner = Runner(CheckSettings(tests=500))
        result = runner.run(prop)
    """

    def __init__(
        self,
        settings: CheckSettings | None = None,
        *,
        seed_source: random.Random | None = None,
        event_bus: EventBusProtocol | None = None,
        should_stop: Callable[[], bool] | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            settings: Run configuration (defaults: 100 tests, ratio 10, size 100).
            seed_source: Where trial seeds come from (default: random.SystemRandom).
                Pass a seeded random.Random to make a whole run reproducible.
            event_bus: Receives TrialCompleted, ShrinkStepTaken and RunFinished.
            should_stop: Polled before every trial; True ends the run as GAVE_UP.
        """
        self._settings = settings if settings is not None else CheckSettings()
        self._seed_source = seed_source if seed_source is not None else random.SystemRandom()
        self._event_bus: EventBusProtocol = event_bus if event_bus is not None else NullEventBus()
        self._should_stop = should_stop
        self._status: RunStatus | None = None

    @property
    def settings(self) -> CheckSettings:
        return self._settings

    @property
    def status(self) -> RunStatus | None:
        """State of the current or most recent run; None before the first run."""
        return self._status

    def run(self, testable: Any) -> CheckResult:
        """Run a property to a terminal state.

        Never raises for property outcomes: failures, give-ups and missing
        expected failures are all reported in the returned CheckResult.
        """
        prop = as_property(testable)
        self._status = RunStatus.RUNNING
        with log_context(property=prop.name):
            return self._run(prop)

    def _run(self, prop: Property) -> CheckResult:
        tests = self._settings.tests
        max_size = self._settings.max_size
        max_attempts = self._settings.max_attempts

        successful = 0
        discarded = 0
        discard_streak = 0
        attempts = 0

        while attempts < max_attempts:
            if successful >= tests:
                break
            if self._should_stop is not None and self._should_stop():
                logger.info("run_cancelled", successful_tests=successful, attempts=attempts)
                return self._finish(
                    CheckResult(RunStatus.GAVE_UP, successful, discarded=discarded, attempts=attempts)
                )

            seed = self._seed_source.getrandbits(SEED_BITS)
            size = size_for(successful, discard_streak, tests, max_size)
            tree = self.trial_tree(prop, seed, size)
            root = tree.value
            self._event_bus.emit(TrialCompleted(attempts, seed, size, root.status, root.input))
            attempts += 1

            match root.status:
                case TestStatus.PASS:
                    successful += 1
                    discard_streak = 0
                case TestStatus.DISCARD:
                    discarded += 1
                    discard_streak += 1
                case TestStatus.FAIL:
                    if prop.expected_failure:
                        logger.info("expected_failure_observed", input=root.input, seed=seed, size=size)
                        return self._finish(
                            CheckResult(
                                RunStatus.SUCCEEDED, successful, discarded=discarded, attempts=attempts
                            )
                        )
                    return self._finish(self._failure(tree, successful, discarded, attempts, seed, size))

        if successful >= tests:
            status = RunStatus.NO_EXPECTED_FAILURE if prop.expected_failure else RunStatus.SUCCEEDED
        else:
            status = RunStatus.GAVE_UP
        return self._finish(CheckResult(status, successful, discarded=discarded, attempts=attempts))

    def _failure(
        self,
        tree: Rose[TestResult],
        successful: int,
        discarded: int,
        attempts: int,
        seed: int,
        size: int,
    ) -> CheckResult:
        logger.info("trial_failed", input=tree.value.input, seed=seed, size=size, successful_tests=successful)
        minimal, steps = self.shrink_search(tree)
        return CheckResult(
            RunStatus.FAILED,
            successful,
            discarded=discarded,
            attempts=attempts,
            counterexample=minimal.input,
            original_input=tree.value.input,
            shrink_steps=steps,
            seed=seed,
            size=size,
            error=minimal.error,
        )

    def shrink_search(self, tree: Rose[TestResult]) -> tuple[TestResult, int]:
        """Walk from a failing root to a failing node with no failing child.

        At each node the children are evaluated in order and the search
        descends into the first failing one. Iterative, so deep shrink
        chains do not grow the call stack.

        Returns:
            The locally minimal failing verdict and the number of steps taken.
        """
        current = tree
        steps = 0
        while True:
            for child in current.children():
                if child.value.is_failure:
                    current = child
                    steps += 1
                    logger.debug("shrink_step", step=steps, input=child.value.input)
                    self._event_bus.emit(ShrinkStepTaken(steps, child.value.input))
                    break
            else:
                return current.value, steps

    @staticmethod
    def trial_tree(prop: Property, seed: int, size: int) -> Rose[TestResult]:
        """Verdict tree of the trial identified by ``seed`` and ``size``."""
        ctx = GenerateContext(random.Random(seed), size)
        return prop.test(ctx)

    def replay(self, testable: Any, seed: int, size: int) -> TestResult:
        """Re-run exactly one reported trial and return its root verdict."""
        return self.trial_tree(as_property(testable), seed, size).value

    def _finish(self, result: CheckResult) -> CheckResult:
        self._status = result.status
        logger.info(
            "run_completed",
            status=str(result.status),
            successful_tests=result.successful_tests,
            discarded=result.discarded,
            attempts=result.attempts,
            shrink_steps=result.shrink_steps,
        )
        self._event_bus.emit(RunFinished(result))
        return result


def quicktest(testable: Any, settings: CheckSettings | None = None, **runner_options: Any) -> CheckResult:
    """Run a property with a fresh Runner and return its CheckResult."""
    return Runner(settings, **runner_options).run(testable)


def quickcheck(testable: Any, settings: CheckSettings | None = None, **runner_options: Any) -> CheckResult:
    """Run a property and raise unless it succeeds.

    Raises:
        PropertyFailedError: On FAILED, GAVE_UP or NO_EXPECTED_FAILURE.
    """
    result = quicktest(testable, settings, **runner_options)
    if not result.succeeded:
        raise PropertyFailedError(result)
    logger.info("property_passed", successful_tests=result.successful_tests)
    return result
