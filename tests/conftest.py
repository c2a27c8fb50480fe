# tests/conftest.py
"""Shared test fixtures and hypothesis profiles.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/

Runner fixtures:
- seed_source: a seeded random.Random so whole runs are reproducible
- event_bus + recorded_events: an EventBus with every runner event captured
"""

from __future__ import annotations

import logging
import os
import random
from typing import Any

import pytest
import structlog
from hypothesis import Phase, Verbosity, settings

from quickprop.core.events import EventBus
from quickprop.engine.events import RunFinished, ShrinkStepTaken, TrialCompleted

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Runs of the engine under test vary in duration
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


@pytest.fixture
def seed_source() -> random.Random:
    """Deterministic source of trial seeds."""
    return random.Random(20240607)


@pytest.fixture
def recorded_events() -> dict[type, list[Any]]:
    """Storage for events captured by the event_bus fixture, keyed by type."""
    return {TrialCompleted: [], ShrinkStepTaken: [], RunFinished: []}


@pytest.fixture
def event_bus(recorded_events: dict[type, list[Any]]) -> EventBus:
    """EventBus recording every runner event into recorded_events."""
    bus = EventBus()
    for event_type, bucket in recorded_events.items():
        bus.subscribe(event_type, bucket.append)
    return bus


@pytest.fixture(autouse=True)
def _restore_logging() -> Any:
    """Undo configure_logging() calls made by a test (directly or via the CLI)."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()
