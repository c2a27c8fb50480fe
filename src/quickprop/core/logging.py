# src/quickprop/core/logging.py
"""Structured logging for quickprop.

The engine logs through structlog (``get_logger(__name__)``). Nothing in the
engine requires logging to be configured; without configure_logging()
structlog falls back to its defaults.

configure_logging() routes structlog *and* stdlib logging through one
ProcessorFormatter, so a predicate under test that logs with
``logging.getLogger(__name__)`` comes out in the same format (console or
JSON) as the runner's own events. Logs go to stderr by default, leaving
stdout to reports.

During a run the runner binds the property's name with log_context(), so
every record emitted while a predicate runs, including stdlib records from
the code under test, carries a ``property`` field.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TextIO

import structlog
from structlog.stdlib import ProcessorFormatter

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _remove_internal_fields(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Drop ProcessorFormatter bookkeeping (always present) from the output."""
    del event_dict["_record"]
    del event_dict["_from_structlog"]
    return event_dict


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
    stream: TextIO | None = None,
) -> None:
    """Configure structlog and stdlib logging.

    Safe to call repeatedly; each call replaces the root handler.

    Args:
        json_output: One JSON object per line instead of console output.
        level: DEBUG shows every shrink step; INFO shows run summaries.
        stream: Where records go (default: sys.stderr at call time).

    Raises:
        ValueError: If ``level`` is not a standard level name.
    """
    level_name = level.upper()
    if level_name not in _LEVELS:
        raise ValueError(f"Unknown log level {level!r}; expected one of {', '.join(_LEVELS)}")
    stream = stream if stream is not None else sys.stderr

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        final_processors: list[Any] = [
            _remove_internal_fields,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        final_processors = [
            _remove_internal_fields,
            structlog.dev.ConsoleRenderer(colors=stream.isatty()),
        ]

    structlog.configure(
        processors=[*shared_processors, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Cached loggers would survive reconfiguration in tests.
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        ProcessorFormatter(
            processors=final_processors,
            foreign_pre_chain=shared_processors,
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(getattr(logging, level_name))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Bound structlog logger for a module (pass ``__name__``)."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger


@contextmanager
def log_context(**values: Any) -> Iterator[None]:
    """Attach ``values`` to every record logged inside the block.

    Nested blocks add to (and on exit restore) the outer context.
    """
    with structlog.contextvars.bound_contextvars(**values):
        yield
