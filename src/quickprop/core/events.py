# src/quickprop/core/events.py
"""Event bus for run observability.

The runner reports progress as events (one per trial, one per shrink step,
one per finished run) instead of writing to global state. Anything that
wants to watch a run subscribes to the event types it cares about: the CLI,
a progress display, or a test collecting verdicts.

Dispatch is by exact event type and fully synchronous: a handler runs inside
the runner's loop, before the next trial starts.
"""

from collections import defaultdict
from collections.abc import Callable
from typing import Any, Protocol


class EventBusProtocol(Protocol):
    """What the runner needs from an event bus.

    EventBus and NullEventBus both satisfy it structurally.
    """

    def subscribe[E](self, event_type: type[E], handler: Callable[[E], None]) -> None: ...

    def emit(self, event: object) -> None: ...


class EventBus:
    """Synchronous event bus.

    Handler exceptions propagate out of ``emit`` and therefore out of the
    run: handlers are our code, not the property under test.

    Example:
        bus = EventBus()
        bus.subscribe(TrialCompleted, lambda e: print(e.status, e.input))
        quicktest(prop, event_bus=bus)
    """

    def __init__(self) -> None:
        self._handlers: defaultdict[type, list[Callable[[Any], None]]] = defaultdict(list)

    def subscribe[E](self, event_type: type[E], handler: Callable[[E], None]) -> None:
        """Call ``handler`` for every emitted event whose type is exactly ``event_type``."""
        self._handlers[event_type].append(handler)

    def unsubscribe[E](self, event_type: type[E], handler: Callable[[E], None]) -> None:
        """Remove one subscription of ``handler``.

        Raises:
            ValueError: If ``handler`` is not subscribed to ``event_type``.
        """
        handlers = self._handlers.get(event_type, [])
        if handler not in handlers:
            raise ValueError(f"{handler!r} is not subscribed to {event_type.__name__}")
        handlers.remove(handler)

    def emit(self, event: object) -> None:
        """Deliver ``event`` to its subscribers in subscription order.

        Events nobody subscribed to are dropped.
        """
        for handler in tuple(self._handlers.get(type(event), ())):
            handler(event)


class NullEventBus:
    """Event bus that drops everything; the runner default.

    Deliberately not an EventBus subclass: subscribing here never results in
    a callback, and an isinstance check should not suggest otherwise.
    """

    def subscribe[E](self, event_type: type[E], handler: Callable[[E], None]) -> None:
        pass

    def emit(self, event: object) -> None:
        pass
