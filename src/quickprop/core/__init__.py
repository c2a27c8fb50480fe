# src/quickprop/core/__init__.py
"""Core infrastructure: configuration, logging and the event bus."""

from quickprop.core.config import CheckSettings
from quickprop.core.events import EventBus, EventBusProtocol, NullEventBus
from quickprop.core.logging import configure_logging, get_logger, log_context

__all__ = [
    "CheckSettings",
    "EventBus",
    "EventBusProtocol",
    "NullEventBus",
    "configure_logging",
    "get_logger",
    "log_context",
]
