"""Observers and operator sinks."""

from .observer import (
    AnonymousObserver,
    AutoDetachObserver,
    EventObserver,
    ObserverBase,
    noop,
)
from .sink import Sink, SinkObserver

__all__ = [
    "AnonymousObserver",
    "AutoDetachObserver",
    "EventObserver",
    "ObserverBase",
    "Sink",
    "SinkObserver",
    "noop",
]
