"""
Rivulet Observers - Sinks That Receive Events
=============================================

This module provides the observer side of a subscription:

- `ObserverBase` - fixed next/error/completed shape with the terminal-once rule
- `AnonymousObserver` - builds an observer from partial callbacks
- `AutoDetachObserver` - the wrapper every `subscribe` call installs; it
  drops anything after a terminal event, releases the upstream subscription
  on termination and serializes delivery for its subscription

The wrapper is also the disposable handed back to the subscriber.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Optional, TypeVar

from ..config import get_config
from ..disposable import SingleAssignmentDisposable
from ..event import Completed, Error, Event, Next
from ..resources import Resources

T = TypeVar("T")

logger = logging.getLogger(__name__)


def noop(*args: Any) -> None:
    pass


class ObserverBase(ABC, Generic[T]):
    """
    Observer with the terminal-once rule built in.

    Subclasses implement the `_on_*_core` hooks. After `on_error` or
    `on_completed` has been delivered, every further call is ignored.
    """

    def __init__(self) -> None:
        self._is_stopped = False

    @property
    def is_stopped(self) -> bool:
        return self._is_stopped

    @property
    def is_disposed(self) -> bool:
        """Whether producers feeding this observer should stop."""
        return self._is_stopped

    def on_next(self, value: T) -> None:
        if not self._is_stopped:
            self._on_next_core(value)

    def on_error(self, error: BaseException) -> None:
        if not self._is_stopped:
            self._is_stopped = True
            self._on_error_core(error)

    def on_completed(self) -> None:
        if not self._is_stopped:
            self._is_stopped = True
            self._on_completed_core()

    def on(self, event: Event[T]) -> None:
        """Deliver a raw event."""
        event.accept(self)

    def stop(self) -> None:
        """End the observer without delivering anything."""
        self._is_stopped = True

    @abstractmethod
    def _on_next_core(self, value: T) -> None:
        pass

    @abstractmethod
    def _on_error_core(self, error: BaseException) -> None:
        pass

    @abstractmethod
    def _on_completed_core(self) -> None:
        pass


class AnonymousObserver(ObserverBase[T]):
    """
    Observer assembled from optional callbacks.

    Missing `on_next` / `on_completed` handlers do nothing. A missing
    `on_error` handler hands the error to the configured
    `unhandled_error_handler` so that it is never lost.
    """

    def __init__(
        self,
        on_next: Optional[Callable[[T], None]] = None,
        on_error: Optional[Callable[[BaseException], None]] = None,
        on_completed: Optional[Callable[[], None]] = None,
    ) -> None:
        super().__init__()
        self._next = on_next or noop
        self._error = on_error
        self._completed = on_completed or noop

    def _on_next_core(self, value: T) -> None:
        self._next(value)

    def _on_error_core(self, error: BaseException) -> None:
        if self._error is None:
            get_config().unhandled_error_handler(error)
        else:
            self._error(error)

    def _on_completed_core(self) -> None:
        self._completed()


class EventObserver(ObserverBase[T]):
    """Observer that forwards every notification as an `Event` object."""

    def __init__(self, handler: Callable[[Event[T]], None]) -> None:
        super().__init__()
        self._handler = handler

    def _on_next_core(self, value: T) -> None:
        self._handler(Next(value))

    def _on_error_core(self, error: BaseException) -> None:
        self._handler(Error(error))

    def _on_completed_core(self) -> None:
        self._handler(Completed())


class AutoDetachObserver(Generic[T]):
    """
    The per-subscription wrapper installed by `Observable.subscribe`.

    - Enforces terminal-once: events after Error/Completed are dropped
    - Drops events after `dispose()` and never returns from `dispose()`
      while a delivery is running on another thread
    - Disposes the upstream subscription right after a terminal event, then
      runs the subscriber's `on_disposed` callback
    - Reports `is_disposed` so synchronous producers can stop early, which
      also becomes true when the wrapped observer says so
    """

    def __init__(
        self,
        observer: Any,
        on_disposed: Optional[Callable[[], None]] = None,
    ) -> None:
        self._observer = observer
        self._is_stopped = False
        self._on_disposed = on_disposed
        self._subscription = SingleAssignmentDisposable()
        self._lock = threading.RLock()
        self._is_disposed = False
        self._traced = Resources.increment()

    @property
    def subscription(self):
        return self._subscription.disposable

    @subscription.setter
    def subscription(self, value) -> None:
        self._subscription.disposable = value

    @property
    def is_stopped(self) -> bool:
        return self._is_stopped

    @property
    def is_disposed(self) -> bool:
        return (
            self._is_disposed
            or self._is_stopped
            or getattr(self._observer, "is_disposed", False)
        )

    def on_next(self, value: T) -> None:
        with self._lock:
            if self._is_stopped or self._is_disposed:
                return
            try:
                self._observer.on_next(value)
            except BaseException:
                self.dispose()
                raise

    def on_error(self, error: BaseException) -> None:
        with self._lock:
            if self._is_stopped or self._is_disposed:
                return
            self._is_stopped = True
            try:
                self._observer.on_error(error)
            finally:
                self.dispose()

    def on_completed(self) -> None:
        with self._lock:
            if self._is_stopped or self._is_disposed:
                return
            self._is_stopped = True
            try:
                self._observer.on_completed()
            finally:
                self.dispose()

    def fail(self, error: BaseException) -> bool:
        """Deliver `error` unless already terminated. Returns whether it was delivered."""
        with self._lock:
            if self._is_stopped or self._is_disposed:
                return False
        self.on_error(error)
        return True

    def dispose(self) -> None:
        with self._lock:
            if self._is_disposed:
                return
            self._is_disposed = True

        self._subscription.dispose()

        if self._traced:
            Resources.decrement()

        if self._on_disposed is not None:
            try:
                self._on_disposed()
            except Exception:
                logger.exception("Error in on_disposed callback")

    def disposed_by(self, bag) -> None:
        """Hand ownership of this subscription to a `DisposeBag`."""
        bag.add(self)

    def __enter__(self) -> "AutoDetachObserver[T]":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()
