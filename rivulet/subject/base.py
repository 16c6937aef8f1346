"""
Rivulet Subject Base - The Shared Subject State Machine
=======================================================

A subject is an observer and an observable at once: events pushed into it
are re-broadcast to every attached observer. All variants share one state
machine:

    Active --on_error/on_completed--> Terminated
    Active | Terminated --dispose--> Disposed

- Active: `on_next` updates the replay buffer and reaches every observer,
  in attachment order, before it returns. New observers get the buffer
  replayed per variant.
- Terminated: pushes are ignored; new observers get the variant's replay,
  then the terminal event.
- Disposed: the buffer and every attached observer are released without
  any event; new observers receive a single `SubjectDisposedError`.

One re-entrant lock guards the observer list, the buffer and dispatch.
Dispatch walks a snapshot of the observer list, so an observer detaching
(or attaching) during delivery does not disturb delivery to the others.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, TypeVar

from ..disposable import Disposable, dispose_quietly
from ..errors import SubjectDisposedError
from ..event import Completed, Error, Event
from ..observable.observable import Observable
from ..observer import AnonymousObserver

T = TypeVar("T")

logger = logging.getLogger(__name__)


class SubjectBase(Observable[T], ABC):
    """Observer and observable with multicast delivery; see module docs."""

    def __init__(self) -> None:
        super().__init__()
        self._lock = threading.RLock()
        self._observers: List[Any] = []
        self._terminal: Optional[Event[T]] = None
        self._is_disposed = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def is_disposed(self) -> bool:
        return self._is_disposed

    @property
    def is_stopped(self) -> bool:
        """True once a terminal event has been received."""
        return self._terminal is not None

    @property
    def has_observers(self) -> bool:
        with self._lock:
            return bool(self._observers)

    # ------------------------------------------------------------------
    # Observer side
    # ------------------------------------------------------------------

    def on_next(self, value: T) -> None:
        with self._lock:
            if self._is_disposed or self._terminal is not None:
                return
            self._record_next(value)
            self._broadcast(list(self._observers), lambda observer: observer.on_next(value))

    def on_error(self, error: BaseException) -> None:
        self._terminate(Error(error))

    def on_completed(self) -> None:
        self._terminate(Completed())

    def _terminate(self, event: Event[T]) -> None:
        with self._lock:
            if self._is_disposed or self._terminal is not None:
                return
            self._terminal = event
            observers, self._observers = self._observers, []
            self._broadcast(observers, self._deliver_terminal)

    @staticmethod
    def _broadcast(observers: List[Any], deliver: Callable[[Any], None]) -> None:
        # Every observer gets the event; the first handler failure is raised afterwards.
        failure: Optional[Exception] = None
        for observer in observers:
            try:
                deliver(observer)
            except Exception as e:
                if failure is None:
                    failure = e
        if failure is not None:
            raise failure

    def as_observer(self) -> AnonymousObserver[T]:
        """An observer feeding this subject, without the observable side."""
        return AnonymousObserver(self.on_next, self.on_error, self.on_completed)

    # ------------------------------------------------------------------
    # Observable side
    # ------------------------------------------------------------------

    def _subscribe_core(self, observer: Any) -> Any:
        with self._lock:
            if self._is_disposed:
                observer.on_error(SubjectDisposedError())
                return None
            if self._terminal is not None:
                self._replay_terminated(observer)
                self._deliver_terminal(observer)
                return None
            self._observers.append(observer)
            try:
                self._replay_active(observer)
            except Exception:
                self._detach(observer)
                raise
        return Disposable(lambda: self._detach(observer))

    def _detach(self, observer: Any) -> None:
        with self._lock:
            for index, attached in enumerate(self._observers):
                if attached is observer:
                    del self._observers[index]
                    break

    # ------------------------------------------------------------------
    # Disposal
    # ------------------------------------------------------------------

    def dispose(self) -> None:
        """Release the buffer and every attached observer without delivering events."""
        with self._lock:
            if self._is_disposed:
                return
            self._is_disposed = True
            observers, self._observers = self._observers, []
            self._clear_buffer()
        logger.debug(
            "%s disposed, releasing %d observer(s)", type(self).__name__, len(observers)
        )
        for observer in observers:
            if hasattr(observer, "dispose"):
                dispose_quietly(observer)

    def __enter__(self) -> "SubjectBase[T]":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()

    # ------------------------------------------------------------------
    # Replay policy hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def _record_next(self, value: T) -> None:
        """Update the replay buffer with a new element."""

    def _replay_active(self, observer: Any) -> None:
        """Replay to an observer attaching while Active."""

    def _replay_terminated(self, observer: Any) -> None:
        """Replay to an observer attaching after termination, before the terminal event."""

    def _deliver_terminal(self, observer: Any) -> None:
        self._terminal.accept(observer)

    def _clear_buffer(self) -> None:
        pass
