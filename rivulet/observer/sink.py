"""
Rivulet Sink - Per-Subscription State of an Operator
====================================================

Every operator subscription creates one `Sink`. The sink:

- forwards events to the downstream observer
- owns every upstream subscription the operator opens (one per source, or
  one per inner sequence for the flattening operators)
- serializes the callbacks of all its upstream subscriptions with one lock,
  so operator-local state is only touched by one delivery at a time
- is the disposable returned downstream; disposing it releases every owned
  upstream subscription exactly once

Ownership only points upstream. A sink learns that downstream went away by
asking `observer.is_disposed`, which is how a synchronous producer two or
three operators upstream notices that `take` has already finished.
"""

import threading
from typing import Any, Callable, Generic, Optional, TypeVar

from ..disposable import CompositeDisposable, SingleAssignmentDisposable
from .observer import ObserverBase

T = TypeVar("T")


class Sink(Generic[T]):
    """Operator state bound to one downstream observer."""

    def __init__(self, observer: Any) -> None:
        self.observer = observer
        self.disposables = CompositeDisposable()
        self.lock = threading.RLock()
        self._is_disposed = False

    @property
    def is_disposed(self) -> bool:
        return self._is_disposed or getattr(self.observer, "is_disposed", False)

    def forward_next(self, value: T) -> None:
        if not self._is_disposed:
            self.observer.on_next(value)

    def forward_error(self, error: BaseException) -> None:
        if self._is_disposed:
            return
        try:
            self.observer.on_error(error)
        finally:
            self.dispose()

    def forward_completed(self) -> None:
        if self._is_disposed:
            return
        try:
            self.observer.on_completed()
        finally:
            self.dispose()

    def observe(
        self,
        source: Any,
        on_next: Optional[Callable[[Any], None]] = None,
        on_error: Optional[Callable[[BaseException], None]] = None,
        on_completed: Optional[Callable[[], None]] = None,
        *,
        holder: Optional[Any] = None,
    ) -> Any:
        """
        Subscribe to `source` on behalf of this sink.

        Callbacks default to forwarding downstream. The upstream
        subscription is stored in `holder`, a single-assignment or serial
        disposable supplied by the caller; without one, a fresh
        single-assignment disposable is created and owned by the sink.

        Returns:
            The holder, so the caller can release this one subscription early
        """
        if holder is None:
            holder = SingleAssignmentDisposable()
            self.disposables.add(holder)

        observer = SinkObserver(
            self,
            holder,
            on_next or self.forward_next,
            on_error or self.forward_error,
            on_completed or self.forward_completed,
        )
        holder.disposable = source.subscribe(observer)
        return holder

    def dispose(self) -> None:
        if self._is_disposed:
            return
        self._is_disposed = True
        self.disposables.dispose()


class SinkObserver(ObserverBase[T]):
    """Upstream-facing observer of a sink; runs its callbacks under the sink lock."""

    def __init__(
        self,
        sink: Sink,
        holder: Any,
        on_next: Callable[[T], None],
        on_error: Callable[[BaseException], None],
        on_completed: Callable[[], None],
    ) -> None:
        super().__init__()
        self._sink = sink
        self._holder = holder
        self._next = on_next
        self._error = on_error
        self._completed = on_completed

    @property
    def is_disposed(self) -> bool:
        return (
            self._is_stopped
            or getattr(self._holder, "is_disposed", False)
            or self._sink.is_disposed
        )

    def _on_next_core(self, value: T) -> None:
        with self._sink.lock:
            self._next(value)

    def _on_error_core(self, error: BaseException) -> None:
        with self._sink.lock:
            self._error(error)

    def _on_completed_core(self) -> None:
        with self._sink.lock:
            self._completed()
