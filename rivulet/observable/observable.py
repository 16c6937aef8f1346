"""
Rivulet Observable - The Subscribe Contract
===========================================

An `Observable` is a stateless template for a push-based sequence. It wraps
a producer function; every call to `subscribe` runs the producer again from
scratch (cold semantics), synchronously, with a fresh `AutoDetachObserver`
that enforces the terminal-once rule.

A producer receives the observer, may emit any number of `on_next` calls
and at most one terminal call, and returns its teardown: a disposable, a
plain callable, or None when there is nothing to release.

Example:
    ```python
    from rivulet import Observable

    def produce(observer):
        observer.on_next("1")
        observer.on_completed()
        observer.on_next("?")  # dropped, the sequence already completed

    Observable.create(produce).subscribe(
        on_next=print,
        on_completed=lambda: print("Completed"),
        on_disposed=lambda: print("Disposed"),
    )
    # 1
    # Completed
    # Disposed
    ```
"""

from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

from ..disposable import Disposable
from ..observer import AnonymousObserver, AutoDetachObserver, EventObserver
from ..protocols import DisposableLike, ObserverLike
from .operations import OperatorMixin

T = TypeVar("T")

Producer = Callable[[Any], Any]


def as_disposable(teardown: Any) -> DisposableLike:
    """Normalize a producer's return value into a disposable."""
    if teardown is None:
        return Disposable()
    if isinstance(teardown, DisposableLike):
        return teardown
    if callable(teardown):
        return Disposable(teardown)
    raise TypeError(
        f"Producer must return a disposable, a callable or None, not {type(teardown).__name__}"
    )


def _is_observer(candidate: Any) -> bool:
    return not callable(candidate) and isinstance(candidate, ObserverLike)


class Observable(OperatorMixin, Generic[T]):
    """
    A push-based sequence of events.

    Subclasses that keep shared state (subjects, relays) override
    `_subscribe_core`; everything else passes a producer function.
    """

    def __init__(self, producer: Optional[Producer] = None) -> None:
        self._producer = producer

    def _subscribe_core(self, observer: AutoDetachObserver) -> Any:
        if self._producer is None:
            return None
        return self._producer(observer)

    def subscribe(
        self,
        observer: Optional[Any] = None,
        on_error: Optional[Callable[[BaseException], None]] = None,
        on_completed: Optional[Callable[[], None]] = None,
        *,
        on_next: Optional[Callable[[T], None]] = None,
        on_disposed: Optional[Callable[[], None]] = None,
    ) -> AutoDetachObserver:
        """
        Start a subscription.

        Args:
            observer: An observer object, or a callable used as `on_next`
            on_error: Error handler; without one, errors go to the configured
                      unhandled error handler
            on_completed: Completion handler
            on_next: Element handler (alternative to a positional callable)
            on_disposed: Runs once when the subscription ends, whether by
                         terminal event or by disposal

        Returns:
            The subscription, which is also a disposable
        """
        if observer is not None and _is_observer(observer):
            sink = observer
        else:
            if observer is not None:
                if on_next is not None:
                    raise TypeError("on_next given both positionally and by keyword")
                on_next = observer
            sink = AnonymousObserver(on_next, on_error, on_completed)

        auto = AutoDetachObserver(sink, on_disposed)
        try:
            teardown = self._subscribe_core(auto)
        except Exception as e:
            # Failures raised by the subscriber's own handlers have already
            # ended the subscription and surface to the caller unchanged.
            if not auto.fail(e):
                raise
            teardown = None

        auto.subscription = as_disposable(teardown)
        return auto

    def subscribe_event(self, handler: Callable[[Any], None]) -> AutoDetachObserver:
        """Subscribe with a single handler receiving `Event` objects."""
        return self.subscribe(EventObserver(handler))

    def as_observable(self) -> "Observable[T]":
        """Hide the concrete type (for example the observer side of a subject)."""
        return Observable(lambda observer: self.subscribe(observer))

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def just(cls, value: T) -> "Observable[T]":
        from .creation import just

        return just(value)

    @classmethod
    def of(cls, *values: T) -> "Observable[T]":
        from .creation import of

        return of(*values)

    @classmethod
    def from_iterable(cls, iterable: Iterable[T]) -> "Observable[T]":
        from .creation import from_iterable

        return from_iterable(iterable)

    @classmethod
    def empty(cls) -> "Observable[Any]":
        from .creation import empty

        return empty()

    @classmethod
    def never(cls) -> "Observable[Any]":
        from .creation import never

        return never()

    @classmethod
    def throw(cls, error: BaseException) -> "Observable[Any]":
        from .creation import throw

        return throw(error)

    @classmethod
    def range(cls, start: int, count: int) -> "Observable[int]":
        from .creation import range_

        return range_(start, count)

    @classmethod
    def create(cls, producer: Producer) -> "Observable[T]":
        from .creation import create

        return create(producer)

    @classmethod
    def deferred(cls, factory: Callable[[], "Observable[T]"]) -> "Observable[T]":
        from .creation import deferred

        return deferred(factory)

    @classmethod
    def interval(cls, period: float, scheduler: Any) -> "Observable[int]":
        from .creation import interval

        return interval(period, scheduler)

    @classmethod
    def timer(
        cls, duetime: float, scheduler: Any, period: Optional[float] = None
    ) -> "Observable[int]":
        from .creation import timer

        return timer(duetime, scheduler, period)
