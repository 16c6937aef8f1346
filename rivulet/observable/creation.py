"""
Rivulet Creation - Factories for Observable Sequences
=====================================================

Pure factories; none of them performs I/O or starts anything before a
subscription exists.

- `just(value)`, `of(*values)`, `from_iterable(iterable)` - finite sequences
- `empty()`, `never()`, `throw(error)` - degenerate sequences
- `range_(start, count)` - consecutive integers
- `create(producer)` - arbitrary producer function
- `deferred(factory)` - build a fresh observable per subscription
- `interval(period, scheduler)`, `timer(duetime, scheduler, period)` -
  timed sequences driven by an external scheduler

The synchronous factories check `observer.is_disposed` between elements, so
an operator downstream that finishes early (`take`, `element_at`,
`take_while`, ...) stops them immediately.
"""

from typing import Any, Callable, Iterable, Optional, TypeVar

from ..disposable import SerialDisposable
from .observable import Observable

T = TypeVar("T")


def from_iterable(iterable: Iterable[T]) -> Observable[T]:
    """
    Emit every element of `iterable`, then complete.

    The iterable is re-iterated for every subscription.
    """

    def produce(observer):
        for item in iterable:
            if observer.is_disposed:
                return None
            observer.on_next(item)
        observer.on_completed()

    return Observable(produce)


def of(*values: T) -> Observable[T]:
    """
    Emit the given values in order, then complete.

    Example:
        ```python
        of(1, 2, 3).subscribe(print)      # 1, 2, 3
        of([1, 2, 3]).subscribe(print)    # [1, 2, 3]
        ```
    """
    return from_iterable(values)


def just(value: T) -> Observable[T]:
    """Emit a single value, then complete."""
    return from_iterable((value,))


def empty() -> Observable[Any]:
    """Complete immediately without elements."""

    def produce(observer):
        observer.on_completed()

    return Observable(produce)


def never() -> Observable[Any]:
    """Never emit and never terminate."""
    return Observable(lambda observer: None)


def throw(error: BaseException) -> Observable[Any]:
    """Terminate immediately with `error`."""

    def produce(observer):
        observer.on_error(error)

    return Observable(produce)


def range_(start: int, count: int) -> Observable[int]:
    """
    Emit `count` consecutive integers starting at `start`.

    Raises:
        ValueError: If count is negative
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    return from_iterable(range(start, start + count))


def create(producer: Callable[[Any], Any]) -> Observable[T]:
    """
    Build an observable from a producer function.

    The producer receives the subscription's observer and returns its
    teardown (a disposable, a callable, or None). Anything it emits after a
    terminal event is ignored; an exception it raises before terminating
    becomes the sequence's Error event.
    """
    return Observable(producer)


def deferred(factory: Callable[[], Observable[T]]) -> Observable[T]:
    """
    Call `factory` for every subscription and subscribe to what it returns.

    Example:
        ```python
        flip = False

        def choose():
            global flip
            flip = not flip
            return of(1, 2, 3) if flip else of(4, 5, 6)

        factory = deferred(choose)
        # first subscription sees 1, 2, 3; the second 4, 5, 6; and so on
        ```
    """

    def produce(observer):
        source = factory()
        return source.subscribe(observer)

    return Observable(produce)


def timer(
    duetime: float, scheduler: Any, period: Optional[float] = None
) -> Observable[int]:
    """
    Emit 0 after `duetime` seconds.

    Without `period` the sequence then completes; with one it keeps emitting
    1, 2, ... every `period` seconds until disposed.
    """
    if duetime < 0:
        raise ValueError(f"duetime must be non-negative, got {duetime}")
    if period is not None and period <= 0:
        raise ValueError(f"period must be positive, got {period}")

    def produce(observer):
        serial = SerialDisposable()
        counter = 0

        def tick() -> None:
            nonlocal counter
            value, counter = counter, counter + 1
            observer.on_next(value)

        def first() -> None:
            tick()
            if period is None:
                observer.on_completed()
            elif not serial.is_disposed:
                serial.disposable = scheduler.schedule_periodic(period, tick)

        serial.disposable = scheduler.schedule_relative(duetime, first)
        return serial

    return Observable(produce)


def interval(period: float, scheduler: Any) -> Observable[int]:
    """Emit 0, 1, 2, ... every `period` seconds until disposed."""
    if period <= 0:
        raise ValueError(f"period must be positive, got {period}")

    def produce(observer):
        counter = 0

        def tick() -> None:
            nonlocal counter
            value, counter = counter, counter + 1
            observer.on_next(value)

        return scheduler.schedule_periodic(period, tick)

    return Observable(produce)
