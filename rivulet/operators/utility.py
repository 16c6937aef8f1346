"""
Rivulet Utility Operators - Events as Values and Side Effects
=============================================================

- `materialize` / `dematerialize` - convert between a sequence and a
  sequence of `Event` objects
- `do` - run side effects around every event without changing the stream
- `debug` - log every event and lifecycle step of a subscription
"""

import logging
from datetime import datetime
from typing import Callable, Optional, TypeVar

from ..config import get_config
from ..disposable import Disposable
from ..event import Completed, Error, Event, Next
from ..observable.observable import Observable
from ..observer import Sink

T = TypeVar("T")

logger = logging.getLogger(__name__)

_TRIM_LENGTH = 40


def materialize(source: Observable[T]) -> Observable[Event[T]]:
    """
    Emit every event of `source` as an `Event` element.

    A source error becomes an `Error` element; the result then completes
    normally, so errors can be handled as data.

    Example:
        ```python
        of(1).materialize().subscribe(print)
        # next(1)
        # completed
        ```
    """

    def produce(observer):
        sink = Sink(observer)

        def on_error(error):
            sink.forward_next(Error(error))
            sink.forward_completed()

        def on_completed():
            sink.forward_next(Completed())
            sink.forward_completed()

        sink.observe(source, lambda value: sink.forward_next(Next(value)), on_error, on_completed)
        return sink

    return Observable(produce)


def dematerialize(source: Observable[Event[T]]) -> Observable[T]:
    """Turn a sequence of `Event` elements back into the events themselves."""

    def produce(observer):
        sink = Sink(observer)

        def on_next(event):
            if isinstance(event, Next):
                sink.forward_next(event.value)
            elif isinstance(event, Error):
                sink.forward_error(event.exception)
            elif isinstance(event, Completed):
                sink.forward_completed()
            else:
                sink.forward_error(
                    TypeError(f"dematerialize expects Event elements, got {event!r}")
                )

        sink.observe(source, on_next)
        return sink

    return Observable(produce)


def do(
    source: Observable[T],
    on_next: Optional[Callable[[T], None]] = None,
    after_next: Optional[Callable[[T], None]] = None,
    on_error: Optional[Callable[[BaseException], None]] = None,
    after_error: Optional[Callable[[BaseException], None]] = None,
    on_completed: Optional[Callable[[], None]] = None,
    after_completed: Optional[Callable[[], None]] = None,
    on_subscribe: Optional[Callable[[], None]] = None,
    on_subscribed: Optional[Callable[[], None]] = None,
    on_dispose: Optional[Callable[[], None]] = None,
) -> Observable[T]:
    """
    Invoke side effects around the events of `source`.

    `on_*` callbacks run before the event is forwarded, `after_*` callbacks
    after it. An exception raised by `on_next`, `on_error` or
    `on_completed` becomes the Error event of the result. `on_subscribe`
    runs before subscribing upstream, `on_subscribed` right after, and
    `on_dispose` once when the subscription is released for any reason.
    """

    def produce(observer):
        sink = Sink(observer)
        if on_dispose is not None:
            sink.disposables.add(Disposable(on_dispose))

        def handle_next(value):
            try:
                if on_next is not None:
                    on_next(value)
            except Exception as e:
                sink.forward_error(e)
                return
            sink.forward_next(value)
            if after_next is not None:
                after_next(value)

        def handle_error(error):
            if on_error is not None:
                try:
                    on_error(error)
                except Exception as e:
                    error = e
            sink.forward_error(error)
            if after_error is not None:
                after_error(error)

        def handle_completed():
            if on_completed is not None:
                try:
                    on_completed()
                except Exception as e:
                    sink.forward_error(e)
                    return
            sink.forward_completed()
            if after_completed is not None:
                after_completed()

        if on_subscribe is not None:
            on_subscribe()
        sink.observe(source, handle_next, handle_error, handle_completed)
        if on_subscribed is not None:
            on_subscribed()
        return sink

    return Observable(produce)


def _trimmed(text: str) -> str:
    if not get_config().debug_trim_output or len(text) <= _TRIM_LENGTH:
        return text
    half = _TRIM_LENGTH // 2
    return f"{text[:half]}...{text[-half:]}"


def debug(source: Observable[T], identifier: Optional[str] = None) -> Observable[T]:
    """
    Log subscription, every event and disposal of `source`.

    Lines look like `2026-01-01 10:00:00.000: scores -> Event next(80)` and
    are logged at the configured `debug_log_level`, optionally trimmed when
    `debug_trim_output` is set.
    """
    name = identifier or f"{type(source).__name__}@{id(source):x}"

    def log(message: str) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        logger.log(get_config().debug_log_level, "%s: %s -> %s", timestamp, name, _trimmed(message))

    def produce(observer):
        sink = Sink(observer)
        log("subscribed")
        sink.disposables.add(Disposable(lambda: log("isDisposed")))

        def on_next(value):
            log(f"Event {Next(value)}")
            sink.forward_next(value)

        def on_error(error):
            log(f"Event {Error(error)}")
            sink.forward_error(error)

        def on_completed():
            log(f"Event {Completed()}")
            sink.forward_completed()

        sink.observe(source, on_next, on_error, on_completed)
        return sink

    return Observable(produce)

