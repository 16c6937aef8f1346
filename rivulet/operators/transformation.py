"""
Rivulet Transformation Operators - Element-Wise and Accumulating Maps
=====================================================================

- `map_`, `enumerated`, `compact_map` - one output per input (or fewer)
- `scan` - running accumulation, one emission per input
- `reduce` - single emission of the final accumulation on completion
- `to_list` - single emission of every element as a list on completion

Accumulator state is created per subscription and discarded with it.
Exceptions raised by user functions end the sequence with an Error event.
"""

from typing import Any, Callable, List, Optional, Tuple, TypeVar

from ..observable.observable import Observable
from ..observer import Sink

T = TypeVar("T")
U = TypeVar("U")
A = TypeVar("A")


def map_(source: Observable[T], mapper: Callable[[T], U]) -> Observable[U]:
    """Apply `mapper` to every element."""

    def produce(observer):
        sink = Sink(observer)

        def on_next(value):
            try:
                result = mapper(value)
            except Exception as e:
                sink.forward_error(e)
                return
            sink.forward_next(result)

        sink.observe(source, on_next)
        return sink

    return Observable(produce)


def enumerated(source: Observable[T]) -> Observable[Tuple[int, T]]:
    """Pair every element with its zero-based index."""

    def produce(observer):
        sink = Sink(observer)
        index = 0

        def on_next(value):
            nonlocal index
            current, index = index, index + 1
            sink.forward_next((current, value))

        sink.observe(source, on_next)
        return sink

    return Observable(produce)


def compact_map(
    source: Observable[T], mapper: Optional[Callable[[T], Optional[U]]] = None
) -> Observable[U]:
    """Apply `mapper` (identity by default) and drop `None` results."""
    transform = mapper or (lambda value: value)

    def produce(observer):
        sink = Sink(observer)

        def on_next(value):
            try:
                result = transform(value)
            except Exception as e:
                sink.forward_error(e)
                return
            if result is not None:
                sink.forward_next(result)

        sink.observe(source, on_next)
        return sink

    return Observable(produce)


def scan(source: Observable[T], seed: A, accumulator: Callable[[A, T], A]) -> Observable[A]:
    """
    Emit the running accumulation after every element.

    Example:
        ```python
        of(1, 3, 5, 7, 9).scan(0, lambda total, n: total + n)
        # 1, 4, 9, 16, 25
        ```
    """

    def produce(observer):
        sink = Sink(observer)
        state = seed

        def on_next(value):
            nonlocal state
            try:
                state = accumulator(state, value)
            except Exception as e:
                sink.forward_error(e)
                return
            sink.forward_next(state)

        sink.observe(source, on_next)
        return sink

    return Observable(produce)


def reduce(
    source: Observable[T],
    seed: A,
    accumulator: Callable[[A, T], A],
    result_selector: Optional[Callable[[A], Any]] = None,
) -> Observable[Any]:
    """
    Accumulate silently; on completion emit the final value, then complete.

    A source that never completes produces nothing.
    """

    def produce(observer):
        sink = Sink(observer)
        state = seed

        def on_next(value):
            nonlocal state
            try:
                state = accumulator(state, value)
            except Exception as e:
                sink.forward_error(e)

        def on_completed():
            try:
                result = state if result_selector is None else result_selector(state)
            except Exception as e:
                sink.forward_error(e)
                return
            sink.forward_next(result)
            sink.forward_completed()

        sink.observe(source, on_next, on_completed=on_completed)
        return sink

    return Observable(produce)


def to_list(source: Observable[T]) -> Observable[List[T]]:
    """Emit all elements as one list when the source completes."""

    def produce(observer):
        sink = Sink(observer)
        items: List[T] = []

        def on_completed():
            sink.forward_next(list(items))
            sink.forward_completed()

        sink.observe(source, items.append, on_completed=on_completed)
        return sink

    return Observable(produce)
