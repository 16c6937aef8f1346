"""
Rivulet Combining Operators - Several Sources, One Sequence
===========================================================

- `merge`, `concat` - sibling sources merged or chained
- `combine_latest` - latest value of every source, once all have one
- `zip_` - one value from every source per emission, in FIFO order
- `with_latest_from`, `sample` - a data source gated by a trigger
- `amb` - the first source to react wins, the others are released
- `start_with` - prefix a sequence with fixed values

Each operator owns exactly one subscription per source and serializes the
callbacks of all of them through its sink lock. An error from any source
is forwarded immediately and releases the remaining subscriptions.
"""

from collections import deque
from typing import Any, Callable, Deque, List, Optional, Sequence, TypeVar

from ..disposable import SingleAssignmentDisposable
from ..observable.creation import empty, from_iterable, of
from ..observable.observable import Observable
from ..observer import Sink
from .flattening import concat_all, merge_all

T = TypeVar("T")


def merge(*sources: Observable[T], max_concurrent: Optional[int] = None) -> Observable[T]:
    """Interleave the elements of all `sources`."""
    return merge_all(from_iterable(sources), max_concurrent=max_concurrent)


def concat(*sources: Observable[T]) -> Observable[T]:
    """
    Relay `sources` one after another.

    Example:
        ```python
        concat(of(1, 2, 3), of(4, 5, 6))  # 1, 2, 3, 4, 5, 6
        ```
    """
    return concat_all(from_iterable(sources))


def start_with(source: Observable[T], *values: T) -> Observable[T]:
    """Emit `values` first, then the elements of `source`."""
    return concat(of(*values), source)


def combine_latest(
    *sources: Observable[Any], result_selector: Optional[Callable[..., Any]] = None
) -> Observable[Any]:
    """
    Combine the latest value of every source.

    Nothing is emitted until every source has produced a value; after that,
    every new value from any source emits a combination (a tuple unless a
    `result_selector` receiving one argument per source is given). Completes
    when every source has completed, or as soon as a source completes
    without ever having produced a value.

    Example:
        ```python
        combine_latest(left, right, result_selector=lambda l, r: f"{l} {r}")
        ```
    """
    if not sources:
        return empty()
    count = len(sources)

    def produce(observer):
        sink = Sink(observer)
        values: List[Any] = [None] * count
        has_value = [False] * count
        done = [False] * count

        def make_on_next(index: int):
            def on_next(value):
                values[index] = value
                has_value[index] = True
                if not all(has_value):
                    return
                try:
                    combined = (
                        result_selector(*values)
                        if result_selector is not None
                        else tuple(values)
                    )
                except Exception as e:
                    sink.forward_error(e)
                    return
                sink.forward_next(combined)

            return on_next

        def make_on_completed(index: int):
            def on_completed():
                done[index] = True
                if all(done) or not has_value[index]:
                    sink.forward_completed()

            return on_completed

        for index, source in enumerate(sources):
            if sink.is_disposed:
                break
            sink.observe(
                source, make_on_next(index), on_completed=make_on_completed(index)
            )
        return sink

    return Observable(produce)


def zip_(
    *sources: Observable[Any], result_selector: Optional[Callable[..., Any]] = None
) -> Observable[Any]:
    """
    Pair up the n-th values of every source.

    Each source's values are queued; an emission happens when every queue
    holds at least one value and consumes one from each. Completes when a
    source has completed and its queue is empty.
    """
    if not sources:
        return empty()
    count = len(sources)

    def produce(observer):
        sink = Sink(observer)
        queues: List[Deque[Any]] = [deque() for _ in range(count)]
        done = [False] * count

        def exhausted() -> bool:
            return any(done[i] and not queues[i] for i in range(count))

        def make_on_next(index: int):
            def on_next(value):
                queues[index].append(value)
                if not all(queues):
                    return
                row = [queue.popleft() for queue in queues]
                try:
                    combined = (
                        result_selector(*row)
                        if result_selector is not None
                        else tuple(row)
                    )
                except Exception as e:
                    sink.forward_error(e)
                    return
                sink.forward_next(combined)
                if exhausted():
                    sink.forward_completed()

            return on_next

        def make_on_completed(index: int):
            def on_completed():
                done[index] = True
                if not queues[index]:
                    sink.forward_completed()

            return on_completed

        for index, source in enumerate(sources):
            if sink.is_disposed:
                break
            sink.observe(
                source, make_on_next(index), on_completed=make_on_completed(index)
            )
        return sink

    return Observable(produce)


def with_latest_from(
    source: Observable[T],
    other: Observable[Any],
    result_selector: Optional[Callable[[T, Any], Any]] = None,
) -> Observable[Any]:
    """
    On every element of `source`, emit the latest value of `other`.

    Elements of `source` arriving before `other` has a value are dropped.
    By default the emitted value is `other`'s latest value; pass
    `result_selector(element, latest)` to combine both.
    """

    def produce(observer):
        sink = Sink(observer)
        latest = None
        has_latest = False

        def on_other(value):
            nonlocal latest, has_latest
            latest = value
            has_latest = True

        def on_next(value):
            if not has_latest:
                return
            try:
                result = latest if result_selector is None else result_selector(value, latest)
            except Exception as e:
                sink.forward_error(e)
                return
            sink.forward_next(result)

        sink.observe(other, on_other, on_completed=lambda: None)
        sink.observe(source, on_next)
        return sink

    return Observable(produce)


def sample(source: Observable[T], trigger: Observable[Any]) -> Observable[T]:
    """
    Emit the latest element of `source` whenever `trigger` emits.

    An element is emitted at most once; ticks with nothing new are silent.
    When `trigger` completes, a pending element is emitted and the result
    completes; once `source` has completed, the next tick completes it.
    """

    def produce(observer):
        sink = Sink(observer)
        pending = None
        has_pending = False
        source_done = False

        def flush() -> None:
            nonlocal pending, has_pending
            if has_pending:
                value, pending, has_pending = pending, None, False
                sink.forward_next(value)

        def on_next(value):
            nonlocal pending, has_pending
            pending = value
            has_pending = True

        def on_source_completed():
            nonlocal source_done
            source_done = True

        def on_tick(_):
            flush()
            if source_done:
                sink.forward_completed()

        def on_trigger_completed():
            flush()
            sink.forward_completed()

        sink.observe(source, on_next, on_completed=on_source_completed)
        sink.observe(trigger, on_tick, on_completed=on_trigger_completed)
        return sink

    return Observable(produce)


def amb(*sources: Observable[T]) -> Observable[T]:
    """
    Mirror whichever source reacts first (element or terminal event).

    The losing subscriptions are released at that moment.
    """
    if not sources:
        return empty()
    if len(sources) == 1:
        return sources[0]

    def produce(observer):
        sink = Sink(observer)
        holders: Sequence[SingleAssignmentDisposable] = [
            SingleAssignmentDisposable() for _ in sources
        ]
        sink.disposables.extend(holders)
        winner: Optional[int] = None

        def wins(index: int) -> bool:
            nonlocal winner
            if winner is None:
                winner = index
                for other, holder in enumerate(holders):
                    if other != index:
                        holder.dispose()
            return winner == index

        def make_callbacks(index: int):
            def on_next(value):
                if wins(index):
                    sink.forward_next(value)

            def on_error(error):
                if wins(index):
                    sink.forward_error(error)

            def on_completed():
                if wins(index):
                    sink.forward_completed()

            return on_next, on_error, on_completed

        for index, source in enumerate(sources):
            if sink.is_disposed or (winner is not None and winner != index):
                break
            on_next, on_error, on_completed = make_callbacks(index)
            sink.observe(source, on_next, on_error, on_completed, holder=holders[index])
        return sink

    return Observable(produce)
