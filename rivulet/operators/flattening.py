"""
Rivulet Flattening Operators - Sequences of Sequences
=====================================================

These operators take an observable whose elements are observables and
relay the elements of the inner ones:

- `merge_all` - every inner at once (optionally at most `max_concurrent`,
  queueing the rest); completes once the outer and every inner completed
- `concat_all` - one inner at a time, in order
- `switch_latest` - only the most recent inner; the previous one is
  released on every switch

`flat_map`, `concat_map` and `flat_map_latest` are `map_` followed by the
matching flattening operator. Any error, outer or inner, is forwarded at
once and releases every other subscription.
"""

from collections import deque
from typing import Callable, Deque, Optional, TypeVar

from ..disposable import SerialDisposable, SingleAssignmentDisposable
from ..errors import ArgumentOutOfRangeError
from ..observable.observable import Observable
from ..observer import Sink
from .transformation import map_

T = TypeVar("T")
U = TypeVar("U")


def merge_all(
    source: Observable[Observable[T]], max_concurrent: Optional[int] = None
) -> Observable[T]:
    """Subscribe to every inner observable and interleave their elements."""
    if max_concurrent is not None and max_concurrent <= 0:
        raise ArgumentOutOfRangeError(
            f"max_concurrent must be positive, got {max_concurrent}"
        )

    def produce(observer):
        sink = Sink(observer)
        pending: Deque[Observable[T]] = deque()
        active = 0
        outer_done = False
        draining = False

        def has_capacity() -> bool:
            return max_concurrent is None or active < max_concurrent

        def subscribe_inner(inner: Observable[T]) -> None:
            nonlocal active
            active += 1
            holder = SingleAssignmentDisposable()
            sink.disposables.add(holder)

            def on_inner_completed():
                nonlocal active
                sink.disposables.remove(holder)
                active -= 1
                drain()

            sink.observe(inner, on_completed=on_inner_completed, holder=holder)

        def drain() -> None:
            # Inner sequences that complete synchronously land back here; only
            # the outermost call loops, so the stack stays flat.
            nonlocal draining
            if draining:
                return
            draining = True
            try:
                while pending and has_capacity() and not sink.is_disposed:
                    subscribe_inner(pending.popleft())
            finally:
                draining = False
            if outer_done and active == 0 and not pending:
                sink.forward_completed()

        def on_next(inner):
            if has_capacity() and not draining:
                subscribe_inner(inner)
            else:
                pending.append(inner)

        def on_completed():
            nonlocal outer_done
            outer_done = True
            drain()

        sink.observe(source, on_next, on_completed=on_completed)
        return sink

    return Observable(produce)


def concat_all(source: Observable[Observable[T]]) -> Observable[T]:
    """Relay each inner observable to completion before subscribing to the next."""
    return merge_all(source, max_concurrent=1)


def switch_latest(source: Observable[Observable[T]]) -> Observable[T]:
    """
    Relay only the most recently emitted inner observable.

    Completes when the outer has completed and the current inner (if any)
    has completed too.
    """

    def produce(observer):
        sink = Sink(observer)
        current = SerialDisposable()
        sink.disposables.add(current)
        latest = 0
        has_latest = False
        outer_done = False

        def on_next(inner):
            nonlocal latest, has_latest
            latest += 1
            generation = latest
            has_latest = True

            holder = SingleAssignmentDisposable()
            current.disposable = holder

            def on_inner_next(value):
                if latest == generation:
                    sink.forward_next(value)

            def on_inner_error(error):
                if latest == generation:
                    sink.forward_error(error)

            def on_inner_completed():
                nonlocal has_latest
                if latest == generation:
                    has_latest = False
                    if outer_done:
                        sink.forward_completed()

            sink.observe(
                inner, on_inner_next, on_inner_error, on_inner_completed, holder=holder
            )

        def on_completed():
            nonlocal outer_done
            outer_done = True
            if not has_latest:
                sink.forward_completed()

        sink.observe(source, on_next, on_completed=on_completed)
        return sink

    return Observable(produce)


def flat_map(
    source: Observable[T], selector: Callable[[T], Observable[U]]
) -> Observable[U]:
    """
    Map every element to an observable and merge all of them.

    Example:
        ```python
        students.flat_map(lambda student: student.score)
        # every score of every student seen so far
        ```
    """
    return merge_all(map_(source, selector))


def concat_map(
    source: Observable[T], selector: Callable[[T], Observable[U]]
) -> Observable[U]:
    """Map every element to an observable and concatenate them in order."""
    return concat_all(map_(source, selector))


def flat_map_latest(
    source: Observable[T], selector: Callable[[T], Observable[U]]
) -> Observable[U]:
    """Map every element to an observable and follow only the latest one."""
    return switch_latest(map_(source, selector))

