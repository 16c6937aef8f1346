"""
Rivulet Filtering Operators - Single-Pass Gates Over the Next Stream
====================================================================

Every operator here is stateful per subscription and releases its upstream
subscription as soon as its own termination condition is met (count
reached, predicate failed, trigger fired) instead of waiting for upstream
completion. That early release is what stops side-effecting producers.

- `filter_`, `ignore_elements`, `element_at`
- `skip`, `skip_while`, `skip_until`
- `take`, `take_while`, `take_until`, `take_until_trigger`
- `distinct_until_changed`
"""

from enum import Enum
from typing import Any, Callable, Optional, TypeVar

from ..disposable import SingleAssignmentDisposable
from ..errors import ArgumentOutOfRangeError
from ..observable.creation import empty
from ..observable.observable import Observable
from ..observer import Sink

T = TypeVar("T")

Predicate = Callable[[T], bool]


class TakeBehavior(Enum):
    """Whether `take_until` emits the element that satisfied its predicate."""

    INCLUSIVE = "inclusive"
    EXCLUSIVE = "exclusive"


def filter_(source: Observable[T], predicate: Predicate) -> Observable[T]:
    """Pass only the elements for which `predicate` returns True."""

    def produce(observer):
        sink = Sink(observer)

        def on_next(value):
            try:
                passed = predicate(value)
            except Exception as e:
                sink.forward_error(e)
                return
            if passed:
                sink.forward_next(value)

        sink.observe(source, on_next)
        return sink

    return Observable(produce)


def ignore_elements(source: Observable[T]) -> Observable[T]:
    """Drop every element; keep only the terminal event."""

    def produce(observer):
        sink = Sink(observer)
        sink.observe(source, lambda value: None)
        return sink

    return Observable(produce)


def element_at(source: Observable[T], index: int) -> Observable[T]:
    """
    Emit only the element at `index`, then complete.

    If the source completes first, the result fails with
    `ArgumentOutOfRangeError`.
    """
    if index < 0:
        raise ArgumentOutOfRangeError(f"index must be non-negative, got {index}")

    def produce(observer):
        sink = Sink(observer)
        remaining = index

        def on_next(value):
            nonlocal remaining
            if remaining == 0:
                sink.forward_next(value)
                sink.forward_completed()
            remaining -= 1

        def on_completed():
            sink.forward_error(
                ArgumentOutOfRangeError(f"Sequence ended before index {index}")
            )

        sink.observe(source, on_next, on_completed=on_completed)
        return sink

    return Observable(produce)


def skip(source: Observable[T], count: int) -> Observable[T]:
    """Ignore the first `count` elements."""
    if count < 0:
        raise ArgumentOutOfRangeError(f"count must be non-negative, got {count}")
    if count == 0:
        return source

    def produce(observer):
        sink = Sink(observer)
        remaining = count

        def on_next(value):
            nonlocal remaining
            if remaining > 0:
                remaining -= 1
            else:
                sink.forward_next(value)

        sink.observe(source, on_next)
        return sink

    return Observable(produce)


def skip_while(source: Observable[T], predicate: Predicate) -> Observable[T]:
    """Ignore elements while `predicate` holds; pass everything after the first miss."""

    def produce(observer):
        sink = Sink(observer)
        skipping = True

        def on_next(value):
            nonlocal skipping
            if skipping:
                try:
                    skipping = bool(predicate(value))
                except Exception as e:
                    sink.forward_error(e)
                    return
                if skipping:
                    return
            sink.forward_next(value)

        sink.observe(source, on_next)
        return sink

    return Observable(produce)


def skip_until(source: Observable[T], trigger: Observable[Any]) -> Observable[T]:
    """
    Ignore elements until `trigger` emits.

    The trigger subscription is released at its first element. A trigger
    that fails fails the result; one that completes silently leaves the
    source skipped forever.
    """

    def produce(observer):
        sink = Sink(observer)
        open_ = False

        def on_next(value):
            if open_:
                sink.forward_next(value)

        trigger_holder = SingleAssignmentDisposable()
        sink.disposables.add(trigger_holder)

        def on_trigger(_):
            nonlocal open_
            open_ = True
            trigger_holder.dispose()

        sink.observe(
            trigger, on_trigger, on_completed=lambda: None, holder=trigger_holder
        )
        sink.observe(source, on_next)
        return sink

    return Observable(produce)


def take(source: Observable[T], count: int) -> Observable[T]:
    """Emit the first `count` elements, then complete and release upstream."""
    if count < 0:
        raise ArgumentOutOfRangeError(f"count must be non-negative, got {count}")
    if count == 0:
        return empty()

    def produce(observer):
        sink = Sink(observer)
        remaining = count

        def on_next(value):
            nonlocal remaining
            if remaining <= 0:
                return
            remaining -= 1
            sink.forward_next(value)
            if remaining == 0:
                sink.forward_completed()

        sink.observe(source, on_next)
        return sink

    return Observable(produce)


def take_while(
    source: Observable[T], predicate: Predicate, inclusive: bool = False
) -> Observable[T]:
    """
    Emit elements while `predicate` holds, then complete.

    With `inclusive=True` the first element that fails the predicate is
    emitted before completing.
    """

    def produce(observer):
        sink = Sink(observer)

        def on_next(value):
            try:
                passed = predicate(value)
            except Exception as e:
                sink.forward_error(e)
                return
            if passed:
                sink.forward_next(value)
                return
            if inclusive:
                sink.forward_next(value)
            sink.forward_completed()

        sink.observe(source, on_next)
        return sink

    return Observable(produce)


def take_until(
    source: Observable[T],
    predicate: Predicate,
    behavior: TakeBehavior = TakeBehavior.EXCLUSIVE,
) -> Observable[T]:
    """
    Emit elements until one satisfies `predicate`, then complete.

    `TakeBehavior.INCLUSIVE` emits the matching element first.

    Example:
        ```python
        of(1, 2, 3, 4, 5).take_until(lambda n: n % 4 == 0, TakeBehavior.INCLUSIVE)
        # 1, 2, 3, 4, completed
        ```
    """

    def produce(observer):
        sink = Sink(observer)

        def on_next(value):
            try:
                stop = predicate(value)
            except Exception as e:
                sink.forward_error(e)
                return
            if not stop:
                sink.forward_next(value)
                return
            if behavior is TakeBehavior.INCLUSIVE:
                sink.forward_next(value)
            sink.forward_completed()

        sink.observe(source, on_next)
        return sink

    return Observable(produce)


def take_until_trigger(source: Observable[T], trigger: Observable[Any]) -> Observable[T]:
    """
    Emit elements until `trigger` emits, then complete.

    A trigger that completes without emitting has no effect.
    """

    def produce(observer):
        sink = Sink(observer)
        sink.observe(
            trigger,
            lambda _: sink.forward_completed(),
            on_completed=lambda: None,
        )
        if not sink.is_disposed:
            sink.observe(source)
        return sink

    return Observable(produce)


def distinct_until_changed(
    source: Observable[T],
    comparer: Optional[Callable[[Any, Any], bool]] = None,
    key_selector: Optional[Callable[[T], Any]] = None,
) -> Observable[T]:
    """
    Drop elements equal to the element just before them.

    Args:
        comparer: Returns True when two consecutive keys count as equal;
                  defaults to `==`
        key_selector: Maps elements to the keys being compared
    """
    compare = comparer or (lambda a, b: a == b)
    select = key_selector or (lambda value: value)

    def produce(observer):
        sink = Sink(observer)
        has_current = False
        current_key = None

        def on_next(value):
            nonlocal has_current, current_key
            try:
                key = select(value)
                same = has_current and compare(current_key, key)
            except Exception as e:
                sink.forward_error(e)
                return
            if same:
                return
            has_current = True
            current_key = key
            sink.forward_next(value)

        sink.observe(source, on_next)
        return sink

    return Observable(produce)
