"""
Rivulet Traits - Observables With a Narrower Contract
=====================================================

Traits wrap an `Observable` and promise a specific event shape:

- `Single` - exactly one success value, or an error
- `Maybe` - one success value, completion without a value, or an error
- `Completable` - completion or error, never a value

Each trait has its own `subscribe` signature matching that shape and can be
turned back into a plain observable with `as_observable()`.

Example:
    ```python
    from rivulet import Single

    def load(observer):
        observer.on_success("Copyright 2026")
        return None

    Single.create(load).subscribe(on_success=print, on_error=print)
    # Copyright 2026
    ```
"""

from typing import Any, Callable, Generic, Optional, TypeVar

from .errors import (
    SequenceContainsMoreThanOneElementError,
    SequenceContainsNoElementsError,
)
from .observable.observable import Observable
from .observer import Sink

T = TypeVar("T")


class _TraitEmitter:
    """Observer handed to trait producers; maps trait calls onto events."""

    def __init__(self, observer: Any) -> None:
        self._observer = observer

    @property
    def is_disposed(self) -> bool:
        return self._observer.is_disposed

    def on_success(self, value: Any) -> None:
        self._observer.on_next(value)
        self._observer.on_completed()

    def on_error(self, error: BaseException) -> None:
        self._observer.on_error(error)

    def on_completed(self) -> None:
        self._observer.on_completed()


def _from_producer(producer: Callable[[_TraitEmitter], Any]) -> Observable[Any]:
    return Observable(lambda observer: producer(_TraitEmitter(observer)))


class _Trait(Generic[T]):
    def __init__(self, source: Observable[T]) -> None:
        self._source = source

    def as_observable(self) -> Observable[T]:
        return self._source

    def subscribe_event(self, handler: Callable[[Any], None]):
        return self._source.subscribe_event(handler)


class Single(_Trait[T]):
    """A sequence of exactly one element, or an error."""

    @classmethod
    def create(cls, producer: Callable[[Any], Any]) -> "Single[T]":
        """Build a Single from a producer calling `on_success` or `on_error` once."""
        return cls(_from_producer(producer))

    @classmethod
    def just(cls, value: T) -> "Single[T]":
        return cls(Observable.just(value))

    @classmethod
    def error(cls, error: BaseException) -> "Single[Any]":
        return cls(Observable.throw(error))

    def subscribe(
        self,
        on_success: Optional[Callable[[T], None]] = None,
        on_error: Optional[Callable[[BaseException], None]] = None,
        *,
        on_disposed: Optional[Callable[[], None]] = None,
    ):
        return self._source.subscribe(
            on_next=on_success, on_error=on_error, on_disposed=on_disposed
        )

    def map(self, mapper: Callable[[T], Any]) -> "Single[Any]":
        return Single(self._source.map(mapper))


class Maybe(_Trait[T]):
    """A sequence of at most one element."""

    @classmethod
    def create(cls, producer: Callable[[Any], Any]) -> "Maybe[T]":
        """Build a Maybe from a producer calling `on_success`, `on_completed` or `on_error`."""
        return cls(_from_producer(producer))

    @classmethod
    def just(cls, value: T) -> "Maybe[T]":
        return cls(Observable.just(value))

    @classmethod
    def empty(cls) -> "Maybe[Any]":
        return cls(Observable.empty())

    def subscribe(
        self,
        on_success: Optional[Callable[[T], None]] = None,
        on_error: Optional[Callable[[BaseException], None]] = None,
        on_completed: Optional[Callable[[], None]] = None,
        *,
        on_disposed: Optional[Callable[[], None]] = None,
    ):
        # A success ends the Maybe, so the trailing completion is not reported.
        succeeded = False

        def handle_success(value):
            nonlocal succeeded
            succeeded = True
            if on_success is not None:
                on_success(value)

        def handle_completed():
            if not succeeded and on_completed is not None:
                on_completed()

        return self._source.subscribe(
            on_next=handle_success,
            on_error=on_error,
            on_completed=handle_completed,
            on_disposed=on_disposed,
        )


class Completable(_Trait[Any]):
    """A sequence that only terminates."""

    @classmethod
    def create(cls, producer: Callable[[Any], Any]) -> "Completable":
        """Build a Completable from a producer calling `on_completed` or `on_error`."""
        return cls(_from_producer(producer).ignore_elements().as_observable())

    @classmethod
    def empty(cls) -> "Completable":
        return cls(Observable.empty())

    def subscribe(
        self,
        on_completed: Optional[Callable[[], None]] = None,
        on_error: Optional[Callable[[BaseException], None]] = None,
        *,
        on_disposed: Optional[Callable[[], None]] = None,
    ):
        return self._source.subscribe(
            on_completed=on_completed, on_error=on_error, on_disposed=on_disposed
        )


def single_from(source: Observable[T]) -> Observable[T]:
    """
    Check that `source` emits exactly one element.

    The element is emitted on completion. A second element fails the result
    with `SequenceContainsMoreThanOneElementError`; completing without one
    fails it with `SequenceContainsNoElementsError`.
    """

    def produce(observer):
        sink = Sink(observer)
        element = None
        has_element = False

        def on_next(value):
            nonlocal element, has_element
            if has_element:
                sink.forward_error(SequenceContainsMoreThanOneElementError())
                return
            element = value
            has_element = True

        def on_completed():
            if not has_element:
                sink.forward_error(SequenceContainsNoElementsError())
                return
            sink.forward_next(element)
            sink.forward_completed()

        sink.observe(source, on_next, on_completed=on_completed)
        return sink

    return Observable(produce)


def maybe_from(source: Observable[T]) -> Observable[T]:
    """Check that `source` emits at most one element; emit it on completion."""

    def produce(observer):
        sink = Sink(observer)
        element = None
        has_element = False

        def on_next(value):
            nonlocal element, has_element
            if has_element:
                sink.forward_error(SequenceContainsMoreThanOneElementError())
                return
            element = value
            has_element = True

        def on_completed():
            if has_element:
                sink.forward_next(element)
            sink.forward_completed()

        sink.observe(source, on_next, on_completed=on_completed)
        return sink

    return Observable(produce)
