"""
Rivulet Relays - Subjects That Never Terminate
==============================================

A relay wraps a subject and exposes only `accept(value)` on its input side.
There is no way to send an error or a completion through it, so observers
of a relay only ever see elements. Disposing a relay disposes the wrapped
subject, with the usual consequences for late observers.

Example:
    ```python
    relay = Relay.publish()
    relay.subscribe(print)
    relay.accept("1")    # 1
    ```
"""

from typing import Any, TypeVar

from ..observable.observable import Observable
from ..subject import BehaviorSubject, PublishSubject, SubjectBase

T = TypeVar("T")


class _RelayBase(Observable[T]):
    def __init__(self, subject: SubjectBase[T]) -> None:
        super().__init__()
        self._subject = subject

    def accept(self, value: T) -> None:
        """Push `value` to every current observer."""
        self._subject.on_next(value)

    def _subscribe_core(self, observer: Any) -> Any:
        return self._subject._subscribe_core(observer)

    @property
    def is_disposed(self) -> bool:
        return self._subject.is_disposed

    @property
    def has_observers(self) -> bool:
        return self._subject.has_observers

    def dispose(self) -> None:
        self._subject.dispose()


class PublishRelay(_RelayBase[T]):
    """Relay over a `PublishSubject`."""

    def __init__(self) -> None:
        super().__init__(PublishSubject())


class BehaviorRelay(_RelayBase[T]):
    """Relay over a `BehaviorSubject`; always has a current `value`."""

    def __init__(self, initial: T) -> None:
        super().__init__(BehaviorSubject(initial))

    @property
    def value(self) -> T:
        return self._subject.value


class Relay:
    """Namespace of relay constructors: `Relay.publish()`, `Relay.behavior(initial)`."""

    @staticmethod
    def publish() -> PublishRelay[Any]:
        return PublishRelay()

    @staticmethod
    def behavior(initial: T) -> BehaviorRelay[T]:
        return BehaviorRelay(initial)
