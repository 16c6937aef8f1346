"""Factory entry points for the subject family."""

from typing import Any, TypeVar

from .async_subject import AsyncSubject
from .behavior import BehaviorSubject
from .publish import PublishSubject
from .replay import ReplaySubject

T = TypeVar("T")


class Subject:
    """
    Namespace of subject constructors.

    Example:
        ```python
        Subject.publish()
        Subject.behavior("Initial value")
        Subject.replay(buffer_size=2)
        Subject.async_()
        ```
    """

    @staticmethod
    def publish() -> PublishSubject[Any]:
        return PublishSubject()

    @staticmethod
    def behavior(initial: T) -> BehaviorSubject[T]:
        return BehaviorSubject(initial)

    @staticmethod
    def replay(buffer_size: int) -> ReplaySubject[Any]:
        return ReplaySubject.create(buffer_size)

    @staticmethod
    def replay_unbounded() -> ReplaySubject[Any]:
        return ReplaySubject.create_unbounded()

    @staticmethod
    def async_() -> AsyncSubject[Any]:
        return AsyncSubject()
