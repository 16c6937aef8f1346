"""PublishSubject - broadcasts only what happens after an observer attaches."""

from typing import TypeVar

from .base import SubjectBase

T = TypeVar("T")


class PublishSubject(SubjectBase[T]):
    """
    Subject without a replay buffer.

    Observers attaching while Active receive only later events; observers
    attaching after termination receive only the terminal event.
    """

    def _record_next(self, value: T) -> None:
        pass
