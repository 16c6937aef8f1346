"""
Rivulet ReplaySubject - A Subject With a Bounded History
========================================================

A `ReplaySubject` records the last `buffer_size` elements (or all of them
when unbounded) and replays them, in arrival order, to every new observer.
After termination the history is replayed before the terminal event.
Disposing the subject discards the history: a later observer receives only
`SubjectDisposedError`.

Example:
    ```python
    subject = ReplaySubject.create(buffer_size=2)
    for n in (1, 2, 3):
        subject.on_next(n)
    subject.subscribe(print)   # 2, 3
    ```
"""

from collections import deque
from typing import Any, Deque, Optional, TypeVar

from ..errors import ArgumentOutOfRangeError
from .base import SubjectBase

T = TypeVar("T")


class ReplaySubject(SubjectBase[T]):
    """Subject replaying up to `buffer_size` past elements; unbounded when None."""

    def __init__(self, buffer_size: Optional[int] = None) -> None:
        if buffer_size is not None and buffer_size < 0:
            raise ArgumentOutOfRangeError(
                f"buffer_size must be non-negative, got {buffer_size}"
            )
        super().__init__()
        self._buffer_size = buffer_size
        self._buffer: Deque[T] = deque(maxlen=buffer_size)

    @classmethod
    def create(cls, buffer_size: int) -> "ReplaySubject[T]":
        if buffer_size is None:
            raise TypeError("buffer_size is required; use create_unbounded()")
        return cls(buffer_size)

    @classmethod
    def create_unbounded(cls) -> "ReplaySubject[T]":
        return cls(None)

    @property
    def buffer_size(self) -> Optional[int]:
        return self._buffer_size

    def _record_next(self, value: T) -> None:
        self._buffer.append(value)

    def _replay(self, observer: Any) -> None:
        for value in list(self._buffer):
            observer.on_next(value)

    def _replay_active(self, observer: Any) -> None:
        self._replay(observer)

    def _replay_terminated(self, observer: Any) -> None:
        self._replay(observer)

    def _clear_buffer(self) -> None:
        self._buffer.clear()
