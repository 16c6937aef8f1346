"""
Rivulet BehaviorSubject - A Subject With a Current Value
========================================================

A `BehaviorSubject` always holds a value, so it is constructed with one.
Every observer attaching while the subject is Active receives the current
value first, then every later event.

Example:
    ```python
    subject = BehaviorSubject("Initial value")
    subject.subscribe(print)   # Initial value
    subject.on_next("X")       # X
    ```
"""

from typing import Any, TypeVar

from ..errors import SubjectDisposedError
from .base import SubjectBase

T = TypeVar("T")


class BehaviorSubject(SubjectBase[T]):
    """Subject replaying its latest value to every new observer."""

    def __init__(self, initial: T) -> None:
        super().__init__()
        self._value = initial

    @property
    def value(self) -> T:
        """
        The latest value.

        Raises:
            SubjectDisposedError: If the subject was disposed
            BaseException: The stored error, if the subject terminated with one
        """
        with self._lock:
            if self._is_disposed:
                raise SubjectDisposedError()
            error = self._terminal.error if self._terminal is not None else None
            if error is not None:
                raise error
            return self._value

    def _record_next(self, value: T) -> None:
        self._value = value

    def _replay_active(self, observer: Any) -> None:
        observer.on_next(self._value)

    def _clear_buffer(self) -> None:
        self._value = None
