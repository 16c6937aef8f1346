"""AsyncSubject - delivers only the last element, and only on completion."""

from typing import Any, TypeVar

from ..event import EventKind
from .base import SubjectBase

T = TypeVar("T")


class AsyncSubject(SubjectBase[T]):
    """
    Subject that stays silent until it completes.

    On completion every observer receives the last element (if there was
    one) followed by Completed. An error is delivered alone. Observers
    attaching after termination receive the same replay.
    """

    def __init__(self) -> None:
        super().__init__()
        self._last = None
        self._has_last = False

    def on_next(self, value: T) -> None:
        with self._lock:
            if self._is_disposed or self._terminal is not None:
                return
            self._record_next(value)

    def _record_next(self, value: T) -> None:
        self._last = value
        self._has_last = True

    def _deliver_terminal(self, observer: Any) -> None:
        if self._terminal.kind is EventKind.COMPLETED and self._has_last:
            observer.on_next(self._last)
        self._terminal.accept(observer)

    def _clear_buffer(self) -> None:
        self._last = None
        self._has_last = False
