"""
Rivulet Testing - Helpers for Asserting on Streams
==================================================

`EventRecorder` is an observer that keeps every event it receives, so a
test can subscribe it and assert on the exact sequence afterwards.

Example:
    ```python
    recorder = EventRecorder()
    Observable.of(1, 2).subscribe(recorder)
    assert recorder.values == [1, 2]
    assert recorder.is_completed
    ```
"""

from typing import Any, List, Optional, TypeVar

from .event import Completed, Error, Event, EventKind, Next
from .observer import ObserverBase

T = TypeVar("T")


class EventRecorder(ObserverBase[T]):
    """Observer recording every delivered event in order."""

    def __init__(self) -> None:
        super().__init__()
        self.events: List[Event[T]] = []

    def _on_next_core(self, value: T) -> None:
        self.events.append(Next(value))

    def _on_error_core(self, error: BaseException) -> None:
        self.events.append(Error(error))

    def _on_completed_core(self) -> None:
        self.events.append(Completed())

    @property
    def values(self) -> List[T]:
        """The elements of every Next event."""
        return [event.element for event in self.events if event.kind is EventKind.NEXT]

    @property
    def error(self) -> Optional[BaseException]:
        """The error of the terminal event, if the sequence failed."""
        for event in self.events:
            if event.kind is EventKind.ERROR:
                return event.error
        return None

    @property
    def is_completed(self) -> bool:
        return any(event.is_completed for event in self.events)

    @property
    def is_terminated(self) -> bool:
        return any(event.is_stop_event for event in self.events)

    def describe(self) -> List[str]:
        """Events rendered as strings, e.g. ``["next(1)", "completed"]``."""
        return [str(event) for event in self.events]

    def clear(self) -> None:
        self.events.clear()

    def __repr__(self) -> str:
        return f"EventRecorder({', '.join(self.describe())})"


def record(source: Any) -> EventRecorder[Any]:
    """Subscribe a fresh recorder to `source` and return it."""
    recorder: EventRecorder[Any] = EventRecorder()
    source.subscribe(recorder)
    return recorder
