"""
Rivulet Event - The Payload Unit of Every Stream
================================================

A stream delivers a sequence of events to its observer:

- `Next(value)` carries an element; there may be any number of them
- `Error(exception)` ends the sequence with a failure
- `Completed()` ends the sequence successfully

At most one of the two terminal kinds is ever delivered to a subscription.

Example:
    ```python
    from rivulet import Observable

    Observable.of(1, 2).subscribe_event(print)
    # next(1)
    # next(2)
    # completed
    ```
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class EventKind(Enum):
    """Discriminator for the three event variants."""

    NEXT = "next"
    ERROR = "error"
    COMPLETED = "completed"


class Event(Generic[T]):
    """
    Base class of the event variants.

    `element` and `error` are defined on every event so that code handling a
    raw event stream can probe it without isinstance checks, the same way
    materialized sequences are usually consumed.
    """

    __slots__ = ()

    kind: EventKind

    @property
    def element(self) -> Optional[T]:
        """The carried value for `Next`, otherwise None."""
        return None

    @property
    def error(self) -> Optional[BaseException]:
        """The carried exception for `Error`, otherwise None."""
        return None

    @property
    def is_stop_event(self) -> bool:
        """True for `Error` and `Completed`."""
        return self.kind is not EventKind.NEXT

    @property
    def is_completed(self) -> bool:
        return self.kind is EventKind.COMPLETED

    def accept(self, observer: Any) -> None:
        """Dispatch this event to the matching callback of `observer`."""
        raise NotImplementedError

    def map(self, transform) -> "Event[Any]":
        """Transform the element of a `Next`; terminal events pass through."""
        return self


@dataclass(frozen=True)
class Next(Event[T]):
    value: T

    kind = EventKind.NEXT

    @property
    def element(self) -> T:
        return self.value

    def accept(self, observer: Any) -> None:
        observer.on_next(self.value)

    def map(self, transform) -> "Event[Any]":
        try:
            return Next(transform(self.value))
        except Exception as e:
            return Error(e)

    def __str__(self) -> str:
        return f"next({self.value})"


@dataclass(frozen=True)
class Error(Event[Any]):
    exception: BaseException

    kind = EventKind.ERROR

    @property
    def error(self) -> BaseException:
        return self.exception

    def accept(self, observer: Any) -> None:
        observer.on_error(self.exception)

    def __str__(self) -> str:
        return f"error({self.exception!r})"


@dataclass(frozen=True)
class Completed(Event[Any]):
    kind = EventKind.COMPLETED

    def accept(self, observer: Any) -> None:
        observer.on_completed()

    def __str__(self) -> str:
        return "completed"
