"""
Rivulet Protocols - Structural Interfaces of the Runtime
========================================================

This module defines Protocol-based interfaces for the four capabilities the
runtime is built from. Concrete classes never need to inherit from them;
anything with the right shape is accepted.

- `DisposableLike` - a cancelable resource
- `ObserverLike` - a sink for next/error/completed
- `ObservableLike` - something that can be subscribed to
- `SchedulerLike` - a source of (possibly delayed) callbacks, consumed by
  timed producers such as `interval` and `timer`

Key Benefits:
- No circular imports (protocols don't import concrete implementations)
- Runtime isinstance() support with @runtime_checkable
- External collaborators (timers, UI lifetimes) plug in by shape alone
"""

from typing import Any, Callable, Optional, Protocol, TypeVar, runtime_checkable

T_co = TypeVar("T_co", covariant=True)
T_contra = TypeVar("T_contra", contravariant=True)


@runtime_checkable
class DisposableLike(Protocol):
    """A handle whose disposal releases a resource. Must be idempotent."""

    def dispose(self) -> None: ...


@runtime_checkable
class ObserverLike(Protocol[T_contra]):
    """The sink contract: receives the events of one subscription."""

    def on_next(self, value: T_contra) -> None: ...

    def on_error(self, error: BaseException) -> None: ...

    def on_completed(self) -> None: ...


@runtime_checkable
class ObservableLike(Protocol[T_co]):
    """The subscribe contract: begin production, return its teardown."""

    def subscribe(
        self,
        observer: Optional[Any] = None,
        on_error: Optional[Callable[[BaseException], None]] = None,
        on_completed: Optional[Callable[[], None]] = None,
        *,
        on_next: Optional[Callable[[Any], None]] = None,
        on_disposed: Optional[Callable[[], None]] = None,
    ) -> DisposableLike: ...


@runtime_checkable
class SchedulerLike(Protocol):
    """
    Timing capability consumed by timed producers.

    Times are expressed in seconds as floats. Every method returns a
    disposable that cancels firings that have not happened yet.
    """

    @property
    def now(self) -> float: ...

    def schedule(self, action: Callable[[], None]) -> DisposableLike: ...

    def schedule_relative(
        self, duetime: float, action: Callable[[], None]
    ) -> DisposableLike: ...

    def schedule_periodic(
        self, period: float, action: Callable[[], None]
    ) -> DisposableLike: ...
