"""
Rivulet Disposables - Cancelable Resource Handles
=================================================

Every subscription is represented by a disposable. Disposing is always
idempotent and never raises; the variants differ in what they own:

- `Disposable` - runs an optional teardown action once
- `SingleAssignmentDisposable` - owns one disposable that may arrive later
- `SerialDisposable` - owns one replaceable disposable, releasing the old one
- `CompositeDisposable` - owns a group, released together

A disposable that receives a child after it was disposed releases the child
immediately. This is what lets an operator cancel an upstream subscription
while that subscription is still being set up.
"""

import logging
import threading
from typing import Callable, Iterable, List, Optional

from ..protocols import DisposableLike

logger = logging.getLogger(__name__)


def dispose_quietly(disposable: Optional[DisposableLike]) -> None:
    """Dispose `disposable`, logging instead of propagating any failure."""
    if disposable is None:
        return
    try:
        disposable.dispose()
    except Exception:
        logger.exception("Error while disposing %r", disposable)


class Disposable:
    """
    A resource handle with an optional teardown action.

    Example:
        ```python
        handle = Disposable(lambda: print("released"))
        handle.dispose()  # released
        handle.dispose()  # nothing happens
        ```
    """

    __slots__ = ("_action", "_is_disposed", "_lock", "__weakref__")

    def __init__(self, action: Optional[Callable[[], None]] = None) -> None:
        self._action = action
        self._is_disposed = False
        self._lock = threading.Lock()

    @property
    def is_disposed(self) -> bool:
        return self._is_disposed

    def dispose(self) -> None:
        with self._lock:
            if self._is_disposed:
                return
            self._is_disposed = True
            action, self._action = self._action, None

        if action is not None:
            try:
                action()
            except Exception:
                logger.exception("Error in dispose action of %r", self)

    def disposed_by(self, bag) -> None:
        """Hand ownership of this disposable to a `DisposeBag`."""
        bag.add(self)

    def __enter__(self) -> "Disposable":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()


class SingleAssignmentDisposable(Disposable):
    """Owns a single disposable that may only be assigned once."""

    __slots__ = ("_current",)

    def __init__(self) -> None:
        super().__init__()
        self._current: Optional[DisposableLike] = None

    @property
    def disposable(self) -> Optional[DisposableLike]:
        return self._current

    @disposable.setter
    def disposable(self, value: Optional[DisposableLike]) -> None:
        with self._lock:
            if self._current is not None:
                raise RuntimeError("Disposable has already been assigned")
            should_dispose = self._is_disposed
            if not should_dispose:
                self._current = value

        if should_dispose:
            dispose_quietly(value)

    def dispose(self) -> None:
        with self._lock:
            if self._is_disposed:
                return
            self._is_disposed = True
            current, self._current = self._current, None

        dispose_quietly(current)


class SerialDisposable(Disposable):
    """Owns one disposable at a time; assigning a new one disposes the old."""

    __slots__ = ("_current",)

    def __init__(self) -> None:
        super().__init__()
        self._current: Optional[DisposableLike] = None

    @property
    def disposable(self) -> Optional[DisposableLike]:
        return self._current

    @disposable.setter
    def disposable(self, value: Optional[DisposableLike]) -> None:
        with self._lock:
            should_dispose = self._is_disposed
            old = None
            if not should_dispose:
                old, self._current = self._current, value

        dispose_quietly(old)
        if should_dispose:
            dispose_quietly(value)

    def dispose(self) -> None:
        with self._lock:
            if self._is_disposed:
                return
            self._is_disposed = True
            current, self._current = self._current, None

        dispose_quietly(current)


class CompositeDisposable(Disposable):
    """
    A group of disposables released together.

    Members are released in insertion order. A failing member is logged and
    the remaining members are still released.
    """

    __slots__ = ("_disposables",)

    def __init__(self, *disposables: DisposableLike) -> None:
        super().__init__()
        self._disposables: List[DisposableLike] = list(disposables)

    def __len__(self) -> int:
        return len(self._disposables)

    def add(self, disposable: DisposableLike) -> None:
        with self._lock:
            should_dispose = self._is_disposed
            if not should_dispose:
                self._disposables.append(disposable)

        if should_dispose:
            dispose_quietly(disposable)

    def extend(self, disposables: Iterable[DisposableLike]) -> None:
        for disposable in disposables:
            self.add(disposable)

    def remove(self, disposable: DisposableLike) -> bool:
        """Dispose and forget one member. Returns False if it was not a member."""
        with self._lock:
            if self._is_disposed:
                return False
            try:
                self._disposables.remove(disposable)
            except ValueError:
                return False

        dispose_quietly(disposable)
        return True

    def clear(self) -> None:
        """Release the current members but keep accepting new ones."""
        with self._lock:
            members, self._disposables = self._disposables, []

        for disposable in members:
            dispose_quietly(disposable)

    def dispose(self) -> None:
        with self._lock:
            if self._is_disposed:
                return
            self._is_disposed = True
            members, self._disposables = self._disposables, []

        for disposable in members:
            dispose_quietly(disposable)
