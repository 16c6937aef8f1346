"""
Rivulet VirtualTimeScheduler - Deterministic Time for Tests
===========================================================

A scheduler whose clock only moves when told to. Actions run in order of due
time, ties broken by the order in which they were scheduled.

Example:
    ```python
    from rivulet import Observable
    from rivulet.scheduler import VirtualTimeScheduler

    scheduler = VirtualTimeScheduler()
    Observable.interval(1.0, scheduler).take(3).subscribe(print)

    scheduler.advance_by(2.5)  # prints 0, 1
    scheduler.advance_by(1.0)  # prints 2
    ```
"""

import heapq
import itertools
import threading
from typing import Callable, List, Optional, Tuple

from ..disposable import Disposable, SerialDisposable


class ScheduledItem:
    """One pending action on a virtual clock."""

    __slots__ = ("duetime", "action", "cancelled")

    def __init__(self, duetime: float, action: Callable[[], None]) -> None:
        self.duetime = duetime
        self.action = action
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class VirtualTimeScheduler:
    """Scheduler driven by `advance_by`, `advance_to` and `start`."""

    def __init__(self, initial_clock: float = 0.0) -> None:
        self._clock = initial_clock
        self._queue: List[Tuple[float, int, ScheduledItem]] = []
        self._sequence = itertools.count()
        self._lock = threading.RLock()

    @property
    def now(self) -> float:
        return self._clock

    @property
    def pending(self) -> int:
        """Number of scheduled actions that have neither run nor been cancelled."""
        with self._lock:
            return sum(1 for _, _, item in self._queue if not item.cancelled)

    def schedule(self, action: Callable[[], None]) -> Disposable:
        return self.schedule_relative(0.0, action)

    def schedule_relative(self, duetime: float, action: Callable[[], None]) -> Disposable:
        if duetime < 0:
            raise ValueError(f"duetime must be non-negative, got {duetime}")
        item = ScheduledItem(self._clock + duetime, action)
        with self._lock:
            heapq.heappush(self._queue, (item.duetime, next(self._sequence), item))
        return Disposable(item.cancel)

    def schedule_absolute(self, duetime: float, action: Callable[[], None]) -> Disposable:
        return self.schedule_relative(max(0.0, duetime - self._clock), action)

    def schedule_periodic(self, period: float, action: Callable[[], None]) -> SerialDisposable:
        if period <= 0:
            raise ValueError(f"period must be positive, got {period}")
        serial = SerialDisposable()

        def run() -> None:
            try:
                action()
            finally:
                if not serial.is_disposed:
                    serial.disposable = self.schedule_relative(period, run)

        serial.disposable = self.schedule_relative(period, run)
        return serial

    def _pop_due(self, until: float) -> Optional[ScheduledItem]:
        with self._lock:
            while self._queue and self._queue[0][0] <= until:
                _, _, item = heapq.heappop(self._queue)
                if not item.cancelled:
                    return item
        return None

    def advance_to(self, time: float) -> None:
        """Run every action due at or before `time`, then set the clock to it."""
        if time < self._clock:
            raise ValueError(f"Cannot move the clock backwards from {self._clock} to {time}")
        while True:
            item = self._pop_due(time)
            if item is None:
                break
            self._clock = item.duetime
            item.action()
        self._clock = time

    def advance_by(self, delta: float) -> None:
        self.advance_to(self._clock + delta)

    def start(self, limit: Optional[float] = None) -> None:
        """
        Run until nothing is scheduled, or until the clock reaches `limit`.

        Periodic work never drains on its own, so pass a `limit` when any is
        pending.
        """
        while True:
            with self._lock:
                if not self._queue:
                    return
                next_due = self._queue[0][0]
            if limit is not None and next_due > limit:
                self._clock = max(self._clock, limit)
                return
            self.advance_to(next_due)
